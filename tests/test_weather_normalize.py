from __future__ import annotations

import asyncio

import httpx
import pytest

from weatherdash.clients.weather_api import WeatherApiClient
from weatherdash.core.errors import MissingApiKey, UnsupportedLocation, ValidationError, WeatherAPIError
from weatherdash.services.validation import validate_payload
from weatherdash.services.weather_normalize import (
    normalize_current_response,
    normalize_forecast_response,
    normalize_search,
)


def test_commercial_forecast_keeps_provider_values(weatherapi_forecast):
    response = normalize_forecast_response(validate_payload(weatherapi_forecast(days=3), "forecast"))

    assert [d.date for d in response.forecastday] == ["2025-09-16", "2025-09-17", "2025-09-18"]
    first = response.forecastday[0]
    assert first.day.maxtemp_c == 20.0
    assert first.day.mintemp_c == 11.0
    assert first.day.maxtemp_f == 68.0
    assert first.day.daily_will_it_rain is True
    assert first.day.daily_will_it_snow is False
    assert first.day.condition.code == 1063
    assert first.day.condition.icon.startswith("https://")
    assert first.astro.sunrise == "06:38 AM"
    assert first.origin == "provider"


def test_commercial_current(weatherapi_current):
    response = normalize_current_response(validate_payload(weatherapi_current(), "current"))

    assert response.location.name == "London"
    assert response.current.is_day is True
    assert response.current.condition.code == 1003
    assert response.current.condition.icon == "https://cdn.weatherapi.com/weather/64x64/day/116.png"
    assert response.current.wind_degree == 250


def test_out_of_order_dates_rejected(weatherapi_forecast):
    payload = weatherapi_forecast(days=2)
    payload["forecast"]["forecastday"].reverse()

    with pytest.raises(ValidationError) as exc:
        normalize_forecast_response(validate_payload(payload, "forecast"))

    assert exc.value.field == "forecast.forecastday"


def test_min_above_max_rejected(weatherapi_forecast):
    payload = weatherapi_forecast(days=1)
    payload["forecast"]["forecastday"][0]["day"]["mintemp_c"] = 30.0

    with pytest.raises(ValidationError):
        normalize_forecast_response(validate_payload(payload, "forecast"))


def test_search_results():
    results = validate_payload(
        [{"id": 1, "name": "Paris", "region": "Ile-de-France", "country": "France", "lat": 48.87, "lon": 2.33}],
        "search",
    )

    suggestions = normalize_search(results)

    assert suggestions[0].name == "Paris"
    assert suggestions[0].lat == 48.87


def _client(mock_http, handler):
    return WeatherApiClient(mock_http(handler), api_key="secret", base_url="https://api.example.test/v1")


def test_client_requires_api_key(mock_http):
    with pytest.raises(MissingApiKey):
        WeatherApiClient(mock_http(lambda r: httpx.Response(200)), api_key="")


def test_client_sends_key_and_query(mock_http, weatherapi_forecast):
    seen = {}

    def handler(request):
        seen.update(request.url.params)
        seen["path"] = request.url.path
        return httpx.Response(200, json=weatherapi_forecast(days=5))

    payload = asyncio.run(_client(mock_http, handler).forecast("London", 5))

    assert len(payload["forecast"]["forecastday"]) == 5
    assert seen["path"] == "/v1/forecast.json"
    assert seen["key"] == "secret"
    assert seen["q"] == "London"
    assert seen["days"] == "5"


def test_client_location_not_found(mock_http):
    def handler(request):
        return httpx.Response(400, json={"error": {"code": 1006, "message": "No matching location found."}})

    with pytest.raises(UnsupportedLocation) as exc:
        asyncio.run(_client(mock_http, handler).current("Atlantis"))

    assert exc.value.code == 1006


def test_client_other_provider_error(mock_http):
    def handler(request):
        return httpx.Response(401, json={"error": {"code": 2006, "message": "API key is invalid."}})

    with pytest.raises(WeatherAPIError) as exc:
        asyncio.run(_client(mock_http, handler).current("London"))

    assert exc.value.code == 2006
    assert exc.value.status_code == 401
