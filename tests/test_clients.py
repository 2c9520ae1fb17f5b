from __future__ import annotations

import asyncio

import httpx
import pytest

from weatherdash.clients.open_meteo import OpenMeteoGeocoder
from weatherdash.clients.weather_api import WeatherApiClient
from weatherdash.clients.weather_gov import WeatherGovClient
from weatherdash.core.errors import NetworkError, ValidationError, WeatherTimeoutError, should_retry
from weatherdash.services.weather_service import retry_once


def _timeout(request):
    raise httpx.ReadTimeout("read timed out", request=request)


def _refused(request):
    raise httpx.ConnectError("connection refused", request=request)


def _weather_api(mock_http, handler):
    return WeatherApiClient(mock_http(handler), api_key="k", base_url="https://api.example.test/v1", timeout_s=10)


def _weather_gov(mock_http, handler):
    return WeatherGovClient(mock_http(handler), user_agent="weatherdash-tests", timeout_s=15)


def test_weather_api_timeout_is_typed(mock_http):
    with pytest.raises(WeatherTimeoutError) as exc:
        asyncio.run(_weather_api(mock_http, _timeout).forecast("London", 5))

    assert exc.value.code == 504
    assert should_retry(exc.value)


def test_weather_api_connect_error_is_network_error(mock_http):
    with pytest.raises(NetworkError) as exc:
        asyncio.run(_weather_api(mock_http, _refused).current("London"))

    assert not isinstance(exc.value, WeatherTimeoutError)
    assert exc.value.code == 503
    assert should_retry(exc.value)


def test_weather_gov_timeout_is_typed(mock_http):
    with pytest.raises(WeatherTimeoutError):
        asyncio.run(_weather_gov(mock_http, _timeout).point(39.7456, -97.0892))


def test_weather_gov_connect_error_is_network_error(mock_http):
    with pytest.raises(NetworkError):
        asyncio.run(_weather_gov(mock_http, _refused).forecast("TOP", 32, 81))


def test_geocoder_timeout_is_typed(mock_http):
    geocoder = OpenMeteoGeocoder(mock_http(_timeout), url="https://geocoding.test/v1/search")

    with pytest.raises(WeatherTimeoutError):
        asyncio.run(geocoder.search("Denver"))


def test_weather_gov_server_error_is_retryable(mock_http):
    with pytest.raises(NetworkError) as exc:
        asyncio.run(_weather_gov(mock_http, lambda r: httpx.Response(503)).stations("TOP", 32, 81))

    assert should_retry(exc.value)


def test_non_json_body_is_validation_error(mock_http):
    client = _weather_api(mock_http, lambda r: httpx.Response(200, content=b"<html>"))

    with pytest.raises(ValidationError):
        asyncio.run(client.current("London"))


def test_retry_once_recovers_from_client_timeout(mock_http, weatherapi_current):
    attempts = []

    def handler(request):
        attempts.append(request)
        if len(attempts) == 1:
            raise httpx.ReadTimeout("read timed out", request=request)
        return httpx.Response(200, json=weatherapi_current())

    client = _weather_api(mock_http, handler)

    payload = asyncio.run(retry_once(lambda: client.current("London")))

    assert payload["location"]["name"] == "London"
    assert len(attempts) == 2


def test_retry_once_gives_up_after_second_gov_timeout(mock_http):
    attempts = []

    def handler(request):
        attempts.append(request)
        raise httpx.ConnectTimeout("connect timed out", request=request)

    client = _weather_gov(mock_http, handler)

    with pytest.raises(WeatherTimeoutError):
        asyncio.run(retry_once(lambda: client.latest_observation("KMYZ")))
    assert len(attempts) == 2


def test_client_passes_explicit_timeout(mock_http, weatherapi_current):
    seen = {}

    def handler(request):
        seen.update(request.extensions["timeout"])
        return httpx.Response(200, json=weatherapi_current())

    asyncio.run(_weather_api(mock_http, handler).current("London"))

    assert seen["read"] == 10
    assert seen["connect"] == 10
