from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Dict, List, Optional

import httpx
import pytest


class MemoryKeyValueStore:
    def __init__(self) -> None:
        self.data: Dict[str, str] = {}
        self.writes = 0

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.writes += 1
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)


def _condition(text: str = "Sunny", code: int = 1000, icon: str = "//cdn.weatherapi.com/weather/64x64/day/113.png") -> dict:
    return {"text": text, "icon": icon, "code": code}


def _location() -> dict:
    return {
        "name": "London",
        "region": "City of London, Greater London",
        "country": "United Kingdom",
        "lat": 51.52,
        "lon": -0.11,
        "tz_id": "Europe/London",
        "localtime_epoch": 1758013200,
        "localtime": "2025-09-16 10:00",
    }


def _current() -> dict:
    return {
        "last_updated_epoch": 1758013200,
        "last_updated": "2025-09-16 10:00",
        "temp_c": 15.0,
        "temp_f": 59.0,
        "is_day": 1,
        "condition": _condition("Partly cloudy", 1003, "//cdn.weatherapi.com/weather/64x64/day/116.png"),
        "wind_mph": 8.1,
        "wind_kph": 13.0,
        "wind_degree": 250,
        "wind_dir": "WSW",
        "pressure_mb": 1015.0,
        "pressure_in": 29.97,
        "precip_mm": 0.0,
        "precip_in": 0.0,
        "humidity": 72,
        "cloud": 50,
        "feelslike_c": 14.2,
        "feelslike_f": 57.6,
        "vis_km": 10.0,
        "vis_miles": 6.0,
        "uv": 3.0,
    }


def _day(day_str: str, max_c: float, min_c: float) -> dict:
    return {
        "date": day_str,
        "date_epoch": 1758000000,
        "day": {
            "maxtemp_c": max_c,
            "maxtemp_f": round(max_c * 9 / 5 + 32, 1),
            "mintemp_c": min_c,
            "mintemp_f": round(min_c * 9 / 5 + 32, 1),
            "avgtemp_c": (max_c + min_c) / 2,
            "avgtemp_f": round((max_c + min_c) / 2 * 9 / 5 + 32, 1),
            "maxwind_mph": 10.5,
            "maxwind_kph": 16.9,
            "totalprecip_mm": 0.4,
            "totalprecip_in": 0.02,
            "totalsnow_cm": 0,
            "avgvis_km": 10.0,
            "avgvis_miles": 6.0,
            "avghumidity": 70,
            "daily_will_it_rain": 1,
            "daily_chance_of_rain": 80,
            "daily_will_it_snow": 0,
            "daily_chance_of_snow": 0,
            "condition": _condition("Patchy rain nearby", 1063, "//cdn.weatherapi.com/weather/64x64/day/176.png"),
            "uv": 2.0,
        },
        "astro": {
            "sunrise": "06:38 AM",
            "sunset": "07:13 PM",
            "moonrise": "10:40 PM",
            "moonset": "03:15 PM",
            "moon_phase": "Waning Gibbous",
            "moon_illumination": 31,
            "is_moon_up": 0,
            "is_sun_up": 0,
        },
        "hour": [],
    }


@pytest.fixture
def weatherapi_current() -> Callable[[], dict]:
    def build() -> dict:
        return {"location": _location(), "current": _current()}

    return build


@pytest.fixture
def weatherapi_forecast() -> Callable[..., dict]:
    def build(days: int = 3, start: date = date(2025, 9, 16)) -> dict:
        forecastday = [
            _day((start + timedelta(days=i)).isoformat(), 20.0 + i, 11.0 + i)
            for i in range(days)
        ]
        return {"location": _location(), "current": _current(), "forecast": {"forecastday": forecastday}}

    return build


def _period(start: str, end: str, is_day: bool, temp: int, short: str = "Sunny", wind: str = "10 to 15 mph", pop: Optional[int] = 20) -> dict:
    return {
        "number": 1,
        "name": "Today" if is_day else "Tonight",
        "startTime": start,
        "endTime": end,
        "isDaytime": is_day,
        "temperature": temp,
        "temperatureUnit": "F",
        "probabilityOfPrecipitation": {"unitCode": "wmoUnit:percent", "value": pop},
        "windSpeed": wind,
        "windDirection": "NW",
        "icon": "https://api.weather.gov/icons/land/day/few?size=medium",
        "shortForecast": short,
        "detailedForecast": f"{short}, with a high near {temp}.",
    }


@pytest.fixture
def gov_period() -> Callable[..., dict]:
    return _period


@pytest.fixture
def gov_periods() -> Callable[..., List[dict]]:
    """Pares dia/noite consecutivos a partir de `start` (fuso -05:00)."""

    def build(start: date = date(2025, 9, 16), days: int = 7) -> List[dict]:
        out = []
        for i in range(days):
            d = start + timedelta(days=i)
            nxt = d + timedelta(days=1)
            out.append(_period(f"{d}T06:00:00-05:00", f"{d}T18:00:00-05:00", True, 80 + i))
            out.append(_period(f"{d}T18:00:00-05:00", f"{nxt}T06:00:00-05:00", False, 60 + i, short="Mostly Clear"))
        return out

    return build


@pytest.fixture
def gov_point() -> dict:
    return {
        "geometry": {"type": "Point", "coordinates": [-97.0892, 39.7456]},
        "properties": {
            "gridId": "TOP",
            "gridX": 32,
            "gridY": 81,
            "forecast": "https://api.weather.gov/gridpoints/TOP/32,81/forecast",
            "observationStations": "https://api.weather.gov/gridpoints/TOP/32,81/stations",
            "timeZone": "America/Chicago",
            "relativeLocation": {"properties": {"city": "Linn", "state": "KS"}},
        },
    }


@pytest.fixture
def gov_observation() -> dict:
    return {
        "properties": {
            "timestamp": "2025-09-16T14:53:00+00:00",
            "textDescription": "Mostly Cloudy",
            "icon": "https://api.weather.gov/icons/land/day/bkn?size=medium",
            "temperature": {"unitCode": "wmoUnit:degC", "value": 22.8},
            "dewpoint": {"unitCode": "wmoUnit:degC", "value": 15.0},
            "windDirection": {"unitCode": "wmoUnit:degree_(angle)", "value": 180},
            "windSpeed": {"unitCode": "wmoUnit:km_h-1", "value": 18.36},
            "barometricPressure": {"unitCode": "wmoUnit:Pa", "value": 101590},
            "visibility": {"unitCode": "wmoUnit:m", "value": 16090},
            "relativeHumidity": {"unitCode": "wmoUnit:percent", "value": 61.5},
            "windChill": {"unitCode": "wmoUnit:degC", "value": None},
            "heatIndex": {"unitCode": "wmoUnit:degC", "value": None},
            "precipitationLastHour": {"unitCode": "wmoUnit:mm", "value": None},
        }
    }


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def mock_http() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    def build(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return build
