# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
from datetime import date, datetime, timezone
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from weatherdash.api.deps import get_history, get_weather_service
from weatherdash.schemas.forecast import CurrentWeatherResponse, ForecastResponse, LocationSuggestion, parse_location_query
from weatherdash.schemas.history import CacheCoverage, HistoryWindow
from weatherdash.services.history_cache import HistoryCache, window_dates
from weatherdash.services.weather_gov_normalize import local_zone
from weatherdash.services.weather_service import WeatherService, location_key
from weatherdash.utils.weather_codes import describe_weather

"""
Consulta de clima (atual/previsão/busca) para a UI.


- `GET /weather/current?q=` e `GET /weather/forecast?q=&days=` (q = nome ou "lat,lon").
- `GET /locations/search?q=` sugestões de localização.
- `GET /weather/dashboard?q=` atual + previsão em paralelo, grava no cache e devolve a janela [D-2..D+2].
- `GET /weather/history?q=&day=&tz=` janela montada só a partir do cache ("hoje" = `day`, senão a data no fuso `tz`, senão UTC).
- `?provider=weatherapi|weather-gov` escolhe o provedor (default do settings).
"""

router = APIRouter()


class DashboardOut(BaseModel):
    current: CurrentWeatherResponse
    forecast: ForecastResponse
    history: HistoryWindow
    description: Optional[str] = None


class HistoryOut(BaseModel):
    window: HistoryWindow
    coverage: CacheCoverage


def _local_today(resp: CurrentWeatherResponse | ForecastResponse) -> date:
    return date.fromisoformat(resp.location.localtime[:10])


def _today_in(tz: Optional[str]) -> date:
    now = datetime.now(timezone.utc)
    return now.astimezone(local_zone(tz)).date() if tz else now.date()


@router.get("/weather/current", response_model=CurrentWeatherResponse, summary="Clima atual (nome ou lat,lon)")
async def current_weather(
    q: str = Query(..., min_length=1),
    service: WeatherService = Depends(get_weather_service),
) -> Any:
    return await service.get_current_weather(parse_location_query(q))


@router.get("/weather/forecast", response_model=ForecastResponse, summary="Previsão normalizada (até 5 dias)")
async def forecast(
    q: str = Query(..., min_length=1),
    days: int = Query(5),
    service: WeatherService = Depends(get_weather_service),
) -> Any:
    return await service.get_forecast(parse_location_query(q), days)


@router.get("/locations/search", response_model=List[LocationSuggestion], summary="Sugestões de localização")
async def search_locations(
    q: str = Query(""),
    service: WeatherService = Depends(get_weather_service),
) -> Any:
    return await service.search_locations(q)


@router.get("/weather/dashboard", response_model=DashboardOut, summary="Atual + previsão + janela histórica")
async def dashboard(
    q: str = Query(..., min_length=1),
    service: WeatherService = Depends(get_weather_service),
    history: HistoryCache = Depends(get_history),
) -> Any:
    location = parse_location_query(q)
    result = await service.dashboard(location, history)
    window = history.history_window(location_key(location), result.forecast, _local_today(result.forecast))
    return {
        "current": result.current,
        "forecast": result.forecast,
        "history": window,
        "description": describe_weather(result.current.current.condition.code),
    }


@router.get("/weather/history", response_model=HistoryOut, summary="Janela [D-2..D+2] só do cache local")
async def history_window(
    q: str = Query(..., min_length=1),
    day: Optional[date] = Query(None, description="Data de referência (YYYY-MM-DD)"),
    tz: Optional[str] = Query(None, description="Fuso IANA da localização (ex.: location.tz_id)"),
    history: HistoryCache = Depends(get_history),
) -> Any:
    key = location_key(parse_location_query(q))
    today = day or _today_in(tz)
    return {
        "window": history.history_window(key, None, today),
        "coverage": history.coverage(key, window_dates(today)),
    }
