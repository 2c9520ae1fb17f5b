# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from typing import Optional
import httpx
from fastapi import Depends, Query, Request
from weatherdash.core.config import settings
from weatherdash.db.kv_store import KeyValueStore
from weatherdash.services.history_cache import HistoryCache
from weatherdash.services.preferences import PreferencesService
from weatherdash.services.weather_service import WeatherService, build_provider

"""
Dependências reutilizáveis da API.


- Recursos de vida longa (httpx.AsyncClient, armazenamento, cache histórico) ficam em `app.state` (ver `main.lifespan`).
- `get_weather_service()` monta o serviço por requisição com o provedor escolhido (`?provider=`).
- Testes substituem qualquer uma via `app.dependency_overrides`.
"""

def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http


def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store


def get_history(request: Request) -> HistoryCache:
    return request.app.state.history


def get_weather_service(
    provider: Optional[str] = Query(None, description="weatherapi | weather-gov"),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> WeatherService:
    return WeatherService(build_provider(provider or settings.WEATHER_PROVIDER, http, settings), window=settings.FORECAST_DAYS)


def get_preferences(store: KeyValueStore = Depends(get_store)) -> PreferencesService:
    return PreferencesService(store)
