# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from time import perf_counter
from typing import Awaitable, Callable, List, Optional, Protocol, Tuple, TypeVar
import httpx
from weatherdash.clients.open_meteo import OpenMeteoGeocoder
from weatherdash.clients.weather_api import WeatherApiClient
from weatherdash.clients.weather_gov import WeatherGovClient, is_missing
from weatherdash.core.config import Settings
from weatherdash.core.errors import (
    InvalidRequest,
    NoStationsFound,
    UnsupportedLocation,
    WeatherAPIError,
    should_retry,
)
from weatherdash.schemas.forecast import (
    ByCoordinates,
    ByName,
    CurrentWeatherResponse,
    ForecastResponse,
    LocationQuery,
    LocationSuggestion,
)
from weatherdash.schemas.weather_gov import GeocodeResult, GovForecastPeriod, GovObservation
from weatherdash.services.forecast_window import DEFAULT_WINDOW, align_response
from weatherdash.services.history_cache import HistoryCache
from weatherdash.services.station_resolver import GridPoint, StationResolver
from weatherdash.services.validation import validate_payload
from weatherdash.services.weather_gov_normalize import build_current, build_location, transform_forecast_response
from weatherdash.services.weather_normalize import (
    normalize_current_response,
    normalize_forecast_response,
    normalize_search,
)

"""
Serviço de clima: ponte entre provedores (WeatherAPI / weather.gov) e a API.


- `WeatherProvider` (Protocol) com `current`, `forecast`, `search`; cada provedor valida + normaliza.
- `WeatherService` aplica a política da janela (5 dias) e expõe a interface de entrada.
- `dashboard()` dispara atual + previsão em paralelo (retry único cada) e registra no cache histórico.
- Clients são injetados (nada de singleton global).
"""

log = logging.getLogger("weather")

T = TypeVar("T")

MIN_SEARCH_LENGTH = 2
MAX_FORECAST_DAYS = 10


class WeatherProvider(Protocol):
    name: str

    async def current(self, location: LocationQuery) -> CurrentWeatherResponse:
        ...

    async def forecast(self, location: LocationQuery, days: int) -> ForecastResponse:
        ...

    async def search(self, query: str) -> List[LocationSuggestion]:
        ...


class CommercialProvider:
    """WeatherAPI.com: um GET por chamada, dias já agrupados."""

    name = "weatherapi"

    def __init__(self, client: WeatherApiClient, *, request_days: int = DEFAULT_WINDOW) -> None:
        self._client = client
        self._request_days = request_days

    async def current(self, location: LocationQuery) -> CurrentWeatherResponse:
        payload = validate_payload(await self._client.current(location.as_query()), "current")
        return normalize_current_response(payload)

    async def forecast(self, location: LocationQuery, days: int) -> ForecastResponse:
        # sempre pede a janela completa; o corte é da forecast_window
        payload = validate_payload(await self._client.forecast(location.as_query(), self._request_days), "forecast")
        resp = normalize_forecast_response(payload)
        log.info("weather_forecast_dates", extra={"provider": self.name, "dates": [d.date for d in resp.forecastday]})
        return resp

    async def search(self, query: str) -> List[LocationSuggestion]:
        return normalize_search(validate_payload(await self._client.search(query), "search"))


class GovProvider:
    """weather.gov: geocode (se nome) → ponto/grade → previsão + observação da estação mais próxima."""

    name = "weather-gov"

    def __init__(
        self,
        client: WeatherGovClient,
        geocoder: OpenMeteoGeocoder,
        *,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._client = client
        self._resolver = StationResolver(client)
        self._geocoder = geocoder
        self._clock = clock

    async def _geocode(self, name: str) -> List[GeocodeResult]:
        # o geocoder não entende "Cidade, UF": busca só pela cidade
        city = name.split(",")[0].strip()
        payload = validate_payload(await self._geocoder.search(city), "geocode")
        return payload.results

    async def _coords(self, location: LocationQuery) -> Tuple[float, float]:
        if isinstance(location, ByCoordinates):
            return location.lat, location.lon
        results = await self._geocode(location.name)
        if not results:
            raise UnsupportedLocation(f"No match for location {location.name!r}")
        return results[0].latitude, results[0].longitude

    async def _periods(self, grid: GridPoint) -> List[GovForecastPeriod]:
        payload = validate_payload(await self._client.forecast(grid.grid_id, grid.grid_x, grid.grid_y), "gov-forecast")
        return payload.properties.periods

    async def _observation(self, grid: GridPoint) -> Optional[GovObservation]:
        """Observação ao vivo ou None (sem estação / sem observação recente)."""
        try:
            station = await self._resolver.nearest_station(grid)
        except NoStationsFound as e:
            log.info("weather_no_stations", extra={"grid": f"{grid.grid_id}/{grid.grid_x},{grid.grid_y}", "error": e.message})
            return None
        try:
            payload = await self._client.latest_observation(station)
        except WeatherAPIError as e:
            if not is_missing(e):
                raise
            log.info("weather_no_observation", extra={"station": station})
            return None
        return validate_payload(payload, "gov-observation")

    async def _resolve(self, location: LocationQuery) -> Tuple[GridPoint, List[GovForecastPeriod], Optional[GovObservation]]:
        lat, lon = await self._coords(location)
        grid = await self._resolver.resolve_point(lat, lon)
        periods, observation = await asyncio.gather(self._periods(grid), self._observation(grid))
        return grid, periods, observation

    async def current(self, location: LocationQuery) -> CurrentWeatherResponse:
        grid, periods, observation = await self._resolve(location)
        now = self._clock()
        return CurrentWeatherResponse(
            location=build_location(grid, now),
            current=build_current(observation, periods, now),
        )

    async def forecast(self, location: LocationQuery, days: int) -> ForecastResponse:
        grid, periods, observation = await self._resolve(location)
        return transform_forecast_response(grid, periods, observation, self._clock(), limit=days)

    async def search(self, query: str) -> List[LocationSuggestion]:
        return [
            LocationSuggestion(
                id=r.id, name=r.name, region=r.admin1, country=r.country or r.country_code,
                lat=r.latitude, lon=r.longitude,
            )
            for r in await self._geocode(query)
        ]


def build_provider(name: str, http: httpx.AsyncClient, cfg: Settings) -> WeatherProvider:
    if name == GovProvider.name:
        client = WeatherGovClient(
            http,
            user_agent=cfg.WEATHER_GOV_USER_AGENT,
            base_url=cfg.WEATHER_GOV_BASE_URL,
            proxy_url=cfg.WEATHER_GOV_PROXY_URL,
            timeout_s=cfg.WEATHER_GOV_TIMEOUT_S,
        )
        geocoder = OpenMeteoGeocoder(http, url=cfg.GEOCODER_URL, results=cfg.GEOCODER_RESULTS)
        return GovProvider(client, geocoder)
    if name == CommercialProvider.name:
        client = WeatherApiClient(
            http,
            api_key=cfg.WEATHER_API_KEY,
            base_url=cfg.WEATHER_API_BASE_URL,
            timeout_s=cfg.WEATHER_API_TIMEOUT_S,
        )
        return CommercialProvider(client, request_days=cfg.FORECAST_DAYS)
    raise InvalidRequest(f"Unknown weather provider {name!r}")


async def retry_once(call: Callable[[], Awaitable[T]]) -> T:
    """Política de UI: uma nova tentativa apenas para erros de rede/timeout/5xx."""
    try:
        return await call()
    except WeatherAPIError as e:
        if not should_retry(e):
            raise
        log.warning("weather_retry", extra={"code": e.code, "error": e.message})
        return await call()


def location_key(location: LocationQuery) -> str:
    if isinstance(location, ByCoordinates):
        return f"{location.lat:.4f},{location.lon:.4f}"
    return location.name.strip().lower()


@dataclass
class Dashboard:
    current: CurrentWeatherResponse
    forecast: ForecastResponse


class WeatherService:
    def __init__(self, provider: WeatherProvider, *, window: int = DEFAULT_WINDOW) -> None:
        self.provider = provider
        self._window = window

    @staticmethod
    def _check_location(location: LocationQuery) -> None:
        if isinstance(location, ByName) and not location.name.strip():
            raise InvalidRequest("Location is required")

    async def get_current_weather(self, location: LocationQuery) -> CurrentWeatherResponse:
        self._check_location(location)
        return await self.provider.current(location)

    async def get_forecast(self, location: LocationQuery, days: int = DEFAULT_WINDOW) -> ForecastResponse:
        """
        Erros:
          - InvalidRequest: days fora de 1..10 ou localização vazia.
          - ValidationError / UnsupportedLocation / WeatherDataUnavailable / NetworkError.
        """
        if not (1 <= days <= MAX_FORECAST_DAYS):
            raise InvalidRequest(f"Days must be between 1 and {MAX_FORECAST_DAYS}")
        self._check_location(location)
        target = min(days, self._window)
        resp = await self.provider.forecast(location, target)
        return align_response(resp, target)

    async def search_locations(self, query: str) -> List[LocationSuggestion]:
        if len(query.strip()) < MIN_SEARCH_LENGTH:
            return []
        return await self.provider.search(query.strip())

    async def dashboard(self, location: LocationQuery, history: Optional[HistoryCache] = None) -> Dashboard:
        """Atual + previsão em paralelo; ambos precisam concluir. Registra no cache se houver."""
        t0 = perf_counter()
        current, forecast = await asyncio.gather(
            retry_once(lambda: self.get_current_weather(location)),
            retry_once(lambda: self.get_forecast(location)),
        )
        if history is not None:
            await history.store(location_key(location), forecast, current.current)

        log.info(
            "weather_dashboard_done",
            extra={
                "provider": self.provider.name,
                "days": len(forecast.forecastday),
                "elapsed_ms": int((perf_counter() - t0) * 1000),
            },
        )
        return Dashboard(current=current, forecast=forecast)
