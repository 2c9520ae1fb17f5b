# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
import asyncio
import json
import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional
import pydantic
from weatherdash.db.kv_store import KeyValueStore
from weatherdash.schemas.forecast import (
    Condition,
    CurrentConditions,
    DayStats,
    ForecastDay,
    ForecastResponse,
)
from weatherdash.schemas.history import CacheCoverage, HistoricalForecastDay, HistoryWindow
from weatherdash.utils.weather_codes import DEFAULT_CONDITION_CODE

"""
Cache histórico local (localização → data → ForecastDay), apenas como fallback de exibição.


- `store()` grava cada dia de uma previsão bem-sucedida e estima "hoje" a partir do clima atual se faltar.
- `retrieve()` é busca pura em memória (sem rede, sem mutação).
- Persistido como um único documento JSON (`weather-history-cache`), carregado uma vez e regravado inteiro a cada mutação.
- `history_window()` monta [D-2..D+2]: previsão → cache → placeholder marcado.
"""

log = logging.getLogger("weather.cache")

STORAGE_KEY = "weather-history-cache"

# estimativa da mínima de "hoje" a partir da temperatura atual
ESTIMATED_MIN_OFFSET_C = 5
ESTIMATED_MIN_OFFSET_F = 9

_LABELS = {-2: "2 days ago", -1: "Yesterday", 0: "Today", 1: "Tomorrow", 2: "In 2 days"}

HistoryData = Dict[str, Dict[str, ForecastDay]]


def window_dates(reference: date) -> List[str]:
    return [(reference + timedelta(days=i)).isoformat() for i in range(-2, 3)]


def day_label(day: str, today: date) -> str:
    target = date.fromisoformat(day)
    offset = (target - today).days
    return _LABELS.get(offset) or target.strftime("%a, %b %d")


def _epoch(day: str) -> int:
    return (date.fromisoformat(day) - date(1970, 1, 1)).days * 86400


def estimate_day_from_current(day: str, current: CurrentConditions) -> ForecastDay:
    """Dia derivado (origin="estimated"), não é um registro do provedor."""
    stats = DayStats(
        maxtemp_c=current.temp_c,
        maxtemp_f=current.temp_f,
        mintemp_c=round(current.temp_c - ESTIMATED_MIN_OFFSET_C, 1),
        mintemp_f=round(current.temp_f - ESTIMATED_MIN_OFFSET_F, 1),
        avgtemp_c=current.temp_c,
        avgtemp_f=current.temp_f,
        maxwind_kph=current.wind_kph,
        maxwind_mph=current.wind_mph,
        avgvis_km=current.vis_km,
        avgvis_miles=current.vis_miles,
        avghumidity=current.humidity,
        uv=current.uv,
        condition=current.condition,
    )
    return ForecastDay(date=day, date_epoch=_epoch(day), day=stats, origin="estimated")


def placeholder_day(day: str) -> ForecastDay:
    """Preenchimento de último recurso para a UI: sem valores, origin="placeholder"."""
    stats = DayStats(condition=Condition(text="No data", code=DEFAULT_CONDITION_CODE))
    return ForecastDay(date=day, date_epoch=_epoch(day), day=stats, origin="placeholder")


class HistoryCache:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._data: HistoryData = {}
        self._loaded = False
        # serializa carga + cópia + commit entre requisições concorrentes
        self._lock = asyncio.Lock()

    async def load(self) -> None:
        """Carrega do armazenamento uma única vez; documento corrompido é descartado (cache best-effort)."""
        async with self._lock:
            await self._load()

    async def _load(self) -> None:
        if self._loaded:
            return
        raw = await self._store.get(STORAGE_KEY)
        if raw:
            try:
                decoded = json.loads(raw)
                self._data = {
                    loc: {d: ForecastDay.model_validate(day) for d, day in days.items()}
                    for loc, days in decoded.items()
                }
            except (ValueError, AttributeError, pydantic.ValidationError) as e:
                log.warning("weather_history_cache_discarded", extra={"error": str(e)[:200]})
                self._data = {}
        self._loaded = True

    async def _commit(self, data: HistoryData) -> None:
        payload = {
            loc: {d: day.model_dump(mode="json") for d, day in days.items()}
            for loc, days in data.items()
        }
        await self._store.set(STORAGE_KEY, json.dumps(payload))
        self._data = data

    async def store(
        self,
        location_key: str,
        forecast: ForecastResponse,
        current: Optional[CurrentConditions] = None,
        today: Optional[date] = None,
    ) -> None:
        """
        Grava os dias da previsão sob (location_key, data). Se "hoje" continuar ausente,
        grava um dia estimado a partir de `current` (ou de `forecast.current`).
        """
        today_str = (today.isoformat() if today else forecast.location.localtime[:10])

        async with self._lock:
            await self._load()
            data = {loc: dict(days) for loc, days in self._data.items()}
            days = data.setdefault(location_key, {})
            for fd in forecast.forecastday:
                days[fd.date] = fd
            if today_str not in days:
                days[today_str] = estimate_day_from_current(today_str, current or forecast.current)
            await self._commit(data)
        log.info("weather_history_stored", extra={"location": location_key, "days": len(days)})

    def retrieve(self, location_key: str, day: str) -> Optional[ForecastDay]:
        return self._data.get(location_key, {}).get(day)

    def has(self, location_key: str, day: str) -> bool:
        return self.retrieve(location_key, day) is not None

    def coverage(self, location_key: str, dates: Iterable[str]) -> CacheCoverage:
        dates = list(dates)
        missing = [d for d in dates if not self.has(location_key, d)]
        return CacheCoverage(cached=len(dates) - len(missing), need_fetch=len(missing), missing_dates=missing)

    async def clear(self, location_key: Optional[str] = None) -> None:
        async with self._lock:
            await self._load()
            if location_key is None:
                data: HistoryData = {}
            else:
                data = {loc: days for loc, days in self._data.items() if loc != location_key}
            await self._commit(data)

    def history_window(
        self,
        location_key: str,
        forecast: Optional[ForecastResponse],
        today: date,
    ) -> HistoryWindow:
        """Monta [D-2..D+2] com prioridade: previsão atual → cache → placeholder."""
        dates = window_dates(today)
        fresh = {fd.date: fd for fd in forecast.forecastday} if forecast else {}

        out: List[HistoricalForecastDay] = []
        for offset, d in zip(range(-2, 3), dates):
            source = fresh.get(d) or self.retrieve(location_key, d) or placeholder_day(d)
            out.append(HistoricalForecastDay(
                **source.model_dump(),
                is_historical=offset < 0,
                is_today=offset == 0,
                is_future=offset > 0,
                day_label=day_label(d, today),
            ))

        return HistoryWindow(location=location_key, window_start=dates[0], window_end=dates[-1], days=out)
