# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
import logging
from typing import Any, Dict, Literal
import pydantic
from pydantic import BaseModel
from weatherdash.db.kv_store import KeyValueStore

"""
Preferências de unidades/formato e tema, persistidas no armazenamento chave‑valor.


- `weather-preferences`: temperatura (celsius|fahrenheit), vento (metric|imperial), hora (12hr|24hr), pressão (mb|inHg).
- `theme`: light|dark.
- `toggle()` alterna um campo entre seus dois valores.
"""

log = logging.getLogger("weather.preferences")

PREFERENCES_KEY = "weather-preferences"
THEME_KEY = "theme"

Theme = Literal["light", "dark"]


class WeatherPreferences(BaseModel):
    temperature_unit: Literal["celsius", "fahrenheit"] = "celsius"
    wind_speed_unit: Literal["metric", "imperial"] = "metric"
    time_format: Literal["12hr", "24hr"] = "12hr"
    pressure_unit: Literal["mb", "inHg"] = "mb"


class PreferencesUpdate(BaseModel):
    temperature_unit: Literal["celsius", "fahrenheit"] | None = None
    wind_speed_unit: Literal["metric", "imperial"] | None = None
    time_format: Literal["12hr", "24hr"] | None = None
    pressure_unit: Literal["mb", "inHg"] | None = None


TOGGLES: Dict[str, tuple[str, str]] = {
    "temperature_unit": ("celsius", "fahrenheit"),
    "wind_speed_unit": ("metric", "imperial"),
    "time_format": ("12hr", "24hr"),
    "pressure_unit": ("mb", "inHg"),
}


class PreferencesService:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def get(self) -> WeatherPreferences:
        raw = await self._store.get(PREFERENCES_KEY)
        if not raw:
            return WeatherPreferences()
        try:
            return WeatherPreferences.model_validate_json(raw)
        except pydantic.ValidationError:
            log.warning("weather_preferences_reset")
            return WeatherPreferences()

    async def save(self, prefs: WeatherPreferences) -> WeatherPreferences:
        await self._store.set(PREFERENCES_KEY, prefs.model_dump_json())
        return prefs

    async def update(self, changes: PreferencesUpdate) -> WeatherPreferences:
        current = await self.get()
        patch: Dict[str, Any] = changes.model_dump(exclude_none=True)
        return await self.save(current.model_copy(update=patch))

    async def toggle(self, field: str) -> WeatherPreferences:
        """KeyError para campo desconhecido."""
        first, second = TOGGLES[field]
        current = await self.get()
        value = second if getattr(current, field) == first else first
        return await self.save(current.model_copy(update={field: value}))

    async def get_theme(self) -> Theme:
        raw = await self._store.get(THEME_KEY)
        return "dark" if raw == "dark" else "light"

    async def set_theme(self, theme: Theme) -> Theme:
        await self._store.set(THEME_KEY, theme)
        return theme
