# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Literal, Optional, Union
from pydantic import BaseModel, Field, model_validator

"""
Modelo canônico (independente de provedor) de clima atual e previsão.


- `Location`, `Condition`, `CurrentConditions`, `DayStats`, `Astro`, `ForecastDay`.
- `ForecastResponse` garante datas únicas e estritamente crescentes.
- `ByName` / `ByCoordinates` representam a consulta de localização (variante marcada).
- Valores que o provedor não fornece ficam `None`; nada é inventado.
"""

DayOrigin = Literal["provider", "estimated", "placeholder"]


class Location(BaseModel):
    name: str
    region: str
    country: str
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    tz_id: str
    localtime_epoch: int
    localtime: str


class Condition(BaseModel):
    text: str
    code: int
    icon: Optional[str] = None


class CurrentConditions(BaseModel):
    last_updated_epoch: int
    last_updated: str
    temp_c: float
    temp_f: float
    feelslike_c: Optional[float] = None
    feelslike_f: Optional[float] = None
    is_day: bool
    condition: Condition
    humidity: Optional[float] = None
    wind_kph: Optional[float] = None
    wind_mph: Optional[float] = None
    wind_degree: Optional[int] = Field(default=None, ge=0, le=359)
    wind_dir: Optional[str] = None
    pressure_mb: Optional[float] = None
    pressure_in: Optional[float] = None
    vis_km: Optional[float] = None
    vis_miles: Optional[float] = None
    uv: Optional[float] = None
    precip_mm: Optional[float] = None
    precip_in: Optional[float] = None


class DayStats(BaseModel):
    maxtemp_c: Optional[float] = None
    maxtemp_f: Optional[float] = None
    mintemp_c: Optional[float] = None
    mintemp_f: Optional[float] = None
    avgtemp_c: Optional[float] = None
    avgtemp_f: Optional[float] = None
    maxwind_kph: Optional[float] = None
    maxwind_mph: Optional[float] = None
    totalprecip_mm: Optional[float] = None
    totalprecip_in: Optional[float] = None
    avgvis_km: Optional[float] = None
    avgvis_miles: Optional[float] = None
    avghumidity: Optional[float] = None
    uv: Optional[float] = None
    daily_will_it_rain: bool = False
    daily_chance_of_rain: float = 0
    daily_will_it_snow: bool = False
    daily_chance_of_snow: float = 0
    condition: Condition

    @model_validator(mode="after")
    def _min_not_above_max(self) -> "DayStats":
        for lo, hi in ((self.mintemp_c, self.maxtemp_c), (self.mintemp_f, self.maxtemp_f)):
            if lo is not None and hi is not None and lo > hi:
                raise ValueError(f"mintemp ({lo}) above maxtemp ({hi})")
        return self


class Astro(BaseModel):
    sunrise: str
    sunset: str
    moonrise: str
    moonset: str
    moon_phase: str
    moon_illumination: float


class ForecastDay(BaseModel):
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    date_epoch: int
    day: DayStats
    astro: Optional[Astro] = None
    origin: DayOrigin = "provider"


class CurrentWeatherResponse(BaseModel):
    location: Location
    current: CurrentConditions


class ForecastResponse(BaseModel):
    location: Location
    current: CurrentConditions
    forecastday: List[ForecastDay]

    @model_validator(mode="after")
    def _dates_strictly_increasing(self) -> "ForecastResponse":
        dates = [d.date for d in self.forecastday]
        if any(a >= b for a, b in zip(dates, dates[1:])):
            raise ValueError("forecast dates must be unique and strictly increasing")
        return self


class LocationSuggestion(BaseModel):
    id: Optional[int] = None
    name: str
    region: str = ""
    country: str = ""
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


# Consulta de localização
@dataclass(frozen=True)
class ByName:
    name: str

    def as_query(self) -> str:
        return self.name


@dataclass(frozen=True)
class ByCoordinates:
    lat: float
    lon: float

    def as_query(self) -> str:
        return f"{self.lat},{self.lon}"


LocationQuery = Union[ByName, ByCoordinates]


def parse_location_query(raw: str) -> LocationQuery:
    """
    "40.71,-74.0" → ByCoordinates; qualquer outro texto → ByName.
    Coordenadas fora de faixa são tratadas como nome (o provedor decide).
    """
    text = (raw or "").strip()
    parts = text.split(",")
    if len(parts) == 2:
        try:
            lat, lon = float(parts[0]), float(parts[1])
        except ValueError:
            return ByName(text)
        if -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0:
            return ByCoordinates(lat, lon)
    return ByName(text)
