# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
from typing import List
from pydantic import BaseModel, ConfigDict

"""
Schemas (modo estrito) do payload bruto da WeatherAPI.com.


- Cobrem `current.json`, `forecast.json`, `search.json` e o corpo de erro.
- Modo estrito: nenhum tipo é convertido silenciosamente (ex.: "12" não vira 12).
- Campos extras são ignorados; só o que o normalizador consome é obrigatório.
"""


class _Strict(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")


class ApiCondition(_Strict):
    text: str
    icon: str
    code: int


class ApiLocation(_Strict):
    name: str
    region: str
    country: str
    lat: float
    lon: float
    tz_id: str
    localtime_epoch: int
    localtime: str


class ApiCurrent(_Strict):
    last_updated_epoch: int
    last_updated: str
    temp_c: float
    temp_f: float
    is_day: int
    condition: ApiCondition
    wind_mph: float
    wind_kph: float
    wind_degree: int
    wind_dir: str
    pressure_mb: float
    pressure_in: float
    precip_mm: float
    precip_in: float
    humidity: float
    feelslike_c: float
    feelslike_f: float
    vis_km: float
    vis_miles: float
    uv: float


class ApiDay(_Strict):
    maxtemp_c: float
    maxtemp_f: float
    mintemp_c: float
    mintemp_f: float
    avgtemp_c: float
    avgtemp_f: float
    maxwind_mph: float
    maxwind_kph: float
    totalprecip_mm: float
    totalprecip_in: float
    avgvis_km: float
    avgvis_miles: float
    avghumidity: float
    daily_will_it_rain: int
    daily_chance_of_rain: float
    daily_will_it_snow: int
    daily_chance_of_snow: float
    condition: ApiCondition
    uv: float


class ApiAstro(_Strict):
    sunrise: str
    sunset: str
    moonrise: str
    moonset: str
    moon_phase: str
    moon_illumination: float


class ApiForecastDay(_Strict):
    date: str
    date_epoch: int
    day: ApiDay
    astro: ApiAstro


class ApiForecast(_Strict):
    forecastday: List[ApiForecastDay]


class ApiCurrentResponse(_Strict):
    location: ApiLocation
    current: ApiCurrent


class ApiForecastResponse(ApiCurrentResponse):
    forecast: ApiForecast


class ApiSearchResult(_Strict):
    id: int
    name: str
    region: str
    country: str
    lat: float
    lon: float


class ApiErrorBody(_Strict):
    code: int
    message: str


class ApiError(_Strict):
    error: ApiErrorBody
