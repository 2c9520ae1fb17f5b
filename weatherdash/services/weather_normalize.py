# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
from typing import Any, Callable, List, TypeVar
import pydantic
from weatherdash.core.errors import ValidationError
from weatherdash.schemas.forecast import (
    Astro,
    Condition,
    CurrentConditions,
    CurrentWeatherResponse,
    DayStats,
    ForecastDay,
    ForecastResponse,
    Location,
    LocationSuggestion,
)
from weatherdash.schemas.weather_api import (
    ApiCondition,
    ApiCurrent,
    ApiCurrentResponse,
    ApiForecastDay,
    ApiForecastResponse,
    ApiLocation,
    ApiSearchResult,
)
from weatherdash.utils.weather_codes import absolutize_icon_url, canonical_code

"""
Normalização do payload WeatherAPI.com (comercial) para o modelo canônico.


- Transformação quase identidade: os dias já vêm agrupados por data.
- Condição passa pelo vocabulário canônico; ícones `//cdn...` viram `https://cdn...`.
- Lança `ValidationError` se o resultado violar invariantes (ex.: datas fora de ordem).
"""

T = TypeVar("T")


def build_model(factory: Callable[..., T], field: str, **kwargs: Any) -> T:
    """Constrói um modelo canônico traduzindo violação de invariante em `ValidationError`."""
    try:
        return factory(**kwargs)
    except pydantic.ValidationError as e:
        err = e.errors()[0]
        raise ValidationError(field, err.get("msg", "valid value"), type(err.get("input")).__name__) from e


def normalize_condition(cond: ApiCondition) -> Condition:
    return Condition(
        text=cond.text,
        code=canonical_code(cond.code, cond.text),
        icon=absolutize_icon_url(cond.icon),
    )


def normalize_location(loc: ApiLocation) -> Location:
    return build_model(Location, "location", **loc.model_dump())


def normalize_current(cur: ApiCurrent) -> CurrentConditions:
    return CurrentConditions(
        last_updated_epoch=cur.last_updated_epoch,
        last_updated=cur.last_updated,
        temp_c=cur.temp_c,
        temp_f=cur.temp_f,
        feelslike_c=cur.feelslike_c,
        feelslike_f=cur.feelslike_f,
        is_day=bool(cur.is_day),
        condition=normalize_condition(cur.condition),
        humidity=cur.humidity,
        wind_kph=cur.wind_kph,
        wind_mph=cur.wind_mph,
        wind_degree=cur.wind_degree % 360,
        wind_dir=cur.wind_dir,
        pressure_mb=cur.pressure_mb,
        pressure_in=cur.pressure_in,
        vis_km=cur.vis_km,
        vis_miles=cur.vis_miles,
        uv=cur.uv,
        precip_mm=cur.precip_mm,
        precip_in=cur.precip_in,
    )


def normalize_day(fd: ApiForecastDay) -> ForecastDay:
    d = fd.day
    stats = build_model(
        DayStats,
        f"forecast.forecastday[{fd.date}].day",
        maxtemp_c=d.maxtemp_c,
        maxtemp_f=d.maxtemp_f,
        mintemp_c=d.mintemp_c,
        mintemp_f=d.mintemp_f,
        avgtemp_c=d.avgtemp_c,
        avgtemp_f=d.avgtemp_f,
        maxwind_kph=d.maxwind_kph,
        maxwind_mph=d.maxwind_mph,
        totalprecip_mm=d.totalprecip_mm,
        totalprecip_in=d.totalprecip_in,
        avgvis_km=d.avgvis_km,
        avgvis_miles=d.avgvis_miles,
        avghumidity=d.avghumidity,
        uv=d.uv,
        daily_will_it_rain=bool(d.daily_will_it_rain),
        daily_chance_of_rain=d.daily_chance_of_rain,
        daily_will_it_snow=bool(d.daily_will_it_snow),
        daily_chance_of_snow=d.daily_chance_of_snow,
        condition=normalize_condition(d.condition),
    )
    return build_model(
        ForecastDay,
        f"forecast.forecastday[{fd.date}]",
        date=fd.date,
        date_epoch=fd.date_epoch,
        day=stats,
        astro=Astro(**fd.astro.model_dump()),
    )


def normalize_current_response(payload: ApiCurrentResponse) -> CurrentWeatherResponse:
    return CurrentWeatherResponse(
        location=normalize_location(payload.location),
        current=normalize_current(payload.current),
    )


def normalize_forecast_response(payload: ApiForecastResponse) -> ForecastResponse:
    """
    Entrada: payload já validado (tag `forecast`).
    Saída: `ForecastResponse` canônico com os dias na ordem do provedor (sem corte; ver forecast_window).
    """
    return build_model(
        ForecastResponse,
        "forecast.forecastday",
        location=normalize_location(payload.location),
        current=normalize_current(payload.current),
        forecastday=[normalize_day(fd) for fd in payload.forecast.forecastday],
    )


def normalize_search(results: List[ApiSearchResult]) -> List[LocationSuggestion]:
    return [
        LocationSuggestion(id=r.id, name=r.name, region=r.region, country=r.country, lat=r.lat, lon=r.lon)
        for r in results
    ]
