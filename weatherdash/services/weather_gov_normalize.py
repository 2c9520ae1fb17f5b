# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from weatherdash.core.errors import WeatherDataUnavailable
from weatherdash.schemas.forecast import (
    Condition,
    CurrentConditions,
    DayStats,
    ForecastDay,
    ForecastResponse,
    Location,
)
from weatherdash.schemas.weather_gov import GovForecastPeriod, GovObservation, QuantitativeValue
from weatherdash.services.station_resolver import GridPoint
from weatherdash.services.weather_normalize import build_model
from weatherdash.utils import units
from weatherdash.utils.weather_codes import absolutize_icon_url, condition_code_for_text, is_clear, is_snow

"""
Normalização do api.weather.gov (períodos dia/noite) para o modelo canônico.


- Agrupa períodos pela data **literal** de `startTime` (sem conversão de fuso).
- Dia → máxima; noite → mínima; metade ausente fica `None` (nunca interpolada).
- Vento em texto ("10 to 15 mph") → média; condição por palavras-chave; visibilidade heurística.
- Descarta datas anteriores a hoje e mantém as 5 primeiras em ordem crescente.
- Clima atual: observação da estação → período que contém "agora" → `WeatherDataUnavailable`.
"""

log = logging.getLogger("weather.gov")

CLEAR_VISIBILITY_KM = 16
DEFAULT_VISIBILITY_KM = 10
RAIN_LIKELY_PCT = 30
FORECAST_LIMIT = 5


@dataclass
class DayBucket:
    date: str
    day: Optional[GovForecastPeriod] = None
    night: Optional[GovForecastPeriod] = None

    @property
    def periods(self) -> List[GovForecastPeriod]:
        return [p for p in (self.day, self.night) if p is not None]


def period_date(period: GovForecastPeriod) -> str:
    return period.startTime.split("T")[0]


def bucket_periods(periods: Sequence[GovForecastPeriod]) -> Dict[str, DayBucket]:
    """Um bucket por data distinta; dentro da data, o período diurno vai para `day`, o noturno para `night`."""
    buckets: Dict[str, DayBucket] = {}
    for p in periods:
        key = period_date(p)
        bucket = buckets.setdefault(key, DayBucket(date=key))
        if p.isDaytime:
            bucket.day = p
        else:
            bucket.night = p
    return buckets


def _both_units(value: Optional[float], unit: str) -> Tuple[Optional[float], Optional[float]]:
    """(c, f) a partir da unidade autoritativa do período."""
    if value is None:
        return None, None
    if unit.upper() == "C":
        return round(value, 1), units.c_to_f(value)
    return units.f_to_c(value), value


def _pop(period: GovForecastPeriod) -> float:
    pop = period.probabilityOfPrecipitation
    return pop.value if pop and pop.value is not None else 0


def _humidity(periods: Sequence[GovForecastPeriod]) -> Optional[float]:
    values = [p.relativeHumidity.value for p in periods if p.relativeHumidity and p.relativeHumidity.value is not None]
    if not values:
        return None
    return round(sum(values) / len(values), 1)


def _condition(text: str, icon: Optional[str]) -> Condition:
    return Condition(text=text, code=condition_code_for_text(text), icon=absolutize_icon_url(icon))


def _visibility_km(code: int) -> int:
    return CLEAR_VISIBILITY_KM if is_clear(code) else DEFAULT_VISIBILITY_KM


def _date_epoch(day: str) -> int:
    return int(datetime.fromisoformat(day).replace(tzinfo=timezone.utc).timestamp())


def build_forecast_day(bucket: DayBucket) -> ForecastDay:
    day, night = bucket.day, bucket.night
    primary = day or night

    max_c, max_f = _both_units(day.temperature, day.temperatureUnit) if day else (None, None)
    min_c, min_f = _both_units(night.temperature, night.temperatureUnit) if night else (None, None)
    # noite mais quente que o dia (frente quente): mantém min <= max com os próprios valores do provedor
    if max_f is not None and min_f is not None and min_f > max_f:
        max_c, max_f, min_c, min_f = min_c, min_f, max_c, max_f

    avg_c = round((max_c + min_c) / 2, 1) if max_c is not None and min_c is not None else None
    avg_f = round((max_f + min_f) / 2, 1) if max_f is not None and min_f is not None else None

    condition = _condition(primary.shortForecast, primary.icon)
    wind_mph, wind_kph = max(units.parse_wind_speed(p.windSpeed) for p in bucket.periods)
    pop = max(_pop(p) for p in bucket.periods)
    snowy = is_snow(condition.code)
    vis_km = _visibility_km(condition.code)

    stats = build_model(
        DayStats,
        f"properties.periods[{bucket.date}]",
        maxtemp_c=max_c,
        maxtemp_f=max_f,
        mintemp_c=min_c,
        mintemp_f=min_f,
        avgtemp_c=avg_c,
        avgtemp_f=avg_f,
        maxwind_mph=wind_mph,
        maxwind_kph=wind_kph,
        avgvis_km=vis_km,
        avgvis_miles=units.km_to_miles(vis_km),
        avghumidity=_humidity(bucket.periods),
        daily_chance_of_rain=0 if snowy else pop,
        daily_will_it_rain=not snowy and pop > RAIN_LIKELY_PCT,
        daily_chance_of_snow=pop if snowy else 0,
        daily_will_it_snow=snowy and pop > RAIN_LIKELY_PCT,
        condition=condition,
    )
    return ForecastDay(date=bucket.date, date_epoch=_date_epoch(bucket.date), day=stats)


def transform_periods(
    periods: Sequence[GovForecastPeriod],
    today: date,
    limit: int = FORECAST_LIMIT,
) -> List[ForecastDay]:
    """
    Entrada:
      - periods: lista plana e cronológica (dia/noite) do NWS
      - today: "hoje" no fuso da localização

    Saída:
      - até `limit` ForecastDay, datas >= hoje, em ordem crescente
    """
    buckets = bucket_periods(periods)
    cutoff = today.isoformat()
    dates = sorted(d for d in buckets if d >= cutoff)[:limit]
    log.debug("weather_gov_buckets", extra={"dates": list(buckets), "kept": dates})
    return [build_forecast_day(buckets[d]) for d in dates]


def local_zone(tz_name: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        log.warning("weather_unknown_timezone", extra={"tz": tz_name})
        return ZoneInfo("UTC")


def build_location(grid: GridPoint, now: datetime) -> Location:
    local = now.astimezone(local_zone(grid.timezone))
    return Location(
        name=grid.city,
        region=grid.region,
        country="US",
        lat=grid.lat,
        lon=grid.lon,
        tz_id=grid.timezone,
        localtime_epoch=int(now.timestamp()),
        localtime=local.strftime("%Y-%m-%d %H:%M"),
    )


def current_period(periods: Sequence[GovForecastPeriod], now: datetime) -> Optional[GovForecastPeriod]:
    """Período cujo intervalo [startTime, endTime) contém `now`."""
    for p in periods:
        start = datetime.fromisoformat(p.startTime)
        end = datetime.fromisoformat(p.endTime)
        if start <= now < end:
            return p
    return None


def _qv(q: Optional[QuantitativeValue]) -> Optional[float]:
    return q.value if q is not None else None


def _wind_kph(q: Optional[QuantitativeValue]) -> Optional[float]:
    value = _qv(q)
    if value is None:
        return None
    if q.unitCode and q.unitCode.endswith("m_s-1"):
        value *= 3.6
    return round(value, 1)


def _precip_mm(q: Optional[QuantitativeValue]) -> Optional[float]:
    value = _qv(q)
    if value is None:
        return None
    if q.unitCode and q.unitCode.endswith(":m"):
        value *= 1000
    return round(value, 1)


def _epoch(ts: str) -> int:
    return int(datetime.fromisoformat(ts).timestamp())


def _from_observation(obs: GovObservation, period: Optional[GovForecastPeriod]) -> CurrentConditions:
    props = obs.properties
    temp_c = round(props.temperature.value, 1)
    feels_c = _qv(props.heatIndex) if _qv(props.heatIndex) is not None else _qv(props.windChill)
    feels_c = round(feels_c, 1) if feels_c is not None else temp_c

    text = props.textDescription or (period.shortForecast if period else "Clear")
    icon = props.icon or (period.icon if period else None)
    is_day = period.isDaytime if period else "/night/" not in (icon or "")

    wind_kph = _wind_kph(props.windSpeed)
    degree = _qv(props.windDirection)
    degree = int(degree) % 360 if degree is not None else None
    pressure_pa = _qv(props.barometricPressure)
    pressure_mb = units.pa_to_mb(pressure_pa) if pressure_pa is not None else None
    vis_m = _qv(props.visibility)
    vis_km = round(vis_m / 1000, 1) if vis_m is not None else None
    precip_mm = _precip_mm(props.precipitationLastHour)
    humidity = _qv(props.relativeHumidity)

    return CurrentConditions(
        last_updated_epoch=_epoch(props.timestamp),
        last_updated=props.timestamp,
        temp_c=temp_c,
        temp_f=units.c_to_f(temp_c),
        feelslike_c=feels_c,
        feelslike_f=units.c_to_f(feels_c),
        is_day=is_day,
        condition=_condition(text, icon),
        humidity=round(humidity, 1) if humidity is not None else None,
        wind_kph=wind_kph,
        wind_mph=units.optional(units.kph_to_mph, wind_kph),
        wind_degree=degree,
        wind_dir=units.degree_to_compass(degree),
        pressure_mb=pressure_mb,
        pressure_in=units.optional(units.mb_to_inhg, pressure_mb),
        vis_km=vis_km,
        vis_miles=units.optional(units.km_to_miles, vis_km),
        precip_mm=precip_mm,
        precip_in=units.optional(units.mm_to_in, precip_mm),
    )


def _from_period(period: GovForecastPeriod) -> CurrentConditions:
    temp_c, temp_f = _both_units(period.temperature, period.temperatureUnit)
    condition = _condition(period.shortForecast, period.icon)
    wind_mph, wind_kph = units.parse_wind_speed(period.windSpeed)
    vis_km = _visibility_km(condition.code)
    return CurrentConditions(
        last_updated_epoch=_epoch(period.startTime),
        last_updated=period.startTime,
        temp_c=temp_c,
        temp_f=temp_f,
        feelslike_c=temp_c,
        feelslike_f=temp_f,
        is_day=period.isDaytime,
        condition=condition,
        humidity=_humidity([period]),
        wind_kph=wind_kph,
        wind_mph=wind_mph,
        wind_degree=units.compass_to_degree(period.windDirection),
        wind_dir=period.windDirection or None,
        vis_km=vis_km,
        vis_miles=units.km_to_miles(vis_km),
    )


def build_current(
    observation: Optional[GovObservation],
    periods: Sequence[GovForecastPeriod],
    now: datetime,
) -> CurrentConditions:
    """
    Preferência: observação ao vivo (com temperatura) → período vigente.

    Erros:
      - WeatherDataUnavailable: nem observação nem período vigente.
    """
    period = current_period(periods, now)
    if observation is not None and observation.properties.temperature.value is not None:
        return _from_observation(observation, period)
    if period is not None:
        log.info("weather_current_from_forecast_period", extra={"period": period.name})
        return _from_period(period)
    raise WeatherDataUnavailable("Weather data unavailable - no observation or current forecast period")


def transform_forecast_response(
    grid: GridPoint,
    periods: Sequence[GovForecastPeriod],
    observation: Optional[GovObservation],
    now: datetime,
    limit: int = FORECAST_LIMIT,
) -> ForecastResponse:
    today = now.astimezone(local_zone(grid.timezone)).date()
    return build_model(
        ForecastResponse,
        "properties.periods",
        location=build_location(grid, now),
        current=build_current(observation, periods, now),
        forecastday=transform_periods(periods, today, limit),
    )
