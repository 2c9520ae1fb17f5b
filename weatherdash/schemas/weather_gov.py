# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

"""
Schemas (modo estrito) do api.weather.gov (GeoJSON) e do geocoder.


- `GovPoint` (points/{lat},{lon}), `GovStations` (gridpoints/.../stations).
- `GovForecast` (gridpoints/.../forecast) com a lista plana de períodos dia/noite.
- `GovObservation` (stations/{id}/observations/latest): valores quantitativos podem ser null.
- `GeocodeResponse` (Open‑Meteo geocoding) para resolver nome → coordenadas.

`startTime`/`endTime` ficam como texto: a data é extraída literalmente do texto.
"""


class _Strict(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")


class QuantitativeValue(_Strict):
    value: Optional[float] = None
    unitCode: Optional[str] = None


class RelativeLocationProps(_Strict):
    city: str
    state: str


class RelativeLocation(_Strict):
    properties: RelativeLocationProps


class GovPointProps(_Strict):
    gridId: str
    gridX: int
    gridY: int
    forecast: Optional[str] = None
    observationStations: Optional[str] = None
    timeZone: str
    relativeLocation: RelativeLocation


class GovPoint(_Strict):
    properties: GovPointProps


class GovStationProps(_Strict):
    stationIdentifier: str
    name: Optional[str] = None


class GovStation(_Strict):
    properties: GovStationProps


class GovStations(_Strict):
    features: List[GovStation]


class GovForecastPeriod(_Strict):
    number: Optional[int] = None
    name: Optional[str] = None
    startTime: str
    endTime: str
    isDaytime: bool
    temperature: float
    temperatureUnit: str = "F"
    probabilityOfPrecipitation: Optional[QuantitativeValue] = None
    relativeHumidity: Optional[QuantitativeValue] = None
    windSpeed: str
    windDirection: Optional[str] = None
    icon: Optional[str] = None
    shortForecast: str
    detailedForecast: Optional[str] = None


class GovForecastProps(_Strict):
    periods: List[GovForecastPeriod]


class GovForecast(_Strict):
    properties: GovForecastProps


class GovObservationProps(_Strict):
    timestamp: str
    textDescription: Optional[str] = None
    icon: Optional[str] = None
    temperature: QuantitativeValue
    dewpoint: Optional[QuantitativeValue] = None
    windDirection: Optional[QuantitativeValue] = None
    windSpeed: Optional[QuantitativeValue] = None
    barometricPressure: Optional[QuantitativeValue] = None
    visibility: Optional[QuantitativeValue] = None
    relativeHumidity: Optional[QuantitativeValue] = None
    windChill: Optional[QuantitativeValue] = None
    heatIndex: Optional[QuantitativeValue] = None
    precipitationLastHour: Optional[QuantitativeValue] = None


class GovObservation(_Strict):
    properties: GovObservationProps


class GeocodeResult(_Strict):
    id: Optional[int] = None
    name: str
    latitude: float
    longitude: float
    country: str = ""
    country_code: str = ""
    admin1: str = ""
    timezone: Optional[str] = None


class GeocodeResponse(_Strict):
    results: List[GeocodeResult] = []
