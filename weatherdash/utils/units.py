# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
import re
from typing import Optional, Tuple

"""
Conversões de unidade e rumo do vento.


- Temperatura (°C↔°F), vento (km/h↔mph), pressão (Pa→mb→inHg), distância (km↔mi).
- `parse_wind_speed("10 to 15 mph")` → (mph, kph) usando média da faixa.
- Rumo em graus ↔ rosa dos ventos de 16 pontos.
"""

KPH_PER_MPH = 1.60934
MB_PER_INHG = 33.864
MM_PER_IN = 25.4

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)

_WIND_RANGE = re.compile(r"(\d+(?:\.\d+)?)\s*to\s*(\d+(?:\.\d+)?)\s*mph", re.IGNORECASE)
_WIND_SINGLE = re.compile(r"(\d+(?:\.\d+)?)\s*mph", re.IGNORECASE)


def c_to_f(celsius: float) -> float:
    return round(celsius * 9 / 5 + 32, 1)


def f_to_c(fahrenheit: float) -> float:
    return round((fahrenheit - 32) * 5 / 9, 1)


def mph_to_kph(mph: float) -> int:
    return round(mph * KPH_PER_MPH)


def kph_to_mph(kph: float) -> float:
    return round(kph / KPH_PER_MPH, 1)


def pa_to_mb(pascals: float) -> float:
    return round(pascals / 100, 1)


def mb_to_inhg(mb: float) -> float:
    return round(mb / MB_PER_INHG, 2)


def km_to_miles(km: float) -> float:
    return round(km / KPH_PER_MPH, 1)


def mm_to_in(mm: float) -> float:
    return round(mm / MM_PER_IN, 2)


def optional(fn, value: Optional[float]) -> Optional[float]:
    """Aplica a conversão só quando o valor existe."""
    return None if value is None else fn(value)


def parse_wind_speed(text: Optional[str]) -> Tuple[float, int]:
    """
    Converte vento em texto livre do NWS em (mph, kph).

    "10 to 15 mph" → (12.5, 20); "5 mph" → (5, 8); texto sem número → (0, 0).
    """
    if not text:
        return 0.0, 0
    m = _WIND_RANGE.search(text)
    if m:
        mph = (float(m.group(1)) + float(m.group(2))) / 2
    else:
        m = _WIND_SINGLE.search(text)
        mph = float(m.group(1)) if m else 0.0
    return mph, mph_to_kph(mph)


def degree_to_compass(degree: Optional[float]) -> Optional[str]:
    if degree is None:
        return None
    return COMPASS_POINTS[round(degree / 22.5) % 16]


def compass_to_degree(label: Optional[str]) -> Optional[int]:
    if not label:
        return None
    label = label.strip().upper()
    if label not in COMPASS_POINTS:
        return None
    return round(COMPASS_POINTS.index(label) * 22.5) % 360
