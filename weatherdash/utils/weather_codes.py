# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
import re
from typing import Optional, Tuple

"""
Vocabulário canônico de condições meteorológicas.


- `WEATHER_CODE_MAP` traduz códigos canônicos → texto legível.
- `condition_code_for_text(text)` aplica regras de palavra-chave em ordem fixa (mais severo primeiro).
- `absolutize_icon_url()` reescreve URLs `//cdn...` para `https://cdn...`.
- Tabela baseada nos códigos WeatherAPI: https://www.weatherapi.com/docs/weather_conditions.json
"""

DEFAULT_CONDITION_CODE = 1000

WEATHER_CODE_MAP = {
    1000: "Sunny",
    1003: "Partly cloudy",
    1006: "Cloudy",
    1009: "Overcast",
    1030: "Mist",
    1063: "Patchy rain possible",
    1066: "Patchy snow possible",
    1069: "Patchy sleet possible",
    1072: "Patchy freezing drizzle possible",
    1087: "Thundery outbreaks possible",
    1114: "Blowing snow",
    1117: "Blizzard",
    1135: "Fog",
    1147: "Freezing fog",
    1150: "Patchy light drizzle",
    1153: "Light drizzle",
    1168: "Freezing drizzle",
    1171: "Heavy freezing drizzle",
    1180: "Patchy light rain",
    1183: "Light rain",
    1186: "Moderate rain at times",
    1189: "Moderate rain",
    1192: "Heavy rain at times",
    1195: "Heavy rain",
    1198: "Light freezing rain",
    1201: "Moderate or heavy freezing rain",
    1204: "Light sleet",
    1207: "Moderate or heavy sleet",
    1210: "Patchy light snow",
    1213: "Light snow",
    1216: "Patchy moderate snow",
    1219: "Moderate snow",
    1222: "Patchy heavy snow",
    1225: "Heavy snow",
    1237: "Ice pellets",
    1240: "Light rain shower",
    1243: "Moderate or heavy rain shower",
    1246: "Torrential rain shower",
    1249: "Light sleet showers",
    1252: "Moderate or heavy sleet showers",
    1255: "Light snow showers",
    1258: "Moderate or heavy snow showers",
    1261: "Light showers of ice pellets",
    1264: "Moderate or heavy showers of ice pellets",
    1273: "Patchy light rain with thunder",
    1276: "Moderate or heavy rain with thunder",
    1279: "Patchy light snow with thunder",
    1282: "Moderate or heavy snow with thunder",
}

SNOW_CODES = frozenset({1066, 1114, 1117, 1210, 1213, 1216, 1219, 1222, 1225, 1255, 1258, 1279, 1282})

# (código, palavras que disparam, palavras que excluem); a ordem é o desempate
_KEYWORD_RULES: Tuple[Tuple[int, Tuple[str, ...], Tuple[str, ...]], ...] = (
    (1087, ("thunder", "t-storm"), ()),
    (1219, ("heavy snow",), ()),
    (1213, ("snow",), ("light",)),
    (1210, ("light snow", "flurries"), ()),
    (1192, ("heavy rain",), ()),
    (1186, ("rain",), ("light",)),
    (1183, ("light rain", "drizzle", "showers"), ()),
    (1147, ("fog", "mist", "haze"), ()),
    (1009, ("overcast", "mostly cloudy"), ()),
    (1006, ("cloudy", "mostly clear"), ("partly",)),
    (1003, ("partly",), ()),
    (1000, ("sunny", "clear", "fair"), ()),
)


def _starts_word(word: str) -> re.Pattern:
    # "thunder" casa "thunderstorms", mas "light" não casa "slight"
    return re.compile(r"\b" + re.escape(word))


def _whole_word(word: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(word) + r"\b")


_COMPILED_RULES = tuple(
    (code, tuple(_starts_word(w) for w in keywords), tuple(_whole_word(w) for w in excludes))
    for code, keywords, excludes in _KEYWORD_RULES
)


def condition_code_for_text(text: Optional[str]) -> int:
    """Função total: qualquer texto devolve um código canônico (default 1000)."""
    if not text:
        return DEFAULT_CONDITION_CODE
    lowered = text.lower()
    for code, keywords, excludes in _COMPILED_RULES:
        if any(p.search(lowered) for p in excludes):
            continue
        if any(p.search(lowered) for p in keywords):
            return code
    return DEFAULT_CONDITION_CODE


def canonical_code(code: Optional[int], text: Optional[str]) -> int:
    """Mantém o código do provedor se já for canônico; senão mapeia pelo texto."""
    if code is not None and int(code) in WEATHER_CODE_MAP:
        return int(code)
    return condition_code_for_text(text)


def describe_weather(code: int | None) -> Optional[str]:
    if code is None:
        return None
    return WEATHER_CODE_MAP.get(int(code), f"Code {code}")


def is_clear(code: int) -> bool:
    return code == DEFAULT_CONDITION_CODE


def is_snow(code: int) -> bool:
    return code in SNOW_CODES


def absolutize_icon_url(url: Optional[str]) -> Optional[str]:
    if url and url.startswith("//"):
        return "https:" + url
    return url
