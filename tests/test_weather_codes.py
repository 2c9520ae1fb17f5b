from __future__ import annotations

import pytest

from weatherdash.utils.weather_codes import (
    DEFAULT_CONDITION_CODE,
    WEATHER_CODE_MAP,
    absolutize_icon_url,
    canonical_code,
    condition_code_for_text,
    describe_weather,
    is_snow,
)


@pytest.mark.parametrize(
    "text,code",
    [
        ("Chance Showers And Thunderstorms", 1087),
        ("Heavy Snow", 1219),
        ("Snow Showers Likely", 1213),
        ("Light Snow", 1210),
        ("Flurries", 1210),
        ("Heavy Rain", 1192),
        ("Rain", 1186),
        ("Light Rain", 1183),
        ("Drizzle", 1183),
        ("Patchy Fog", 1147),
        ("Haze", 1147),
        ("Mostly Cloudy", 1009),
        ("Overcast", 1009),
        ("Cloudy", 1006),
        ("Partly Cloudy", 1003),
        ("Partly Sunny", 1003),
        ("Sunny", 1000),
        ("Clear", 1000),
    ],
)
def test_keyword_rules(text, code):
    assert condition_code_for_text(text) == code


def test_thunder_wins_over_rain():
    assert condition_code_for_text("Heavy Rain And Thunderstorms") == 1087


def test_light_qualifier_skips_generic_snow_and_rain():
    assert condition_code_for_text("Light Snow") != 1213
    assert condition_code_for_text("Light Rain") != 1186


@pytest.mark.parametrize(
    "text,code",
    [
        ("Slight Chance Rain", 1186),
        ("Slight Chance Snow Showers", 1213),
        ("Slight Chance Light Rain", 1183),
        ("Slight Chance Rain Showers", 1186),
        ("Slight Chance T-storms", 1087),
        ("Rain And Lightning", 1186),
    ],
)
def test_slight_is_not_the_light_qualifier(text, code):
    assert condition_code_for_text(text) == code


def test_slight_chance_snow_counts_as_snow():
    assert is_snow(condition_code_for_text("Slight Chance Snow Showers"))


@pytest.mark.parametrize("text", [None, "", "Volcanic Ash", "Smoke"])
def test_unmapped_text_falls_back_to_clear(text):
    assert condition_code_for_text(text) == DEFAULT_CONDITION_CODE


def test_every_rule_code_is_canonical():
    for text in ("thunder", "heavy snow", "snow", "flurries", "heavy rain", "rain",
                 "drizzle", "fog", "overcast", "cloudy", "partly", "fair"):
        assert condition_code_for_text(text) in WEATHER_CODE_MAP


def test_canonical_code_keeps_known_provider_codes():
    assert canonical_code(1063, "Patchy rain nearby") == 1063
    assert canonical_code(42, "Light Rain") == 1183
    assert canonical_code(None, "Sunny") == 1000


def test_describe_weather():
    assert describe_weather(1003) == "Partly cloudy"
    assert describe_weather(7) == "Code 7"
    assert describe_weather(None) is None


def test_snow_codes():
    assert is_snow(1219)
    assert not is_snow(1183)


def test_absolutize_icon_url():
    assert absolutize_icon_url("//cdn.weatherapi.com/x.png") == "https://cdn.weatherapi.com/x.png"
    assert absolutize_icon_url("https://api.weather.gov/icons/a") == "https://api.weather.gov/icons/a"
    assert absolutize_icon_url(None) is None
