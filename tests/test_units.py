from __future__ import annotations

import pytest

from weatherdash.utils import units


@pytest.mark.parametrize("celsius", [-40.0, -12.3, 0.0, 21.7, 37.0, 48.9])
def test_celsius_fahrenheit_round_trip_within_rounding(celsius):
    assert abs(units.f_to_c(units.c_to_f(celsius)) - celsius) <= 1


def test_known_temperature_points():
    assert units.c_to_f(100) == 212
    assert units.f_to_c(32) == 0
    assert units.c_to_f(-40) == -40


def test_wind_range_uses_mean_of_bounds():
    mph, kph = units.parse_wind_speed("10 to 15 mph")

    assert mph == 12.5
    assert kph == round(12.5 * 1.60934)


def test_wind_single_value():
    mph, kph = units.parse_wind_speed("5 mph")

    assert mph == 5
    assert kph == 8


@pytest.mark.parametrize("text", ["", None, "calm", "gusty"])
def test_wind_without_numbers_is_zero(text):
    assert units.parse_wind_speed(text) == (0.0, 0)


def test_pressure_and_distance_conversions():
    assert units.pa_to_mb(101590) == 1015.9
    assert units.mb_to_inhg(1015.9) == pytest.approx(30.0, abs=0.01)
    assert units.km_to_miles(16) == 9.9
    assert units.mm_to_in(25.4) == 1.0


@pytest.mark.parametrize(
    "degree,label",
    [(0, "N"), (22.5, "NNE"), (180, "S"), (250, "WSW"), (350, "N"), (359, "N")],
)
def test_degree_to_compass(degree, label):
    assert units.degree_to_compass(degree) == label


def test_compass_to_degree():
    assert units.compass_to_degree("NW") == 315
    assert units.compass_to_degree("s") == 180
    assert units.compass_to_degree("variable") is None
    assert units.compass_to_degree(None) is None


def test_optional_skips_missing_values():
    assert units.optional(units.kph_to_mph, None) is None
    assert units.optional(units.kph_to_mph, 16.0934) == 10.0
