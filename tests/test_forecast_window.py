from __future__ import annotations

import pytest

from weatherdash.schemas.forecast import Condition, DayStats, ForecastDay
from weatherdash.services.forecast_window import align, align_response
from weatherdash.services.validation import validate_payload
from weatherdash.services.weather_normalize import normalize_forecast_response


def _days(n):
    return [
        ForecastDay(
            date=f"2025-09-{16 + i:02d}",
            date_epoch=1758000000 + i * 86400,
            day=DayStats(maxtemp_c=20 + i, mintemp_c=10 + i, condition=Condition(text="Sunny", code=1000)),
        )
        for i in range(n)
    ]


@pytest.mark.parametrize("n", [0, 1, 3, 5, 7, 10])
def test_align_returns_at_most_five(n):
    days = _days(n)

    aligned = align(days)

    assert len(aligned) == min(n, 5)
    assert aligned == days[: len(aligned)]


def test_align_never_adds_days():
    days = _days(3)

    assert align(days, 5) == days


def test_align_custom_target_and_input_untouched():
    days = _days(7)

    aligned = align(days, 2)

    assert [d.date for d in aligned] == ["2025-09-16", "2025-09-17"]
    assert len(days) == 7


def test_align_rejects_negative_target():
    with pytest.raises(ValueError):
        align(_days(2), -1)


def test_align_response_copies(weatherapi_forecast):
    response = normalize_forecast_response(validate_payload(weatherapi_forecast(days=7), "forecast"))

    aligned = align_response(response, 5)

    assert len(aligned.forecastday) == 5
    assert len(response.forecastday) == 7
    assert aligned.location == response.location
