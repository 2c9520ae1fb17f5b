# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel
from weatherdash.schemas.forecast import ForecastDay

"""
Schemas da janela histórica de 5 dias: [D-2, D-1, hoje, D+1, D+2].
"""


class HistoricalForecastDay(ForecastDay):
    is_historical: bool = False
    is_today: bool = False
    is_future: bool = False
    day_label: Optional[str] = None


class HistoryWindow(BaseModel):
    location: str
    window_start: str
    window_end: str
    days: List[HistoricalForecastDay]


class CacheCoverage(BaseModel):
    cached: int
    need_fetch: int
    missing_dates: List[str]
