# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
from typing import List, Sequence
from weatherdash.schemas.forecast import ForecastDay, ForecastResponse

"""
Política da janela de previsão (quantidade determinística de dias).


- `align(days, target_length=5)`: corta o excedente preservando a ordem; se faltar dia, devolve o que veio.
- Nunca sintetiza dias para completar a janela: mostrar menos dias é o comportamento correto.
"""

DEFAULT_WINDOW = 5


def align(forecast_days: Sequence[ForecastDay], target_length: int = DEFAULT_WINDOW) -> List[ForecastDay]:
    if target_length < 0:
        raise ValueError("target_length must be >= 0")
    return list(forecast_days[:target_length])


def align_response(response: ForecastResponse, target_length: int = DEFAULT_WINDOW) -> ForecastResponse:
    """Nova resposta com a janela alinhada; a original não é alterada."""
    return response.model_copy(update={"forecastday": align(response.forecastday, target_length)})
