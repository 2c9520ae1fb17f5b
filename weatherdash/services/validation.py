# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
from typing import Any, Dict, List
import pydantic
from pydantic import TypeAdapter
from weatherdash.core.errors import ValidationError
from weatherdash.schemas.weather_api import (
    ApiCurrentResponse,
    ApiError,
    ApiForecastResponse,
    ApiSearchResult,
)
from weatherdash.schemas.weather_gov import (
    GeocodeResponse,
    GovForecast,
    GovObservation,
    GovPoint,
    GovStations,
)

"""
Portão de validação: todo payload bruto passa por aqui antes do normalizador.


- `validate_payload(payload, tag)` devolve o objeto tipado ou lança `ValidationError(field, expected, received)`.
- Tags: current, forecast, search, error, gov-point, gov-stations, gov-forecast, gov-observation, geocode.
- Função pura; não converte tipos silenciosamente (schemas em modo estrito).
"""

SCHEMAS: Dict[str, TypeAdapter] = {
    "current": TypeAdapter(ApiCurrentResponse),
    "forecast": TypeAdapter(ApiForecastResponse),
    "search": TypeAdapter(List[ApiSearchResult]),
    "error": TypeAdapter(ApiError),
    "gov-point": TypeAdapter(GovPoint),
    "gov-stations": TypeAdapter(GovStations),
    "gov-forecast": TypeAdapter(GovForecast),
    "gov-observation": TypeAdapter(GovObservation),
    "geocode": TypeAdapter(GeocodeResponse),
}

_EXPECTED_BY_TYPE = {
    "missing": "a required value",
    "model_type": "an object",
    "list_type": "an array",
    "string_type": "a string",
    "int_type": "an integer",
    "float_type": "a number",
    "bool_type": "a boolean",
}


def _first_error(exc: pydantic.ValidationError) -> ValidationError:
    err = exc.errors()[0]
    field = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
    expected = _EXPECTED_BY_TYPE.get(err.get("type", ""), err.get("msg", "valid value"))
    received = "missing" if err.get("type") == "missing" else type(err.get("input")).__name__
    return ValidationError(field, expected, received)


def validate_payload(payload: Any, tag: str) -> Any:
    """
    Valida `payload` contra o schema da `tag`.

    Erros:
      - ValidationError: payload malformado (campo, esperado, recebido).
      - KeyError: tag desconhecida (erro de programação).
    """
    adapter = SCHEMAS[tag]
    try:
        return adapter.validate_python(payload)
    except pydantic.ValidationError as e:
        raise _first_error(e) from e
