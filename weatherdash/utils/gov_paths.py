# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
import re
from typing import Optional
from urllib.parse import unquote

"""
Lista de permissão de caminhos do api.weather.gov (usada pelo proxy e pelo client).


- Remove caracteres de controle; rejeita `..`, `//` e prefixos fora de {points, gridpoints, stations}.
- Só aceita os endpoints usados pelo pipeline (points, forecast, stations, observação mais recente).
"""

ALLOWED_API_PATHS = ("points", "gridpoints", "stations")

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

_VALID_PATHS = (
    re.compile(r"^/points/-?\d+(\.\d+)?,-?\d+(\.\d+)?$"),
    re.compile(r"^/gridpoints/[A-Z]{3}/\d+,\d+/(forecast|forecast/hourly|stations)$"),
    re.compile(r"^/stations/[A-Za-z0-9]+/observations/latest$"),
)


def sanitize_gov_path(raw: str) -> Optional[str]:
    """
    Devolve o caminho saneado ou None se for proibido.

    O texto é decodificado mais uma vez para pegar travessias duplamente codificadas (`%252e%252e`).
    """
    path = _CONTROL_CHARS.sub("", raw or "")
    for candidate in (path, unquote(path)):
        if ".." in candidate or "//" in candidate or "\\" in candidate:
            return None

    parts = [p for p in path.split("/") if p]
    if not parts or parts[0] not in ALLOWED_API_PATHS:
        return None
    if not path.startswith("/"):
        path = "/" + path
    if not any(p.match(path) for p in _VALID_PATHS):
        return None
    return path
