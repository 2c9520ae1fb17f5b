# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
from typing import Any
import httpx
from weatherdash.clients.http import decode_json, send_get, upstream_failure

"""
Client HTTP (Open‑Meteo – geocoding).


- `OpenMeteoGeocoder.search(name)` retorna o JSON bruto de `/v1/search`.
- Usado no caminho weather.gov, que não tem endpoint "clima por nome de cidade".
"""

OPEN_METEO_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"


class OpenMeteoGeocoder:
    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        url: str = OPEN_METEO_GEOCODING_URL,
        results: int = 5,
        timeout_s: float = 10,
    ) -> None:
        self._http = http
        self._url = url
        self._results = results
        self._timeout_s = timeout_s

    async def search(self, name: str) -> Any:
        """
        Parâmetros:
          - name: texto livre (ex.: "Denver" ou "Denver, CO")

        Retorna:
          - dict com `results` (ausente quando não há correspondência)
        """
        params = {"name": name, "count": self._results, "language": "en", "format": "json"}
        resp = await send_get(self._http, self._url, params=params, timeout_s=self._timeout_s)
        if not resp.is_success:
            raise upstream_failure(resp, "Open-Meteo geocoding")
        return decode_json(resp)
