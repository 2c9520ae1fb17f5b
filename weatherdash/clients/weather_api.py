# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
import logging
from typing import Any, Dict
import httpx
from weatherdash.clients.http import decode_json, send_get, upstream_failure
from weatherdash.core.errors import (
    MissingApiKey,
    UnsupportedLocation,
    ValidationError,
    WeatherAPIError,
)
from weatherdash.services.validation import validate_payload

"""
Client HTTP da WeatherAPI.com (provedor comercial).


- Um GET por chamada com `key`; devolve JSON **bruto** (validação/normalização ficam nos services).
- Corpo de erro `{"error": {"code", "message"}}` vira `WeatherAPIError` com o código do provedor.
- Código 1006 (localização não encontrada) vira `UnsupportedLocation`.
"""

log = logging.getLogger("weather.weatherapi")


class WeatherApiClient:
    """Client injetável (sem singleton): recebe o `httpx.AsyncClient` de fora."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        api_key: str,
        base_url: str = "https://api.weatherapi.com/v1",
        timeout_s: float = 10,
    ) -> None:
        if not api_key:
            raise MissingApiKey("WEATHER_API_KEY environment variable is required")
        self._http = http
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s

    async def _get(self, endpoint: str, params: Dict[str, Any]) -> Any:
        url = f"{self._base_url}{endpoint}"
        resp = await send_get(self._http, url, params={"key": self._api_key, **params}, timeout_s=self._timeout_s)

        # nunca logar params (contém a chave)
        log.debug("weatherapi_response", extra={"endpoint": endpoint, "status": resp.status_code})

        if resp.is_success:
            return decode_json(resp)

        try:
            err = validate_payload(decode_json(resp), "error")
        except ValidationError:
            raise upstream_failure(resp, "WeatherAPI")
        if err.error.code == UnsupportedLocation.code:
            raise UnsupportedLocation(err.error.message)
        raise WeatherAPIError(err.error.message, code=err.error.code, status_code=resp.status_code)

    async def current(self, query: str) -> Any:
        return await self._get("/current.json", {"q": query, "aqi": "no"})

    async def forecast(self, query: str, days: int) -> Any:
        return await self._get("/forecast.json", {"q": query, "days": days, "aqi": "no", "alerts": "no"})

    async def search(self, query: str) -> Any:
        return await self._get("/search.json", {"q": query})
