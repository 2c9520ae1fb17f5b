# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
import logging
from typing import Any
import httpx
from weatherdash.clients.http import decode_json, send_get, upstream_failure
from weatherdash.core.errors import ProxyRejected, UnsupportedLocation, WeatherAPIError
from weatherdash.utils.gov_paths import sanitize_gov_path

"""
Client HTTP do api.weather.gov (NWS), direto ou via proxy `?path=`.


- Exige `User-Agent` descritivo e `Accept: application/geo+json`.
- `points/{lat},{lon}` → `gridpoints/{grid}/{x},{y}/forecast|stations` → `stations/{id}/observations/latest`.
- Devolve JSON **bruto**; 404 em `points` significa fora da cobertura (`UnsupportedLocation`).
"""

log = logging.getLogger("weather.gov")


class WeatherGovClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        user_agent: str,
        base_url: str = "https://api.weather.gov",
        proxy_url: str = "",
        timeout_s: float = 15,
    ) -> None:
        self._http = http
        self._headers = {"User-Agent": user_agent, "Accept": "application/geo+json"}
        self._base_url = base_url.rstrip("/")
        self._proxy_url = proxy_url
        self._timeout_s = timeout_s

    async def _get(self, path: str) -> httpx.Response:
        safe = sanitize_gov_path(path)
        if safe is None:
            raise ProxyRejected(f"Refusing to request disallowed path {path!r}")

        if self._proxy_url:
            resp = await send_get(self._http, self._proxy_url, params={"path": safe}, headers=self._headers, timeout_s=self._timeout_s)
        else:
            resp = await send_get(self._http, f"{self._base_url}{safe}", headers=self._headers, timeout_s=self._timeout_s)

        log.debug("weather_gov_response", extra={"path": safe, "status": resp.status_code})
        return resp

    async def point(self, lat: float, lon: float) -> Any:
        resp = await self._get(f"/points/{lat:.4f},{lon:.4f}")
        if resp.status_code == 404:
            raise UnsupportedLocation(f"Location {lat:.4f},{lon:.4f} is outside weather.gov coverage")
        if not resp.is_success:
            raise upstream_failure(resp, "weather.gov")
        return decode_json(resp)

    async def forecast(self, grid_id: str, grid_x: int, grid_y: int) -> Any:
        return await self._json(f"/gridpoints/{grid_id}/{grid_x},{grid_y}/forecast")

    async def stations(self, grid_id: str, grid_x: int, grid_y: int) -> Any:
        return await self._json(f"/gridpoints/{grid_id}/{grid_x},{grid_y}/stations")

    async def latest_observation(self, station_id: str) -> Any:
        return await self._json(f"/stations/{station_id}/observations/latest")

    async def _json(self, path: str) -> Any:
        resp = await self._get(path)
        if not resp.is_success:
            raise upstream_failure(resp, "weather.gov")
        return decode_json(resp)


def is_missing(error: WeatherAPIError) -> bool:
    """404 do upstream (ex.: estação sem observação recente)."""
    return error.code == 404
