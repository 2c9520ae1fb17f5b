# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
import logging
from typing import Optional
import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from weatherdash.api.deps import get_http_client
from weatherdash.core.config import settings
from weatherdash.utils.gov_paths import sanitize_gov_path

"""
Proxy pass‑through para o api.weather.gov (evita CORS no navegador).


- `GET /api/weather-proxy?path=/points/...` com lista de permissão estrita de caminhos.
- 400 sem `path`; 403 caminho proibido (nunca repassado); 504 timeout; status do upstream em erro HTTP; 502 demais falhas.
"""

log = logging.getLogger("weather.proxy")

router = APIRouter()


@router.get("/weather-proxy", summary="Proxy weather.gov (caminhos permitidos)")
async def weather_proxy(
    path: Optional[str] = Query(None),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> JSONResponse:
    if not path:
        return JSONResponse({"error": "Path parameter required"}, status_code=400)

    safe = sanitize_gov_path(path)
    if safe is None:
        log.warning("weather_proxy_rejected", extra={"path": path[:200]})
        return JSONResponse({"error": "Invalid path parameter"}, status_code=403)

    try:
        resp = await http.get(
            f"{settings.WEATHER_GOV_BASE_URL.rstrip('/')}{safe}",
            headers={"User-Agent": settings.WEATHER_GOV_USER_AGENT, "Accept": "application/geo+json"},
            timeout=settings.PROXY_TIMEOUT_S,
        )
    except httpx.TimeoutException:
        log.error("weather_proxy_timeout", extra={"path": safe})
        return JSONResponse({"error": "Request timeout", "status": 504}, status_code=504)
    except httpx.HTTPError as e:
        log.error("weather_proxy_error", extra={"path": safe, "error": e.__class__.__name__})
        return JSONResponse({"error": "Failed to fetch from weather.gov"}, status_code=502)

    if not resp.is_success:
        return JSONResponse({"error": "Weather.gov API error", "status": resp.status_code}, status_code=resp.status_code)

    try:
        data = resp.json()
    except ValueError:
        return JSONResponse({"error": "Invalid JSON from weather.gov"}, status_code=502)
    return JSONResponse(data)
