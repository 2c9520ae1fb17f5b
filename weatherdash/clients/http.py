# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
from typing import Any, Dict, Optional
import httpx
from weatherdash.core.errors import NetworkError, ValidationError, WeatherAPIError, WeatherTimeoutError

"""
Helpers HTTP compartilhados pelos clients de provedores.


- `send_get()` faz o GET com timeout explícito e classifica falhas de transporte.
- `decode_json()` garante corpo JSON (senão `ValidationError`).
"""


async def send_get(
    client: httpx.AsyncClient,
    url: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout_s: float,
) -> httpx.Response:
    """
    GET único (sem retry; a política de retry fica com quem chama).

    Erros:
      - WeatherTimeoutError: timeout de conexão/leitura.
      - NetworkError: falha de transporte (DNS, conexão recusada...).
    """
    try:
        return await client.get(url, params=params, headers=headers, timeout=timeout_s)
    except httpx.TimeoutException as e:
        raise WeatherTimeoutError(f"Request to {httpx.URL(url).host} timed out") from e
    except httpx.TransportError as e:
        raise NetworkError(f"Network error contacting {httpx.URL(url).host}") from e


def decode_json(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError as e:
        raise ValidationError("<body>", "a JSON document", resp.headers.get("content-type", "unknown")) from e


def upstream_failure(resp: httpx.Response, provider: str) -> WeatherAPIError:
    """Erro para status não-2xx sem corpo de erro reconhecido (5xx é retentável)."""
    message = f"{provider} responded with HTTP {resp.status_code}"
    if resp.status_code >= 500:
        return NetworkError(message, status_code=502)
    return WeatherAPIError(message, code=resp.status_code, status_code=502)
