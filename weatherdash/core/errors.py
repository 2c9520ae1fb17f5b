# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
from typing import Any, Optional

"""
Erros tipados do pipeline de clima.


- `WeatherAPIError` carrega `code` numérico estável + mensagem segura para exibição.
- Subclasses cobrem validação, localização, estações, rede, timeout e proxy.
- `describe_error()` traduz o código em orientação para o usuário; `should_retry()` decide o retry único.
"""


class WeatherAPIError(Exception):
    """Erro base: código estável, mensagem exibível e status HTTP sugerido."""

    code: int = 9999
    status_code: int = 500

    def __init__(self, message: str, *, code: Optional[int] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        return {"error": {"code": self.code, "message": self.message}}


class ValidationError(WeatherAPIError):
    """Payload do provedor não bate com o schema esperado."""

    code = 9000
    status_code = 502

    def __init__(self, field: str, expected: str, received: Any):
        self.field = field
        self.expected = expected
        self.received = received
        super().__init__(f"Invalid response format: field '{field}' expected {expected}, received {received!r}")


class UnsupportedLocation(WeatherAPIError):
    code = 1006
    status_code = 404


class NoStationsFound(WeatherAPIError):
    code = 1007
    status_code = 404


class WeatherDataUnavailable(WeatherAPIError):
    code = 1008
    status_code = 503


class NetworkError(WeatherAPIError):
    code = 503
    status_code = 503


class WeatherTimeoutError(NetworkError):
    code = 504
    status_code = 504


class ProxyRejected(WeatherAPIError):
    code = 403
    status_code = 403


class InvalidRequest(WeatherAPIError):
    code = 1003
    status_code = 400


class MissingApiKey(WeatherAPIError):
    code = 1002
    status_code = 500


_MESSAGES = {
    1002: "Weather API key is not configured.",
    1003: "Please check the location and the number of forecast days requested.",
    1005: "Invalid API URL. Please check your configuration.",
    1006: "Location not found. Please try another city name.",
    1007: "No observation stations near this location.",
    1008: "Weather data is unavailable for this location right now.",
    2006: "Invalid API key. Please check your configuration.",
    2007: "API key has been disabled. Please contact support.",
    2008: "API key has reached its usage limit. Please try again later.",
    2009: "API key does not have access to this resource.",
    9000: "JSON format error. Please try again.",
    9001: "JSON encoding error. Please try again.",
    9999: "Internal application error. Please try again later.",
}

_GENERIC = "An unexpected error occurred. Please try again."


def describe_error(error: BaseException) -> str:
    """Mensagem para o usuário final, por código (fallback: mensagem do erro)."""
    if isinstance(error, WeatherAPIError):
        return _MESSAGES.get(error.code) or error.message or _GENERIC
    return str(error) or _GENERIC


def is_network_error(error: BaseException) -> bool:
    if isinstance(error, NetworkError):
        return True
    if isinstance(error, WeatherAPIError):
        return 500 <= error.code < 600
    return False


def should_retry(error: BaseException) -> bool:
    """Apenas falhas de rede/timeout/5xx são elegíveis ao retry único."""
    return is_network_error(error)
