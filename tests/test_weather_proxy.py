from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from weatherdash.api.deps import get_http_client
from weatherdash.main import start_server
from weatherdash.utils.gov_paths import sanitize_gov_path


@pytest.fixture
def proxy(mock_http):
    calls = []

    def install(handler):
        def recording(request):
            calls.append(request)
            return handler(request)

        start_server.dependency_overrides[get_http_client] = lambda: mock_http(recording)
        return TestClient(start_server), calls

    yield install
    start_server.dependency_overrides.clear()


def _ok(request):
    return httpx.Response(200, json={"properties": {"gridId": "TOP"}})


def test_missing_path(proxy):
    client, calls = proxy(_ok)

    resp = client.get("/api/weather-proxy")

    assert resp.status_code == 400
    assert resp.json() == {"error": "Path parameter required"}
    assert calls == []


@pytest.mark.parametrize(
    "path",
    [
        "/points/..%2f..%2fetc",
        "/points/%252e%252e/passwd",
        "/alerts/active",
        "//evil.example/points/1,2",
        "/points/39.7,-97.0/../../alerts",
        "/stations/KMYZ/observations",
        "/gridpoints/TOP/32,81/forecast\\..",
    ],
)
def test_disallowed_paths_never_reach_upstream(proxy, path):
    client, calls = proxy(_ok)

    resp = client.get("/api/weather-proxy", params={"path": path})

    assert resp.status_code == 403
    assert resp.json() == {"error": "Invalid path parameter"}
    assert calls == []


def test_allowed_path_is_passed_through(proxy):
    client, calls = proxy(_ok)

    resp = client.get("/api/weather-proxy", params={"path": "/points/39.7456,-97.0892"})

    assert resp.status_code == 200
    assert resp.json() == {"properties": {"gridId": "TOP"}}
    assert calls[0].url.path == "/points/39.7456,-97.0892"
    assert calls[0].headers["accept"] == "application/geo+json"
    assert "user-agent" in calls[0].headers


def test_upstream_timeout(proxy):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client, _ = proxy(handler)

    resp = client.get("/api/weather-proxy", params={"path": "/gridpoints/TOP/32,81/forecast"})

    assert resp.status_code == 504
    assert resp.json() == {"error": "Request timeout", "status": 504}


def test_upstream_error_status_is_forwarded(proxy):
    client, _ = proxy(lambda r: httpx.Response(404, json={"title": "Not Found"}))

    resp = client.get("/api/weather-proxy", params={"path": "/stations/KMYZ/observations/latest"})

    assert resp.status_code == 404
    assert resp.json() == {"error": "Weather.gov API error", "status": 404}


def test_transport_failure(proxy):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    client, _ = proxy(handler)

    resp = client.get("/api/weather-proxy", params={"path": "/gridpoints/TOP/32,81/stations"})

    assert resp.status_code == 502


def test_invalid_upstream_json(proxy):
    client, _ = proxy(lambda r: httpx.Response(200, content=b"<html>"))

    resp = client.get("/api/weather-proxy", params={"path": "/gridpoints/TOP/32,81/forecast/hourly"})

    assert resp.status_code == 502


def test_sanitizer_strips_control_characters_and_adds_slash():
    assert sanitize_gov_path("points/39.7,-97.0\n") == "/points/39.7,-97.0"
    assert sanitize_gov_path("") is None
