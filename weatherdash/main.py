# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from contextlib import asynccontextmanager
import json
import logging
import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from weatherdash.core.config import settings
from weatherdash.core.errors import WeatherAPIError, describe_error
from weatherdash.api.v1.router import router_v1
from weatherdash.api import weather_proxy
from weatherdash.db.kv_store import SqlKeyValueStore
from weatherdash.db.session import create_schema, make_engine, make_sessionmaker
from weatherdash.services.history_cache import HistoryCache

"""
weatherdash – FastAPI entrypoint.

- Cria a instância principal do FastAPI (title/version) e monta /api/v1 e /api/weather-proxy.
- `lifespan` abre o httpx.AsyncClient compartilhado, o armazenamento local e carrega o cache histórico uma vez.
- Converte `WeatherAPIError` em `{"error": {"code", "message", "guidance"}}` com status adequado.
- Configura CORS conforme settings (origens, headers, métodos).
- Expõe /health para diagnóstico rápido do ambiente.
"""

logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(asctime)s %(levelname)s %(name)s %(message)s")
log = logging.getLogger("weather")

@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = make_engine(settings.DATABASE_URL)
    await create_schema(engine)
    app.state.store = SqlKeyValueStore(make_sessionmaker(engine))
    app.state.history = HistoryCache(app.state.store)
    await app.state.history.load()
    app.state.http = httpx.AsyncClient(follow_redirects=True)
    try:
        yield
    finally:
        await app.state.http.aclose()
        await engine.dispose()


start_server = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

start_server.include_router(router_v1, prefix="/api/v1")
start_server.include_router(weather_proxy.router, prefix="/api", tags=["weather-proxy"])


@start_server.exception_handler(WeatherAPIError)
async def weather_error_handler(request: Request, exc: WeatherAPIError) -> JSONResponse:
    log.warning("weather_request_failed", extra={"path": request.url.path, "code": exc.code, "error": exc.message})
    body = exc.to_dict()
    body["error"]["guidance"] = describe_error(exc)
    return JSONResponse(body, status_code=exc.status_code)


def _normalize_cors(origins_setting):
    """
    Aceita: list[str], string JSON (ex: '["http://..."]') ou CSV (ex: 'http://...,http://...').
    Retorna sempre uma lista de strings (sem espaços) ou lista vazia.
    """
    if not origins_setting:
        return []
    if isinstance(origins_setting, (list, tuple)):
        return [o.strip() for o in origins_setting if o and o.strip()]
    if isinstance(origins_setting, str):
        s = origins_setting.strip()
        try:
            parsed = json.loads(s)
            if isinstance(parsed, list):
                return [o.strip() for o in parsed if o and o.strip()]
        except ValueError:
            pass
        return [o.strip() for o in s.split(",") if o and o.strip()]
    return []

origins = _normalize_cors(getattr(settings, "CORS_ORIGINS", []))

if not origins:
    origins = ["http://localhost:3000", "http://127.0.0.1:3000"]

start_server.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "PUT", "PATCH", "POST"],
    allow_headers=["*"],
)

log.info("CORS habilitado para: %s", origins)

@start_server.get("/health", tags=["Health"])
def health():
    return {"status": "ok", "env": settings.APP_ENV, "provider": settings.WEATHER_PROVIDER}
