# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from fastapi import APIRouter
from weatherdash.api.v1 import health
from weatherdash.api.v1 import preferences
from weatherdash.api.v1 import weather as weather_api

"""
Roteador principal da API v1.


- Agrega e inclui sub-routers (weather, preferences, health).
- Centraliza prefixos/tags; importado por `main.py` como `/api/v1`.
"""

router_v1 = APIRouter(tags=["v1"])

# Sub-rotas
router_v1.include_router(weather_api.router, prefix="", tags=["weather"])
router_v1.include_router(preferences.router, prefix="", tags=["preferences"])
router_v1.include_router(health.router, prefix="", tags=["health"])
