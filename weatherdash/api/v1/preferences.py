# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel
from weatherdash.api.deps import get_preferences
from weatherdash.services.preferences import (
    TOGGLES,
    PreferencesService,
    PreferencesUpdate,
    Theme,
    WeatherPreferences,
)

"""
Preferências de exibição e tema.


- `GET/PATCH /preferences`, `POST /preferences/toggle/{field}`.
- `GET/PUT /theme`.
"""

router = APIRouter()


class ThemeIn(BaseModel):
    theme: Theme


class ThemeOut(BaseModel):
    theme: Theme


@router.get("/preferences", response_model=WeatherPreferences)
async def get_preferences_route(service: PreferencesService = Depends(get_preferences)) -> Any:
    return await service.get()


@router.patch("/preferences", response_model=WeatherPreferences)
async def update_preferences(
    payload: PreferencesUpdate,
    service: PreferencesService = Depends(get_preferences),
) -> Any:
    return await service.update(payload)


@router.post("/preferences/toggle/{field}", response_model=WeatherPreferences)
async def toggle_preference(
    field: str = Path(..., description="temperature_unit | wind_speed_unit | time_format | pressure_unit"),
    service: PreferencesService = Depends(get_preferences),
) -> Any:
    if field not in TOGGLES:
        raise HTTPException(status_code=404, detail=f"Unknown preference: {field}")
    return await service.toggle(field)


@router.get("/theme", response_model=ThemeOut)
async def get_theme(service: PreferencesService = Depends(get_preferences)) -> Any:
    return {"theme": await service.get_theme()}


@router.put("/theme", response_model=ThemeOut)
async def set_theme(payload: ThemeIn, service: PreferencesService = Depends(get_preferences)) -> Any:
    return {"theme": await service.set_theme(payload.theme)}
