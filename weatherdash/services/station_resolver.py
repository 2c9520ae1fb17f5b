# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
import logging
from dataclasses import dataclass
from weatherdash.clients.weather_gov import WeatherGovClient
from weatherdash.core.errors import NoStationsFound, UnsupportedLocation
from weatherdash.services.validation import validate_payload

"""
Resolução ponto → célula de grade → estação (somente caminho weather.gov).


- `resolve_point(lat, lon)` → `GridPoint` (gridId, gridX, gridY, timezone, cidade, estado).
- `nearest_station(grid)` → identificador da primeira estação (a API já ordena por distância).
- Sem retries aqui; a política de retry pertence a quem chama.
"""

log = logging.getLogger("weather.gov")


@dataclass(frozen=True)
class GridPoint:
    lat: float
    lon: float
    grid_id: str
    grid_x: int
    grid_y: int
    timezone: str
    city: str
    region: str


class StationResolver:
    def __init__(self, client: WeatherGovClient) -> None:
        self._client = client

    async def resolve_point(self, lat: float, lon: float) -> GridPoint:
        """
        Erros:
          - UnsupportedLocation: coordenadas inválidas ou fora da cobertura do NWS.
          - ValidationError: resposta `points` malformada.
        """
        if not (-90.0 <= lat <= 90.0) or not (-180.0 <= lon <= 180.0):
            raise UnsupportedLocation(f"invalid coordinates: {lat},{lon}")

        point = validate_payload(await self._client.point(lat, lon), "gov-point")
        props = point.properties
        rel = props.relativeLocation.properties
        grid = GridPoint(
            lat=lat,
            lon=lon,
            grid_id=props.gridId,
            grid_x=props.gridX,
            grid_y=props.gridY,
            timezone=props.timeZone,
            city=rel.city,
            region=rel.state,
        )
        log.info("weather_point_resolved", extra={"grid": f"{grid.grid_id}/{grid.grid_x},{grid.grid_y}", "tz": grid.timezone})
        return grid

    async def nearest_station(self, grid: GridPoint) -> str:
        payload = validate_payload(
            await self._client.stations(grid.grid_id, grid.grid_x, grid.grid_y), "gov-stations"
        )
        if not payload.features:
            raise NoStationsFound(f"No observation stations for grid {grid.grid_id}/{grid.grid_x},{grid.grid_y}")
        return payload.features[0].properties.stationIdentifier
