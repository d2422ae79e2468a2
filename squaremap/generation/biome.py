"""Assign land biomes from elevation, latitude and moisture."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..terrain import TerrainType
from ..tilemap import TileMap

_WATER = (TerrainType.OCEAN, TerrainType.COAST, TerrainType.LAKE)


@dataclass
class BiomeParams:
    """Thresholds for the biome classifier; temperatures are normalised 0..1."""

    mountain_threshold: float = 0.85
    hill_threshold: float = 0.7
    elevation_temp_factor: float = 0.5
    snow_temp: float = 0.15
    tundra_temp: float = 0.3
    hot_temp: float = 0.7
    dry_moisture: float = 0.3
    wet_moisture: float = 0.6


def _pick(moist: float, p: BiomeParams, dry: int, mid: int) -> int:
    if moist < p.dry_moisture:
        return dry
    if moist > p.wet_moisture:
        return TerrainType.FOREST
    return mid


def apply_biomes(tile_map: TileMap, heightmap: Sequence[float],
                 moisture: Sequence[float], sea_level: float,
                 params: BiomeParams | None = None) -> None:
    """Replace the terrain of every land tile with a biome; water is left alone."""
    p = params or BiomeParams()
    width, height = tile_map.width, tile_map.height
    half = max((height - 1) / 2.0, 1e-9)
    span = max(1.0 - sea_level, 1e-9)

    for c, tile in tile_map.items():
        if tile.terrain in _WATER:
            continue
        idx = c.y * width + c.x
        elev = heightmap[idx]
        if elev > p.mountain_threshold:
            tile.terrain = TerrainType.MOUNTAIN
            continue
        if elev > p.hill_threshold:
            tile.terrain = TerrainType.HILL
            continue

        latitude = abs(c.y - (height - 1) / 2.0) / half
        elev_above_sea = max(0.0, elev - sea_level) / span
        temp = min(1.0, max(0.0, 1.0 - latitude - p.elevation_temp_factor * elev_above_sea))
        moist = moisture[idx]

        if temp < p.snow_temp:
            tile.terrain = TerrainType.SNOW
        elif temp < p.tundra_temp:
            tile.terrain = TerrainType.TUNDRA
        elif temp >= p.hot_temp:
            tile.terrain = _pick(moist, p, TerrainType.DESERT, TerrainType.PLAINS)
        else:
            tile.terrain = _pick(moist, p, TerrainType.PLAINS, TerrainType.GRASSLAND)