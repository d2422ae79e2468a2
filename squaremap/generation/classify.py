"""Turn a heightmap into ocean, coast and plains tiles."""

from __future__ import annotations

from typing import Sequence

from ..terrain import TerrainType
from ..tilemap import TileMap


def heightmap_to_tilemap(heightmap: Sequence[float], width: int, height: int,
                         sea_level: float, coast_depth: int = 1) -> TileMap:
    """Tiles at or below sea_level become ocean, the rest plains; then coast is grown."""
    if len(heightmap) != width * height:
        raise ValueError("heightmap size mismatch")
    if not 0.0 <= sea_level <= 1.0:
        raise ValueError("sea_level must be in [0, 1]")
    if coast_depth < 0:
        raise ValueError("coast_depth must be >= 0")

    tile_map = TileMap(width, height, TerrainType.PLAINS)
    for c, tile in tile_map.items():
        h = heightmap[c.y * width + c.x]
        if h <= sea_level:
            tile.terrain = TerrainType.OCEAN
            tile.water_depth = sea_level - h
    expand_coast(tile_map, coast_depth)
    return tile_map


def expand_coast(tile_map: TileMap, coast_depth: int) -> None:
    """Mark ocean tiles next to non-ocean tiles as coast, coast_depth times."""
    if coast_depth < 0:
        raise ValueError("coast_depth must be >= 0")
    for _ in range(coast_depth):
        to_coast = [
            c for c, tile in tile_map.items()
            if tile.terrain == TerrainType.OCEAN
            and any(tile_map.tile_at(n.x, n.y).terrain != TerrainType.OCEAN
                    for n in tile_map.neighbors(c))
        ]
        if not to_coast:
            return
        for c in to_coast:
            tile_map.set_terrain(c, TerrainType.COAST)