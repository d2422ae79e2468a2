"""Clean-up passes run after classification: small islands, small lakes, coasts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..grid import Coord
from ..terrain import TerrainType, get_default_registry
from ..tilemap import TileMap
from .classify import expand_coast


@dataclass
class PostProcessResult:
    """How many tiles each clean-up pass changed."""

    islands_removed: int = 0
    lakes_filled: int = 0


def find_components(tile_map: TileMap,
                    predicate: Callable[[int], bool]) -> list[list[Coord]]:
    """4-connected groups of tiles whose terrain satisfies predicate.

    Components are found in row-major order of their first tile.
    """
    visited: set[Coord] = set()
    result: list[list[Coord]] = []
    for c, tile in tile_map.items():
        if c in visited:
            continue
        visited.add(c)
        if not predicate(tile.terrain):
            continue
        component: list[Coord] = []
        stack = [c]
        while stack:
            cur = stack.pop()
            component.append(cur)
            for n in tile_map.neighbors(cur):
                if n in visited:
                    continue
                visited.add(n)
                if predicate(tile_map.tile_at(n.x, n.y).terrain):
                    stack.append(n)
        result.append(component)
    return result


def _is_land(terrain: int) -> bool:
    return not get_default_registry().is_water(terrain)


def _is_water(terrain: int) -> bool:
    return get_default_registry().is_water(terrain)


def remove_small_islands(tile_map: TileMap, min_size: int) -> int:
    """Turn land components smaller than min_size into ocean; return tiles changed."""
    if min_size <= 1:
        return 0
    removed = 0
    for component in find_components(tile_map, _is_land):
        if len(component) < min_size:
            for c in component:
                tile_map.set_terrain(c, TerrainType.OCEAN)
            removed += len(component)
    return removed


def remove_small_lakes(tile_map: TileMap, max_size: int, fill: int) -> int:
    """Fill enclosed water bodies of at most max_size tiles; return tiles changed.

    Water touching the map edge is never filled.
    """
    if max_size < 1:
        return 0
    width, height = tile_map.width, tile_map.height
    filled = 0
    for component in find_components(tile_map, _is_water):
        if len(component) > max_size:
            continue
        if any(c.x in (0, width - 1) or c.y in (0, height - 1) for c in component):
            continue
        for c in component:
            tile_map.set_terrain(c, fill)
        filled += len(component)
    return filled


def relabel_coast(tile_map: TileMap, coast_depth: int) -> None:
    """Reset every coast tile to ocean and grow the coast band again."""
    for _, tile in tile_map.items():
        if tile.terrain == TerrainType.COAST:
            tile.terrain = TerrainType.OCEAN
    expand_coast(tile_map, coast_depth)


def post_process(tile_map: TileMap, island_min_size: int, lake_max_size: int,
                 coast_depth: int, lake_fill: int) -> PostProcessResult:
    """Remove small islands, fill small lakes, then relabel the coast."""
    result = PostProcessResult(
        islands_removed=remove_small_islands(tile_map, island_min_size),
        lakes_filled=remove_small_lakes(tile_map, lake_max_size, lake_fill),
    )
    relabel_coast(tile_map, coast_depth)
    return result