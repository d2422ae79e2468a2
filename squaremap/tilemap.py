"""Rectangular maps of tiles stored row-major."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterator

from .grid import DIRECTIONS, Coord
from .terrain import TerrainType, get_default_registry


class Hilliness(IntEnum):
    """Roughness of a land tile."""

    FLAT = 0
    SMALL_HILLS = 1
    LARGE_HILLS = 2
    MOUNTAINOUS = 3
    IMPASSABLE = 4


@dataclass
class Tile:
    """One map cell. `rivers` packs the edge flow slots owned by this tile."""

    terrain: int = TerrainType.OCEAN
    water_depth: float = 0.0
    rivers: int = 0
    feature_id: int = -1
    hilliness: Hilliness = Hilliness.FLAT


class TileMap:
    """A width x height grid of tiles."""

    def __init__(self, width: int, height: int,
                 default_terrain: int = TerrainType.OCEAN) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self._width = width
        self._height = height
        self._tiles = [Tile(terrain=default_terrain) for _ in range(width * height)]
        self.features: Any = None

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def __len__(self) -> int:
        return len(self._tiles)

    def in_bounds(self, c: Coord) -> bool:
        return 0 <= c.x < self._width and 0 <= c.y < self._height

    def get(self, c: Coord) -> Tile | None:
        """The tile at c, or None outside the map."""
        if not self.in_bounds(c):
            return None
        return self._tiles[c.y * self._width + c.x]

    def tile_at(self, x: int, y: int) -> Tile:
        """The tile at (x, y); raises IndexError outside the map."""
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"({x}, {y}) out of bounds")
        return self._tiles[y * self._width + x]

    def set_terrain(self, c: Coord, terrain: int) -> None:
        if not self.in_bounds(c):
            raise IndexError("Coord out of bounds")
        self._tiles[c.y * self._width + c.x].terrain = terrain

    def neighbors(self, c: Coord) -> list[Coord]:
        """In-bounds neighbours in E, N, W, S order."""
        return [n for n in (c + d for d in DIRECTIONS) if self.in_bounds(n)]

    def passable_neighbors(self, c: Coord) -> list[Coord]:
        return [n for n in self.neighbors(c)
                if is_passable(self._tiles[n.y * self._width + n.x].terrain)]

    def fill(self, terrain: int) -> None:
        for tile in self._tiles:
            tile.terrain = terrain

    def items(self) -> Iterator[tuple[Coord, Tile]]:
        """Yield (coord, tile) pairs in row-major order."""
        for index, tile in enumerate(self._tiles):
            y, x = divmod(index, self._width)
            yield Coord(x, y), tile


def terrain_cost(terrain_id: int) -> float:
    return get_default_registry().move_cost(terrain_id)


def is_passable(terrain_id: int) -> bool:
    return get_default_registry().is_passable(terrain_id)