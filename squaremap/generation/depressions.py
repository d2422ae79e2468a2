"""Priority-flood filling of closed depressions, which become lakes."""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Sequence

from ..grid import Coord

_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))
_EPS = 1e-9


@dataclass
class DepressionResult:
    """The filled heightmap and the land tiles that the filling raised."""

    filled: list[float] = field(default_factory=list)
    lake_tiles: list[Coord] = field(default_factory=list)


def fill_depressions(heightmap: Sequence[float], width: int, height: int,
                     sea_level: float) -> DepressionResult:
    """Raise every cell to the lowest spill height reachable from the edge or the sea."""
    if len(heightmap) != width * height:
        raise ValueError("heightmap size mismatch")
    filled = list(heightmap)
    processed = [False] * (width * height)
    heap: list[tuple[float, int, int]] = []

    def push(y: int, x: int) -> None:
        idx = y * width + x
        if not processed[idx]:
            processed[idx] = True
            heapq.heappush(heap, (heightmap[idx], y, x))

    for x in range(width):
        push(0, x)
        push(height - 1, x)
    for y in range(1, height - 1):
        push(y, 0)
        push(y, width - 1)
    for idx, h in enumerate(heightmap):
        if h <= sea_level:
            push(*divmod(idx, width))

    while heap:
        fill_h, y, x = heapq.heappop(heap)
        filled[y * width + x] = fill_h
        for dx, dy in _OFFSETS:
            nx, ny = x + dx, y + dy
            if not (0 <= nx < width and 0 <= ny < height):
                continue
            ni = ny * width + nx
            if processed[ni]:
                continue
            new_fill = max(heightmap[ni], fill_h)
            processed[ni] = True
            filled[ni] = new_fill
            heapq.heappush(heap, (new_fill, ny, nx))

    lakes = [
        Coord(idx % width, idx // width)
        for idx, h in enumerate(heightmap)
        if h > sea_level and filled[idx] > h + _EPS
    ]
    return DepressionResult(filled=filled, lake_tiles=lakes)