"""Pixel layout helpers for drawing a square grid with y pointing down."""

from __future__ import annotations

import math
from typing import NamedTuple


class GridCoord(NamedTuple):
    """An editor cell position."""

    x: int
    y: int


def grid_to_pixel(x: int, y: int, cell_size: float) -> tuple[float, float]:
    """Pixel centre of cell (x, y)."""
    half = cell_size * 0.5
    return (x * cell_size + half, y * cell_size + half)


def pixel_to_grid(px: float, py: float, cell_size: float) -> GridCoord:
    """The cell whose square [x*size, (x+1)*size) holds the pixel."""
    return GridCoord(math.floor(px / cell_size), math.floor(py / cell_size))


def grid_corners(center: tuple[float, float],
                 cell_size: float) -> tuple[tuple[float, float], ...]:
    """Corners of a cell in NE, NW, SW, SE order."""
    cx, cy = center
    h = cell_size * 0.5
    return (
        (cx + h, cy - h),
        (cx - h, cy - h),
        (cx - h, cy + h),
        (cx + h, cy + h),
    )


def grid_chebyshev(x1: int, y1: int, x2: int, y2: int) -> int:
    return max(abs(x1 - x2), abs(y1 - y2))


def grid_manhattan(x1: int, y1: int, x2: int, y2: int) -> int:
    return abs(x1 - x2) + abs(y1 - y2)


def grid_line(x0: int, y0: int, x1: int, y1: int) -> list[GridCoord]:
    """A 4-connected line between two cells, both ends included."""
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    if dx == 0 and dy == 0:
        return [GridCoord(x0, y0)]
    sx = 1 if x1 > x0 else -1
    sy = 1 if y1 > y0 else -1
    error = dx - dy
    x, y = x0, y0
    out = [GridCoord(x, y)]
    for _ in range(dx + dy):
        if 2 * error > -dy:
            error -= dy
            x += sx
        else:
            error += dx
            y += sy
        out.append(GridCoord(x, y))
    return out


def grid_disk(cx: int, cy: int, radius: int) -> list[GridCoord]:
    """Cells with Chebyshev distance <= radius; a negative radius gives the centre."""
    if radius < 0:
        return [GridCoord(cx, cy)]
    span = range(-radius, radius + 1)
    return [GridCoord(cx + dx, cy + dy) for dy in span for dx in span]


_RING_SIDES = ((1, -1), (1, 1), (-1, 1), (-1, -1))


def grid_diamond_ring(cx: int, cy: int, radius: int) -> list[GridCoord]:
    """Cells with Manhattan distance == radius; radius <= 0 gives the centre."""
    if radius <= 0:
        return [GridCoord(cx, cy)]
    out: list[GridCoord] = []
    x, y = cx - radius, cy
    for step_x, step_y in _RING_SIDES:
        for _ in range(radius):
            out.append(GridCoord(x, y))
            x += step_x
            y += step_y
    return out


def canvas_pixel_size(width: int, height: int, cell_size: float,
                      margin: float = 30.0) -> tuple[float, float]:
    """Pixel size needed to hold the whole map plus a margin on each side."""
    return (width * cell_size + margin * 2.0, height * cell_size + margin * 2.0)