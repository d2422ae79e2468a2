"""Square-grid coordinates: neighbours, distances, lines, rings and spirals.

The y axis points down, so north is (0, -1). Direction indices are fixed:
0=E, 1=N, 2=W, 3=S, and direction i is opposite to (i + 2) % 4.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Coord:
    """An integer (x, y) cell position."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Coord) -> Coord:
        return Coord(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Coord) -> Coord:
        return Coord(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: int) -> Coord:
        return Coord(self.x * factor, self.y * factor)

    def neighbor(self, direction: int) -> Coord:
        """The adjacent cell in a direction; any integer wraps modulo 4."""
        return self + DIRECTIONS[direction % 4]

    def neighbors(self) -> tuple[Coord, Coord, Coord, Coord]:
        """The four adjacent cells in E, N, W, S order."""
        return tuple(self + d for d in DIRECTIONS)  # type: ignore[return-value]


DIRECTIONS: tuple[Coord, Coord, Coord, Coord] = (
    Coord(1, 0),
    Coord(0, -1),
    Coord(-1, 0),
    Coord(0, 1),
)


def grid_distance(a: Coord, b: Coord) -> int:
    """Manhattan distance: the fewest 4-connected steps from a to b."""
    return abs(a.x - b.x) + abs(a.y - b.y)


def grid_line(start: Coord, end: Coord) -> list[Coord]:
    """A 4-connected line from start to end, both included."""
    dx = abs(end.x - start.x)
    dy = abs(end.y - start.y)
    if dx == 0 and dy == 0:
        return [start]
    sx = 1 if end.x > start.x else -1
    sy = 1 if end.y > start.y else -1
    error = dx - dy
    x, y = start.x, start.y
    out = [Coord(x, y)]
    for _ in range(dx + dy):
        if 2 * error > -dy:
            error -= dy
            x += sx
        else:
            error += dx
            y += sy
        out.append(Coord(x, y))
    return out


_RING_SIDES = ((1, -1), (1, 1), (-1, 1), (-1, -1))


def grid_ring(center: Coord, radius: int) -> list[Coord]:
    """Cells at exactly Manhattan distance radius, starting at the left vertex."""
    if radius < 0:
        raise ValueError("radius must be >= 0")
    if radius == 0:
        return [center]
    out: list[Coord] = []
    x, y = center.x - radius, center.y
    for step_x, step_y in _RING_SIDES:
        for _ in range(radius):
            out.append(Coord(x, y))
            x += step_x
            y += step_y
    return out


def grid_spiral(center: Coord, max_radius: int) -> list[Coord]:
    """Rings 0..max_radius joined from the centre outwards."""
    if max_radius < 0:
        raise ValueError("max_radius must be >= 0")
    out = [center]
    for radius in range(1, max_radius + 1):
        out.extend(grid_ring(center, radius))
    return out