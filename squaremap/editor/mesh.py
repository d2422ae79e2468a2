"""Geometry for the 3D terrain view: mesh vertices, brush cursor cells, ray picking."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .colors import Color, overlay_color
from .layout import GridCoord, grid_disk
from .state import EditorState

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class Ray:
    """A ray in world space: x and z follow the grid, y is up."""

    position: Vec3
    direction: Vec3


@dataclass(frozen=True)
class Vertex:
    x: float
    y: float
    z: float
    color: Color


def terrain_vertices(state: EditorState, height_scale: float) -> list[Vertex]:
    """An unindexed triangle list, two counter-clockwise triangles per grid quad.

    Maps narrower or shorter than two cells have no quads and give no vertices.
    """
    w, h = state.width, state.height
    if w < 2 or h < 2:
        return []

    def vertex(gx: int, gy: int) -> Vertex:
        return Vertex(float(gx), state.get_h(gx, gy) * height_scale, float(gy),
                      overlay_color(state, gx, gy))

    out: list[Vertex] = []
    for y in range(h - 1):
        for x in range(w - 1):
            v0, v1 = vertex(x, y), vertex(x + 1, y)
            v2, v3 = vertex(x + 1, y + 1), vertex(x, y + 1)
            out.extend((v0, v3, v1, v1, v3, v2))
    return out


def brush_cursor_cells(state: EditorState, gx: int, gy: int) -> list[GridCoord]:
    """In-bounds cells the brush outline covers around (gx, gy); none if it is outside."""
    if not state.in_bounds(gx, gy):
        return []
    radius = max(1, state.brush_size)
    return [c for c in grid_disk(gx, gy, radius - 1) if state.in_bounds(c.x, c.y)]


def _hit(ray: Ray, plane_y: float) -> tuple[float, float] | None:
    px, py, pz = ray.position
    dx, dy, dz = ray.direction
    t = (plane_y - py) / dy
    if t < 0.0:
        return None
    return px + dx * t, pz + dz * t


def pick_terrain_grid(state: EditorState, ray: Ray,
                      height_scale: float) -> GridCoord | None:
    """The cell a ray hits, or None.

    The ray is first met with the y=0 plane, then refined once with the
    height of the cell found there.
    """
    if abs(ray.direction[1]) < 1e-6:
        return None
    rough = _hit(ray, 0.0)
    if rough is None:
        return None
    gx = min(max(math.floor(rough[0]), 0), state.width - 1)
    gy = min(max(math.floor(rough[1]), 0), state.height - 1)

    refined = _hit(ray, state.get_h(gx, gy) * height_scale)
    if refined is None:
        return None
    x, y = math.floor(refined[0]), math.floor(refined[1])
    if not state.in_bounds(x, y):
        return None
    return GridCoord(x, y)