"""Sculpting tools: gaussian brush, radial ridge/rift stamps, water sources."""

from __future__ import annotations

import math
import random

from .layout import GridCoord, grid_disk
from .state import EditorState

_MASK32 = 0xFFFFFFFF
_TAU = 2.0 * math.pi


class ToolRng:
    """Random source shared by the tools across strokes."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def reseed(self, value: int) -> None:
        self._random.seed(value)

    def uniform_int(self, lo: int, hi: int) -> int:
        """An integer in [lo, hi]; swapped bounds are accepted."""
        if hi < lo:
            lo, hi = hi, lo
        return self._random.randint(lo, hi)

    def uniform_float(self, lo: float, hi: float) -> float:
        if hi < lo:
            lo, hi = hi, lo
        return self._random.uniform(lo, hi)


def tile_hash(x: int, y: int) -> float:
    """A stable pseudo-random value in [0, 1] for a cell."""
    v = (x * 1664525 + y * 1013904223) & _MASK32
    v ^= v >> 16
    v = (v * 0x45D9F3B) & _MASK32
    v ^= v >> 16
    return (v & 0xFFFF) / 65535.0


def _gaussian(dist: float, radius: float) -> float:
    if radius <= 0.0:
        return 1.0
    n = dist / (radius / 2.2)
    return math.exp(-0.5 * n * n)


def apply_brush(state: EditorState, x: int, y: int, delta: float) -> None:
    """Add delta at (x, y) with a gaussian falloff over a round brush."""
    radius = max(1, state.brush_size)
    for cell in grid_disk(x, y, radius):
        if not state.in_bounds(cell.x, cell.y):
            continue
        dist = math.hypot(cell.x - x, cell.y - y)
        if dist > radius + 0.5:
            continue
        state.add_h(cell.x, cell.y, delta * _gaussian(dist, float(radius)))


def _angle_diff(a: float, b: float) -> float:
    """Absolute difference of two angles, in [0, pi]."""
    d = math.fmod((a - b) + math.pi, _TAU)
    if d < 0.0:
        d += _TAU
    return abs(d - math.pi)


def _spoke_count(state: EditorState, rng: ToolRng) -> int:
    if not state.brush_spokes_rand:
        return state.brush_spokes
    lo = min(state.brush_spokes_min, state.brush_spokes_max)
    hi = max(state.brush_spokes_min, state.brush_spokes_max)
    return rng.uniform_int(lo, hi)


def _wheel_angle(state: EditorState, rng: ToolRng) -> float:
    if state.brush_wheel_rand:
        lo = min(state.brush_wheel_min, state.brush_wheel_max)
        hi = max(state.brush_wheel_min, state.brush_wheel_max)
        degrees = rng.uniform_float(lo, hi) if hi > lo else lo
    else:
        degrees = max(0.0, state.brush_wheel_angle)
    return math.radians(degrees)


def _apply_radial_stamp(state: EditorState, cx: int, cy: int, sign: float,
                        rng: ToolRng) -> None:
    radius = max(1, state.brush_size)
    strength = state.brush_strength * 2.5
    chaos = state.brush_chaos
    falloff = state.brush_falloff
    invert = state.brush_spokes_invert

    n_spokes = _spoke_count(state, rng)
    wheel = _wheel_angle(state, rng)

    spoke_angles: list[float] = []
    half_w = 0.0
    if n_spokes > 0:
        jitter = math.radians(state.brush_spoke_jitter)
        inc = _TAU / n_spokes
        half_w = inc * 0.35
        for i in range(n_spokes):
            angle = i * inc + wheel
            if jitter > 0.0:
                angle += rng.uniform_float(-jitter, jitter)
            spoke_angles.append(angle)

    max_reach = radius * (1.0 + 0.6 * chaos)
    if spoke_angles:
        max_reach = max(max_reach, radius * 2.0)
    search_r = math.ceil(max_reach) + 1

    for cell in grid_disk(cx, cy, search_r):
        if not state.in_bounds(cell.x, cell.y):
            continue
        dx = float(cell.x - cx)
        dy = float(cell.y - cy)
        dist = math.hypot(dx, dy)

        if chaos > 0.0:
            noise = tile_hash(cell.x, cell.y)
            eff_radius = max(0.5, radius * (1.0 + chaos * (noise * 2.0 - 1.0) * 0.55))
        else:
            eff_radius = float(radius)
        t = max(0.0, 1.0 - dist / eff_radius)
        base_weight = t ** falloff if t > 0.0 else 0.0

        spoke_w = 0.0
        if spoke_angles and dist > 0.0:
            tile_angle = math.atan2(dy, dx)
            min_diff = min(min(_angle_diff(tile_angle, sa) for sa in spoke_angles),
                           math.pi)
            if min_diff < half_w:
                spoke_cos = math.cos(min_diff / half_w * math.pi * 0.5)
                spoke_rad = max(0.0, 1.0 - dist / (radius * 2.0))
                spoke_w = spoke_cos * spoke_cos * spoke_rad

        effective = base_weight - spoke_w if invert else max(base_weight, spoke_w)
        if abs(effective) < 1e-6:
            continue
        state.add_h(cell.x, cell.y, sign * strength * effective)


def apply_ridge_stamp(state: EditorState, x: int, y: int, rng: ToolRng) -> None:
    """Raise a radial stamp, with optional spokes, centred on (x, y)."""
    _apply_radial_stamp(state, x, y, 1.0, rng)


def apply_rift_stamp(state: EditorState, x: int, y: int, rng: ToolRng) -> None:
    """Lower a radial stamp, with optional spokes, centred on (x, y)."""
    _apply_radial_stamp(state, x, y, -1.0, rng)


def toggle_water_source(state: EditorState, x: int, y: int) -> None:
    """Add a water source at (x, y), or remove it if one is already there."""
    point = GridCoord(x, y)
    if point in state.water_sources:
        state.water_sources.remove(point)
    else:
        state.water_sources.append(point)