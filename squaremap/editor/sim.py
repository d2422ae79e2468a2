"""Editor simulations: flood fill for the ocean mask, a simple climate, and export."""

from __future__ import annotations

import json
import math
from collections import deque
from pathlib import Path

from ..generation.biome import apply_biomes
from ..generation.classify import heightmap_to_tilemap
from ..terrain import get_default_registry
from .state import EditorState

DEFAULT_EXPORT_PATH = "exported_world_square.json"

_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))
_CLIMATE_PASSES = 4


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _flood_seeds(state: EditorState) -> list[tuple[int, int]]:
    """Manual water sources if there are any, else low cells on the border."""
    if state.water_sources:
        return [(g.x, g.y) for g in state.water_sources if state.in_bounds(g.x, g.y)]
    w, h = state.width, state.height
    border = [(x, y) for x in range(w) for y in (0, h - 1)]
    border += [(x, y) for y in range(1, h - 1) for x in (0, w - 1)]
    return [(x, y) for x, y in border if state.get_h(x, y) <= state.sea_level]


def run_flood_fill(state: EditorState) -> None:
    """Mark every cell at or below sea level reachable from the seeds as ocean."""
    w = state.width
    visited = [False] * (w * state.height)
    queue: deque[tuple[int, int]] = deque()
    for x, y in _flood_seeds(state):
        idx = y * w + x
        if not visited[idx]:
            visited[idx] = True
            queue.append((x, y))

    while queue:
        x, y = queue.popleft()
        for dx, dy in _DIRECTIONS:
            nx, ny = x + dx, y + dy
            if not state.in_bounds(nx, ny):
                continue
            ni = ny * w + nx
            if visited[ni]:
                continue
            if state.get_h(nx, ny) <= state.sea_level:
                visited[ni] = True
                queue.append((nx, ny))
    state.ocean_mask = visited


def _temperature(state: EditorState) -> list[float]:
    w, h = state.width, state.height
    lat_scale = state.sun_angle / 90.0
    result = [0.0] * (w * h)
    for y in range(h):
        lat_frac = y / (h - 1) if h > 1 else 0.5
        lat_heat = 1.0 - abs(lat_frac * 2.0 - 1.0) * lat_scale
        for x in range(w):
            value = lat_heat - state.get_h(x, y) * 0.45
            result[y * w + x] = min(1.0, max(0.0, value))
    return result


def run_climate(state: EditorState) -> None:
    """Fill temperature and rainfall (both 0..1) from latitude, wind and terrain.

    The ocean mask should be up to date; run_flood_fill sets it.
    """
    w, h = state.width, state.height
    state.temperature = _temperature(state)

    wind = math.radians(state.wind_dir)
    wdx = math.sin(wind)
    wdy = -math.cos(wind)

    ocean = state.ocean_mask
    rainfall = [1.0 if wet else 0.0 for wet in ocean]

    x_order = list(range(w))
    y_order = list(range(h))
    if wdx < 0.0:
        x_order.reverse()
    if wdy < 0.0:
        y_order.reverse()

    keep = 1.0 - state.evaporation * 0.08
    src_dx = -_round_half_away(wdx)
    src_dy = -_round_half_away(wdy)

    for _ in range(_CLIMATE_PASSES):
        for y in y_order:
            for x in x_order:
                idx = y * w + x
                if ocean[idx]:
                    rainfall[idx] = 1.0
                    continue
                sx, sy = x + src_dx, y + src_dy
                incoming = shadow = 0.0
                if state.in_bounds(sx, sy):
                    incoming = rainfall[sy * w + sx]
                    shadow = max(0.0, state.get_h(x, y) - state.get_h(sx, sy)) * 4.0
                moisture = max(0.0, incoming * keep - shadow)
                rainfall[idx] = max(rainfall[idx], moisture)
    state.rainfall = rainfall


def _rounded(values: list[float]) -> list[float]:
    return [round(v, 4) for v in values]


def export_world(state: EditorState, path: str | Path = DEFAULT_EXPORT_PATH) -> Path:
    """Classify the heightmap into terrain and biomes and write it as JSON.

    Returns the path written. Raises ValueError if the map cannot be classified.
    """
    heightmap = state.heightmap
    tile_map = heightmap_to_tilemap(heightmap, state.width, state.height,
                                    state.sea_level, 1)
    if state.rainfall and len(state.rainfall) == len(heightmap):
        moisture = list(state.rainfall)
    else:
        moisture = [0.5] * len(heightmap)
    apply_biomes(tile_map, heightmap, moisture, state.sea_level)

    registry = get_default_registry()
    document: dict[str, object] = {
        "width": state.width,
        "height": state.height,
        "sea_level": round(state.sea_level, 4),
        "heightmap": _rounded(heightmap),
        "moisture": _rounded(moisture),
    }
    if state.temperature:
        document["temperature"] = _rounded(state.temperature)
    if state.rainfall:
        document["rainfall"] = _rounded(state.rainfall)
    document["terrain"] = [registry.get(tile.terrain).name for _, tile in tile_map.items()]

    out = Path(path)
    with out.open("w", encoding="utf-8") as handle:
        json.dump(document, handle, separators=(",", ":"))
        handle.write("\n")
    return out