"""Temperature, rainfall and hilliness derived from latitude and elevation."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from ..terrain import TerrainType
from ..tilemap import Hilliness, TileMap

_AVG_TEMP = ((0.0, 30.0), (0.1, 29.0), (0.5, 7.0), (1.0, -37.0))
_RAIN_LAT = ((0.0, 1.12), (25.0, 0.94), (45.0, 0.70), (70.0, 0.30),
             (80.0, 0.05), (90.0, 0.05))
MAX_RAINFALL_MM = 4000.0


@dataclass
class ClimateParams:
    """Settings for apply_climate."""

    temperature_offset_amp: float = 2.0
    sea_level: float = 0.35
    hill_threshold: float = 0.7
    mountain_threshold: float = 0.85
    impassable_threshold: float = 0.95
    rain_shadow_strength: float = 0.5


@dataclass
class ClimateResult:
    """Row-major per-tile temperature (Celsius) and rainfall (mm)."""

    temperature_celsius: list[float] = field(default_factory=list)
    rainfall_mm: list[float] = field(default_factory=list)


def _piecewise_linear(points: Sequence[tuple[float, float]], x: float) -> float:
    if x <= points[0][0]:
        return points[0][1]
    if x >= points[-1][0]:
        return points[-1][1]
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        if x <= x1:
            if x1 == x0:
                return y1
            return y0 + (x - x0) / (x1 - x0) * (y1 - y0)
    return points[-1][1]


def latitude_normalized(r: int, total_h: int) -> float:
    """0 at the middle row, 1 at the top and bottom rows."""
    half = max((total_h - 1) / 2.0, 1e-9)
    return abs(r - (total_h - 1) / 2.0) / half


def base_temperature_celsius(lat_norm: float) -> float:
    return _piecewise_linear(_AVG_TEMP, lat_norm)


def _temperature_reduction_at_elevation(elev: float, start: float = 0.05,
                                        end: float = 1.0,
                                        max_red: float = 40.0) -> float:
    if elev < start:
        return 0.0
    if end <= start:
        return max_red
    return max_red * min(1.0, (elev - start) / (end - start))


def compute_temperature_celsius(r: int, total_h: int, elev: float,
                                noise_offset: float = 0.0) -> float:
    lat = latitude_normalized(r, total_h)
    return (base_temperature_celsius(lat)
            - _temperature_reduction_at_elevation(elev) + noise_offset)


def _rainfall_squash(val: float) -> float:
    val = max(val, 0.0)
    if val < 0.12:
        val = (val + 0.12) / 2.0
        if val < 0.03:
            val = (val + 0.03) / 2.0
    return val


def compute_rainfall_mm(r: int, total_h: int, elev: float, base_noise: float) -> float:
    """Rainfall from a 0..1 noise value, drier at high latitude and elevation."""
    lat = latitude_normalized(r, total_h)
    val = base_noise * _piecewise_linear(_RAIN_LAT, lat * 90.0)
    dry_start, dry_end = 0.1, 1.0
    if elev > dry_start:
        t = min(1.0, (elev - dry_start) / (dry_end - dry_start))
        val *= max(0.0, 1.0 - t)
    val = _rainfall_squash(val)
    val = min(max(0.0, val ** 1.5), 0.999)
    return val * MAX_RAINFALL_MM


def compute_hilliness(elev: float, sea_level: float, hill_threshold: float,
                      mountain_threshold: float, impassable_threshold: float,
                      random01: float = -1.0) -> Hilliness:
    """Roughness from elevation; a random01 in [0, 1) can bump flat or hilly land."""
    if elev <= sea_level:
        return Hilliness.FLAT
    rolled = random01 >= 0.0
    if elev < hill_threshold:
        return Hilliness.SMALL_HILLS if rolled and random01 < 0.15 else Hilliness.FLAT
    if elev < mountain_threshold:
        return (Hilliness.LARGE_HILLS if rolled and random01 < 0.5
                else Hilliness.SMALL_HILLS)
    if elev < impassable_threshold:
        return Hilliness.MOUNTAINOUS
    return Hilliness.IMPASSABLE


def _apply_rain_shadow(rainfall: list[float], heightmap: Sequence[float],
                       width: int, height: int, hill_threshold: float,
                       strength: float, shadow_decay: float = 0.88) -> None:
    """Wind blows east: highlands get wetter, the land behind them drier."""
    span = max(1.0 - hill_threshold, 1e-9)
    for r in range(height):
        shadow = 0.0
        for idx in range(r * width, (r + 1) * width):
            elev = heightmap[idx]
            if elev > hill_threshold:
                barrier = (elev - hill_threshold) / span
                rainfall[idx] = min(MAX_RAINFALL_MM,
                                    rainfall[idx] * (1.0 + 0.4 * barrier * strength))
                shadow = min(shadow + barrier * strength, 2.5)
            elif shadow > 0.005:
                factor = max(0.2, 1.0 - shadow * 0.45 * strength)
                rainfall[idx] = max(0.0, rainfall[idx] * factor)
            shadow *= shadow_decay


def apply_climate(tile_map: TileMap, heightmap: Sequence[float],
                  rainfall_noise: Sequence[float], seed: int | None = None,
                  params: ClimateParams | None = None) -> ClimateResult:
    """Compute climate grids and set the hilliness of every tile."""
    p = params or ClimateParams()
    width, height = tile_map.width, tile_map.height
    rng = random.Random(seed)
    result = ClimateResult()

    for c, tile in tile_map.items():
        idx = c.y * width + c.x
        elev = heightmap[idx]
        offset = (rng.random() * 2.0 - 1.0) * p.temperature_offset_amp
        result.temperature_celsius.append(
            compute_temperature_celsius(c.y, height, elev, offset))
        result.rainfall_mm.append(
            compute_rainfall_mm(c.y, height, elev, rainfall_noise[idx]))
        if tile.terrain in (TerrainType.OCEAN, TerrainType.COAST):
            tile.hilliness = Hilliness.FLAT
        else:
            tile.hilliness = compute_hilliness(
                elev, p.sea_level, p.hill_threshold, p.mountain_threshold,
                p.impassable_threshold, rng.random())

    if p.rain_shadow_strength > 0.0:
        _apply_rain_shadow(result.rainfall_mm, heightmap, width, height,
                           p.hill_threshold, p.rain_shadow_strength)
    return result