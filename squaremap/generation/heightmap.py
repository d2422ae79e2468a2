"""Fractal value-noise heightmaps with optional ridges and continent shapes."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Callable, Sequence

RIDGE_ANISOTROPY = 0.1
PLATE_SEED_XOR = 0x517CC1B7
DIRECTION_SEED_XOR = 0x9E3779B9
SHAPE_SEED_OFFSET = 0x1F2E3D4C

_DEG2RAD = 3.14159265 / 180.0

SHAPES = (
    "island", "archipelago", "pangaea", "continents",
    "ring_sea", "shattered_archipelago",
)


@dataclass
class HeightmapParams:
    """Noise, ridge and shape settings for generate_heightmap."""

    octaves: int = 4
    persistence: float = 0.5
    base_frequency: int = 4
    ridge_weight: float = 0.0
    ridge_mode: str = "plates"
    num_plates: int = 20
    plate_boundary_width: float = 0.05
    ridge_direction: float = 0.0
    ridge_direction_variation: float = 0.0
    ridge_power: float = 1.0
    ridge_multifractal_gain: float = 0.0
    shape: str = ""
    shape_strength: float = 0.85
    shape_params: dict[str, float] = field(default_factory=dict)
    shape_sea_level: float = 0.35


def _derived_rng(seed: int | None, derive: Callable[[int], int]) -> random.Random:
    if seed is None:
        return random.Random()
    return random.Random(derive(seed) & 0xFFFFFFFF)


def _smoothstep(t: float) -> float:
    return t * t * (3.0 - 2.0 * t)


def _bilinear(coarse: Sequence[float], gw: int, gh: int, x: float, y: float) -> float:
    x = max(0.0, min(x, float(gw - 1)))
    y = max(0.0, min(y, float(gh - 1)))
    x0, y0 = int(x), int(y)
    x1, y1 = min(x0 + 1, gw - 1), min(y0 + 1, gh - 1)
    fx, fy = _smoothstep(x - x0), _smoothstep(y - y0)
    top = coarse[y0 * gw + x0] * (1.0 - fx) + coarse[y0 * gw + x1] * fx
    bot = coarse[y1 * gw + x0] * (1.0 - fx) + coarse[y1 * gw + x1] * fx
    return top * (1.0 - fy) + bot * fy


@dataclass
class _PlateField:
    boundary_strength: list[float]
    cos_grid: list[float]
    sin_grid: list[float]


def _plate_field(width: int, height: int, num_plates: int,
                 boundary_width_pixels: float, rng: random.Random) -> _PlateField:
    """Voronoi plates: boundary closeness and the boundary direction per cell."""
    if num_plates < 2:
        raise ValueError("num_plates must be >= 2")
    margin = max(min(width, height) * 0.02, 1.0)
    hi_x = max(width - 1 - margin, margin + 1.0)
    hi_y = max(height - 1 - margin, margin + 1.0)
    sites = [(rng.uniform(margin, hi_x), rng.uniform(margin, hi_y))
             for _ in range(num_plates)]

    n = width * height
    strength = [0.0] * n
    cos_grid = [1.0] * n
    sin_grid = [0.0] * n
    inv_bw = 1.0 / boundary_width_pixels if boundary_width_pixels > 0.0 else 0.0

    for r in range(height):
        for q in range(width):
            d1_sq = d2_sq = 1e18
            i1 = i2 = 0
            for i, (sx, sy) in enumerate(sites):
                d = (q - sx) ** 2 + (r - sy) ** 2
                if d < d1_sq:
                    d2_sq, i2 = d1_sq, i1
                    d1_sq, i1 = d, i
                elif d < d2_sq:
                    d2_sq, i2 = d, i
            bd = (math.sqrt(d2_sq) - math.sqrt(d1_sq)) * 0.5
            idx = r * width + q
            if inv_bw > 0.0:
                t = 1.0 - bd * inv_bw
                if t > 0.0:
                    strength[idx] = t * t * (3.0 - 2.0 * t)
            vx = sites[i2][0] - sites[i1][0]
            vy = sites[i2][1] - sites[i1][1]
            vlen = math.hypot(vx, vy)
            if vlen >= 1e-9:
                cos_grid[idx] = -vy / vlen
                sin_grid[idx] = vx / vlen
    return _PlateField(strength, cos_grid, sin_grid)


def _blob_mask(width: int, height: int,
               centers: Sequence[tuple[float, float, float]],
               radius: float, exponent: float) -> list[float]:
    """Max over elliptic blobs of 1 - d**exponent, clamped at 0."""
    mask = [0.0] * (width * height)
    for r in range(height):
        for q in range(width):
            best = 0.0
            for cx, cy, ry in centers:
                dx = (q - cx) / radius
                dy = (r - cy) / ry
                best = max(best, 1.0 - math.hypot(dx, dy) ** exponent)
            mask[r * width + q] = best
    return mask


def _shape_mask(width: int, height: int, shape: str, rng: random.Random,
                params: dict[str, float]) -> list[float]:
    def get(key: str, default: float) -> float:
        return params.get(key, default)

    def get_int(key: str, default: int) -> int:
        return int(params[key]) if key in params else default

    if shape == "island":
        cx, cy = (width - 1) / 2.0, (height - 1) / 2.0
        rx, ry = max(cx, 1.0), max(cy, 1.0)
        return [max(0.0, 1.0 - math.hypot((q - cx) / rx, (r - cy) / ry) ** 1.4)
                for r in range(height) for q in range(width)]

    if shape == "archipelago":
        n = 3 + rng.randrange(4)
        radius = min(width, height) * 0.22
        centers = [(rng.uniform(0.15 * width, 0.85 * width),
                    rng.uniform(0.15 * height, 0.85 * height),
                    radius * 0.8) for _ in range(n)]
        return _blob_mask(width, height, centers, radius, 1.4)

    if shape == "pangaea":
        land_ratio = get("land_ratio", 0.55)
        cx, cy = (width - 1) / 2.0, (height - 1) / 2.0
        land_r = max(math.hypot(cx, cy) * land_ratio, 1.0)
        return [max(0.0, 1.0 - (math.hypot(q - cx, r - cy) / land_r) ** 1.3)
                for r in range(height) for q in range(width)]

    if shape == "continents":
        num_c = get_int("num_continents", 3)
        land_ratio = get("land_ratio", 0.4)
        blob_r = max(min(width, height) * 0.12,
                     math.sqrt(land_ratio * width * height / num_c) * 0.65)
        min_spacing = blob_r * 1.2
        margin = blob_r * 0.4
        centers: list[tuple[float, float, float]] = []
        attempt = 0
        while attempt < num_c * 40 and len(centers) < num_c:
            attempt += 1
            cx = rng.uniform(margin, width - 1 - margin)
            cy = rng.uniform(margin, height - 1 - margin)
            if all((cx - ox) ** 2 + (cy - oy) ** 2 >= min_spacing ** 2
                   for ox, oy, _ in centers):
                centers.append((cx, cy, blob_r * rng.uniform(0.6, 1.5)))
        while len(centers) < num_c:
            centers.append((rng.uniform(margin, width - 1 - margin),
                            rng.uniform(margin, height - 1 - margin), blob_r))
        return _blob_mask(width, height, centers, blob_r, 1.2)

    if shape == "ring_sea":
        land_ratio = get("land_ratio", 0.4)
        cx, cy = (width - 1) / 2.0, (height - 1) / 2.0
        min_half = min(cx, cy)
        ring_r = min_half * 0.55
        ring_w = max(min_half * (0.2 + land_ratio * 0.35), 1.0)
        return [max(0.0, 1.0 - (abs(math.hypot(q - cx, r - cy) - ring_r) / ring_w) ** 1.5)
                for r in range(height) for q in range(width)]

    if shape == "shattered_archipelago":
        num_islands = get_int("num_islands", 12)
        island_size = get("island_size", 0.08)
        radius = max(min(width, height) * island_size, 2.0)
        centers = [(rng.uniform(0.05 * width, 0.95 * width),
                    rng.uniform(0.05 * height, 0.95 * height),
                    radius * rng.uniform(0.7, 1.4)) for _ in range(num_islands)]
        return _blob_mask(width, height, centers, radius, 1.5)

    raise ValueError(f"unknown shape: {shape}")


def _direction_grids(width: int, height: int, seed: int | None,
                     p: HeightmapParams) -> tuple[list[float], list[float]]:
    """Slowly varying ridge directions for the global ridge mode."""
    dir_freq = max(2, p.base_frequency // 2)
    gw = gh = dir_freq + 1
    rng = _derived_rng(seed, lambda s: s ^ DIRECTION_SEED_XOR)
    coarse = [rng.random() for _ in range(gw * gh)]
    dxs = dir_freq / max(width - 1, 1)
    dys = dir_freq / max(height - 1, 1)
    cos_grid: list[float] = []
    sin_grid: list[float] = []
    for r in range(height):
        for q in range(width):
            dn = _bilinear(coarse, gw, gh, q * dxs, r * dys)
            local_dir = p.ridge_direction + (dn - 0.5) * p.ridge_direction_variation
            a = (90.0 - local_dir) * _DEG2RAD
            cos_grid.append(math.cos(a))
            sin_grid.append(math.sin(a))
    return cos_grid, sin_grid


def generate_heightmap(width: int, height: int, seed: int | None = None,
                       params: HeightmapParams | None = None) -> list[float]:
    """A row-major width*height list of heights in [0, 1]."""
    p = params or HeightmapParams()
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    if p.octaves <= 0:
        raise ValueError("octaves must be > 0")
    if not 0.0 < p.persistence <= 1.0:
        raise ValueError("persistence must be in (0, 1]")
    if p.base_frequency < 1:
        raise ValueError("base_frequency must be >= 1")
    if not 0.0 <= p.ridge_weight <= 1.0:
        raise ValueError("ridge_weight must be in [0, 1]")

    n = width * height
    rng = _derived_rng(seed, lambda s: s)
    grid = [0.0] * n
    total_weight = 0.0
    use_ridge = p.ridge_weight > 0.0

    cos_grid: list[float] | None = None
    sin_grid: list[float] | None = None
    gate: list[float] | None = None
    cos_a, sin_a = 1.0, 0.0

    if use_ridge:
        if p.ridge_mode == "plates":
            plate_rng = _derived_rng(seed, lambda s: s ^ PLATE_SEED_XOR)
            field_ = _plate_field(width, height, p.num_plates,
                                  p.plate_boundary_width * min(width, height), plate_rng)
            gate = field_.boundary_strength
            cos_grid, sin_grid = field_.cos_grid, field_.sin_grid
        elif p.ridge_direction_variation > 0.0:
            cos_grid, sin_grid = _direction_grids(width, height, seed, p)
        else:
            rad = (90.0 - p.ridge_direction) * _DEG2RAD
            cos_a, sin_a = math.cos(rad), math.sin(rad)

    use_multifractal = use_ridge and p.ridge_multifractal_gain > 0.0
    ridge_carry = [1.0] * n if use_multifractal else []

    for octave in range(p.octaves):
        freq = p.base_frequency * (1 << octave)
        weight = p.persistence ** octave
        total_weight += weight
        gw = gh = freq + 1
        coarse = [rng.random() for _ in range(gw * gh)]
        xs = freq / max(width - 1, 1)
        ys = freq / max(height - 1, 1)
        hx = hy = freq * 0.5
        for r in range(height):
            cy = r * ys
            for q in range(width):
                cx = q * xs
                raw = _bilinear(coarse, gw, gh, cx, cy)
                idx = r * width + q
                if use_ridge:
                    local_w = p.ridge_weight * (gate[idx] if gate is not None else 1.0)
                    if local_w > 0.0:
                        if cos_grid is not None and sin_grid is not None:
                            ca, sa = cos_grid[idx], sin_grid[idx]
                        else:
                            ca, sa = cos_a, sin_a
                        dx, dy = cx - hx, cy - hy
                        rx = dx * ca + dy * sa
                        ry = -dx * sa + dy * ca
                        raw_dir = _bilinear(coarse, gw, gh,
                                            rx * RIDGE_ANISOTROPY + hx, ry + hy)
                        fold = 1.0 - abs(2.0 * raw_dir - 1.0)
                        if p.ridge_power != 1.0:
                            fold = fold ** p.ridge_power
                        if use_multifractal:
                            fold *= ridge_carry[idx]
                            ridge_carry[idx] = min(1.0, fold * p.ridge_multifractal_gain)
                        raw = raw_dir * (1.0 - local_w) + fold * local_w
                grid[idx] += weight * raw

    grid = [v / total_weight for v in grid]

    if p.shape:
        shape_rng = _derived_rng(seed, lambda s: s + SHAPE_SEED_OFFSET)
        mask = _shape_mask(width, height, p.shape, shape_rng, p.shape_params)
        s, sl = p.shape_strength, p.shape_sea_level
        grid = [g * (1.0 - s) + m * (sl + g * (1.0 - sl)) * s
                for g, m in zip(grid, mask)]
    return grid