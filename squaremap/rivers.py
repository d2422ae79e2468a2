"""River storage on tile edges and river network generation.

Each tile owns two edge slots packed into ``Tile.rivers``: slot 0 is its
east edge and slot 1 its north edge. The west and south edges of a tile
belong to its west and south neighbours respectively.

Generation works from a heightmap and rainfall: coastal water tiles become
river mouths, a reverse Dijkstra from the mouths builds a downstream tree,
flow is accumulated up the tree with evaporation, and rivers are painted
upstream from mouths whose inflow is large enough.
"""

from __future__ import annotations

import heapq
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence

from .grid import DIRECTIONS, Coord, grid_distance
from .terrain import get_default_registry
from .tilemap import TileMap

RIVER_BITS = 8
RIVER_MASK = (1 << RIVER_BITS) - 1
RIVER_MAX_STRENGTH = RIVER_MASK

# Corner indices NE=0, NW=1, SW=2, SE=3 joined by the edge in each direction.
EDGE_CORNERS: tuple[tuple[int, int], ...] = ((0, 3), (0, 1), (1, 2), (2, 3))

LOG_STRENGTH_SCALE = 45.0
CREEK_THRESHOLD = 80
LARGE_RIVER_THRESHOLD = 160


class RiverClass(Enum):
    """Size class of a river edge."""

    CREEK = "creek"
    RIVER = "river"
    LARGE_RIVER = "large_river"


@dataclass
class RiverGenParams:
    """Tuning knobs for river generation."""

    min_sea_size: int = 1
    min_seed_spacing: int = 1
    rainfall_scale: float = 1.0
    evaporation_scale: float = 1.0
    spawn_flow_threshold: float = 600.0
    degrade_threshold: float = 300.0
    branch_flow_threshold: float = 400.0
    branch_chance: float = 0.5
    flow_strength_scale: float = 0.01


def classify_river_strength(strength: int) -> RiverClass:
    if strength < CREEK_THRESHOLD:
        return RiverClass.CREEK
    if strength < LARGE_RIVER_THRESHOLD:
        return RiverClass.RIVER
    return RiverClass.LARGE_RIVER


# ── storage ────────────────────────────────────────────────────────────────

def _edge_owner(c: Coord, direction: int) -> tuple[Coord, int]:
    """The tile owning the edge of c in a direction, and its slot there."""
    if not 0 <= direction < 4:
        raise ValueError(f"direction must be in 0..3, got {direction}")
    if direction < 2:
        return c, direction
    return c + DIRECTIONS[direction], direction - 2


def _read_slot(rivers: int, slot: int) -> int:
    return (rivers >> (slot * RIVER_BITS)) & RIVER_MASK


def _write_slot(rivers: int, slot: int, value: int) -> int:
    value = max(0, min(RIVER_MAX_STRENGTH, value))
    shift = slot * RIVER_BITS
    return (rivers & ~(RIVER_MASK << shift)) | (value << shift)


def get_river_strength(tile_map: TileMap, c: Coord, direction: int) -> int:
    """Flow on an edge; edges whose owner lies off the map read as 0."""
    owner, slot = _edge_owner(c, direction)
    tile = tile_map.get(owner)
    return 0 if tile is None else _read_slot(tile.rivers, slot)


def set_river_strength(tile_map: TileMap, c: Coord, direction: int,
                       strength: int) -> None:
    """Store a flow, clamped to 0..RIVER_MAX_STRENGTH; off-map edges are ignored."""
    owner, slot = _edge_owner(c, direction)
    tile = tile_map.get(owner)
    if tile is not None:
        tile.rivers = _write_slot(tile.rivers, slot, strength)


def add_river_flow(tile_map: TileMap, c: Coord, direction: int, amount: int) -> None:
    owner, slot = _edge_owner(c, direction)
    tile = tile_map.get(owner)
    if tile is not None:
        tile.rivers = _write_slot(tile.rivers, slot,
                                  _read_slot(tile.rivers, slot) + amount)


def has_river_edge(tile_map: TileMap, c: Coord, direction: int) -> bool:
    return get_river_strength(tile_map, c, direction) > 0


def set_river_edge(tile_map: TileMap, c: Coord, direction: int, value: bool) -> None:
    set_river_strength(tile_map, c, direction, 1 if value else 0)


def iter_river_edges(tile_map: TileMap) -> Iterator[tuple[Coord, int, int]]:
    """Yield (owner coord, slot, strength) for every edge carrying flow."""
    for c, tile in tile_map.items():
        if not tile.rivers:
            continue
        for slot in (0, 1):
            strength = _read_slot(tile.rivers, slot)
            if strength > 0:
                yield c, slot, strength


# ── generation helpers ─────────────────────────────────────────────────────

def _is_water(tile_map: TileMap, c: Coord) -> bool:
    tile = tile_map.get(c)
    return tile is not None and get_default_registry().is_water(tile.terrain)


def _elevation_change_cost(delta: float) -> float:
    if delta < -1.0:
        return 50.0
    if delta < -0.1:
        return 50.0 + (delta + 1.0) / 0.9 * 50.0
    if delta < 0.0:
        return 100.0 + (delta + 0.1) / 0.1 * 300.0
    if delta < 0.1:
        return 5000.0 + delta / 0.1 * 45000.0
    return 50000.0


def _approximate_temperature(y: int, total_h: int) -> float:
    half = max((total_h - 1) / 2.0, 1e-9)
    lat_abs = abs(y - (total_h - 1) / 2.0) / half
    return 25.0 - 55.0 * lat_abs


def _evaporation_constant(temp_c: float) -> float:
    return (0.61121 * math.exp((18.678 - temp_c / 234.5) * (temp_c / (257.14 + temp_c)))
            / (temp_c + 273.0))


def _total_evaporation(flow: float, temp_c: float, scale: float) -> float:
    if flow <= 0.0:
        return 0.0
    return _evaporation_constant(temp_c) * math.sqrt(flow) * 250.0 * scale


def _coastal_water_tiles(tile_map: TileMap) -> list[Coord]:
    registry = get_default_registry()
    result = []
    for c, tile in tile_map.items():
        if not registry.is_water(tile.terrain):
            continue
        for n in tile_map.neighbors(c):
            if not registry.is_water(tile_map.tile_at(n.x, n.y).terrain):
                result.append(c)
                break
    return result


def _water_component_sizes(tile_map: TileMap) -> dict[Coord, int]:
    registry = get_default_registry()
    visited: set[Coord] = set()
    sizes: dict[Coord, int] = {}
    for c, tile in tile_map.items():
        if c in visited or not registry.is_water(tile.terrain):
            continue
        component = []
        stack = [c]
        visited.add(c)
        while stack:
            cur = stack.pop()
            component.append(cur)
            for n in tile_map.neighbors(cur):
                if n in visited:
                    continue
                if not registry.is_water(tile_map.tile_at(n.x, n.y).terrain):
                    continue
                visited.add(n)
                stack.append(n)
        for member in component:
            sizes[member] = len(component)
    return sizes


def _downsample_seeds(seeds: list[Coord], tile_map: TileMap,
                      heightmap: Sequence[float], min_dist: int) -> list[Coord]:
    if min_dist <= 1 or not seeds:
        return seeds
    registry = get_default_registry()
    width = tile_map.width

    def min_adjacent_land_elevation(c: Coord) -> float:
        lowest = 1.0
        for n in tile_map.neighbors(c):
            if registry.is_water(tile_map.tile_at(n.x, n.y).terrain):
                continue
            lowest = min(lowest, heightmap[n.y * width + n.x])
        return lowest

    kept: list[Coord] = []
    for seed in sorted(seeds, key=min_adjacent_land_elevation):
        if all(grid_distance(seed, k) >= min_dist for k in kept):
            kept.append(seed)
    return kept


def _flood_paths(tile_map: TileMap, heightmap: Sequence[float],
                 seeds: list[Coord]) -> list[int]:
    """Reverse Dijkstra from the mouths; returns each tile's downstream parent."""
    width, height = tile_map.width, tile_map.height
    g = [math.inf] * (width * height)
    parent = [-1] * (width * height)
    seed_set: set[int] = set()
    heap: list[tuple[float, int]] = []
    for s in seeds:
        idx = s.y * width + s.x
        if g[idx] > 0.0:
            g[idx] = 0.0
            heapq.heappush(heap, (0.0, idx))
            seed_set.add(idx)

    while heap:
        gv, cidx = heapq.heappop(heap)
        if gv > g[cidx]:
            continue
        cur = Coord(cidx % width, cidx // width)
        if cidx not in seed_set and _is_water(tile_map, cur):
            continue
        cur_elev = heightmap[cidx]
        for n in tile_map.neighbors(cur):
            nidx = n.y * width + n.x
            lowest = math.inf
            lowest_idx = -1
            for nn in tile_map.neighbors(n):
                nn_idx = nn.y * width + nn.x
                if heightmap[nn_idx] < lowest:
                    lowest = heightmap[nn_idx]
                    lowest_idx = nn_idx
            factor = 1.0 if lowest_idx == cidx else 2.0
            new_g = gv + factor * _elevation_change_cost(cur_elev - heightmap[nidx])
            if new_g < g[nidx]:
                g[nidx] = new_g
                parent[nidx] = cidx
                heapq.heappush(heap, (new_g, nidx))
    return parent


def _build_children(parent: list[int]) -> list[list[int]]:
    children: list[list[int]] = [[] for _ in parent]
    for i, p in enumerate(parent):
        if p >= 0:
            children[p].append(i)
    return children


def _accumulate_flow(flow: list[float], children: list[list[int]], root: int,
                     rainfall: Sequence[float], temperature: Sequence[float],
                     evap_scale: float) -> None:
    """Post-order accumulation of rainfall minus evaporation up the tree."""
    stack = [(root, False)]
    while stack:
        cur, processed = stack.pop()
        if not processed:
            stack.append((cur, True))
            stack.extend((child, False) for child in children[cur])
            continue
        total = flow[cur] + rainfall[cur] + sum(flow[ch] for ch in children[cur])
        evap = _total_evaporation(total, temperature[cur], evap_scale)
        flow[cur] = max(0.0, total - evap)


def _direction_to(a: Coord, b: Coord) -> int | None:
    for d, step in enumerate(DIRECTIONS):
        if a + step == b:
            return d
    return None


def _paint_edge(tile_map: TileMap, cur: Coord, direction: int,
                flow_value: float, scale: float) -> None:
    strength = int(math.log1p(flow_value * scale) * LOG_STRENGTH_SCALE)
    add_river_flow(tile_map, cur, direction,
                   max(1, min(RIVER_MAX_STRENGTH, strength)))


def _create_rivers_from_seed(tile_map: TileMap, flow: list[float],
                             children: list[list[int]], seed_idx: int,
                             p: RiverGenParams, rng: random.Random) -> int:
    width = tile_map.width

    def coord_of(idx: int) -> Coord:
        return Coord(idx % width, idx // width)

    seed = coord_of(seed_idx)
    painted = 0
    for first_idx in children[seed_idx]:
        first_flow = flow[first_idx]
        if first_flow < p.spawn_flow_threshold:
            continue
        direction = _direction_to(seed, coord_of(first_idx))
        if direction is None:
            continue
        _paint_edge(tile_map, seed, direction, first_flow, p.flow_strength_scale)
        painted += 1

        stack = [first_idx]
        while stack:
            cur_idx = stack.pop()
            kids = children[cur_idx]
            if not kids:
                continue
            cur = coord_of(cur_idx)
            best_idx, *alternatives = sorted(kids, key=lambda k: -flow[k])
            best_flow = flow[best_idx]
            if best_flow >= p.degrade_threshold:
                d = _direction_to(cur, coord_of(best_idx))
                if d is not None:
                    _paint_edge(tile_map, cur, d, best_flow, p.flow_strength_scale)
                    painted += 1
                stack.append(best_idx)
            for alt_idx in alternatives:
                alt_flow = flow[alt_idx]
                if alt_flow < p.branch_flow_threshold:
                    continue
                if rng.random() >= p.branch_chance:
                    continue
                d = _direction_to(cur, coord_of(alt_idx))
                if d is not None:
                    _paint_edge(tile_map, cur, d, alt_flow, p.flow_strength_scale)
                    painted += 1
                stack.append(alt_idx)
    return painted


# ── entry point ────────────────────────────────────────────────────────────

def generate_rivers(tile_map: TileMap,
                    heightmap: Sequence[float],
                    rainfall: Sequence[float],
                    temperature: Sequence[float] | None = None,
                    seed: int | None = None,
                    params: RiverGenParams | None = None) -> int:
    """Paint rivers onto the map and return the number of edges painted."""
    p = params or RiverGenParams()
    width, height = tile_map.width, tile_map.height
    rng = random.Random(seed)

    seeds = _coastal_water_tiles(tile_map)
    if not seeds:
        return 0
    if p.min_sea_size > 1:
        sizes = _water_component_sizes(tile_map)
        seeds = [s for s in seeds if sizes.get(s, 0) >= p.min_sea_size]
        if not seeds:
            return 0
    if p.min_seed_spacing > 1:
        seeds = _downsample_seeds(seeds, tile_map, heightmap, p.min_seed_spacing)
    if not seeds:
        return 0

    parent = _flood_paths(tile_map, heightmap, seeds)
    children = _build_children(parent)

    if temperature is not None:
        temp_grid = list(temperature)
    else:
        temp_grid = [_approximate_temperature(y, height)
                     for y in range(height) for _ in range(width)]
    rain_scaled = [r * p.rainfall_scale for r in rainfall]

    flow = [0.0] * (width * height)
    roots = [s.y * width + s.x for s in seeds]
    for root in roots:
        _accumulate_flow(flow, children, root, rain_scaled, temp_grid,
                         p.evaporation_scale)
    return sum(_create_rivers_from_seed(tile_map, flow, children, root, p, rng)
               for root in roots)