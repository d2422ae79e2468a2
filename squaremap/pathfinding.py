"""A* search over a tile map with terrain costs and optional river crossings."""

from __future__ import annotations

import heapq
import math
from functools import lru_cache
from typing import Sequence

from .grid import DIRECTIONS, Coord, grid_distance
from .rivers import get_river_strength
from .terrain import get_default_registry
from .tilemap import TileMap, is_passable, terrain_cost


@lru_cache(maxsize=None)
def get_min_passable_cost() -> float:
    """The cheapest finite move cost in the default registry."""
    return min((d.move_cost for d in get_default_registry().all_defs()
                if math.isfinite(d.move_cost)), default=math.inf)


def _reconstruct(came_from: dict[Coord, Coord], end: Coord) -> list[Coord]:
    path = [end]
    while path[-1] in came_from:
        path.append(came_from[path[-1]])
    path.reverse()
    return path


def astar(tile_map: TileMap, start: Coord, goal: Coord,
          river_crossing_cost: float = 0.0) -> list[Coord] | None:
    """Cheapest 4-connected path from start to goal, or None if unreachable.

    Crossing a river edge adds river_crossing_cost times its strength.
    """
    if not tile_map.in_bounds(start) or not tile_map.in_bounds(goal):
        return None
    if start == goal:
        return [start]

    min_cost = get_min_passable_cost()
    g_score: dict[Coord, float] = {start: 0.0}
    came_from: dict[Coord, Coord] = {}
    closed: set[Coord] = set()
    counter = 0
    open_heap = [(grid_distance(start, goal) * min_cost, counter, start.x, start.y)]

    while open_heap:
        _, _, cx, cy = heapq.heappop(open_heap)
        current = Coord(cx, cy)
        if current in closed:
            continue
        if current == goal:
            return _reconstruct(came_from, goal)
        closed.add(current)

        cur_g = g_score[current]
        for direction, step in enumerate(DIRECTIONS):
            n = current + step
            tile = tile_map.get(n)
            if tile is None or not is_passable(tile.terrain) or n in closed:
                continue
            cost = terrain_cost(tile.terrain)
            if river_crossing_cost > 0.0:
                strength = get_river_strength(tile_map, current, direction)
                if strength > 0:
                    cost += river_crossing_cost * strength
            tentative = cur_g + cost
            if tentative < g_score.get(n, math.inf):
                g_score[n] = tentative
                came_from[n] = current
                counter += 1
                heapq.heappush(open_heap, (tentative + grid_distance(n, goal) * min_cost,
                                           counter, n.x, n.y))
    return None


def path_cost(tile_map: TileMap, path: Sequence[Coord]) -> float:
    """Sum of terrain costs of every tile entered along the path."""
    total = 0.0
    for c in path[1:]:
        tile = tile_map.get(c)
        if tile is not None:
            total += terrain_cost(tile.terrain)
    return total