"""Terrain definitions and the registry that maps terrain ids to them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from functools import lru_cache
from typing import Iterable

TERRAIN_IMPASSABLE = math.inf


class TerrainType(IntEnum):
    """Ids of the built-in terrains."""

    OCEAN = 0
    COAST = 1
    PLAINS = 2
    GRASSLAND = 3
    DESERT = 4
    TUNDRA = 5
    SNOW = 6
    FOREST = 7
    HILL = 8
    MOUNTAIN = 9
    LAKE = 10


@dataclass(frozen=True)
class TerrainDef:
    """One terrain kind: an infinite move cost means impassable."""

    id: int
    name: str
    move_cost: float
    is_water: bool
    tags: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.tags, frozenset):
            object.__setattr__(self, "tags", frozenset(self.tags))


class TerrainRegistry:
    """Lookup of terrain definitions by id and by name."""

    def __init__(self, definitions: Iterable[TerrainDef] = ()) -> None:
        self._by_id: dict[int, TerrainDef] = {}
        self._name_to_id: dict[str, int] = {}
        for definition in definitions:
            self.register(definition)

    def register(self, definition: TerrainDef) -> None:
        """Add a definition; both its id and its name must be new."""
        if definition.id in self._by_id:
            existing = self._by_id[definition.id].name
            raise ValueError(
                f"TerrainDef id={definition.id} already registered as {existing}"
            )
        if definition.name in self._name_to_id:
            existing_id = self._name_to_id[definition.name]
            raise ValueError(
                f"TerrainDef name={definition.name} already registered with id={existing_id}"
            )
        self._name_to_id[definition.name] = definition.id
        self._by_id[definition.id] = definition

    def get(self, terrain_id: int) -> TerrainDef:
        """Return the definition for an id, raising KeyError if unknown."""
        try:
            return self._by_id[terrain_id]
        except KeyError:
            raise KeyError(f"No TerrainDef with id={terrain_id}") from None

    def get_by_name(self, name: str) -> TerrainDef | None:
        terrain_id = self._name_to_id.get(name)
        if terrain_id is None:
            return None
        return self._by_id.get(terrain_id)

    def contains(self, terrain_id: int) -> bool:
        return terrain_id in self._by_id

    def move_cost(self, terrain_id: int) -> float:
        return self.get(terrain_id).move_cost

    def is_passable(self, terrain_id: int) -> bool:
        return math.isfinite(self.get(terrain_id).move_cost)

    def is_water(self, terrain_id: int) -> bool:
        return self.get(terrain_id).is_water

    def has_tag(self, terrain_id: int, tag: str) -> bool:
        definition = self._by_id.get(terrain_id)
        return definition is not None and tag in definition.tags

    def all_defs(self) -> list[TerrainDef]:
        """All definitions ordered by id."""
        return [self._by_id[key] for key in sorted(self._by_id)]

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, terrain_id: object) -> bool:
        return terrain_id in self._by_id


def gen_default() -> TerrainRegistry:
    """Build a fresh registry holding the eleven built-in terrains."""
    inf = TERRAIN_IMPASSABLE
    return TerrainRegistry([
        TerrainDef(0, "OCEAN", inf, True, frozenset({"water", "ocean"})),
        TerrainDef(1, "COAST", inf, True, frozenset({"water", "coast"})),
        TerrainDef(2, "PLAINS", 1.0, False, frozenset({"land", "plains"})),
        TerrainDef(3, "GRASSLAND", 1.0, False, frozenset({"land", "grassland"})),
        TerrainDef(4, "DESERT", 1.5, False, frozenset({"land", "desert"})),
        TerrainDef(5, "TUNDRA", 1.0, False, frozenset({"land", "tundra"})),
        TerrainDef(6, "SNOW", 2.0, False, frozenset({"land", "snow"})),
        TerrainDef(7, "FOREST", 2.0, False, frozenset({"land", "forest"})),
        TerrainDef(8, "HILL", 2.0, False, frozenset({"land", "hill"})),
        TerrainDef(9, "MOUNTAIN", inf, False, frozenset({"land", "mountain"})),
        TerrainDef(10, "LAKE", inf, True, frozenset({"water", "lake"})),
    ])


@lru_cache(maxsize=None)
def get_default_registry() -> TerrainRegistry:
    """The shared registry used by the rest of the package."""
    return gen_default()