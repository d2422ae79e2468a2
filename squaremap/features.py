"""Named world features (oceans, islands, continents, ...) found by flood fill."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Callable, Iterator, Sequence

from .generation.postprocess import find_components
from .grid import Coord
from .terrain import TerrainType, get_default_registry
from .tilemap import TileMap


@dataclass
class WorldFeature:
    """A named group of tiles."""

    id: int
    feature_type: str
    name: str
    size: int
    center: Coord
    tiles: list[Coord] = field(default_factory=list)


class WorldFeatures:
    """Features of a world, identified by their position in the list."""

    def __init__(self) -> None:
        self.features: list[WorldFeature] = []

    def add(self, feature_type: str, name: str, tiles: Sequence[Coord],
            center: Coord) -> WorldFeature:
        tile_list = list(tiles)
        feature = WorldFeature(id=len(self.features), feature_type=feature_type,
                               name=name, size=len(tile_list), center=center,
                               tiles=tile_list)
        self.features.append(feature)
        return feature

    def get(self, feature_id: int) -> WorldFeature | None:
        """The feature with this id, or None if there is none."""
        if 0 <= feature_id < len(self.features):
            return self.features[feature_id]
        return None

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self) -> Iterator[WorldFeature]:
        return iter(self.features)


def _centroid(tiles: Sequence[Coord]) -> Coord:
    """The member tile closest (Manhattan) to the mean position."""
    if not tiles:
        return Coord()
    n = len(tiles)
    ax = sum(c.x for c in tiles) / n
    ay = sum(c.y for c in tiles) / n
    return min(tiles, key=lambda c: abs(c.x - ax) + abs(c.y - ay))


def _assign_feature_id(tile_map: TileMap, tiles: Sequence[Coord], fid: int) -> None:
    for c in tiles:
        tile = tile_map.get(c)
        if tile is not None:
            tile.feature_id = fid


def _is_land(terrain: int) -> bool:
    return not get_default_registry().is_water(terrain)


class FeatureWorker(abc.ABC):
    """Finds one kind of feature on a map and records it."""

    @abc.abstractmethod
    def apply(self, tile_map: TileMap, features: WorldFeatures) -> None:
        ...


class FloodFillWorker(FeatureWorker):
    """Records every connected group of matching tiles of at least min_size."""

    def __init__(self, type_prefix: str, predicate: Callable[[int], bool],
                 min_size: int) -> None:
        self.type_prefix = type_prefix
        self.predicate = predicate
        self.min_size = min_size

    def apply(self, tile_map: TileMap, features: WorldFeatures) -> None:
        counter = 0
        for component in find_components(tile_map, self.predicate):
            if len(component) < self.min_size:
                continue
            counter += 1
            feature = features.add(self.type_prefix, f"{self.type_prefix} #{counter}",
                                   component, _centroid(component))
            _assign_feature_id(tile_map, feature.tiles, feature.id)


class _IslandWorker(FeatureWorker):
    def __init__(self, min_size: int) -> None:
        self.min_size = min_size

    def apply(self, tile_map: TileMap, features: WorldFeatures) -> None:
        width, height = tile_map.width, tile_map.height
        counter = 0
        for component in find_components(tile_map, _is_land):
            if len(component) < self.min_size:
                continue
            if any(c.x in (0, width - 1) or c.y in (0, height - 1) for c in component):
                continue
            counter += 1
            feature = features.add("Island", f"Island #{counter}", component,
                                   _centroid(component))
            _assign_feature_id(tile_map, feature.tiles, feature.id)


class _ContinentWorker(FeatureWorker):
    def __init__(self, top_n: int, min_size: int) -> None:
        self.top_n = top_n
        self.min_size = min_size

    def apply(self, tile_map: TileMap, features: WorldFeatures) -> None:
        components = sorted(find_components(tile_map, _is_land), key=len, reverse=True)
        for rank, component in enumerate(components, start=1):
            if rank > self.top_n or len(component) < self.min_size:
                break
            features.add("Continent", f"Continent #{rank}", component,
                         _centroid(component))


class _IcecapWorker(FeatureWorker):
    def __init__(self, lat_threshold: float) -> None:
        self.lat_threshold = lat_threshold

    def apply(self, tile_map: TileMap, features: WorldFeatures) -> None:
        mid = (tile_map.height - 1) / 2.0
        half = max(mid, 1e-9)
        tiles = [c for c, tile in tile_map.items()
                 if tile.terrain == TerrainType.SNOW
                 and abs(c.y - mid) / half >= self.lat_threshold]
        if not tiles:
            return
        feature = features.add("Icecap", "Icecap #1", tiles, _centroid(tiles))
        _assign_feature_id(tile_map, feature.tiles, feature.id)


def make_ocean_worker() -> FeatureWorker:
    return FloodFillWorker("Ocean", lambda t: t == TerrainType.OCEAN, 1)


def make_lake_worker() -> FeatureWorker:
    return FloodFillWorker(
        "Lake", lambda t: t in (TerrainType.LAKE, TerrainType.COAST), 1)


def make_coast_worker() -> FeatureWorker:
    return FloodFillWorker("Coast", lambda t: t == TerrainType.COAST, 3)


def make_mountain_range_worker(min_size: int = 3) -> FeatureWorker:
    return FloodFillWorker("MountainRange", lambda t: t == TerrainType.MOUNTAIN, min_size)


def make_biome_region_worker(terrain_id: int, min_size: int = 5) -> FeatureWorker:
    type_name = "BiomeRegion:" + get_default_registry().get(terrain_id).name
    return FloodFillWorker(type_name, lambda t: t == terrain_id, min_size)


def make_island_worker(min_size: int = 3) -> FeatureWorker:
    """Land groups not touching the map edge."""
    return _IslandWorker(min_size)


def make_continent_worker(top_n: int = 3, min_size: int = 20) -> FeatureWorker:
    """The largest land groups; tiles keep their existing feature ids."""
    return _ContinentWorker(top_n, min_size)


def make_icecap_worker(lat_threshold: float = 0.85) -> FeatureWorker:
    """All snow at or beyond a normalised latitude, as one feature."""
    return _IcecapWorker(lat_threshold)


def _default_workers() -> list[FeatureWorker]:
    workers = [
        make_ocean_worker(),
        make_lake_worker(),
        make_coast_worker(),
        make_mountain_range_worker(3),
    ]
    workers.extend(make_biome_region_worker(tid, 5) for tid in (
        TerrainType.FOREST, TerrainType.DESERT, TerrainType.TUNDRA,
        TerrainType.GRASSLAND, TerrainType.SNOW))
    workers.extend([
        make_island_worker(3),
        make_continent_worker(3, 20),
        make_icecap_worker(0.85),
    ])
    return workers


def apply_features(tile_map: TileMap,
                   workers: Sequence[FeatureWorker] | None = None) -> WorldFeatures:
    """Run the workers (the built-in set when None) and return what they found."""
    features = WorldFeatures()
    for worker in (workers if workers is not None else _default_workers()):
        worker.apply(tile_map, features)
    return features