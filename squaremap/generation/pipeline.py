"""The full world generation pipeline: heightmap to finished tile map."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Sequence

from ..features import FeatureWorker, WorldFeatures, apply_features
from ..rivers import RiverGenParams, generate_rivers
from ..terrain import TerrainRegistry, TerrainType, get_default_registry
from ..tilemap import TileMap
from .biome import BiomeParams, apply_biomes
from .classify import heightmap_to_tilemap
from .climate import ClimateParams, ClimateResult, apply_climate
from .depressions import fill_depressions
from .heightmap import HeightmapParams, generate_heightmap
from .postprocess import post_process as run_post_process

MOISTURE_SEED_OFFSET = 1_000
CLIMATE_SEED_OFFSET = 2_000
RIVERS_SEED_OFFSET = 3_000
EXTRA_NOISE_BASE_OFFSET = 10_000

# Noise settings that suit each continent shape: (octaves, base frequency).
SHAPE_NOISE_DEFAULTS: dict[str, tuple[int, int]] = {
    "pangaea": (4, 3),
    "continents": (4, 4),
    "ring_sea": (4, 4),
    "island": (4, 4),
    "archipelago": (5, 5),
    "shattered_archipelago": (6, 7),
}


@dataclass
class WorldGenParams:
    """Settings for every phase of generate_world."""

    octaves: int = 4
    persistence: float = 0.5
    base_frequency: int = 4
    sea_level: float = 0.35
    coast_depth: int = 1
    heightmap_params: HeightmapParams = field(default_factory=HeightmapParams)
    biome_params: BiomeParams = field(default_factory=BiomeParams)
    post_process: bool = True
    island_min_size: int = 3
    lake_max_size: int = 3
    lake_fill: int = TerrainType.LAKE
    lake_depressions: bool = False
    climate: bool = True
    climate_params: ClimateParams = field(default_factory=ClimateParams)
    rivers: bool = True
    river_params: RiverGenParams = field(default_factory=RiverGenParams)
    features: bool = True
    feature_workers: Sequence[FeatureWorker] | None = None
    extra_noise_specs: list[tuple[str, int]] = field(default_factory=list)
    registry: TerrainRegistry | None = None


@dataclass
class WorldGenResult:
    """Everything a generation run produced."""

    tile_map: TileMap
    heightmap: list[float]
    moisture: list[float]
    temperature_celsius: list[float]
    rainfall_mm: list[float]
    extra_noise: dict[str, list[float]]
    registry: TerrainRegistry
    seed: int | None
    features: WorldFeatures | None = None

    def has_climate(self) -> bool:
        return bool(self.temperature_celsius) and bool(self.rainfall_mm)


def _offset_seed(seed: int | None, offset: int) -> int | None:
    return None if seed is None else seed + offset


def _base_noise_params(p: WorldGenParams) -> HeightmapParams:
    return HeightmapParams(octaves=p.octaves, persistence=p.persistence,
                           base_frequency=p.base_frequency)


def generate_world(width: int, height: int, seed: int | None = None,
                   params: WorldGenParams | None = None) -> WorldGenResult:
    """Generate a world: terrain, biomes, lakes, climate, rivers and features."""
    p = params or WorldGenParams()
    registry = p.registry if p.registry is not None else get_default_registry()

    hm_params = dataclasses.replace(
        p.heightmap_params,
        octaves=p.octaves,
        persistence=p.persistence,
        base_frequency=p.base_frequency,
        shape_sea_level=p.sea_level,
    )
    if hm_params.shape in SHAPE_NOISE_DEFAULTS:
        hm_params.octaves, hm_params.base_frequency = SHAPE_NOISE_DEFAULTS[hm_params.shape]
    heightmap = generate_heightmap(width, height, seed, hm_params)

    moisture = generate_heightmap(width, height,
                                  _offset_seed(seed, MOISTURE_SEED_OFFSET),
                                  _base_noise_params(p))

    tile_map = heightmap_to_tilemap(heightmap, width, height, p.sea_level, p.coast_depth)
    apply_biomes(tile_map, heightmap, moisture, p.sea_level, p.biome_params)

    if p.post_process:
        run_post_process(tile_map, p.island_min_size, p.lake_max_size,
                         p.coast_depth, p.lake_fill)

    if p.lake_depressions:
        depressions = fill_depressions(heightmap, width, height, p.sea_level)
        for c in depressions.lake_tiles:
            idx = c.y * width + c.x
            tile = tile_map.tile_at(c.x, c.y)
            tile.terrain = TerrainType.LAKE
            tile.water_depth = depressions.filled[idx] - heightmap[idx]

    climate_result = ClimateResult()
    if p.climate:
        climate_result = apply_climate(tile_map, heightmap, moisture,
                                       _offset_seed(seed, CLIMATE_SEED_OFFSET),
                                       p.climate_params)

    if p.rivers:
        rainfall = climate_result.rainfall_mm or moisture
        temperature = climate_result.temperature_celsius or None
        generate_rivers(tile_map, heightmap, rainfall, temperature,
                        _offset_seed(seed, RIVERS_SEED_OFFSET), p.river_params)

    features = apply_features(tile_map, p.feature_workers) if p.features else None

    extra_noise = {
        name: generate_heightmap(
            width, height,
            _offset_seed(seed, EXTRA_NOISE_BASE_OFFSET + offset),
            _base_noise_params(p))
        for name, offset in p.extra_noise_specs
    }

    return WorldGenResult(
        tile_map=tile_map,
        heightmap=heightmap,
        moisture=moisture,
        temperature_celsius=climate_result.temperature_celsius,
        rainfall_mm=climate_result.rainfall_mm,
        extra_noise=extra_noise,
        registry=registry,
        seed=seed,
        features=features,
    )