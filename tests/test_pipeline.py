import pytest

from squaremap.generation.heightmap import HeightmapParams
from squaremap.generation.pipeline import WorldGenParams, generate_world
from squaremap.rivers import iter_river_edges
from squaremap.terrain import TerrainType, get_default_registry


def test_generate_world_smoke():
    res = generate_world(20, 15, 42)
    assert res.tile_map.width == 20 and res.tile_map.height == 15
    assert len(res.heightmap) == 20 * 15
    assert len(res.moisture) == 20 * 15
    registry = get_default_registry()
    ocean = sum(1 for _, t in res.tile_map.items() if registry.is_water(t.terrain))
    land = len(res.tile_map) - ocean
    assert ocean > 0 and land > 0


def test_generate_world_climate_grids():
    params = WorldGenParams(climate=True)
    res = generate_world(15, 12, 123, params)
    assert len(res.temperature_celsius) == 15 * 12
    assert len(res.rainfall_mm) == 15 * 12
    assert res.has_climate()


def test_generate_world_island_shape():
    params = WorldGenParams(
        heightmap_params=HeightmapParams(shape="island", shape_strength=0.9))
    res = generate_world(30, 20, 999, params)
    ocean_count = sum(1 for _, t in res.tile_map.items()
                      if t.terrain in (TerrainType.OCEAN, TerrainType.COAST))
    assert ocean_count > len(res.tile_map) // 5


def test_generate_world_no_climate():
    params = WorldGenParams(climate=False, rivers=False)
    res = generate_world(10, 8, 7, params)
    assert res.temperature_celsius == []
    assert res.rainfall_mm == []
    assert not res.has_climate()


def test_same_seed_is_deterministic():
    a = generate_world(12, 10, 5)
    b = generate_world(12, 10, 5)
    assert a.heightmap == b.heightmap
    assert a.moisture == b.moisture
    assert [t.terrain for _, t in a.tile_map.items()] == \
        [t.terrain for _, t in b.tile_map.items()]


def test_extra_noise_channels():
    params = WorldGenParams(extra_noise_specs=[("magic", 1), ("ore", 2)],
                            climate=False, rivers=False, features=False)
    res = generate_world(10, 8, 3, params)
    assert sorted(res.extra_noise) == ["magic", "ore"]
    assert all(len(v) == 80 for v in res.extra_noise.values())
    assert res.extra_noise["magic"] != res.extra_noise["ore"]


def test_features_disabled_and_enabled():
    off = generate_world(12, 10, 11, WorldGenParams(features=False))
    on = generate_world(12, 10, 11, WorldGenParams(features=True))
    assert off.features is None
    assert len(on.features) > 0


def test_rivers_disabled_leaves_no_edges():
    res = generate_world(16, 12, 21, WorldGenParams(rivers=False))
    assert list(iter_river_edges(res.tile_map)) == []


def test_seed_recorded():
    res = generate_world(8, 6, 17, WorldGenParams(climate=False, rivers=False))
    assert res.seed == 17
    assert res.registry is get_default_registry()


def test_invalid_size_raises():
    with pytest.raises(ValueError):
        generate_world(0, 5, 1)