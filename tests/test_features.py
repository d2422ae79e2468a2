from squaremap.features import (
    FeatureWorker,
    FloodFillWorker,
    WorldFeatures,
    apply_features,
    make_biome_region_worker,
    make_coast_worker,
    make_continent_worker,
    make_icecap_worker,
    make_island_worker,
    make_lake_worker,
    make_mountain_range_worker,
    make_ocean_worker,
)
from squaremap.grid import Coord
from squaremap.terrain import TerrainType
from squaremap.tilemap import TileMap

LEGEND = {
    "~": TerrainType.OCEAN,
    "c": TerrainType.COAST,
    "l": TerrainType.LAKE,
    ".": TerrainType.PLAINS,
    "^": TerrainType.MOUNTAIN,
    "s": TerrainType.SNOW,
    "f": TerrainType.FOREST,
}


def make_map(rows):
    m = TileMap(len(rows[0]), len(rows), TerrainType.OCEAN)
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            m.set_terrain(Coord(x, y), LEGEND[ch])
    return m


def test_world_features_add_get_iter():
    wf = WorldFeatures()
    tiles = [Coord(0, 0), Coord(1, 0)]
    f = wf.add("Ocean", "Ocean #1", tiles, Coord(0, 0))
    g = wf.add("Lake", "Lake #1", [Coord(3, 3)], Coord(3, 3))
    assert (f.id, g.id) == (0, 1)
    assert f.size == len(tiles)
    assert f.tiles == tiles
    assert wf.get(1) is g
    assert wf.get(2) is None
    assert wf.get(-1) is None
    assert len(wf) == 2
    assert [x.id for x in wf] == [0, 1]


def test_ocean_worker_tags_tiles():
    m = make_map(["~~...", "~~..~", ".....", "~...~"])
    wf = WorldFeatures()
    make_ocean_worker().apply(m, wf)
    assert [f.name for f in wf] == [f"Ocean #{i}" for i in range(1, len(wf) + 1)]
    seen = set()
    for f in wf:
        assert f.feature_type == "Ocean"
        assert f.center in f.tiles
        for c in f.tiles:
            assert m.get(c).terrain == TerrainType.OCEAN
            assert m.get(c).feature_id == f.id
            seen.add(c)
    assert seen == {c for c, t in m.items() if t.terrain == TerrainType.OCEAN}


def test_lake_worker_joins_lake_and_coast():
    m = make_map([".....", ".lc..", "....."])
    wf = WorldFeatures()
    make_lake_worker().apply(m, wf)
    assert len(wf) == 1
    assert set(wf.get(0).tiles) == {Coord(1, 1), Coord(2, 1)}


def test_coast_worker_skips_small_groups():
    m = make_map(["cc...", ".....", "..ccc"])
    wf = WorldFeatures()
    make_coast_worker().apply(m, wf)
    assert len(wf) == 1
    assert set(wf.get(0).tiles) == {Coord(2, 2), Coord(3, 2), Coord(4, 2)}
    assert m.tile_at(0, 0).feature_id == -1


ISLAND_MAP = [".....", "~~~~~", "~~.~~", "~~.~~", "~~~~~"]


def test_island_worker_ignores_edge_land():
    m = make_map(ISLAND_MAP)
    wf = WorldFeatures()
    make_island_worker(2).apply(m, wf)
    assert [f.name for f in wf] == ["Island #1"]
    island = wf.get(0)
    assert island.feature_type == "Island"
    assert set(island.tiles) == {Coord(2, 2), Coord(2, 3)}
    assert island.center in island.tiles
    assert m.tile_at(2, 2).feature_id == island.id
    assert m.tile_at(0, 0).feature_id == -1


def test_island_worker_min_size():
    m = make_map(ISLAND_MAP)
    wf = WorldFeatures()
    make_island_worker(3).apply(m, wf)
    assert len(wf) == 0


CONTINENT_MAP = ["~~~~~~~", "~.~...~", "~~~~~~~", "~..~~~~", "~~~~~~~"]


def test_continent_worker_orders_by_size():
    m = make_map(CONTINENT_MAP)
    wf = WorldFeatures()
    make_continent_worker(2, 1).apply(m, wf)
    assert [f.name for f in wf] == ["Continent #1", "Continent #2"]
    assert [f.size for f in wf] == [3, 2]
    assert all(t.feature_id == -1 for _, t in m.items())


def test_continent_worker_stops_below_min_size():
    m = make_map(CONTINENT_MAP)
    wf = WorldFeatures()
    make_continent_worker(3, 3).apply(m, wf)
    assert [set(f.tiles) for f in wf] == [{Coord(3, 1), Coord(4, 1), Coord(5, 1)}]


def test_icecap_worker_takes_polar_snow():
    m = make_map(["sss", "...", "s..", "...", "..."])
    wf = WorldFeatures()
    make_icecap_worker(0.85).apply(m, wf)
    assert [f.name for f in wf] == ["Icecap #1"]
    assert set(wf.get(0).tiles) == {Coord(0, 0), Coord(1, 0), Coord(2, 0)}
    assert m.tile_at(0, 2).feature_id == -1


def test_icecap_worker_without_snow_adds_nothing():
    m = make_map(["...", "...", "..."])
    wf = WorldFeatures()
    make_icecap_worker(0.85).apply(m, wf)
    assert len(wf) == 0


def test_biome_region_and_mountain_names():
    m = make_map(["fff^^", "fff^.", "....."])
    wf = WorldFeatures()
    make_biome_region_worker(TerrainType.FOREST, 5).apply(m, wf)
    make_mountain_range_worker(3).apply(m, wf)
    assert [f.name for f in wf] == ["BiomeRegion:FOREST #1", "MountainRange #1"]
    assert wf.get(0).feature_type == "BiomeRegion:FOREST"


def test_flood_fill_worker_is_a_feature_worker():
    worker = FloodFillWorker("Snow", lambda t: t == TerrainType.SNOW, 1)
    assert isinstance(worker, FeatureWorker)
    m = make_map(["s.s"])
    wf = WorldFeatures()
    worker.apply(m, wf)
    assert [f.name for f in wf] == ["Snow #1", "Snow #2"]


def test_apply_features_default_workers():
    m = make_map(["~~~~~~~", "~ff.^^~", "~fff^.~", "~.ffs.~", "~~~~~~~"])
    wf = apply_features(m)
    assert [f.id for f in wf] == list(range(len(wf)))
    assert any(f.feature_type == "Ocean" for f in wf)
    assert any(f.feature_type == "Island" for f in wf)
    for f in wf:
        assert f.center in f.tiles
        assert f.size == len(f.tiles)


def test_apply_features_custom_workers():
    m = make_map(["~~~~~~~", "~ff.^^~", "~fff^.~", "~.ffs.~", "~~~~~~~"])
    wf = apply_features(m, [make_ocean_worker()])
    assert {f.feature_type for f in wf} == {"Ocean"}