import pytest

from squaremap.editor.layout import GridCoord
from squaremap.editor.state import EditorState
from squaremap.editor.tools import (
    ToolRng,
    apply_brush,
    apply_ridge_stamp,
    apply_rift_stamp,
    tile_hash,
    toggle_water_source,
)


def test_rng_swapped_bounds_and_range():
    rng = ToolRng(1)
    values = [rng.uniform_int(5, 2) for _ in range(200)]
    assert all(2 <= v <= 5 for v in values)
    floats = [rng.uniform_float(3.0, 1.0) for _ in range(200)]
    assert all(1.0 <= f <= 3.0 for f in floats)


def test_rng_reseed_repeats():
    rng = ToolRng()
    rng.reseed(9)
    first = [rng.uniform_float(0.0, 1.0) for _ in range(5)]
    rng.reseed(9)
    assert [rng.uniform_float(0.0, 1.0) for _ in range(5)] == first


def test_tile_hash_origin_and_range():
    assert tile_hash(0, 0) == 0.0
    values = [tile_hash(x, y) for x in range(-5, 6) for y in range(-5, 6)]
    assert all(0.0 <= v <= 1.0 for v in values)
    assert tile_hash(3, 7) == tile_hash(3, 7)
    assert len(set(values)) > 50


def test_brush_raises_center_most():
    s = EditorState(11, 11)
    apply_brush(s, 5, 5, 0.1)
    center = s.get_h(5, 5)
    assert center == pytest.approx(0.6)
    assert 0.5 < s.get_h(6, 5) < center
    assert s.get_h(6, 5) == pytest.approx(s.get_h(5, 6))
    assert s.get_h(0, 0) == 0.5


def test_brush_lower_and_clamp():
    s = EditorState(7, 7)
    for _ in range(50):
        apply_brush(s, 3, 3, -0.1)
    assert s.get_h(3, 3) == 0.0
    assert all(0.0 <= h <= 1.0 for h in s.heightmap)


def test_brush_at_corner_ignores_outside():
    s = EditorState(5, 5)
    apply_brush(s, 0, 0, 0.1)
    assert len(s.heightmap) == 25
    assert s.get_h(0, 0) > s.get_h(1, 1) > 0.5


def test_ridge_and_rift_are_opposite():
    up = EditorState(9, 9)
    down = EditorState(9, 9)
    apply_ridge_stamp(up, 4, 4, ToolRng(0))
    apply_rift_stamp(down, 4, 4, ToolRng(0))
    assert up.get_h(4, 4) > 0.5 > down.get_h(4, 4)
    for a, b in zip(up.heightmap, down.heightmap):
        assert a - 0.5 == pytest.approx(0.5 - b)


def test_ridge_center_weight_is_full_strength():
    s = EditorState(9, 9)
    apply_ridge_stamp(s, 4, 4, ToolRng(0))
    assert s.get_h(4, 4) == pytest.approx(0.5 + s.brush_strength * 2.5)


def test_spokes_reach_beyond_radius():
    s = EditorState(15, 15)
    s.brush_spokes = 4
    apply_ridge_stamp(s, 7, 7, ToolRng(0))
    # on the spoke at angle 0, beyond the base radius of 3
    assert s.get_h(11, 7) > 0.5
    # diagonal, between spokes and outside the base radius
    assert s.get_h(10, 10) == 0.5


def test_without_spokes_nothing_beyond_radius():
    s = EditorState(15, 15)
    apply_ridge_stamp(s, 7, 7, ToolRng(0))
    assert s.get_h(11, 7) == 0.5


def test_toggle_water_source():
    s = EditorState(5, 5)
    toggle_water_source(s, 2, 3)
    assert s.water_sources == [GridCoord(2, 3)]
    toggle_water_source(s, 1, 1)
    toggle_water_source(s, 2, 3)
    assert s.water_sources == [GridCoord(1, 1)]