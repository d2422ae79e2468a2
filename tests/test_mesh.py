import pytest

from squaremap.editor.colors import overlay_color
from squaremap.editor.layout import GridCoord
from squaremap.editor.mesh import (
    Ray,
    brush_cursor_cells,
    pick_terrain_grid,
    terrain_vertices,
)
from squaremap.editor.state import EditorState


def test_terrain_vertices_count_is_six_per_quad():
    state = EditorState(4, 3)
    verts = terrain_vertices(state, 10.0)
    assert len(verts) == 3 * 2 * 6


def test_terrain_vertices_empty_for_thin_map():
    assert terrain_vertices(EditorState(1, 5), 10.0) == []
    assert terrain_vertices(EditorState(5, 1), 10.0) == []


def test_terrain_vertices_positions_follow_heights():
    state = EditorState(3, 3)
    state.set_h(2, 2, 0.8)
    verts = terrain_vertices(state, 5.0)
    xs = {v.x for v in verts}
    zs = {v.z for v in verts}
    assert xs == {0.0, 1.0, 2.0}
    assert zs == {0.0, 1.0, 2.0}
    for v in verts:
        assert v.y == pytest.approx(state.get_h(int(v.x), int(v.z)) * 5.0)
        assert v.color == overlay_color(state, int(v.x), int(v.z))


def test_first_quad_triangle_order():
    state = EditorState(2, 2)
    verts = terrain_vertices(state, 1.0)
    corners = [(v.x, v.z) for v in verts]
    assert corners == [(0, 0), (0, 1), (1, 0), (1, 0), (0, 1), (1, 1)]


def test_pick_straight_down():
    state = EditorState(4, 3)
    ray = Ray((1.5, 100.0, 2.5), (0.0, -1.0, 0.0))
    assert pick_terrain_grid(state, ray, 10.0) == GridCoord(1, 2)


def test_pick_horizontal_ray_misses():
    state = EditorState(4, 3)
    ray = Ray((1.5, 3.0, 1.5), (1.0, 0.0, 0.0))
    assert pick_terrain_grid(state, ray, 10.0) is None


def test_pick_ray_pointing_away_misses():
    state = EditorState(4, 3)
    ray = Ray((1.5, 100.0, 1.5), (0.0, 1.0, 0.0))
    assert pick_terrain_grid(state, ray, 10.0) is None


def test_pick_outside_map_misses():
    state = EditorState(4, 3)
    ray = Ray((50.5, 100.0, 1.5), (0.0, -1.0, 0.0))
    assert pick_terrain_grid(state, ray, 10.0) is None


def test_brush_cursor_single_cell():
    state = EditorState(5, 5)
    state.brush_size = 1
    assert brush_cursor_cells(state, 2, 2) == [GridCoord(2, 2)]


def test_brush_cursor_clipped_at_corner():
    state = EditorState(5, 5)
    state.brush_size = 2
    cells = brush_cursor_cells(state, 0, 0)
    assert set(cells) == {GridCoord(0, 0), GridCoord(1, 0), GridCoord(0, 1), GridCoord(1, 1)}
    full = brush_cursor_cells(state, 2, 2)
    assert len(full) == 9


def test_brush_cursor_outside_is_empty():
    state = EditorState(5, 5)
    assert brush_cursor_cells(state, -1, 2) == []