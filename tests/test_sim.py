import json

import pytest

from squaremap.editor.layout import GridCoord
from squaremap.editor.sim import export_world, run_climate, run_flood_fill
from squaremap.editor.state import EditorState


def _state(width, height, fill):
    state = EditorState(width, height)
    state.reset_heights(fill)
    return state


def test_flood_fill_high_map_has_no_ocean():
    state = _state(6, 5, 0.5)
    run_flood_fill(state)
    assert not any(state.ocean_mask)
    assert len(state.ocean_mask) == 30


def test_flood_fill_low_map_is_all_ocean():
    state = _state(6, 5, 0.0)
    run_flood_fill(state)
    assert len(state.ocean_mask) == 30
    assert sum(state.ocean_mask) == 30
    assert state.get_ocean(3, 2) is True


def test_flood_fill_ignores_enclosed_basin_without_sources():
    state = _state(5, 5, 0.5)
    state.set_h(2, 2, 0.0)
    run_flood_fill(state)
    assert not state.get_ocean(2, 2)


def test_flood_fill_from_water_source_fills_basin_only():
    state = _state(5, 5, 0.5)
    state.set_h(2, 2, 0.0)
    state.set_h(3, 2, 0.1)
    state.set_h(0, 0, 0.0)
    state.water_sources.append(GridCoord(2, 2))
    run_flood_fill(state)
    assert state.get_ocean(2, 2)
    assert state.get_ocean(3, 2)
    assert not state.get_ocean(0, 0)
    assert sum(state.ocean_mask) == 2


def test_flood_fill_out_of_bounds_source_is_ignored():
    state = _state(4, 4, 0.0)
    state.water_sources.append(GridCoord(10, 10))
    run_flood_fill(state)
    assert len(state.ocean_mask) == 16
    assert sum(state.ocean_mask) == 0
    assert state.get_ocean(0, 0) is False


def test_climate_ocean_is_fully_wet_and_values_in_range():
    state = _state(8, 6, 0.5)
    for y in range(6):
        state.set_h(7, y, 0.0)
    run_flood_fill(state)
    run_climate(state)
    for y in range(6):
        assert state.get_rain(7, y) == 1.0
    assert all(0.0 <= v <= 1.0 for v in state.temperature)
    assert all(0.0 <= v <= 1.0 for v in state.rainfall)


def test_climate_moisture_decays_downwind():
    state = _state(8, 3, 0.5)
    for y in range(3):
        state.set_h(7, y, 0.0)
    state.wind_dir = 270.0
    run_flood_fill(state)
    run_climate(state)
    row = [state.get_rain(x, 1) for x in range(8)]
    assert all(a <= b for a, b in zip(row, row[1:]))
    assert row[6] < 1.0


def test_climate_no_sun_angle_gives_uniform_latitude_heat():
    state = _state(4, 5, 0.0)
    state.sun_angle = 0.0
    run_flood_fill(state)
    run_climate(state)
    assert all(v == pytest.approx(1.0) for v in state.temperature)


def test_climate_polar_rows_colder_than_equator():
    state = _state(4, 5, 0.5)
    state.sun_angle = 90.0
    run_flood_fill(state)
    run_climate(state)
    assert state.get_temp(0, 0) < state.get_temp(0, 2)
    assert state.get_temp(0, 4) < state.get_temp(0, 2)


def test_export_all_ocean(tmp_path):
    state = _state(4, 3, 0.0)
    out = export_world(state, tmp_path / "world.json")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["width"] == 4
    assert data["height"] == 3
    assert len(data["heightmap"]) == 12
    assert len(data["moisture"]) == 12
    assert data["terrain"] == ["OCEAN"] * 12


def test_export_mixed_map_has_coast_and_land(tmp_path):
    state = _state(6, 4, 0.5)
    for y in range(4):
        for x in range(3):
            state.set_h(x, y, 0.0)
    out = export_world(state, tmp_path / "mixed.json")
    data = json.loads(out.read_text(encoding="utf-8"))
    terrain = data["terrain"]
    assert "COAST" in terrain
    assert terrain[3] not in ("OCEAN", "COAST")
    assert data["heightmap"][5] == pytest.approx(0.5)
    assert data["sea_level"] == pytest.approx(state.sea_level)


def test_export_rejects_bad_sea_level(tmp_path):
    state = _state(4, 3, 0.5)
    state.sea_level = 1.5
    with pytest.raises(ValueError):
        export_world(state, tmp_path / "bad.json")
    assert not (tmp_path / "bad.json").exists()