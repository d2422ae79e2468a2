"""Colours for height bands and the temperature, rainfall and ocean overlays."""

from __future__ import annotations

from typing import NamedTuple

from .state import EditorState, Overlay


class Color(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255


class _Band(NamedTuple):
    h_end: float
    c0: Color
    c1: Color


_HEIGHT_BANDS = (
    _Band(0.35, Color(40, 95, 195), Color(10, 30, 90)),      # ocean
    _Band(0.40, Color(205, 185, 120), Color(165, 148, 95)),  # beach
    _Band(0.58, Color(100, 178, 62), Color(55, 120, 30)),    # lowland
    _Band(0.72, Color(148, 132, 84), Color(95, 85, 50)),     # highland
    _Band(0.87, Color(132, 122, 116), Color(85, 78, 74)),    # mountain
    _Band(1.00, Color(242, 242, 246), Color(185, 183, 190)), # snow
)
_PEAK = Color(242, 242, 246)

OCEAN_COLOR = Color(30, 90, 180)
LAND_COLOR = Color(120, 170, 80)


def _clamp01(t: float) -> float:
    return min(1.0, max(0.0, t))


def _lerp_rgb(a: Color, b: Color, t: float) -> Color:
    t = _clamp01(t)
    return Color(int(a.r + (b.r - a.r) * t),
                 int(a.g + (b.g - a.g) * t),
                 int(a.b + (b.b - a.b) * t))


def height_color(h: float, sea_level: float) -> Color:
    """Colour of a height: deepening blue below sea level, land bands above."""
    ocean = _HEIGHT_BANDS[0]
    if h < sea_level:
        return _lerp_rgb(ocean.c0, ocean.c1, h / max(sea_level, 1e-6))

    prev = sea_level
    for band in _HEIGHT_BANDS[1:]:
        if h <= band.h_end:
            width = band.h_end - prev
            t = (h - prev) / width if width > 0.0 else 0.0
            return _lerp_rgb(band.c0, band.c1, t)
        prev = band.h_end
    return _PEAK


def temp_color(t: float) -> Color:
    """Blue for cold through purple to red for hot."""
    t = _clamp01(t)
    return Color(int(min(1.0, t * 2.0) * 255.0), 30,
                 int(min(1.0, (1.0 - t) * 2.0) * 255.0))


def rain_color(v: float) -> Color:
    """Dark teal for dry to bright cyan for wet."""
    v = _clamp01(v)
    return Color(int(20.0 * (1.0 - v)), int(80.0 + 120.0 * v), int(100.0 + 155.0 * v))


def overlay_color(state: EditorState, x: int, y: int) -> Color:
    """Colour of cell (x, y) under the state's current overlay."""
    if state.overlay == Overlay.OCEAN:
        return OCEAN_COLOR if state.get_ocean(x, y) else LAND_COLOR
    if state.overlay == Overlay.TEMPERATURE:
        return temp_color(state.get_temp(x, y))
    if state.overlay == Overlay.RAINFALL:
        return rain_color(state.get_rain(x, y))
    return height_color(state.get_h(x, y), state.sea_level)