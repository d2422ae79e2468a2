"""Editor state: the heightmap being sculpted plus tool, view and simulation settings."""

from __future__ import annotations

from enum import Enum, IntEnum

from .layout import GridCoord

DEFAULT_HEIGHT = 0.5


class Tool(Enum):
    RAISE = "raise"
    LOWER = "lower"
    RIDGE = "ridge"
    RIFT = "rift"
    WATER_SOURCE = "water_source"


class Overlay(IntEnum):
    HEIGHT = 0
    OCEAN = 1
    TEMPERATURE = 2
    RAINFALL = 3


class EditorState:
    """A width*height row-major heightmap in [0, 1] and the editor's settings."""

    def __init__(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self.heightmap: list[float] = [DEFAULT_HEIGHT] * (width * height)

        # scene
        self.cell_size = 16.0
        self.sea_level = 0.35
        self.height_scale = 10.0

        # tools
        self.current_tool = Tool.RAISE
        self.brush_size = 3
        self.brush_strength = 0.05
        self.brush_rate = 30.0

        # ridge / rift radial stamp
        self.brush_falloff = 2.0
        self.brush_chaos = 0.0
        self.brush_spokes = 0
        self.brush_spokes_rand = False
        self.brush_spokes_min = 0
        self.brush_spokes_max = 0
        self.brush_spokes_invert = False
        self.brush_spoke_jitter = 0.0  # degrees
        self.brush_wheel_angle = 0.0  # degrees
        self.brush_wheel_rand = False
        self.brush_wheel_min = 0.0
        self.brush_wheel_max = 360.0

        # smoothed random rate
        self.brush_rate_rand = False
        self.brush_rate_min = 5.0
        self.brush_rate_max = 40.0

        self.overlay = Overlay.HEIGHT

        # climate simulation
        self.sun_angle = 23.5
        self.wind_dir = 270.0  # 0=N 90=E 180=S 270=W
        self.evaporation = 0.5

        # noise generation
        self.noise_seed = 42
        self.noise_shape = 0
        self.noise_shape_strength = 0.85
        self.noise_ridge_weight = 0.0
        self.noise_ridge_mode = 0
        self.noise_num_plates = 20
        self.noise_octaves = 4
        self.noise_persistence = 0.5
        self.noise_base_freq = 4
        self.noise_blend = 0.0

        self.water_sources: list[GridCoord] = []

        self.ocean_mask: list[bool] = []
        self.temperature: list[float] = []
        self.rainfall: list[float] = []
        self.clear_sim_results()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _index(self, x: int, y: int) -> int:
        return y * self._width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def get_h(self, x: int, y: int) -> float:
        return self.heightmap[self._index(x, y)]

    def set_h(self, x: int, y: int, h: float) -> None:
        self.heightmap[self._index(x, y)] = h

    def add_h(self, x: int, y: int, delta: float) -> None:
        """Add to a height, keeping it within [0, 1]."""
        idx = self._index(x, y)
        self.heightmap[idx] = min(1.0, max(0.0, self.heightmap[idx] + delta))

    def resize(self, width: int, height: int) -> None:
        """Start a fresh flat map of a new size."""
        self._width = width
        self._height = height
        self.heightmap = [DEFAULT_HEIGHT] * (width * height)
        self.water_sources.clear()
        self.overlay = Overlay.HEIGHT
        self.clear_sim_results()

    def reset_heights(self, h: float = DEFAULT_HEIGHT) -> None:
        self.heightmap = [h] * (self._width * self._height)

    def clear_sim_results(self) -> None:
        n = self._width * self._height
        self.ocean_mask = [False] * n
        self.temperature = [0.5] * n
        self.rainfall = [0.5] * n

    def get_ocean(self, x: int, y: int) -> bool:
        return self.ocean_mask[self._index(x, y)]

    def get_temp(self, x: int, y: int) -> float:
        return self.temperature[self._index(x, y)]

    def get_rain(self, x: int, y: int) -> float:
        return self.rainfall[self._index(x, y)]