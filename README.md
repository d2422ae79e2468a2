# squaremap

Procedural world maps on a 4-connected square grid, written in plain Python
with no dependencies outside the standard library.

`squaremap.generation.pipeline.generate_world` builds a tile map from noise
and refines it in stages:

- **heightmap** (`squaremap.generation.heightmap`): multi-octave value noise.
  It can add ridges, either along tectonic plate boundaries or in a global
  direction. It can also apply a shape mask: `island`, `archipelago`,
  `pangaea`, `continents`, `ring_sea` or `shattered_archipelago`.
- **classify** (`squaremap.generation.classify`): tiles at or below the sea
  level become ocean and the rest plains. Ocean next to land becomes coast.
- **biome** (`squaremap.generation.biome`): land tiles are assigned mountain,
  hill, snow, tundra, desert, plains, grassland or forest. The choice depends
  on elevation, latitude and moisture.
- **post-processing** (`squaremap.generation.postprocess`): removes small
  islands and fills small enclosed lakes, then relabels the coast.
- **depressions** (`squaremap.generation.depressions`): fills closed basins by
  priority flood and turns them into lakes. This stage is off by default; set
  `WorldGenParams.lake_depressions = True` to run it.
- **climate** (`squaremap.generation.climate`): computes temperature (°C),
  rainfall (mm) and tile hilliness, with a west-to-east rain shadow.
- **rivers** (`squaremap.rivers`): grows river networks upstream from coastal
  outlets. Their strengths are stored on tile edges.
- **features** (`squaremap.features`): finds and names oceans, lakes, coasts,
  mountain ranges, biome regions, islands, continents and an ice cap.

Every stage can also be called on its own.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Generating a world

```python
from squaremap.generation.pipeline import WorldGenParams, generate_world
from squaremap.terrain import get_default_registry

params = WorldGenParams()
params.heightmap_params.shape = "island"
params.heightmap_params.shape_strength = 0.9

world = generate_world(30, 20, 999, params)

registry = get_default_registry()
water = sum(1 for _, tile in world.tile_map.items() if registry.is_water(tile.terrain))
print(f"{water} of {len(world.tile_map)} tiles are water")
print("climate grids present:", world.has_climate())
for feature in world.features:
    print(feature.id, feature.name, feature.size, feature.center)
```

A `WorldGenResult` holds:

- `tile_map`
- the row-major `heightmap` and `moisture` lists
- `temperature_celsius` and `rainfall_mm`, which are empty when climate is
  switched off
- `extra_noise`, with one grid per entry of `WorldGenParams.extra_noise_specs`
- the registry and the seed
- `features`, which is `None` when features are switched off

The same seed always gives the same world. Pass `None` as the seed to get a
random one.

## Terrain, maps and paths

`squaremap.terrain` defines the eleven built-in terrains as `TerrainType`.
Each one has a `TerrainDef`: a name, a move cost, a water flag and tags. An
infinite move cost means the terrain is impassable. `get_default_registry()`
returns the shared `TerrainRegistry`, and `register` adds new kinds to it.

```python
from squaremap.grid import Coord, grid_line, grid_spiral
from squaremap.pathfinding import astar, path_cost
from squaremap.terrain import TerrainType
from squaremap.tilemap import TileMap

tile_map = TileMap(10, 10, TerrainType.PLAINS)
for y in range(9):
    tile_map.set_terrain(Coord(5, y), TerrainType.MOUNTAIN)

path = astar(tile_map, Coord(0, 0), Coord(9, 0))
print(len(path), path_cost(tile_map, path))

print(grid_line(Coord(0, 0), Coord(2, 2)))   # 5 cells, 4-connected
print(len(grid_spiral(Coord(0, 0), 3)))      # 25
```

`astar` returns `None` when the goal cannot be reached. A positive
`river_crossing_cost` makes each river edge crossed cost extra, in
proportion to its strength.

Directions are numbered 0=E, 1=N, 2=W, 3=S, with y pointing down.
`Coord.neighbor` wraps any integer direction modulo 4.

`TileMap.get` returns `None` outside the map. `TileMap.tile_at` and
`TileMap.set_terrain` raise `IndexError` there.

## Rivers

River strength lives on tile edges and ranges from 0 to 255. Each tile
stores its own east and north edges. Its west and south edges belong to the
neighbouring tiles.

```python
from squaremap.grid import Coord
from squaremap.rivers import (
    RiverClass, add_river_flow, classify_river_strength, get_river_strength,
)
from squaremap.terrain import TerrainType
from squaremap.tilemap import TileMap

tile_map = TileMap(10, 10, TerrainType.PLAINS)
add_river_flow(tile_map, Coord(5, 5), 1, 10)
add_river_flow(tile_map, Coord(5, 5), 1, 15)
assert get_river_strength(tile_map, Coord(5, 5), 1) == 25
assert classify_river_strength(120) is RiverClass.RIVER
```

`iter_river_edges` yields `(owner, slot, strength)` for every edge that
carries flow. `generate_rivers` paints a network from a heightmap and
rainfall, tuned by `RiverGenParams`, and returns the number of edges it
painted.

## Editing

`squaremap.editor` holds the model of a world sculptor:

- `EditorState`: a heightmap in [0, 1] plus the settings for tools, brushes,
  overlays, climate and noise.
- Brushes and stamps in `squaremap.editor.tools`: a gaussian brush, ridge and
  rift stamps with optional spokes, and water source markers.
- A flood fill and a simple climate simulation in `squaremap.editor.sim`.
- JSON export, also in `squaremap.editor.sim`.

```python
from squaremap.editor.sim import export_world, run_climate, run_flood_fill
from squaremap.editor.state import EditorState, Tool
from squaremap.editor.tools import ToolRng, apply_brush, apply_ridge_stamp

state = EditorState(60, 40)
rng = ToolRng(7)

apply_brush(state, 30, 20, 0.2)
state.current_tool = Tool.RIDGE
apply_ridge_stamp(state, 10, 10, rng)

run_flood_fill(state)
run_climate(state)
print(export_world(state, "world.json"))
```

### Flood fill

`run_flood_fill` marks as ocean every cell at or below sea level that is
connected to a water source. When no water sources are set, it starts from
the low border cells instead.

### Climate

`run_climate` sets `temperature` and `rainfall` on the state, both in 0..1,
from:

- latitude and the sun angle
- elevation
- moisture carried along the wind direction, minus evaporation and the rain
  shadow of rising ground

### Export

`export_world` classifies the heightmap and applies biomes, then writes JSON
and returns the path it wrote. The file holds:

- `width`, `height` and `sea_level`
- `heightmap`, `moisture`, `temperature` and `rainfall`, rounded to four
  decimals
- the terrain name of each tile, under `terrain`

### Colours and mesh

`squaremap.editor.colors` turns heights, temperatures and rainfall into RGBA
`Color` values. `overlay_color` picks the colour for a cell under the
current overlay.

`squaremap.editor.mesh` provides:

- `terrain_vertices`: the terrain as a flat triangle list
- `brush_cursor_cells`: the cells under the brush outline
- `pick_terrain_grid`: the grid cell hit by a `Ray`

## What it does not do

The package has no window, no drawing and no command-line program.

The editor works on data only. Brushes, simulations, colours, mesh vertices
and picking all have to be driven by your own code, and the results drawn by
a renderer of your choice.

Worlds are not saved or loaded. Apart from the JSON written by
`export_world`, there is no storage.