[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "squaremap"
version = "0.1.0"
description = "Square-grid world map generation: heightmaps, terrain, climate, rivers, features, pathfinding and editor tools"
requires-python = ">=3.10"
dependencies = []
keywords = ["map", "worldgen", "terrain", "heightmap", "procedural", "grid", "rivers", "pathfinding"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
    "Topic :: Games/Entertainment :: Simulation",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["squaremap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
