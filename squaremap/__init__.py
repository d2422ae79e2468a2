"""Square-grid world maps: terrain, tile maps, rivers, features, pathfinding and generation."""

__version__ = "0.1.0"