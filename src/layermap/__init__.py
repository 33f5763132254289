"""Noise-driven layered tilemap generation.

Partitions a grid into ordered layers using gradient noise and per-layer
weights, with optional coastline shaping, a water border and overlap
halos for blended layer transitions.
"""

from .config import CoastlineShape, GeneratorConfig, load_config
from .exceptions import ConfigError, LayerMapError
from .generator import TilemapGenerator, compute_grid, paint_layers, validate_config
from .grid import TileGrid, cell_to_map, map_to_cell
from .output import PaintSink, TileLayers
from .types import Cell, CellLayout, RectLayout
from .weights import WeightTable, reconcile_weights

__all__ = [
    # Config
    "CoastlineShape",
    "GeneratorConfig",
    "load_config",
    # Generation
    "TilemapGenerator",
    "compute_grid",
    "paint_layers",
    "validate_config",
    "WeightTable",
    "reconcile_weights",
    # Grid
    "Cell",
    "CellLayout",
    "RectLayout",
    "TileGrid",
    "cell_to_map",
    "map_to_cell",
    # Output
    "PaintSink",
    "TileLayers",
    # Exceptions
    "LayerMapError",
    "ConfigError",
]
