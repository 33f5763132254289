"""Grid model: classified cell arrays and the cell/map coordinate transform.

Map coordinates are always 0-based, [0, width) x [0, height). Cell
coordinates are what callers and output targets see; when the map is
centered, cell (0, 0) is map (width // 2, height // 2).
"""

import numpy as np
from numpy.typing import NDArray

from .types import Cell, CellLayout


def cell_to_map(
    x: int, y: int, width: int, height: int, centered: bool
) -> tuple[int, int]:
    """Convert a cell position to a map position."""
    if centered:
        return x + width // 2, y + height // 2
    return x, y


def map_to_cell(
    x: int, y: int, width: int, height: int, centered: bool
) -> tuple[int, int]:
    """Convert a map position to a cell position."""
    if centered:
        return x - width // 2, y - height // 2
    return x, y


def world_positions(
    width: int,
    height: int,
    centered: bool,
    layout: CellLayout,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Resolve the world position of every map cell once.

    Returns:
        (world_x, world_y) arrays of shape (height, width).
    """
    world_x = np.empty((height, width), dtype=np.float64)
    world_y = np.empty((height, width), dtype=np.float64)
    for y in range(height):
        for x in range(width):
            cx, cy = map_to_cell(x, y, width, height, centered)
            world_x[y, x], world_y[y, x] = layout.cell_to_world(cx, cy)
    return world_x, world_y


class TileGrid:
    """Classified map: normalized noise and layer per cell.

    All arrays have shape (height, width) and are indexed [y, x].
    """

    def __init__(
        self,
        width: int,
        height: int,
        centered: bool,
        z: NDArray[np.float64],
        layers: NDArray[np.int32],
        world_x: NDArray[np.float64],
        world_y: NDArray[np.float64],
    ):
        self.width = width
        self.height = height
        self.centered = centered
        self.z = z
        self.layers = layers
        self.world_x = world_x
        self.world_y = world_y

    @property
    def shape(self) -> tuple[int, int]:
        return self.height, self.width

    def cell_to_map(self, x: int, y: int) -> tuple[int, int]:
        return cell_to_map(x, y, self.width, self.height, self.centered)

    def map_to_cell(self, x: int, y: int) -> tuple[int, int]:
        return map_to_cell(x, y, self.width, self.height, self.centered)

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if a map position is inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get_map(self, x: int, y: int) -> Cell | None:
        """Get the cell at a map position, or None if out of range."""
        if not self.in_bounds(x, y):
            return None
        return Cell(
            x=x,
            y=y,
            world_x=float(self.world_x[y, x]),
            world_y=float(self.world_y[y, x]),
            z=float(self.z[y, x]),
            layer=int(self.layers[y, x]),
        )

    def get_cell(self, x: int, y: int) -> Cell | None:
        """Get the cell at a cell (caller) position, or None if out of range."""
        return self.get_map(*self.cell_to_map(x, y))

    def get_world(
        self, world_x: float, world_y: float, layout: CellLayout
    ) -> Cell | None:
        """Get the cell containing a world position, or None if out of range."""
        return self.get_cell(*layout.world_to_cell(world_x, world_y))
