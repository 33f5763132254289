"""Core types: cell records and the cell/world layout."""

import math
from typing import Protocol

from pydantic import BaseModel


class Cell(BaseModel, frozen=True):
    """Immutable snapshot of one classified map cell.

    ``x`` and ``y`` are 0-based map coordinates.
    """

    x: int
    y: int
    world_x: float
    world_y: float
    z: float
    layer: int


class CellLayout(Protocol):
    """Mapping between cell coordinates and world positions."""

    def cell_to_world(self, x: int, y: int) -> tuple[float, float]: ...

    def world_to_cell(self, world_x: float, world_y: float) -> tuple[int, int]: ...


class RectLayout(BaseModel, frozen=True):
    """Square cell layout; cell (x, y) covers [x, x+1) * cell_size from origin."""

    cell_size: float = 1.0
    origin_x: float = 0.0
    origin_y: float = 0.0

    def cell_to_world(self, x: int, y: int) -> tuple[float, float]:
        return (
            self.origin_x + x * self.cell_size,
            self.origin_y + y * self.cell_size,
        )

    def world_to_cell(self, world_x: float, world_y: float) -> tuple[int, int]:
        return (
            math.floor((world_x - self.origin_x) / self.cell_size),
            math.floor((world_y - self.origin_y) / self.cell_size),
        )
