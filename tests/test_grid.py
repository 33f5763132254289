"""Tests for the grid model and coordinate transform."""

import numpy as np
import pytest

from layermap.grid import TileGrid, cell_to_map, map_to_cell, world_positions
from layermap.types import RectLayout


def _make_grid(width: int, height: int, centered: bool) -> TileGrid:
    layout = RectLayout(cell_size=2.0, origin_x=10.0, origin_y=-4.0)
    world_x, world_y = world_positions(width, height, centered, layout)
    z = np.arange(width * height, dtype=np.float64).reshape(height, width) / (
        width * height
    )
    layers = (np.arange(width * height) % 3).reshape(height, width).astype(np.int32)
    return TileGrid(width, height, centered, z, layers, world_x, world_y)


class TestCoordinateTransform:
    """Tests for cell/map conversion."""

    @pytest.mark.parametrize("centered", [False, True])
    @pytest.mark.parametrize("width,height", [(10, 10), (7, 4), (1, 1)])
    def test_round_trip(self, width: int, height: int, centered: bool) -> None:
        """map_to_cell inverts cell_to_map over the whole map."""
        for y in range(height):
            for x in range(width):
                cell = map_to_cell(x, y, width, height, centered)
                assert cell_to_map(*cell, width, height, centered) == (x, y)

    def test_uncentered_is_identity(self) -> None:
        """Without centering cell and map coordinates agree."""
        assert cell_to_map(3, 4, 10, 10, False) == (3, 4)
        assert map_to_cell(3, 4, 10, 10, False) == (3, 4)

    def test_centered_origin(self) -> None:
        """Cell (0, 0) is the map center when centered."""
        assert cell_to_map(0, 0, 10, 7, True) == (5, 3)
        assert map_to_cell(0, 0, 10, 7, True) == (-5, -3)


class TestTileGrid:
    """Tests for TileGrid lookups."""

    def test_get_map(self) -> None:
        """Map lookup returns the stored cell data."""
        grid = _make_grid(5, 4, centered=False)
        cell = grid.get_map(2, 3)
        assert cell is not None
        assert (cell.x, cell.y) == (2, 3)
        assert cell.z == grid.z[3, 2]
        assert cell.layer == grid.layers[3, 2]

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (5, 0), (0, 4)])
    def test_get_map_out_of_range(self, x: int, y: int) -> None:
        """Out-of-range lookups return None."""
        grid = _make_grid(5, 4, centered=False)
        assert grid.get_map(x, y) is None

    def test_get_cell_centered(self) -> None:
        """Cell lookup goes through the centering transform."""
        grid = _make_grid(5, 4, centered=True)
        cell = grid.get_cell(0, 0)
        assert cell is not None
        assert (cell.x, cell.y) == (2, 2)
        assert grid.get_cell(3, 0) is None

    def test_world_positions_cached(self) -> None:
        """World positions come from the layout at cell coordinates."""
        grid = _make_grid(5, 4, centered=True)
        cell = grid.get_map(0, 0)
        assert cell is not None
        # map (0, 0) is cell (-2, -2)
        assert (cell.world_x, cell.world_y) == (6.0, -8.0)

    def test_get_world(self) -> None:
        """World lookup resolves the containing cell."""
        layout = RectLayout(cell_size=2.0, origin_x=10.0, origin_y=-4.0)
        grid = _make_grid(5, 4, centered=False)
        cell = grid.get_world(13.5, 1.9, layout)
        assert cell is not None
        assert (cell.x, cell.y) == (1, 2)
        assert grid.get_world(0.0, 0.0, layout) is None

    def test_shape(self) -> None:
        """Shape is (height, width)."""
        assert _make_grid(5, 4, centered=False).shape == (4, 5)
