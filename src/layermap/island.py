"""Island shaping: coastline carving and the outer water border.

Both coastline policies only ever lower a cell toward layer 0. A band cell
at depth ``d`` whose ``z * total`` exceeds the cumulative weight below layer
``d`` is forced to exactly that cumulative weight and to layer ``d``; depth 0
is therefore always the lowest layer.
"""

import math

import numpy as np
import structlog
from numpy.typing import NDArray
from scipy import ndimage

from .config import CoastlineShape
from .grid import map_to_cell
from .output import PaintSink
from .weights import WeightTable

logger = structlog.get_logger()


def _depth_levels(table: WeightTable) -> list[tuple[float, float]]:
    """(cumulative weight, normalized z) for each band depth."""
    levels = []
    for depth in range(table.layer_count):
        amount = table.cumulative(depth)
        levels.append((amount, amount / table.total if table.total > 0 else 0.0))
    return levels


def _lower_band(
    z: NDArray[np.float64],
    layers: NDArray[np.int32],
    index: tuple | NDArray[np.bool_],
    depth: int,
    level: tuple[float, float],
    total: float,
) -> None:
    amount, level_z = level
    over = z[index] * total > amount
    z[index] = np.where(over, level_z, z[index])
    layers[index] = np.where(over, depth, layers[index])


def apply_rectangular_inset(
    z: NDArray[np.float64],
    layers: NDArray[np.int32],
    table: WeightTable,
) -> tuple[NDArray[np.float64], NDArray[np.int32]]:
    """Fade the four map edges toward layer 0.

    Each edge is a band ``layer_count`` cells deep. Passes run top (max y),
    right (max x), bottom, left; where bands overlap in the corners the
    later pass decides.

    Args:
        z: Normalized noise field, indexed [y, x].
        layers: Layer indices from classification.
        table: Reconciled layer weights.

    Returns:
        Shaped (z, layers) copies.
    """
    height, width = z.shape
    z = z.copy()
    layers = layers.copy()
    levels = _depth_levels(table)
    total = table.total

    # top
    for depth in range(min(len(levels), height)):
        index = (height - 1 - depth, slice(None))
        _lower_band(z, layers, index, depth, levels[depth], total)

    # right
    for depth in range(min(len(levels), width)):
        index = (slice(None), width - 1 - depth)
        _lower_band(z, layers, index, depth, levels[depth], total)

    # bottom
    for depth in range(min(len(levels), height)):
        index = (depth, slice(None))
        _lower_band(z, layers, index, depth, levels[depth], total)

    # left
    for depth in range(min(len(levels), width)):
        index = (slice(None), depth)
        _lower_band(z, layers, index, depth, levels[depth], total)

    return z, layers


def ellipse_edge(y: int, width: int, height: int) -> int:
    """Distance from the center column to the ellipse boundary at row ``y``.

    ``y`` is measured from the center row. Cells with ``|x| >= edge`` lie
    outside the ellipse.
    """
    a = width / 2
    b = height / 2
    edge = round(math.sqrt(max(0.0, 1.0 - (y * y) / (b * b)) * a * a))
    # column +width/2 does not exist on even widths
    if width % 2 == 0 and edge == width // 2:
        edge -= 1
    return edge


def apply_elliptical_mask(
    z: NDArray[np.float64],
    layers: NDArray[np.int32],
    table: WeightTable,
) -> tuple[NDArray[np.float64], NDArray[np.int32]]:
    """Carve an elliptical island centered on the map.

    Rows are swept from the center row outward, mirrored into all four
    quadrants, and cells outside the ellipse become water. When the
    boundary steps in by more than one column between rows, the row below
    is carved out to the new boundary column as well. The first and last
    rows are cleared to close the poles.

    Land is then faded by its 8-neighbor (chessboard) distance from the
    carved water, using the rectangular inset's depth levels: a cell one
    step from the coast, orthogonally or diagonally, is at depth 1.

    Args:
        z: Normalized noise field, indexed [y, x].
        layers: Layer indices from classification.
        table: Reconciled layer weights.

    Returns:
        Shaped (z, layers) copies.
    """
    height, width = z.shape
    z = z.copy()
    layers = layers.copy()
    oy = height // 2
    columns = np.abs(np.arange(width) - width // 2)
    water = np.zeros((height, width), dtype=bool)

    previous_edge = None
    for y in range(height // 2 + 1):
        edge = ellipse_edge(y, width, height)
        outside = columns >= edge
        rows = {oy + y, oy - y}
        if previous_edge is not None and previous_edge - edge > 1:
            # back-fill the skipped columns on the previous row
            rows |= {oy + y - 1, oy - y + 1}
        for row in rows:
            if 0 <= row < height:
                water[row, outside] = True
        previous_edge = edge

    water[0, :] = True
    water[-1, :] = True
    z[water] = 0.0
    layers[water] = 0

    depth_map = ndimage.distance_transform_cdt(~water, metric="chessboard")
    levels = _depth_levels(table)
    for depth in range(1, len(levels)):
        _lower_band(z, layers, depth_map == depth, depth, levels[depth], table.total)

    return z, layers


def shape_coastline(
    z: NDArray[np.float64],
    layers: NDArray[np.int32],
    shape: CoastlineShape,
    table: WeightTable,
) -> tuple[NDArray[np.float64], NDArray[np.int32]]:
    """Apply the selected coastline policy.

    Returns:
        Shaped (z, layers); the inputs unchanged for CoastlineShape.NONE.
    """
    if shape is CoastlineShape.RECTANGLE:
        z, layers = apply_rectangular_inset(z, layers, table)
    elif shape is CoastlineShape.ELLIPSE:
        z, layers = apply_elliptical_mask(z, layers, table)
    else:
        return z, layers

    logger.debug("coastline_shaped", shape=shape.value, water=int(np.sum(layers == 0)))
    return z, layers


def can_extend_border(
    border_width: int, layer_count: int, width: int, height: int
) -> bool:
    """Whether the map is large enough to carry a water border."""
    return (
        border_width > 0
        and layer_count > 0
        and width > layer_count * 2
        and height > layer_count * 2
    )


def extend_border(
    sink: PaintSink,
    width: int,
    height: int,
    border_width: int,
    centered: bool,
) -> int:
    """Paint a ring of layer 0 cells around the map.

    The ring is ``border_width`` cells wide on every side; the bottom and top
    strips span the full width including the corners.

    Returns:
        Number of cells painted.
    """
    painted = 0

    # bottom and top strips, corners included
    for x in range(-border_width, width + border_width):
        for y in range(-border_width, 0):
            sink.paint(0, *map_to_cell(x, y, width, height, centered))
            sink.paint(
                0, *map_to_cell(x, y + border_width + height, width, height, centered)
            )
            painted += 2

    # left and right strips
    for y in range(height):
        for x in range(-border_width, 0):
            sink.paint(0, *map_to_cell(x, y, width, height, centered))
            sink.paint(
                0, *map_to_cell(x + border_width + width, y, width, height, centered)
            )
            painted += 2

    return painted
