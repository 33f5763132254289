"""Edge overlap: halo of each layer painted into the next lower layer."""

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from .grid import map_to_cell
from .output import PaintSink

# 8-connected neighborhood
_NEIGHBORS = np.ones((3, 3), dtype=bool)


def overlap_targets(layers: NDArray[np.int32]) -> dict[int, NDArray[np.bool_]]:
    """Find the cells each layer overlaps.

    A cell at layer ``L - 1`` is a target of layer ``L`` when any of its
    eight neighbors is at layer ``L``. Layer 0 never overlaps anything.

    Args:
        layers: Layer indices, indexed [y, x].

    Returns:
        Mapping of source layer to a boolean target mask; layers with no
        targets are omitted.
    """
    targets = {}
    if layers.size == 0:
        return targets

    for layer in range(1, int(layers.max()) + 1):
        source = layers == layer
        if not source.any():
            continue
        halo = ndimage.binary_dilation(source, structure=_NEIGHBORS) & (
            layers == layer - 1
        )
        if halo.any():
            targets[layer] = halo
    return targets


def overlap_edges(
    layers: NDArray[np.int32],
    sink: PaintSink,
    centered: bool,
) -> int:
    """Paint every layer onto the neighboring cells of the layer below it.

    Args:
        layers: Layer indices, indexed [y, x].
        sink: Output target receiving ``paint(layer, x, y)`` in cell coordinates.
        centered: Whether cell coordinates are centered.

    Returns:
        Number of cells painted.
    """
    height, width = layers.shape
    painted = 0
    for layer, mask in overlap_targets(layers).items():
        for y, x in np.argwhere(mask):
            sink.paint(layer, *map_to_cell(int(x), int(y), width, height, centered))
            painted += 1
    return painted
