"""Layer classification: cumulative-weight bucketing of normalized noise."""

import numpy as np
from numpy.typing import NDArray

from .weights import WeightTable


def classify_value(z: float, table: WeightTable) -> int:
    """Classify one normalized noise value into a layer index.

    Layers are contiguous buckets on [0, total): layer 0 spans [0, w0),
    layer 1 spans [w0, w0 + w1) and so on. The walk advances while the
    bucket's upper edge is strictly below ``z * total``, so a target equal
    to an upper edge stays in that bucket.

    Args:
        z: Normalized noise value in [0, 1].
        table: Reconciled layer weights.

    Returns:
        Layer index clamped to [0, layer_count - 1].
    """
    target = z * table.total
    amount = 0.0
    layer = 0
    weight = table.weight(layer)
    while amount + weight < target:
        amount += weight
        layer += 1
        weight = table.weight(layer)
    return min(layer, table.layer_count - 1)


def classify_layers(z: NDArray[np.float64], table: WeightTable) -> NDArray[np.int32]:
    """Classify a whole normalized field.

    Vectorized equivalent of :func:`classify_value`: the first bucket whose
    cumulative upper edge is >= the target.

    Args:
        z: Normalized noise field.
        table: Reconciled layer weights.

    Returns:
        Layer indices with the same shape as ``z``.
    """
    upper_edges = np.cumsum(np.asarray(table.weights, dtype=np.float64))
    layers = np.searchsorted(upper_edges, z * table.total, side="left")
    return np.minimum(layers, table.layer_count - 1).astype(np.int32)


def count_layers(layers: NDArray[np.int32], layer_count: int) -> list[int]:
    """Number of cells assigned to each layer."""
    return np.bincount(layers.ravel(), minlength=layer_count)[:layer_count].tolist()
