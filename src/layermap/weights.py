"""Per-layer weight reconciliation."""

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from .exceptions import ConfigError

logger = structlog.get_logger()

DEFAULT_WEIGHT = 1.0


@dataclass(frozen=True)
class WeightTable:
    """Effective weights, exactly one per layer, and their sum."""

    weights: tuple[float, ...]
    total: float

    @property
    def layer_count(self) -> int:
        return len(self.weights)

    def weight(self, layer: int) -> float:
        """Weight of a layer; layers past the table weigh DEFAULT_WEIGHT."""
        if 0 <= layer < len(self.weights):
            return self.weights[layer]
        return DEFAULT_WEIGHT

    def cumulative(self, depth: int) -> float:
        """Summed weight of all layers below ``depth``."""
        amount = 0.0
        for layer in range(depth):
            amount += self.weight(layer)
        return amount


def reconcile_weights(weights: Sequence[float], layer_count: int) -> WeightTable:
    """Reconcile supplied weights against the number of layers.

    Missing weights default to 1.0 and extra weights are ignored.

    Args:
        weights: Supplied per-layer weights.
        layer_count: Number of layers.

    Returns:
        WeightTable with one weight per layer.

    Raises:
        ConfigError: If layer_count < 1.
    """
    if layer_count < 1:
        raise ConfigError(f"no layers (layer_count={layer_count})")

    supplied = [float(w) for w in weights]
    if len(supplied) < layer_count:
        logger.warning(
            "weights_defaulted",
            supplied=len(supplied),
            layer_count=layer_count,
            default=DEFAULT_WEIGHT,
        )
    elif len(supplied) > layer_count:
        logger.debug(
            "weights_ignored", supplied=len(supplied), layer_count=layer_count
        )

    effective = supplied[:layer_count]
    effective += [DEFAULT_WEIGHT] * (layer_count - len(effective))

    total = 0.0
    for weight in effective:
        total += weight

    return WeightTable(weights=tuple(effective), total=total)
