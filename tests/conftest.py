"""Shared test fixtures for layer map tests."""

import pytest
import structlog

from layermap.config import GeneratorConfig
from layermap.weights import WeightTable, reconcile_weights


class RecordingSink:
    """Paint sink that records every paint command."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int, int]] = []

    def paint(self, layer: int, x: int, y: int) -> None:
        self.calls.append((layer, x, y))

    @property
    def painted(self) -> set[tuple[int, int, int]]:
        return set(self.calls)

    def positions(self, layer: int) -> set[tuple[int, int]]:
        return {(x, y) for l, x, y in self.calls if l == layer}


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def three_layers() -> WeightTable:
    """Three equally weighted layers."""
    return reconcile_weights([1.0, 1.0, 1.0], 3)


@pytest.fixture
def island_config() -> GeneratorConfig:
    """10x10 rectangular island with a 2-cell water border."""
    return GeneratorConfig(
        markers=["~", ".", "^"],
        weights=[1.0, 1.0, 1.0],
        width=10,
        height=10,
        scale=0.5,
        seed=0.0,
        coastline_shape="rectangle",
        border_width=2,
    )
