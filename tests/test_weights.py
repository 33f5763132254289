"""Tests for weight reconciliation."""

import pytest
from structlog.testing import capture_logs

from layermap.exceptions import ConfigError
from layermap.weights import reconcile_weights


class TestReconcileWeights:
    """Tests for reconcile_weights."""

    def test_missing_weights_default_to_one(self) -> None:
        """Missing weights are filled with 1.0."""
        table = reconcile_weights([2.0, 1.0], 3)
        assert table.weights == (2.0, 1.0, 1.0)
        assert table.total == 4.0

    def test_extra_weights_ignored(self) -> None:
        """Weights past the layer count do not count toward the total."""
        table = reconcile_weights([1.0, 2.0, 3.0, 4.0], 2)
        assert table.weights == (1.0, 2.0)
        assert table.total == 3.0

    def test_exact_weights(self) -> None:
        """One weight per layer is used as-is."""
        table = reconcile_weights([0.5, 0.25], 2)
        assert table.weights == (0.5, 0.25)
        assert table.total == 0.75
        assert table.layer_count == 2

    def test_no_weights(self) -> None:
        """No weights at all gives equal layers."""
        table = reconcile_weights([], 4)
        assert table.weights == (1.0, 1.0, 1.0, 1.0)
        assert table.total == 4.0

    def test_zero_layers_raises(self) -> None:
        """A table needs at least one layer."""
        with pytest.raises(ConfigError):
            reconcile_weights([1.0], 0)

    def test_missing_weights_logged(self) -> None:
        """Defaulting missing weights is logged as a warning."""
        with capture_logs() as logs:
            reconcile_weights([2.0], 3)
        events = [log for log in logs if log["event"] == "weights_defaulted"]
        assert len(events) == 1
        assert events[0]["log_level"] == "warning"


class TestWeightTable:
    """Tests for WeightTable helpers."""

    def test_cumulative(self) -> None:
        """Cumulative weight sums the layers below a depth."""
        table = reconcile_weights([2.0, 1.0], 3)
        assert table.cumulative(0) == 0.0
        assert table.cumulative(1) == 2.0
        assert table.cumulative(2) == 3.0
        assert table.cumulative(3) == 4.0

    def test_weight_past_table_defaults(self) -> None:
        """Layers past the table weigh 1.0."""
        table = reconcile_weights([3.0], 1)
        assert table.weight(0) == 3.0
        assert table.weight(5) == 1.0
