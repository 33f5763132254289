"""Output targets that receive painted layer markers."""

from collections.abc import Sequence
from typing import Protocol


class PaintSink(Protocol):
    """Receives "paint layer L at cell (x, y)" commands."""

    def paint(self, layer: int, x: int, y: int) -> None: ...


class TileLayers:
    """One output target per layer, each mapping cell positions to a marker.

    Repainting a cell on the same layer is idempotent.
    """

    def __init__(self, markers: Sequence[str]):
        self.markers = list(markers)
        self._cells: list[dict[tuple[int, int], str]] = [{} for _ in self.markers]

    @property
    def layer_count(self) -> int:
        return len(self.markers)

    def paint(self, layer: int, x: int, y: int) -> None:
        self._cells[layer][(x, y)] = self.markers[layer]

    def sorting_order(self, layer: int) -> int:
        """Render order of a layer's target; lower layers get higher values."""
        return self.layer_count - layer

    def cells(self, layer: int) -> set[tuple[int, int]]:
        """Cell positions painted on a layer."""
        return set(self._cells[layer])

    def marker_at(self, layer: int, x: int, y: int) -> str | None:
        return self._cells[layer].get((x, y))

    def top_layer_at(self, x: int, y: int) -> int | None:
        """Highest layer painted at a cell, or None if nothing is painted."""
        for layer in range(self.layer_count - 1, -1, -1):
            if (x, y) in self._cells[layer]:
                return layer
        return None

    def painted_count(self) -> int:
        return sum(len(cells) for cells in self._cells)

    def render_text(self) -> str:
        """Plain-text preview, one character per cell, top row (max y) first."""
        positions = set()
        for cells in self._cells:
            positions.update(cells)
        if not positions:
            return ""

        xs = [x for x, _ in positions]
        ys = [y for _, y in positions]
        lines = []
        for y in range(max(ys), min(ys) - 1, -1):
            row = []
            for x in range(min(xs), max(xs) + 1):
                layer = self.top_layer_at(x, y)
                row.append(" " if layer is None else self.markers[layer][:1] or "?")
            lines.append("".join(row))
        return "\n".join(lines)
