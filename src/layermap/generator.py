"""Main layer map generation orchestration."""

from collections.abc import Callable, Sequence

import numpy as np
import structlog

from .classification import classify_layers, count_layers
from .config import GeneratorConfig
from .exceptions import ConfigError
from .grid import TileGrid, cell_to_map, map_to_cell, world_positions
from .island import can_extend_border, extend_border, shape_coastline
from .noise import normalize_field, sample_field
from .output import PaintSink, TileLayers
from .overlap import overlap_edges
from .types import Cell, CellLayout, RectLayout
from .weights import WeightTable, reconcile_weights

logger = structlog.get_logger()

# Random seeds are drawn from [-SEED_RANGE, SEED_RANGE)
SEED_RANGE = 1024.0


def validate_config(config: GeneratorConfig) -> WeightTable:
    """Check that a configuration can produce a map.

    Returns:
        The reconciled weight table for the configured layers.

    Raises:
        ConfigError: If no layer markers are configured.
    """
    if config.layer_count < 1:
        raise ConfigError("no layers: configure at least one layer marker")
    return reconcile_weights(config.weights, config.layer_count)


def compute_grid(
    config: GeneratorConfig,
    layout: CellLayout,
    seed: float,
    table: WeightTable,
) -> TileGrid:
    """Sample, normalize, classify and shape a complete grid.

    Args:
        config: Generation configuration.
        layout: Cell to world mapping used to resolve world positions.
        seed: Noise offset for this pass.
        table: Reconciled weights for the configured layers.

    Returns:
        Fully classified TileGrid.
    """
    width, height = config.width, config.height
    centered = config.effective_centered

    field = sample_field(width, height, seed, config.scale)
    z = normalize_field(field)
    layers = classify_layers(z, table)
    z, layers = shape_coastline(z, layers, config.coastline_shape, table)

    world_x, world_y = world_positions(width, height, centered, layout)
    return TileGrid(
        width=width,
        height=height,
        centered=centered,
        z=z,
        layers=layers,
        world_x=world_x,
        world_y=world_y,
    )


def paint_layers(grid: TileGrid, config: GeneratorConfig, sink: PaintSink) -> int:
    """Paint a classified grid, its border ring and overlap halos.

    Returns:
        Number of paint commands issued.
    """
    painted = 0
    for y in range(grid.height):
        for x in range(grid.width):
            sink.paint(int(grid.layers[y, x]), *grid.map_to_cell(x, y))
            painted += 1

    if can_extend_border(
        config.border_width, config.layer_count, grid.width, grid.height
    ):
        painted += extend_border(
            sink, grid.width, grid.height, config.border_width, grid.centered
        )
    elif config.border_width > 0:
        logger.info(
            "border_skipped",
            border_width=config.border_width,
            width=grid.width,
            height=grid.height,
            layers=config.layer_count,
        )

    if config.fade_out_tiles:
        painted += overlap_edges(grid.layers, sink, grid.centered)

    return painted


class TilemapGenerator:
    """Generates layer maps and answers cell queries against the last one.

    A generation pass either publishes a complete new grid (and output
    target) or leaves the previous ones untouched.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        layout: CellLayout | None = None,
        layers_factory: Callable[[Sequence[str]], PaintSink] = TileLayers,
    ):
        """Initialize TilemapGenerator.

        Args:
            config: Generation configuration. With ``randomize`` set, each
                full generation stores its drawn seed in ``config.seed``.
            layout: Cell to world mapping; defaults to unit square cells.
            layers_factory: Builds the per-layer output target from the
                layer markers.
        """
        self.config = config
        self.layout = layout if layout is not None else RectLayout()
        self._layers_factory = layers_factory
        self._grid: TileGrid | None = None
        self._layers: PaintSink | None = None
        self._table: WeightTable | None = None

    @property
    def grid(self) -> TileGrid | None:
        """The last generated map, or None before the first generation."""
        return self._grid

    @property
    def layers(self) -> PaintSink | None:
        return self._layers

    @property
    def layers_generated(self) -> bool:
        return self._layers is not None

    @property
    def weight_table(self) -> WeightTable | None:
        return self._table

    @property
    def seed(self) -> float:
        return self.config.seed

    def generate(self, reuse_existing_layout: bool = False) -> TileGrid:
        """Generate a new map.

        Args:
            reuse_existing_layout: Keep the current output target untouched
                and only recompute the grid. Randomization is skipped so the
                grid matches what was painted before.

        Returns:
            The newly generated grid.

        Raises:
            ConfigError: If the configuration has no layers.
        """
        config = self.config
        try:
            table = validate_config(config)
        except ConfigError as e:
            logger.error("config_invalid", error=str(e))
            raise

        seed = config.seed
        if config.randomize and not reuse_existing_layout:
            seed = float(np.random.default_rng().uniform(-SEED_RANGE, SEED_RANGE))

        if config.effective_centered and not config.centered:
            logger.debug("centering_forced", shape=config.coastline_shape.value)

        logger.info(
            "generation_started",
            width=config.width,
            height=config.height,
            layers=config.layer_count,
            seed=seed,
            shape=config.coastline_shape.value,
            reuse_existing_layout=reuse_existing_layout,
        )

        grid = compute_grid(config, self.layout, seed, table)

        layers = self._layers
        if not reuse_existing_layout:
            layers = self._layers_factory(config.markers)
            painted = paint_layers(grid, config, layers)
            logger.debug("layers_painted", painted=painted)

        config.seed = seed
        self._grid = grid
        self._layers = layers
        self._table = table

        logger.info(
            "generation_complete",
            layer_counts=count_layers(grid.layers, config.layer_count),
        )
        return grid

    def cell_to_map(self, x: int, y: int) -> tuple[int, int]:
        """Map position of a cell, using the published grid when there is one."""
        if self._grid is not None:
            return self._grid.cell_to_map(x, y)
        return cell_to_map(
            x, y, self.config.width, self.config.height, self.config.effective_centered
        )

    def map_to_cell(self, x: int, y: int) -> tuple[int, int]:
        if self._grid is not None:
            return self._grid.map_to_cell(x, y)
        return map_to_cell(
            x, y, self.config.width, self.config.height, self.config.effective_centered
        )

    def get_map(self, x: int, y: int) -> Cell | None:
        """Cell at a map position, or None if out of range or not generated."""
        if self._grid is None:
            return None
        return self._grid.get_map(x, y)

    def get_cell(self, x: int, y: int) -> Cell | None:
        """Cell at a cell (caller) position."""
        if self._grid is None:
            return None
        return self._grid.get_cell(x, y)

    def get_world(self, world_x: float, world_y: float) -> Cell | None:
        """Cell containing a world position."""
        if self._grid is None:
            return None
        return self._grid.get_world(world_x, world_y, self.layout)
