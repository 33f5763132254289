"""Generator configuration models and TOML loading."""

import tomllib
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, NonNegativeFloat


class CoastlineShape(str, Enum):
    """Coastline shaping policy applied after classification."""

    NONE = "none"
    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"


class GeneratorConfig(BaseModel):
    """Complete layer map generation configuration."""

    markers: list[str] = Field(
        default_factory=list,
        description="One marker per layer, ordered lowest to highest",
    )
    weights: list[NonNegativeFloat] = Field(
        default_factory=list,
        description="Relative size of each layer (missing entries default to 1.0)",
    )
    width: int = Field(default=64, gt=0, description="Map width in cells")
    height: int = Field(default=64, gt=0, description="Map height in cells")
    scale: float = Field(
        default=0.5, gt=0.0, le=1.0, description="Noise frequency divisor"
    )
    seed: float = Field(default=0.0, description="Noise offset")
    randomize: bool = Field(
        default=False, description="Draw a new seed on every full generation"
    )
    centered: bool = Field(
        default=False, description="Cell (0, 0) is the center of the map"
    )
    coastline_shape: CoastlineShape = Field(
        default=CoastlineShape.NONE, description="Coastline shaping policy"
    )
    border_width: int = Field(
        default=0, ge=0, description="Ring of lowest-layer cells outside the map"
    )
    fade_out_tiles: bool = Field(
        default=False, description="Paint overlap halos into the next lower layer"
    )

    @property
    def layer_count(self) -> int:
        return len(self.markers)

    @property
    def effective_centered(self) -> bool:
        """Whether coordinates are centered; the ellipse mask always is."""
        return self.centered or self.coastline_shape is CoastlineShape.ELLIPSE


def load_config(config_path: Path) -> GeneratorConfig:
    """Load configuration from a TOML file.

    Keys may live at the top level or inside a ``[generator]`` table.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed GeneratorConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If a field is out of range.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return GeneratorConfig.model_validate(data.get("generator", data))
