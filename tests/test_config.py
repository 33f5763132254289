"""Tests for generator configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from layermap.config import CoastlineShape, GeneratorConfig, load_config


class TestGeneratorConfig:
    """Tests for GeneratorConfig."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = GeneratorConfig()
        assert config.markers == []
        assert config.weights == []
        assert config.width == 64
        assert config.height == 64
        assert config.scale == 0.5
        assert config.seed == 0.0
        assert config.randomize is False
        assert config.centered is False
        assert config.coastline_shape is CoastlineShape.NONE
        assert config.border_width == 0
        assert config.fade_out_tiles is False

    def test_layer_count(self) -> None:
        """Layer count follows the markers."""
        assert GeneratorConfig(markers=["a", "b", "c"]).layer_count == 3

    def test_ellipse_forces_centering(self) -> None:
        """Ellipse maps are always centered."""
        config = GeneratorConfig(coastline_shape="ellipse", centered=False)
        assert config.effective_centered
        assert not GeneratorConfig(coastline_shape="rectangle").effective_centered
        assert GeneratorConfig(centered=True).effective_centered

    @pytest.mark.parametrize(
        "field,value",
        [
            ("scale", 0.0),
            ("scale", 1.5),
            ("width", 0),
            ("height", -3),
            ("border_width", -1),
            ("weights", [1.0, -0.5]),
            ("coastline_shape", "hexagon"),
        ],
    )
    def test_invalid_values(self, field: str, value) -> None:
        """Out-of-range fields are rejected."""
        with pytest.raises(ValidationError):
            GeneratorConfig(**{field: value})


class TestLoadConfig:
    """Tests for TOML loading."""

    def test_top_level_keys(self, tmp_path: Path) -> None:
        """Keys may sit at the top level."""
        path = tmp_path / "map.toml"
        path.write_text(
            'markers = ["~", "."]\nwidth = 12\ncoastline_shape = "rectangle"\n'
        )
        config = load_config(path)
        assert config.markers == ["~", "."]
        assert config.width == 12
        assert config.coastline_shape is CoastlineShape.RECTANGLE

    def test_generator_table(self, tmp_path: Path) -> None:
        """Keys may sit in a [generator] table."""
        path = tmp_path / "map.toml"
        path.write_text(
            '[generator]\nmarkers = ["~", ".", "^"]\nweights = [2.0, 1.0]\n'
            "border_width = 3\nfade_out_tiles = true\n"
        )
        config = load_config(path)
        assert config.layer_count == 3
        assert config.weights == [2.0, 1.0]
        assert config.border_width == 3
        assert config.fade_out_tiles is True

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    @pytest.mark.parametrize(
        "name, shape",
        [("atoll.toml", CoastlineShape.ELLIPSE), ("island.toml", CoastlineShape.RECTANGLE)],
    )
    def test_bundled_configs(self, name: str, shape: CoastlineShape) -> None:
        """The example configs in the repository load."""
        config = load_config(Path(__file__).parent.parent / "configs" / name)
        assert config.layer_count == 4
        assert config.coastline_shape is shape
