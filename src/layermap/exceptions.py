"""Custom exceptions for layered map generation."""


class LayerMapError(Exception):
    """Base exception for layer map errors."""

    pass


class ConfigError(LayerMapError):
    """Raised when the generator configuration cannot produce a map."""

    pass
