"""Coherent noise sampling and normalization for layer classification.

Provides a vectorized 2D gradient (Perlin) noise function, the per-cell
sampling used by the generator, and min/max normalization of the sampled
field.
"""

from dataclasses import dataclass

import numpy as np
import structlog
from numpy.typing import ArrayLike, NDArray

logger = structlog.get_logger()

# Fixed lattice hash (the reference Perlin permutation); the map seed offsets
# sample coordinates instead.
_PERMUTATION = (
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
    140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
    247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
    57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
    60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
    65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
    200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
    52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
    207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
    119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
    129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
    218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
    81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
    184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
    222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
)

_GRADIENTS = np.array(
    [[1, 1], [-1, 1], [1, -1], [-1, -1], [1, 0], [-1, 0], [0, 1], [0, -1]],
    dtype=np.float64,
)

_PERM = np.array(_PERMUTATION + _PERMUTATION, dtype=np.int64)


def _fade(t: NDArray[np.float64]) -> NDArray[np.float64]:
    """Quintic ease curve 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _corner_dot(
    xi: NDArray[np.int64],
    yi: NDArray[np.int64],
    xf: NDArray[np.float64],
    yf: NDArray[np.float64],
    dx: int,
    dy: int,
) -> NDArray[np.float64]:
    hashed = _PERM[_PERM[(xi + dx) & 255] + ((yi + dy) & 255)] & 7
    gradient = _GRADIENTS[hashed]
    return gradient[..., 0] * (xf - dx) + gradient[..., 1] * (yf - dy)


def gradient_noise(xs: ArrayLike, ys: ArrayLike) -> NDArray[np.float64]:
    """Evaluate 2D gradient noise at the given coordinates.

    The lattice repeats every 256 units. Integer coordinates always
    evaluate to 0.5.

    Args:
        xs: X coordinates (any shape, broadcast against ys).
        ys: Y coordinates.

    Returns:
        Noise values in [0, 1].
    """
    xs, ys = np.broadcast_arrays(
        np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64)
    )
    x0 = np.floor(xs)
    y0 = np.floor(ys)
    xf = xs - x0
    yf = ys - y0
    xi = x0.astype(np.int64) & 255
    yi = y0.astype(np.int64) & 255

    u = _fade(xf)
    v = _fade(yf)

    n00 = _corner_dot(xi, yi, xf, yf, 0, 0)
    n10 = _corner_dot(xi, yi, xf, yf, 1, 0)
    n01 = _corner_dot(xi, yi, xf, yf, 0, 1)
    n11 = _corner_dot(xi, yi, xf, yf, 1, 1)

    bottom = n00 + u * (n10 - n00)
    top = n01 + u * (n11 - n01)
    value = bottom + v * (top - bottom)

    return np.clip((value + 1.0) * 0.5, 0.0, 1.0)


def sample_noise(
    x: int,
    y: int,
    seed: float,
    width: int,
    height: int,
    scale: float,
) -> float:
    """Sample the raw noise value of a single map cell.

    Args:
        x: Map column.
        y: Map row.
        seed: Coordinate offset.
        width: Map width.
        height: Map height.
        scale: Frequency divisor in (0, 1].

    Returns:
        Raw noise value in [0, 1].
    """
    return float(
        gradient_noise((x + seed) / width / scale, (y + seed) / height / scale)
    )


@dataclass(frozen=True)
class NoiseField:
    """Raw noise samples for a whole map and their observed extremes."""

    raw: NDArray[np.float64]
    z_min: float
    z_max: float

    @property
    def is_flat(self) -> bool:
        return self.z_max == self.z_min


def sample_field(
    width: int,
    height: int,
    seed: float,
    scale: float,
) -> NoiseField:
    """Sample raw noise for every cell of a width x height map.

    Args:
        width: Map width in cells.
        height: Map height in cells.
        seed: Coordinate offset; the same seed and scale give the same field.
        scale: Frequency divisor in (0, 1].

    Returns:
        NoiseField with a (height, width) array indexed [y, x].
    """
    xs = (np.arange(width, dtype=np.float64) + seed) / width / scale
    ys = (np.arange(height, dtype=np.float64) + seed) / height / scale
    xx, yy = np.meshgrid(xs, ys)
    raw = gradient_noise(xx, yy)
    return NoiseField(raw=raw, z_min=float(raw.min()), z_max=float(raw.max()))


def normalize_field(field: NoiseField) -> NDArray[np.float64]:
    """Rescale a sampled field to [0, 1] using its observed min and max.

    A flat field (max == min) normalizes to all zeros.
    """
    if field.is_flat:
        logger.debug("degenerate_noise_field", value=field.z_min)
        return np.zeros_like(field.raw)

    z = (field.raw - field.z_min) / (field.z_max - field.z_min)
    return np.clip(z, 0.0, 1.0)
