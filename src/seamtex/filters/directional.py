"""Direction-guided line blur with toroidal wraparound."""

import logging

import numpy as np

from ..core.field import IntensityField

logger = logging.getLogger(__name__)


def direction_angles(direction: IntensityField) -> np.ndarray:
    """Map intensities [0, 255] linearly onto angles [0, 2*pi) radians."""
    return direction.pixels.astype(np.float64) / 256.0 * 2.0 * np.pi


def directional_blur(
    source: IntensityField,
    direction: IntensityField,
    radius: int,
) -> IntensityField:
    """Average `source` along a per-pixel line whose angle comes from `direction`.

    Each output pixel is the unweighted mean of 2*radius + 1 samples taken at
    integer offsets -radius..radius along the direction, including the pixel
    itself. Sample positions wrap around the edges, so a seamless source
    stays seamless.

    Args:
        source: Field to sample from
        direction: Field whose intensity selects the blur angle per pixel
        radius: Non-negative half-length of the sampling line

    Returns:
        New blurred field of the same size
    """
    if radius < 0:
        raise ValueError(f"Directional blur: radius must be non-negative, got {radius}")
    if source.shape != direction.shape:
        raise ValueError(
            f"Directional blur: source {source.shape} and direction {direction.shape} "
            "fields must have the same shape"
        )
    if radius == 0:
        return source

    height, width = source.shape
    pixels = source.pixels
    angles = direction_angles(direction)
    cos_t = np.cos(angles)
    sin_t = np.sin(angles)
    ys, xs = np.indices((height, width))

    total = np.zeros((height, width), dtype=np.int64)
    for i in range(-radius, radius + 1):
        dx = np.rint(i * cos_t).astype(np.int64)
        dy = np.rint(i * sin_t).astype(np.int64)
        # numpy's % is a true modulo, never negative
        total += pixels[(ys + dy) % height, (xs + dx) % width]

    count = 2 * radius + 1
    # Integer round-half-up of total / count
    blurred = (2 * total + count) // (2 * count)
    logger.debug("Directional blur radius %d done", radius)
    return IntensityField(blurred)
