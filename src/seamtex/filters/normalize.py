"""Contrast stretching."""

import numpy as np

from ..core.field import IntensityField, round_half_up


def normalize(field: IntensityField) -> IntensityField:
    """Stretch a field so its intensities span the full [0, 255] range.

    A flat field (min == max) is returned unchanged.
    """
    low = field.min()
    high = field.max()
    if high <= low:
        return field

    scaled = (field.pixels.astype(np.float64) - low) / (high - low) * 255.0
    return IntensityField(round_half_up(scaled))
