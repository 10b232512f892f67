"""IntensityField: the single-channel grid passed between pipeline stages."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from numpy.typing import ArrayLike, NDArray
from PIL import Image


# Maps an output channel name to its RGB index
CHANNELS = {"r": 0, "g": 1, "b": 2}


def round_half_up(values: ArrayLike) -> NDArray[np.float64]:
    """Round to the nearest integer, halves going up (0.5 -> 1)."""
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


class IntensityField:
    """Immutable HxW grid of 8-bit intensities.

    Pixels are addressed as (x, y) with 0 <= x < width and 0 <= y < height,
    stored row-major so that `pixels[y, x]` is pixel (x, y). Pixel (x, y)
    corresponds to the sample position (x / width, y / height).
    """

    def __init__(self, pixels: ArrayLike) -> None:
        """Create a field, clamping values to [0, 255].

        Args:
            pixels: 2D array of intensities (any numeric dtype)
        """
        arr = np.asarray(pixels)
        if arr.ndim != 2:
            raise ValueError(f"Intensity field must be 2D, got shape {arr.shape}")
        if arr.size == 0:
            raise ValueError("Intensity field must not be empty")
        if arr.dtype != np.uint8:
            arr = np.clip(arr, 0, 255).astype(np.uint8)
        else:
            arr = arr.copy()
        arr.setflags(write=False)
        self._pixels = arr

    @classmethod
    def full(cls, width: int, height: int, value: int = 0) -> IntensityField:
        """Create a flat field filled with a single value."""
        return cls(np.full((height, width), value, dtype=np.uint8))

    @classmethod
    def from_image(cls, image: Image.Image) -> IntensityField:
        """Create a field from a PIL image, converting it to grayscale."""
        return cls(np.array(image.convert("L")))

    @property
    def pixels(self) -> NDArray[np.uint8]:
        """Read-only HxW uint8 array."""
        return self._pixels

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        """(height, width) of the underlying array."""
        return self._pixels.shape

    def __getitem__(self, xy: tuple[int, int]) -> int:
        x, y = xy
        return int(self._pixels[y, x])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntensityField):
            return NotImplemented
        return np.array_equal(self._pixels, other._pixels)

    def __repr__(self) -> str:
        return f"IntensityField({self.width}x{self.height})"

    def min(self) -> int:
        return int(self._pixels.min())

    def max(self) -> int:
        return int(self._pixels.max())

    def to_array(self) -> NDArray[np.uint8]:
        """Return a writable copy of the pixel data."""
        return self._pixels.copy()

    def to_image(self, channel: str | None = None) -> Image.Image:
        """Convert to a PIL image.

        Args:
            channel: None for an 8-bit grayscale image; "rgb" to replicate the
                value into all three channels; "r", "g" or "b" to place the
                value in that channel only

        Returns:
            PIL Image in L or RGB mode
        """
        if channel is None:
            return Image.fromarray(self.to_array())

        if channel == "rgb":
            rgb = np.repeat(self._pixels[:, :, np.newaxis], 3, axis=2)
        elif channel in CHANNELS:
            rgb = np.zeros((self.height, self.width, 3), dtype=np.uint8)
            rgb[:, :, CHANNELS[channel]] = self._pixels
        else:
            raise ValueError(f"Unknown output channel: {channel}")
        return Image.fromarray(rgb)

    def save(self, path: str | Path, channel: str | None = None) -> None:
        """Write the field to an image file (format from the extension)."""
        self.to_image(channel).save(str(path))
