"""Base class for procedural field generators."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from ..core.field import IntensityField


@dataclass
class FieldGenerator(ABC):
    """Abstract base class for procedural intensity field generators.

    Subclasses implement generate() to synthesize a single-channel field.
    Randomness comes from an explicit numpy Generator, either passed in as
    `rng` or created from `seed`; there is no process-wide random state.
    """

    width: int = 256
    height: int = 256
    seed: int | None = None
    rng: np.random.Generator | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate dimensions and initialize random state."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Field dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.rng is None:
            self.rng = np.random.default_rng(self.seed)

    @abstractmethod
    def generate(self) -> IntensityField:
        """Generate the field.

        Returns:
            IntensityField of size width x height
        """
        pass

    def generate_image(self, channel: str | None = None) -> Image.Image:
        """Generate the field as a PIL image."""
        return self.generate().to_image(channel)

    def _sample_grid(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Sample positions (x / width, y / height) for every pixel.

        Returns:
            Tuple of HxW arrays (xs, ys)
        """
        x = np.arange(self.width, dtype=np.float64) / self.width
        y = np.arange(self.height, dtype=np.float64) / self.height
        return np.meshgrid(x, y)

    def save(self, path: str, channel: str | None = None) -> None:
        """Generate and save the field to file.

        Args:
            path: Output file path (e.g., 'texture.png')
            channel: Output channel layout, see IntensityField.to_image
        """
        self.generate().save(path, channel)
