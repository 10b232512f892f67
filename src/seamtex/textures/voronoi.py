"""Tileable Voronoi distance field generator."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..core.field import IntensityField, round_half_up
from ..core.geometry import SiteSet, toroidal_distance_grid
from .base import FieldGenerator

logger = logging.getLogger(__name__)

# Pixel-to-site distances per band (32 MB as float64, twice that for the per-axis deltas)
DEFAULT_BAND_ELEMENTS = 1 << 22


@dataclass
class DistanceFieldGenerator(FieldGenerator):
    """Generates a seamless nearest-site distance field.

    Every pixel is assigned the toroidal distance to its nearest site. The
    distances are normalized by the largest one found anywhere on the grid
    and inverted, so pixels on a site come out black (0) and the pixel
    farthest from every site comes out white (255).

    Attributes:
        width: Field width in pixels
        height: Field height in pixels
        seed: Random seed used when sites are drawn here
        num_points: Number of sites to draw when `sites` is not given
        sites: Explicit site set; takes precedence over num_points
        band_elements: Site distances held in memory at once; rows are
            processed in bands of band_elements // (width * N), at least one
    """

    num_points: int = 20
    sites: SiteSet | None = None
    band_elements: int = DEFAULT_BAND_ELEMENTS

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.sites is None:
            self.sites = SiteSet.random(self.num_points, self.rng)
        if self.band_elements <= 0:
            raise ValueError(f"band_elements must be positive, got {self.band_elements}")

    def band_rows(self) -> int:
        """Rows per band so that one band stays within band_elements distances."""
        return max(1, self.band_elements // (self.width * max(1, len(self.sites))))

    def nearest_distances(self) -> NDArray[np.float64]:
        """Toroidal distance from each pixel to its nearest site.

        Returns:
            HxW float array

        Raises:
            ValueError: If the site set is empty
        """
        if len(self.sites) == 0:
            raise ValueError(
                "Distance field: at least one site is required to define a nearest-site distance"
            )

        xs, ys = self._sample_grid()
        positions = np.stack([xs, ys], axis=-1)
        result = np.empty((self.height, self.width), dtype=np.float64)

        rows = self.band_rows()
        for start in range(0, self.height, rows):
            stop = min(start + rows, self.height)
            band = toroidal_distance_grid(positions[start:stop], self.sites.coords)
            result[start:stop] = band.min(axis=-1)
            logger.debug("Distance rows %d-%d done", start, stop - 1)

        return result

    def generate(self) -> IntensityField:
        """Generate the distance field.

        Raises:
            ValueError: If there are no sites, or every pixel lies on a site
                (zero maximum distance, nothing to normalize by)
        """
        logger.info(
            "Generating %dx%d distance field from %d sites",
            self.width, self.height, len(self.sites),
        )

        # First pass: nearest-site distances and their global maximum
        distances = self.nearest_distances()
        max_distance = float(distances.max())
        if max_distance <= 0.0:
            raise ValueError(
                "Distance field: maximum nearest-site distance is zero, "
                "cannot normalize (every pixel coincides with a site)"
            )

        # Second pass: normalize and invert (distant = brighter)
        normalized = 1.0 - distances / max_distance
        intensity = 255 - round_half_up(normalized * 255)

        logger.info("Distance field done (max distance %.4f)", max_distance)
        return IntensityField(intensity)
