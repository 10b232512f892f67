"""Noise functions for procedural field generation.

Implements seeded 2D Perlin gradient noise and its fractal (fBm) sum using
numpy, optionally periodic so that the result tiles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..core.field import IntensityField, round_half_up
from .base import FieldGenerator

logger = logging.getLogger(__name__)

# Size of the permutation table; also the longest lattice period supported
PERMUTATION_SIZE = 256


def _fade(t: NDArray[np.float64]) -> NDArray[np.float64]:
    """Smoothstep fade function: 6t^5 - 15t^4 + 10t^3"""
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: NDArray[np.float64], b: NDArray[np.float64], t: NDArray[np.float64]) -> NDArray[np.float64]:
    """Linear interpolation."""
    return a + t * (b - a)


def _generate_permutation(rng: np.random.Generator) -> NDArray[np.int64]:
    """Generate a doubled permutation table for noise hashing."""
    p = np.arange(PERMUTATION_SIZE, dtype=np.int64)
    rng.shuffle(p)
    return np.concatenate([p, p])


def _grad2d(hash_val: NDArray[np.int64], x: NDArray[np.float64], y: NDArray[np.float64]) -> NDArray[np.float64]:
    """Compute gradient dot product for 2D Perlin noise."""
    h = hash_val & 3
    # 4 gradient vectors: (1,1), (-1,1), (1,-1), (-1,-1)
    u = np.where(h < 2, x, y)
    v = np.where(h < 2, y, x)
    return np.where(h & 1, -u, u) + np.where(h & 2, -v, v)


class GradientNoise:
    """Seeded 2D Perlin gradient noise.

    The same seed (or generator state) always yields the same permutation
    table, so sampling is fully deterministic.
    """

    def __init__(self, seed: int | None = None, rng: np.random.Generator | None = None) -> None:
        """Create a noise primitive.

        Args:
            seed: Seed for the permutation table (ignored if rng is given)
            rng: Generator to draw the permutation table from
        """
        if rng is None:
            rng = np.random.default_rng(seed if seed is not None else 0)
        self.perm = _generate_permutation(rng)

    def sample(
        self,
        x: NDArray[np.float64],
        y: NDArray[np.float64],
        period: int | None = None,
    ) -> NDArray[np.float64]:
        """Evaluate noise at the given coordinates.

        Args:
            x: Array of x coordinates (lattice units)
            y: Array of y coordinates, same shape as x
            period: If set, lattice coordinates wrap with this period on both
                axes and the noise repeats every `period` units

        Returns:
            Array of noise values in approximately [-1, 1]
        """
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        perm = self.perm

        x_floor = np.floor(x)
        y_floor = np.floor(y)
        xf = x - x_floor
        yf = y - y_floor

        if period is not None:
            if not 1 <= period <= PERMUTATION_SIZE:
                raise ValueError(
                    "Fractal noise: lattice period must be in "
                    f"[1, {PERMUTATION_SIZE}], got {period}"
                )
            xi = x_floor.astype(np.int64) % period
            yi = y_floor.astype(np.int64) % period
            xi1 = (xi + 1) % period
            yi1 = (yi + 1) % period
        else:
            xi = x_floor.astype(np.int64) & 255
            yi = y_floor.astype(np.int64) & 255
            xi1 = xi + 1
            yi1 = yi + 1

        # Fade curves
        u = _fade(xf)
        v = _fade(yf)

        # Hash coordinates of cell corners
        aa = perm[perm[xi] + yi]
        ab = perm[perm[xi] + yi1]
        ba = perm[perm[xi1] + yi]
        bb = perm[perm[xi1] + yi1]

        # Gradient dot products
        g_aa = _grad2d(aa, xf, yf)
        g_ba = _grad2d(ba, xf - 1, yf)
        g_ab = _grad2d(ab, xf, yf - 1)
        g_bb = _grad2d(bb, xf - 1, yf - 1)

        # Bilinear interpolation
        x1 = _lerp(g_aa, g_ba, u)
        x2 = _lerp(g_ab, g_bb, u)
        return _lerp(x1, x2, v)


def fractal_noise(
    noise: GradientNoise,
    x: NDArray[np.float64],
    y: NDArray[np.float64],
    octaves: int = 4,
    persistence: float = 0.5,
    lacunarity: float = 2.0,
    scale: float = 1.0,
    tileable: bool = False,
) -> NDArray[np.float64]:
    """Generate fractal Brownian motion (fBm) noise.

    Sums `octaves` layers of the same gradient noise, each at `lacunarity`
    times the frequency and `persistence` times the amplitude of the last.

    Args:
        noise: Gradient noise primitive
        x: Sample x positions in the unit square
        y: Sample y positions in the unit square
        octaves: Number of noise layers to combine
        persistence: Amplitude multiplier per octave (typically 0.5)
        lacunarity: Frequency multiplier per octave (typically 2.0)
        scale: Base frequency multiplier
        tileable: Round each octave's frequency to a whole number of lattice
            cells and wrap the lattice, so the result tiles over the unit square

    Returns:
        Array of noise values, normalized to approximately [-1, 1]
    """
    if octaves < 1:
        raise ValueError(f"Fractal noise needs at least one octave, got {octaves}")

    result = np.zeros(np.shape(x), dtype=np.float64)
    amplitude = 1.0
    frequency = 1.0
    max_amplitude = 0.0

    for _ in range(octaves):
        effective = scale * frequency
        if tileable:
            period = max(1, int(round(effective)))
            layer = noise.sample(x * period, y * period, period=period)
        else:
            layer = noise.sample(x * effective, y * effective)
        result += layer * amplitude
        max_amplitude += amplitude
        amplitude *= persistence
        frequency *= lacunarity

    # Normalize to approximately [-1, 1]
    return result / max_amplitude


@dataclass
class FractalNoiseGenerator(FieldGenerator):
    """Generates a multi-octave gradient noise field.

    Raw fBm values in [-1, 1] are mapped to [0, 1] and quantized to 8 bits.
    Without `tileable`, the field carries no seam guarantee.

    Attributes:
        width: Field width in pixels
        height: Field height in pixels
        seed: Random seed for the permutation table
        octaves: Number of noise layers
        persistence: Amplitude multiplier per octave
        lacunarity: Frequency multiplier per octave
        scale: Base frequency (1.0 = one lattice cell across the field)
        tileable: Use integer-periodic frequencies so the field tiles
    """

    octaves: int = 4
    persistence: float = 0.5
    lacunarity: float = 2.0
    scale: float = 1.0
    tileable: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        self.noise = GradientNoise(rng=self.rng)

    def generate(self) -> IntensityField:
        """Generate the noise field."""
        logger.info(
            "Generating %dx%d fractal noise (%d octaves, tileable=%s)",
            self.width, self.height, self.octaves, self.tileable,
        )
        xs, ys = self._sample_grid()
        value = fractal_noise(
            self.noise, xs, ys,
            octaves=self.octaves,
            persistence=self.persistence,
            lacunarity=self.lacunarity,
            scale=self.scale,
            tileable=self.tileable,
        )

        # Map [-1, 1] to [0, 1]
        result = np.clip((value + 1.0) / 2.0, 0.0, 1.0)
        return IntensityField(round_half_up(result * 255))
