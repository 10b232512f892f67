"""Toroidal geometry on the unit square.

All spatial computations treat the unit square as a torus: opposite edges are
identified, so a point near x=0 is a neighbor of a point near x=1. This is
what makes every generated field tile without a seam.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Point:
    """A location on the unit torus, both coordinates in [0, 1)."""

    x: float
    y: float


def toroidal_distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points measured on the unit torus.

    Each axis takes the shorter of the direct and the wraparound path.

    Returns:
        Distance in [0, sqrt(0.5)]
    """
    dx = abs(p1.x - p2.x)
    dy = abs(p1.y - p2.y)
    dx = min(dx, 1.0 - dx)
    dy = min(dy, 1.0 - dy)
    return float(np.sqrt(dx * dx + dy * dy))


def toroidal_distance_grid(
    positions: NDArray[np.float64],
    sites: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Vectorized toroidal distance between every position and every site.

    Args:
        positions: ...x2 array of (x, y) sample positions
        sites: Nx2 array of (x, y) site positions

    Returns:
        Array of shape positions.shape[:-1] + (N,)
    """
    delta = np.abs(positions[..., np.newaxis, :] - sites)
    delta = np.minimum(delta, 1.0 - delta)
    return np.sqrt(np.sum(delta * delta, axis=-1))


class SiteSet:
    """Fixed, read-only collection of sites in the unit square.

    Sites may coincide; duplicates simply reduce effective coverage.
    """

    def __init__(self, points: NDArray[np.float64] | list[Point]) -> None:
        """Create a site set.

        Args:
            points: Nx2 array of coordinates or a list of Points
        """
        if isinstance(points, list):
            coords = np.array([[p.x, p.y] for p in points], dtype=np.float64)
            coords = coords.reshape(-1, 2)
        else:
            coords = np.array(points, dtype=np.float64).reshape(-1, 2)
        coords.setflags(write=False)
        self._coords = coords

    @classmethod
    def random(cls, count: int, rng: np.random.Generator) -> SiteSet:
        """Draw `count` sites uniformly from [0, 1)^2.

        Args:
            count: Number of sites
            rng: Random generator supplying the coordinates
        """
        if count < 0:
            raise ValueError(f"Site count must be non-negative, got {count}")
        return cls(rng.random((count, 2)))

    @property
    def coords(self) -> NDArray[np.float64]:
        """Read-only Nx2 array of site coordinates."""
        return self._coords

    def __len__(self) -> int:
        return len(self._coords)

    def __iter__(self) -> Iterator[Point]:
        for x, y in self._coords:
            yield Point(float(x), float(y))

    def __getitem__(self, index: int) -> Point:
        x, y = self._coords[index]
        return Point(float(x), float(y))

    def __repr__(self) -> str:
        return f"SiteSet({len(self)} sites)"
