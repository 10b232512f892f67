"""Core data types: toroidal geometry and intensity fields."""

from .geometry import Point, SiteSet, toroidal_distance, toroidal_distance_grid
from .field import IntensityField, round_half_up

__all__ = [
    "Point",
    "SiteSet",
    "toroidal_distance",
    "toroidal_distance_grid",
    "IntensityField",
    "round_half_up",
]
