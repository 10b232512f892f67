"""Procedural field generation module."""

from .base import FieldGenerator
from .noise import GradientNoise, fractal_noise, FractalNoiseGenerator
from .voronoi import DistanceFieldGenerator

__all__ = [
    "FieldGenerator",
    "GradientNoise",
    "fractal_noise",
    "FractalNoiseGenerator",
    "DistanceFieldGenerator",
]
