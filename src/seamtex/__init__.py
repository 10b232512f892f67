"""Seamtex - seamless procedural texture generation."""

from .core import IntensityField, Point, SiteSet, toroidal_distance
from .config import TextureConfig, PRESETS
from .filters import directional_blur, normalize
from .textures import DistanceFieldGenerator, FractalNoiseGenerator
from .pipeline import PipelineResult, RefinementPipeline, refine

__all__ = [
    "IntensityField",
    "Point",
    "SiteSet",
    "toroidal_distance",
    "TextureConfig",
    "PRESETS",
    "directional_blur",
    "normalize",
    "DistanceFieldGenerator",
    "FractalNoiseGenerator",
    "PipelineResult",
    "RefinementPipeline",
    "refine",
]
