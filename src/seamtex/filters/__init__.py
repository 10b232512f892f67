"""Field-to-field transformations."""

from .directional import directional_blur
from .normalize import normalize

__all__ = ["directional_blur", "normalize"]
