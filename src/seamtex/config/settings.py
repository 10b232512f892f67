"""Texture generation settings and the built-in presets."""

from __future__ import annotations

import dataclasses
import numbers
from dataclasses import dataclass
from typing import Any, Self

from ..textures.voronoi import DEFAULT_BAND_ELEMENTS


# Fields that can seed the refinement or guide the blur direction
FIELD_SOURCES = ("distance", "noise")

_INT_FIELDS = ("size", "num_points", "blur_radius", "octaves", "rounds", "band_elements")
_REAL_FIELDS = ("persistence", "lacunarity", "noise_scale")
_BOOL_FIELDS = ("tileable_noise", "normalize")


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class TextureConfig:
    """Parameters for one run of the texture pipeline.

    Attributes:
        size: Texture edge length in pixels (textures are square)
        num_points: Number of Voronoi sites
        blur_radius: Blur radius of the first refinement round
        octaves: Number of noise octaves
        persistence: Noise amplitude multiplier per octave, in (0, 1)
        lacunarity: Noise frequency multiplier per octave, > 1
        noise_scale: Base noise frequency
        tileable_noise: Use integer-periodic noise frequencies
        rounds: Number of blur rounds; the radius doubles each round
        normalize: Contrast-stretch after every blur round
        base_field: Field the refinement starts from
        direction_field: Field that steers the blur direction
        seed: Random seed (None = fresh entropy)
        band_elements: Pixel-to-site distances computed at once by the
            distance generator (bounds its memory use)
    """

    size: int = 256
    num_points: int = 20
    blur_radius: int = 2
    octaves: int = 4
    persistence: float = 0.5
    lacunarity: float = 2.0
    noise_scale: float = 1.0
    tileable_noise: bool = False
    rounds: int = 4
    normalize: bool = True
    base_field: str = "distance"
    direction_field: str = "distance"
    seed: int | None = None
    band_elements: int = DEFAULT_BAND_ELEMENTS

    def __post_init__(self) -> None:
        self._check_types()
        if self.size <= 0:
            raise ValueError(f"size must be positive, got {self.size}")
        if self.num_points < 1:
            raise ValueError(
                f"num_points must be at least 1 for a distance field, got {self.num_points}"
            )
        if self.blur_radius < 0:
            raise ValueError(f"blur_radius must be non-negative, got {self.blur_radius}")
        if self.octaves < 1:
            raise ValueError(f"octaves must be at least 1, got {self.octaves}")
        if not 0.0 < self.persistence < 1.0:
            raise ValueError(f"persistence must be in (0, 1), got {self.persistence}")
        if self.lacunarity <= 1.0:
            raise ValueError(f"lacunarity must be greater than 1, got {self.lacunarity}")
        if self.noise_scale <= 0.0:
            raise ValueError(f"noise_scale must be positive, got {self.noise_scale}")
        if self.rounds < 0:
            raise ValueError(f"rounds must be non-negative, got {self.rounds}")
        if self.band_elements <= 0:
            raise ValueError(f"band_elements must be positive, got {self.band_elements}")
        for name in ("base_field", "direction_field"):
            value = getattr(self, name)
            if value not in FIELD_SOURCES:
                raise ValueError(
                    f"{name} must be one of {', '.join(FIELD_SOURCES)}, got '{value}'"
                )

    def _check_types(self) -> None:
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if not _is_int(value):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        for name in _REAL_FIELDS:
            value = getattr(self, name)
            if not _is_real(value):
                raise ValueError(f"{name} must be a number, got {value!r}")
        for name in _BOOL_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be true or false, got {value!r}")
        if self.seed is not None and not _is_int(self.seed):
            raise ValueError(f"seed must be an integer, got {self.seed!r}")

    def with_overrides(self, **overrides: Any) -> Self:
        """Return a copy with the given fields changed (None values are ignored)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in dataclasses.fields(cls)}


# Registry of presets - one per pipeline variant
PRESETS: dict[str, TextureConfig] = {
    # Plain tileable Voronoi distance field
    "voronoi": TextureConfig(rounds=0),
    # Distance field blurred along its own gradient
    "blur": TextureConfig(rounds=1, normalize=False),
    # Distance field blurred along the fractal noise
    "noise_blur": TextureConfig(rounds=1, normalize=False, direction_field="noise"),
    # Multi-round blur with normalization
    "refined": TextureConfig(rounds=4, normalize=True),
}

DEFAULT_PRESET = "refined"


def get_preset(name: str) -> TextureConfig:
    """Look up a preset by name."""
    config = PRESETS.get(name)
    if config is None:
        raise ValueError(f"Unknown preset: {name} (available: {', '.join(PRESETS)})")
    return config
