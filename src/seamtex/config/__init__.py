"""Texture configuration: settings, presets and YAML loading."""

from .settings import DEFAULT_PRESET, FIELD_SOURCES, PRESETS, TextureConfig, get_preset
from .loader import ConfigLoader

__all__ = [
    "DEFAULT_PRESET",
    "FIELD_SOURCES",
    "PRESETS",
    "TextureConfig",
    "get_preset",
    "ConfigLoader",
]
