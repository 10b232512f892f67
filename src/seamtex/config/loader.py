"""Load texture configurations from YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .settings import DEFAULT_PRESET, TextureConfig, get_preset


class ConfigLoader:
    """Loads texture configurations from YAML files.

    YAML format:
    ```yaml
    preset: refined
    size: 512
    num_points: 32
    blur_radius: 2
    rounds: 4
    seed: 7
    ```

    Every key except `preset` overrides the matching TextureConfig field of
    the preset (default: refined).
    """

    def __init__(self, search_paths: list[Path] | None = None) -> None:
        """Initialize loader with search paths.

        Args:
            search_paths: Directories to search for config YAML files by name.
                         Defaults to the current working directory.
        """
        if search_paths is None:
            self.search_paths = [Path.cwd()]
        else:
            self.search_paths = [Path(p) for p in search_paths]

        self._cache: dict[str, TextureConfig] = {}

    def load(self, name: str | Path) -> TextureConfig:
        """Load a configuration by name or path.

        A path to an existing file is loaded directly; otherwise {name}.yaml
        is looked up in the search paths.

        Args:
            name: Config name (without .yaml extension) or file path

        Returns:
            TextureConfig instance

        Raises:
            FileNotFoundError: If the YAML file cannot be found
            ValueError: If the YAML contents are invalid
        """
        key = str(name)
        if key in self._cache:
            return self._cache[key]

        yaml_path = self._find_yaml(name)
        if yaml_path is None:
            raise FileNotFoundError(
                f"Config '{name}' not found in search paths: {self.search_paths}"
            )

        config = self._load_yaml(yaml_path)
        self._cache[key] = config
        return config

    def _find_yaml(self, name: str | Path) -> Path | None:
        """Find YAML file for a config name or path."""
        direct = Path(name)
        if direct.is_file():
            return direct
        for search_path in self.search_paths:
            yaml_path = search_path / f"{name}.yaml"
            if yaml_path.exists():
                return yaml_path
        return None

    def _load_yaml(self, path: Path) -> TextureConfig:
        """Load config from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)

        return self.parse(data or {})

    def parse(self, data: dict[str, Any]) -> TextureConfig:
        """Build a TextureConfig from parsed YAML data."""
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a mapping, got {type(data).__name__}")

        params = dict(data)
        base = get_preset(params.pop("preset", DEFAULT_PRESET))

        unknown = set(params) - TextureConfig.field_names()
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        return base.with_overrides(**params)

    def clear_cache(self) -> None:
        """Clear the config cache."""
        self._cache.clear()
