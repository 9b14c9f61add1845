# SPDX-License-Identifier: BUSL-1.1
"""Global YAML configuration loading and saving."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from tigen.config.validation import validate_settings
from tigen.errors import ConfigError

CONFIG_DIR = Path.home() / ".config" / "tigen"


@dataclass
class Settings:
    builder: str = "docker"         # docker | podman
    builder_bin: str = ""           # "" means the builder's own name
    toolbox_bin: str = "toolbox"
    images_dir: str = "images"
    template_dir: str = ""          # "" means the shipped templates


# camelCase YAML key -> Settings field
_KEYS = {
    "builder": "builder",
    "builderBin": "builder_bin",
    "toolboxBin": "toolbox_bin",
    "imagesDir": "images_dir",
    "templateDir": "template_dir",
}


class ConfigStore:
    """Reads and writes ~/.config/tigen/global.yaml.

    A missing file is not an error; every key has a default.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or CONFIG_DIR
        self.global_file = self.config_dir / "global.yaml"
        self._global_cache = None

    def load_global(self) -> dict:
        if self._global_cache is not None:
            return self._global_cache
        if self.global_file.exists():
            try:
                with open(self.global_file) as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"cannot parse {self.global_file}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"{self.global_file} must contain a mapping")
            self._global_cache = data
        else:
            self._global_cache = {}
        return self._global_cache

    def save_global(self, data: dict):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.global_file, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        self._global_cache = data

    def settings(self, **overrides) -> Settings:
        """Return validated settings; non-empty ``overrides`` win over the file."""
        g = self.load_global()
        values = {}
        for key, field_name in _KEYS.items():
            if key in g and g[key] is not None:
                values[field_name] = g[key]
        for field_name, value in overrides.items():
            if value:
                values[field_name] = value

        result = validate_settings(values)
        result.raise_if_invalid()
        return Settings(**{k: str(v) for k, v in values.items()})
