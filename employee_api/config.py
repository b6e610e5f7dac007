"""Loading of the YAML configuration file."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import yaml

from employee_api.model import Config

DEFAULT_SEARCH_PATHS = ("/etc/employee-api/", ".")
_FILE_NAMES = ("config.yaml", "config.yml")


def read_config_and_property(search_paths: Iterable[str | Path] | None = None) -> Config:
    """Read config.yaml from the first search path holding one.

    An empty configuration is returned when no file is found or it cannot be read.
    """
    paths = DEFAULT_SEARCH_PATHS if search_paths is None else search_paths
    for directory in paths:
        for name in _FILE_NAMES:
            candidate = Path(directory) / name
            if not candidate.is_file():
                continue
            try:
                with candidate.open(encoding="utf-8") as handle:
                    data = yaml.safe_load(handle)
                return Config.from_dict(data if isinstance(data, dict) else None)
            except (OSError, yaml.YAMLError, ValueError, TypeError):
                return Config()
    return Config()