"""Configuration handling for modlicense."""
from __future__ import annotations

from modlicense.config.loader import (
    CONFIG_FILE_NAMES,
    find_config_file,
    load_config,
    read_config_file,
)
from modlicense.models.config import RunnerConfig

__all__ = [
    "CONFIG_FILE_NAMES",
    "RunnerConfig",
    "find_config_file",
    "load_config",
    "read_config_file",
]
