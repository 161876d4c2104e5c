"""Locate and read the optional ``.modlicense.yaml`` settings file.

A repository can pin its scanner, descriptor name and disallowed license
types by committing a settings file at the top of the tree being scanned.
When ``--config`` is not given, the scanned ROOT is searched first and the
current working directory second, so running the tool from outside the
repository still picks up the repository's own settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from modlicense.exceptions import ConfigurationError
from modlicense.logging import get_logger
from modlicense.models.config import RunnerConfig

log = get_logger(__name__)

# Checked in this order inside every search directory
CONFIG_FILE_NAMES = (".modlicense.yaml", ".modlicense.yml")


def find_config_file(*search_dirs: Union[str, Path]) -> Optional[Path]:
    """Return the first settings file found in search_dirs.

    Directories are tried in the order given. Within a directory the
    ``.yaml`` spelling wins over ``.yml``. Missing or non-directory entries
    are skipped.
    """
    for directory in search_dirs:
        for name in CONFIG_FILE_NAMES:
            candidate = Path(directory) / name
            if candidate.is_file():
                return candidate
    return None


def read_config_file(path: Path) -> RunnerConfig:
    """Parse one settings file into a RunnerConfig.

    A file that is empty or holds only comments yields the defaults.

    Raises:
        ConfigurationError: The file is unreadable, is not YAML, is not a
            mapping, or names unknown or invalid settings.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file '{path}': {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in '{path}': {e}") from e

    if data is None:
        return RunnerConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )

    try:
        return RunnerConfig.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'root'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration in '{path}': {problems}") from e


def load_config(
    config_path: Optional[str] = None, root: Optional[Union[str, Path]] = None
) -> RunnerConfig:
    """Resolve the settings for one invocation.

    Args:
        config_path: Explicit ``--config`` file; disables the search.
        root: Directory tree about to be scanned; searched before the cwd.

    Returns:
        Settings from the chosen file, or the defaults when there is none.

    Raises:
        ConfigurationError: If the chosen file cannot be used.
    """
    if config_path is not None:
        source: Optional[Path] = Path(config_path)
    else:
        search_dirs = [Path(root)] if root is not None else []
        search_dirs.append(Path.cwd())
        source = find_config_file(*search_dirs)

    if source is None:
        log.debug("using default configuration")
        return RunnerConfig()

    config = read_config_file(source)
    log.info("loaded configuration", path=str(source))
    return config
