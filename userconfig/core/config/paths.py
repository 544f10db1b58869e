"""Config directory helpers.

Kept separate from the store so tests can point the whole layer at a temp
directory without touching the user's real config root.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_config_path

from .errors import ConfigDirectoryConflictError, InvalidConfigNameError

logger = logging.getLogger(__name__)

CONFIG_ROOT_ENV = "USERCONFIG_CONFIG_ROOT"


def config_root() -> Path:
    """Return the per-user configuration root.

    Priority:
    - USERCONFIG_CONFIG_ROOT
    - the platform's user config dir (XDG_CONFIG_HOME or ~/.config on Linux)
    """

    p = os.environ.get(CONFIG_ROOT_ENV)
    if p:
        return Path(p)
    return user_config_path()


def resolve_config_dir(name: str, *, root: Path | None = None) -> Path:
    """Return `<root>/<name>`, where root defaults to config_root()."""

    if not (name or "").strip():
        raise InvalidConfigNameError(f"Invalid config name: {name!r}")
    base = Path(root) if root is not None else config_root()
    return base / name


def verify_or_create_directory(path: Path) -> Path:
    """Make sure *path* is a directory, creating the last level if missing.

    Only one level is created; a missing parent surfaces as FileNotFoundError.
    """

    path = Path(path)
    if not path.exists():
        try:
            path.mkdir(mode=0o755)
            logger.debug("Created config directory %s", path)
        except FileExistsError:
            # Lost a race with another creator; fall through to the type check.
            pass

    if not path.is_dir():
        raise ConfigDirectoryConflictError(f"{path} exists and is not a directory")
    return path
