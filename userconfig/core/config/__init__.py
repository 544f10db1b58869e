"""User config package.

Groups the config facade, the primary config file store and related helpers.
"""

from __future__ import annotations

from .config import Config
from .errors import (
    ConfigDecodeError,
    ConfigDirectoryConflictError,
    ConfigValueError,
    InvalidConfigNameError,
    MissingKeyError,
    UserConfigError,
)
from .file_storage import ConfigDocument, read_config_document, write_config_document_atomic
from .general_config import CONFIG_EXTENSION, GeneralConfig
from .paths import config_root, resolve_config_dir, verify_or_create_directory


__all__ = [
    "Config",
    "GeneralConfig",
    "CONFIG_EXTENSION",
    "ConfigDocument",
    "read_config_document",
    "write_config_document_atomic",
    "config_root",
    "resolve_config_dir",
    "verify_or_create_directory",
    "UserConfigError",
    "InvalidConfigNameError",
    "ConfigDirectoryConflictError",
    "ConfigDecodeError",
    "MissingKeyError",
    "ConfigValueError",
]
