from __future__ import annotations

import logging
import os
import tempfile
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from .errors import ConfigDecodeError

logger = logging.getLogger(__name__)

# Section names are part of the on-disk format; do not rename.
ADDITIONAL_CONFIG_KEY = "additional_config"
RAW_FILES_KEY = "raw_files"
GENERAL_KEY = "general"

FILE_MODE = 0o644

# Raw byte values are stored as surrogate-escaped text, so the file must be
# written and read with the same error handler to round-trip them.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


@dataclass
class ConfigDocument:
    """Decoded contents of a primary config file."""

    config_files: list[str] = field(default_factory=list)
    raw_files: list[str] = field(default_factory=list)
    values: dict[str, str] = field(default_factory=dict)


def _unique(items: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def _string_list(data: dict[str, Any], key: str, *, source: Path) -> list[str]:
    raw = data.get(key, [])
    if not isinstance(raw, list) or not all(isinstance(x, str) for x in raw):
        raise ConfigDecodeError(f"{source}: {key!r} must be an array of strings")
    return list(raw)


def decode_config_document(text: str, *, source: Path) -> ConfigDocument:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigDecodeError(f"{source}: {exc}") from exc

    general = data.get(GENERAL_KEY, {})
    if not isinstance(general, dict):
        raise ConfigDecodeError(f"{source}: {GENERAL_KEY!r} must be a table")
    for k, v in general.items():
        if not isinstance(v, str):
            raise ConfigDecodeError(f"{source}: value for {k!r} is not a string")

    return ConfigDocument(
        config_files=_unique(_string_list(data, ADDITIONAL_CONFIG_KEY, source=source)),
        raw_files=_string_list(data, RAW_FILES_KEY, source=source),
        values=dict(general),
    )


def encode_config_document(doc: ConfigDocument) -> str:
    return tomli_w.dumps(
        {
            ADDITIONAL_CONFIG_KEY: list(doc.config_files),
            RAW_FILES_KEY: list(doc.raw_files),
            GENERAL_KEY: dict(doc.values),
        }
    )


def read_config_document(config_file: Path) -> ConfigDocument:
    """Read and decode *config_file*.

    A missing file raises FileNotFoundError; callers that want
    create-if-absent behavior must check for existence first.
    """

    with open(config_file, "r", encoding=_ENCODING, errors=_ERRORS) as f:
        text = f.read()
    doc = decode_config_document(text, source=config_file)
    logger.debug("Loaded %d value(s) from %s", len(doc.values), config_file)
    return doc


def write_config_document_atomic(config_file: Path, doc: ConfigDocument) -> None:
    """Encode *doc* and write it to *config_file* atomically (temp file then replace).

    The previous file stays in place if anything fails; errors are re-raised.
    """

    config_file = Path(config_file)
    payload = encode_config_document(doc)

    tmp_fd, tmp_path = tempfile.mkstemp(
        prefix=f"{config_file.name}.", suffix=".tmp", dir=str(config_file.parent)
    )
    try:
        with os.fdopen(tmp_fd, "w", encoding=_ENCODING, errors=_ERRORS) as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, FILE_MODE)
        os.replace(tmp_path, config_file)
    finally:
        try:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
        except OSError as exc:
            logger.debug("Failed to remove temp config file %s: %s", tmp_path, exc)

    logger.debug("Saved %d value(s) to %s", len(doc.values), config_file)
