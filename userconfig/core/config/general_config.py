"""Primary `<name>.conf` file for an application.

Every typed accessor is a projection onto a flat str -> str mapping:
ints are stored in base 10, timestamps as RFC 3339, arrays as JSON and raw
bytes as surrogate-escaped UTF-8 text.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timedelta
from pathlib import Path, PurePath
from typing import Iterable

from .errors import ConfigDecodeError, ConfigValueError, InvalidConfigNameError, MissingKeyError
from .file_storage import ConfigDocument, read_config_document, write_config_document_atomic

logger = logging.getLogger(__name__)

CONFIG_EXTENSION = ".conf"

_MISSING = object()

_INT_RE = re.compile(r"[+-]?[0-9]+")
_RFC3339_RE = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}[Tt][0-9]{2}:[0-9]{2}:[0-9]{2}(\.[0-9]+)?([Zz]|[+-][0-9]{2}:[0-9]{2})"
)


def _is_blank(s) -> bool:
    if isinstance(s, PurePath):
        # Path("") collapses to ".".
        return str(s) in ("", ".")
    return not str(s or "").strip()


def format_datetime(t: datetime) -> str:
    if t.tzinfo is None or t.utcoffset() is None:
        raise ConfigValueError("datetime values must be timezone-aware")
    if t.utcoffset() % timedelta(minutes=1):
        raise ConfigValueError(f"UTC offset {t.utcoffset()} is not a whole number of minutes")
    s = t.replace(microsecond=0).isoformat(timespec="seconds")
    if t.utcoffset() == timedelta(0):
        s = s[: -len("+00:00")] + "Z"
    return s


def parse_datetime(raw: str) -> datetime:
    if not _RFC3339_RE.fullmatch(raw):
        raise ValueError(f"not an RFC 3339 timestamp: {raw!r}")
    # fromisoformat() does not accept a lowercase 't' or 'z'.
    return datetime.fromisoformat(raw.upper())


class GeneralConfig:
    """In-memory snapshot of one application's primary config file.

    Mutations stage the new value, save, and restore the previous value if
    the save fails, so the mapping always matches the last good snapshot.
    """

    def __init__(self, name: str, path: Path | str):
        if _is_blank(name) or _is_blank(path):
            raise InvalidConfigNameError(f"Invalid config file: name={name!r} path={path!r}")

        self._name = str(name)
        self._path = Path(path)
        self._values: dict[str, str] = {}
        self._config_files: list[str] = []
        self._raw_files: list[str] = []

        if not self.full_path.exists():
            logger.debug("Creating empty config file %s", self.full_path)
            self.save()
        self.load()

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> Path:
        return self._path

    @property
    def full_path(self) -> Path:
        return self._path / f"{self._name}{CONFIG_EXTENSION}"

    @property
    def config_files(self) -> tuple[str, ...]:
        return tuple(self._config_files)

    @property
    def raw_files(self) -> tuple[str, ...]:
        return tuple(self._raw_files)

    def _check_identity(self) -> None:
        if _is_blank(self._name) or _is_blank(str(self._path)):
            raise InvalidConfigNameError(f"Invalid config file: {self.full_path}")

    def load(self) -> None:
        """Discard in-memory state and re-read the file.

        Missing or malformed files raise; the previous snapshot is kept then.
        """

        self._check_identity()
        doc = read_config_document(self.full_path)
        self._values = doc.values
        self._config_files = doc.config_files
        self._raw_files = doc.raw_files

    def save(self) -> None:
        self._check_identity()
        write_config_document_atomic(
            self.full_path,
            ConfigDocument(
                config_files=list(self._config_files),
                raw_files=list(self._raw_files),
                values=dict(self._values),
            ),
        )

    def _commit(self, key: str, value) -> None:
        """Stage *value* under *key* (or remove it for _MISSING) and save.

        On failure the previous value is restored and the error re-raised.
        """

        old = self._values.get(key, _MISSING)
        if value is _MISSING:
            self._values.pop(key, None)
        else:
            self._values[key] = value
        try:
            self.save()
        except BaseException:
            if old is _MISSING:
                self._values.pop(key, None)
            else:
                self._values[key] = old
            raise

    # Strings

    def get(self, key: str) -> str:
        return self._values.get(key, "")

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise ConfigValueError(f"value for {key!r} must be a str, not {type(value).__name__}")
        self._commit(key, value)

    def delete_key(self, key: str) -> None:
        self._commit(key, _MISSING)

    def get_key_list(self) -> list[str]:
        return list(self._values)

    # Bytes

    def set_bytes(self, key: str, raw: bytes) -> None:
        self._commit(key, bytes(raw).decode("utf-8", "surrogateescape"))

    def get_bytes(self, key: str) -> bytes:
        return self.get(key).encode("utf-8", "surrogateescape")

    # Typed values

    def _require(self, key: str) -> str:
        if key not in self._values:
            raise MissingKeyError(f"no value stored for {key!r}")
        return self._values[key]

    def set_int(self, key: str, n: int) -> None:
        if isinstance(n, bool) or not isinstance(n, int):
            raise ConfigValueError(f"value for {key!r} must be an int")
        try:
            raw = str(n)
        except ValueError as exc:
            # int -> str conversion is length-limited (sys.set_int_max_str_digits).
            raise ConfigValueError(f"value for {key!r} is too large to store: {exc}") from exc
        self._commit(key, raw)

    def get_int(self, key: str) -> int:
        raw = self._require(key)
        if not _INT_RE.fullmatch(raw):
            raise ConfigDecodeError(f"value for {key!r} is not an integer: {raw!r}")
        try:
            return int(raw)
        except ValueError as exc:
            raise ConfigDecodeError(f"value for {key!r} is too large to parse: {exc}") from exc

    def set_datetime(self, key: str, t: datetime) -> None:
        self._commit(key, format_datetime(t))

    def get_datetime(self, key: str) -> datetime:
        raw = self._require(key)
        try:
            return parse_datetime(raw)
        except ValueError as exc:
            raise ConfigDecodeError(f"value for {key!r} is not a timestamp: {raw!r}") from exc

    def set_array(self, key: str, items: Iterable[str]) -> None:
        items = list(items)
        if not all(isinstance(x, str) for x in items):
            raise ConfigValueError(f"array for {key!r} must contain only strings")
        self._commit(key, json.dumps(items, ensure_ascii=False, separators=(",", ":")))

    def get_array(self, key: str) -> list[str]:
        raw = self._require(key)
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigDecodeError(f"value for {key!r} is not a JSON array: {raw!r}") from exc
        if not isinstance(items, list) or not all(isinstance(x, str) for x in items):
            raise ConfigDecodeError(f"value for {key!r} is not an array of strings: {raw!r}")
        return items

    # Registry

    def has_config_file(self, name: str) -> bool:
        return name in self._config_files
