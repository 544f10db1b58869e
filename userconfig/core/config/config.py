"""User config facade."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable

from .general_config import GeneralConfig
from .paths import resolve_config_dir, verify_or_create_directory

logger = logging.getLogger(__name__)


class Config:
    """Configuration for one application, stored under `<config root>/<name>/`."""

    def __init__(self, name: str, *, resolver: Callable[[str], Path] | None = None):
        resolve = resolver or resolve_config_dir
        self._name = name
        self._path = verify_or_create_directory(Path(resolve(name)))
        self.general = GeneralConfig(name, self._path)
        logger.debug("Opened config %r at %s", name, self._path)

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> None:
        self.general.load()

    def save(self) -> None:
        self.general.save()

    def get(self, key: str) -> str:
        return self.general.get(key)

    def set(self, key: str, value: str) -> None:
        self.general.set(key, value)

    def get_bytes(self, key: str) -> bytes:
        return self.general.get_bytes(key)

    def set_bytes(self, key: str, raw: bytes) -> None:
        self.general.set_bytes(key, raw)

    def get_int(self, key: str) -> int:
        return self.general.get_int(key)

    def set_int(self, key: str, n: int) -> None:
        self.general.set_int(key, n)

    def get_datetime(self, key: str) -> datetime:
        return self.general.get_datetime(key)

    def set_datetime(self, key: str, t: datetime) -> None:
        self.general.set_datetime(key, t)

    def get_array(self, key: str) -> list[str]:
        return self.general.get_array(key)

    def set_array(self, key: str, items: Iterable[str]) -> None:
        self.general.set_array(key, items)

    def delete_key(self, key: str) -> None:
        self.general.delete_key(key)

    def get_key_list(self) -> list[str]:
        return self.general.get_key_list()

    def has_config_file(self, name: str) -> bool:
        return self.general.has_config_file(name)
