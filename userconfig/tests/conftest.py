from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest


# Safety default: during pytest, never touch the user's real config root.
os.environ.setdefault(
    "USERCONFIG_CONFIG_ROOT",
    tempfile.mkdtemp(prefix="userconfig-test-root-"),
)


@pytest.fixture
def temp_config_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config root at a fresh temp directory."""
    root = tmp_path / "xdg-config"
    root.mkdir()
    monkeypatch.setenv("USERCONFIG_CONFIG_ROOT", str(root))
    return root


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """Create an application config directory for GeneralConfig tests."""
    path = tmp_path / "myapp"
    path.mkdir()
    return path
