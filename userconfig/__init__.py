"""Per-application configuration files in the user's config directory."""

from __future__ import annotations

from .core.config import Config, GeneralConfig

__all__ = ["Config", "GeneralConfig"]

__version__ = "0.1.0"
