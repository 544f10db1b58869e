"""Exceptions raised by the user config layer.

I/O failures are not wrapped: they surface as the builtin OSError family.
"""

from __future__ import annotations


class UserConfigError(Exception):
    pass


class InvalidConfigNameError(UserConfigError, ValueError):
    """A config name or directory path was blank."""


class ConfigDirectoryConflictError(UserConfigError, NotADirectoryError):
    """The config directory path exists but is not a directory."""


class ConfigDecodeError(UserConfigError, ValueError):
    """The config document, or a typed value stored in it, is malformed."""


class MissingKeyError(ConfigDecodeError, KeyError):
    """A typed getter was asked for a key that has no stored value."""

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0]) if self.args else ""


class ConfigValueError(UserConfigError, ValueError):
    """A value was rejected before being staged."""
