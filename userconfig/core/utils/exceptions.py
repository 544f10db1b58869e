from __future__ import annotations

import errno

_PERMISSION_ERRNOS = (errno.EPERM, errno.EACCES)


def describe_error(exc: BaseException) -> str:
    """Short reason a config could not be opened, for the CLI's stderr."""

    code = getattr(exc, "errno", None)
    if isinstance(exc, PermissionError) or code in _PERMISSION_ERRNOS:
        return f"permission denied: {exc}"
    # ConfigDirectoryConflictError is a NotADirectoryError.
    if isinstance(exc, NotADirectoryError) or code == errno.ENOTDIR:
        return f"not a directory: {exc}"
    if isinstance(exc, FileNotFoundError):
        return f"missing parent directory: {exc}"
    return str(exc)
