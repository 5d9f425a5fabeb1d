"""nextver: next semantic version from Conventional Commits."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from nextver.core import DependencyUpdate, NewVersion, ReleaseType, try_bump

try:
    __version__ = version("nextver")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "DependencyUpdate",
    "NewVersion",
    "ReleaseType",
    "__version__",
    "try_bump",
]
