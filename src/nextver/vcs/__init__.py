"""Version control access: git repository and version tags."""

from __future__ import annotations

from nextver.vcs.git import Commit, GitRepository
from nextver.vcs.tags import format_tag, format_tag_prefix, select_last_version

__all__ = [
    "Commit",
    "GitRepository",
    "format_tag",
    "format_tag_prefix",
    "select_last_version",
]
