"""Exception hierarchy for nextver.

All errors raised by nextver derive from :class:`NextverError` so callers
can catch everything the tool raises with a single ``except`` clause.

Note that "no previous tag" is *not* an error outcome for the version
engine: :class:`TagNotFoundError` is raised by the tag lookup and recovered
by the resolver, which falls back to the initial version.
"""

from __future__ import annotations


class NextverError(Exception):
    """Base exception for all nextver errors."""

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\n{self.details}"
        return self.message


# Configuration errors


class ConfigError(NextverError):
    """Base class for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when pyproject.toml cannot be found."""


class ConfigValidationError(ConfigError):
    """Raised when configuration is invalid."""


# VCS errors


class VCSError(NextverError):
    """Base class for version control errors."""


class NotARepositoryError(VCSError):
    """Raised when the path is not inside a git repository."""


class GitError(VCSError):
    """Raised when a git command fails."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message, details=stderr.strip() if stderr else None)
        self.stderr = stderr


class TagNotFoundError(VCSError):
    """Raised when no version tag matches the requested prefix."""

    def __init__(self, tag_prefix: str) -> None:
        super().__init__(f"No version tag found with prefix {tag_prefix!r}")
        self.tag_prefix = tag_prefix
