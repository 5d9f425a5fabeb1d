"""Semantic version helpers.

Thin layer over the ``semver`` package that adds the release types
used by nextver and increments versions the way npm's ``semver.inc``
does, which is what Conventional Commits tooling expects:

- ``major``/``minor``/``patch`` on a prerelease promote it to the release
  it precedes when the lower components are already zero
  (``1.0.0-rc.1`` + ``major`` → ``1.0.0``).
- ``premajor``/``preminor``/``prepatch`` bump the component and start a
  new prerelease train (``1.2.3`` + ``preminor`` + ``beta`` → ``1.3.0-beta.0``).
- ``prerelease`` advances the train (``1.3.0-beta.0`` → ``1.3.0-beta.1``) or,
  on a stable version, behaves like ``prepatch``.
"""

from __future__ import annotations

from enum import StrEnum

import semver

INITIAL_VERSION = "0.0.0"


class ReleaseType(StrEnum):
    """Semver component to increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PREMAJOR = "premajor"
    PREMINOR = "preminor"
    PREPATCH = "prepatch"
    PRERELEASE = "prerelease"

    @property
    def is_prerelease(self) -> bool:
        """True for the ``pre*`` family of release types."""
        return self.value.startswith("pre")


class BumpType(StrEnum):
    """Bump category recommended from a batch of commits."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    @property
    def level(self) -> int:
        """Strength of the bump, higher is stronger."""
        return {"patch": 1, "minor": 2, "major": 3}[self.value]

    def as_prerelease(self) -> ReleaseType:
        """Return the ``pre*`` release type for this category."""
        return ReleaseType(f"pre{self.value}")


def parse_version(version: str) -> semver.Version | None:
    """Parse a version string, returning None when it is not valid semver."""
    try:
        return semver.Version.parse(version)
    except (TypeError, ValueError):
        return None


def is_initial_version(version: str) -> bool:
    """True when ``version`` is the "no prior release" sentinel."""
    return version == INITIAL_VERSION


def is_prerelease(version: str) -> bool:
    """True when ``version`` carries a prerelease component."""
    parsed = parse_version(version)
    return parsed is not None and parsed.prerelease is not None


def compare_versions(left: str, right: str) -> int:
    """Compare two versions using semver precedence.

    Returns:
        -1, 0 or 1

    Raises:
        ValueError: If either version is not valid semver
    """
    return semver.Version.parse(left).compare(right)


def _split_prerelease(prerelease: str | None) -> list[str | int]:
    if not prerelease:
        return []
    return [int(part) if part.isdigit() else part for part in prerelease.split(".")]


def _next_prerelease(identifiers: list[str | int], preid: str | None) -> list[str | int]:
    if not identifiers:
        identifiers = [0]
    else:
        identifiers = list(identifiers)
        for index in range(len(identifiers) - 1, -1, -1):
            if isinstance(identifiers[index], int):
                identifiers[index] += 1
                break
        else:
            identifiers.append(0)

    if preid:
        # Switching to another identifier restarts the train at zero.
        if identifiers[0] != preid or len(identifiers) < 2 or not isinstance(identifiers[1], int):
            identifiers = [preid, 0]
    return identifiers


def increment_version(
    version: str,
    release_type: ReleaseType | str,
    preid: str | None = None,
) -> str | None:
    """Increment ``version`` by ``release_type``.

    Args:
        version: Current version (e.g. ``"1.2.3"``)
        release_type: One of the :class:`ReleaseType` values
        preid: Prerelease identifier (e.g. ``"beta"``) for ``pre*`` types

    Returns:
        The incremented version, or None if the version or release type
        is invalid
    """
    parsed = parse_version(version)
    try:
        kind = ReleaseType(release_type)
    except ValueError:
        return None
    if parsed is None:
        return None

    if kind in (ReleaseType.MAJOR, ReleaseType.MINOR, ReleaseType.PATCH):
        return str(parsed.next_version(kind.value))

    major, minor, patch = parsed.major, parsed.minor, parsed.patch
    pre = _split_prerelease(parsed.prerelease)

    if kind is ReleaseType.PREMAJOR:
        major, minor, patch = major + 1, 0, 0
        pre = _next_prerelease([], preid)
    elif kind is ReleaseType.PREMINOR:
        minor, patch = minor + 1, 0
        pre = _next_prerelease([], preid)
    elif kind is ReleaseType.PREPATCH:
        patch += 1
        pre = _next_prerelease([], preid)
    else:
        if not pre:
            patch += 1
        pre = _next_prerelease(pre, preid)

    prerelease = ".".join(str(part) for part in pre) or None
    return str(semver.Version(major, minor, patch, prerelease))
