"""Version tag naming and selection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import semver

if TYPE_CHECKING:
    from collections.abc import Iterable

PROJECT_NAME_PLACEHOLDER = "{projectName}"
SYNCED_TAG_PREFIX = "v"


def format_tag(tag_prefix: str, version: str) -> str:
    """Build the tag name for ``version`` (e.g. ``"v"`` + ``"1.2.3"``)."""
    return f"{tag_prefix}{version}"


def format_tag_prefix(
    version_tag_prefix: str | None,
    project_name: str,
    sync_versions: bool,
) -> str:
    """Compute the tag prefix used by a project.

    Args:
        version_tag_prefix: Explicit prefix; ``{projectName}`` is replaced
            by the project name
        project_name: Name of the project the tags belong to
        sync_versions: Whether all projects share one version line

    Returns:
        The explicit prefix if given, ``"v"`` for synced versions,
        otherwise ``"<project_name>-"``
    """
    if version_tag_prefix is not None:
        return version_tag_prefix.replace(PROJECT_NAME_PLACEHOLDER, project_name)
    if sync_versions:
        return SYNCED_TAG_PREFIX
    return f"{project_name}-"


def parse_tag(tag: str, tag_prefix: str) -> semver.Version | None:
    """Return the version carried by ``tag``, or None if it is not a version tag."""
    if not tag.startswith(tag_prefix):
        return None
    try:
        return semver.Version.parse(tag[len(tag_prefix) :])
    except ValueError:
        return None


def select_last_version(
    tags: Iterable[str],
    tag_prefix: str,
    *,
    include_prerelease: bool = False,
    preid: str | None = None,
) -> str | None:
    """Pick the highest version among the tags carrying ``tag_prefix``.

    Args:
        tags: Tag names from the repository
        tag_prefix: Prefix identifying the project's tags
        include_prerelease: Consider prerelease versions as candidates
        preid: When given, only prereleases of this identifier qualify

    Returns:
        The highest matching version string, or None when nothing matches
    """
    candidates: list[semver.Version] = []
    for tag in tags:
        version = parse_tag(tag, tag_prefix)
        if version is None:
            continue
        if version.prerelease is not None:
            if not include_prerelease:
                continue
            if preid and version.prerelease.split(".")[0] != preid:
                continue
        candidates.append(version)

    if not candidates:
        return None
    return str(max(candidates))
