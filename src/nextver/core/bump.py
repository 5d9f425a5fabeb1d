"""Bump calculators: manual override and commit-driven automatic bump."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nextver.core.commits import recommend_bump
from nextver.core.version import ReleaseType, increment_version, is_prerelease

if TYPE_CHECKING:
    from nextver.config.models import CommitsConfig, PresetConfig
    from nextver.vcs.git import GitRepository


def manual_bump(
    since: str,
    release_type: ReleaseType | str,
    preid: str | None = None,
) -> str | None:
    """Increment ``since`` by an explicitly requested release type.

    Commit history plays no part here: the operator picked the release type.

    Returns:
        The new version, or None if ``since`` cannot be incremented
    """
    return increment_version(since, release_type, preid)


async def auto_bump(
    repo: GitRepository,
    since: str,
    preset: str | PresetConfig,
    project_root: str,
    tag_prefix: str,
    release_type: ReleaseType | str | None = None,
    preid: str | None = None,
    skip_unstable: bool = False,
    options: CommitsConfig | None = None,
) -> str | None:
    """Increment ``since`` by the bump the commit history calls for.

    When ``release_type`` is ``prerelease`` the recommended category
    decides how the prerelease train moves:

    - a stable ``since`` starts a new train with the ``pre*`` form of the
      category (``minor`` → ``preminor``), since semver cannot go from a
      stable version to a prerelease without knowing which component to bump;
    - a ``since`` already inside a train only advances its counter.

    Args:
        repo: Repository to inspect
        since: Version to increment
        preset: Convention preset name or configuration
        project_root: Path the commits are scoped to
        tag_prefix: Prefix of the project's version tags
        release_type: Requested release type; only ``prerelease`` matters here
        preid: Prerelease identifier
        skip_unstable: Ignore prerelease tags when looking for the last tag
        options: Commit parser options

    Returns:
        The new version, or None if no bump is recommended or the
        increment is invalid
    """
    recommended = await recommend_bump(
        repo,
        project_root,
        tag_prefix,
        skip_unstable=skip_unstable,
        preset=preset,
        options=options,
    )
    if recommended is None:
        return None

    effective: ReleaseType = ReleaseType(recommended.value)
    if release_type == ReleaseType.PRERELEASE:
        effective = ReleaseType.PRERELEASE if is_prerelease(since) else recommended.as_prerelease()

    return increment_version(since, effective, preid)
