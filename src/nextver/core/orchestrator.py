"""Release orchestration: decide the next version of a project.

:func:`try_bump` combines the version window of the project, its
automatic (or manual) bump and the updates of its dependencies into
one of five outcomes:

    MANUAL            explicit release type, commits are not consulted
    AUTOMATIC         version recommended from the project's commits
    DEPENDENCY_PATCH  no bump of its own, but dependencies changed → patch
    SUPPRESSED        nothing release-worthy happened → no release
    INVALID           the version could not be incremented → no release

The outcome is computed by the pure ``decide_*`` functions so each branch
can be exercised without touching git.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from nextver.core.bump import auto_bump, manual_bump
from nextver.core.commits import should_count
from nextver.core.dependencies import DependencyUpdate, is_new_version, resolve_dependency_updates
from nextver.core.version import ReleaseType
from nextver.core.window import VersionWindowResolver
from nextver.logger import log_step

if TYPE_CHECKING:
    from collections.abc import Sequence

    from nextver.config.models import CommitsConfig, DependencyRoot, PresetConfig
    from nextver.vcs.git import GitRepository


@dataclass(frozen=True)
class NewVersion:
    """Result of a successful version computation."""

    version: str
    previous_version: str
    dependency_updates: list[DependencyUpdate] = field(default_factory=list)


class DecisionKind(StrEnum):
    MANUAL = "manual"
    AUTOMATIC = "automatic"
    DEPENDENCY_PATCH = "dependency_patch"
    SUPPRESSED = "suppressed"
    INVALID = "invalid"


@dataclass(frozen=True)
class Decision:
    """Outcome of the orchestrator, before it is turned into a result."""

    kind: DecisionKind
    previous_version: str
    version: str | None = None
    dependency_updates: list[DependencyUpdate] = field(default_factory=list)

    @property
    def is_release(self) -> bool:
        return self.kind not in (DecisionKind.SUPPRESSED, DecisionKind.INVALID)

    def to_new_version(self) -> NewVersion | None:
        if not self.is_release or self.version is None:
            return None
        return NewVersion(
            version=self.version,
            previous_version=self.previous_version,
            dependency_updates=list(self.dependency_updates),
        )


def decide_manual(
    last_version: str,
    release_type: ReleaseType | str,
    preid: str | None = None,
) -> Decision:
    """Decide the outcome of an explicit, non-prerelease release type."""
    version = manual_bump(last_version, release_type, preid)
    if version is None:
        return Decision(kind=DecisionKind.INVALID, previous_version=last_version)
    return Decision(kind=DecisionKind.MANUAL, previous_version=last_version, version=version)


def decide_automatic(
    last_version: str,
    project_version: str | None,
    dependency_updates: Sequence[DependencyUpdate],
    qualifying_commits: int,
    *,
    preid: str | None = None,
    allow_empty_release: bool = False,
) -> Decision:
    """Decide the outcome of the commit-driven path.

    Args:
        last_version: Last version of the project
        project_version: Result of the project's automatic bump
        dependency_updates: Updates of the dependencies (unfiltered)
        qualifying_commits: Number of the project's release-worthy commits
        preid: Prerelease identifier for a forced patch
        allow_empty_release: Release even when nothing changed

    Returns:
        The decision
    """
    updates = [update for update in dependency_updates if is_new_version(update)]

    if project_version is None and updates:
        version = manual_bump(last_version, ReleaseType.PATCH, preid)
        if version is None:
            return Decision(kind=DecisionKind.INVALID, previous_version=last_version)
        return Decision(
            kind=DecisionKind.DEPENDENCY_PATCH,
            previous_version=last_version,
            version=version,
            dependency_updates=updates,
        )

    if not updates and not qualifying_commits and not allow_empty_release:
        return Decision(kind=DecisionKind.SUPPRESSED, previous_version=last_version)

    return Decision(
        kind=DecisionKind.AUTOMATIC,
        previous_version=last_version,
        version=project_version or last_version,
        dependency_updates=updates,
    )


async def try_bump(
    repo: GitRepository,
    *,
    preset: str | PresetConfig,
    project_root: str,
    tag_prefix: str,
    project_name: str,
    dependency_roots: Sequence[DependencyRoot] = (),
    release_type: ReleaseType | str | None = None,
    preid: str | None = None,
    skip_unstable: bool = False,
    version_tag_prefix: str | None = None,
    sync_versions: bool = False,
    allow_empty_release: bool = False,
    skip_commit_types: Sequence[str] = (),
    commit_parser_options: CommitsConfig | None = None,
) -> NewVersion | None:
    """Compute the next version of a project.

    Args:
        repo: Repository holding the project
        preset: Convention preset name or configuration
        project_root: Path of the project inside the repository
        tag_prefix: Prefix of the project's version tags
        project_name: Display name used in diagnostics
        dependency_roots: Sub-projects whose changes trigger a release
        release_type: Explicit release type; anything but ``prerelease``
            bypasses commit analysis
        preid: Prerelease identifier
        skip_unstable: Ignore prerelease tags when recommending a bump
        version_tag_prefix: Tag prefix template for dependencies
        sync_versions: Whether dependencies share the project's version line
        allow_empty_release: Release even without release-worthy changes
        skip_commit_types: Commit types that never trigger a release
        commit_parser_options: Commit parser options

    Returns:
        The new version, or None if no release should happen
    """
    if release_type is not None:
        release_type = ReleaseType(release_type)

    async with VersionWindowResolver(repo, project_name) as resolver:
        window = await resolver.resolve(
            tag_prefix, project_root, release_type=release_type, preid=preid
        )

        if release_type is not None and release_type is not ReleaseType.PRERELEASE:
            decision = decide_manual(window.last_version, release_type, preid)
        else:
            # A failure in either branch cancels the other before it propagates.
            try:
                async with asyncio.TaskGroup() as tg:
                    project_task = tg.create_task(
                        auto_bump(
                            repo,
                            since=window.last_version,
                            preset=preset,
                            project_root=project_root,
                            tag_prefix=tag_prefix,
                            release_type=release_type,
                            preid=preid,
                            skip_unstable=skip_unstable,
                            options=commit_parser_options,
                        )
                    )
                    dependencies_task = tg.create_task(
                        resolve_dependency_updates(
                            resolver,
                            dependency_roots,
                            window.commit_range_ref,
                            preset,
                            release_type=release_type,
                            version_tag_prefix=version_tag_prefix,
                            sync_versions=sync_versions,
                            skip_commit_types=skip_commit_types,
                            preid=preid,
                            skip_unstable=skip_unstable,
                            commit_parser_options=commit_parser_options,
                        )
                    )
            except ExceptionGroup as group:
                raise group.exceptions[0] from None
            project_version = project_task.result()
            dependency_updates = dependencies_task.result()
            qualifying = sum(
                1
                for commit in window.commits
                if should_count(commit, skip_commit_types, commit_parser_options)
            )
            decision = decide_automatic(
                window.last_version,
                project_version,
                dependency_updates,
                qualifying,
                preid=preid,
                allow_empty_release=allow_empty_release,
            )

    log_step(
        step="calculate_version",
        level="info",
        message=f"{decision.kind}: {decision.previous_version} -> {decision.version or 'no release'}",
        project_name=project_name,
    )
    return decision.to_new_version()
