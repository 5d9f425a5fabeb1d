"""Dependency version aggregation.

For every dependency of a project, decide whether it changed within the
project's release window and, if so, which version it should be reported
at. A changed dependency is what forces a release of the depending
project even when the project's own commits do not.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from nextver.core.bump import auto_bump
from nextver.core.commits import should_count
from nextver.core.version import INITIAL_VERSION, is_initial_version
from nextver.logger import log_step
from nextver.vcs.tags import format_tag_prefix

if TYPE_CHECKING:
    from collections.abc import Sequence

    from nextver.config.models import CommitsConfig, DependencyRoot, PresetConfig
    from nextver.core.version import ReleaseType
    from nextver.core.window import VersionWindowResolver


@dataclass(frozen=True)
class DependencyUpdate:
    """Version a dependency should be reported at.

    ``version`` is None when the dependency has no release-worthy change.
    """

    dependency_name: str
    version: str | None
    kind: Literal["dependency"] = "dependency"


def is_new_version(update: DependencyUpdate) -> bool:
    """True when ``update`` carries a real version."""
    return update.version is not None and update.version != INITIAL_VERSION


async def resolve_dependency_update(
    resolver: VersionWindowResolver,
    dependency: DependencyRoot,
    anchor_ref: str,
    preset: str | PresetConfig,
    *,
    release_type: ReleaseType | str | None = None,
    version_tag_prefix: str | None = None,
    sync_versions: bool = False,
    skip_commit_types: Sequence[str] = (),
    preid: str | None = None,
    skip_unstable: bool = False,
    commit_parser_options: CommitsConfig | None = None,
) -> DependencyUpdate:
    """Compute the update of a single dependency.

    The dependency's commits are read from ``anchor_ref`` (the start of
    the depending project's window), not from the dependency's own last
    tag: only changes inside the project's window matter.

    A dependency that already has a tag is reported at that tagged
    version. It is expected to have been released by an earlier pass of
    the release workflow, so no new bump is computed for it here.
    """
    tag_prefix = format_tag_prefix(version_tag_prefix, dependency.name, sync_versions)
    window = await resolver.resolve(
        tag_prefix,
        dependency.path,
        release_type=release_type,
        since=anchor_ref,
        preid=preid,
    )

    qualifying = [
        commit
        for commit in window.commits
        if should_count(commit, skip_commit_types, commit_parser_options)
    ]
    if not qualifying:
        return DependencyUpdate(dependency_name=dependency.name, version=None)

    if is_initial_version(window.last_version):
        version = await auto_bump(
            resolver.repo,
            since=window.last_version,
            preset=preset,
            project_root=dependency.path,
            tag_prefix=tag_prefix,
            skip_unstable=skip_unstable,
            options=commit_parser_options,
        )
    else:
        version = window.last_version

    log_step(
        step="dependency_update",
        level="debug",
        message=f"{dependency.name}: {len(qualifying)} qualifying commit(s), version {version}",
        project_name=resolver.project_name,
    )
    return DependencyUpdate(dependency_name=dependency.name, version=version)


async def resolve_dependency_updates(
    resolver: VersionWindowResolver,
    dependency_roots: Sequence[DependencyRoot],
    anchor_ref: str,
    preset: str | PresetConfig,
    *,
    release_type: ReleaseType | str | None = None,
    version_tag_prefix: str | None = None,
    sync_versions: bool = False,
    skip_commit_types: Sequence[str] = (),
    preid: str | None = None,
    skip_unstable: bool = False,
    commit_parser_options: CommitsConfig | None = None,
) -> list[DependencyUpdate]:
    """Compute the updates of all dependencies concurrently.

    Returns:
        One update per dependency, in the order of ``dependency_roots``
    """
    if not dependency_roots:
        return []
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [
                tg.create_task(
                    resolve_dependency_update(
                        resolver,
                        dependency,
                        anchor_ref,
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
                for dependency in dependency_roots
            ]
    except ExceptionGroup as group:
        # Siblings are cancelled by now; surface the first failure unwrapped.
        raise group.exceptions[0] from None
    return [task.result() for task in tasks]
