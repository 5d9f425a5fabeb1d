"""Version window resolution.

A *version window* is what the bump calculators work from: the last
released version of a project, the git reference the window starts at,
and the commit messages between that reference and HEAD.

Lookups are memoized per resolver so that every consumer within one
invocation (the orchestrator and the dependency aggregator both need the
primary project's window) shares a single git query.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from nextver.core.version import INITIAL_VERSION, ReleaseType, is_initial_version
from nextver.exceptions import TagNotFoundError
from nextver.logger import log_step
from nextver.vcs.tags import format_tag, select_last_version

if TYPE_CHECKING:
    from collections.abc import Coroutine
    from types import TracebackType

    from nextver.vcs.git import GitRepository


@dataclass(frozen=True)
class VersionWindow:
    """Last version of a project and the commits made since."""

    last_version: str
    commit_range_ref: str
    commits: tuple[str, ...]


async def get_last_version(
    repo: GitRepository,
    tag_prefix: str,
    release_type: ReleaseType | str | None = None,
    preid: str | None = None,
) -> str:
    """Return the highest version tagged with ``tag_prefix``.

    Prerelease tags are only candidates when a ``pre*`` release type is
    requested, and then only those of ``preid`` when one is given.

    Raises:
        TagNotFoundError: If no tag matches
    """
    include_prerelease = release_type is not None and ReleaseType(release_type).is_prerelease
    version = select_last_version(
        await repo.get_tags(),
        tag_prefix,
        include_prerelease=include_prerelease,
        preid=preid,
    )
    if version is None:
        raise TagNotFoundError(tag_prefix)
    return version


class VersionWindowResolver:
    """Resolves and caches version windows for one invocation.

    Use as an async context manager; leaving the context cancels any
    lookup still in flight.
    """

    def __init__(self, repo: GitRepository, project_name: str) -> None:
        self.repo = repo
        self.project_name = project_name
        self._tasks: dict[tuple[Any, ...], asyncio.Task[Any]] = {}

    async def __aenter__(self) -> VersionWindowResolver:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Cancel pending lookups and drop the cache."""
        pending = [task for task in self._tasks.values() if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._tasks.clear()

    async def _shared(self, key: tuple[Any, ...], factory: Coroutine[Any, Any, Any]) -> Any:
        task = self._tasks.get(key)
        if task is None:
            task = asyncio.ensure_future(factory)
            self._tasks[key] = task
        else:
            factory.close()
        # One consumer being cancelled must not cancel the lookup for the others.
        return await asyncio.shield(task)

    async def last_version(
        self,
        tag_prefix: str,
        release_type: ReleaseType | str | None = None,
        preid: str | None = None,
    ) -> str:
        """Last tagged version, or ``0.0.0`` when the project has no tag yet."""
        key = ("last_version", tag_prefix, release_type, preid)
        return await self._shared(key, self._fetch_last_version(tag_prefix, release_type, preid))

    async def _fetch_last_version(
        self,
        tag_prefix: str,
        release_type: ReleaseType | str | None,
        preid: str | None,
    ) -> str:
        try:
            return await get_last_version(self.repo, tag_prefix, release_type, preid)
        except TagNotFoundError:
            log_step(
                step="warning",
                level="warn",
                message=(
                    f"No previous version tag found, fallback to version {INITIAL_VERSION}. "
                    "New version will be calculated based on all changes since first commit. "
                    "If your project is already versioned, please tag the latest release "
                    f"commit with {tag_prefix}x.y.z and run this command again."
                ),
                project_name=self.project_name,
            )
            return INITIAL_VERSION

    async def resolve(
        self,
        tag_prefix: str,
        project_root: str,
        release_type: ReleaseType | str | None = None,
        since: str | None = None,
        preid: str | None = None,
    ) -> VersionWindow:
        """Resolve the version window of a project.

        Args:
            tag_prefix: Prefix of the project's version tags
            project_root: Path the commits are scoped to
            release_type: Requested release type (affects prerelease tags)
            since: Reference to fetch commits from instead of the derived one;
                the derived reference is still returned
            preid: Prerelease identifier

        Returns:
            The last version, the derived range reference and the commits
        """
        key = ("window", tag_prefix, project_root, release_type, since, preid)
        return await self._shared(
            key, self._fetch_window(tag_prefix, project_root, release_type, since, preid)
        )

    async def _fetch_window(
        self,
        tag_prefix: str,
        project_root: str,
        release_type: ReleaseType | str | None,
        since: str | None,
        preid: str | None,
    ) -> VersionWindow:
        last_version = await self.last_version(tag_prefix, release_type, preid)
        if is_initial_version(last_version):
            commit_range_ref = await self.repo.get_first_commit_ref()
        else:
            commit_range_ref = format_tag(tag_prefix, last_version)

        commits = await self.repo.get_commit_messages(project_root, since or commit_range_ref)
        log_step(
            step="resolve_window",
            level="debug",
            message=(
                f"{tag_prefix} last version {last_version}, "
                f"{len(commits)} commit(s) since {since or commit_range_ref}"
            ),
            project_name=self.project_name,
        )
        return VersionWindow(
            last_version=last_version,
            commit_range_ref=commit_range_ref,
            commits=tuple(commits),
        )
