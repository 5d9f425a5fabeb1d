"""Git repository access.

All queries shell out to the ``git`` executable. The blocking
``subprocess.run`` call is pushed to a worker thread so that the
version engine can run several queries concurrently on one event loop.
"""

from __future__ import annotations

import asyncio
import subprocess
from dataclasses import dataclass
from pathlib import Path

from nextver.exceptions import GitError, NotARepositoryError

# ASCII unit/record separators keep multi-line commit bodies intact.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = f"%H{_FIELD_SEP}%B{_RECORD_SEP}"


@dataclass(frozen=True)
class Commit:
    """A single commit read from git log."""

    sha: str
    message: str


class GitRepository:
    """Async facade over the git command line for one repository."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).resolve()
        if not self.path.is_dir():
            raise NotARepositoryError(f"Not a directory: {self.path}")
        try:
            toplevel = self._run("rev-parse", "--show-toplevel").strip()
        except GitError as e:
            raise NotARepositoryError(f"Not a git repository: {self.path}") from e
        # Pathspecs are resolved against the working tree root from here on.
        self.path = Path(toplevel)

    def relative_path(self, path: Path | str) -> str:
        """Return ``path`` relative to the repository root, as a pathspec."""
        relative = Path(path).resolve().relative_to(self.path.resolve())
        return relative.as_posix() or "."

    def __repr__(self) -> str:
        return f"GitRepository({str(self.path)!r})"

    def _run(self, *args: str) -> str:
        """Run a git command and return its stdout.

        Raises:
            GitError: If git is missing or exits with a non-zero status
        """
        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout

    async def _run_async(self, *args: str) -> str:
        return await asyncio.to_thread(self._run, *args)

    async def get_tags(self) -> list[str]:
        """Return every tag name in the repository."""
        output = await self._run_async("tag", "--list")
        return [line.strip() for line in output.splitlines() if line.strip()]

    async def get_first_commit_ref(self) -> str:
        """Return the SHA of the root commit reachable from HEAD."""
        output = await self._run_async("rev-list", "--max-parents=0", "HEAD")
        roots = output.split()
        if not roots:
            raise GitError("Repository has no commits")
        return roots[-1]

    async def get_commits(self, project_root: str, since: str | None = None) -> list[Commit]:
        """Return the commits touching ``project_root`` in ``(since, HEAD]``.

        Args:
            project_root: Path (relative to the repository) to scope the log to
            since: Exclusive start of the range; the whole history when None

        Returns:
            Commits in chronological order (oldest first)
        """
        revision = f"{since}..HEAD" if since else "HEAD"
        output = await self._run_async(
            "log",
            "--reverse",
            f"--format={_LOG_FORMAT}",
            revision,
            "--",
            project_root,
        )
        return parse_log_output(output)

    async def get_commit_messages(self, project_root: str, since: str | None = None) -> list[str]:
        """Return the raw messages of :meth:`get_commits`."""
        return [commit.message for commit in await self.get_commits(project_root, since)]


def parse_log_output(output: str) -> list[Commit]:
    """Parse the output of ``git log`` produced with ``_LOG_FORMAT``."""
    commits: list[Commit] = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        sha, message = record.split(_FIELD_SEP, 1)
        commits.append(Commit(sha=sha, message=message.strip()))
    return commits
