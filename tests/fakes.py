"""In-memory test doubles for nextver tests."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import Path

from nextver.exceptions import GitError


@dataclass(frozen=True)
class FakeCommit:
    """A commit in a :class:`FakeRepository` history."""

    message: str
    paths: tuple[str, ...] = (".",)
    tags: tuple[str, ...] = ()


class FakeRepository:
    """In-memory stand-in for GitRepository.

    ``history`` is ordered oldest first; commit ``i`` has the SHA ``c{i}``.
    A path of ``"."`` means a file at the repository root, which only the
    ``"."`` project root sees.
    """

    def __init__(self, history: list[FakeCommit], path: Path | None = None) -> None:
        self.history = list(history)
        self.path = path or Path("/repo")
        self.calls: Counter[str] = Counter()

    @staticmethod
    def sha(index: int) -> str:
        return f"c{index}"

    def _index(self, ref: str) -> int:
        for index, commit in enumerate(self.history):
            if ref == self.sha(index) or ref in commit.tags:
                return index
        raise GitError(f"unknown revision {ref!r}")

    async def get_tags(self) -> list[str]:
        self.calls["get_tags"] += 1
        return [tag for commit in self.history for tag in commit.tags]

    async def get_first_commit_ref(self) -> str:
        self.calls["get_first_commit_ref"] += 1
        if not self.history:
            raise GitError("Repository has no commits")
        return self.sha(0)

    async def get_commit_messages(self, project_root: str, since: str | None = None) -> list[str]:
        self.calls["get_commit_messages"] += 1
        start = 0 if since is None else self._index(since) + 1
        return [
            commit.message
            for commit in self.history[start:]
            if project_root == "."
            or any(p == project_root or p.startswith(f"{project_root}/") for p in commit.paths)
        ]
