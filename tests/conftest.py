"""Shared fixtures for nextver tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests.fakes import FakeCommit, FakeRepository


@pytest.fixture(autouse=True)
def _reset_nextver_logger():
    """Undo setup_logging() so caplog keeps seeing nextver records."""
    yield
    logger = logging.getLogger("nextver")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def tagged_repo() -> FakeRepository:
    """Repository released as v1.2.3 with a feature and a fix since."""
    return FakeRepository(
        [
            FakeCommit("chore: initial commit"),
            FakeCommit("feat: first feature", tags=("v1.2.3",)),
            FakeCommit("feat(api): add endpoint"),
            FakeCommit("fix: handle empty input"),
        ]
    )


@pytest.fixture
def untagged_repo() -> FakeRepository:
    """Repository without any version tag."""
    return FakeRepository(
        [
            FakeCommit("chore: initial commit"),
            FakeCommit("feat: first feature"),
        ]
    )


@pytest.fixture
def temp_project_with_pyproject(tmp_path: Path) -> Path:
    """Create a project directory with a pyproject.toml."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.nextver]
skip_commit_types = ["docs", "chore"]
preset = "conventionalcommits"

[[tool.nextver.dependencies]]
name = "core"
path = "packages/core"
"""
    )
    return tmp_path
