"""Core business logic for nextver.

This module contains the version-resolution engine:
- Semantic version increments
- Conventional commit parsing and bump recommendation
- Version windows (last version + commits since)
- Dependency update aggregation
- Release orchestration
"""

from __future__ import annotations

from nextver.core.bump import auto_bump, manual_bump
from nextver.core.commits import (
    ParsedCommit,
    calculate_bump,
    parse_commit,
    parse_commits,
    recommend_bump,
    resolve_preset,
    should_count,
)
from nextver.core.dependencies import (
    DependencyUpdate,
    is_new_version,
    resolve_dependency_updates,
)
from nextver.core.orchestrator import Decision, DecisionKind, NewVersion, try_bump
from nextver.core.version import (
    INITIAL_VERSION,
    BumpType,
    ReleaseType,
    increment_version,
)
from nextver.core.window import VersionWindow, VersionWindowResolver, get_last_version

__all__ = [
    "INITIAL_VERSION",
    # Version
    "BumpType",
    # Orchestration
    "Decision",
    "DecisionKind",
    # Dependencies
    "DependencyUpdate",
    "NewVersion",
    # Commits
    "ParsedCommit",
    "ReleaseType",
    # Windows
    "VersionWindow",
    "VersionWindowResolver",
    # Bumps
    "auto_bump",
    "calculate_bump",
    "get_last_version",
    "increment_version",
    "is_new_version",
    "manual_bump",
    "parse_commit",
    "parse_commits",
    "recommend_bump",
    "resolve_dependency_updates",
    "resolve_preset",
    "should_count",
    "try_bump",
]
