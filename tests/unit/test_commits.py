"""Tests for conventional commit parsing, classification and bump recommendation."""

from __future__ import annotations

import asyncio

import pytest

from nextver.config.models import CommitsConfig, PresetConfig
from nextver.core.commits import (
    BUILTIN_PRESETS,
    ParsedCommit,
    calculate_bump,
    parse_commit,
    parse_commits,
    recommend_bump,
    resolve_preset,
    should_count,
)
from nextver.core.version import BumpType
from nextver.exceptions import ConfigValidationError
from tests.fakes import FakeCommit, FakeRepository


class TestParseCommit:
    """Tests for parse_commit()."""

    def test_parse_simple_feat(self):
        """Parse a simple feat commit."""
        pc = parse_commit("feat: add new feature")

        assert pc.is_conventional
        assert pc.commit_type == "feat"
        assert pc.scope is None
        assert pc.description == "add new feature"
        assert not pc.is_breaking

    def test_parse_with_scope(self):
        """Parse commit with scope."""
        pc = parse_commit("fix(api): handle null response")

        assert pc.commit_type == "fix"
        assert pc.scope == "api"
        assert pc.description == "handle null response"

    def test_parse_breaking_with_exclamation(self):
        """Parse breaking change with ! indicator."""
        pc = parse_commit("feat!: redesign API")

        assert pc.is_breaking
        assert pc.commit_type == "feat"

    def test_parse_breaking_with_scope_and_exclamation(self):
        """Parse breaking change with scope and ! indicator."""
        pc = parse_commit("feat(core)!: change config format")

        assert pc.is_breaking
        assert pc.commit_type == "feat"
        assert pc.scope == "core"

    def test_parse_breaking_in_body(self):
        """Parse breaking change in commit footer."""
        pc = parse_commit("feat: new feature\n\nBREAKING CHANGE: old API removed")

        assert pc.is_breaking
        assert pc.body == "BREAKING CHANGE: old API removed"

    def test_parse_breaking_hyphenated_footer(self):
        """BREAKING-CHANGE is accepted as a synonym."""
        assert parse_commit("fix: x\n\nBREAKING-CHANGE: y").is_breaking

    def test_bang_ignored_when_disabled(self):
        """The ! marker can be turned off."""
        pc = parse_commit("feat!: redesign API", CommitsConfig(breaking_bang=False))

        assert pc.commit_type == "feat"
        assert not pc.is_breaking

    def test_parse_non_conventional(self):
        """Parse non-conventional commit."""
        pc = parse_commit("Updated the readme file")

        assert not pc.is_conventional
        assert pc.commit_type is None
        assert pc.description == "Updated the readme file"

    def test_custom_header_pattern(self):
        """A custom header pattern changes what is recognized."""
        options = CommitsConfig(header_pattern=r"^\[(?P<type>\w+)\] (?P<description>.+)$")
        pc = parse_commit("[fix] crash on start", options)

        assert pc.commit_type == "fix"
        assert pc.description == "crash on start"
        assert pc.scope is None

    def test_parse_commits_keeps_order(self):
        """parse_commits() preserves input order."""
        parsed = parse_commits(["fix: a", "feat: b", "docs: c"])

        assert [pc.commit_type for pc in parsed] == ["fix", "feat", "docs"]
        assert all(isinstance(pc, ParsedCommit) for pc in parsed)


class TestShouldCount:
    """Tests for should_count()."""

    def test_counts_when_not_skipped(self):
        """Commits of other types count."""
        assert should_count("feat: add", {"chore"})

    def test_skipped_type(self):
        """Commits of a skipped type do not count."""
        assert not should_count("chore(deps): bump lib", {"chore", "docs"})

    def test_exact_match_only(self):
        """Skip types are compared exactly."""
        assert should_count("chores: something", {"chore"})
        assert should_count("Chore: something", {"chore"})

    def test_non_conventional_counts(self):
        """Messages without a type are never skipped."""
        assert should_count("Merge branch 'main'", {"chore"})

    def test_empty_skip_list(self):
        """Everything counts when nothing is skipped."""
        assert should_count("chore: x", [])


class TestResolvePreset:
    """Tests for resolve_preset()."""

    def test_builtin(self):
        """Built-in presets are resolved by name."""
        assert resolve_preset("conventionalcommits") is BUILTIN_PRESETS["conventionalcommits"]
        assert not resolve_preset("angular").breaking_bang

    def test_custom_config_passthrough(self):
        """A custom preset is returned unchanged."""
        preset = PresetConfig(name="custom", types_minor=["feature"])
        assert resolve_preset(preset) is preset

    def test_unknown_preset_raises(self):
        """Unknown preset names are rejected."""
        with pytest.raises(ConfigValidationError, match="Unknown preset"):
            resolve_preset("gitmoji")


class TestCalculateBump:
    """Tests for calculate_bump()."""

    preset = BUILTIN_PRESETS["conventionalcommits"]

    def test_empty_commits_returns_none(self):
        """No commits, no bump."""
        assert calculate_bump([], self.preset) is None

    def test_feat_returns_minor(self):
        """feat → minor."""
        assert calculate_bump(parse_commits(["feat: x"]), self.preset) is BumpType.MINOR

    def test_other_types_return_patch(self):
        """Any other commit → patch."""
        parsed = parse_commits(["fix: x", "docs: y", "random message"])
        assert calculate_bump(parsed, self.preset) is BumpType.PATCH

    def test_breaking_takes_precedence(self):
        """Breaking changes win over everything."""
        parsed = parse_commits(["fix: a", "feat!: b", "feat: c"])
        assert calculate_bump(parsed, self.preset) is BumpType.MAJOR

    def test_feat_takes_precedence_over_fix(self):
        """feat wins over fix."""
        parsed = parse_commits(["fix: a", "feat: b"])
        assert calculate_bump(parsed, self.preset) is BumpType.MINOR

    def test_custom_types_major(self):
        """Custom types can force a major bump."""
        preset = PresetConfig(types_major=["remove"])
        assert calculate_bump(parse_commits(["remove: old API"]), preset) is BumpType.MAJOR

    def test_restricted_patch_types(self):
        """With explicit patch types, other commits do not bump."""
        preset = PresetConfig(types_patch=["fix"])
        assert calculate_bump(parse_commits(["docs: a", "chore: b"]), preset) is None
        assert calculate_bump(parse_commits(["docs: a", "fix: b"]), preset) is BumpType.PATCH


class TestRecommendBump:
    """Tests for recommend_bump()."""

    def test_commits_since_last_tag(self, tagged_repo: FakeRepository):
        """Only commits after the last tag are analysed."""
        result = asyncio.run(recommend_bump(tagged_repo, ".", "v"))
        assert result is BumpType.MINOR

    def test_no_commits_since_tag(self):
        """Nothing since the last tag, nothing to recommend."""
        repo = FakeRepository([FakeCommit("chore: init"), FakeCommit("fix: a", tags=("v1.0.0",))])
        assert asyncio.run(recommend_bump(repo, ".", "v")) is None

    def test_whole_history_without_tag(self, untagged_repo: FakeRepository):
        """Without a tag the whole history is analysed."""
        assert asyncio.run(recommend_bump(untagged_repo, ".", "v")) is BumpType.MINOR

    def test_scoped_to_project_root(self):
        """Commits outside the project root are ignored."""
        repo = FakeRepository(
            [
                FakeCommit("chore: init"),
                FakeCommit("feat(web): page", paths=("apps/web/index.ts",)),
                FakeCommit("fix(core): bug", paths=("libs/core/lib.py",)),
            ]
        )
        assert asyncio.run(recommend_bump(repo, "libs/core", "core-")) is BumpType.PATCH

    def test_skip_unstable_ignores_prerelease_tags(self):
        """Prerelease tags are skipped when looking for the last tag."""
        repo = FakeRepository(
            [
                FakeCommit("chore: init", tags=("v1.0.0",)),
                FakeCommit("feat: big thing", tags=("v1.1.0-beta.0",)),
                FakeCommit("fix: small thing"),
            ]
        )
        assert asyncio.run(recommend_bump(repo, ".", "v")) is BumpType.PATCH
        assert asyncio.run(recommend_bump(repo, ".", "v", skip_unstable=True)) is BumpType.MINOR

    def test_angular_preset_ignores_bang(self):
        """The angular preset does not know the ! marker."""
        repo = FakeRepository([FakeCommit("chore: init"), FakeCommit("feat!: redo")])
        assert asyncio.run(recommend_bump(repo, ".", "v", preset="angular")) is BumpType.MINOR
        assert asyncio.run(recommend_bump(repo, ".", "v")) is BumpType.MAJOR
