"""Conventional commit parsing and bump recommendation.

Parses commit messages following the Conventional Commits
specification (https://www.conventionalcommits.org/):

    <type>[optional scope][!]: <description>

    [optional body]

    [optional footer(s)]

Breaking changes are flagged by ``!`` after the type/scope or by a
``BREAKING CHANGE:`` footer. A convention *preset* then maps a batch of
parsed commits to the strongest bump category:

    breaking change   →  major
    feat              →  minor
    anything else     →  patch
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from nextver.config.models import DEFAULT_PRESET, CommitsConfig, PresetConfig
from nextver.core.version import BumpType
from nextver.exceptions import ConfigValidationError
from nextver.vcs.tags import format_tag, select_last_version

if TYPE_CHECKING:
    from collections.abc import Iterable

    from nextver.vcs.git import GitRepository

BUILTIN_PRESETS: dict[str, PresetConfig] = {
    "conventionalcommits": PresetConfig(name="conventionalcommits"),
    # The angular convention predates the "!" marker.
    "angular": PresetConfig(name="angular", breaking_bang=False),
}


@dataclass(frozen=True)
class ParsedCommit:
    """A commit message broken down into its conventional parts."""

    raw: str
    commit_type: str | None
    scope: str | None
    description: str
    body: str
    is_breaking: bool

    @property
    def is_conventional(self) -> bool:
        return self.commit_type is not None


def parse_commit(message: str, options: CommitsConfig | None = None) -> ParsedCommit:
    """Parse a raw commit message.

    Args:
        message: Full commit message (header, body and footers)
        options: Parser options; defaults to :class:`CommitsConfig`

    Returns:
        The parsed commit. Messages that do not follow the convention
        yield ``commit_type=None`` with the header as description.
    """
    options = options or CommitsConfig()
    header, _, body = message.strip().partition("\n")
    header = header.strip()
    body = body.strip()

    breaking_re = re.compile(options.breaking_pattern, re.MULTILINE)
    breaking_footer = bool(body and breaking_re.search(body))

    match = re.match(options.header_pattern, header)
    if match is None:
        return ParsedCommit(
            raw=message,
            commit_type=None,
            scope=None,
            description=header,
            body=body,
            is_breaking=breaking_footer,
        )

    groups = match.groupdict()
    bang = bool(groups.get("bang")) and options.breaking_bang
    return ParsedCommit(
        raw=message,
        commit_type=groups["type"],
        scope=groups.get("scope") or None,
        description=(groups.get("description") or "").strip(),
        body=body,
        is_breaking=breaking_footer or bang,
    )


def parse_commits(
    messages: Iterable[str], options: CommitsConfig | None = None
) -> list[ParsedCommit]:
    """Parse several commit messages, keeping their order."""
    return [parse_commit(message, options) for message in messages]


def should_count(
    commit: str,
    skip_types: Iterable[str],
    options: CommitsConfig | None = None,
) -> bool:
    """Decide whether a commit is release-worthy.

    Args:
        commit: Raw commit message
        skip_types: Commit types that never trigger a release
        options: Parser options

    Returns:
        False if the commit type is one of ``skip_types``, True otherwise
        (including messages with no recognizable type)
    """
    commit_type = parse_commit(commit, options).commit_type
    return not any(skip_type == commit_type for skip_type in skip_types)


def resolve_preset(preset: str | PresetConfig) -> PresetConfig:
    """Return the preset configuration for a name or custom config.

    Raises:
        ConfigValidationError: If the preset name is unknown
    """
    if isinstance(preset, PresetConfig):
        return preset
    try:
        return BUILTIN_PRESETS[preset]
    except KeyError:
        known = ", ".join(sorted(BUILTIN_PRESETS))
        raise ConfigValidationError(f"Unknown preset {preset!r} (expected one of: {known})") from None


def _commit_bump(commit: ParsedCommit, preset: PresetConfig) -> BumpType | None:
    if commit.is_breaking or commit.commit_type in preset.types_major:
        return BumpType.MAJOR
    if commit.commit_type in preset.types_minor:
        return BumpType.MINOR
    if preset.types_patch is None or commit.commit_type in preset.types_patch:
        return BumpType.PATCH
    return None


def calculate_bump(commits: Iterable[ParsedCommit], preset: PresetConfig) -> BumpType | None:
    """Compute the strongest bump required by ``commits``.

    Returns:
        The bump category, or None when no commit calls for a release
    """
    result: BumpType | None = None
    for commit in commits:
        bump = _commit_bump(commit, preset)
        if bump is not None and (result is None or bump.level > result.level):
            result = bump
            if result is BumpType.MAJOR:
                break
    return result


async def recommend_bump(
    repo: GitRepository,
    project_root: str,
    tag_prefix: str,
    skip_unstable: bool = False,
    preset: str | PresetConfig = DEFAULT_PRESET,
    options: CommitsConfig | None = None,
) -> BumpType | None:
    """Recommend a bump category from the commits since the last tag.

    Args:
        repo: Repository to inspect
        project_root: Path the commits are scoped to
        tag_prefix: Prefix of the project's version tags
        skip_unstable: Ignore prerelease tags when looking for the last tag
        preset: Convention preset name or configuration
        options: Commit parser options

    Returns:
        The recommended category, or None when there is nothing to release
    """
    preset_config = resolve_preset(preset)
    options = options or CommitsConfig()
    if not preset_config.breaking_bang:
        options = options.model_copy(update={"breaking_bang": False})

    last_version = select_last_version(
        await repo.get_tags(), tag_prefix, include_prerelease=not skip_unstable
    )
    since = format_tag(tag_prefix, last_version) if last_version else None
    messages = await repo.get_commit_messages(project_root, since)
    return calculate_bump(parse_commits(messages, options), preset_config)
