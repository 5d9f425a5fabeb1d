"""Pydantic models for nextver configuration.

Configuration lives in the ``[tool.nextver]`` table of pyproject.toml:

    [tool.nextver]
    sync_versions = false
    skip_commit_types = ["docs", "chore"]
    preset = "conventionalcommits"

    [[tool.nextver.dependencies]]
    name = "core"
    path = "packages/core"
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from nextver.vcs.tags import format_tag_prefix

DEFAULT_PRESET = "conventionalcommits"


class CommitsConfig(BaseModel):
    """Options for parsing commit messages."""

    model_config = ConfigDict(extra="forbid")

    header_pattern: str = Field(
        default=r"^(?P<type>\w+)(?:\((?P<scope>[^()]*)\))?(?P<bang>!)?: (?P<description>.+)$",
        description="Regex for the commit header; named groups type, scope, bang, description",
    )
    breaking_pattern: str = Field(
        default=r"^BREAKING[ -]CHANGE:",
        description="Regex matched against body lines to detect breaking changes",
    )
    breaking_bang: bool = Field(
        default=True,
        description="Treat '!' after the type/scope as a breaking change",
    )


class PresetConfig(BaseModel):
    """Maps commit types to bump categories."""

    model_config = ConfigDict(extra="forbid")

    name: str = DEFAULT_PRESET
    types_major: list[str] = Field(default_factory=list)
    types_minor: list[str] = Field(default_factory=lambda: ["feat"])
    types_patch: list[str] | None = Field(
        default=None,
        description="Types producing a patch bump; None means any other commit",
    )
    breaking_bang: bool = True


class DependencyRoot(BaseModel):
    """A sub-project whose changes can trigger a release of the project."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    path: str


class NextverConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="forbid")

    tag_prefix: str | None = Field(
        default=None,
        description="Tag prefix of the project; derived from the project name when unset",
    )
    version_tag_prefix: str | None = Field(
        default=None,
        description="Prefix template for tags, '{projectName}' is interpolated",
    )
    sync_versions: bool = False
    allow_empty_release: bool = False
    skip_commit_types: list[str] = Field(default_factory=list)
    preid: str | None = None
    skip_unstable: bool = False
    preset: str | PresetConfig = DEFAULT_PRESET
    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    dependencies: list[DependencyRoot] = Field(default_factory=list)

    def effective_tag_prefix(self, project_name: str) -> str:
        """Tag prefix of the project named ``project_name``."""
        if self.tag_prefix is not None:
            return self.tag_prefix
        return format_tag_prefix(self.version_tag_prefix, project_name, self.sync_versions)
