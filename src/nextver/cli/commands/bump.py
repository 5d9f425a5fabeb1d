"""Implementation of the 'bump' command.

The bump command computes the next version of a project and reports it.
It never writes tags or files.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table

from nextver.config.loader import get_project_name, load_config
from nextver.config.models import DependencyRoot
from nextver.core.orchestrator import try_bump
from nextver.core.version import ReleaseType
from nextver.exceptions import ConfigValidationError, NextverError
from nextver.vcs import GitRepository, format_tag

if TYPE_CHECKING:
    from rich.console import Console

    from nextver.core.orchestrator import NewVersion


def parse_dependency_option(value: str) -> DependencyRoot:
    """Parse a ``NAME=PATH`` command line value.

    Raises:
        ConfigValidationError: If the value is not of the form NAME=PATH
    """
    name, sep, path = value.partition("=")
    if not sep or not name.strip() or not path.strip():
        raise ConfigValidationError(f"Invalid dependency {value!r}, expected NAME=PATH")
    return DependencyRoot(name=name.strip(), path=path.strip())


def run_bump(
    path: str | None,
    release_type: ReleaseType | None,
    preid: str | None,
    skip_unstable: bool | None,
    sync_versions: bool | None,
    allow_empty_release: bool | None,
    skip_commit_types: list[str],
    dependencies: list[str],
    tag_prefix: str | None,
    version_tag_prefix: str | None,
    as_json: bool,
    console: Console,
    err_console: Console,
) -> NewVersion | None:
    """Run the bump command.

    Command line values override ``[tool.nextver]``; None means "not given".

    Args:
        path: Optional path to the project directory
        release_type: Explicit release type
        preid: Prerelease identifier
        skip_unstable: Ignore prerelease tags when recommending a bump
        sync_versions: Dependencies share the project's version line
        allow_empty_release: Release even without release-worthy changes
        skip_commit_types: Extra commit types that never trigger a release
        dependencies: Extra dependencies as NAME=PATH
        tag_prefix: Tag prefix of the project
        version_tag_prefix: Tag prefix template for dependencies
        as_json: Print the result as JSON
        console: Console for standard output
        err_console: Console for error output

    Returns:
        The computed version, or None when no release is needed
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
    except NextverError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    try:
        project_name = get_project_name(project_path)
    except NextverError:
        project_name = project_path.resolve().name

    try:
        repo = GitRepository(project_path)
        extra_dependencies = [parse_dependency_option(value) for value in dependencies]
    except NextverError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    if version_tag_prefix is not None:
        config.version_tag_prefix = version_tag_prefix
    if sync_versions is not None:
        config.sync_versions = sync_versions
    if tag_prefix is not None:
        config.tag_prefix = tag_prefix
    effective_tag_prefix = config.effective_tag_prefix(project_name)

    try:
        new_version = asyncio.run(
            try_bump(
                repo,
                preset=config.preset,
                project_root=repo.relative_path(project_path),
                tag_prefix=effective_tag_prefix,
                project_name=project_name,
                dependency_roots=[*config.dependencies, *extra_dependencies],
                release_type=release_type,
                preid=preid or config.preid,
                skip_unstable=config.skip_unstable if skip_unstable is None else skip_unstable,
                version_tag_prefix=config.version_tag_prefix,
                sync_versions=config.sync_versions,
                allow_empty_release=(
                    config.allow_empty_release
                    if allow_empty_release is None
                    else allow_empty_release
                ),
                skip_commit_types=[*config.skip_commit_types, *skip_commit_types],
                commit_parser_options=config.commits,
            )
        )
    except NextverError as e:
        err_console.print(f"[red]Error computing version:[/] {e}")
        raise SystemExit(1) from e

    if as_json:
        console.print_json(json.dumps(to_json(new_version)))
    else:
        _print_result(new_version, project_name, effective_tag_prefix, console)
    return new_version


def to_json(new_version: NewVersion | None) -> dict[str, object] | None:
    """Serializable form of a bump result (None stays None)."""
    if new_version is None:
        return None
    return {
        "version": new_version.version,
        "previousVersion": new_version.previous_version,
        "dependencyUpdates": [
            {
                "type": update.kind,
                "dependencyName": update.dependency_name,
                "version": update.version,
            }
            for update in new_version.dependency_updates
        ],
    }


def _print_result(
    new_version: NewVersion | None,
    project_name: str,
    tag_prefix: str,
    console: Console,
) -> None:
    if new_version is None:
        console.print(
            f"[yellow]No release needed for [bold]{project_name}[/bold]: "
            "no release-worthy changes since the last version.[/]"
        )
        return

    body = (
        f"[bold]{project_name}[/]: [cyan]{new_version.previous_version}[/] → "
        f"[green]{new_version.version}[/]\n"
        f"Tag: [cyan]{format_tag(tag_prefix, new_version.version)}[/]"
    )
    console.print(Panel(body, title="[green]Next Version[/]", border_style="green"))

    if new_version.dependency_updates:
        table = Table(title="Dependency updates")
        table.add_column("Dependency", style="cyan")
        table.add_column("Version", style="green")
        for update in new_version.dependency_updates:
            table.add_row(update.dependency_name, update.version or "-")
        console.print(table)
