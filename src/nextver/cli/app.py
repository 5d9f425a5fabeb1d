"""Command-line interface for nextver."""

from __future__ import annotations

import typer
from rich.console import Console

from nextver import __version__
from nextver.cli.commands.bump import run_bump
from nextver.core.version import ReleaseType
from nextver.logger import setup_logging

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Compute the next semantic version from Conventional Commits.",
)

console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output."),
) -> None:
    """nextver - next semantic version from Conventional Commits."""
    setup_logging(verbose=verbose, console=err_console)


@app.command()
def bump(
    path: str | None = typer.Argument(None, help="Project directory (default: current)"),
    release_as: ReleaseType | None = typer.Option(
        None,
        "--release-as",
        "-r",
        help="Force a release type instead of analysing commits.",
    ),
    preid: str | None = typer.Option(None, "--preid", help="Prerelease identifier (e.g. beta)."),
    skip_unstable: bool | None = typer.Option(
        None,
        "--skip-unstable/--no-skip-unstable",
        help="Ignore prerelease tags when recommending a bump.",
    ),
    sync_versions: bool | None = typer.Option(
        None,
        "--sync-versions/--no-sync-versions",
        help="Dependencies share the project's version line.",
    ),
    allow_empty_release: bool | None = typer.Option(
        None,
        "--allow-empty-release/--no-allow-empty-release",
        help="Release even when nothing release-worthy changed.",
    ),
    skip_commit_type: list[str] = typer.Option(
        [],
        "--skip-commit-type",
        "-s",
        help="Commit type that never triggers a release (repeatable).",
    ),
    dependency: list[str] = typer.Option(
        [],
        "--dependency",
        "-d",
        help="Dependency as NAME=PATH, PATH relative to the repository root (repeatable).",
    ),
    tag_prefix: str | None = typer.Option(None, "--tag-prefix", help="Tag prefix of the project."),
    version_tag_prefix: str | None = typer.Option(
        None,
        "--version-tag-prefix",
        help="Tag prefix template, '{projectName}' is interpolated.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Compute the next version of a project."""
    run_bump(
        path=path,
        release_type=release_as,
        preid=preid,
        skip_unstable=skip_unstable,
        sync_versions=sync_versions,
        allow_empty_release=allow_empty_release,
        skip_commit_types=skip_commit_type,
        dependencies=dependency,
        tag_prefix=tag_prefix,
        version_tag_prefix=version_tag_prefix,
        as_json=as_json,
        console=console,
        err_console=err_console,
    )
