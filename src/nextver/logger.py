"""Logging setup and the step logger used by the version engine."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "nextver"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure the ``nextver`` logger to render through rich.

    Args:
        verbose: Emit debug records when True, warnings and above otherwise
        console: Console to write to (defaults to stderr)
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def log_step(
    step: str,
    message: str,
    project_name: str,
    level: str = "info",
) -> None:
    """Log a single step of the version computation for a project.

    Args:
        step: Short step identifier (e.g. ``"warning"``, ``"calculate_version"``)
        message: Human readable message
        project_name: Project the step belongs to
        level: One of debug, info, warn(ing), error
    """
    logger = logging.getLogger(f"{LOGGER_NAME}.steps")
    logger.log(
        _LEVELS.get(level, logging.INFO),
        "[%s] %s: %s",
        project_name,
        step,
        message,
        extra={"step": step, "project_name": project_name},
    )
