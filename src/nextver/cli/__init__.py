"""Command-line interface."""

from __future__ import annotations

from nextver.cli.app import app

__all__ = ["app"]
