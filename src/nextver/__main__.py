"""Entry point for ``python -m nextver``."""

from nextver.cli.app import app

app(prog_name="nextver")
