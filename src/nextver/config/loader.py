"""Loading configuration from pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from nextver.config.models import NextverConfig
from nextver.exceptions import ConfigNotFoundError, ConfigValidationError

TOOL_KEY = "nextver"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or any of its parents.

    Args:
        start: Directory to start from (defaults to the working directory)

    Returns:
        Path to the pyproject.toml file

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Read and parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"File not found: {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}", details=str(e)) from e


def extract_nextver_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.nextver]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_KEY, {})


def load_config(path: Path | None = None) -> NextverConfig:
    """Load nextver configuration for the project at ``path``.

    Defaults are used when the ``[tool.nextver]`` table is absent.

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
        ConfigValidationError: If the configuration is invalid
    """
    pyproject = load_pyproject_toml(find_pyproject_toml(path))
    try:
        return NextverConfig.model_validate(extract_nextver_config(pyproject))
    except ValidationError as e:
        raise ConfigValidationError("Invalid [tool.nextver] configuration", details=str(e)) from e


def get_project_name(path: Path | None = None) -> str:
    """Return ``[project].name`` from pyproject.toml.

    Raises:
        ConfigValidationError: If the name is missing
    """
    pyproject = load_pyproject_toml(find_pyproject_toml(path))
    name = pyproject.get("project", {}).get("name")
    if not name:
        raise ConfigValidationError("Missing [project].name in pyproject.toml")
    return str(name)
