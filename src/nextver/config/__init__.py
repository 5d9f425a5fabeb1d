"""Configuration management for nextver."""

from __future__ import annotations

from nextver.config.loader import load_config
from nextver.config.models import (
    CommitsConfig,
    DependencyRoot,
    NextverConfig,
    PresetConfig,
)

__all__ = [
    "CommitsConfig",
    "DependencyRoot",
    "NextverConfig",
    "PresetConfig",
    "load_config",
]
