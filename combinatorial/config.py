"""
Project-level configuration for the combinatorial CLI.

This module provides:

- find_config_file: Walk up directories to locate .combinatorial.toml
- deep_merge: Recursively merge two dicts (override wins for leaf values)
- PreviewConfig: Typed settings for the ``show`` and ``list`` commands
- ProjectConfig: Main config object with load/from_dict interface

Configuration is loaded from `.combinatorial.toml` with optional
`.combinatorial.local.toml` overrides from the same directory:

    [preview]
    sample = 5      # values shown per parameter
    max_rows = 20   # combinations listed by default

Value resolution itself never reads configuration; the same declarations
always resolve to the same values.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from combinatorial.errors import CombinatorialError

CONFIG_FILENAME = ".combinatorial.toml"
LOCAL_CONFIG_FILENAME = ".combinatorial.local.toml"


class ConfigError(CombinatorialError, ValueError):
    """Raised when a configuration value has the wrong type or range."""

    pass


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """
    Walk up from *start_dir* to find `.combinatorial.toml`.

    Args:
        start_dir: Directory to start searching from. Defaults to ``Path.cwd()``.

    Returns:
        Path to the config file, or ``None`` if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts. *override* wins for leaf values.

    Neither input is mutated; a new dict is returned.
    """
    merged: dict[str, Any] = {}

    for key in base.keys() | override.keys():
        if key in base and key in override:
            base_val = base[key]
            over_val = override[key]
            if isinstance(base_val, dict) and isinstance(over_val, dict):
                merged[key] = deep_merge(base_val, over_val)
            else:
                merged[key] = over_val
        elif key in base:
            merged[key] = base[key]
        else:
            merged[key] = override[key]

    return merged


def _positive_int(section: dict[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"[preview] {key} must be a positive integer, got {value!r}")
    return value


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PreviewConfig:
    """
    Settings for previewing resolved values.

    Attributes:
        sample: Number of values shown per parameter.
        max_rows: Number of combinations listed when no limit is given.
    """

    sample: int = 5
    max_rows: int = 20


@dataclass(frozen=True)
class ProjectConfig:
    """
    Configuration loaded from ``.combinatorial.toml``.

    Typical usage::

        config = ProjectConfig.load()
        config.preview.sample
    """

    preview: PreviewConfig = field(default_factory=PreviewConfig)
    path: Path | None = None

    @classmethod
    def load(cls, start_dir: Path | None = None) -> ProjectConfig:
        """
        Find and load project configuration.

        Walks up from *start_dir* (default: cwd) to locate
        ``.combinatorial.toml`` and deep-merges ``.combinatorial.local.toml``
        from the same directory. Returns defaults when no file is found.

        Raises:
            ConfigError: If a setting has an invalid value.
            tomllib.TOMLDecodeError: If a file is not valid TOML.
        """
        config_path = find_config_file(start_dir)
        if config_path is None:
            return cls()

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        local_path = config_path.parent / LOCAL_CONFIG_FILENAME
        if local_path.is_file():
            with open(local_path, "rb") as f:
                data = deep_merge(data, tomllib.load(f))

        return cls.from_dict(data, path=config_path)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Path | None = None) -> ProjectConfig:
        """
        Create a ProjectConfig from parsed TOML data.

        Unknown sections and keys are ignored.

        Raises:
            ConfigError: If a setting has an invalid value.
        """
        preview_raw = data.get("preview", {})
        if not isinstance(preview_raw, dict):
            raise ConfigError("[preview] must be a table")

        defaults = PreviewConfig()
        preview = PreviewConfig(
            sample=_positive_int(preview_raw, "sample", defaults.sample),
            max_rows=_positive_int(preview_raw, "max_rows", defaults.max_rows),
        )
        return cls(preview=preview, path=path)
