"""User settings loaded from YAML with environment overrides."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from fairyboard.core.errors import FairyboardError

_LOGGER = logging.getLogger(__name__)

ENV_LOG_LEVEL = "FAIRYBOARD_LOG_LEVEL"
ENV_RULESET = "FAIRYBOARD_RULESET"


class ConfigError(FairyboardError, ValueError):
    """The settings file is unreadable or holds invalid values."""


@dataclass(frozen=True, slots=True)
class Settings:
    """All user-configurable settings."""

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Game
    ruleset: str = "standard"

    # Tools
    perft_depth: int = 3
    show_pseudo_legal: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Settings:
        """Build settings from a mapping; missing keys keep their defaults."""
        known = {f.name: f for f in fields(cls)}
        unknown = set(data) - set(known)
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(sorted(map(str, unknown)))}")

        values: dict[str, Any] = {}
        for key, value in data.items():
            values[key] = _check_value(key, value)
        return cls(**values)


def _check_value(key: str, value: Any) -> Any:
    if key == "log_file":
        if value is not None and not isinstance(value, str):
            raise ConfigError("'log_file' must be a path string")
        return value
    if key == "perft_depth":
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError("'perft_depth' must be a non-negative integer")
        return value
    if key == "show_pseudo_legal":
        if not isinstance(value, bool):
            raise ConfigError("'show_pseudo_legal' must be a boolean")
        return value
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{key!r} must be a non-empty string")
    return value


def load_settings(path: str | Path | None = None) -> Settings:
    """Read settings from *path* (if any), then apply environment overrides."""
    settings = Settings()
    if path is not None:
        try:
            with Path(path).open(encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except OSError as exc:
            raise ConfigError(f"Cannot read settings {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(data, Mapping):
            raise ConfigError(f"Settings file {path} must hold a mapping")
        settings = Settings.from_mapping(data)
        _LOGGER.debug("Loaded settings from %s", path)

    overrides: dict[str, str] = {}
    if level := os.environ.get(ENV_LOG_LEVEL):
        overrides["log_level"] = level
    if ruleset := os.environ.get(ENV_RULESET):
        overrides["ruleset"] = ruleset
    return replace(settings, **overrides) if overrides else settings
