"""Scan settings loaded from a YAML file.

The settings file is a flat mapping; every key is optional::

    paths:
      - ~/.bashrc
      - ~/.config/nvim
    include_hidden: true
    max_file_size: 1048576
    exclude_patterns: ["*.log", "*.cache", "*.tmp"]
    log_level: INFO

Lookup order for the file: the explicit ``path`` argument, then
``$DOTSYNC_CONFIG``, then ``~/.config/dotsync/config.yaml``. A missing
default file simply yields the defaults. Anything else that goes wrong
raises ``SettingsError``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from dotsync.discovery.models import (
    DEFAULT_EXCLUDE_PATTERNS,
    MAX_FILE_SIZE,
    ScanOptions,
)
from dotsync.exceptions import SettingsError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DOTSYNC_CONFIG"
DEFAULT_CONFIG_RELPATH = Path(".config") / "dotsync" / "config.yaml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Effective scan settings.

    Attributes:
        paths: Paths to scan, or None for the built-in default set.
        include_hidden: Whether directory walks descend into dot-entries.
        max_file_size: Size limit in bytes.
        exclude_patterns: Exclusion patterns for directory walks.
        log_level: Logging level name used by the CLI.
        source: The file the settings came from, if any.
    """

    paths: tuple[str, ...] | None = None
    include_hidden: bool = True
    max_file_size: int = MAX_FILE_SIZE
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    log_level: str = "WARNING"
    source: Path | None = None

    def to_scan_options(self, max_workers: int = 1) -> ScanOptions:
        return ScanOptions(
            paths=self.paths,
            include_hidden=self.include_hidden,
            max_file_size=self.max_file_size,
            exclude_patterns=self.exclude_patterns,
            max_workers=max_workers,
        )


def default_config_path() -> Path:
    return Path.home() / DEFAULT_CONFIG_RELPATH


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from YAML.

    Args:
        path: Explicit settings file. Must exist when given.

    Returns:
        The parsed ``Settings``, or the defaults when no file applies.

    Raises:
        SettingsError: If the file is missing (when explicit), unreadable,
            not valid YAML, or contains unknown keys or wrong types.
    """
    explicit = path if path is not None else os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        config_path = Path(explicit).expanduser()
        if not config_path.is_file():
            raise SettingsError(f"Settings file not found: {config_path}")
    else:
        config_path = default_config_path()
        if not config_path.is_file():
            logger.debug("No settings file at %s, using defaults", config_path)
            return Settings()

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsError(f"Cannot read settings file {config_path}: {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid YAML in {config_path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {config_path} must contain a mapping")

    settings = _settings_from_mapping(data, config_path)
    logger.debug("Loaded settings from %s", config_path)
    return settings


def _settings_from_mapping(data: dict[str, Any], source: Path) -> Settings:
    known = {"paths", "include_hidden", "max_file_size", "exclude_patterns", "log_level"}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise SettingsError(f"Unknown settings in {source}: {', '.join(unknown)}")

    kwargs: dict[str, Any] = {"source": source}

    if "paths" in data and data["paths"] is not None:
        kwargs["paths"] = tuple(_string_list(data["paths"], "paths", source))

    if "include_hidden" in data:
        value = data["include_hidden"]
        if not isinstance(value, bool):
            raise SettingsError(f"{source}: include_hidden must be true or false")
        kwargs["include_hidden"] = value

    if "max_file_size" in data:
        value = data["max_file_size"]
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise SettingsError(f"{source}: max_file_size must be a non-negative integer")
        kwargs["max_file_size"] = value

    if "exclude_patterns" in data:
        kwargs["exclude_patterns"] = tuple(
            _string_list(data["exclude_patterns"] or [], "exclude_patterns", source)
        )

    if "log_level" in data:
        value = data["log_level"]
        if not isinstance(value, str) or value.upper() not in _LOG_LEVELS:
            raise SettingsError(
                f"{source}: log_level must be one of {', '.join(_LOG_LEVELS)}"
            )
        kwargs["log_level"] = value.upper()

    return Settings(**kwargs)


def _string_list(value: Any, key: str, source: Path) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise SettingsError(f"{source}: {key} must be a list of strings")
    return value
