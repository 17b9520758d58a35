"""
Configuration loader — reads podsync.yml into a settings model.

The file is optional: without one, every setting takes its default.
It reads YAML, validates against Pydantic schemas, and returns a
typed settings object.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

# Default config filename
SETTINGS_FILE = "podsync.yml"

# Environment override for the pod executable
POD_ENV_VAR = "PODSYNC_POD"


class ConfigError(Exception):
    """Raised when podsync configuration is invalid."""


class CocoaPodsSettings(BaseModel):
    """How to find and judge the CocoaPods installation."""

    executable: str = "pod"
    minimum_version: str = "1.0.0"
    recommended_version: str = "1.5.0"
    disable_stats: bool = True

    @field_validator("minimum_version", "recommended_version")
    @classmethod
    def _valid_version(cls, value: str) -> str:
        try:
            Version(value)
        except InvalidVersion as e:
            raise ValueError(f"not a valid version: {value!r}") from e
        return value


class PodsSettings(BaseModel):
    """Top-level podsync settings."""

    cocoapods: CocoaPodsSettings = Field(default_factory=CocoaPodsSettings)
    templates_dir: Path | None = None   # None = bundled templates
    home_dir: Path | None = None        # None = the user's home directory

    @property
    def resolved_home_dir(self) -> Path:
        return self.home_dir if self.home_dir is not None else Path.home()


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for podsync.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to podsync.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None) -> PodsSettings:
    """Load and validate podsync settings.

    Args:
        path: Explicit path to podsync.yml. If None, searches upward and
            falls back to defaults when nothing is found.

    Returns:
        Validated PodsSettings model.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    explicit = path is not None
    if path is None:
        path = find_settings_file()

    if path is None:
        logger.debug("No %s found, using defaults", SETTINGS_FILE)
        return _apply_env(PodsSettings())

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return _apply_env(PodsSettings())

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = PodsSettings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid podsync configuration in {path}: {e}") from e

    # Relative paths are relative to the settings file
    base = path.parent.resolve()
    if settings.templates_dir is not None and not settings.templates_dir.is_absolute():
        settings.templates_dir = base / settings.templates_dir
    if settings.home_dir is not None and not settings.home_dir.is_absolute():
        settings.home_dir = base / settings.home_dir

    logger.info("Loaded settings from %s", path)
    return _apply_env(settings)


def _apply_env(settings: PodsSettings) -> PodsSettings:
    """Apply environment variable overrides."""
    executable = os.environ.get(POD_ENV_VAR)
    if executable:
        settings.cocoapods.executable = executable
    return settings
