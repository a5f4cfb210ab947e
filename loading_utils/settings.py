"""Locator settings from settings.yaml files and the environment.

Three scopes are merged (later overrides earlier):
- User global (~/.loading-utils/settings.yaml)
- Project (.loading-utils/settings.yaml)
- Local (.loading-utils/settings.local.yaml)

Environment variables override every file:
- LOADING_UTILS_SEARCH_PATH: os.pathsep separated search path override
- LOADING_UTILS_LOG_LEVEL: logging level name
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator

from .search_path import DEFAULT_ARCHIVE_SUFFIXES
from .search_path import path_separator

logger = logging.getLogger(__name__)

SEARCH_PATH_ENV = "LOADING_UTILS_SEARCH_PATH"
LOG_LEVEL_ENV = "LOADING_UTILS_LOG_LEVEL"
SETTINGS_SECTION = "locator"


class LocatorSettings(BaseModel):
    """Configuration for building a search path and naming resources."""

    search_path: list[str] | None = Field(
        None, description="Search path override. None means sys.path is used."
    )
    archive_suffixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ARCHIVE_SUFFIXES),
        description="File name endings treated as zip-compatible archives",
    )
    name_suffix: str = Field(".py", description="Suffix appended when converting names to paths")
    log_level: str = Field("INFO", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


class SettingsManager:
    """Reads and updates locator settings across user/project/local scopes."""

    def __init__(self, settings_dir: Path | None = None, user_dir: Path | None = None):
        """Initialize settings manager with standard paths.

        Args:
            settings_dir: Base directory for project/local settings (for testing).
                          If None, uses .loading-utils in current directory.
            user_dir: Base directory for user settings (for testing).
                      If None, uses ~/.loading-utils.
        """
        if settings_dir is None:
            settings_dir = Path(".loading-utils")
        if user_dir is None:
            user_dir = Path.home() / ".loading-utils"

        self.user_settings_file = user_dir / "settings.yaml"
        self.project_settings_file = settings_dir / "settings.yaml"
        self.local_settings_file = settings_dir / "settings.local.yaml"

    def _scope_file(self, scope: str) -> Path:
        file_map = {
            "user": self.user_settings_file,
            "project": self.project_settings_file,
            "local": self.local_settings_file,
        }
        return file_map.get(scope, self.project_settings_file)

    def get_merged_section(self) -> dict[str, Any]:
        """Merge the ``locator`` section of every scope.

        Keys are replaced whole; lists are not concatenated.
        """
        merged: dict[str, Any] = {}
        for path in (self.user_settings_file, self.project_settings_file, self.local_settings_file):
            settings = self._read_settings(path)
            section = settings.get(SETTINGS_SECTION) if settings else None
            if isinstance(section, dict):
                merged.update(section)
            elif section is not None:
                logger.warning(f"Ignoring non-mapping '{SETTINGS_SECTION}' section in {path}")
        return merged

    def load(self, environ: dict[str, str] | None = None) -> LocatorSettings:
        """Build settings from the merged scopes plus environment overrides.

        Args:
            environ: Environment mapping (defaults to os.environ)

        Returns:
            Validated LocatorSettings. Invalid file values fall back to defaults.
        """
        env = os.environ if environ is None else environ
        values = self.get_merged_section()

        if search_path := env.get(SEARCH_PATH_ENV):
            values["search_path"] = [entry for entry in search_path.split(path_separator()) if entry]
        if log_level := env.get(LOG_LEVEL_ENV):
            values["log_level"] = log_level

        try:
            return LocatorSettings(**values)
        except ValidationError as e:
            logger.warning(f"Invalid locator settings, using defaults: {e}")
            return LocatorSettings()

    def add_search_root(self, root: str, scope: str = "project") -> None:
        """Append ``root`` to the search path override of ``scope``."""
        target_file = self._scope_file(scope)
        settings = self._read_settings(target_file) or {}
        section = settings.setdefault(SETTINGS_SECTION, {})
        roots = section.get("search_path") or []
        if root not in roots:
            roots.append(root)
        section["search_path"] = roots
        self._write_settings(target_file, settings)
        logger.info(f"Added {scope} search root: {root}")

    def remove_search_root(self, root: str, scope: str = "project") -> bool:
        """Remove ``root`` from the search path override of ``scope``.

        Returns:
            True if removed, False if not found
        """
        target_file = self._scope_file(scope)
        settings = self._read_settings(target_file)
        section = settings.get(SETTINGS_SECTION) if settings else None
        if not section or root not in (section.get("search_path") or []):
            return False

        section["search_path"].remove(root)
        if not section["search_path"]:
            del section["search_path"]
        if not section:
            del settings[SETTINGS_SECTION]

        self._write_settings(target_file, settings)
        logger.info(f"Removed {scope} search root: {root}")
        return True

    def _read_settings(self, path: Path) -> dict[str, Any] | None:
        """Read settings from YAML file.

        Returns:
            Settings dict or None if the file doesn't exist or can't be parsed
        """
        if not path.exists():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {path}: top level is not a mapping")
            return None
        return data

    def _write_settings(self, path: Path, settings: dict[str, Any]) -> None:
        """Write settings to YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(settings, f, default_flow_style=False, sort_keys=False)
