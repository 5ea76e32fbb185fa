from __future__ import annotations

"""Configuration loading and access helpers.

This module centralises the declarative settings of the section markers
(auto-tagging, row colours) and the logging configuration. It loads YAML
files packaged with *hierarchy_sections* and merges them with user overrides.

On Windows: ``%LOCALAPPDATA%\\HierarchySections\\config\\*.yml``
On Unix: ``~/.hierarchy_sections/*.yml``

``HIERARCHY_SECTIONS_CONFIG_DIR`` replaces the user directory when set.
"""

import importlib.resources as pkg_resources
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from hierarchy_sections.core.models import SectionColors, SectionSettings

logger = logging.getLogger(__name__)

__all__ = ["ConfigManager"]


def _get_user_config_dir() -> Path:
    """Get the user configuration directory."""
    override = os.environ.get("HIERARCHY_SECTIONS_CONFIG_DIR")
    if override:
        return Path(override)
    if os.name == 'nt':  # Windows
        local_appdata = os.environ.get('LOCALAPPDATA')
        if local_appdata:
            return Path(local_appdata) / "HierarchySections" / "config"
        return Path.home() / "AppData" / "Local" / "HierarchySections" / "config"
    return Path.home() / ".hierarchy_sections"


def _read_packaged(filename: str) -> str:
    return pkg_resources.files(__package__).joinpath(filename).read_text(encoding="utf-8")


def _ensure_user_configs_exist(user_config_dir: Path, default_filenames: Dict[str, str]) -> None:
    """Copy default config files to user directory if they don't exist."""
    try:
        user_config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Could not create user config directory %s: %s", user_config_dir, e)
        return

    for filename in default_filenames.values():
        user_config_path = user_config_dir / filename
        if user_config_path.exists():
            continue
        try:
            user_config_path.write_text(_read_packaged(filename), encoding='utf-8')
            logger.info("Created user config: %s", user_config_path)
        except (FileNotFoundError, OSError) as e:
            logger.warning("Could not copy default config %s: %s", filename, e)


class _Singleton(type):
    _instance: Optional["ConfigManager"] = None

    def __call__(cls, *args, **kwargs):  # type: ignore[no-self-use]
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance


class ConfigManager(metaclass=_Singleton):
    """Lazy-loads and exposes configuration sections as dictionaries."""

    _DEFAULT_FILENAMES = {
        "settings": "default_settings.yml",
        "logging": "logging.yml",
    }

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Any]] = {}
        self._user_config_dir = _get_user_config_dir()
        self._ensure_loaded()

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the cached instance so the next call reloads from disk."""
        cls._instance = None

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    def get_settings(self) -> Dict[str, Any]:
        return self._data.get("settings", {})

    def get_logging_config(self) -> Dict[str, Any]:
        return self._data.get("logging", {})

    def get_section_settings(self) -> SectionSettings:
        """Return the marker settings as a typed value object."""
        raw = self.get_settings()
        colors_raw = raw.get("colors") or {}
        defaults = SectionColors()
        colors = SectionColors(
            foreground=str(colors_raw.get("foreground", defaults.foreground)),
            background=str(colors_raw.get("background", defaults.background)),
            highlight_foreground=str(colors_raw.get("highlight_foreground", defaults.highlight_foreground)),
            highlight_background=str(colors_raw.get("highlight_background", defaults.highlight_background)),
        )
        auto_tag = raw.get("auto_tag_on_register", True)
        if not isinstance(auto_tag, bool):
            logger.warning("Ignoring non-boolean auto_tag_on_register=%r", auto_tag)
            auto_tag = SectionSettings.auto_tag_on_register
        return SectionSettings(
            auto_tag_on_register=auto_tag,
            colors=colors,
        )

    def reset_user_settings(self) -> bool:
        """Delete the user settings override and reload packaged defaults.

        Returns True when an override file existed and was removed.
        """
        path = self._user_config_dir / self._DEFAULT_FILENAMES["settings"]
        removed = False
        if path.exists():
            try:
                path.unlink()
                removed = True
                logger.info("Removed user settings override: %s", path)
            except OSError as exc:
                logger.error("Could not remove user settings %s: %s", path, exc)
        self._data.clear()
        self._ensure_loaded()
        return removed

    # ------------------------------------------------------------------
    # Internal loading logic
    # ------------------------------------------------------------------
    def _ensure_loaded(self) -> None:
        if self._data:
            return  # already loaded

        startup_summary = []

        _ensure_user_configs_exist(self._user_config_dir, self._DEFAULT_FILENAMES)

        for key, filename in self._DEFAULT_FILENAMES.items():
            merged_cfg: Dict[str, Any] = {}
            status = "missing"

            # 1. load packaged default
            try:
                packaged_data = yaml.safe_load(_read_packaged(filename)) or {}
                merged_cfg.update(packaged_data)
                status = "loaded"
            except (FileNotFoundError, OSError):
                logger.error("Missing packaged config for %s (%s)", key, filename)
            except yaml.YAMLError as exc:
                logger.error("Invalid packaged config for %s (%s): %s", key, filename, exc)
                status = "invalid"

            # 2. load user overrides
            user_path = self._user_config_dir / filename
            if user_path.exists():
                try:
                    user_data = yaml.safe_load(user_path.read_text(encoding="utf-8")) or {}
                    merged_cfg.update(user_data)
                    if status == "loaded":
                        status = "loaded+overrides"
                except (OSError, yaml.YAMLError) as exc:
                    logger.error("Could not parse user config %s: %s", user_path, exc)

            self._data[key] = merged_cfg
            startup_summary.append(f"{key}: {status}")

        logger.info("Config startup: %s", " | ".join(startup_summary))
