"""Settings file management with validation and change notifications."""

from __future__ import annotations

import json
import os
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional

from jsonschema import ValidationError
from PySide6.QtCore import QObject, Signal

from ..config import APP_DIR_NAME, SETTINGS_FILE_NAME
from ..errors import SettingsLoadError, SettingsValidationError
from ..utils.jsonio import read_json, write_json
from .schema import DEFAULT_SETTINGS, merge_with_defaults


def default_settings_path() -> Path:
    """Return the default settings.json location for the current platform."""

    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / APP_DIR_NAME / SETTINGS_FILE_NAME
        return Path.home() / "AppData" / "Roaming" / APP_DIR_NAME / SETTINGS_FILE_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME / SETTINGS_FILE_NAME
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_DIR_NAME / SETTINGS_FILE_NAME
    return Path.home() / ".config" / APP_DIR_NAME / SETTINGS_FILE_NAME


def _assign(data: dict[str, Any], key: str, value: Any) -> None:
    """Set a dotted *key* inside *data*, creating intermediate branches."""

    if isinstance(value, Path):
        value = str(value)
    parts = key.split(".")
    target = data
    for part in parts[:-1]:
        branch = target.get(part)
        if not isinstance(branch, dict):
            branch = {}
            target[part] = branch
        target = branch
    target[parts[-1]] = value


class SettingsManager(QObject):
    """Load, validate and persist the panel's settings."""

    settingsChanged = Signal(str, object)

    def __init__(self, path: Path | None = None) -> None:
        super().__init__()
        self._path = path
        self._data: dict[str, Any] = deepcopy(DEFAULT_SETTINGS)

    @property
    def path(self) -> Path:
        return self._path or default_settings_path()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Load the settings JSON from disk, creating defaults if missing."""

        path = self.path
        self._path = path
        if path.exists():
            try:
                payload = read_json(path)
            except (OSError, json.JSONDecodeError) as exc:
                raise SettingsLoadError(str(exc)) from exc
            if not isinstance(payload, dict):
                raise SettingsLoadError(f"{path} does not contain a JSON object")
        else:
            payload = None
        try:
            self._data = merge_with_defaults(payload)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        self._write()

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return the value for *key*, supporting dotted access for nested keys."""

        target = self._data
        parts = key.split(".")
        for index, part in enumerate(parts):
            if not isinstance(target, dict) or part not in target:
                return default
            value = target[part]
            if index == len(parts) - 1:
                return value
            target = value
        return default

    def set(self, key: str, value: Any) -> None:
        """Update *key* with *value* and persist the change."""

        data = deepcopy(self._data)
        _assign(data, key, value)
        self._commit(data)
        self.settingsChanged.emit(key, value)

    # ------------------------------------------------------------------
    # Panel state
    # ------------------------------------------------------------------
    def last_state(self) -> tuple[Optional[str], Optional[str]]:
        """``(last_folder, last_selected_id)`` as stored."""

        return (self.get("last_folder"), self.get("last_selected_id"))

    def save_state(self, folder: Optional[str], selected_id: Optional[str]) -> None:
        """Persist the displayed folder and selected id in one write."""

        data = deepcopy(self._data)
        _assign(data, "last_folder", folder)
        _assign(data, "last_selected_id", selected_id)
        self._commit(data)
        self.settingsChanged.emit("last_folder", folder)
        self.settingsChanged.emit("last_selected_id", selected_id)

    # ------------------------------------------------------------------
    # Internal utilities
    # ------------------------------------------------------------------
    def _commit(self, data: dict[str, Any]) -> None:
        try:
            self._data = merge_with_defaults(data)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        self._write()

    def _write(self) -> None:
        path = self.path
        self._path = path
        write_json(path, self._data)


__all__ = ["SettingsManager", "default_settings_path"]
