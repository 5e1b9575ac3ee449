"""QFileSystemWatcher wrapper that turns disk changes into bus events."""

from __future__ import annotations

import logging
import os
from typing import Optional

from PySide6.QtCore import QFileSystemWatcher, QObject, QTimer

from ...config import WATCH_DEBOUNCE_MS
from ...core.path_resolver import normalize_path
from ...events.bus import EventBus
from ...events.folder_events import FolderContentsChangedEvent

_LOGGER = logging.getLogger(__name__)


class FolderWatcher(QObject):
    """Watch the displayed folder and its immediate subfolders.

    Bursts of notifications are folded into one payload-free
    :class:`FolderContentsChangedEvent` by a single-shot timer.
    """

    def __init__(
        self,
        event_bus: EventBus,
        parent: QObject | None = None,
        *,
        debounce_ms: int = WATCH_DEBOUNCE_MS,
    ) -> None:
        super().__init__(parent)
        self._events = event_bus
        self._folder: Optional[str] = None
        self._watcher = QFileSystemWatcher(self)
        self._debounce = QTimer(self)
        self._debounce.setSingleShot(True)
        self._debounce.setInterval(debounce_ms)
        self._watcher.directoryChanged.connect(self._on_directory_changed)
        self._watcher.fileChanged.connect(self._on_directory_changed)
        self._debounce.timeout.connect(self._emit_changed)

    def folder(self) -> Optional[str]:
        return self._folder

    def watched_paths(self) -> list[str]:
        return sorted(self._watcher.directories())

    def is_pending(self) -> bool:
        return self._debounce.isActive()

    def watch(self, folder: Optional[str]) -> None:
        """Replace the watched set with *folder* and its subfolders."""

        self._folder = normalize_path(folder)
        self._rebuild_watches()

    def _on_directory_changed(self, path: str) -> None:
        _LOGGER.debug("Change notification for %s", path)
        self._debounce.start()

    def _emit_changed(self) -> None:
        # Subfolders may have appeared or vanished.
        self._rebuild_watches()
        self._events.publish(FolderContentsChangedEvent())

    def _desired_paths(self) -> set[str]:
        if self._folder is None or not os.path.isdir(self._folder):
            return set()
        desired = {self._folder}
        try:
            with os.scandir(self._folder) as it:
                for entry in it:
                    try:
                        if entry.is_dir():
                            desired.add(normalize_path(entry.path) or entry.path)
                    except OSError:
                        continue
        except OSError as exc:
            _LOGGER.warning("Cannot watch subfolders of %s: %s", self._folder, exc)
        return desired

    def _rebuild_watches(self) -> None:
        current = {normalize_path(path) or path for path in self._watcher.directories()}
        desired = self._desired_paths()
        remove = [path for path in self._watcher.directories() if (normalize_path(path) or path) not in desired]
        if remove:
            self._watcher.removePaths(remove)
        add = [path for path in desired if path not in current]
        if add:
            self._watcher.addPaths(add)
