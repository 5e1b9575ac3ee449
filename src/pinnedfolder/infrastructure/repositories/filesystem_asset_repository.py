import logging
import os
import posixpath
import stat
import subprocess
import sys
from typing import Dict, Iterable, List, Optional, Sequence

from pinnedfolder.config import DEFAULT_EXCLUDE, HIDDEN_EXCLUDE
from pinnedfolder.core.path_resolver import containing_folder, normalize_path
from pinnedfolder.domain.models import ChildRecord
from pinnedfolder.domain.repositories import IAssetRepository
from pinnedfolder.errors import ExternalToolError, RepositoryError
from pinnedfolder.events.bus import EventBus
from pinnedfolder.events.folder_events import (
    EntryInspectRequestedEvent,
    EntryPropertiesRequestedEvent,
)
from pinnedfolder.utils.pathutils import is_excluded

_logger = logging.getLogger(__name__)


def stable_id(stat_result: os.stat_result, name: Optional[str] = None) -> str:
    """Identity of a file that survives renames and moves on the same volume.

    Hard-linked files share an inode, so their ids also carry the entry
    *name*; such an id changes when that link is renamed.
    """

    base = f"{stat_result.st_dev:x}-{stat_result.st_ino:x}"
    if name and stat_result.st_nlink > 1 and not stat.S_ISDIR(stat_result.st_mode):
        return f"{base}:{name}"
    return base


def _join(folder: str, name: str) -> str:
    return folder + name if folder.endswith("/") else f"{folder}/{name}"


class FileSystemAssetRepository(IAssetRepository):
    """Local disk backed repository.

    Ids are device/inode pairs. The ``id -> path`` index covers the most
    recent listing plus paths looked up since; each listing replaces it.
    """

    def __init__(
        self,
        event_bus: Optional[EventBus] = None,
        *,
        include_hidden: bool = False,
        exclude: Sequence[str] = DEFAULT_EXCLUDE,
    ):
        self._events = event_bus
        self._base_exclude = list(exclude)
        self._include_hidden = include_hidden
        self._paths_by_id: Dict[str, str] = {}

    @property
    def include_hidden(self) -> bool:
        return self._include_hidden

    @include_hidden.setter
    def include_hidden(self, value: bool) -> None:
        self._include_hidden = bool(value)

    @property
    def exclude_globs(self) -> List[str]:
        if self._include_hidden:
            return list(self._base_exclude)
        return self._base_exclude + list(HIDDEN_EXCLUDE)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def query_children(self, folder_id: str) -> Iterable[ChildRecord]:
        folder = self._require_path(folder_id)
        globs = self.exclude_globs
        records: List[ChildRecord] = []
        paths_by_id: Dict[str, str] = {}
        try:
            with os.scandir(folder) as it:
                for entry in it:
                    if is_excluded(entry.name, globs):
                        continue
                    try:
                        info = entry.stat(follow_symlinks=False)
                        is_folder = entry.is_dir()
                    except OSError as exc:
                        _logger.debug("Skipping %s: %s", entry.path, exc)
                        continue
                    path = _join(folder, entry.name)
                    entry_id = stable_id(info, entry.name)
                    paths_by_id[entry_id] = path
                    records.append(ChildRecord(id=entry_id, path=path, is_folder=is_folder))
        except OSError as exc:
            raise RepositoryError(f"Cannot list {folder}: {exc}") from exc
        self._paths_by_id = paths_by_id
        records.sort(key=lambda record: record.path.casefold())
        return records

    def is_empty(self, folder_id: str) -> bool:
        folder = self._require_path(folder_id)
        globs = self.exclude_globs
        try:
            with os.scandir(folder) as it:
                return not any(not is_excluded(entry.name, globs) for entry in it)
        except OSError as exc:
            raise RepositoryError(f"Cannot list {folder}: {exc}") from exc

    def resolve_by_id(self, entry_id: str) -> Optional[str]:
        path = self._paths_by_id.get(entry_id)
        if path is None:
            return None
        try:
            info = os.stat(path, follow_symlinks=False)
        except OSError:
            info = None
        if info is None or stable_id(info, posixpath.basename(path)) != entry_id:
            # Moved or deleted; the next listing of its new folder re-indexes it.
            self._paths_by_id.pop(entry_id, None)
            return None
        return path

    def id_for_path(self, path: str) -> Optional[str]:
        normalized = normalize_path(path)
        if normalized is None:
            return None
        try:
            info = os.stat(normalized, follow_symlinks=False)
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as exc:
            raise RepositoryError(f"Cannot stat {normalized}: {exc}") from exc
        entry_id = stable_id(info, posixpath.basename(normalized))
        self._paths_by_id[entry_id] = normalized
        return entry_id

    def is_valid_folder(self, path: str) -> bool:
        normalized = normalize_path(path)
        return normalized is not None and os.path.isdir(normalized)

    def parent_of(self, path: str) -> Optional[str]:
        return containing_folder(path)

    # ------------------------------------------------------------------
    # Fire-and-forget actions
    # ------------------------------------------------------------------
    def open_default(self, entry_id: str) -> None:
        path = self._resolve_or_raise(entry_id)
        _logger.info("Opening %s", path)
        if sys.platform == "win32":
            try:
                os.startfile(os.path.normpath(path))  # type: ignore[attr-defined]
            except OSError as exc:
                raise ExternalToolError(f"Cannot open {path}: {exc}") from exc
        elif sys.platform == "darwin":
            self._launch(["open", path])
        else:
            self._launch(["xdg-open", path])

    def reveal_externally(self, path: str) -> None:
        normalized = self._require_path(path)
        if not os.path.exists(normalized):
            raise RepositoryError(f"File not found: {normalized}")
        # Windows and macOS highlight the file; other systems open its folder.
        if sys.platform == "win32":
            self._launch(["explorer", "/select,", os.path.normpath(normalized)], check=False)
        elif sys.platform == "darwin":
            self._launch(["open", "-R", normalized])
        else:
            self._launch(["xdg-open", containing_folder(normalized) or normalized])

    def focus_and_inspect(self, entry_id: str) -> None:
        path = self._resolve_or_raise(entry_id)
        self._publish(EntryInspectRequestedEvent(entry_id=entry_id, path=path))

    def show_properties(self, entry_id: str) -> None:
        path = self._resolve_or_raise(entry_id)
        self._publish(EntryPropertiesRequestedEvent(entry_id=entry_id, path=path))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _require_path(self, path: str) -> str:
        normalized = normalize_path(path)
        if normalized is None:
            raise RepositoryError("Empty path")
        return normalized

    def _resolve_or_raise(self, entry_id: str) -> str:
        path = self.resolve_by_id(entry_id)
        if path is None:
            raise RepositoryError(f"Entry {entry_id} no longer exists")
        return path

    def _publish(self, event) -> None:
        if self._events is None:
            _logger.debug("No event bus; dropping %s", type(event).__name__)
            return
        self._events.publish(event)

    @staticmethod
    def _launch(command: List[str], check: bool = True) -> None:
        # ``explorer /select,`` exits non-zero even when it succeeds.
        try:
            result = subprocess.run(command, check=False)
        except OSError as exc:
            raise ExternalToolError(f"Cannot run {command[0]}: {exc}") from exc
        if check and result.returncode != 0:
            raise ExternalToolError(
                f"{command[0]} exited with status {result.returncode}"
            )
