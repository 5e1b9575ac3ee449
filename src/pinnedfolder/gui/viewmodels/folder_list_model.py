"""Folder listing model turning repository rows into an ordered snapshot."""

from __future__ import annotations

import logging
from typing import Optional

from ...core.path_resolver import is_immediate_child, normalize_path
from ...domain.models import ChildRecord, Entry, Snapshot
from ...domain.repositories import IAssetRepository
from ...errors import RepositoryError
from .signal import Signal

_LOGGER = logging.getLogger(__name__)


class FolderListModel:
    """Own the snapshot of the currently displayed folder.

    :meth:`load` builds a new :class:`Snapshot` from the repository and
    installs it wholesale. The repository query may report descendants deeper
    than one level; only immediate children are kept. Rows whose underlying
    item no longer resolves are dropped silently, since a half-applied
    repository change is expected to be followed by another notification.
    """

    def __init__(self, repository: IAssetRepository) -> None:
        self._repository = repository
        self._snapshot = Snapshot.empty()
        self.snapshot_changed = Signal()

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def load(self, folder_id: str) -> Snapshot:
        """Query *folder_id* and install the resulting snapshot."""

        snapshot = self.build_snapshot(folder_id)
        self._install(snapshot)
        return snapshot

    def clear(self) -> Snapshot:
        """Install an empty snapshot, meaning no folder is displayed."""

        self._install(Snapshot.empty())
        return self._snapshot

    def build_snapshot(self, folder_id: str) -> Snapshot:
        folder = normalize_path(folder_id)
        if folder is None:
            return Snapshot.empty()

        try:
            records = list(self._repository.query_children(folder))
        except RepositoryError as exc:
            _LOGGER.warning("Could not list %s: %s", folder, exc)
            return Snapshot.empty(folder)

        folders: list[Entry] = []
        files: list[Entry] = []
        seen_ids: set[str] = set()
        for record in records:
            entry = self._resolve_entry(folder, record)
            if entry is None or entry.id in seen_ids:
                continue
            seen_ids.add(entry.id)
            # Stable partition: folders pinned to the top, otherwise the
            # repository's own order.
            (folders if entry.is_folder else files).append(entry)
        return Snapshot(folder_id=folder, entries=tuple(folders + files))

    def _resolve_entry(self, folder: str, record: ChildRecord) -> Optional[Entry]:
        try:
            path = normalize_path(self._repository.resolve_by_id(record.id))
        except (RepositoryError, OSError) as exc:
            _LOGGER.debug("Dropping %s from %s: %s", record.id, folder, exc)
            return None
        if path is None or not is_immediate_child(folder, path):
            return None
        is_empty_folder = False
        if record.is_folder:
            try:
                is_empty_folder = self._repository.is_empty(path)
            except (RepositoryError, OSError) as exc:
                _LOGGER.debug("Cannot tell whether %s is empty: %s", path, exc)
        return Entry(
            id=record.id,
            path=path,
            is_folder=record.is_folder,
            is_empty_folder=is_empty_folder,
        )

    def _install(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        self.snapshot_changed.emit(snapshot)
