"""Selection and folder navigation state for the pinned folder list."""

from __future__ import annotations

import logging
from typing import Optional

from ...core.navigation import NavigationCommand, navigate
from ...core.path_resolver import is_valid_folder, normalize_path, valid_parent_folder
from ...domain.models import Entry, Snapshot
from ...domain.repositories import IAssetRepository
from ...errors import RepositoryError
from .folder_list_model import FolderListModel
from .signal import Signal

_LOGGER = logging.getLogger(__name__)


class SelectionController:
    """Track the displayed folder and which entry, by stable id, is selected.

    The selected id outlives snapshots: on a reload it is re-resolved against
    the new snapshot and silently dropped when absent. Methods that act on
    user commands return ``True`` when the command applied and ``False``
    ("not handled") otherwise, so callers can let the input fall through.

    Signals
    -------
    folder_changed(folder_id)
        The displayed folder identifier changed (not emitted for reloads of
        the same folder).
    selection_changed(selected_id, selected_index)
    scroll_requested(index)
        The given row should be brought into view.
    """

    def __init__(self, repository: IAssetRepository, model: FolderListModel) -> None:
        self._repository = repository
        self._model = model
        self._folder_id: Optional[str] = None
        self._selected_id: Optional[str] = None
        self._selected_index: Optional[int] = None

        self.folder_changed = Signal()
        self.selection_changed = Signal()
        self.scroll_requested = Signal()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def folder_id(self) -> Optional[str]:
        return self._folder_id

    @property
    def snapshot(self) -> Snapshot:
        return self._model.snapshot

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_index(self) -> Optional[int]:
        return self._selected_index

    @property
    def selected_entry(self) -> Optional[Entry]:
        if self._selected_index is None:
            return None
        return self.snapshot[self._selected_index]

    # ------------------------------------------------------------------
    # Folder changes
    # ------------------------------------------------------------------
    def set_folder(
        self,
        identifier: Optional[str],
        *,
        select_entry_id: Optional[str] = None,
        restore_previous: bool = False,
    ) -> bool:
        """Display *identifier* and resolve the selection against it.

        A file identifier opens its containing folder with the file selected
        and scrolled into view. An identifier that is neither a valid folder
        nor inside one falls back to "no folder displayed". Returns ``True``
        when the displayed folder identifier changed.
        """

        folder = normalize_path(identifier)
        selected_file: Optional[str] = None
        if folder is not None and not is_valid_folder(folder, self._repository):
            parent = valid_parent_folder(folder, self._repository)
            if parent is not None:
                selected_file = folder
                folder = parent
            else:
                _LOGGER.debug("%s is not inside a valid folder", folder)
                folder = None
                restore_previous = False
                select_entry_id = None

        changed = folder != self._folder_id
        if restore_previous or changed:
            previous_id = self._selected_id
            if folder is None:
                self._model.clear()
            else:
                self._model.load(folder)
            self._folder_id = folder
            if changed:
                self.folder_changed.emit(folder)

            if select_entry_id is not None:
                self.select_id(select_entry_id)
            elif restore_previous and selected_file is None:
                self.select_id(previous_id)
            else:
                self.select_index(None)
        elif select_entry_id is not None:
            self.select_id(select_entry_id)

        if folder is not None and selected_file is not None:
            self.select_path(selected_file, scroll_into_view=True)
        return changed

    def reload(self) -> None:
        """Re-query the displayed folder, keeping the selection when possible."""

        if self._folder_id is not None:
            self.set_folder(self._folder_id, restore_previous=True)

    def restore(self, folder_id: Optional[str], selected_id: Optional[str]) -> None:
        """Reopen a persisted folder and try to reselect *selected_id*."""

        self._selected_id = selected_id
        self.set_folder(folder_id, restore_previous=True)

    # ------------------------------------------------------------------
    # Selection primitives
    # ------------------------------------------------------------------
    def select_index(self, index: Optional[int], *, scroll_into_view: bool = False) -> None:
        snapshot = self.snapshot
        if index is None or not 0 <= index < len(snapshot):
            index = None
        new_id = snapshot[index].id if index is not None else None
        changed = index != self._selected_index or new_id != self._selected_id
        self._selected_index = index
        self._selected_id = new_id
        if changed:
            self.selection_changed.emit(new_id, index)
        if scroll_into_view and index is not None:
            self.scroll_requested.emit(index)

    def select_id(self, entry_id: Optional[str], *, scroll_into_view: bool = False) -> None:
        self.select_index(self.snapshot.index_of_id(entry_id), scroll_into_view=scroll_into_view)

    def select_path(self, path: Optional[str], *, scroll_into_view: bool = False) -> None:
        normalized = normalize_path(path)
        entry_id: Optional[str] = None
        if normalized is not None:
            try:
                entry_id = self._repository.id_for_path(normalized)
            except RepositoryError as exc:
                _LOGGER.debug("No id for %s: %s", normalized, exc)
        index = self.snapshot.index_of_id(entry_id)
        if index is None:
            index = self.snapshot.index_of_path(normalized)
        self.select_index(index, scroll_into_view=scroll_into_view)

    def clear_selection(self) -> None:
        self.select_index(None)

    # ------------------------------------------------------------------
    # Navigation commands
    # ------------------------------------------------------------------
    def navigate(self, command: NavigationCommand, viewport_rows: int = 1) -> bool:
        new_index = navigate(self._selected_index, len(self.snapshot), command, viewport_rows)
        if new_index is None:
            return False
        self.select_index(new_index, scroll_into_view=True)
        return True

    def enter_folder(self, select_first_child: bool = False) -> bool:
        """Open the selected folder; not handled unless a folder is selected."""

        entry = self.selected_entry
        if entry is None or not entry.is_folder:
            return False
        self.set_folder(entry.path)
        if select_first_child and self.snapshot:
            self.select_index(0, scroll_into_view=True)
        return True

    def exit_folder(self, select_sub_folder: bool = True) -> bool:
        """Move to the parent folder and reselect the folder just left."""

        current = self._folder_id
        parent = valid_parent_folder(current, self._repository)
        if parent is None or parent == current:
            return False
        self.set_folder(parent)
        if select_sub_folder:
            self.select_path(current, scroll_into_view=True)
        return True

    def open_selection(self, select_first_child: bool = False) -> bool:
        entry = self.selected_entry
        if entry is None:
            return False
        if entry.is_folder:
            return self.enter_folder(select_first_child)
        self._repository.open_default(entry.id)
        return True

