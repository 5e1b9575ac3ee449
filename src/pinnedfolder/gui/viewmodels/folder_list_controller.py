"""Headless orchestrator for the pinned folder list, free of Qt.

``FolderListController`` owns one listing (model, selection, virtualizer and
drag gesture) and turns toolkit-neutral input records into state changes.
Views feed it pointer/key/drop events and render whatever
:meth:`FolderListController.visible_rows` returns.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from typing import Iterable, Optional

from ...config import DEFAULT_TITLE, DRAG_THRESHOLD_PX, ROW_HEIGHT
from ...core.navigation import NavigationCommand
from ...core.path_resolver import is_valid_folder, normalize_path, valid_parent_folder
from ...domain.models import Entry, Snapshot
from ...domain.repositories import IAssetRepository
from ...errors.handler import ErrorHandler
from ...events.bus import EventBus
from ...events.folder_events import FolderContentsChangedEvent
from ..ui.controllers.drag_gesture import DragGesture, PressOutcome
from ..ui.widgets.virtual_list import ListVirtualizer
from .base import BaseViewModel
from .folder_list_model import FolderListModel
from .input_events import (
    HANDLED,
    HANDLED_EXIT,
    NOT_HANDLED,
    EventResult,
    KeyCommand,
    PointerButton,
    PointerEvent,
)
from .selection_controller import SelectionController
from .signal import ObservableProperty, Signal

_LOGGER = logging.getLogger(__name__)

_NAVIGATION_KEYS = {
    KeyCommand.UP: NavigationCommand.UP,
    KeyCommand.DOWN: NavigationCommand.DOWN,
    KeyCommand.PAGE_UP: NavigationCommand.PAGE_UP,
    KeyCommand.PAGE_DOWN: NavigationCommand.PAGE_DOWN,
    KeyCommand.HOME: NavigationCommand.HOME,
    KeyCommand.END: NavigationCommand.END,
}


@dataclass(frozen=True)
class VisibleRow:
    """One row to paint, positioned in viewport coordinates."""

    index: int
    entry: Entry
    top: float
    height: float
    selected: bool


@dataclass(frozen=True)
class DropTarget:
    folder: str
    selected_path: Optional[str] = None


def folder_title(folder_id: Optional[str]) -> str:
    """Window title for *folder_id*: ``"<basename>/"`` or the default title."""

    if folder_id is None:
        return DEFAULT_TITLE
    name = posixpath.basename(folder_id.rstrip("/")) or folder_id.rstrip("/")
    if not name:
        return DEFAULT_TITLE
    return f"{name}/"


class FolderListController(BaseViewModel):
    """Single-folder list state machine.

    Signals
    -------
    repaint_requested()
    scroll_changed(offset)
        The scroll offset changed for a reason other than the view itself
        setting it (selection scrolled into view, folder change reset).
    layout_changed()
        Row count changed; scrollbar ranges must be recomputed.
    drag_started(entry)
    context_menu_requested(entry, position)
    """

    def __init__(
        self,
        repository: IAssetRepository,
        event_bus: EventBus,
        *,
        error_handler: Optional[ErrorHandler] = None,
        row_height: float = ROW_HEIGHT,
        drag_threshold: float = DRAG_THRESHOLD_PX,
    ) -> None:
        super().__init__()
        self._repository = repository
        self._error_handler = error_handler or ErrorHandler(_LOGGER, event_bus)
        self._model = FolderListModel(repository)
        self._selection = SelectionController(repository, self._model)
        self._virtualizer = ListVirtualizer(row_height)
        self._drag = DragGesture(drag_threshold)
        self._has_focus = False
        self._last_press_index: Optional[int] = None

        self.title = ObservableProperty(DEFAULT_TITLE)
        self.tooltip = ObservableProperty("")

        self.repaint_requested = Signal()
        self.scroll_changed = Signal()
        self.layout_changed = Signal()
        self.drag_started = Signal()
        self.context_menu_requested = Signal()

        self._model.snapshot_changed.connect(self._on_snapshot_changed)
        self._selection.folder_changed.connect(self._on_folder_changed)
        self._selection.selection_changed.connect(self._on_selection_changed)
        self._selection.scroll_requested.connect(self._on_scroll_requested)

        self.subscribe_event(event_bus, FolderContentsChangedEvent, self._on_contents_changed)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def current_folder(self) -> Optional[str]:
        return self._selection.folder_id

    @property
    def snapshot(self) -> Snapshot:
        return self._model.snapshot

    @property
    def selection(self) -> SelectionController:
        return self._selection

    @property
    def virtualizer(self) -> ListVirtualizer:
        return self._virtualizer

    @property
    def drag_gesture(self) -> DragGesture:
        return self._drag

    @property
    def selected_entry(self) -> Optional[Entry]:
        return self._selection.selected_entry

    @property
    def has_focus(self) -> bool:
        return self._has_focus

    # ------------------------------------------------------------------
    # Host API
    # ------------------------------------------------------------------
    def set_folder(self, identifier: Optional[str]) -> bool:
        """Display a folder, or a file's folder with the file selected."""

        return self._selection.set_folder(identifier)

    def reload(self) -> None:
        self._selection.reload()

    def saved_state(self) -> tuple[Optional[str], Optional[str]]:
        """``(folder, selected_id)`` for the host's own persistence."""

        return (self._selection.folder_id, self._selection.selected_id)

    def restore_state(self, folder_id: Optional[str], selected_id: Optional[str]) -> None:
        self._selection.restore(folder_id, selected_id)
        index = self._selection.selected_index
        if index is not None:
            self._selection.select_index(index, scroll_into_view=True)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def set_viewport_height(self, height: float) -> None:
        before = self._virtualizer.scroll_offset
        self._virtualizer.set_viewport_height(height)
        if self._virtualizer.scroll_offset != before:
            self.scroll_changed.emit(self._virtualizer.scroll_offset)
        self.repaint_requested.emit()

    def set_scroll_offset(self, offset: float) -> None:
        """Scroll driven by the view (scrollbar, wheel)."""

        if self._virtualizer.set_scroll_offset(offset):
            self.repaint_requested.emit()

    def visible_rows(self) -> list[VisibleRow]:
        snapshot = self.snapshot
        start, end = self._virtualizer.visible_range()
        selected = self._selection.selected_index
        height = self._virtualizer.row_height
        return [
            VisibleRow(
                index=index,
                entry=snapshot[index],
                top=self._virtualizer.row_top(index),
                height=height,
                selected=index == selected,
            )
            for index in range(start, min(end, len(snapshot)))
        ]

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------
    def set_focus(self, focused: bool) -> None:
        if focused == self._has_focus:
            return
        self._has_focus = focused
        if not focused:
            self._drag.cancel()
        self.repaint_requested.emit()

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------
    def handle_pointer_down(self, event: PointerEvent) -> EventResult:
        self.set_focus(True)
        index = self._virtualizer.row_at(event.y)

        if index is None:
            self._drag.cancel()
            self._last_press_index = None
            if event.button is not PointerButton.PRIMARY:
                return NOT_HANDLED
            self._selection.clear_selection()
            return HANDLED

        if event.button is PointerButton.SECONDARY:
            self._drag.cancel()
            self._last_press_index = None
            self._selection.select_index(index)
            entry = self._selection.selected_entry
            if entry is not None:
                self.context_menu_requested.emit(entry, event.position)
            return HANDLED

        if event.button is not PointerButton.PRIMARY:
            return NOT_HANDLED

        # The row under the pointer is already visible; no scroll-into-view.
        self._selection.select_index(index)
        double_click = event.click_count >= 2 and index == self._last_press_index
        self._last_press_index = index
        if event.has_modifiers and not double_click:
            self._drag.cancel()
            return HANDLED

        outcome = self._drag.press(index, event.position, double_click=double_click)
        if outcome is PressOutcome.OPEN:
            self._last_press_index = None
            return self._run_open(select_first_child=False)
        return HANDLED

    def handle_pointer_move(self, event: PointerEvent) -> EventResult:
        if not self._drag.is_pending:
            return NOT_HANDLED
        index = self._drag.move(event.position)
        if index is None:
            return HANDLED
        snapshot = self.snapshot
        if 0 <= index < len(snapshot):
            entry = snapshot[index]
            _LOGGER.debug("Drag started for %s", entry.path)
            self.drag_started.emit(entry)
        return HANDLED

    def handle_pointer_up(self, event: PointerEvent) -> EventResult:
        return HANDLED if self._drag.release() else NOT_HANDLED

    def handle_capture_lost(self) -> None:
        self._drag.cancel()

    # ------------------------------------------------------------------
    # Keyboard input
    # ------------------------------------------------------------------
    def handle_key(self, command: KeyCommand) -> EventResult:
        """Route one key command; ignored unless the list has focus."""

        if not self._has_focus:
            return NOT_HANDLED

        navigation = _NAVIGATION_KEYS.get(command)
        if navigation is not None:
            rows = self._virtualizer.viewport_rows()
            return HANDLED if self._selection.navigate(navigation, rows) else NOT_HANDLED

        before = self._selection.folder_id
        if command is KeyCommand.ENTER:
            return self._run_open(select_first_child=False)
        if command in (KeyCommand.BACKSPACE, KeyCommand.LEFT):
            handled = self._selection.exit_folder(select_sub_folder=True)
        elif command is KeyCommand.RIGHT:
            handled = self._selection.enter_folder(select_first_child=True)
        else:
            return NOT_HANDLED
        return self._result(handled, before)

    # ------------------------------------------------------------------
    # Drop target
    # ------------------------------------------------------------------
    def drop_target_for(self, paths: Iterable[str]) -> Optional[DropTarget]:
        """Resolve a drag payload to a folder, or ``None`` when unacceptable.

        Exactly one path is accepted: a folder, or a file inside a valid
        folder (which is then preselected).
        """

        candidates = [normalized for normalized in map(normalize_path, paths) if normalized is not None]
        if len(candidates) != 1:
            return None
        path = candidates[0]
        if is_valid_folder(path, self._repository):
            return DropTarget(folder=path)
        parent = valid_parent_folder(path, self._repository)
        if parent is None:
            return None
        return DropTarget(folder=parent, selected_path=path)

    def accepts_drop(self, paths: Iterable[str]) -> bool:
        return self.drop_target_for(paths) is not None

    def handle_drop(self, paths: Iterable[str]) -> EventResult:
        target = self.drop_target_for(paths)
        if target is None:
            return NOT_HANDLED
        self._selection.set_folder(target.folder)
        if target.selected_path is not None:
            self._selection.select_path(target.selected_path, scroll_into_view=True)
        return HANDLED_EXIT

    # ------------------------------------------------------------------
    # Context actions, addressed by stable id
    # ------------------------------------------------------------------
    def open_entry(self, entry_id: str) -> bool:
        """Open *entry_id*: folders are entered, files handed to the default app.

        Returns ``True`` when the displayed folder changed.
        """

        entry = self._entry_for(entry_id)
        if entry is None:
            return False
        if entry.is_folder:
            return self._selection.set_folder(entry.path)
        with self._error_handler.capture("open", entry_id=entry_id, path=entry.path):
            self._repository.open_default(entry.id)
        return False

    def reveal_entry(self, entry_id: str) -> None:
        entry = self._entry_for(entry_id)
        if entry is None:
            return
        with self._error_handler.capture("reveal", entry_id=entry_id, path=entry.path):
            self._repository.reveal_externally(entry.path)

    def inspect_entry(self, entry_id: str) -> None:
        entry = self._entry_for(entry_id)
        if entry is None:
            return
        self._selection.select_id(entry_id, scroll_into_view=True)
        with self._error_handler.capture("inspect", entry_id=entry_id, path=entry.path):
            self._repository.focus_and_inspect(entry.id)

    def show_entry_properties(self, entry_id: str) -> None:
        entry = self._entry_for(entry_id)
        if entry is None:
            return
        with self._error_handler.capture("properties", entry_id=entry_id, path=entry.path):
            self._repository.show_properties(entry.id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _entry_for(self, entry_id: str) -> Optional[Entry]:
        index = self.snapshot.index_of_id(entry_id)
        if index is None:
            _LOGGER.debug("Entry %s is no longer listed", entry_id)
            return None
        return self.snapshot[index]

    def _run_open(self, *, select_first_child: bool) -> EventResult:
        before = self._selection.folder_id
        handled = False
        with self._error_handler.capture("open", folder=before):
            handled = self._selection.open_selection(select_first_child)
        if not handled and self._selection.selected_entry is not None:
            handled = True
        return self._result(handled, before)

    def _result(self, handled: bool, folder_before: Optional[str]) -> EventResult:
        if not handled:
            return NOT_HANDLED
        if self._selection.folder_id != folder_before:
            return HANDLED_EXIT
        return HANDLED

    # ------------------------------------------------------------------
    # Signal handlers
    # ------------------------------------------------------------------
    def _on_contents_changed(self, _event: FolderContentsChangedEvent) -> None:
        self.reload()

    def _on_snapshot_changed(self, snapshot: Snapshot) -> None:
        # Pending indices refer to the previous snapshot.
        self._drag.cancel()
        self._last_press_index = None
        self._virtualizer.set_count(len(snapshot))
        self.layout_changed.emit()
        self.repaint_requested.emit()

    def _on_folder_changed(self, folder_id: Optional[str]) -> None:
        self._virtualizer.reset_scroll()
        self.scroll_changed.emit(self._virtualizer.scroll_offset)
        self.title.value = folder_title(folder_id)
        self.tooltip.value = folder_id or ""

    def _on_selection_changed(self, _entry_id: Optional[str], _index: Optional[int]) -> None:
        self._virtualizer.cancel_pending()
        self.repaint_requested.emit()

    def _on_scroll_requested(self, index: int) -> None:
        if self._virtualizer.scroll_to(index):
            self.scroll_changed.emit(self._virtualizer.scroll_offset)
        self.repaint_requested.emit()
