"""Controller that encapsulates the folder list context menu."""

from __future__ import annotations

import sys
from functools import partial
from typing import Optional

from PySide6.QtCore import QCoreApplication, QObject, QPoint
from PySide6.QtWidgets import QMenu

from ...viewmodels.folder_list_controller import FolderListController
from ..widgets.folder_list_view import FolderListView


def reveal_label() -> str:
    if sys.platform == "win32":
        return "Show in Explorer"
    if sys.platform == "darwin":
        return "Reveal in Finder"
    return "Show in File Manager"


class ContextMenuController(QObject):
    """Show the per-entry actions when the list asks for a context menu."""

    def __init__(
        self,
        *,
        list_view: FolderListView,
        controller: FolderListController,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._list_view = list_view
        self._controller = controller
        self._menu: Optional[QMenu] = None

        self._list_view.contextMenuRequested.connect(self._handle_context_menu)

    def current_menu(self) -> Optional[QMenu]:
        return self._menu

    def build_menu(self, entry_id: str) -> QMenu:
        menu = QMenu(self._list_view)
        open_action = menu.addAction(QCoreApplication.translate("FolderList", "Open"))
        reveal_action = menu.addAction(QCoreApplication.translate("FolderList", reveal_label()))
        menu.addSeparator()
        inspect_action = menu.addAction(QCoreApplication.translate("FolderList", "Select and Inspect"))
        properties_action = menu.addAction(QCoreApplication.translate("FolderList", "Properties..."))

        open_action.triggered.connect(partial(self._open, entry_id))
        reveal_action.triggered.connect(partial(self._reveal, entry_id))
        inspect_action.triggered.connect(partial(self._inspect, entry_id))
        properties_action.triggered.connect(partial(self._properties, entry_id))
        return menu

    # ------------------------------------------------------------------
    # Context menu workflow
    # ------------------------------------------------------------------
    def _handle_context_menu(self, entry_id: str, global_pos: QPoint) -> None:
        if self._menu is not None:
            self._menu.deleteLater()
        self._menu = self.build_menu(entry_id)
        self._menu.popup(global_pos)

    def _open(self, entry_id: str, _checked: bool = False) -> None:
        self._controller.open_entry(entry_id)

    def _reveal(self, entry_id: str, _checked: bool = False) -> None:
        self._controller.reveal_entry(entry_id)

    def _inspect(self, entry_id: str, _checked: bool = False) -> None:
        self._controller.inspect_entry(entry_id)

    def _properties(self, entry_id: str, _checked: bool = False) -> None:
        self._controller.show_entry_properties(entry_id)
