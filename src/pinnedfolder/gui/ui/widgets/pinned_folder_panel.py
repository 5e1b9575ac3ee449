"""Composite widget: drop-target bar above the virtualized folder list."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QVBoxLayout, QWidget

from ...viewmodels.folder_list_controller import FolderListController
from ..controllers.context_menu_controller import ContextMenuController
from .folder_list_view import FolderListView
from .top_bar import FolderTopBar


class PinnedFolderPanel(QWidget):
    """Host-facing panel showing one folder."""

    titleChanged = Signal(str)
    folderChanged = Signal(object)

    def __init__(self, controller: FolderListController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._controller = controller
        self.setObjectName("pinnedFolderPanel")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        self._top_bar = FolderTopBar(controller, self)
        self._list_view = FolderListView(controller, self)
        self._context_menu = ContextMenuController(
            list_view=self._list_view,
            controller=controller,
            parent=self,
        )

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self._top_bar)
        layout.addWidget(self._list_view, 1)

        self.setFocusProxy(self._list_view)
        controller.title.changed.connect(self._on_title_changed)
        controller.tooltip.changed.connect(self._on_folder_changed)
        self.setWindowTitle(controller.title.value)

    # ------------------------------------------------------------------
    # Host API
    # ------------------------------------------------------------------
    @property
    def controller(self) -> FolderListController:
        return self._controller

    @property
    def top_bar(self) -> FolderTopBar:
        return self._top_bar

    @property
    def list_view(self) -> FolderListView:
        return self._list_view

    @property
    def context_menu(self) -> ContextMenuController:
        return self._context_menu

    def current_folder(self) -> Optional[str]:
        return self._controller.current_folder

    def set_folder(self, identifier: Optional[str]) -> None:
        self._controller.set_folder(identifier)

    def focus_list(self) -> None:
        self._list_view.setFocus(Qt.FocusReason.OtherFocusReason)

    # ------------------------------------------------------------------
    # Signal handlers
    # ------------------------------------------------------------------
    def _on_title_changed(self, title: str, _old: str) -> None:
        self.setWindowTitle(title)
        self.titleChanged.emit(title)

    def _on_folder_changed(self, folder: str, _old: str) -> None:
        self.setToolTip(folder)
        self.folderChanged.emit(folder or None)
