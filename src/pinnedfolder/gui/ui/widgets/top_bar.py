"""Header bar showing the displayed folder and accepting folder drops."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QDragEnterEvent, QDragLeaveEvent, QDragMoveEvent, QDropEvent
from PySide6.QtWidgets import QLabel, QSizePolicy, QWidget

from ....config import NO_FOLDER_TEXT, TOP_BAR_HEIGHT
from ...viewmodels.folder_list_controller import FolderListController

_STYLESHEET = (
    "QLabel#pinnedFolderTopBar { padding: 0px 4px; }\n"
    "QLabel#pinnedFolderTopBar[dropActive=\"true\"] {"
    " background-color: palette(highlight); color: palette(highlighted-text); }\n"
)


def local_paths(mime) -> list[str]:
    """Local file paths carried by a drag payload, without duplicates."""

    if mime is None or not mime.hasUrls():
        return []
    seen: set[str] = set()
    paths: list[str] = []
    for url in mime.urls():
        if not url.isLocalFile():
            continue
        local = url.toLocalFile()
        if local in seen:
            continue
        seen.add(local)
        paths.append(local)
    return paths


class FolderTopBar(QLabel):
    """One-line bar above the list; dropping a folder or file here navigates."""

    folderDropped = Signal(str)

    def __init__(self, controller: FolderListController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._controller = controller
        self.setObjectName("pinnedFolderTopBar")
        self.setAcceptDrops(True)
        self.setFixedHeight(TOP_BAR_HEIGHT)
        self.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Fixed)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter)
        self.setStyleSheet(_STYLESHEET)
        self._drop_active = False
        controller.tooltip.changed.connect(self._on_folder_text_changed)
        self.refresh()

    def refresh(self) -> None:
        folder = self._controller.current_folder
        self.setText(folder or NO_FOLDER_TEXT)
        self.setToolTip(folder or "")

    def is_drop_active(self) -> bool:
        return self._drop_active

    # ------------------------------------------------------------------
    # Qt overrides
    # ------------------------------------------------------------------
    def dragEnterEvent(self, event: QDragEnterEvent) -> None:  # type: ignore[override]
        if self._controller.accepts_drop(local_paths(event.mimeData())):
            self._set_drop_active(True)
            event.acceptProposedAction()
            return
        event.ignore()

    def dragMoveEvent(self, event: QDragMoveEvent) -> None:  # type: ignore[override]
        if self._drop_active:
            event.acceptProposedAction()
            return
        event.ignore()

    def dragLeaveEvent(self, event: QDragLeaveEvent) -> None:  # type: ignore[override]
        self._set_drop_active(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event: QDropEvent) -> None:  # type: ignore[override]
        self._set_drop_active(False)
        result = self._controller.handle_drop(local_paths(event.mimeData()))
        if not result.handled:
            event.ignore()
            return
        event.acceptProposedAction()
        folder = self._controller.current_folder
        if folder is not None:
            self.folderDropped.emit(folder)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _on_folder_text_changed(self, _new: Optional[str], _old: Optional[str]) -> None:
        self.refresh()

    def _set_drop_active(self, active: bool) -> None:
        if active == self._drop_active:
            return
        self._drop_active = active
        self.setProperty("dropActive", active)
        self.style().unpolish(self)
        self.style().polish(self)
        self.update()
