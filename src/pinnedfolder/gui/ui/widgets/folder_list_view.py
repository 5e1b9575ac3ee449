"""Qt view that paints and drives a :class:`FolderListController`."""

from __future__ import annotations

import logging
import math
from typing import Optional

from PySide6.QtCore import QEvent, QMimeData, QPoint, QRect, QSignalBlocker, QSize, Qt, QUrl, Signal
from PySide6.QtGui import (
    QDrag,
    QFocusEvent,
    QKeyEvent,
    QMouseEvent,
    QPainter,
    QPaintEvent,
    QResizeEvent,
)
from PySide6.QtWidgets import QAbstractScrollArea, QFrame, QWidget

from ....config import ICON_SIZE, ROW_TEXT_PADDING
from ....domain.models import Entry
from ...viewmodels.folder_list_controller import FolderListController
from ...viewmodels.input_events import KeyCommand, PointerButton, PointerEvent
from ..styles import list_styles

_LOGGER = logging.getLogger(__name__)

_KEY_COMMANDS = {
    Qt.Key.Key_Up: KeyCommand.UP,
    Qt.Key.Key_Down: KeyCommand.DOWN,
    Qt.Key.Key_PageUp: KeyCommand.PAGE_UP,
    Qt.Key.Key_PageDown: KeyCommand.PAGE_DOWN,
    Qt.Key.Key_Home: KeyCommand.HOME,
    Qt.Key.Key_End: KeyCommand.END,
    Qt.Key.Key_Return: KeyCommand.ENTER,
    Qt.Key.Key_Enter: KeyCommand.ENTER,
    Qt.Key.Key_Backspace: KeyCommand.BACKSPACE,
    Qt.Key.Key_Left: KeyCommand.LEFT,
    Qt.Key.Key_Right: KeyCommand.RIGHT,
}

_BUTTONS = {
    Qt.MouseButton.LeftButton: PointerButton.PRIMARY,
    Qt.MouseButton.RightButton: PointerButton.SECONDARY,
    Qt.MouseButton.MiddleButton: PointerButton.MIDDLE,
}

_SELECTING_MODIFIERS = (
    Qt.KeyboardModifier.ShiftModifier
    | Qt.KeyboardModifier.ControlModifier
    | Qt.KeyboardModifier.AltModifier
    | Qt.KeyboardModifier.MetaModifier
)


def key_command_for(key: int) -> Optional[KeyCommand]:
    try:
        return _KEY_COMMANDS.get(Qt.Key(key))
    except ValueError:
        return None


class FolderListView(QAbstractScrollArea):
    """Virtualized single-column list of the displayed folder."""

    contextMenuRequested = Signal(str, QPoint)
    dragStarted = Signal(str)

    def __init__(self, controller: FolderListController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._controller = controller
        self.setObjectName("pinnedFolderList")
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
        self.viewport().setMouseTracking(False)
        self.setStyleSheet(list_styles().scrollbar_stylesheet)

        controller.repaint_requested.connect(self._on_repaint_requested)
        controller.layout_changed.connect(self._update_scrollbar)
        controller.scroll_changed.connect(self._on_scroll_changed)
        controller.drag_started.connect(self._start_drag)
        controller.context_menu_requested.connect(self._on_context_menu_requested)
        self._update_scrollbar()

    @property
    def controller(self) -> FolderListController:
        return self._controller

    def sizeHint(self) -> QSize:  # type: ignore[override]
        return QSize(240, 320)

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def paintEvent(self, event: QPaintEvent) -> None:  # type: ignore[override]
        styles = list_styles()
        painter = QPainter(self.viewport())
        try:
            painter.setFont(styles.font)
            width = self.viewport().width()
            focused = self._controller.has_focus
            metrics = painter.fontMetrics()
            for row in self._controller.visible_rows():
                top = int(round(row.top))
                height = int(math.ceil(row.height))
                rect = QRect(0, top, width, height)
                if not rect.intersects(event.rect()):
                    continue
                text_color = styles.text_color
                if row.selected:
                    background = styles.selected_background if focused else styles.inactive_selected_background
                    painter.fillRect(rect, background)
                    if focused:
                        text_color = styles.selected_text
                entry = row.entry
                if entry.is_folder:
                    icon = styles.empty_folder_icon if entry.is_empty_folder else styles.folder_icon
                else:
                    icon = styles.file_icon
                icon_top = top + max(0, (height - ICON_SIZE) // 2)
                icon.paint(painter, QRect(ROW_TEXT_PADDING, icon_top, ICON_SIZE, ICON_SIZE))
                text_left = ROW_TEXT_PADDING * 2 + ICON_SIZE
                text_rect = QRect(text_left, top, max(0, width - text_left - ROW_TEXT_PADDING), height)
                label = metrics.elidedText(entry.display_name, Qt.TextElideMode.ElideRight, text_rect.width())
                painter.setPen(text_color)
                painter.drawText(text_rect, int(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter), label)
        finally:
            painter.end()

    # ------------------------------------------------------------------
    # Geometry and scrolling
    # ------------------------------------------------------------------
    def resizeEvent(self, event: QResizeEvent) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._controller.set_viewport_height(self.viewport().height())
        self._update_scrollbar()

    def scrollContentsBy(self, dx: int, dy: int) -> None:  # type: ignore[override]
        self._controller.set_scroll_offset(self.verticalScrollBar().value())

    def _update_scrollbar(self) -> None:
        virtualizer = self._controller.virtualizer
        bar = self.verticalScrollBar()
        blocker = QSignalBlocker(bar)
        try:
            bar.setRange(0, int(math.ceil(virtualizer.max_scroll_offset())))
            bar.setPageStep(max(1, self.viewport().height()))
            bar.setSingleStep(max(1, int(virtualizer.row_height)))
            bar.setValue(int(round(virtualizer.scroll_offset)))
        finally:
            blocker.unblock()
        self.viewport().update()

    def _on_scroll_changed(self, offset: float) -> None:
        bar = self.verticalScrollBar()
        blocker = QSignalBlocker(bar)
        try:
            bar.setValue(int(round(offset)))
        finally:
            blocker.unblock()
        self.viewport().update()

    def _on_repaint_requested(self) -> None:
        self.viewport().update()

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------
    def focusInEvent(self, event: QFocusEvent) -> None:  # type: ignore[override]
        super().focusInEvent(event)
        self._controller.set_focus(True)

    def focusOutEvent(self, event: QFocusEvent) -> None:  # type: ignore[override]
        super().focusOutEvent(event)
        self._controller.set_focus(False)

    # ------------------------------------------------------------------
    # Mouse input
    # ------------------------------------------------------------------
    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        self._dispatch_press(event, click_count=1)

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        self._dispatch_press(event, click_count=2)

    def viewportEvent(self, event: QEvent) -> bool:  # type: ignore[override]
        if event.type() == QEvent.Type.UngrabMouse:
            self._controller.handle_capture_lost()
        return super().viewportEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if not event.buttons() & Qt.MouseButton.LeftButton:
            # The release went elsewhere.
            self._controller.handle_capture_lost()
            super().mouseMoveEvent(event)
            return
        result = self._controller.handle_pointer_move(self._pointer(event))
        if result.handled:
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        result = self._controller.handle_pointer_up(self._pointer(event))
        if result.handled:
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def _dispatch_press(self, event: QMouseEvent, *, click_count: int) -> None:
        if not self.hasFocus():
            self.setFocus(Qt.FocusReason.MouseFocusReason)
        result = self._controller.handle_pointer_down(self._pointer(event, click_count=click_count))
        if result.handled:
            event.accept()
            return
        super().mousePressEvent(event)

    def _pointer(self, event: QMouseEvent, *, click_count: int = 1) -> PointerEvent:
        position = event.position()
        return PointerEvent(
            x=position.x(),
            y=position.y(),
            button=_BUTTONS.get(event.button(), PointerButton.PRIMARY),
            click_count=click_count,
            has_modifiers=bool(event.modifiers() & _SELECTING_MODIFIERS),
        )

    # ------------------------------------------------------------------
    # Keyboard input
    # ------------------------------------------------------------------
    def keyPressEvent(self, event: QKeyEvent) -> None:  # type: ignore[override]
        command = key_command_for(event.key())
        if command is not None:
            result = self._controller.handle_key(command)
            if result.handled:
                event.accept()
                return
        super().keyPressEvent(event)

    # ------------------------------------------------------------------
    # Drag source and context menu
    # ------------------------------------------------------------------
    def _start_drag(self, entry: Entry) -> None:
        mime = QMimeData()
        mime.setUrls([QUrl.fromLocalFile(entry.path)])
        mime.setText(entry.path)
        drag = QDrag(self)
        drag.setMimeData(mime)
        icon = list_styles().folder_icon if entry.is_folder else list_styles().file_icon
        pixmap = icon.pixmap(ICON_SIZE, ICON_SIZE)
        if not pixmap.isNull():
            drag.setPixmap(pixmap)
        self.dragStarted.emit(entry.id)
        _LOGGER.debug("Dragging %s", entry.path)
        drag.exec(
            Qt.DropAction.CopyAction | Qt.DropAction.MoveAction | Qt.DropAction.LinkAction,
            Qt.DropAction.CopyAction,
        )

    def _on_context_menu_requested(self, entry: Entry, position: tuple[float, float]) -> None:
        local = QPoint(int(position[0]), int(position[1]))
        self.contextMenuRequested.emit(entry.id, self.viewport().mapToGlobal(local))
