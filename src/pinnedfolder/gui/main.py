"""GUI entry point for the pinned folder panel."""

from __future__ import annotations

import sys
from typing import Optional

from PySide6.QtWidgets import QApplication

from ..appctx import AppContext
from ..errors.handler import ErrorSeverity
from ..events.folder_events import EntryInspectRequestedEvent, EntryPropertiesRequestedEvent
from ..infrastructure.services.folder_watcher import FolderWatcher
from ..utils.logging import configure_logging, get_logger
from .ui.widgets.dialogs import show_entry_properties, show_error, show_warning
from .ui.widgets.pinned_folder_panel import PinnedFolderPanel

_LOGGER = get_logger(__name__)


class PanelWindow:
    """Wire an :class:`AppContext` to a top-level panel and its watcher."""

    def __init__(self, context: AppContext) -> None:
        self.context = context
        self.panel = PinnedFolderPanel(context.controller)
        self.watcher = FolderWatcher(context.event_bus, self.panel)
        self._open_dialogs: list = []

        width = int(context.settings.get("ui.window_width", 320) or 320)
        height = int(context.settings.get("ui.window_height", 480) or 480)
        self.panel.resize(width, height)

        self.panel.folderChanged.connect(self.watcher.watch)
        context.error_handler.register_ui_callback(self._show_error)
        context.event_bus.subscribe(EntryInspectRequestedEvent, self._on_inspect_requested)
        context.event_bus.subscribe(EntryPropertiesRequestedEvent, self._on_properties_requested)

    def start(self, folder: Optional[str] = None) -> None:
        if folder:
            self.context.controller.set_folder(folder)
        else:
            self.context.restore_last_state()
        self.watcher.watch(self.context.controller.current_folder)
        self.panel.show()
        self.panel.focus_list()

    def shutdown(self) -> None:
        self.context.save_state()
        self.context.controller.dispose()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def _show_error(self, message: str, severity: ErrorSeverity) -> None:
        if severity is ErrorSeverity.CRITICAL:
            show_error(self.panel, message)
        else:
            show_warning(self.panel, message)

    def _on_inspect_requested(self, event: EntryInspectRequestedEvent) -> None:
        _LOGGER.info("Inspecting %s", event.path)
        self.panel.raise_()
        self.panel.activateWindow()
        self.panel.focus_list()

    def _on_properties_requested(self, event: EntryPropertiesRequestedEvent) -> None:
        box = show_entry_properties(self.panel, event.path)
        self._open_dialogs.append(box)
        box.finished.connect(lambda _result, box=box: self._open_dialogs.remove(box))


def main(argv: list[str] | None = None, folder: Optional[str] = None) -> int:
    """Launch the Qt application and return the exit code."""

    arguments = list(sys.argv if argv is None else argv)
    configure_logging()
    app = QApplication(arguments)
    app.setApplicationName("pinnedfolder")

    context = AppContext()
    window = PanelWindow(context)
    # Allow opening a folder or file directly via argv[1].
    if folder is None and len(arguments) > 1:
        folder = arguments[1]
    window.start(folder)
    app.aboutToQuit.connect(window.shutdown)
    return app.exec()


if __name__ == "__main__":  # pragma: no cover - manual launch
    raise SystemExit(main())
