"""Application-wide context helpers for the GUI layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .errors import SettingsError
from .errors.handler import ErrorHandler, ErrorSeverity
from .events.bus import EventBus
from .gui.viewmodels.folder_list_controller import FolderListController
from .infrastructure.repositories import FileSystemAssetRepository
from .utils.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - only for type checking
    from .settings.manager import SettingsManager

_LOGGER = get_logger(__name__)


def _create_settings_manager() -> "SettingsManager":
    from .settings.manager import SettingsManager

    manager = SettingsManager()
    try:
        manager.load()
    except SettingsError as exc:
        # Unreadable settings fall back to defaults for this session.
        _LOGGER.warning("Ignoring settings file %s: %s", manager.path, exc)
    return manager


@dataclass
class AppContext:
    """Container object shared across GUI components."""

    settings: "SettingsManager" = field(default_factory=_create_settings_manager)
    event_bus: EventBus = field(default_factory=EventBus)
    error_handler: Optional[ErrorHandler] = None
    repository: Optional[FileSystemAssetRepository] = None
    controller: Optional[FolderListController] = None

    def __post_init__(self) -> None:
        if self.error_handler is None:
            self.error_handler = ErrorHandler(get_logger(), self.event_bus)
        if self.repository is None:
            self.repository = FileSystemAssetRepository(
                self.event_bus,
                include_hidden=bool(self.settings.get("ui.include_hidden", False)),
            )
        if self.controller is None:
            self.controller = FolderListController(
                self.repository,
                self.event_bus,
                error_handler=self.error_handler,
            )

    def restore_last_state(self) -> None:
        """Reopen the folder and selection saved by :meth:`save_state`."""

        folder, selected_id = self.settings.last_state()
        if folder:
            self.controller.restore_state(folder, selected_id)

    def save_state(self) -> None:
        folder, selected_id = self.controller.saved_state()
        try:
            self.settings.save_state(folder, selected_id)
        except (SettingsError, OSError) as exc:
            self.error_handler.handle(exc, ErrorSeverity.WARNING, {"action": "save_state"})
