from __future__ import annotations

import logging
from unittest.mock import Mock

import pytest

pytest.importorskip("PySide6.QtCore", reason="PySide6 is required for settings", exc_type=ImportError)

from pinnedfolder.appctx import AppContext  # noqa: E402
from pinnedfolder.errors.handler import ErrorHandler  # noqa: E402
from pinnedfolder.events.bus import EventBus  # noqa: E402
from pinnedfolder.settings.manager import SettingsManager  # noqa: E402


@pytest.fixture
def settings(tmp_path, qapp):
    manager = SettingsManager(tmp_path / "settings.json")
    manager.load()
    return manager


def test_state_survives_a_restart(settings, tmp_path):
    folder = tmp_path / "docs"
    folder.mkdir()
    (folder / "a.txt").write_text("a")
    (folder / "b.txt").write_text("b")

    first = AppContext(settings=settings)
    first.controller.set_folder((folder / "b.txt").as_posix())
    first.save_state()

    second = AppContext(settings=settings)
    second.restore_last_state()

    assert second.controller.current_folder == folder.as_posix()
    assert second.controller.selected_entry.path == (folder / "b.txt").as_posix()


def test_missing_saved_folder_shows_nothing(settings, tmp_path):
    settings.save_state((tmp_path / "gone").as_posix(), "1-2")

    context = AppContext(settings=settings)
    context.restore_last_state()

    assert context.controller.current_folder is None


def test_save_failures_are_reported_as_warnings(settings):
    logger = Mock(spec=logging.Logger)
    bus = EventBus()
    context = AppContext(settings=settings, event_bus=bus, error_handler=ErrorHandler(logger, bus))
    settings.save_state = Mock(side_effect=OSError("disk full"))

    context.save_state()

    logger.warning.assert_called_once()
