"""Tests for the headless folder list orchestrator."""

from __future__ import annotations

import logging
from unittest.mock import Mock

import pytest

from pinnedfolder.errors.handler import ErrorHandler, ErrorOccurredEvent, ErrorSeverity
from pinnedfolder.events.folder_events import FolderContentsChangedEvent
from pinnedfolder.gui.viewmodels.folder_list_controller import FolderListController, folder_title
from pinnedfolder.gui.viewmodels.input_events import (
    HANDLED,
    HANDLED_EXIT,
    NOT_HANDLED,
    KeyCommand,
    PointerButton,
    PointerEvent,
)

ROW = 16.0


def _row_y(index: int) -> float:
    return index * ROW + ROW / 2


def _press(index: int, *, x: float = 5.0, button=PointerButton.PRIMARY, clicks: int = 1) -> PointerEvent:
    return PointerEvent(x=x, y=_row_y(index), button=button, click_count=clicks)


@pytest.fixture
def controller(repository, event_bus):
    ctrl = FolderListController(repository, event_bus, row_height=ROW)
    ctrl.set_viewport_height(100)
    yield ctrl
    ctrl.dispose()


@pytest.fixture
def long_repository(make_repository):
    return make_repository(*(f"/L/f{i:02d}.txt" for i in range(20)))


class TestPointer:
    def test_click_then_small_move_is_a_plain_click(self, controller):
        controller.set_folder("/A")
        drags = []
        controller.drag_started.connect(drags.append)

        assert controller.handle_pointer_down(_press(1)) == HANDLED
        controller.handle_pointer_move(PointerEvent(x=8.0, y=_row_y(1)))
        assert controller.handle_pointer_up(PointerEvent(x=8.0, y=_row_y(1))) == HANDLED

        assert drags == []
        assert controller.selection.selected_index == 1

    def test_moving_past_threshold_starts_one_drag(self, controller):
        controller.set_folder("/A")
        drags = []
        controller.drag_started.connect(drags.append)

        controller.handle_pointer_down(_press(1))
        assert controller.handle_pointer_move(PointerEvent(x=15.0, y=_row_y(1))) == HANDLED
        assert controller.handle_pointer_move(PointerEvent(x=40.0, y=_row_y(1))) == NOT_HANDLED

        assert [entry.path for entry in drags] == ["/A/FileA.txt"]

    def test_press_does_not_scroll(self, controller):
        controller.set_folder("/A")
        scrolls = []
        controller.scroll_changed.connect(scrolls.append)

        controller.handle_pointer_down(_press(2))

        assert scrolls == []

    def test_double_click_on_file_opens_it(self, controller, repository):
        controller.set_folder("/A")

        controller.handle_pointer_down(_press(1))
        controller.handle_pointer_up(_press(1))
        result = controller.handle_pointer_down(_press(1, clicks=2))

        assert result == HANDLED
        assert repository.calls == [("open_default", repository.id_of("/A/FileA.txt"))]
        assert not controller.drag_gesture.is_pending

    def test_double_click_on_folder_enters_it(self, controller):
        controller.set_folder("/A")

        controller.handle_pointer_down(_press(0))
        controller.handle_pointer_up(_press(0))
        result = controller.handle_pointer_down(_press(0, clicks=2))

        assert result == HANDLED_EXIT
        assert controller.current_folder == "/A/B"

    def test_double_click_across_rows_only_selects(self, controller, repository):
        controller.set_folder("/A")

        controller.handle_pointer_down(_press(1))
        controller.handle_pointer_up(_press(1))
        controller.handle_pointer_down(_press(2, clicks=2))

        assert repository.calls == []
        assert controller.selection.selected_index == 2
        assert controller.drag_gesture.is_pending

    def test_secondary_press_selects_and_requests_menu(self, controller):
        controller.set_folder("/A")
        menus = []
        controller.context_menu_requested.connect(lambda entry, pos: menus.append((entry.path, pos)))

        result = controller.handle_pointer_down(_press(2, button=PointerButton.SECONDARY))

        assert result == HANDLED
        assert controller.selection.selected_index == 2
        assert menus == [("/A/C.txt", (5.0, _row_y(2)))]
        assert not controller.drag_gesture.is_pending

    def test_press_below_last_row_clears_selection(self, controller):
        controller.set_folder("/A")
        controller.selection.select_index(1)

        assert controller.handle_pointer_down(_press(4)) == HANDLED

        assert controller.selection.selected_id is None

    @pytest.mark.parametrize("button", [PointerButton.SECONDARY, PointerButton.MIDDLE])
    def test_non_primary_press_below_last_row_keeps_selection(self, controller, button):
        controller.set_folder("/A")
        controller.selection.select_index(1)
        menus = []
        controller.context_menu_requested.connect(lambda entry, pos: menus.append(entry))

        assert controller.handle_pointer_down(_press(4, button=button)) == NOT_HANDLED

        assert controller.selection.selected_index == 1
        assert menus == []

    def test_modified_press_selects_without_arming_drag(self, controller):
        controller.set_folder("/A")

        event = PointerEvent(x=5.0, y=_row_y(1), has_modifiers=True)
        controller.handle_pointer_down(event)

        assert controller.selection.selected_index == 1
        assert not controller.drag_gesture.is_pending

    def test_capture_loss_and_focus_loss_cancel_drag(self, controller):
        controller.set_folder("/A")
        controller.handle_pointer_down(_press(1))
        controller.handle_capture_lost()
        assert not controller.drag_gesture.is_pending

        controller.handle_pointer_down(_press(1))
        controller.set_focus(False)
        assert not controller.drag_gesture.is_pending


class TestKeyboard:
    def test_keys_ignored_without_focus(self, controller):
        controller.set_folder("/A")

        assert controller.handle_key(KeyCommand.DOWN) == NOT_HANDLED
        assert controller.selection.selected_index is None

    def test_home_end_page_down(self, make_repository, event_bus):
        repository = make_repository(*(f"/R/{name}.txt" for name in "abcde"))
        ctrl = FolderListController(repository, event_bus, row_height=ROW)
        ctrl.set_viewport_height(3 * ROW)
        ctrl.set_folder("/R")
        ctrl.set_focus(True)
        ctrl.selection.select_index(2)

        assert ctrl.handle_key(KeyCommand.HOME) == HANDLED
        assert ctrl.selection.selected_index == 0
        assert ctrl.handle_key(KeyCommand.END) == HANDLED
        assert ctrl.selection.selected_index == 4

        ctrl.selection.select_index(2)
        ctrl.handle_key(KeyCommand.PAGE_DOWN)
        assert ctrl.selection.selected_index == 4

    def test_navigation_on_empty_folder_falls_through(self, make_repository, event_bus):
        ctrl = FolderListController(make_repository("/Empty/"), event_bus)
        ctrl.set_folder("/Empty")
        ctrl.set_focus(True)

        assert ctrl.handle_key(KeyCommand.DOWN) == NOT_HANDLED

    def test_backspace_returns_to_parent_with_subfolder_selected(self, controller, repository):
        controller.set_folder("/A/B")
        controller.set_focus(True)

        assert controller.handle_key(KeyCommand.BACKSPACE) == HANDLED_EXIT

        assert controller.current_folder == "/A"
        assert controller.selection.selected_id == repository.id_of("/A/B")

    def test_left_behaves_like_backspace(self, controller):
        controller.set_folder("/A/B")
        controller.set_focus(True)

        assert controller.handle_key(KeyCommand.LEFT) == HANDLED_EXIT
        assert controller.current_folder == "/A"

    def test_right_enters_selected_folder(self, controller):
        controller.set_folder("/A")
        controller.set_focus(True)
        controller.selection.select_index(0)

        assert controller.handle_key(KeyCommand.RIGHT) == HANDLED_EXIT
        assert controller.current_folder == "/A/B"
        assert controller.selection.selected_index == 0

    def test_right_on_file_is_not_handled(self, controller):
        controller.set_folder("/A")
        controller.set_focus(True)
        controller.selection.select_index(2)

        assert controller.handle_key(KeyCommand.RIGHT) == NOT_HANDLED

    def test_enter_opens_selected_file(self, controller, repository):
        controller.set_folder("/A")
        controller.set_focus(True)
        controller.selection.select_index(2)

        assert controller.handle_key(KeyCommand.ENTER) == HANDLED
        assert repository.calls == [("open_default", repository.id_of("/A/C.txt"))]

    def test_enter_without_selection_is_not_handled(self, controller):
        controller.set_folder("/A")
        controller.set_focus(True)

        assert controller.handle_key(KeyCommand.ENTER) == NOT_HANDLED


class TestDrop:
    def test_dropping_a_file_opens_its_folder_with_file_selected(self, controller, repository):
        controller.set_folder("/X")

        assert controller.handle_drop(["/A/B/file.txt"]) == HANDLED_EXIT

        assert controller.current_folder == "/A/B"
        assert controller.selection.selected_id == repository.id_of("/A/B/file.txt")

    def test_dropping_a_folder_opens_it(self, controller):
        controller.set_folder("/X")

        assert controller.handle_drop(["/A/B/"]) == HANDLED_EXIT

        assert controller.current_folder == "/A/B"
        assert controller.selection.selected_id is None

    def test_only_single_resolvable_paths_are_accepted(self, controller):
        controller.set_folder("/X")

        assert not controller.accepts_drop([])
        assert not controller.accepts_drop(["/A/C.txt", "/A/FileA.txt"])
        assert not controller.accepts_drop(["/Nope/file.txt"])
        assert controller.handle_drop(["/Nope/file.txt"]) == NOT_HANDLED
        assert controller.current_folder == "/X"

    def test_drop_target_resolution(self, controller):
        target = controller.drop_target_for(["/A/C.txt"])

        assert target.folder == "/A"
        assert target.selected_path == "/A/C.txt"


class TestReloadAndScroll:
    def test_change_notification_reloads_and_keeps_selection(self, controller, repository, event_bus):
        controller.set_folder("/A")
        controller.selection.select_index(2)
        selected = controller.selection.selected_id

        repository.add_file("/A/D.txt")
        event_bus.publish(FolderContentsChangedEvent())

        assert [entry.path for entry in controller.snapshot][-1] == "/A/D.txt"
        assert controller.selection.selected_id == selected

    def test_reload_cancels_pending_drag(self, controller, event_bus):
        controller.set_folder("/A")
        controller.handle_pointer_down(_press(1))

        event_bus.publish(FolderContentsChangedEvent())

        assert not controller.drag_gesture.is_pending

    def test_reload_keeps_scroll_offset(self, long_repository, event_bus):
        ctrl = FolderListController(long_repository, event_bus, row_height=ROW)
        ctrl.set_viewport_height(48)
        ctrl.set_folder("/L")
        ctrl.set_scroll_offset(64)

        event_bus.publish(FolderContentsChangedEvent())

        assert ctrl.virtualizer.scroll_offset == 64

    def test_folder_change_resets_scroll(self, long_repository, event_bus):
        ctrl = FolderListController(long_repository, event_bus, row_height=ROW)
        ctrl.set_viewport_height(48)
        ctrl.set_folder("/L")
        ctrl.set_scroll_offset(64)
        offsets = []
        ctrl.scroll_changed.connect(offsets.append)

        ctrl.set_folder("/")

        assert ctrl.virtualizer.scroll_offset == 0
        assert offsets == [0]

    def test_selection_scroll_waits_for_layout(self, long_repository, event_bus):
        ctrl = FolderListController(long_repository, event_bus, row_height=ROW)
        offsets = []
        ctrl.scroll_changed.connect(offsets.append)

        ctrl.set_folder("/L/f15.txt")

        assert ctrl.virtualizer.pending_index == 15
        ctrl.set_viewport_height(48)
        assert offsets[-1] == 16 * ROW - 48
        assert ctrl.virtualizer.pending_index is None

    def test_new_selection_cancels_pending_scroll(self, long_repository, event_bus):
        ctrl = FolderListController(long_repository, event_bus, row_height=ROW)
        ctrl.set_folder("/L/f15.txt")

        ctrl.selection.select_index(0)
        ctrl.set_viewport_height(48)

        assert ctrl.virtualizer.scroll_offset == 0

    def test_visible_rows(self, long_repository, event_bus):
        ctrl = FolderListController(long_repository, event_bus, row_height=ROW)
        ctrl.set_viewport_height(48)
        ctrl.set_folder("/L")
        ctrl.set_scroll_offset(20)
        ctrl.selection.select_index(2)

        rows = ctrl.visible_rows()

        assert [row.index for row in rows] == [1, 2, 3, 4]
        assert [row.top for row in rows] == [-4, 12, 28, 44]
        assert [row.selected for row in rows] == [False, True, False, False]


class TestHostApi:
    def test_title_and_tooltip_follow_folder(self, controller):
        titles = []
        controller.title.changed.connect(lambda new, old: titles.append(new))

        controller.set_folder("/A/B")
        controller.set_folder("/Nope/nothing")

        assert titles == ["B/", "Folder"]
        assert controller.tooltip.value == ""

    def test_saved_state_round_trip(self, repository, event_bus):
        first = FolderListController(repository, event_bus)
        first.set_folder("/A")
        first.selection.select_index(1)
        folder, selected_id = first.saved_state()

        second = FolderListController(repository, event_bus)
        second.restore_state(folder, selected_id)

        assert second.current_folder == "/A"
        assert second.selected_entry.path == "/A/FileA.txt"

    def test_restore_state_scrolls_after_layout(self, long_repository, event_bus):
        ctrl = FolderListController(long_repository, event_bus, row_height=ROW)

        ctrl.restore_state("/L", long_repository.id_of("/L/f15.txt"))
        ctrl.set_viewport_height(48)

        assert ctrl.virtualizer.scroll_offset == 16 * ROW - 48

    def test_dispose_stops_reloading(self, repository, event_bus):
        ctrl = FolderListController(repository, event_bus)
        ctrl.set_folder("/A")
        ctrl.dispose()

        repository.add_file("/A/D.txt")
        event_bus.publish(FolderContentsChangedEvent())

        assert len(ctrl.snapshot) == 3

    @pytest.mark.parametrize(
        ("folder", "expected"),
        [(None, "Folder"), ("/A/B", "B/"), ("/", "Folder"), ("C:/", "C:/"), ("C:/Work", "Work/")],
    )
    def test_folder_title(self, folder, expected):
        assert folder_title(folder) == expected


class TestContextActions:
    def test_actions_address_entries_by_id(self, controller, repository):
        controller.set_folder("/A")
        file_id = repository.id_of("/A/C.txt")

        controller.reveal_entry(file_id)
        controller.inspect_entry(file_id)
        controller.show_entry_properties(file_id)
        controller.open_entry(file_id)

        assert repository.calls == [
            ("reveal_externally", "/A/C.txt"),
            ("focus_and_inspect", file_id),
            ("show_properties", file_id),
            ("open_default", file_id),
        ]
        assert controller.selection.selected_id == file_id

    def test_open_entry_enters_folders(self, controller, repository):
        controller.set_folder("/A")

        assert controller.open_entry(repository.id_of("/A/B")) is True
        assert controller.current_folder == "/A/B"

    def test_unknown_entry_is_ignored(self, controller, repository):
        controller.set_folder("/A")

        controller.reveal_entry("id-missing")
        assert controller.open_entry("id-missing") is False
        assert repository.calls == []

    def test_failures_are_routed_to_error_handler(self, repository, event_bus):
        logger = Mock(spec=logging.Logger)
        handler = ErrorHandler(logger, event_bus)
        callback = Mock()
        handler.register_ui_callback(callback)
        published = []
        event_bus.subscribe(ErrorOccurredEvent, published.append)
        ctrl = FolderListController(repository, event_bus, error_handler=handler)
        ctrl.set_folder("/A")
        repository.fail_actions = True

        ctrl.reveal_entry(repository.id_of("/A/C.txt"))

        callback.assert_called_once()
        assert callback.call_args[0][1] is ErrorSeverity.ERROR
        assert published[0].context["action"] == "reveal"

    def test_failed_open_still_consumes_the_key(self, repository, event_bus):
        logger = Mock(spec=logging.Logger)
        ctrl = FolderListController(repository, event_bus, error_handler=ErrorHandler(logger, event_bus))
        ctrl.set_folder("/A")
        ctrl.set_focus(True)
        ctrl.selection.select_index(2)
        repository.fail_actions = True

        assert ctrl.handle_key(KeyCommand.ENTER) == HANDLED
        logger.error.assert_called()
