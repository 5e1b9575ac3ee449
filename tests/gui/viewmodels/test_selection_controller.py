"""Folder and selection state machine tests."""

from pinnedfolder.core.navigation import NavigationCommand
from pinnedfolder.gui.viewmodels.folder_list_model import FolderListModel
from pinnedfolder.gui.viewmodels.selection_controller import SelectionController


def _controller(repository) -> SelectionController:
    return SelectionController(repository, FolderListModel(repository))


class TestSetFolder:
    def test_folder_identifier_loads_without_selection(self, repository):
        controller = _controller(repository)
        folders = []
        controller.folder_changed.connect(folders.append)

        assert controller.set_folder("/A") is True

        assert controller.folder_id == "/A"
        assert [entry.path for entry in controller.snapshot] == ["/A/B", "/A/FileA.txt", "/A/C.txt"]
        assert controller.selected_id is None
        assert folders == ["/A"]

    def test_same_folder_is_not_a_change(self, repository):
        controller = _controller(repository)
        controller.set_folder("/A")
        folders = []
        controller.folder_changed.connect(folders.append)

        assert controller.set_folder("/A/") is False
        assert folders == []

    def test_file_identifier_opens_parent_and_selects_file(self, repository):
        controller = _controller(repository)
        scrolls = []
        controller.scroll_requested.connect(scrolls.append)

        controller.set_folder("/A/B/file.txt")

        assert controller.folder_id == "/A/B"
        assert controller.selected_entry.path == "/A/B/file.txt"
        assert scrolls == [controller.selected_index]

    def test_invalid_identifier_clears_the_folder(self, repository):
        controller = _controller(repository)
        controller.set_folder("/A")
        controller.select_index(0)

        controller.set_folder("/Nope/missing.txt")

        assert controller.folder_id is None
        assert len(controller.snapshot) == 0
        assert controller.selected_id is None

    def test_select_entry_id_on_folder_change(self, repository):
        controller = _controller(repository)

        controller.set_folder("/A", select_entry_id=repository.id_of("/A/C.txt"))

        assert controller.selected_index == 2


class TestSelection:
    def test_selection_survives_reload(self, repository):
        controller = _controller(repository)
        controller.set_folder("/A")
        controller.select_path("/A/FileA.txt")
        selected = controller.selected_id

        controller.reload()

        assert controller.selected_id == selected
        assert controller.selected_entry.path == "/A/FileA.txt"

    def test_selection_follows_a_rename(self, repository):
        controller = _controller(repository)
        controller.set_folder("/A")
        controller.select_path("/A/C.txt")
        selected = controller.selected_id

        repository.move("/A/C.txt", "/A/Renamed.txt")
        controller.reload()

        assert controller.selected_id == selected
        assert controller.selected_entry.path == "/A/Renamed.txt"

    def test_selection_dropped_when_entry_disappears(self, repository):
        controller = _controller(repository)
        controller.set_folder("/A")
        controller.select_path("/A/FileA.txt")
        changes = []
        controller.selection_changed.connect(lambda entry_id, index: changes.append((entry_id, index)))

        repository.delete("/A/FileA.txt")
        controller.reload()

        assert controller.selected_id is None
        assert controller.selected_index is None
        assert changes == [(None, None)]

    def test_selection_index_tracks_reordering(self, repository):
        controller = _controller(repository)
        controller.set_folder("/A")
        controller.select_path("/A/C.txt")
        assert controller.selected_index == 2

        repository.delete("/A/FileA.txt")
        controller.reload()

        assert controller.selected_index == 1

    def test_out_of_range_index_deselects(self, repository):
        controller = _controller(repository)
        controller.set_folder("/A")
        controller.select_index(1)

        controller.select_index(7)

        assert controller.selected_index is None

    def test_restore_reselects_persisted_id(self, repository):
        controller = _controller(repository)

        controller.restore("/A", repository.id_of("/A/FileA.txt"))

        assert controller.folder_id == "/A"
        assert controller.selected_entry.path == "/A/FileA.txt"

    def test_restore_with_unknown_id_selects_nothing(self, repository):
        controller = _controller(repository)

        controller.restore("/A", "id-unknown")

        assert controller.folder_id == "/A"
        assert controller.selected_id is None


class TestNavigation:
    def test_home_end_page_down(self, make_repository):
        repository = make_repository(*(f"/R/{name}.txt" for name in "abcde"))
        controller = _controller(repository)
        controller.set_folder("/R")
        controller.select_index(2)

        assert controller.navigate(NavigationCommand.HOME)
        assert controller.selected_index == 0
        assert controller.navigate(NavigationCommand.END)
        assert controller.selected_index == 4

        controller.select_index(2)
        assert controller.navigate(NavigationCommand.PAGE_DOWN, viewport_rows=3)
        assert controller.selected_index == 4

    def test_navigation_scrolls_selection_into_view(self, repository):
        controller = _controller(repository)
        controller.set_folder("/A")
        scrolls = []
        controller.scroll_requested.connect(scrolls.append)

        controller.navigate(NavigationCommand.DOWN)

        assert controller.selected_index == 0
        assert scrolls == [0]

    def test_navigation_on_empty_folder_is_not_handled(self, make_repository):
        repository = make_repository("/Empty/")
        controller = _controller(repository)
        controller.set_folder("/Empty")

        assert controller.navigate(NavigationCommand.DOWN) is False
        assert controller.selected_index is None

    def test_exit_folder_selects_the_folder_left(self, repository):
        controller = _controller(repository)
        controller.set_folder("/A/B")

        assert controller.exit_folder() is True

        assert controller.folder_id == "/A"
        assert controller.selected_id == repository.id_of("/A/B")

    def test_exit_folder_at_root_is_not_handled(self, repository):
        controller = _controller(repository)
        controller.set_folder("/")

        assert controller.exit_folder() is False
        assert controller.folder_id == "/"

    def test_exit_folder_without_folder_is_not_handled(self, repository):
        assert _controller(repository).exit_folder() is False

    def test_enter_folder_selects_first_child(self, repository):
        controller = _controller(repository)
        controller.set_folder("/A")
        controller.select_path("/A/B")

        assert controller.enter_folder(select_first_child=True) is True

        assert controller.folder_id == "/A/B"
        assert controller.selected_index == 0
        assert controller.selected_entry.path == "/A/B/deep"

    def test_enter_folder_on_file_is_not_handled(self, repository):
        controller = _controller(repository)
        controller.set_folder("/A")
        controller.select_path("/A/C.txt")

        assert controller.enter_folder() is False
        assert controller.folder_id == "/A"

    def test_open_selection_hands_files_to_repository(self, repository):
        controller = _controller(repository)
        controller.set_folder("/A")
        controller.select_path("/A/C.txt")

        assert controller.open_selection() is True

        assert repository.calls == [("open_default", repository.id_of("/A/C.txt"))]

    def test_open_selection_enters_folders(self, repository):
        controller = _controller(repository)
        controller.set_folder("/A")
        controller.select_path("/A/B")

        assert controller.open_selection() is True
        assert controller.folder_id == "/A/B"
        assert repository.calls == []

    def test_open_selection_without_selection(self, repository):
        controller = _controller(repository)
        controller.set_folder("/A")

        assert controller.open_selection() is False
