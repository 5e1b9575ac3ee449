from __future__ import annotations

import os
from itertools import count
from typing import Iterable, Optional

import pytest

from pinnedfolder.core.path_resolver import containing_folder, normalize_path
from pinnedfolder.domain.models import ChildRecord
from pinnedfolder.domain.repositories import IAssetRepository
from pinnedfolder.errors import ExternalToolError, RepositoryError
from pinnedfolder.events.bus import EventBus


class InMemoryAssetRepository(IAssetRepository):
    """Dictionary backed repository used by the headless tests.

    ``query_children`` deliberately returns every descendant of the folder,
    not only the immediate children, and in insertion order. Ids survive
    :meth:`move`. Fire-and-forget actions are recorded in ``calls``.
    """

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._ids = count(1)
        self._nodes: dict[str, tuple[str, bool]] = {}
        self.calls: list[tuple[str, str]] = []
        self.failing_queries: set[str] = set()
        self.failing_empty_checks: set[str] = set()
        self.unresolvable: set[str] = set()
        self.fail_actions = False
        self.add_folder("/")
        for path in paths:
            self.add(path)

    # ------------------------------------------------------------------
    # Test helpers
    # ------------------------------------------------------------------
    def add(self, path: str) -> str:
        """Add *path*; a trailing ``/`` marks a folder."""

        if path.endswith("/") and path != "/":
            return self.add_folder(path)
        return self.add_file(path)

    def add_folder(self, path: str) -> str:
        return self._add(path, True)

    def add_file(self, path: str) -> str:
        return self._add(path, False)

    def id_of(self, path: str) -> str:
        normalized = normalize_path(path)
        for entry_id, (node_path, _is_folder) in self._nodes.items():
            if node_path == normalized:
                return entry_id
        raise KeyError(path)

    def move(self, old: str, new: str) -> None:
        old_path = normalize_path(old)
        new_path = normalize_path(new)
        for entry_id, (path, is_folder) in list(self._nodes.items()):
            if path == old_path:
                self._nodes[entry_id] = (new_path, is_folder)
            elif path.startswith(old_path + "/"):
                self._nodes[entry_id] = (new_path + path[len(old_path):], is_folder)

    def delete(self, path: str) -> None:
        target = normalize_path(path)
        for entry_id, (node_path, _is_folder) in list(self._nodes.items()):
            if node_path == target or node_path.startswith(target + "/"):
                del self._nodes[entry_id]

    def _add(self, path: str, is_folder: bool) -> str:
        normalized = normalize_path(path)
        parent = containing_folder(normalized)
        if parent is not None and not self._has_folder(parent):
            self.add_folder(parent)
        entry_id = f"id-{next(self._ids)}"
        self._nodes[entry_id] = (normalized, is_folder)
        return entry_id

    def _has_folder(self, path: str) -> bool:
        return any(node == (path, True) for node in self._nodes.values())

    # ------------------------------------------------------------------
    # IAssetRepository
    # ------------------------------------------------------------------
    def query_children(self, folder_id: str) -> list[ChildRecord]:
        if folder_id in self.failing_queries:
            raise RepositoryError(f"cannot list {folder_id}")
        prefix = folder_id if folder_id.endswith("/") else folder_id + "/"
        return [
            ChildRecord(id=entry_id, path=path, is_folder=is_folder)
            for entry_id, (path, is_folder) in self._nodes.items()
            if path != folder_id and path.startswith(prefix)
        ]

    def is_empty(self, folder_id: str) -> bool:
        if folder_id in self.failing_empty_checks:
            raise RepositoryError(f"cannot open {folder_id}")
        return not any(
            containing_folder(path) == folder_id for path, _is_folder in self._nodes.values()
        )

    def resolve_by_id(self, entry_id: str) -> Optional[str]:
        if entry_id in self.unresolvable:
            return None
        node = self._nodes.get(entry_id)
        return node[0] if node else None

    def id_for_path(self, path: str) -> Optional[str]:
        try:
            return self.id_of(path)
        except KeyError:
            return None

    def is_valid_folder(self, path: str) -> bool:
        return self._has_folder(normalize_path(path))

    def parent_of(self, path: str) -> Optional[str]:
        return containing_folder(path)

    def open_default(self, entry_id: str) -> None:
        self._record("open_default", entry_id)

    def reveal_externally(self, path: str) -> None:
        self._record("reveal_externally", path)

    def focus_and_inspect(self, entry_id: str) -> None:
        self._record("focus_and_inspect", entry_id)

    def show_properties(self, entry_id: str) -> None:
        self._record("show_properties", entry_id)

    def _record(self, action: str, target: str) -> None:
        if self.fail_actions:
            raise ExternalToolError(f"{action} failed for {target}")
        self.calls.append((action, target))


@pytest.fixture
def make_repository():
    """Factory building an :class:`InMemoryAssetRepository` from paths."""

    def _make(*paths: str) -> InMemoryAssetRepository:
        return InMemoryAssetRepository(paths)

    return _make


@pytest.fixture
def repository() -> InMemoryAssetRepository:
    """``/A`` holds ``FileA, FolderB, FileC`` plus a nested tree under ``B``."""

    return InMemoryAssetRepository(
        [
            "/A/FileA.txt",
            "/A/B/",
            "/A/B/file.txt",
            "/A/B/deep/nested.txt",
            "/A/C.txt",
            "/X/",
        ]
    )


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture(scope="session")
def qapp():
    pytest.importorskip("PySide6", reason="PySide6 is required for widget tests", exc_type=ImportError)
    pytest.importorskip("PySide6.QtWidgets", reason="Qt widgets not available", exc_type=ImportError)
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app
