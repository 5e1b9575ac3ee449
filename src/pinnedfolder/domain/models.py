"""Immutable records describing one folder listing."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Iterator, Optional

from ..core.path_resolver import display_name


@dataclass(frozen=True)
class ChildRecord:
    """Raw row returned by :meth:`IAssetRepository.query_children`."""

    id: str
    path: str
    is_folder: bool


@dataclass(frozen=True)
class Entry:
    """One immediate child of the displayed folder.

    ``path`` is the display path at load time and may go stale until the next
    reload; ``id`` is the stable identity used to survive reloads.
    ``is_empty_folder`` is computed once at load time and never refreshed.
    """

    id: str
    path: str
    is_folder: bool
    is_empty_folder: bool = False

    @cached_property
    def display_name(self) -> str:
        return display_name(self.path)


@dataclass(frozen=True)
class Snapshot:
    """Ordered listing of one folder at one point in time.

    Folder entries always form a prefix of ``entries``. Snapshots are never
    mutated; a reload installs a new instance.
    """

    folder_id: Optional[str]
    entries: tuple[Entry, ...] = ()

    @classmethod
    def empty(cls, folder_id: Optional[str] = None) -> "Snapshot":
        return cls(folder_id=folder_id, entries=())

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> Entry:
        return self.entries[index]

    def __bool__(self) -> bool:
        return bool(self.entries)

    @cached_property
    def _index_by_id(self) -> dict[str, int]:
        return {entry.id: index for index, entry in enumerate(self.entries)}

    @cached_property
    def _index_by_path(self) -> dict[str, int]:
        return {entry.path: index for index, entry in enumerate(self.entries)}

    def index_of_id(self, entry_id: Optional[str]) -> Optional[int]:
        if entry_id is None:
            return None
        return self._index_by_id.get(entry_id)

    def index_of_path(self, path: Optional[str]) -> Optional[int]:
        if path is None:
            return None
        return self._index_by_path.get(path)

    @property
    def folder_count(self) -> int:
        count = 0
        for entry in self.entries:
            if not entry.is_folder:
                break
            count += 1
        return count
