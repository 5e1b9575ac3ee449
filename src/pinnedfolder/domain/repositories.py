from abc import ABC, abstractmethod
from typing import Iterable, Optional

from .models import ChildRecord


class IAssetRepository(ABC):
    """Collaborator that owns the file collection the panel displays.

    Identifiers are ``/``-separated path strings. Query methods are pure
    lookups; the action methods are fire-and-forget side effects.
    """

    @abstractmethod
    def query_children(self, folder_id: str) -> Iterable[ChildRecord]:
        """Children of *folder_id*; may also yield deeper descendants."""
        pass

    @abstractmethod
    def is_empty(self, folder_id: str) -> bool:
        pass

    @abstractmethod
    def resolve_by_id(self, entry_id: str) -> Optional[str]:
        """Current path of *entry_id*, or ``None`` when it no longer resolves."""
        pass

    @abstractmethod
    def id_for_path(self, path: str) -> Optional[str]:
        """Stable id of the item at *path*, or ``None`` when nothing is there."""
        pass

    @abstractmethod
    def is_valid_folder(self, path: str) -> bool:
        pass

    @abstractmethod
    def parent_of(self, path: str) -> Optional[str]:
        """Parent of *path*; ``None`` at a root."""
        pass

    # ------------------------------------------------------------------
    # Fire-and-forget actions
    # ------------------------------------------------------------------
    @abstractmethod
    def open_default(self, entry_id: str) -> None:
        pass

    @abstractmethod
    def reveal_externally(self, path: str) -> None:
        pass

    @abstractmethod
    def focus_and_inspect(self, entry_id: str) -> None:
        pass

    @abstractmethod
    def show_properties(self, entry_id: str) -> None:
        pass
