"""Events published around the displayed folder."""

from __future__ import annotations

from dataclasses import dataclass

from .bus import Event


@dataclass(kw_only=True)
class FolderContentsChangedEvent(Event):
    """Coarse "something changed" signal; carries no payload by contract."""


@dataclass(kw_only=True)
class EntryInspectRequestedEvent(Event):
    entry_id: str
    path: str


@dataclass(kw_only=True)
class EntryPropertiesRequestedEvent(Event):
    entry_id: str
    path: str
