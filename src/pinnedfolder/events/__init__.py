from .bus import Event, EventBus, Subscription
from .folder_events import (
    EntryInspectRequestedEvent,
    EntryPropertiesRequestedEvent,
    FolderContentsChangedEvent,
)

__all__ = [
    "EntryInspectRequestedEvent",
    "EntryPropertiesRequestedEvent",
    "Event",
    "EventBus",
    "FolderContentsChangedEvent",
    "Subscription",
]
