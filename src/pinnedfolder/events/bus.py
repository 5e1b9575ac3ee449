"""Synchronous publish/subscribe bus shared by the panel components."""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Type


@dataclass(kw_only=True)
class Event:
    """Base event class."""
    timestamp: datetime = field(default_factory=datetime.now)
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Subscription:
    """Handle returned by subscribe(); can be used to unsubscribe."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    event_type: Type = Event
    handler: Callable = field(default=lambda e: None)
    active: bool = True

    def cancel(self):
        self.active = False


class EventBus:
    """Dispatch events to subscribers in the publishing call.

    All state transitions in the panel happen inside one input or
    notification event, so handlers run synchronously and in subscription
    order. A failing handler is logged and does not stop the remaining ones.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)
        self._handlers: Dict[Type[Event], List[Subscription]] = defaultdict(list)

    def subscribe(self, event_type: Type[Event], handler: Callable) -> Subscription:
        sub = Subscription(event_type=event_type, handler=handler)
        self._handlers[event_type].append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription):
        subscription.active = False
        subs = self._handlers.get(subscription.event_type)
        if subs and subscription in subs:
            subs.remove(subscription)

    def publish(self, event: Event):
        event_type = type(event)
        for sub in list(self._handlers[event_type]):
            if not sub.active:
                continue
            try:
                sub.handler(event)
            except Exception:
                self._logger.exception("Handler failed for %s", event_type.__name__)

    def handler_count(self, event_type: Type[Event]) -> int:
        return sum(1 for sub in self._handlers.get(event_type, ()) if sub.active)
