"""Lifetime management shared by the headless list components."""

from __future__ import annotations

from typing import Callable, Type

from ...events.bus import Event, EventBus, Subscription


class BaseViewModel:
    """Own ``EventBus`` subscriptions and drop them all on :meth:`dispose`.

    Instances can be used as context managers for short-lived consumers such
    as the command line, which builds one controller per invocation.
    """

    def __init__(self) -> None:
        self._bus_subscriptions: list[Subscription] = []
        self._disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def subscribe_event(
        self,
        event_bus: EventBus,
        event_type: Type[Event],
        handler: Callable,
    ) -> Subscription:
        if self._disposed:
            raise RuntimeError(f"{type(self).__name__} is disposed")
        subscription = event_bus.subscribe(event_type, handler)
        self._bus_subscriptions.append(subscription)
        return subscription

    def dispose(self) -> None:
        while self._bus_subscriptions:
            self._bus_subscriptions.pop().cancel()
        self._disposed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()
