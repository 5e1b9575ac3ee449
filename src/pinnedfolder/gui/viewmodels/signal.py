"""Pure Python signal system without a Qt dependency.

Provides ``Signal`` for observer-pattern callbacks and ``ObservableProperty``
for data-binding between the headless list components and their views.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

_logger = logging.getLogger(__name__)


class Signal:
    """Synchronous observer list.

    Handlers run in connection order inside :meth:`emit`. A failing handler is
    logged and the remaining handlers still run, the same policy as
    ``EventBus``.
    """

    def __init__(self) -> None:
        self._handlers: list[Callable] = []

    def connect(self, handler: Callable) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def disconnect(self, handler: Callable) -> None:
        self._handlers.remove(handler)

    def emit(self, *args: Any, **kwargs: Any) -> None:
        for handler in list(self._handlers):
            try:
                handler(*args, **kwargs)
            except Exception:
                _logger.exception("Signal handler %r failed", handler)

    @property
    def handler_count(self) -> int:
        return len(self._handlers)


class ObservableProperty:
    """Value holder that emits ``changed(new_value, old_value)`` on change."""

    def __init__(self, initial_value: Any = None) -> None:
        self._value = initial_value
        self.changed = Signal()

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        if self._value != new_value:
            old_value = self._value
            self._value = new_value
            self.changed.emit(new_value, old_value)
