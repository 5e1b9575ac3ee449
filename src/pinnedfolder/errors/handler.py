"""Route recoverable failures to the log, the event bus and the UI."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, Optional

from ..events.bus import Event, EventBus
from . import PinnedFolderError


class ErrorSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(kw_only=True)
class ErrorOccurredEvent(Event):
    error: Exception
    severity: ErrorSeverity
    context: dict = field(default_factory=dict)


class ErrorHandler:
    def __init__(self, logger: logging.Logger, event_bus: EventBus):
        self._logger = logger
        self._events = event_bus
        self._ui_callback: Optional[Callable[[str, ErrorSeverity], None]] = None

    def register_ui_callback(self, callback: Callable[[str, ErrorSeverity], None]):
        self._ui_callback = callback

    def handle(
        self,
        error: Exception,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: Optional[dict] = None,
    ):
        context = context or {}
        log_method = getattr(self._logger, severity.value, self._logger.error)
        log_method("%s: %s", error.__class__.__name__, error, extra={"context": context})

        self._events.publish(ErrorOccurredEvent(
            error=error,
            severity=severity,
            context=context,
        ))

        # Only failures the user must act on reach the UI.
        if self._ui_callback and severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            self._ui_callback(str(error), severity)

    @contextmanager
    def capture(
        self,
        action: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        **context,
    ) -> Iterator[None]:
        """Handle any :class:`PinnedFolderError` raised inside the block.

        Used around fire-and-forget collaborator calls (open, reveal,
        inspect) whose failure must not abort the input event being handled.
        """

        try:
            yield
        except PinnedFolderError as exc:
            self.handle(exc, severity, {"action": action, **context})
