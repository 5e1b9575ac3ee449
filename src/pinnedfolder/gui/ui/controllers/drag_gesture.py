"""Disambiguate a press on a row into a click, a double click, or a drag."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ....config import DRAG_THRESHOLD_PX


class PressOutcome(str, Enum):
    PENDING = "pending"
    OPEN = "open"


@dataclass(frozen=True)
class _Pending:
    index: int
    origin: tuple[float, float]


class DragGesture:
    """``Idle -> Pending(index, origin) -> Idle`` state machine.

    A press arms the gesture. Moving strictly further than ``threshold``
    from the press origin reports a drag start for the pressed row and
    disarms; releasing or losing capture disarms silently. A double click
    never arms the gesture and is reported as an "open" request instead.
    """

    def __init__(self, threshold: float = DRAG_THRESHOLD_PX) -> None:
        self._threshold = threshold
        self._pending: Optional[_Pending] = None

    @property
    def threshold(self) -> float:
        return self._threshold

    @property
    def is_pending(self) -> bool:
        return self._pending is not None

    @property
    def pending_index(self) -> Optional[int]:
        return self._pending.index if self._pending is not None else None

    def press(self, index: int, position: tuple[float, float], *, double_click: bool = False) -> PressOutcome:
        if double_click:
            self._pending = None
            return PressOutcome.OPEN
        self._pending = _Pending(index=index, origin=(float(position[0]), float(position[1])))
        return PressOutcome.PENDING

    def move(self, position: tuple[float, float]) -> Optional[int]:
        """Return the row to start dragging, or ``None`` while below threshold."""

        pending = self._pending
        if pending is None:
            return None
        distance = math.hypot(position[0] - pending.origin[0], position[1] - pending.origin[1])
        if distance <= self._threshold:
            return None
        self._pending = None
        return pending.index

    def release(self) -> bool:
        """Finish a plain click; ``True`` when a press was pending."""
        return self.cancel()

    def cancel(self) -> bool:
        was_pending = self._pending is not None
        self._pending = None
        return was_pending
