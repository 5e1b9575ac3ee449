"""Toolkit-neutral input records consumed by :class:`FolderListController`."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PointerButton(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    MIDDLE = "middle"


class KeyCommand(str, Enum):
    UP = "up"
    DOWN = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    ENTER = "enter"
    BACKSPACE = "backspace"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class PointerEvent:
    """Pointer position in viewport coordinates of the list."""

    x: float
    y: float
    button: PointerButton = PointerButton.PRIMARY
    click_count: int = 1
    # Shift/Ctrl/Alt/Meta held: the press selects but never arms a drag.
    has_modifiers: bool = False

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class EventResult:
    """Outcome of one input event.

    ``handled`` events must not reach the toolkit's default handling.
    ``exit_cycle`` means the displayed folder changed while handling, so
    anything the caller computed before the call is stale and the rest of the
    event must be skipped.
    """

    handled: bool
    exit_cycle: bool = False


NOT_HANDLED = EventResult(handled=False)
HANDLED = EventResult(handled=True)
HANDLED_EXIT = EventResult(handled=True, exit_cycle=True)
