"""Keyboard navigation over a flat list of rows."""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional


class NavigationCommand(str, Enum):
    UP = "up"
    DOWN = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"


def viewport_rows(visible_height: float, row_height: float) -> int:
    """Number of whole rows a page step moves; never less than one."""

    if row_height <= 0 or visible_height <= 0:
        return 1
    return max(1, math.floor(visible_height / row_height))


def navigate(
    current_index: Optional[int],
    length: int,
    command: NavigationCommand,
    page_rows: int = 1,
) -> Optional[int]:
    """Return the row selected after *command*.

    Navigation always lands on a concrete row: with nothing selected the
    result is row 0 whatever the command. Results are clamped rather than
    deselecting out of bounds. ``None`` means the command does not apply
    because there are no rows.
    """

    if length <= 0:
        return None

    new_index = 0
    if current_index is not None and current_index >= 0:
        if command is NavigationCommand.UP:
            new_index = current_index - 1
        elif command is NavigationCommand.DOWN:
            new_index = current_index + 1
        elif command in (NavigationCommand.PAGE_UP, NavigationCommand.PAGE_DOWN):
            step = max(1, page_rows)
            direction = 1 if command is NavigationCommand.PAGE_DOWN else -1
            new_index = current_index + step * direction
        elif command is NavigationCommand.HOME:
            new_index = 0
        elif command is NavigationCommand.END:
            new_index = length - 1

    return min(max(new_index, 0), length - 1)
