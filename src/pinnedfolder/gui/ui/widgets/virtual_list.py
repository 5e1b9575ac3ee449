"""Virtualized row list: decides which rows are on screen."""

from __future__ import annotations

import math
from typing import Optional

from ....config import ROW_HEIGHT
from ....core.navigation import viewport_rows


def visible_range(
    scroll_offset: float,
    viewport_height: float,
    row_height: float,
    count: int,
) -> tuple[int, int]:
    """Return *(start, end_exclusive)* of the rows intersecting the viewport."""

    if row_height <= 0 or count <= 0:
        return (0, 0)
    scroll_offset = max(0.0, scroll_offset)
    viewport_height = max(0.0, viewport_height)
    start = min(count, max(0, math.floor(scroll_offset / row_height)))
    end = min(count, math.ceil((scroll_offset + viewport_height) / row_height))
    return (start, max(start, end))


def scroll_to_index(
    index: int,
    scroll_offset: float,
    viewport_height: float,
    row_height: float,
) -> float:
    """Return the smallest scroll change that brings row *index* into view.

    A row below the viewport ends up flush with the bottom edge, a row above
    it flush with the top edge. Applying the result again is a no-op.
    """

    row_top = max(0, index) * row_height
    row_bottom = row_top + row_height
    offset = scroll_offset
    if row_bottom > offset + viewport_height:
        offset = row_bottom - viewport_height
    if row_top < offset:
        offset = row_top
    return max(0.0, offset)


class ListVirtualizer:
    """Headless virtual-list model.

    Keeps the scroll offset, the viewport height and the row count, and maps
    between rows and pixels. Rendering is left to the view, which asks for
    :meth:`visible_range` on every paint. Scroll requests made before the
    view has reported a real viewport height are kept pending and applied on
    the next :meth:`set_viewport_height`.
    """

    def __init__(self, row_height: float = ROW_HEIGHT) -> None:
        if row_height <= 0:
            raise ValueError("row_height must be positive")
        self._row_height = float(row_height)
        self._count = 0
        self._scroll_offset = 0.0
        self._viewport_height = 0.0
        self._pending_index: Optional[int] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def row_height(self) -> float:
        return self._row_height

    @property
    def count(self) -> int:
        return self._count

    @property
    def scroll_offset(self) -> float:
        return self._scroll_offset

    @property
    def viewport_height(self) -> float:
        return self._viewport_height

    @property
    def has_viewport(self) -> bool:
        return self._viewport_height > 0

    @property
    def pending_index(self) -> Optional[int]:
        return self._pending_index

    def set_count(self, count: int) -> None:
        self._count = max(0, count)
        if self.has_viewport:
            self._scroll_offset = min(self._scroll_offset, self.max_scroll_offset())

    def set_viewport_height(self, height: float) -> None:
        """Record the measured viewport height and resolve a pending scroll."""

        self._viewport_height = max(0.0, float(height))
        if not self.has_viewport:
            return
        if self._pending_index is not None:
            self.scroll_to(self._pending_index)
        else:
            self._scroll_offset = min(self._scroll_offset, self.max_scroll_offset())

    def set_scroll_offset(self, offset: float) -> bool:
        """Apply a user scroll; returns ``True`` when the offset changed."""

        offset = max(0.0, float(offset))
        if self.has_viewport:
            offset = min(offset, self.max_scroll_offset())
        if offset == self._scroll_offset:
            return False
        self._scroll_offset = offset
        return True

    def reset_scroll(self) -> None:
        self._scroll_offset = 0.0
        self._pending_index = None

    def scroll_to(self, index: int) -> bool:
        """Bring row *index* into view, or defer until the viewport is known.

        Returns ``True`` when the scroll offset changed.
        """

        if not self.has_viewport:
            self._pending_index = index
            return False
        self._pending_index = None
        offset = scroll_to_index(index, self._scroll_offset, self._viewport_height, self._row_height)
        if offset == self._scroll_offset:
            return False
        self._scroll_offset = offset
        return True

    def cancel_pending(self) -> None:
        self._pending_index = None

    def visible_range(self) -> tuple[int, int]:
        return visible_range(self._scroll_offset, self._viewport_height, self._row_height, self._count)

    def viewport_rows(self) -> int:
        return viewport_rows(self._viewport_height, self._row_height)

    def content_height(self) -> float:
        return self._count * self._row_height

    def max_scroll_offset(self) -> float:
        return max(0.0, self.content_height() - self._viewport_height)

    def row_top(self, index: int) -> float:
        """Top edge of *index* in viewport coordinates."""
        return index * self._row_height - self._scroll_offset

    def row_at(self, y: float) -> Optional[int]:
        """Row under viewport coordinate *y*, or ``None`` for empty space."""

        if y < 0 or (self.has_viewport and y >= self._viewport_height):
            return None
        index = math.floor((y + self._scroll_offset) / self._row_height)
        if 0 <= index < self._count:
            return index
        return None
