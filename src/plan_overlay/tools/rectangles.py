"""Rectangle-per-unit capture tools.

The operator drags one rectangle per unit over a reference image. Two
variants share the drag handling:

- ``FloorButtonTool``: a fixed list of floors. Each commit advances to the
  next floor; committing the last floor completes the tool.
- ``SectionAreaTool``: an open-ended list of parking sections. The cursor
  moves only on ``add_another()`` and the operator finishes with ``done()``.

Pointers are given in percent coordinates (see ``point_from_pointer``).
A unit without a committed rectangle never shows up in ``result``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable

from plan_overlay.models.geometry import AreaRect, Point, rect_from_drag

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[dict[int, AreaRect]], None]


class RectangleCaptureTool(ABC):
    """Drag state machine committing one rectangle for the unit at the cursor."""

    def __init__(
        self,
        initial: dict[int, AreaRect] | None = None,
        edit: bool = False,
        on_complete: CompletionCallback | None = None,
    ) -> None:
        self.committed: dict[int, AreaRect] = dict(initial or {})
        self.edit = edit
        self.on_complete = on_complete
        self.drag_start: Point | None = None
        self.drag_current: Point | None = None
        self.completed = False
        self.cursor = self._first_cursor()

    # ── Subclass hooks ────────────────────────────────────────────────

    @abstractmethod
    def _first_cursor(self) -> int:
        """Cursor value for a fresh tool."""

    @property
    @abstractmethod
    def first_unit(self) -> int:
        """Lowest cursor value ``go_back`` stops at."""

    def _after_commit(self) -> None:
        """Called once a rectangle has been stored for the cursor unit."""

    # ── Queries ───────────────────────────────────────────────────────

    @property
    def current_unit(self) -> int:
        return self.cursor

    @property
    def dragging(self) -> bool:
        return self.drag_start is not None

    @property
    def preview(self) -> AreaRect | None:
        """Rectangle under construction, for live rendering."""
        if self.drag_start is None or self.drag_current is None:
            return None
        return rect_from_drag(self.drag_start, self.drag_current)

    @property
    def has_current(self) -> bool:
        return self.current_unit in self.committed

    @property
    def result(self) -> dict[int, AreaRect]:
        """Committed rectangles keyed by unit, in unit order."""
        return dict(sorted(self.committed.items()))

    # ── Pointer input ─────────────────────────────────────────────────

    def pointer_down(self, point: Point) -> None:
        if self.completed:
            return
        self.drag_start = point
        self.drag_current = point

    def pointer_move(self, point: Point) -> None:
        if self.completed or self.drag_start is None:
            return
        self.drag_current = point

    def pointer_up(self) -> AreaRect | None:
        """Commit the dragged rectangle for the cursor unit.

        Returns the committed rectangle, or None if no drag was in progress.
        """
        if self.completed or self.drag_start is None:
            return None
        current = self.drag_current or self.drag_start
        rect = rect_from_drag(self.drag_start, current)
        unit = self.current_unit
        self.committed[unit] = rect
        self._clear_drag()
        logger.debug("Committed rectangle for unit %s: %s", unit, rect)
        self._after_commit()
        return rect

    def pointer_leave(self) -> AreaRect | None:
        """Pointer left the image: finish the drag as if released there."""
        if self.drag_start is not None and self.drag_current is None:
            self.drag_current = self.drag_start
        return self.pointer_up()

    # ── Actions ───────────────────────────────────────────────────────

    def redraw_current(self) -> None:
        """Discard the cursor unit's rectangle (edit mode only)."""
        if not self.edit or self.completed:
            return
        self.committed.pop(self.current_unit, None)
        self._clear_drag()

    def go_back(self) -> None:
        """Move the cursor to the previous unit, stopping at the first one."""
        if self.completed:
            return
        self._clear_drag()
        self.cursor = max(self.first_unit, self.cursor - 1)

    def _clear_drag(self) -> None:
        self.drag_start = None
        self.drag_current = None

    def _complete(self) -> dict[int, AreaRect]:
        self.completed = True
        self._clear_drag()
        result = self.result
        if self.on_complete is not None:
            self.on_complete(result)
        return result


class FloorButtonTool(RectangleCaptureTool):
    """One button rectangle per floor, captured in the order given.

    ``cursor`` is an index into ``floor_numbers``; ``current_unit`` is the
    floor number being drawn.
    """

    def __init__(
        self,
        floor_numbers: list[int],
        initial: dict[int, AreaRect] | None = None,
        edit: bool = False,
        on_complete: CompletionCallback | None = None,
    ) -> None:
        if not floor_numbers:
            raise ValueError("FloorButtonTool needs at least one floor")
        self.floor_numbers = list(floor_numbers)
        super().__init__(initial=initial, edit=edit, on_complete=on_complete)

    def _first_cursor(self) -> int:
        return 0

    @property
    def first_unit(self) -> int:
        return 0

    @property
    def current_unit(self) -> int:
        return self.floor_numbers[self.cursor]

    @property
    def is_last(self) -> bool:
        return self.cursor >= len(self.floor_numbers) - 1

    @property
    def all_drawn(self) -> bool:
        return all(fn in self.committed for fn in self.floor_numbers)

    @property
    def result(self) -> dict[int, AreaRect]:
        return {fn: self.committed[fn] for fn in self.floor_numbers if fn in self.committed}

    def _after_commit(self) -> None:
        if self.is_last:
            self._complete()
        else:
            self.cursor += 1

    def next_unit(self) -> bool:
        """Advance to the next floor once the current one is drawn."""
        if self.completed or not self.has_current or self.is_last:
            return False
        self._clear_drag()
        self.cursor += 1
        return True

    def done(self) -> bool:
        """Finish early (e.g. when editing) once every floor has a rectangle."""
        if self.completed or not self.all_drawn:
            return False
        self._complete()
        return True


class SectionAreaTool(RectangleCaptureTool):
    """Open-ended list of section rectangles, numbered from 1.

    When editing, the cursor starts after the highest pre-seeded section so
    the next drag adds a new section instead of replacing one.
    """

    def _first_cursor(self) -> int:
        return max(self.committed, default=0) + 1

    @property
    def first_unit(self) -> int:
        return 1

    @property
    def section_numbers(self) -> list[int]:
        return sorted(self.committed)

    def add_another(self) -> bool:
        """Start a new section once the current one is drawn."""
        if self.completed or not self.has_current:
            return False
        self._clear_drag()
        self.cursor += 1
        return True

    def done(self) -> bool:
        """Finish; needs at least one committed section."""
        if self.completed or not self.committed:
            return False
        self._complete()
        return True
