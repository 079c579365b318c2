"""Boundary-line tool: split a facade image into floor strips with clicks.

Instead of drawing a rectangle per floor, the operator clicks where one floor
meets the next. ``unit_count`` floors need ``unit_count - 1`` lines; the
finished list gets ``100`` appended so it holds one bottom edge per strip.
"""

from __future__ import annotations

import logging

from plan_overlay.models.geometry import clamp

logger = logging.getLogger(__name__)

# Lines are kept off the image edges so every strip stays clickable.
MIN_BOUNDARY = 2.0
MAX_BOUNDARY = 98.0


class BoundaryLineTool:
    """Accumulates boundary percentages, always sorted ascending."""

    def __init__(self, unit_count: int, container_height: float = 100.0) -> None:
        if unit_count < 1:
            raise ValueError(f"unit_count must be at least 1, got {unit_count}")
        self.unit_count = unit_count
        self.container_height = container_height
        self.bounds: list[float] = []

    @property
    def needed(self) -> int:
        return self.unit_count - 1

    @property
    def remaining(self) -> int:
        return self.needed - len(self.bounds)

    @property
    def is_complete(self) -> bool:
        return len(self.bounds) == self.needed

    def click(self, offset_y: float) -> float | None:
        """Place a line at ``offset_y`` pixels from the container top.

        Returns the stored percentage, or None when the click was ignored
        (all lines placed, or a line already sits at that height).
        """
        if self.container_height <= 0:
            return None
        return self.click_ratio(offset_y / self.container_height)

    def click_ratio(self, ratio: float) -> float | None:
        """Place a line at ``ratio`` (0-1) of the container height."""
        if len(self.bounds) >= self.needed:
            return None
        percent = clamp(ratio * 100, MIN_BOUNDARY, MAX_BOUNDARY)
        if any(abs(percent - b) < 1e-9 for b in self.bounds):
            logger.debug("Ignoring duplicate boundary at %.2f%%", percent)
            return None
        self.bounds = sorted([*self.bounds, percent])
        return percent

    def reset(self) -> None:
        self.bounds = []

    def done(self) -> list[float] | None:
        """Sorted boundaries plus the closing ``100``, or None if incomplete."""
        if not self.is_complete:
            return None
        return [*sorted(self.bounds), 100.0]
