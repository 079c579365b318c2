"""Percent-based geometric primitives.

Every coordinate is a percentage (0-100) of the *displayed image element's*
own bounding box, never of the page or of a letterboxing container. That keeps
shapes valid at any rendered size.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field

from plan_overlay.models.base import EntityModel

# Smallest width/height of a drawn rectangle (%), so a plain click still
# produces something visible and clickable.
MIN_RECT_SIZE = 2.0


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))


class Point(EntityModel):
    """A position in percent of the reference image (0-100 on both axes)."""

    x: float = Field(ge=0, le=100)
    y: float = Field(ge=0, le=100)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return math.isclose(self.x, other.x, abs_tol=1e-6) and math.isclose(
            self.y, other.y, abs_tol=1e-6
        )

    def __hash__(self) -> int:
        return hash((round(self.x, 6), round(self.y, 6)))


class AreaRect(EntityModel):
    """Axis-aligned rectangle in percent of the reference image.

    ``x + width`` and ``y + height`` may exceed 100: a drag that starts near
    an edge is kept as drawn and consumers must tolerate the overflow.
    """

    x: float = Field(ge=0, le=100)
    y: float = Field(ge=0, le=100)
    width: float = Field(ge=MIN_RECT_SIZE)
    height: float = Field(ge=MIN_RECT_SIZE)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def overflows(self) -> bool:
        """True if the rectangle reaches past the right or bottom image edge."""
        return self.right > 100 + 1e-9 or self.bottom > 100 + 1e-9

    def contains(self, point: Point) -> bool:
        """Whether ``point`` lies inside the rectangle (edges inclusive)."""
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom


class ElementBounds(BaseModel):
    """Rendered bounding box of an element, in client (screen) pixels."""

    left: float
    top: float
    width: float
    height: float


def point_from_pointer(client_x: float, client_y: float, bounds: ElementBounds) -> Point:
    """Map a pointer position to percent coordinates of ``bounds``.

    Both axes are clamped to [0, 100]; a pointer outside the element lands on
    its nearest edge. An element with no rendered size maps everything to 0.
    """
    if bounds.width <= 0 or bounds.height <= 0:
        return Point(x=0, y=0)
    x = clamp((client_x - bounds.left) / bounds.width * 100, 0, 100)
    y = clamp((client_y - bounds.top) / bounds.height * 100, 0, 100)
    return Point(x=x, y=y)


def rect_from_drag(start: Point, current: Point) -> AreaRect:
    """Rectangle spanned by a drag from ``start`` to ``current``.

    The drag direction does not matter. Width and height never drop below
    ``MIN_RECT_SIZE``; there is no upper clamp.
    """
    return AreaRect(
        x=min(start.x, current.x),
        y=min(start.y, current.y),
        width=max(MIN_RECT_SIZE, abs(current.x - start.x)),
        height=max(MIN_RECT_SIZE, abs(current.y - start.y)),
    )
