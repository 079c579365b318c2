"""Default marker layout for units without a stored position."""

from __future__ import annotations

import math

from plan_overlay.models.geometry import Point

# Margin (%) kept free on every side of the plan image.
DOT_MARGIN = 10.0


def default_dot_position(index: int, total: int) -> Point:
    """Grid position of marker ``index`` (0-based) out of ``total``.

    Markers are laid out on a near-square grid (``cols = ceil(sqrt(total))``)
    inside the margin box, row by row. A single column or row is centered at
    50%. ``index`` is clamped to the valid range and ``total`` below 1 counts
    as 1, so the result is always a point inside the image.

    The function is pure: renderers and stored fallbacks must agree on it.
    """
    n = max(1, total)
    i = max(0, min(index, n - 1))
    span = 100 - 2 * DOT_MARGIN
    cols = math.ceil(math.sqrt(n))
    rows = math.ceil(n / cols)
    col = i % cols
    row = i // cols
    x = DOT_MARGIN + (col / (cols - 1)) * span if cols > 1 else 50.0
    y = DOT_MARGIN + (row / (rows - 1)) * span if rows > 1 else 50.0
    return Point(x=x, y=y)


def resolve_dot_position(dot_position: Point | None, index: int, total: int) -> Point:
    """Stored position if there is one, else the grid default."""
    if dot_position is not None:
        return dot_position
    return default_dot_position(index, total)
