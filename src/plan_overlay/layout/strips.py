"""Generated floor strips for buildings without drawn floor buttons.

A strip is a full-width rectangle across the facade image. Boundaries come
from the split tool: distances from the image top, ascending, ending in 100.
Read top to bottom, the first strip belongs to the top floor and the last one
(which ends at 100) to floor 1.
"""

from __future__ import annotations

from plan_overlay.models.building import Building
from plan_overlay.models.geometry import MIN_RECT_SIZE, AreaRect


def valid_floor_bounds(bounds: list[float] | None, floor_count: int) -> bool:
    """Whether ``bounds`` can split an image into ``floor_count`` strips."""
    if not bounds or len(bounds) != floor_count:
        return False
    if abs(bounds[-1] - 100) > 1e-9:
        return False
    previous = 0.0
    for value in bounds:
        if value <= previous:
            return False
        previous = value
    return True


def _strip(top: float, bottom: float) -> AreaRect:
    return AreaRect(x=0, y=top, width=100, height=max(MIN_RECT_SIZE, bottom - top))


def floor_strips(
    floor_count: int, bounds: list[float] | None = None
) -> dict[int, AreaRect]:
    """Strip rectangle per floor number (1..floor_count).

    Bounds that do not fit ``floor_count`` are ignored and the image is split
    into equal strips instead.
    """
    n = max(1, floor_count)
    strips: dict[int, AreaRect] = {}
    if valid_floor_bounds(bounds, n):
        top = 0.0
        for k, bottom in enumerate(bounds):
            strips[n - k] = _strip(top, bottom)
            top = bottom
    else:
        height = 100 / n
        for k in range(n):
            strips[n - k] = _strip(k * height, (k + 1) * height)
    return dict(sorted(strips.items()))


def floor_button_shapes(building: Building) -> dict[int, AreaRect]:
    """Clickable shape per floor: the drawn rectangle, else the generated strip."""
    strips = floor_strips(building.floor_count, building.floor_bounds_percent)
    shapes: dict[int, AreaRect] = {}
    for floor in building.floors:
        shape = floor.area_percent or strips.get(floor.floor_number)
        if shape is not None:
            shapes[floor.floor_number] = shape
    return shapes
