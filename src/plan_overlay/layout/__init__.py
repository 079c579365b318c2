"""Default layouts: marker grid and generated floor strips."""

from plan_overlay.layout.dots import (
    DOT_MARGIN,
    default_dot_position,
    resolve_dot_position,
)
from plan_overlay.layout.strips import (
    floor_button_shapes,
    floor_strips,
    valid_floor_bounds,
)

__all__ = [
    "DOT_MARGIN",
    "default_dot_position",
    "resolve_dot_position",
    "floor_button_shapes",
    "floor_strips",
    "valid_floor_bounds",
]
