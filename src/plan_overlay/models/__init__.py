"""Domain data models."""

from plan_overlay.models.ids import generate_entity_id, now_ms
from plan_overlay.models.geometry import (
    MIN_RECT_SIZE,
    AreaRect,
    ElementBounds,
    Point,
    point_from_pointer,
    rect_from_drag,
)
from plan_overlay.models.building import (
    Apartment,
    Building,
    Floor,
    UnitStatus,
    normalize_status,
)
from plan_overlay.models.parking import ParkingConfig, ParkingSection, ParkingSpace

__all__ = [
    "generate_entity_id",
    "now_ms",
    "MIN_RECT_SIZE",
    "AreaRect",
    "ElementBounds",
    "Point",
    "point_from_pointer",
    "rect_from_drag",
    "Apartment",
    "Building",
    "Floor",
    "UnitStatus",
    "normalize_status",
    "ParkingConfig",
    "ParkingSection",
    "ParkingSpace",
]
