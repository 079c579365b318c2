"""Building model: Building → Floor → Apartment.

Floors are 1-based (1 = ground). Each floor keeps a derived
``available_count`` that must match its apartments; it is recomputed when a
floor is built and on every repository write, never by the display layer.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, field_validator, model_validator

from plan_overlay.models.base import EntityModel
from plan_overlay.models.geometry import AreaRect, Point


class UnitStatus(str, Enum):
    """Sale/occupancy status shared by apartments and parking spaces."""

    AVAILABLE = "available"
    IN_NEGOTIATION = "in_negotiation"
    SOLD = "sold"
    RESERVED = "reserved"  # legacy, read-only


# Statuses an operator can pick; the legacy value is never offered.
EDITABLE_STATUSES: tuple[UnitStatus, ...] = (
    UnitStatus.AVAILABLE,
    UnitStatus.IN_NEGOTIATION,
    UnitStatus.SOLD,
)

STATUS_LABELS: dict[UnitStatus, str] = {
    UnitStatus.AVAILABLE: "Available",
    UnitStatus.IN_NEGOTIATION: "In negotiation",
    UnitStatus.SOLD: "Sold",
}


def normalize_status(status: UnitStatus | str) -> UnitStatus:
    """Map legacy ``reserved`` to ``in_negotiation``; other values pass through.

    Raises ValueError for strings that are not a known status.
    """
    status = UnitStatus(status)
    if status is UnitStatus.RESERVED:
        return UnitStatus.IN_NEGOTIATION
    return status


class Apartment(EntityModel):
    """A sellable unit on one floor."""

    id: str
    label: str = Field(description="Display label, e.g. 'B3-1'")
    floor: int = Field(ge=1)
    section: str
    area: float = Field(default=0.0, ge=0, description="Area in m²")
    status: UnitStatus = UnitStatus.AVAILABLE
    rooms: str | None = Field(default=None, description="Room layout, e.g. '2+1'")
    dot_position: Point | None = Field(
        default=None,
        description="Marker position on the floor plan; grid default when unset",
    )

    @property
    def display_status(self) -> UnitStatus:
        return normalize_status(self.status)


def count_available(apartments: list[Apartment]) -> int:
    """Number of apartments whose status is exactly ``available``."""
    return sum(1 for a in apartments if a.status is UnitStatus.AVAILABLE)


class Floor(EntityModel):
    """One floor of a building and the apartments on it."""

    floor_number: int = Field(ge=1)
    section: str
    available_count: int = 0
    apartments: list[Apartment] = Field(default_factory=list)
    floor_plan_image_url: str | None = None
    area_percent: AreaRect | None = Field(
        default=None,
        description="Drawn button on the building image; generated strip when unset",
    )

    @model_validator(mode="after")
    def sync_available_count(self) -> Floor:
        self.available_count = count_available(self.apartments)
        return self

    def get_apartment(self, apartment_id: str) -> Apartment | None:
        """Find an apartment by id."""
        return next((a for a in self.apartments if a.id == apartment_id), None)

    def get_apartment_by_label(self, label: str) -> Apartment | None:
        return next((a for a in self.apartments if a.label == label), None)

    def with_apartments(self, apartments: list[Apartment]) -> Floor:
        """Copy of this floor holding ``apartments``, with the count recomputed."""
        return self.model_copy(
            update={
                "apartments": apartments,
                "available_count": count_available(apartments),
            }
        )

    def recounted(self) -> Floor:
        return self.with_apartments(list(self.apartments))


class Building(EntityModel):
    """A building: facade image, floors and optional floor geometry."""

    id: str
    name: str
    section_label: str = "A"
    floor_count: int = Field(ge=1)
    image_url: str | None = None
    floors: list[Floor] = Field(default_factory=list)
    floor_bounds_percent: list[float] | None = Field(
        default=None,
        description="Boundary list from the split tool, ending in 100",
    )
    created_at: int = Field(default=0, description="Creation time, ms since epoch")

    @field_validator("floors")
    @classmethod
    def unique_floor_numbers(cls, v: list[Floor]) -> list[Floor]:
        numbers = [f.floor_number for f in v]
        if len(set(numbers)) != len(numbers):
            raise ValueError(f"Duplicate floor numbers: {sorted(numbers)}")
        return v

    def get_floor(self, floor_number: int) -> Floor | None:
        """Find a floor by its number."""
        return next((f for f in self.floors if f.floor_number == floor_number), None)

    @property
    def uses_drawn_buttons(self) -> bool:
        """True if at least one floor has a drawn button rectangle."""
        return any(f.area_percent is not None for f in self.floors)

    @property
    def apartment_count(self) -> int:
        return sum(len(f.apartments) for f in self.floors)

    @property
    def available_count(self) -> int:
        return sum(f.available_count for f in self.floors)
