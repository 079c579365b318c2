"""Validation of edit forms before anything is written.

Validators collect every problem instead of stopping at the first one, so a
caller can show them all at once. Only ``severity == "error"`` blocks a save;
warnings describe input that the generators will normalize.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from plan_overlay.generators.forms import BuildingForm, ParkingForm
from plan_overlay.layout.strips import valid_floor_bounds
from plan_overlay.models.building import Building
from plan_overlay.models.parking import ParkingConfig
from plan_overlay.repositories.base import normalize_name


@dataclass
class ValidationError:
    """A single validation issue."""

    severity: str  # "error" | "warning"
    element_type: str
    element_id: str
    message: str


class FormValidationError(ValueError):
    """Raised when a form has blocking errors; nothing was saved."""

    def __init__(self, errors: list[ValidationError]) -> None:
        self.errors = errors
        super().__init__("; ".join(e.message for e in errors))


def blocking(errors: Iterable[ValidationError]) -> list[ValidationError]:
    return [e for e in errors if e.severity == "error"]


def _check_name(
    name: str,
    others: Iterable[Building | ParkingConfig],
    exclude_id: str | None,
    element_type: str,
) -> list[ValidationError]:
    normalized = normalize_name(name)
    if not normalized:
        return [ValidationError("error", element_type, "", f"{element_type} name is required")]
    for other in others:
        if other.id != exclude_id and normalize_name(other.name) == normalized:
            return [
                ValidationError(
                    "error",
                    element_type,
                    other.id,
                    f"A {element_type.lower()} named '{other.name}' already exists",
                )
            ]
    return []


def validate_building_form(
    form: BuildingForm,
    others: Iterable[Building],
    building_id: str | None = None,
) -> list[ValidationError]:
    """Check a building form against itself and the stored buildings."""
    errors = _check_name(form.name, others, building_id, "Building")

    floor_numbers = range(1, max(1, form.floor_count) + 1)
    drawn = [fn for fn in floor_numbers if form.draft(fn).area_percent is not None]
    if drawn and len(drawn) != len(floor_numbers):
        missing = [fn for fn in floor_numbers if fn not in drawn]
        errors.append(
            ValidationError(
                "error",
                "Floor",
                ",".join(str(fn) for fn in missing),
                f"Floor buttons missing for floors {missing}",
            )
        )

    bounds = form.floor_bounds_percent
    if bounds is not None and not valid_floor_bounds(bounds, form.floor_count):
        errors.append(
            ValidationError(
                "error",
                "Building",
                building_id or "",
                (
                    f"Floor boundaries {bounds} do not split the image into "
                    f"{form.floor_count} floors (need {form.floor_count} "
                    "increasing values ending in 100)"
                ),
            )
        )

    for fn, draft in sorted(form.floors.items()):
        for i, apt in enumerate(draft.apartments, start=1):
            if apt.area < 0:
                errors.append(
                    ValidationError(
                        "warning",
                        "Apartment",
                        f"{fn}-{i}",
                        f"Apartment {i} on floor {fn} has negative area {apt.area}, using 0",
                    )
                )
    return errors


def validate_parking_form(
    form: ParkingForm,
    others: Iterable[ParkingConfig],
    parking_id: str | None = None,
) -> list[ValidationError]:
    """Check a parking form against itself and the stored parkings."""
    errors = _check_name(form.name, others, parking_id, "Parking")

    if not form.sections:
        errors.append(
            ValidationError("error", "ParkingSection", "", "Draw at least one section")
        )
    for number, section in enumerate(form.sections, start=1):
        if not section.plan_image_url:
            errors.append(
                ValidationError(
                    "error",
                    "ParkingSection",
                    section.id or str(number),
                    f"Section {number} has no plan image",
                )
            )
        if section.space_count <= 0:
            errors.append(
                ValidationError(
                    "error",
                    "ParkingSection",
                    section.id or str(number),
                    f"Section {number} needs at least one space",
                )
            )
    return errors
