"""Build a Building from an edit form.

Floors and apartments are regenerated from scratch on every save. An
apartment whose derived label (``<section><floor>-<n>``) already existed on
the same floor keeps its id, status and marker position; everything else is
new. Removing an early apartment therefore shifts every later label.
"""

from __future__ import annotations

from plan_overlay.generators.forms import BuildingForm, FloorDraft
from plan_overlay.models.building import Apartment, Building, Floor, UnitStatus
from plan_overlay.models.ids import apartment_id, now_ms

MAX_FLOOR_COUNT = 50
MAX_APARTMENTS_PER_FLOOR = 99
DEFAULT_BUILDING_NAME = "Unnamed Building"


def section_label_for(name: str) -> str:
    """First letter of the building name, upper-cased; ``A`` for blank names."""
    stripped = name.strip()
    return stripped[:1].upper() or "A"


def apartment_label(section: str, floor_number: int, position: int) -> str:
    return f"{section}{floor_number}-{position}"


def _build_floor(
    building_id: str,
    section: str,
    floor_number: int,
    draft: FloorDraft,
    previous: Floor | None,
    max_apartments: int,
) -> Floor:
    apartments: list[Apartment] = []
    for i, apt in enumerate(draft.apartments[:max_apartments], start=1):
        label = apartment_label(section, floor_number, i)
        old = previous.get_apartment_by_label(label) if previous else None
        apartments.append(
            Apartment(
                id=old.id if old else apartment_id(building_id, floor_number, i),
                label=label,
                floor=floor_number,
                section=section,
                area=max(0.0, apt.area),
                status=old.status if old else UnitStatus.AVAILABLE,
                rooms=apt.rooms if apt.rooms is not None else (old.rooms if old else None),
                dot_position=old.dot_position if old else None,
            )
        )
    return Floor(
        floor_number=floor_number,
        section=section,
        apartments=apartments,
        floor_plan_image_url=draft.floor_plan_image_url,
        area_percent=draft.area_percent,
    )


def build_building(
    form: BuildingForm,
    building_id: str,
    existing: Building | None = None,
    now: int | None = None,
    max_floors: int = MAX_FLOOR_COUNT,
    max_apartments: int = MAX_APARTMENTS_PER_FLOOR,
) -> Building:
    """Create the full Building described by ``form``.

    Args:
        form: Operator input.
        building_id: Id of the new building, or of the one being edited.
        existing: Stored version when editing; keeps ``created_at`` and the
            per-apartment history.
        now: Creation timestamp (ms) for new buildings; defaults to now.
        max_floors: Upper clamp for the floor count.
        max_apartments: Upper clamp for apartments per floor.

    Returns:
        A Building with ``floor_count`` floors numbered 1..floor_count.
    """
    floor_count = max(1, min(max_floors, form.floor_count))
    name = form.name.strip() or DEFAULT_BUILDING_NAME
    section = section_label_for(form.name)

    floors = [
        _build_floor(
            building_id,
            section,
            fn,
            form.draft(fn),
            existing.get_floor(fn) if existing else None,
            max_apartments,
        )
        for fn in range(1, floor_count + 1)
    ]

    if existing is not None:
        created_at = existing.created_at
    else:
        created_at = now if now is not None else now_ms()

    return Building(
        id=building_id,
        name=name,
        section_label=section,
        floor_count=floor_count,
        image_url=form.image_url or None,
        floors=floors,
        floor_bounds_percent=form.floor_bounds_percent,
        created_at=created_at,
    )
