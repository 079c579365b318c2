"""Build a ParkingConfig from an edit form.

Sections keep their stable id (from the form draft, else from the stored
section at the same position). Spaces are regenerated as ``P1..Pn`` per
section; a space whose label already existed in the same section keeps its
id, status and marker position.
"""

from __future__ import annotations

from plan_overlay.generators.forms import ParkingForm
from plan_overlay.models.building import UnitStatus
from plan_overlay.models.ids import generate_entity_id, now_ms, space_id
from plan_overlay.models.parking import ParkingConfig, ParkingSection, ParkingSpace

MAX_SPACES_PER_SECTION = 200
DEFAULT_PARKING_NAME = "Unnamed Parking"


def space_label(position: int) -> str:
    return f"P{position}"


def _previous_spaces(existing: ParkingConfig | None) -> dict[tuple[str, str], ParkingSpace]:
    """Stored spaces keyed by (section id, label)."""
    if existing is None:
        return {}
    spaces: dict[tuple[str, str], ParkingSpace] = {}
    for space in existing.spaces:
        index = existing.section_of(space)
        if index is None:
            continue
        spaces.setdefault((existing.sections[index].id, space.label), space)
    return spaces


def build_parking(
    form: ParkingForm,
    parking_id: str,
    existing: ParkingConfig | None = None,
    now: int | None = None,
    max_spaces: int = MAX_SPACES_PER_SECTION,
) -> ParkingConfig:
    """Create the full ParkingConfig described by ``form``."""
    sections: list[ParkingSection] = []
    for index, draft in enumerate(form.sections):
        if draft.id:
            section_id = draft.id
        elif existing is not None and index < len(existing.sections):
            section_id = existing.sections[index].id
        else:
            section_id = generate_entity_id("section")
        sections.append(
            ParkingSection(
                id=section_id,
                area=draft.area,
                plan_image_url=draft.plan_image_url,
                space_count=max(0, min(max_spaces, draft.space_count)),
            )
        )

    previous = _previous_spaces(existing)
    spaces: list[ParkingSpace] = []
    for index, section in enumerate(sections):
        for n in range(1, section.space_count + 1):
            label = space_label(n)
            old = previous.get((section.id, label))
            spaces.append(
                ParkingSpace(
                    id=old.id if old else space_id(parking_id, section.id, label),
                    label=label,
                    status=old.status if old else UnitStatus.AVAILABLE,
                    section_index=index,
                    section_id=section.id,
                    dot_position=old.dot_position if old else None,
                )
            )

    if existing is not None:
        created_at = existing.created_at
    else:
        created_at = now if now is not None else now_ms()

    return ParkingConfig(
        id=parking_id,
        name=form.name.strip() or DEFAULT_PARKING_NAME,
        overview_image_url=form.overview_image_url,
        sections=sections,
        spaces=spaces,
        created_at=created_at,
    )
