"""Parking model: ParkingConfig → sections (drawn on the overview) → spaces.

Spaces point at their section twice: ``section_index`` (position in
``ParkingConfig.sections``, the stored layout) and ``section_id`` (the
section's stable id). Reordering sections goes through
``ParkingConfig.reorder_sections`` which rewrites every index from the ids.
"""

from __future__ import annotations

from pydantic import Field

from plan_overlay.models.base import EntityModel
from plan_overlay.models.building import UnitStatus, normalize_status
from plan_overlay.models.geometry import AreaRect, Point
from plan_overlay.models.ids import generate_entity_id


def _section_id() -> str:
    return generate_entity_id("section")


class ParkingSection(EntityModel):
    """A section drawn on the overview image, with its own plan image."""

    id: str = Field(default_factory=_section_id)
    area: AreaRect
    plan_image_url: str = ""
    space_count: int = Field(default=0, ge=0)


class ParkingSpace(EntityModel):
    """A single parking space, shown as a marker on its section's plan."""

    id: str
    label: str = Field(description="Per-section label, e.g. 'P3'")
    status: UnitStatus = UnitStatus.AVAILABLE
    section_index: int = Field(ge=0)
    section_id: str | None = None
    dot_position: Point | None = None

    @property
    def display_status(self) -> UnitStatus:
        return normalize_status(self.status)


class ParkingConfig(EntityModel):
    """A parking facility."""

    id: str
    name: str
    overview_image_url: str = ""
    sections: list[ParkingSection] = Field(default_factory=list)
    spaces: list[ParkingSpace] = Field(default_factory=list)
    created_at: int = 0

    def section_index_of(self, section_id: str) -> int | None:
        """Position of the section with ``section_id``, or None."""
        return next(
            (i for i, s in enumerate(self.sections) if s.id == section_id), None
        )

    def section_of(self, space: ParkingSpace) -> int | None:
        """Resolve the section index of ``space``, preferring its stable id."""
        if space.section_id is not None:
            index = self.section_index_of(space.section_id)
            if index is not None:
                return index
        if 0 <= space.section_index < len(self.sections):
            return space.section_index
        return None

    def spaces_in_section(self, section_index: int) -> list[ParkingSpace]:
        """Spaces belonging to a section, in stored order."""
        return [s for s in self.spaces if self.section_of(s) == section_index]

    def get_space(self, space_id: str) -> ParkingSpace | None:
        return next((s for s in self.spaces if s.id == space_id), None)

    def reorder_sections(self, order: list[int]) -> ParkingConfig:
        """Copy with sections rearranged; ``order[i]`` is the old index now at i.

        Every space's ``section_index`` is rewritten through the section ids.
        Raises ValueError if ``order`` is not a permutation of the indexes.
        """
        if sorted(order) != list(range(len(self.sections))):
            raise ValueError(
                f"Section order {order} is not a permutation of "
                f"0..{len(self.sections) - 1}"
            )
        sections = [self.sections[i] for i in order]
        new_index = {old: new for new, old in enumerate(order)}
        spaces = []
        for space in self.spaces:
            old = self.section_of(space)
            if old is None:
                spaces.append(space)
                continue
            spaces.append(
                space.model_copy(
                    update={
                        "section_index": new_index[old],
                        "section_id": self.sections[old].id,
                    }
                )
            )
        return self.model_copy(update={"sections": sections, "spaces": spaces})

    @property
    def available_count(self) -> int:
        return sum(1 for s in self.spaces if s.status is UnitStatus.AVAILABLE)
