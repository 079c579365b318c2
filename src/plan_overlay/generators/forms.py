"""Edit forms: what the create/edit flows collect before an entity is built.

Forms hold only operator input (names, counts, areas, drawn geometry). The
generators turn a form into a full entity, deriving labels, ids and counts.
``from_building`` / ``from_parking`` pre-fill a form for editing.
"""

from __future__ import annotations

from pydantic import Field

from plan_overlay.models.base import EntityModel
from plan_overlay.models.building import Building
from plan_overlay.models.geometry import AreaRect
from plan_overlay.models.parking import ParkingConfig


class ApartmentDraft(EntityModel):
    area: float = 0.0
    rooms: str | None = None


class FloorDraft(EntityModel):
    apartments: list[ApartmentDraft] = Field(default_factory=list)
    floor_plan_image_url: str | None = None
    area_percent: AreaRect | None = None


class BuildingForm(EntityModel):
    name: str = ""
    floor_count: int = 1
    image_url: str | None = None
    floors: dict[int, FloorDraft] = Field(default_factory=dict)
    floor_bounds_percent: list[float] | None = None

    @classmethod
    def from_building(cls, building: Building) -> BuildingForm:
        """Form pre-filled from a stored building."""
        return cls(
            name=building.name,
            floor_count=building.floor_count,
            image_url=building.image_url,
            floors={
                f.floor_number: FloorDraft(
                    apartments=[
                        ApartmentDraft(area=a.area, rooms=a.rooms) for a in f.apartments
                    ],
                    floor_plan_image_url=f.floor_plan_image_url,
                    area_percent=f.area_percent,
                )
                for f in building.floors
            },
            floor_bounds_percent=building.floor_bounds_percent,
        )

    def draft(self, floor_number: int) -> FloorDraft:
        return self.floors.get(floor_number) or FloorDraft()

    def with_floor_areas(self, areas: dict[int, AreaRect]) -> BuildingForm:
        """Apply the floor button tool's result to floors 1..floor_count.

        Floors missing from ``areas`` lose any previous rectangle.
        """
        floors = dict(self.floors)
        for fn in range(1, max(1, self.floor_count) + 1):
            floors[fn] = self.draft(fn).model_copy(update={"area_percent": areas.get(fn)})
        return self.model_copy(update={"floors": floors})

    def with_floor_bounds(self, bounds: list[float] | None) -> BuildingForm:
        """Apply the boundary tool's result."""
        return self.model_copy(update={"floor_bounds_percent": bounds})


class SectionDraft(EntityModel):
    id: str | None = None
    area: AreaRect
    plan_image_url: str = ""
    space_count: int = 0


class ParkingForm(EntityModel):
    name: str = ""
    overview_image_url: str = ""
    sections: list[SectionDraft] = Field(default_factory=list)

    @classmethod
    def from_parking(cls, parking: ParkingConfig) -> ParkingForm:
        """Form pre-filled from a stored parking."""
        return cls(
            name=parking.name,
            overview_image_url=parking.overview_image_url,
            sections=[
                SectionDraft(
                    id=s.id,
                    area=s.area,
                    plan_image_url=s.plan_image_url,
                    space_count=s.space_count,
                )
                for s in parking.sections
            ],
        )

    @property
    def section_areas(self) -> dict[int, AreaRect]:
        """Section rectangles keyed by 1-based section number, for the area tool."""
        return {i + 1: s.area for i, s in enumerate(self.sections)}

    def with_section_areas(self, areas: dict[int, AreaRect]) -> ParkingForm:
        """Apply the section area tool's result.

        Sections are renumbered in ascending section-number order; section
        number ``n`` keeps the plan image, count and id of the draft that was
        at position ``n - 1``.
        """
        sections = []
        for number in sorted(areas):
            previous = self.sections[number - 1] if 0 < number <= len(self.sections) else None
            if previous is not None:
                sections.append(previous.model_copy(update={"area": areas[number]}))
            else:
                sections.append(SectionDraft(area=areas[number]))
        return self.model_copy(update={"sections": sections})
