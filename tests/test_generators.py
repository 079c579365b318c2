"""Tests for building and parking generation from edit forms."""

from plan_overlay.generators import (
    ApartmentDraft,
    BuildingForm,
    FloorDraft,
    ParkingForm,
    SectionDraft,
    build_building,
    build_parking,
)
from plan_overlay.generators.buildings import apartment_label, section_label_for
from plan_overlay.models import AreaRect, Point, UnitStatus

from conftest import make_building_form, make_parking_form


class TestBuildingGeneration:
    def test_labels_and_counts(self):
        b = build_building(make_building_form("tower a", 2), "b1", now=123)
        assert b.section_label == "T"
        assert b.floor_count == 2
        assert [f.floor_number for f in b.floors] == [1, 2]
        assert [a.label for a in b.get_floor(2).apartments] == ["T2-1", "T2-2", "T2-3"]
        assert all(f.available_count == 3 for f in b.floors)
        assert b.created_at == 123

    def test_section_label(self):
        assert section_label_for("  zenith") == "Z"
        assert section_label_for("   ") == "A"
        assert apartment_label("B", 12, 4) == "B12-4"

    def test_floor_count_clamped(self):
        form = make_building_form().model_copy(update={"floor_count": 500})
        assert build_building(form, "b1").floor_count == 50
        form = make_building_form().model_copy(update={"floor_count": 0})
        assert build_building(form, "b1").floor_count == 1

    def test_apartments_clamped(self):
        form = BuildingForm(
            name="X", floor_count=1,
            floors={1: FloorDraft(apartments=[ApartmentDraft(area=1)] * 120)},
        )
        assert len(build_building(form, "b1").get_floor(1).apartments) == 99

    def test_negative_area_becomes_zero(self):
        form = BuildingForm(
            name="X", floor_count=1,
            floors={1: FloorDraft(apartments=[ApartmentDraft(area=-5)])},
        )
        assert build_building(form, "b1").get_floor(1).apartments[0].area == 0

    def test_blank_name_defaults(self):
        b = build_building(BuildingForm(name="  "), "b1")
        assert b.name == "Unnamed Building"
        assert b.section_label == "A"

    def test_edit_keeps_history_by_label(self):
        original = build_building(make_building_form(), "b1", now=10)
        apt = original.get_floor(1).apartments[1]
        floor = original.get_floor(1).with_apartments([
            original.get_floor(1).apartments[0],
            apt.model_copy(update={"status": UnitStatus.SOLD, "dot_position": Point(x=5, y=5)}),
            original.get_floor(1).apartments[2],
        ])
        edited = original.model_copy(update={"floors": [floor, original.floors[1]]})

        form = BuildingForm.from_building(edited).model_copy(update={"floor_count": 3})
        rebuilt = build_building(form, "b1", existing=edited, now=999)
        kept = rebuilt.get_floor(1).get_apartment_by_label(apt.label)
        assert kept.id == apt.id
        assert kept.status is UnitStatus.SOLD
        assert kept.dot_position == Point(x=5, y=5)
        assert rebuilt.get_floor(1).available_count == 2
        assert rebuilt.get_floor(3).apartments == []
        assert rebuilt.created_at == 10

    def test_shrinking_floor_drops_apartments(self):
        original = build_building(make_building_form(), "b1")
        form = BuildingForm.from_building(original)
        form.floors[1] = form.floors[1].model_copy(update={"apartments": form.floors[1].apartments[:1]})
        rebuilt = build_building(form, "b1", existing=original)
        assert [a.label for a in rebuilt.get_floor(1).apartments] == ["T1-1"]

    def test_bounds_persisted(self):
        form = make_building_form().with_floor_bounds([40.0, 100.0])
        assert build_building(form, "b1").floor_bounds_percent == [40.0, 100.0]


class TestParkingGeneration:
    def test_per_section_labels(self):
        p = build_parking(make_parking_form(counts=(3, 2)), "p1", now=1)
        assert [s.label for s in p.spaces_in_section(0)] == ["P1", "P2", "P3"]
        assert [s.label for s in p.spaces_in_section(1)] == ["P1", "P2"]
        assert all(s.section_id == p.sections[s.section_index].id for s in p.spaces)
        assert all(s.dot_position is None for s in p.spaces)

    def test_space_count_clamped(self):
        form = make_parking_form(counts=(500,))
        p = build_parking(form, "p1")
        assert p.sections[0].space_count == 200
        assert len(p.spaces) == 200

    def test_resave_keeps_status(self):
        original = build_parking(make_parking_form(counts=(3, 2)), "p1", now=5)
        target = original.spaces_in_section(0)[1]
        spaces = [
            s.model_copy(update={"status": UnitStatus.SOLD}) if s.id == target.id else s
            for s in original.spaces
        ]
        stored = original.model_copy(update={"spaces": spaces})

        rebuilt = build_parking(ParkingForm.from_parking(stored), "p1", existing=stored)
        p2 = next(s for s in rebuilt.spaces_in_section(0) if s.label == "P2")
        assert p2.id == target.id
        assert p2.status is UnitStatus.SOLD
        other_p2 = next(s for s in rebuilt.spaces_in_section(1) if s.label == "P2")
        assert other_p2.status is UnitStatus.AVAILABLE
        assert rebuilt.created_at == 5

    def test_section_ids_stable_across_edits(self):
        original = build_parking(make_parking_form(), "p1")
        form = ParkingForm.from_parking(original)
        assert [s.id for s in build_parking(form, "p1", existing=original).sections] == [
            s.id for s in original.sections
        ]

    def test_new_section_gets_new_id(self):
        original = build_parking(make_parking_form(counts=(1,)), "p1")
        form = ParkingForm.from_parking(original)
        form = form.model_copy(update={"sections": [
            *form.sections,
            SectionDraft(area=AreaRect(x=50, y=50, width=10, height=10), plan_image_url="x", space_count=1),
        ]})
        rebuilt = build_parking(form, "p1", existing=original)
        assert rebuilt.sections[0].id == original.sections[0].id
        assert rebuilt.sections[1].id != original.sections[0].id

    def test_blank_name_defaults(self):
        assert build_parking(ParkingForm(name=""), "p1").name == "Unnamed Parking"


class TestForms:
    def test_with_floor_areas(self):
        rect = AreaRect(x=0, y=0, width=10, height=10)
        form = make_building_form(floor_count=2).with_floor_areas({1: rect})
        assert form.draft(1).area_percent == rect
        assert form.draft(2).area_percent is None
        assert len(form.draft(1).apartments) == 3

    def test_with_section_areas_keeps_drafts(self):
        form = make_parking_form(counts=(3, 2))
        new_rect = AreaRect(x=80, y=80, width=5, height=5)
        updated = form.with_section_areas({1: form.sections[0].area, 2: new_rect, 3: new_rect})
        assert [s.space_count for s in updated.sections] == [3, 2, 0]
        assert updated.sections[1].area == new_rect
        assert form.section_areas[2] == form.sections[1].area
