"""Tests for listing helpers."""

import pytest

from plan_overlay.generators import build_building, build_parking
from plan_overlay.queries import SortOption, floor_summary, section_summary, sort_entities

from conftest import make_building_form, make_parking_form


@pytest.fixture
def buildings():
    return [
        build_building(make_building_form("beta"), "b1", now=200),
        build_building(make_building_form("Alpha"), "b2", now=300),
        build_building(make_building_form("Gamma"), "b3", now=100),
    ]


class TestSort:
    def test_date_desc(self, buildings):
        assert [b.id for b in sort_entities(buildings, SortOption.DATE_DESC)] == ["b2", "b1", "b3"]

    def test_date_asc(self, buildings):
        assert [b.id for b in sort_entities(buildings, "date-asc")] == ["b3", "b1", "b2"]

    def test_name_case_insensitive(self, buildings):
        assert [b.name for b in sort_entities(buildings, "name-asc")] == ["Alpha", "beta", "Gamma"]
        assert [b.name for b in sort_entities(buildings, "name-desc")] == ["Gamma", "beta", "Alpha"]

    def test_input_untouched(self, buildings):
        sort_entities(buildings, "name-asc")
        assert [b.id for b in buildings] == ["b1", "b2", "b3"]

    def test_unknown_option(self, buildings):
        with pytest.raises(ValueError):
            sort_entities(buildings, "size")


class TestSummaries:
    def test_floor(self):
        b = build_building(make_building_form("Tower"), "b1")
        assert floor_summary(b.get_floor(2)) == {"floor": 2, "section": "T", "available": 3, "total": 3}

    def test_section(self):
        p = build_parking(make_parking_form(counts=(3, 2)), "p1")
        assert section_summary(p, 1) == {"section": 2, "available": 2, "total": 2}
        assert section_summary(p, 5) == {"section": 6, "available": 0, "total": 0}
