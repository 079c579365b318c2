"""Listing helpers for the overview screens: sorting and availability summaries."""

from __future__ import annotations

from enum import Enum
from typing import Sequence, TypeVar

from plan_overlay.models.building import Building, Floor, UnitStatus
from plan_overlay.models.parking import ParkingConfig

EntityT = TypeVar("EntityT", Building, ParkingConfig)


class SortOption(str, Enum):
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"


def sort_entities(items: Sequence[EntityT], option: SortOption | str) -> list[EntityT]:
    """Sorted copy of ``items``; names compare case-insensitively."""
    option = SortOption(option)
    if option is SortOption.DATE_DESC:
        return sorted(items, key=lambda e: e.created_at or 0, reverse=True)
    if option is SortOption.DATE_ASC:
        return sorted(items, key=lambda e: e.created_at or 0)
    if option is SortOption.NAME_ASC:
        return sorted(items, key=lambda e: e.name.casefold())
    return sorted(items, key=lambda e: e.name.casefold(), reverse=True)


def floor_summary(floor: Floor) -> dict:
    """Available/total apartments on a floor."""
    return {
        "floor": floor.floor_number,
        "section": floor.section,
        "available": floor.available_count,
        "total": len(floor.apartments),
    }


def section_summary(parking: ParkingConfig, section_index: int) -> dict:
    """Available/total spaces in one parking section."""
    spaces = parking.spaces_in_section(section_index)
    return {
        "section": section_index + 1,
        "available": sum(1 for s in spaces if s.status is UnitStatus.AVAILABLE),
        "total": len(spaces),
    }
