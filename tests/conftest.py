"""Shared fixtures: in-memory store, repositories and sample entities."""

import pytest

from plan_overlay.generators import (
    ApartmentDraft,
    BuildingForm,
    FloorDraft,
    ParkingForm,
    SectionDraft,
)
from plan_overlay.models import AreaRect
from plan_overlay.repositories import BuildingRepository, ParkingRepository
from plan_overlay.store import EntityStore, MemoryStore


@pytest.fixture
def backend():
    return MemoryStore()


@pytest.fixture
def store(backend):
    return EntityStore(backend)


@pytest.fixture
def building_repo(store):
    return BuildingRepository(store)


@pytest.fixture
def parking_repo(store):
    return ParkingRepository(store)


def make_building_form(name: str = "Tower A", floor_count: int = 2) -> BuildingForm:
    return BuildingForm(
        name=name,
        floor_count=floor_count,
        image_url="data:image/png;base64,AAAA",
        floors={
            fn: FloorDraft(apartments=[ApartmentDraft(area=50 + i) for i in range(3)])
            for fn in range(1, floor_count + 1)
        },
    )


def make_parking_form(name: str = "Garage", counts: tuple[int, ...] = (3, 2)) -> ParkingForm:
    return ParkingForm(
        name=name,
        overview_image_url="data:image/png;base64,BBBB",
        sections=[
            SectionDraft(
                area=AreaRect(x=10 * i, y=10, width=10, height=10),
                plan_image_url=f"data:image/png;base64,P{i}",
                space_count=count,
            )
            for i, count in enumerate(counts)
        ],
    )
