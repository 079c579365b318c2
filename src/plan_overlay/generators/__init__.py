"""Entity generation from edit forms.

Pure functions that regenerate a Building or ParkingConfig from operator
input while carrying unit history (status, marker position) over by label.
"""

from plan_overlay.generators.forms import (
    ApartmentDraft,
    BuildingForm,
    FloorDraft,
    ParkingForm,
    SectionDraft,
)
from plan_overlay.generators.buildings import build_building
from plan_overlay.generators.parkings import build_parking

__all__ = [
    "ApartmentDraft",
    "BuildingForm",
    "FloorDraft",
    "ParkingForm",
    "SectionDraft",
    "build_building",
    "build_parking",
]
