"""Typed repositories over the entity store."""

from plan_overlay.repositories.base import EntityRepository, normalize_name
from plan_overlay.repositories.buildings import BuildingRepository
from plan_overlay.repositories.parkings import ParkingRepository

__all__ = [
    "EntityRepository",
    "normalize_name",
    "BuildingRepository",
    "ParkingRepository",
]
