"""Building repository: CRUD plus apartment status/marker edits."""

from __future__ import annotations

import logging

from plan_overlay.models.building import (
    Apartment,
    Building,
    Floor,
    UnitStatus,
    normalize_status,
)
from plan_overlay.models.geometry import Point
from plan_overlay.repositories.base import EntityRepository
from plan_overlay.store.entity_store import BUILDINGS_KEY

logger = logging.getLogger(__name__)


class BuildingRepository(EntityRepository[Building]):
    key = BUILDINGS_KEY
    model = Building

    def _prepare(self, entity: Building) -> Building:
        # available_count is derived; never trust the caller's value
        return entity.model_copy(update={"floors": [f.recounted() for f in entity.floors]})

    def get_floor(self, building_id: str, floor_number: int) -> Floor | None:
        building = self.get_by_id(building_id)
        if building is None:
            return None
        return building.get_floor(floor_number)

    def _update_apartment(
        self,
        building_id: str,
        floor_number: int,
        apartment_id: str,
        changes: dict,
    ) -> Building | None:
        building = self.get_by_id(building_id)
        if building is None:
            logger.info("Building %s not found, nothing to update", building_id)
            return None
        floor = building.get_floor(floor_number)
        if floor is None or floor.get_apartment(apartment_id) is None:
            logger.info(
                "Apartment %s not found on floor %s of %s, nothing to update",
                apartment_id, floor_number, building_id,
            )
            return None

        floors: list[Floor] = []
        for f in building.floors:
            if f.floor_number != floor_number:
                floors.append(f)
                continue
            apartments: list[Apartment] = [
                a.model_copy(update=changes) if a.id == apartment_id else a
                for a in f.apartments
            ]
            floors.append(f.with_apartments(apartments))
        return self.save(building.model_copy(update={"floors": floors}))

    def update_apartment_status(
        self,
        building_id: str,
        floor_number: int,
        apartment_id: str,
        status: UnitStatus | str,
    ) -> Building | None:
        """Set an apartment's status and recount the floor's available units.

        Returns the saved building, or None if the building, floor or
        apartment does not exist.
        """
        return self._update_apartment(
            building_id, floor_number, apartment_id, {"status": normalize_status(status)}
        )

    def update_apartment_dot_position(
        self,
        building_id: str,
        floor_number: int,
        apartment_id: str,
        point: Point,
    ) -> Building | None:
        """Store a new marker position for an apartment."""
        return self._update_apartment(
            building_id, floor_number, apartment_id, {"dot_position": point}
        )
