"""Parking repository: CRUD plus space status/marker edits."""

from __future__ import annotations

import logging

from plan_overlay.models.building import UnitStatus, normalize_status
from plan_overlay.models.geometry import Point
from plan_overlay.models.parking import ParkingConfig
from plan_overlay.repositories.base import EntityRepository
from plan_overlay.store.entity_store import PARKINGS_KEY

logger = logging.getLogger(__name__)


class ParkingRepository(EntityRepository[ParkingConfig]):
    key = PARKINGS_KEY
    model = ParkingConfig

    def _update_space(
        self, parking_id: str, space_id: str, changes: dict
    ) -> ParkingConfig | None:
        parking = self.get_by_id(parking_id)
        if parking is None or parking.get_space(space_id) is None:
            logger.info("Space %s of parking %s not found, nothing to update", space_id, parking_id)
            return None
        spaces = [
            s.model_copy(update=changes) if s.id == space_id else s
            for s in parking.spaces
        ]
        return self.save(parking.model_copy(update={"spaces": spaces}))

    def update_space_status(
        self, parking_id: str, space_id: str, status: UnitStatus | str
    ) -> ParkingConfig | None:
        """Set a space's status. Returns the saved parking or None if not found."""
        return self._update_space(parking_id, space_id, {"status": normalize_status(status)})

    def update_space_dot_position(
        self, parking_id: str, space_id: str, point: Point
    ) -> ParkingConfig | None:
        """Store a new marker position for a space."""
        return self._update_space(parking_id, space_id, {"dot_position": point})
