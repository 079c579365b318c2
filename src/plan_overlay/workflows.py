"""Create/edit workflows: validate the whole form, then save once.

Validation runs on the fully assembled input before any write, so a rejected
form never leaves the store half-updated.
"""

from __future__ import annotations

import logging

from plan_overlay.config import Settings, get_settings
from plan_overlay.generators.buildings import build_building
from plan_overlay.generators.forms import BuildingForm, ParkingForm
from plan_overlay.generators.parkings import build_parking
from plan_overlay.models.building import Building
from plan_overlay.models.ids import generate_entity_id
from plan_overlay.models.parking import ParkingConfig
from plan_overlay.repositories.buildings import BuildingRepository
from plan_overlay.repositories.parkings import ParkingRepository
from plan_overlay.validators.forms import (
    FormValidationError,
    blocking,
    validate_building_form,
    validate_parking_form,
)

logger = logging.getLogger(__name__)


def save_building_form(
    repo: BuildingRepository,
    form: BuildingForm,
    building_id: str | None = None,
    settings: Settings | None = None,
) -> Building:
    """Create a building, or replace the one with ``building_id``.

    Raises:
        FormValidationError: the form has blocking errors; nothing is written.
    """
    settings = settings or get_settings()
    # Bounds and floor buttons are checked against the count that gets stored
    floor_count = max(1, min(settings.max_floor_count, form.floor_count))
    if floor_count != form.floor_count:
        logger.warning("Floor count %s clamped to %s", form.floor_count, floor_count)
        form = form.model_copy(update={"floor_count": floor_count})
    others = repo.all()
    errors = validate_building_form(form, others, building_id)
    for warning in errors:
        if warning.severity == "warning":
            logger.warning(warning.message)
    if blocking(errors):
        raise FormValidationError(blocking(errors))

    existing = next((b for b in others if b.id == building_id), None) if building_id else None
    building = build_building(
        form,
        building_id or generate_entity_id("building"),
        existing=existing,
        max_floors=settings.max_floor_count,
        max_apartments=settings.max_apartments_per_floor,
    )
    saved = repo.save(building)
    logger.info("%s building %s (%s)", "Updated" if existing else "Created", saved.id, saved.name)
    return saved


def save_parking_form(
    repo: ParkingRepository,
    form: ParkingForm,
    parking_id: str | None = None,
    settings: Settings | None = None,
) -> ParkingConfig:
    """Create a parking, or replace the one with ``parking_id``.

    Raises:
        FormValidationError: the form has blocking errors; nothing is written.
    """
    settings = settings or get_settings()
    others = repo.all()
    errors = blocking(validate_parking_form(form, others, parking_id))
    if errors:
        raise FormValidationError(errors)

    existing = next((p for p in others if p.id == parking_id), None) if parking_id else None
    parking = build_parking(
        form,
        parking_id or generate_entity_id("parking"),
        existing=existing,
        max_spaces=settings.max_spaces_per_section,
    )
    saved = repo.save(parking)
    logger.info("%s parking %s (%s)", "Updated" if existing else "Created", saved.id, saved.name)
    return saved
