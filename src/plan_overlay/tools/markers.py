"""Drag-to-reposition tool for unit markers on a plan image.

Runs against already persisted units (apartments on a floor plan, spaces on
a section plan). While a marker is dragged its live position is held here
and only that marker renders from it; pointer-up writes the position back
through the repository. The drag state belongs to the tool instance, so two
plans can be edited side by side without interfering.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol, Sequence

from plan_overlay.layout.dots import resolve_dot_position
from plan_overlay.models.geometry import ElementBounds, Point, point_from_pointer
from plan_overlay.repositories.buildings import BuildingRepository
from plan_overlay.repositories.parkings import ParkingRepository

logger = logging.getLogger(__name__)


class Marker(Protocol):
    id: str
    dot_position: Point | None


class MarkerDragTool:
    """Moves one marker at a time over a plan whose on-screen box is ``bounds``.

    Args:
        bounds: Rendered box of the plan image (client pixels).
        load_markers: Returns the persisted markers in display order.
        commit: Persists a marker's new position.
    """

    def __init__(
        self,
        bounds: ElementBounds,
        load_markers: Callable[[], Sequence[Marker]],
        commit: Callable[[str, Point], object],
    ) -> None:
        self.bounds = bounds
        self._load_markers = load_markers
        self._commit = commit
        self.markers: list[Marker] = list(load_markers())
        self.dragging_id: str | None = None
        self.drag_position: Point | None = None

    def refresh(self) -> None:
        """Reload markers from the store."""
        self.markers = list(self._load_markers())

    def _index_of(self, marker_id: str) -> int | None:
        return next(
            (i for i, m in enumerate(self.markers) if m.id == marker_id), None
        )

    def stored_position(self, marker_id: str) -> Point | None:
        """Persisted position of a marker, or its grid default."""
        index = self._index_of(marker_id)
        if index is None:
            return None
        marker = self.markers[index]
        return resolve_dot_position(marker.dot_position, index, len(self.markers))

    def position_of(self, marker_id: str) -> Point | None:
        """Where to render a marker right now."""
        if marker_id == self.dragging_id and self.drag_position is not None:
            return self.drag_position
        return self.stored_position(marker_id)

    def positions(self) -> dict[str, Point]:
        return {m.id: self.position_of(m.id) for m in self.markers}

    def pointer_down(self, marker_id: str, from_status_control: bool = False) -> bool:
        """Start dragging ``marker_id``.

        Ignored when the press comes from the marker's embedded status
        control, when the marker is unknown, or while another drag runs.
        """
        if from_status_control or self.dragging_id is not None:
            return False
        position = self.stored_position(marker_id)
        if position is None:
            return False
        self.dragging_id = marker_id
        self.drag_position = position
        return True

    def pointer_move(self, client_x: float, client_y: float) -> None:
        """Track the pointer anywhere in the viewport while dragging."""
        if self.dragging_id is None:
            return
        self.drag_position = point_from_pointer(client_x, client_y, self.bounds)

    def pointer_up(self) -> Point | None:
        """Write the live position back and end the drag."""
        if self.dragging_id is None:
            return None
        marker_id = self.dragging_id
        position = self.drag_position or Point(x=50, y=50)
        self._commit(marker_id, position)
        logger.debug("Moved marker %s to (%.2f, %.2f)", marker_id, position.x, position.y)
        self.cancel()
        self.refresh()
        return position

    def cancel(self) -> None:
        """Drop the drag without writing anything."""
        self.dragging_id = None
        self.drag_position = None


def floor_marker_tool(
    repo: BuildingRepository,
    building_id: str,
    floor_number: int,
    bounds: ElementBounds,
) -> MarkerDragTool:
    """Marker tool for the apartments of one floor plan."""

    def load() -> list[Marker]:
        floor = repo.get_floor(building_id, floor_number)
        return list(floor.apartments) if floor else []

    def commit(apartment_id: str, point: Point) -> None:
        repo.update_apartment_dot_position(building_id, floor_number, apartment_id, point)

    return MarkerDragTool(bounds, load, commit)


def section_marker_tool(
    repo: ParkingRepository,
    parking_id: str,
    section_index: int,
    bounds: ElementBounds,
) -> MarkerDragTool:
    """Marker tool for the spaces of one parking section plan."""

    def load() -> list[Marker]:
        parking = repo.get_by_id(parking_id)
        return parking.spaces_in_section(section_index) if parking else []

    def commit(space_id: str, point: Point) -> None:
        repo.update_space_dot_position(parking_id, space_id, point)

    return MarkerDragTool(bounds, load, commit)
