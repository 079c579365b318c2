"""plan-overlay CLI.

Usage:
    python -m plan_overlay [--store PATH] <command> [args]

Every command prints one JSON document: ``{"ok": true, ...}`` on success,
``{"ok": false, "error": ...}`` with exit code 1 otherwise. The store path
defaults to ``PLAN_OVERLAY_STORE_PATH`` (see ``plan_overlay.config``).
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError

from plan_overlay.config import get_settings
from plan_overlay.generators.forms import BuildingForm, ParkingForm
from plan_overlay.images import ImageIngestError, file_to_data_url
from plan_overlay.layout.dots import resolve_dot_position
from plan_overlay.layout.strips import floor_button_shapes
from plan_overlay.models.building import (
    EDITABLE_STATUSES,
    STATUS_LABELS,
    Building,
    UnitStatus,
    normalize_status,
)
from plan_overlay.models.geometry import Point
from plan_overlay.models.parking import ParkingConfig
from plan_overlay.queries.listing import (
    SortOption,
    floor_summary,
    section_summary,
    sort_entities,
)
from plan_overlay.repositories.buildings import BuildingRepository
from plan_overlay.repositories.parkings import ParkingRepository
from plan_overlay.store.backends import JsonFileStore
from plan_overlay.store.entity_store import EntityStore
from plan_overlay.validators.forms import FormValidationError
from plan_overlay.workflows import save_building_form, save_parking_form

app = typer.Typer(
    name="plan_overlay",
    help="plan-overlay: clickable floor/section regions and unit status tracking.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _output(data: dict) -> None:
    """Print JSON output to stdout."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(message: str, **extra) -> NoReturn:
    _output({"ok": False, "error": message, **extra})
    raise typer.Exit(1)


def _store(ctx: typer.Context) -> EntityStore:
    return EntityStore(JsonFileStore(ctx.obj["store_path"]))


def _buildings(ctx: typer.Context) -> BuildingRepository:
    return BuildingRepository(_store(ctx))


def _parkings(ctx: typer.Context) -> ParkingRepository:
    return ParkingRepository(_store(ctx))


def _load_building(ctx: typer.Context, building_id: str) -> Building:
    building = _buildings(ctx).get_by_id(building_id)
    if building is None:
        _fail(f"Building not found: {building_id}")
    return building


def _load_parking(ctx: typer.Context, parking_id: str) -> ParkingConfig:
    parking = _parkings(ctx).get_by_id(parking_id)
    if parking is None:
        _fail(f"Parking not found: {parking_id}")
    return parking


def _read_form(path: Path) -> dict:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        _fail(f"Cannot read form {path}: {exc}")


def _point(x: float, y: float) -> Point:
    try:
        return Point(x=x, y=y)
    except ValidationError:
        _fail(f"Position ({x}, {y}) is outside 0-100")


def _status(value: str) -> UnitStatus:
    try:
        return normalize_status(value)
    except ValueError:
        choices = ", ".join(s.value for s in EDITABLE_STATUSES)
        _fail(f"Unknown status: {value}. Use: {choices}")


def _sort(value: str) -> SortOption:
    try:
        return SortOption(value)
    except ValueError:
        _fail(f"Unknown sort: {value}. Use: {', '.join(o.value for o in SortOption)}")


@app.callback()
def main(
    ctx: typer.Context,
    store: Optional[Path] = typer.Option(None, "--store", help="Store file (overrides settings)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
):
    """Global options."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"store_path": store or settings.store_path}


# ---------------------------------------------------------------------------
# Read-only commands
# ---------------------------------------------------------------------------

@app.command()
def version() -> None:
    """Show version."""
    from plan_overlay import __version__

    _output({"ok": True, "version": __version__})


@app.command()
def buildings(
    ctx: typer.Context,
    sort: str = typer.Option("name-asc", "--sort", help="date-desc, date-asc, name-asc, name-desc"),
):
    """List buildings."""
    items = sort_entities(_buildings(ctx).all(), _sort(sort))
    _output({
        "ok": True,
        "buildings": [
            {
                "id": b.id,
                "name": b.name,
                "floors": b.floor_count,
                "apartments": b.apartment_count,
                "available": b.available_count,
                "createdAt": b.created_at,
            }
            for b in items
        ],
    })


@app.command()
def parkings(
    ctx: typer.Context,
    sort: str = typer.Option("name-asc", "--sort", help="date-desc, date-asc, name-asc, name-desc"),
):
    """List parkings."""
    items = sort_entities(_parkings(ctx).all(), _sort(sort))
    _output({
        "ok": True,
        "parkings": [
            {
                "id": p.id,
                "name": p.name,
                "sections": len(p.sections),
                "spaces": len(p.spaces),
                "available": p.available_count,
                "createdAt": p.created_at,
            }
            for p in items
        ],
    })


@app.command()
def building(ctx: typer.Context, building_id: str = typer.Argument(..., help="Building id")):
    """Show a building with per-floor availability."""
    b = _load_building(ctx, building_id)
    _output({
        "ok": True,
        "building": {"id": b.id, "name": b.name, "section": b.section_label},
        "floors": [floor_summary(f) for f in b.floors],
    })


@app.command()
def parking(ctx: typer.Context, parking_id: str = typer.Argument(..., help="Parking id")):
    """Show a parking with per-section availability."""
    p = _load_parking(ctx, parking_id)
    _output({
        "ok": True,
        "parking": {"id": p.id, "name": p.name},
        "sections": [
            {**section_summary(p, i), "area": s.area.to_json_dict()}
            for i, s in enumerate(p.sections)
        ],
    })


@app.command()
def floor(
    ctx: typer.Context,
    building_id: str = typer.Argument(..., help="Building id"),
    floor_number: int = typer.Argument(..., help="Floor number (1-based)"),
):
    """Apartments of one floor with display status and marker positions."""
    b = _load_building(ctx, building_id)
    f = b.get_floor(floor_number)
    if f is None:
        _fail(f"Floor {floor_number} not found in {building_id}")
    total = len(f.apartments)
    _output({
        "ok": True,
        **floor_summary(f),
        "apartments": [
            {
                "id": a.id,
                "label": a.label,
                "area": a.area,
                "rooms": a.rooms,
                "status": a.display_status.value,
                "statusLabel": STATUS_LABELS[a.display_status],
                "dot": resolve_dot_position(a.dot_position, i, total).to_json_dict(),
            }
            for i, a in enumerate(f.apartments)
        ],
    })


@app.command()
def section(
    ctx: typer.Context,
    parking_id: str = typer.Argument(..., help="Parking id"),
    section_index: int = typer.Argument(..., help="Section index (0-based)"),
):
    """Spaces of one parking section with status and marker positions."""
    p = _load_parking(ctx, parking_id)
    if not 0 <= section_index < len(p.sections):
        _fail(f"Section {section_index} not found in {parking_id}")
    spaces = p.spaces_in_section(section_index)
    _output({
        "ok": True,
        **section_summary(p, section_index),
        "spaces": [
            {
                "id": s.id,
                "label": s.label,
                "status": s.display_status.value,
                "statusLabel": STATUS_LABELS[s.display_status],
                "dot": resolve_dot_position(s.dot_position, i, len(spaces)).to_json_dict(),
            }
            for i, s in enumerate(spaces)
        ],
    })


@app.command()
def strips(ctx: typer.Context, building_id: str = typer.Argument(..., help="Building id")):
    """Clickable shape per floor: drawn rectangle or generated strip."""
    b = _load_building(ctx, building_id)
    _output({
        "ok": True,
        "drawn": b.uses_drawn_buttons,
        "shapes": {str(fn): r.to_json_dict() for fn, r in floor_button_shapes(b).items()},
    })


# ---------------------------------------------------------------------------
# Status and marker edits
# ---------------------------------------------------------------------------

@app.command("set-status")
def set_status(
    ctx: typer.Context,
    building_id: str = typer.Argument(..., help="Building id"),
    floor_number: int = typer.Argument(..., help="Floor number"),
    apartment_id: str = typer.Argument(..., help="Apartment id"),
    status: str = typer.Argument(..., help="available, in_negotiation or sold"),
):
    """Change an apartment's status."""
    saved = _buildings(ctx).update_apartment_status(
        building_id, floor_number, apartment_id, _status(status)
    )
    if saved is None:
        _fail(f"Apartment {apartment_id} not found on floor {floor_number} of {building_id}")
    _output({"ok": True, **floor_summary(saved.get_floor(floor_number))})


@app.command("set-space-status")
def set_space_status(
    ctx: typer.Context,
    parking_id: str = typer.Argument(..., help="Parking id"),
    space_id: str = typer.Argument(..., help="Space id"),
    status: str = typer.Argument(..., help="available, in_negotiation or sold"),
):
    """Change a parking space's status."""
    saved = _parkings(ctx).update_space_status(parking_id, space_id, _status(status))
    if saved is None:
        _fail(f"Space {space_id} not found in {parking_id}")
    _output({"ok": True, "space": saved.get_space(space_id).to_json_dict()})


@app.command("move-dot")
def move_dot(
    ctx: typer.Context,
    building_id: str = typer.Argument(..., help="Building id"),
    floor_number: int = typer.Argument(..., help="Floor number"),
    apartment_id: str = typer.Argument(..., help="Apartment id"),
    x: float = typer.Argument(..., help="X in percent of the plan image"),
    y: float = typer.Argument(..., help="Y in percent of the plan image"),
):
    """Move an apartment marker on its floor plan."""
    point = _point(x, y)
    saved = _buildings(ctx).update_apartment_dot_position(
        building_id, floor_number, apartment_id, point
    )
    if saved is None:
        _fail(f"Apartment {apartment_id} not found on floor {floor_number} of {building_id}")
    _output({"ok": True, "dot": point.to_json_dict()})


@app.command("move-space-dot")
def move_space_dot(
    ctx: typer.Context,
    parking_id: str = typer.Argument(..., help="Parking id"),
    space_id: str = typer.Argument(..., help="Space id"),
    x: float = typer.Argument(..., help="X in percent of the plan image"),
    y: float = typer.Argument(..., help="Y in percent of the plan image"),
):
    """Move a parking space marker on its section plan."""
    point = _point(x, y)
    saved = _parkings(ctx).update_space_dot_position(parking_id, space_id, point)
    if saved is None:
        _fail(f"Space {space_id} not found in {parking_id}")
    _output({"ok": True, "dot": point.to_json_dict()})


# ---------------------------------------------------------------------------
# Create / edit / delete
# ---------------------------------------------------------------------------

@app.command("import-building")
def import_building(
    ctx: typer.Context,
    form_path: Path = typer.Argument(..., help="Building form JSON"),
    building_id: Optional[str] = typer.Option(None, "--id", help="Edit this building"),
    image: Optional[Path] = typer.Option(None, "--image", help="Facade image file"),
):
    """Create or edit a building from a form file."""
    try:
        form = BuildingForm.model_validate(_read_form(form_path))
    except ValidationError as exc:
        _fail(f"Invalid building form: {exc.errors()[0]['msg']}")
    if image is not None:
        try:
            form = form.model_copy(update={"image_url": file_to_data_url(image)})
        except ImageIngestError as exc:
            _fail(str(exc))
    try:
        saved = save_building_form(_buildings(ctx), form, building_id)
    except FormValidationError as exc:
        _fail(str(exc), errors=[e.message for e in exc.errors])
    _output({"ok": True, "id": saved.id, "name": saved.name, "floors": saved.floor_count})


@app.command("import-parking")
def import_parking(
    ctx: typer.Context,
    form_path: Path = typer.Argument(..., help="Parking form JSON"),
    parking_id: Optional[str] = typer.Option(None, "--id", help="Edit this parking"),
):
    """Create or edit a parking from a form file."""
    try:
        form = ParkingForm.model_validate(_read_form(form_path))
    except ValidationError as exc:
        _fail(f"Invalid parking form: {exc.errors()[0]['msg']}")
    try:
        saved = save_parking_form(_parkings(ctx), form, parking_id)
    except FormValidationError as exc:
        _fail(str(exc), errors=[e.message for e in exc.errors])
    _output({"ok": True, "id": saved.id, "name": saved.name, "spaces": len(saved.spaces)})


@app.command("delete-building")
def delete_building(ctx: typer.Context, building_id: str = typer.Argument(..., help="Building id")):
    """Delete a building."""
    if not _buildings(ctx).delete(building_id):
        _fail(f"Building not found: {building_id}")
    _output({"ok": True, "deleted": building_id})


@app.command("delete-parking")
def delete_parking(ctx: typer.Context, parking_id: str = typer.Argument(..., help="Parking id")):
    """Delete a parking."""
    if not _parkings(ctx).delete(parking_id):
        _fail(f"Parking not found: {parking_id}")
    _output({"ok": True, "deleted": parking_id})


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
