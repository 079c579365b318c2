"""Entity identifiers and timestamps.

Top-level entities get ``<prefix>-<epoch ms>-<7 base36 chars>`` ids, which
sort roughly by creation time and are unique enough for a single local store.
Units (apartments, parking spaces) derive their ids from the parent id.
"""

from __future__ import annotations

import secrets
import string
import time

_BASE36 = string.digits + string.ascii_lowercase


def now_ms() -> int:
    """Current time as milliseconds since the epoch."""
    return int(time.time() * 1000)


def generate_entity_id(prefix: str) -> str:
    """Generate a new entity id, e.g. ``building-1718000000000-k3j9x0a``."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(7))
    return f"{prefix}-{now_ms()}-{suffix}"


def apartment_id(building_id: str, floor_number: int, position: int) -> str:
    """Id of the ``position``-th (1-based) apartment on a floor."""
    return f"{building_id}-f{floor_number}-a{position}"


def space_id(parking_id: str, section_id: str, label: str) -> str:
    """Id of a parking space, e.g. ``parking-…-section-…-P3``."""
    return f"{parking_id}-{section_id}-{label}"
