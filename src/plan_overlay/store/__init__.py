"""Local key-value persistence."""

from plan_overlay.store.backends import JsonFileStore, KeyValueStore, MemoryStore
from plan_overlay.store.entity_store import (
    BUILDINGS_KEY,
    PARKINGS_KEY,
    EntityStore,
    replace_or_append,
)

__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "BUILDINGS_KEY",
    "PARKINGS_KEY",
    "EntityStore",
    "replace_or_append",
]
