"""JSON-array collections on top of a key-value backend.

Each entity family lives under one key as a JSON array. Reads never raise:
a missing key, an empty value, malformed JSON or a non-array payload all read
as an empty collection. Writes replace the whole collection.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Sequence, TypeVar

from plan_overlay.store.backends import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

BUILDINGS_KEY = "building-management-buildings"
PARKINGS_KEY = "building-management-parkings"


class EntityStore:
    """Generic get/save of whole collections."""

    def __init__(self, backend: KeyValueStore) -> None:
        self.backend = backend

    def get_all(self, key: str) -> list[Any]:
        """Parsed collection under ``key``; ``[]`` when missing or corrupt."""
        raw = self.backend.get(key)
        if not raw:
            return []
        try:
            parsed = json.loads(raw)
        except ValueError:
            logger.warning("Collection %r holds malformed JSON, reading as empty", key)
            return []
        if not isinstance(parsed, list):
            logger.warning("Collection %r is not a JSON array, reading as empty", key)
            return []
        return parsed

    def save_all(self, key: str, items: Sequence[Any]) -> None:
        """Serialize and write the entire collection."""
        self.backend.set(key, json.dumps(list(items), ensure_ascii=False))


def replace_or_append(items: Sequence[T], item: T, match: Callable[[T], bool]) -> list[T]:
    """New list with the first match replaced by ``item``, else ``item`` appended.

    Order is preserved, so saving an existing entity keeps its position.
    """
    index = next((i for i, existing in enumerate(items) if match(existing)), -1)
    if index < 0:
        return [*items, item]
    return [item if i == index else existing for i, existing in enumerate(items)]
