"""Typed CRUD over one entity collection.

Every call is a full read-modify-write of the collection: nothing is cached
between calls and entities are copied, never mutated in place.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from plan_overlay.models.base import EntityModel
from plan_overlay.store.entity_store import EntityStore, replace_or_append

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=EntityModel)


def normalize_name(name: str) -> str:
    """Name as compared for uniqueness: trimmed, case-folded."""
    return name.strip().casefold()


def _record_id(raw: Any) -> Any:
    return raw.get("id") if isinstance(raw, dict) else None


class EntityRepository(Generic[ModelT]):
    """Collection of ``model`` entities stored under ``key``, keyed by ``id``."""

    key: str
    model: type[ModelT]

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def all(self) -> list[ModelT]:
        """Every stored entity in stored order; invalid records are skipped."""
        entities: list[ModelT] = []
        for raw in self.store.get_all(self.key):
            try:
                entities.append(self.model.model_validate(raw))
            except ValidationError as exc:
                logger.warning(
                    "Skipping invalid %s record in %r: %s",
                    self.model.__name__, self.key, exc.errors()[0]["msg"],
                )
        return entities

    def get_by_id(self, entity_id: str) -> ModelT | None:
        return next((e for e in self.all() if e.id == entity_id), None)

    def _prepare(self, entity: ModelT) -> ModelT:
        """Hook to refresh derived fields before writing."""
        return entity

    def save(self, entity: ModelT) -> ModelT:
        """Insert or replace ``entity`` (matched by id) and write the collection.

        Other records are written back exactly as stored, including ones that
        no longer validate.
        """
        entity = self._prepare(entity)
        records = replace_or_append(
            self.store.get_all(self.key),
            entity.to_json_dict(),
            lambda raw: _record_id(raw) == entity.id,
        )
        self.store.save_all(self.key, records)
        logger.debug("Saved %s %s", self.model.__name__, entity.id)
        return entity

    def delete(self, entity_id: str) -> bool:
        """Remove the entity with ``entity_id``. Returns False if it was absent."""
        records = self.store.get_all(self.key)
        remaining = [r for r in records if _record_id(r) != entity_id]
        if len(remaining) == len(records):
            return False
        self.store.save_all(self.key, remaining)
        logger.info("Deleted %s %s", self.model.__name__, entity_id)
        return True

    def is_name_taken(self, name: str, exclude_id: str | None = None) -> bool:
        """Whether another entity already uses ``name`` (trimmed, case-insensitive).

        Blank names are never reported as taken. ``exclude_id`` skips the
        entity being edited.
        """
        normalized = normalize_name(name)
        if not normalized:
            return False
        return any(
            e.id != exclude_id and normalize_name(e.name) == normalized
            for e in self.all()
        )
