"""Shared pydantic base for persisted entities.

Attributes are snake_case in Python; the stored JSON uses camelCase keys
(``floorNumber``, ``dotPosition``...), so every model serializes by alias.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EntityModel(BaseModel):
    """Base for every model that ends up in the key-value store."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        """JSON-ready dict in the persisted layout (camelCase, unset optionals omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
