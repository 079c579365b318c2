"""Read-side helpers for listing screens."""

from plan_overlay.queries.listing import (
    SortOption,
    floor_summary,
    section_summary,
    sort_entities,
)

__all__ = [
    "SortOption",
    "floor_summary",
    "section_summary",
    "sort_entities",
]
