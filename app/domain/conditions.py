"""
Condition Badge Resolution
==========================
Maps a report's ``condition_ids`` to loaded :class:`Condition` records.

Deleting or deactivating a condition does not touch the reports that carry
its id; such ids simply resolve to ``None`` here and the caller drops them.
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from app.domain.catalog import Condition

_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_INVALID_RE = re.compile(r"[^a-z0-9-]")


def index_conditions(conditions: Iterable[Condition]) -> dict[int, Condition]:
    """Index conditions by id (conditions without an id are skipped)."""
    return {c.id: c for c in conditions if c.id is not None}


def lookup_condition(conditions_by_id: Mapping[int, Condition], condition_id: int) -> Condition | None:
    """Return the condition for *condition_id*, or None when it is gone or inactive."""
    return conditions_by_id.get(condition_id)


def resolve_badges(condition_ids: Iterable[int] | None, conditions: Iterable[Condition]) -> list[Condition]:
    """Resolve badges in ``condition_ids`` order; dangling ids are omitted."""
    by_id = index_conditions(conditions)
    resolved = (lookup_condition(by_id, cid) for cid in condition_ids or ())
    return [c for c in resolved if c is not None]


def min_display_order(condition_ids: Iterable[int] | None, conditions_by_id: Mapping[int, Condition]) -> int | None:
    """Lowest display order among the resolvable conditions, None if none resolve."""
    orders = [
        c.display_order
        for c in (lookup_condition(conditions_by_id, cid) for cid in condition_ids or ())
        if c is not None
    ]
    return min(orders) if orders else None


def slugify_condition_name(name: str) -> str:
    """URL-safe slug: lower-case, whitespace runs to '-', anything else outside [a-z0-9-] removed."""
    return _SLUG_INVALID_RE.sub("", _WHITESPACE_RE.sub("-", name.strip().lower()))
