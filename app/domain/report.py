"""
Report Domain Entity
====================
A single logged observation about a plant: free-text description, optional
media and optional condition tags.

``garden_name`` and ``plant_identifier`` are denormalized display names, not
foreign keys. Matching a report to a garden means comparing names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from app.domain.media import MediaAsset, media_assets, normalize_media


def _normalize_condition_ids(value: Iterable[Any] | None) -> list[int]:
    """Keep integer-like ids in input order, dropping duplicates and junk."""
    if not value:
        return []
    ids: list[int] = []
    for item in value:
        try:
            cid = int(item)
        except (TypeError, ValueError):
            continue
        if cid not in ids:
            ids.append(cid)
    return ids


@dataclass(slots=True)
class Report:
    """Canonical in-memory report. ``media_urls`` and ``media_kinds`` are parallel."""

    id: int | None
    garden_name: str
    plant_identifier: str
    type_name: str = ""
    description: str = ""
    media_urls: list[str] = field(default_factory=list)
    media_kinds: list[str] = field(default_factory=list)
    condition_ids: list[int] = field(default_factory=list)
    timestamp: str = ""
    created_at: str | None = None

    def __post_init__(self) -> None:
        self.media_urls, self.media_kinds = normalize_media(self.media_urls, self.media_kinds)
        self.condition_ids = _normalize_condition_ids(self.condition_ids)

    @classmethod
    def from_record(
        cls,
        record: Mapping[str, Any],
        *,
        media: str | Sequence[str] | None = None,
        media_kind: str | Sequence[str] | None = None,
        condition_ids: Iterable[Any] | None = None,
    ) -> "Report":
        """Build from a store record whose media columns are already decoded.

        *media* / *media_kind* may be the legacy scalar pair or the array pair.
        """
        urls, kinds = normalize_media(media, media_kind)
        return cls(
            id=record["id"],
            garden_name=record["garden"] or "",
            plant_identifier=record["plant_id"] or "",
            type_name=record["type"] or "",
            description=record["description"] or "",
            media_urls=urls,
            media_kinds=kinds,
            condition_ids=list(condition_ids or []),
            timestamp=record["date"] or "",
            created_at=record["created_at"],
        )

    @property
    def media(self) -> list[MediaAsset]:
        return media_assets(self.media_urls, self.media_kinds)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "garden_name": self.garden_name,
            "plant_identifier": self.plant_identifier,
            "type_name": self.type_name,
            "description": self.description,
            "media_urls": list(self.media_urls),
            "media_kinds": list(self.media_kinds),
            "condition_ids": list(self.condition_ids),
            "timestamp": self.timestamp,
            "created_at": self.created_at,
        }
