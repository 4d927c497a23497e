"""
Catalog Domain Entities
=======================
Gardens, plant types, plants and condition tags.

Reports reference gardens and plants by display name, not by id, so these
entities are mostly looked up by name when matching reports.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping

DEFAULT_CONDITION_COLOR = "#10B981"
DEFAULT_CONDITION_ICON = "✅"


@dataclass(slots=True)
class Garden:
    """A named collection of plants."""

    id: int | None
    name: str
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Garden":
        return cls(id=row["id"], name=row["name"], created_at=row["created_at"])

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class PlantType:
    """A species/variety shared across gardens (e.g. Mango)."""

    id: int | None
    name: str
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PlantType":
        return cls(id=row["id"], name=row["name"], created_at=row["created_at"])

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class Plant:
    """An individually tracked specimen, owned by one garden and one plant type."""

    id: int | None
    garden_id: int
    plant_type_id: int
    plant_name: str
    garden_name: str | None = None
    plant_type_name: str | None = None
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Plant":
        keys = row.keys()
        return cls(
            id=row["id"],
            garden_id=row["garden_id"],
            plant_type_id=row["plant_type_id"],
            plant_name=row["plant_name"],
            garden_name=row["garden_name"] if "garden_name" in keys else None,
            plant_type_name=row["plant_type_name"] if "plant_type_name" in keys else None,
            created_at=row["created_at"],
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class Condition:
    """User-defined status tag (e.g. "Healthy", "Needs Treatment") applied to reports."""

    id: int | None
    name: str
    slug: str
    color: str = DEFAULT_CONDITION_COLOR
    icon: str = DEFAULT_CONDITION_ICON
    display_order: int = 0
    is_active: bool = True
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Condition":
        return cls(
            id=row["id"],
            name=row["name"],
            slug=row["slug"],
            color=row["color"] or DEFAULT_CONDITION_COLOR,
            icon=row["icon"] or DEFAULT_CONDITION_ICON,
            display_order=int(row["display_order"] or 0),
            is_active=bool(row["is_active"]),
            created_at=row["created_at"],
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_badge(self) -> dict[str, Any]:
        """Fields a report card needs to draw the badge."""
        return {"id": self.id, "name": self.name, "color": self.color, "icon": self.icon}
