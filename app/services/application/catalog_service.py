"""
Catalog Service
===============
Validated CRUD over gardens, plant types, plants and condition tags.

Names are trimmed and required. Failures of the store surface as
:class:`RepositoryError` carrying the toast text shown to the user.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.catalog import DEFAULT_CONDITION_COLOR, DEFAULT_CONDITION_ICON, Condition, Garden, Plant, PlantType
from app.domain.conditions import slugify_condition_name
from app.domain.exceptions import ConflictError, NotFoundError, RepositoryError, ValidationError

if TYPE_CHECKING:
    from infrastructure.database.repositories.catalog import CatalogRepository

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str:
    return (value or "").strip()


class CatalogService:
    """Service for the plant management and condition management screens."""

    def __init__(self, catalog_repo: "CatalogRepository"):
        self.repo = catalog_repo

    # ========================================================================
    # Gardens
    # ========================================================================

    def list_gardens(self) -> list[Garden]:
        return self.repo.list_gardens()

    def get_garden(self, garden_id: int) -> Garden:
        garden = self.repo.get_garden(garden_id)
        if garden is None:
            raise NotFoundError(f"Garden {garden_id} not found")
        return garden

    def _ensure_unique_garden(self, name: str) -> None:
        for garden in self.repo.list_gardens():
            if garden.name == name:
                raise ConflictError(f"Garden '{name}' already exists")

    def create_garden(self, name: str | None) -> Garden:
        name = _clean(name)
        if not name:
            raise ValidationError("Please enter a garden name")
        self._ensure_unique_garden(name)
        garden = self.repo.create_garden(name)
        if garden is None:
            raise RepositoryError("Failed to create garden")
        logger.info("Created garden %s (%s)", garden.id, name)
        return garden

    def delete_garden(self, garden_id: int) -> None:
        self.get_garden(garden_id)
        if not self.repo.delete_garden(garden_id):
            raise RepositoryError("Failed to delete garden")
        logger.info("Deleted garden %s", garden_id)

    # ========================================================================
    # Plant types
    # ========================================================================

    def list_plant_types(self) -> list[PlantType]:
        return self.repo.list_plant_types()

    def get_plant_type(self, plant_type_id: int) -> PlantType:
        plant_type = self.repo.get_plant_type(plant_type_id)
        if plant_type is None:
            raise NotFoundError(f"Plant type {plant_type_id} not found")
        return plant_type

    def _ensure_unique_plant_type(self, name: str, exclude_id: int | None = None) -> None:
        for plant_type in self.repo.list_plant_types():
            if plant_type.name == name and plant_type.id != exclude_id:
                raise ConflictError(f"Plant type '{name}' already exists")

    def create_plant_type(self, name: str | None) -> PlantType:
        name = _clean(name)
        if not name:
            raise ValidationError("Please enter a plant type")
        self._ensure_unique_plant_type(name)
        plant_type = self.repo.create_plant_type(name)
        if plant_type is None:
            raise RepositoryError("Failed to create plant type")
        logger.info("Created plant type %s (%s)", plant_type.id, name)
        return plant_type

    def update_plant_type(self, plant_type_id: int, name: str | None) -> PlantType:
        name = _clean(name)
        if not name:
            raise ValidationError("Please enter a plant type")
        self.get_plant_type(plant_type_id)
        self._ensure_unique_plant_type(name, exclude_id=plant_type_id)
        plant_type = self.repo.update_plant_type(plant_type_id, name)
        if plant_type is None:
            raise RepositoryError("Failed to update plant type")
        return plant_type

    def delete_plant_type(self, plant_type_id: int) -> None:
        self.get_plant_type(plant_type_id)
        if not self.repo.delete_plant_type(plant_type_id):
            raise RepositoryError("Failed to delete plant type")

    # ========================================================================
    # Plants
    # ========================================================================

    def list_plants(self, garden_id: int | None = None) -> list[Plant]:
        if garden_id is not None:
            return self.repo.list_plants_by_garden(garden_id)
        return self.repo.list_plants()

    def get_plant(self, plant_id: int) -> Plant:
        plant = self.repo.get_plant(plant_id)
        if plant is None:
            raise NotFoundError(f"Plant {plant_id} not found")
        return plant

    def _validate_plant(self, garden_id: int | None, plant_type_id: int | None, plant_name: str | None) -> str:
        plant_name = _clean(plant_name)
        if not garden_id or not plant_type_id or not plant_name:
            raise ValidationError("Please fill in all fields")
        if self.repo.get_garden(garden_id) is None:
            raise ValidationError(f"Garden {garden_id} does not exist")
        if self.repo.get_plant_type(plant_type_id) is None:
            raise ValidationError(f"Plant type {plant_type_id} does not exist")
        return plant_name

    def create_plant(self, garden_id: int | None, plant_type_id: int | None, plant_name: str | None) -> Plant:
        plant_name = self._validate_plant(garden_id, plant_type_id, plant_name)
        if any(p.plant_name == plant_name for p in self.repo.list_plants_by_garden(garden_id)):
            raise ConflictError(f"Plant '{plant_name}' already exists in this garden")
        plant = self.repo.create_plant(garden_id, plant_type_id, plant_name)
        if plant is None:
            raise RepositoryError("Failed to add plant")
        logger.info("Created plant %s (%s) in garden %s", plant.id, plant_name, garden_id)
        return plant

    def update_plant(
        self, plant_id: int, garden_id: int | None, plant_type_id: int | None, plant_name: str | None
    ) -> Plant:
        self.get_plant(plant_id)
        plant_name = self._validate_plant(garden_id, plant_type_id, plant_name)
        if any(
            p.plant_name == plant_name and p.id != plant_id for p in self.repo.list_plants_by_garden(garden_id)
        ):
            raise ConflictError(f"Plant '{plant_name}' already exists in this garden")
        plant = self.repo.update_plant(
            plant_id, garden_id=garden_id, plant_type_id=plant_type_id, plant_name=plant_name
        )
        if plant is None:
            raise RepositoryError("Failed to update plant")
        return plant

    def delete_plant(self, plant_id: int) -> None:
        self.get_plant(plant_id)
        if not self.repo.delete_plant(plant_id):
            raise RepositoryError("Failed to delete plant")

    def summary(self) -> dict[str, int]:
        """Counts for the plant management header."""
        return {
            "gardens": len(self.repo.list_gardens()),
            "plant_types": len(self.repo.list_plant_types()),
            "plants": self.repo.count_plants(),
        }

    # ========================================================================
    # Conditions
    # ========================================================================

    def list_conditions(self, include_inactive: bool = False) -> list[Condition]:
        return self.repo.list_conditions(active_only=not include_inactive)

    def get_condition(self, condition_id: int) -> Condition:
        condition = self.repo.get_condition(condition_id)
        if condition is None:
            raise NotFoundError(f"Condition {condition_id} not found")
        return condition

    @staticmethod
    def _resolve_slug(name: str, slug: str | None) -> str:
        resolved = slugify_condition_name(slug) if _clean(slug) else slugify_condition_name(name)
        if not resolved:
            raise ValidationError("Name and slug are required")
        return resolved

    def create_condition(
        self,
        name: str | None,
        slug: str | None = None,
        color: str | None = None,
        icon: str | None = None,
        display_order: int | None = None,
        is_active: bool = True,
    ) -> Condition:
        name = _clean(name)
        if not name:
            raise ValidationError("Name and slug are required")
        if display_order is None:
            display_order = len(self.repo.list_conditions(active_only=False)) + 1

        condition = self.repo.create_condition(
            name=name,
            slug=self._resolve_slug(name, slug),
            color=_clean(color) or DEFAULT_CONDITION_COLOR,
            icon=_clean(icon) or DEFAULT_CONDITION_ICON,
            display_order=display_order,
            is_active=is_active,
        )
        if condition is None:
            raise RepositoryError("Failed to create condition")
        logger.info("Created condition %s (%s)", condition.id, condition.slug)
        return condition

    def update_condition(self, condition_id: int, **changes: Any) -> Condition:
        current = self.get_condition(condition_id)
        values: dict[str, Any] = {}

        if "name" in changes:
            name = _clean(changes["name"])
            if not name:
                raise ValidationError("Name and slug are required")
            values["name"] = name
        if "slug" in changes:
            values["slug"] = self._resolve_slug(values.get("name", current.name), changes["slug"])
        for key, default in (("color", DEFAULT_CONDITION_COLOR), ("icon", DEFAULT_CONDITION_ICON)):
            if key in changes:
                values[key] = _clean(changes[key]) or default
        if changes.get("display_order") is not None:
            values["display_order"] = int(changes["display_order"])
        if changes.get("is_active") is not None:
            values["is_active"] = bool(changes["is_active"])

        condition = self.repo.update_condition(condition_id, **values)
        if condition is None:
            raise RepositoryError("Failed to update condition")
        return condition

    def toggle_condition(self, condition_id: int) -> tuple[Condition, str]:
        """Flip ``is_active``; returns the condition and the toast text."""
        current = self.get_condition(condition_id)
        condition = self.repo.update_condition(condition_id, is_active=not current.is_active)
        if condition is None:
            raise RepositoryError("Failed to update condition")
        message = f"Condition {'disabled' if current.is_active else 'enabled'}!"
        logger.info("Condition %s is now %s", condition_id, "active" if condition.is_active else "inactive")
        return condition, message

    def delete_condition(self, condition_id: int) -> None:
        """Delete the tag. Reports that carry its id keep it and simply stop showing the badge."""
        self.get_condition(condition_id)
        if not self.repo.delete_condition(condition_id):
            raise RepositoryError("Failed to delete condition")
        logger.info("Deleted condition %s", condition_id)
