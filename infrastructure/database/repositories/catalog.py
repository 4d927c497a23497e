"""
Catalog Repository
==================
Data access layer for gardens, plant types, plants and condition tags.

Deleting a condition leaves reports untouched; their ``condition_ids`` may
then reference ids that no longer exist.
"""

from __future__ import annotations

import logging
from typing import Any

from app.domain.catalog import Condition, Garden, Plant, PlantType
from app.utils.time import iso_now

logger = logging.getLogger(__name__)

_PLANT_SELECT = """
    SELECT p.id, p.garden_id, p.plant_type_id, p.plant_name, p.created_at,
           g.name AS garden_name, t.name AS plant_type_name
    FROM plants p
    LEFT JOIN gardens g ON g.id = p.garden_id
    LEFT JOIN plant_types t ON t.id = p.plant_type_id
"""

_CONDITION_COLUMNS = ("name", "slug", "color", "icon", "display_order", "is_active")
_PLANT_COLUMNS = ("garden_id", "plant_type_id", "plant_name")


class CatalogRepository:
    """Repository for catalog operations."""

    def __init__(self, database_handler):
        """
        Initialize repository.

        Args:
            database_handler: Database handler instance
        """
        self.db = database_handler

    def _update(self, table: str, record_id: int, values: dict[str, Any]) -> bool:
        """Run ``UPDATE table SET ... WHERE id = ?``; True when a row changed."""
        if not values:
            return True
        assignments = ", ".join(f"{column} = ?" for column in values)
        with self.db.connection() as conn:
            cursor = conn.execute(
                f"UPDATE {table} SET {assignments} WHERE id = ?",
                (*values.values(), record_id),
            )
            return cursor.rowcount > 0

    def _delete(self, table: str, record_id: int) -> bool:
        with self.db.connection() as conn:
            cursor = conn.execute(f"DELETE FROM {table} WHERE id = ?", (record_id,))
            return cursor.rowcount > 0

    # ========================================================================
    # Gardens
    # ========================================================================

    def list_gardens(self) -> list[Garden]:
        try:
            with self.db.connection() as conn:
                rows = conn.execute("SELECT * FROM gardens ORDER BY name").fetchall()
            return [Garden.from_row(row) for row in rows]
        except Exception as e:
            logger.error(f"Failed to list gardens: {e}")
            return []

    def get_garden(self, garden_id: int) -> Garden | None:
        try:
            with self.db.connection() as conn:
                row = conn.execute("SELECT * FROM gardens WHERE id = ?", (garden_id,)).fetchone()
            return Garden.from_row(row) if row else None
        except Exception as e:
            logger.error(f"Failed to get garden {garden_id}: {e}")
            return None

    def create_garden(self, name: str) -> Garden | None:
        try:
            with self.db.connection() as conn:
                cursor = conn.execute(
                    "INSERT INTO gardens (name, created_at) VALUES (?, ?)",
                    (name, iso_now()),
                )
                garden_id = cursor.lastrowid
        except Exception as e:
            logger.error(f"Failed to create garden {name!r}: {e}")
            return None
        return self.get_garden(garden_id)

    def delete_garden(self, garden_id: int) -> bool:
        try:
            return self._delete("gardens", garden_id)
        except Exception as e:
            logger.error(f"Failed to delete garden {garden_id}: {e}")
            return False

    # ========================================================================
    # Plant types
    # ========================================================================

    def list_plant_types(self) -> list[PlantType]:
        try:
            with self.db.connection() as conn:
                rows = conn.execute("SELECT * FROM plant_types ORDER BY name").fetchall()
            return [PlantType.from_row(row) for row in rows]
        except Exception as e:
            logger.error(f"Failed to list plant types: {e}")
            return []

    def get_plant_type(self, plant_type_id: int) -> PlantType | None:
        try:
            with self.db.connection() as conn:
                row = conn.execute("SELECT * FROM plant_types WHERE id = ?", (plant_type_id,)).fetchone()
            return PlantType.from_row(row) if row else None
        except Exception as e:
            logger.error(f"Failed to get plant type {plant_type_id}: {e}")
            return None

    def create_plant_type(self, name: str) -> PlantType | None:
        try:
            with self.db.connection() as conn:
                cursor = conn.execute(
                    "INSERT INTO plant_types (name, created_at) VALUES (?, ?)",
                    (name, iso_now()),
                )
                plant_type_id = cursor.lastrowid
        except Exception as e:
            logger.error(f"Failed to create plant type {name!r}: {e}")
            return None
        return self.get_plant_type(plant_type_id)

    def update_plant_type(self, plant_type_id: int, name: str) -> PlantType | None:
        try:
            if not self._update("plant_types", plant_type_id, {"name": name}):
                return None
        except Exception as e:
            logger.error(f"Failed to update plant type {plant_type_id}: {e}")
            return None
        return self.get_plant_type(plant_type_id)

    def delete_plant_type(self, plant_type_id: int) -> bool:
        try:
            return self._delete("plant_types", plant_type_id)
        except Exception as e:
            logger.error(f"Failed to delete plant type {plant_type_id}: {e}")
            return False

    # ========================================================================
    # Plants
    # ========================================================================

    def list_plants(self) -> list[Plant]:
        """All plants, newest first, with garden and type names joined in."""
        try:
            with self.db.connection() as conn:
                rows = conn.execute(_PLANT_SELECT + " ORDER BY p.created_at DESC, p.id DESC").fetchall()
            return [Plant.from_row(row) for row in rows]
        except Exception as e:
            logger.error(f"Failed to list plants: {e}")
            return []

    def list_plants_by_garden(self, garden_id: int) -> list[Plant]:
        try:
            with self.db.connection() as conn:
                rows = conn.execute(
                    _PLANT_SELECT + " WHERE p.garden_id = ? ORDER BY p.plant_name, p.id",
                    (garden_id,),
                ).fetchall()
            return [Plant.from_row(row) for row in rows]
        except Exception as e:
            logger.error(f"Failed to list plants for garden {garden_id}: {e}")
            return []

    def get_plant(self, plant_id: int) -> Plant | None:
        try:
            with self.db.connection() as conn:
                row = conn.execute(_PLANT_SELECT + " WHERE p.id = ?", (plant_id,)).fetchone()
            return Plant.from_row(row) if row else None
        except Exception as e:
            logger.error(f"Failed to get plant {plant_id}: {e}")
            return None

    def create_plant(self, garden_id: int, plant_type_id: int, plant_name: str) -> Plant | None:
        try:
            with self.db.connection() as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO plants (garden_id, plant_type_id, plant_name, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (garden_id, plant_type_id, plant_name, iso_now()),
                )
                plant_id = cursor.lastrowid
        except Exception as e:
            logger.error(f"Failed to create plant {plant_name!r}: {e}")
            return None
        return self.get_plant(plant_id)

    def update_plant(self, plant_id: int, **fields: Any) -> Plant | None:
        values = {column: fields[column] for column in _PLANT_COLUMNS if column in fields}
        try:
            if not self._update("plants", plant_id, values):
                return None
        except Exception as e:
            logger.error(f"Failed to update plant {plant_id}: {e}")
            return None
        return self.get_plant(plant_id)

    def delete_plant(self, plant_id: int) -> bool:
        try:
            return self._delete("plants", plant_id)
        except Exception as e:
            logger.error(f"Failed to delete plant {plant_id}: {e}")
            return False

    def count_plants(self) -> int:
        try:
            with self.db.connection() as conn:
                return conn.execute("SELECT COUNT(*) FROM plants").fetchone()[0]
        except Exception as e:
            logger.error(f"Failed to count plants: {e}")
            return 0

    # ========================================================================
    # Conditions
    # ========================================================================

    def list_conditions(self, active_only: bool = True) -> list[Condition]:
        try:
            query = "SELECT * FROM conditions"
            if active_only:
                query += " WHERE is_active = 1"
            query += " ORDER BY display_order, name"
            with self.db.connection() as conn:
                rows = conn.execute(query).fetchall()
            return [Condition.from_row(row) for row in rows]
        except Exception as e:
            logger.error(f"Failed to list conditions: {e}")
            return []

    def get_condition(self, condition_id: int) -> Condition | None:
        try:
            with self.db.connection() as conn:
                row = conn.execute("SELECT * FROM conditions WHERE id = ?", (condition_id,)).fetchone()
            return Condition.from_row(row) if row else None
        except Exception as e:
            logger.error(f"Failed to get condition {condition_id}: {e}")
            return None

    def create_condition(
        self,
        name: str,
        slug: str,
        color: str,
        icon: str,
        display_order: int,
        is_active: bool = True,
    ) -> Condition | None:
        try:
            with self.db.connection() as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO conditions (name, slug, color, icon, display_order, is_active, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (name, slug, color, icon, display_order, int(is_active), iso_now()),
                )
                condition_id = cursor.lastrowid
        except Exception as e:
            logger.error(f"Failed to create condition {name!r}: {e}")
            return None
        return self.get_condition(condition_id)

    def update_condition(self, condition_id: int, **fields: Any) -> Condition | None:
        values = {column: fields[column] for column in _CONDITION_COLUMNS if column in fields}
        if "is_active" in values:
            values["is_active"] = int(bool(values["is_active"]))
        try:
            if not self._update("conditions", condition_id, values):
                return None
        except Exception as e:
            logger.error(f"Failed to update condition {condition_id}: {e}")
            return None
        return self.get_condition(condition_id)

    def delete_condition(self, condition_id: int) -> bool:
        try:
            return self._delete("conditions", condition_id)
        except Exception as e:
            logger.error(f"Failed to delete condition {condition_id}: {e}")
            return False
