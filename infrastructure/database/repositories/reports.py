"""
Report Repository
=================
Data access layer for garden reports.

Rows store the garden and plant by display name. The ``media`` and
``media_type`` columns hold a JSON array on current rows and a bare string on
rows written before multi-media support; both shapes are decoded here, once,
so every caller receives :class:`~app.domain.report.Report` objects with
parallel ``media_urls`` / ``media_kinds`` lists.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from typing import Any, Iterable

from app.domain.media import normalize_media
from app.domain.report import Report
from app.utils.time import iso_now

logger = logging.getLogger(__name__)

# Report attribute -> column
_UPDATABLE_COLUMNS = {
    "garden_name": "garden",
    "plant_identifier": "plant_id",
    "type_name": "type",
    "description": "description",
    "condition_ids": "condition_ids",
    "timestamp": "date",
}


def _decode_media_column(value: str | None) -> str | list[str] | None:
    """Return a list for JSON-array columns and the raw string for legacy scalars."""
    if value is None:
        return None
    text = value.strip()
    if text.startswith("["):
        try:
            decoded = json.loads(text)
        except ValueError:
            return value
        if isinstance(decoded, list):
            return [str(item) for item in decoded if item is not None]
    return value


def _decode_condition_ids(value: str | None) -> list[Any]:
    if not value:
        return []
    try:
        decoded = json.loads(value)
    except ValueError:
        logger.warning("Ignoring malformed condition_ids value: %r", value)
        return []
    return decoded if isinstance(decoded, list) else []


def _row_to_report(row: sqlite3.Row) -> Report:
    return Report.from_record(
        row,
        media=_decode_media_column(row["media"]),
        media_kind=_decode_media_column(row["media_type"]),
        condition_ids=_decode_condition_ids(row["condition_ids"]),
    )


class ReportRepository:
    """Repository for report operations."""

    def __init__(self, database_handler):
        """
        Initialize repository.

        Args:
            database_handler: Database handler instance
        """
        self.db = database_handler

    # ========================================================================
    # READ Operations
    # ========================================================================

    def list_reports(self, garden_name: str | None = None) -> list[Report]:
        """
        Get reports, newest first.

        Args:
            garden_name: Only reports whose garden name equals this value

        Returns:
            List of reports (empty on failure)
        """
        try:
            query = "SELECT * FROM reports"
            params: list[Any] = []
            if garden_name:
                query += " WHERE garden = ?"
                params.append(garden_name)
            query += " ORDER BY created_at DESC, id DESC"

            with self.db.connection() as conn:
                rows = conn.execute(query, params).fetchall()
            return [_row_to_report(row) for row in rows]
        except Exception as e:
            logger.error(f"Failed to list reports: {e}")
            return []

    def get_report(self, report_id: int) -> Report | None:
        try:
            with self.db.connection() as conn:
                row = conn.execute("SELECT * FROM reports WHERE id = ?", (report_id,)).fetchone()
            return _row_to_report(row) if row else None
        except Exception as e:
            logger.error(f"Failed to get report {report_id}: {e}")
            return None

    def get_reports(self, report_ids: Iterable[int]) -> list[Report]:
        """Fetch several reports, returned in the order of *report_ids* (unknown ids skipped)."""
        ids = [int(rid) for rid in report_ids]
        if not ids:
            return []
        try:
            placeholders = ",".join("?" for _ in ids)
            with self.db.connection() as conn:
                rows = conn.execute(f"SELECT * FROM reports WHERE id IN ({placeholders})", ids).fetchall()
            by_id = {row["id"]: _row_to_report(row) for row in rows}
            return [by_id[rid] for rid in dict.fromkeys(ids) if rid in by_id]
        except Exception as e:
            logger.error(f"Failed to get reports {ids}: {e}")
            return []

    # ========================================================================
    # CREATE / UPDATE / DELETE Operations
    # ========================================================================

    def create_report(
        self,
        garden_name: str,
        plant_identifier: str,
        timestamp: str,
        type_name: str = "",
        description: str = "",
        media_urls: list[str] | None = None,
        media_kinds: list[str] | None = None,
        condition_ids: list[int] | None = None,
        created_at: str | None = None,
    ) -> Report | None:
        """
        Create a report. Media is always written in the array form.

        Returns:
            The stored report, None on failure
        """
        urls, kinds = normalize_media(media_urls or [], media_kinds or [])
        try:
            with self.db.connection() as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO reports (
                        garden, type, plant_id, description, media, media_type,
                        condition_ids, date, created_at
                    )
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        garden_name,
                        type_name,
                        plant_identifier,
                        description,
                        json.dumps(urls),
                        json.dumps(kinds),
                        json.dumps(list(condition_ids or [])),
                        timestamp,
                        created_at or iso_now(),
                    ),
                )
                report_id = cursor.lastrowid
        except Exception as e:
            logger.error(f"Failed to create report for {plant_identifier}: {e}")
            return None
        return self.get_report(report_id)

    def update_report(self, report_id: int, **fields: Any) -> Report | None:
        """
        Update only the supplied fields.

        Accepts ``garden_name``, ``plant_identifier``, ``type_name``,
        ``description``, ``condition_ids``, ``timestamp`` and the
        ``media_urls`` / ``media_kinds`` pair.

        Returns:
            The updated report, None when it does not exist or on failure
        """
        assignments: list[str] = []
        params: list[Any] = []

        for attr, column in _UPDATABLE_COLUMNS.items():
            if attr not in fields:
                continue
            value = fields[attr]
            if attr == "condition_ids":
                value = json.dumps(list(value or []))
            assignments.append(f"{column} = ?")
            params.append(value)

        if "media_urls" in fields or "media_kinds" in fields:
            urls, kinds = normalize_media(fields.get("media_urls") or [], fields.get("media_kinds") or [])
            assignments.extend(["media = ?", "media_type = ?"])
            params.extend([json.dumps(urls), json.dumps(kinds)])

        unknown = set(fields) - set(_UPDATABLE_COLUMNS) - {"media_urls", "media_kinds"}
        if unknown:
            logger.warning("Ignoring unknown report fields: %s", sorted(unknown))

        if not assignments:
            return self.get_report(report_id)

        try:
            with self.db.connection() as conn:
                cursor = conn.execute(
                    f"UPDATE reports SET {', '.join(assignments)} WHERE id = ?",
                    (*params, report_id),
                )
                if cursor.rowcount == 0:
                    return None
        except Exception as e:
            logger.error(f"Failed to update report {report_id}: {e}")
            return None
        return self.get_report(report_id)

    def delete_report(self, report_id: int) -> bool:
        try:
            with self.db.connection() as conn:
                cursor = conn.execute("DELETE FROM reports WHERE id = ?", (report_id,))
                return cursor.rowcount > 0
        except Exception as e:
            logger.error(f"Failed to delete report {report_id}: {e}")
            return False

    def count_reports(self) -> int:
        try:
            with self.db.connection() as conn:
                return conn.execute("SELECT COUNT(*) FROM reports").fetchone()[0]
        except Exception as e:
            logger.error(f"Failed to count reports: {e}")
            return 0
