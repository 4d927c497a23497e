"""
Report Service
==============
Business logic for garden reports: the per-garden feed, the dashboard
projection, detail and edit views, and report submission.

Submission validates before any store call, uploads media one file at a time
(a failing file is dropped, the rest proceed) and then creates or updates the
record. Only one submission runs at a time per service instance.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Sequence

from app.domain.catalog import Condition, Garden, Plant
from app.domain.conditions import resolve_badges
from app.domain.exceptions import ConflictError, NotFoundError, RepositoryError, ValidationError
from app.domain.media import is_inline_media, normalize_media
from app.domain.projection import ViewState, plant_filter_options, project
from app.domain.report import Report
from app.enums.common import ConditionSortMode
from app.utils.text import truncate_text
from app.utils.time import format_display_date, iso_now

if TYPE_CHECKING:
    from infrastructure.database.repositories.catalog import CatalogRepository
    from infrastructure.database.repositories.reports import ReportRepository
    from infrastructure.storage.media_storage import MediaStorage, MediaUpload

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    """Outcome of a create or update: the stored report plus the toast text."""

    report: Report
    message: str
    created: bool
    skipped_uploads: int = 0
    uploaded_urls: list[str] = field(default_factory=list)


class ReportService:
    """Service for report feed, dashboard and submission workflows."""

    def __init__(
        self,
        report_repo: "ReportRepository",
        catalog_repo: "CatalogRepository",
        media_storage: "MediaStorage",
        *,
        page_size: int = 10,
        condition_sort_mode: ConditionSortMode | str = ConditionSortMode.DISPLAY_ORDER,
    ):
        """
        Initialize service.

        Args:
            report_repo: Report repository
            catalog_repo: Catalog repository (gardens, plants, conditions)
            media_storage: Blob store for uploaded photos and videos
            page_size: Default dashboard page size
            condition_sort_mode: How the dashboard's condition sort orders reports
        """
        self.reports = report_repo
        self.catalog = catalog_repo
        self.media = media_storage
        self.page_size = page_size
        self.condition_sort_mode = ConditionSortMode(condition_sort_mode)
        self._submit_lock = threading.Lock()

    # ========================================================================
    # Presentation
    # ========================================================================

    def present(self, report: Report, conditions: Iterable[Condition], *, excerpt: bool = True) -> dict[str, Any]:
        """Serialize a report for a card or detail view with badges and media assets."""
        data = report.to_dict()
        data["media"] = [asset.to_dict() for asset in report.media]
        data["conditions"] = [c.to_badge() for c in resolve_badges(report.condition_ids, conditions)]
        data["display_date"] = format_display_date(report.timestamp)
        if excerpt:
            data["excerpt"] = truncate_text(report.description)
        return data

    def _require_garden(self, garden_id: int) -> Garden:
        garden = self.catalog.get_garden(garden_id)
        if garden is None:
            raise NotFoundError(f"Garden {garden_id} not found")
        return garden

    def get_report(self, report_id: int) -> Report:
        report = self.reports.get_report(report_id)
        if report is None:
            raise NotFoundError(f"Report {report_id} not found")
        return report

    # ========================================================================
    # Feed / dashboard / detail
    # ========================================================================

    def list_feed(self, garden_id: int) -> dict[str, Any]:
        """Reports of one garden, newest first, as feed cards."""
        garden = self._require_garden(garden_id)
        conditions = self.catalog.list_conditions(active_only=True)
        reports = self.reports.list_reports(garden.name)
        return {
            "garden": garden.to_dict(),
            "items": [self.present(r, conditions) for r in reports],
            "count": len(reports),
        }

    def default_view_state(self) -> ViewState:
        return ViewState(page_size=self.page_size)

    def project_dashboard(self, view_state: ViewState | None = None) -> dict[str, Any]:
        """Filter, sort and paginate every report for the dashboard."""
        state = view_state or self.default_view_state()
        reports = self.reports.list_reports()
        gardens = self.catalog.list_gardens()
        conditions = self.catalog.list_conditions(active_only=True)

        page = project(
            reports,
            state,
            gardens=gardens,
            conditions=conditions,
            condition_mode=self.condition_sort_mode,
        )
        data = page.to_dict(serialize=lambda r: self.present(r, conditions))
        data["view"] = state.replace(page=page.page).to_dict()
        data["filter_options"] = {
            "gardens": [g.to_dict() for g in gardens],
            "plants": plant_filter_options(reports),
            "conditions": [c.to_badge() for c in conditions],
        }
        return data

    def get_report_detail(self, report_id: int) -> dict[str, Any]:
        report = self.get_report(report_id)
        conditions = self.catalog.list_conditions(active_only=True)
        return self.present(report, conditions, excerpt=False)

    # ========================================================================
    # Form helpers
    # ========================================================================

    def available_plant_types(self, garden_id: int) -> list[str]:
        """Plant type names that have at least one plant in the garden."""
        plants = self.catalog.list_plants_by_garden(garden_id)
        return sorted({p.plant_type_name for p in plants if p.plant_type_name})

    def available_plants(self, garden_id: int, plant_type_name: str | None = None) -> list[Plant]:
        """Plants in the garden, optionally narrowed to one plant type."""
        plants = self.catalog.list_plants_by_garden(garden_id)
        if plant_type_name:
            plants = [p for p in plants if p.plant_type_name == plant_type_name]
        return plants

    def get_edit_form(self, report_id: int) -> dict[str, Any]:
        """
        Working state for the edit form.

        The stored plant display name is resolved back to a plant id within
        the report's garden (None when the plant no longer exists). Inline
        ``data:``/``blob:`` media are returned as pending files, not URLs.
        """
        report = self.get_report(report_id)
        garden = next((g for g in self.catalog.list_gardens() if g.name == report.garden_name), None)

        plant_id = None
        plant_types: list[str] = []
        plants: list[Plant] = []
        if garden is not None:
            plant_types = self.available_plant_types(garden.id)
            plants = self.available_plants(garden.id, report.type_name or None)
            match = next((p for p in plants if p.plant_name == report.plant_identifier), None)
            plant_id = match.id if match else None

        assets = report.media
        return {
            "report_id": report.id,
            "garden_id": garden.id if garden else None,
            "plant_type": report.type_name,
            "plant_id": plant_id,
            "description": report.description,
            "condition_ids": list(report.condition_ids),
            "media_urls": [a.to_dict() for a in assets if not is_inline_media(a.url)],
            "pending_media": [a.to_dict() for a in assets if is_inline_media(a.url)],
            "plant_types": plant_types,
            "plants": [p.to_dict() for p in plants],
        }

    # ========================================================================
    # Submission
    # ========================================================================

    def submit_report(
        self,
        garden_id: int | None,
        plant_id: int | None,
        description: str | None,
        *,
        media_urls: Sequence[str] = (),
        media_kinds: Sequence[str] = (),
        uploads: Sequence["MediaUpload"] = (),
        condition_ids: Iterable[int] = (),
        report_id: int | None = None,
    ) -> SubmissionResult:
        """
        Create a report, or update ``report_id`` when given.

        Raises:
            ConflictError: Another submission is still running
            ValidationError: Required fields missing or inconsistent; nothing was stored
            NotFoundError: ``report_id`` does not exist
            RepositoryError: The store rejected the write
        """
        if not self._submit_lock.acquire(blocking=False):
            raise ConflictError("A submission is already in progress")
        try:
            return self._submit(
                garden_id,
                plant_id,
                description,
                media_urls=media_urls,
                media_kinds=media_kinds,
                uploads=uploads,
                condition_ids=condition_ids,
                report_id=report_id,
            )
        finally:
            self._submit_lock.release()

    def _validate_submission(
        self, garden_id: int | None, plant_id: int | None, description: str | None, condition_ids: list[int]
    ) -> tuple[Garden, Plant, str]:
        if garden_id is None:
            raise ValidationError("Please select a garden")
        if plant_id is None:
            raise ValidationError("Please select a plant")
        text = (description or "").strip()
        if not text:
            raise ValidationError("Please enter a description")

        garden = self.catalog.get_garden(garden_id)
        if garden is None:
            raise ValidationError(f"Garden {garden_id} does not exist")
        plant = self.catalog.get_plant(plant_id)
        if plant is None or plant.garden_id != garden.id:
            raise ValidationError("Selected plant does not belong to this garden")

        if condition_ids:
            known = {c.id for c in self.catalog.list_conditions(active_only=False)}
            unknown = [cid for cid in condition_ids if cid not in known]
            if unknown:
                raise ValidationError(f"Unknown condition id(s): {', '.join(map(str, unknown))}")
        return garden, plant, text

    def _submit(
        self,
        garden_id: int | None,
        plant_id: int | None,
        description: str | None,
        *,
        media_urls: Sequence[str],
        media_kinds: Sequence[str],
        uploads: Sequence["MediaUpload"],
        condition_ids: Iterable[int],
        report_id: int | None,
    ) -> SubmissionResult:
        cids = list(dict.fromkeys(int(c) for c in condition_ids))
        garden, plant, text = self._validate_submission(garden_id, plant_id, description, cids)

        existing = self.get_report(report_id) if report_id is not None else None

        urls, kinds = normalize_media(list(media_urls), list(media_kinds))
        stored = self.media.upload_many(uploads)
        skipped = len(uploads) - len(stored)
        if skipped:
            logger.warning("Dropped %d of %d uploads for %s", skipped, len(uploads), plant.plant_name)
        urls.extend(item.url for item in stored)
        kinds.extend(item.kind for item in stored)

        fields = {
            "garden_name": garden.name,
            "plant_identifier": plant.plant_name,
            "type_name": plant.plant_type_name or "",
            "description": text,
            "media_urls": urls,
            "media_kinds": kinds,
            "condition_ids": cids,
        }

        if existing is None:
            report = self.reports.create_report(timestamp=iso_now(timespec="seconds"), **fields)
            if report is None:
                self._discard_uploads(item.url for item in stored)
                raise RepositoryError("Failed to save report. Please try again.")
            logger.info("Created report %s for %s in %s", report.id, plant.plant_name, garden.name)
            return SubmissionResult(
                report=report,
                message=f"Saved for {plant.plant_name}",
                created=True,
                skipped_uploads=skipped,
                uploaded_urls=[item.url for item in stored],
            )

        report = self.reports.update_report(existing.id, **fields)
        if report is None:
            self._discard_uploads(item.url for item in stored)
            raise RepositoryError("Failed to update report. Please try again.")
        # files dropped from the report during the edit
        self._discard_uploads(url for url in existing.media_urls if url not in report.media_urls)
        logger.info("Updated report %s", report.id)
        return SubmissionResult(
            report=report,
            message="Report updated!",
            created=False,
            skipped_uploads=skipped,
            uploaded_urls=[item.url for item in stored],
        )

    def _discard_uploads(self, urls: Iterable[str]) -> None:
        for url in urls:
            if self.media.owns(url):
                self.media.delete(url)

    # ========================================================================
    # Delete
    # ========================================================================

    def delete_report(self, report_id: int) -> str:
        """Remove the report and any media files stored for it; returns the toast text."""
        report = self.get_report(report_id)
        if not self.reports.delete_report(report_id):
            raise RepositoryError("Failed to delete report. Please try again.")
        self._discard_uploads(report.media_urls)
        logger.info("Deleted report %s", report_id)
        return "Report deleted."

    def get_reports(self, report_ids: Iterable[int]) -> list[Report]:
        """Reports for a selection, in selection order; unknown ids are ignored."""
        return self.reports.get_reports(report_ids)
