"""
Report Schemas
==============

Request schemas for report endpoints.

Required-field checks (garden, plant, description) are left to
ReportService so the user sees the form's own messages; these schemas only
enforce types.
"""

import json
from typing import Any

from pydantic import BaseModel, Field, field_validator

from app.domain.projection import ALL, ReportFilters, ViewState
from app.enums.common import SortField, SortOrder


def _parse_list(v: Any) -> list:
    """Accept a list, a JSON array string or a comma-separated string."""
    if v is None or v == "":
        return []
    if isinstance(v, str):
        try:
            parsed = json.loads(v)
        except json.JSONDecodeError:
            return [s.strip() for s in v.split(",") if s.strip()]
        return parsed if isinstance(parsed, list) else [parsed]
    return v


class DashboardQuery(BaseModel):
    """Query string of the dashboard listing."""

    garden: str = Field(default=ALL, description="'all' or a garden id")
    plant: str = Field(default=ALL, description="'all' or a plant identifier")
    condition: str = Field(default=ALL, description="'all' or a condition id")
    sort: SortField = Field(default=SortField.DATE, description="Sort field")
    order: SortOrder = Field(default=SortOrder.DESC, description="Sort order")
    page: int = Field(default=1, ge=1, description="1-indexed page")
    page_size: int | None = Field(default=None, ge=1, le=100, description="Reports per page")

    @field_validator("garden", "condition", mode="before")
    @classmethod
    def validate_id_selector(cls, v):
        if v is None or v == "":
            return ALL
        value = str(v).strip()
        if value != ALL and not value.isdigit():
            raise ValueError("must be 'all' or an integer id")
        return value

    @field_validator("plant", mode="before")
    @classmethod
    def default_plant(cls, v):
        return ALL if v is None or v == "" else v

    def to_view_state(self, default_page_size: int) -> ViewState:
        return ViewState(
            filters=ReportFilters(garden=self.garden, plant=self.plant, condition=self.condition),
            sort_field=self.sort,
            sort_order=self.order,
            page=self.page,
            page_size=self.page_size or default_page_size,
        )


class SubmitReportRequest(BaseModel):
    """Create/update payload. Multipart list fields arrive as strings."""

    garden_id: int | None = Field(default=None, description="Garden the report belongs to")
    plant_id: int | None = Field(default=None, description="Catalog plant id")
    description: str | None = Field(default=None, description="Observation text")
    media_urls: list[str] = Field(default_factory=list, description="Linked media URLs")
    media_kinds: list[str] = Field(default_factory=list, description="MIME types parallel to media_urls")
    inline_media: list[str] = Field(default_factory=list, description="data: URLs to store as files")
    condition_ids: list[int] = Field(default_factory=list, description="Condition tag ids")

    @field_validator("media_urls", "media_kinds", "condition_ids", mode="before")
    @classmethod
    def parse_list_field(cls, v):
        return _parse_list(v)

    @field_validator("inline_media", mode="before")
    @classmethod
    def parse_inline_media(cls, v):
        if isinstance(v, str):
            return [v] if v else []
        return v or []

    @field_validator("garden_id", "plant_id", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return None if v == "" else v


class ReportSelectionRequest(BaseModel):
    """Multi-select payload for PDF export and bulk share."""

    ids: list[int] = Field(default_factory=list, description="Selected report ids, in display order")

    @field_validator("ids", mode="before")
    @classmethod
    def parse_ids(cls, v):
        return _parse_list(v)
