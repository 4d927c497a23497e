"""
Report View Projection
======================
Filter → sort → paginate over the in-memory report list.

Everything here is a pure function of its arguments. The dashboard keeps an
immutable :class:`ViewState` and replaces it on every user action; the page it
renders is always ``project(reports, state, ...)``.

Page arithmetic:
``page_count = ceil(total / page_size)``, 1-indexed pages.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Sequence

from app.domain.catalog import Condition, Garden
from app.domain.conditions import index_conditions, min_display_order
from app.domain.report import Report
from app.enums.common import ConditionSortMode, SortField, SortOrder
from app.utils.time import parse_report_timestamp

ALL = "all"
DEFAULT_PAGE_SIZE = 10


def _coerce_id_selector(value: Any, name: str) -> str | int:
    if value is None or value == "" or value == ALL:
        return ALL
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} filter must be 'all' or an integer id") from None


@dataclass(frozen=True, slots=True)
class ReportFilters:
    """Active dashboard filters. Each field is either ``"all"`` or a concrete value."""

    garden: str | int = ALL
    plant: str = ALL
    condition: str | int = ALL

    def __post_init__(self) -> None:
        object.__setattr__(self, "garden", _coerce_id_selector(self.garden, "garden"))
        object.__setattr__(self, "condition", _coerce_id_selector(self.condition, "condition"))
        plant = self.plant
        object.__setattr__(self, "plant", ALL if plant is None or plant == "" else str(plant))

    @classmethod
    def neutral(cls) -> "ReportFilters":
        return cls()

    @property
    def is_neutral(self) -> bool:
        return self.garden == ALL and self.plant == ALL and self.condition == ALL

    def to_dict(self) -> dict[str, Any]:
        return {"garden": self.garden, "plant": self.plant, "condition": self.condition}


@dataclass(frozen=True, slots=True)
class ViewState:
    """Everything the dashboard needs to derive the visible page."""

    filters: ReportFilters = field(default_factory=ReportFilters)
    sort_field: SortField = SortField.DATE
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "sort_field", SortField(self.sort_field))
        object.__setattr__(self, "sort_order", SortOrder(self.sort_order))
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")

    def replace(self, **changes: Any) -> "ViewState":
        """Return a new state. A filter change without an explicit page goes back to page 1."""
        if "filters" in changes and changes["filters"] != self.filters:
            changes.setdefault("page", 1)
        return dataclasses.replace(self, **changes)

    def with_filters(self, **filter_changes: Any) -> "ViewState":
        return self.replace(filters=dataclasses.replace(self.filters, **filter_changes))

    def to_dict(self) -> dict[str, Any]:
        return {
            "filters": self.filters.to_dict(),
            "sort": self.sort_field.value,
            "order": self.sort_order.value,
            "page": self.page,
            "page_size": self.page_size,
        }


@dataclass(frozen=True, slots=True)
class Page:
    """One rendered page of reports plus pagination metadata."""

    items: list[Report]
    page: int
    page_size: int
    page_count: int
    total: int

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def to_dict(self, serialize: Callable[[Report], Any] | None = None) -> dict[str, Any]:
        render = serialize or (lambda report: report.to_dict())
        return {
            "items": [render(r) for r in self.items],
            "pagination": {
                "total": self.total,
                "page": self.page,
                "page_size": self.page_size,
                "page_count": self.page_count,
                "has_next": self.has_next,
                "has_prev": self.has_prev,
            },
        }


# ---------------------------------------------------------------------------
# Filter
# ---------------------------------------------------------------------------


def _garden_name(garden_id: int, gardens: Iterable[Garden]) -> str | None:
    for garden in gardens:
        if garden.id == garden_id:
            return garden.name
    return None


def filter_reports(
    reports: Iterable[Report],
    filters: ReportFilters,
    gardens: Iterable[Garden] = (),
) -> list[Report]:
    """Keep reports matching every non-"all" filter, preserving input order.

    Gardens match by name because reports store the garden's name. An unknown
    garden id matches nothing.
    """
    garden_name: str | None = None
    if filters.garden != ALL:
        garden_name = _garden_name(filters.garden, gardens)
        if garden_name is None:
            return []

    def matches(report: Report) -> bool:
        if garden_name is not None and report.garden_name != garden_name:
            return False
        if filters.plant != ALL and report.plant_identifier != filters.plant:
            return False
        if filters.condition != ALL and filters.condition not in (report.condition_ids or ()):
            return False
        return True

    return [r for r in reports if matches(r)]


# ---------------------------------------------------------------------------
# Sort
# ---------------------------------------------------------------------------


def _text_key(value: str | None) -> tuple[str, str]:
    text = value or ""
    return (text.casefold(), text)


def _timestamp_key(report: Report) -> float:
    parsed = parse_report_timestamp(report.timestamp) or parse_report_timestamp(report.created_at)
    return parsed.timestamp() if parsed is not None else -math.inf


def sort_key_for(
    sort_field: SortField | str,
    *,
    conditions: Iterable[Condition] = (),
    condition_mode: ConditionSortMode | str = ConditionSortMode.DISPLAY_ORDER,
) -> Callable[[Report], tuple]:
    """Ascending sort key for *sort_field*; the report id breaks ties."""
    sort_field = SortField(sort_field)
    condition_mode = ConditionSortMode(condition_mode)

    if sort_field is SortField.DATE:
        def primary(r: Report) -> tuple:
            return (_timestamp_key(r),)
    elif sort_field is SortField.GARDEN:
        def primary(r: Report) -> tuple:
            return _text_key(r.garden_name)
    elif sort_field is SortField.CONDITION and condition_mode is ConditionSortMode.DISPLAY_ORDER:
        by_id = index_conditions(conditions)

        def primary(r: Report) -> tuple:
            order = min_display_order(r.condition_ids, by_id)
            # reports without a resolvable condition go after all others
            rank = (0, order) if order is not None else (1, 0)
            return (*rank, *_text_key(r.plant_identifier))
    else:
        # plantName, and the legacy condition sort, both compare plant identifiers
        def primary(r: Report) -> tuple:
            return _text_key(r.plant_identifier)

    return lambda r: (*primary(r), r.id if r.id is not None else -1)


def sort_reports(
    reports: Iterable[Report],
    sort_field: SortField | str = SortField.DATE,
    sort_order: SortOrder | str = SortOrder.DESC,
    *,
    conditions: Iterable[Condition] = (),
    condition_mode: ConditionSortMode | str = ConditionSortMode.DISPLAY_ORDER,
) -> list[Report]:
    """Sort by *sort_field*; descending is the exact reverse of ascending."""
    key = sort_key_for(sort_field, conditions=conditions, condition_mode=condition_mode)
    ascending = sorted(reports, key=key)
    if SortOrder(sort_order) is SortOrder.ASC:
        return ascending
    ascending.reverse()
    return ascending


# ---------------------------------------------------------------------------
# Paginate
# ---------------------------------------------------------------------------


def page_count_for(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if total > 0 else 0


def paginate(items: Sequence[Report], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """Slice one page. A page outside ``1..page_count`` falls back to page 1."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    total = len(items)
    page_count = page_count_for(total, page_size)
    if page < 1 or page > page_count:
        page = 1

    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        page=page,
        page_size=page_size,
        page_count=page_count,
        total=total,
    )


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def project(
    reports: Iterable[Report],
    state: ViewState,
    *,
    gardens: Iterable[Garden] = (),
    conditions: Iterable[Condition] = (),
    condition_mode: ConditionSortMode | str = ConditionSortMode.DISPLAY_ORDER,
) -> Page:
    """Filter, sort and paginate *reports* according to *state*."""
    conditions = list(conditions)
    filtered = filter_reports(reports, state.filters, list(gardens))
    ordered = sort_reports(
        filtered,
        state.sort_field,
        state.sort_order,
        conditions=conditions,
        condition_mode=condition_mode,
    )
    return paginate(ordered, state.page, state.page_size)


def plant_filter_options(reports: Iterable[Report]) -> list[str]:
    """Distinct plant identifiers for the plant dropdown, sorted."""
    return sorted({r.plant_identifier for r in reports if r.plant_identifier})
