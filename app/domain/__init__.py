"""
Domain Package
==============
Entities and pure transformations for garden reports.

Nothing in here touches Flask, SQLite or the filesystem; services and
repositories hand plain entities in and get plain entities back.
"""

from .catalog import Condition, Garden, Plant, PlantType
from .conditions import lookup_condition, resolve_badges, slugify_condition_name
from .media import EmptyMedia, MediaAsset, MultipleMedia, SingleMedia, classify_media, normalize_media
from .projection import Page, ReportFilters, ViewState, filter_reports, paginate, project, sort_reports
from .report import Report

__all__ = [
    # Catalog
    "Garden",
    "PlantType",
    "Plant",
    "Condition",
    # Reports
    "Report",
    # Media
    "MediaAsset",
    "EmptyMedia",
    "SingleMedia",
    "MultipleMedia",
    "classify_media",
    "normalize_media",
    # Conditions
    "lookup_condition",
    "resolve_badges",
    "slugify_condition_name",
    # Projection
    "ReportFilters",
    "ViewState",
    "Page",
    "filter_reports",
    "sort_reports",
    "paginate",
    "project",
]
