"""
Schemas Module
==============

This module provides Pydantic models for request validation.
Schemas ensure data integrity and provide automatic validation.
"""

from app.schemas.catalog import CreateConditionRequest, NameRequest, PlantRequest, UpdateConditionRequest
from app.schemas.reports import DashboardQuery, ReportSelectionRequest, SubmitReportRequest

__all__ = [
    # Catalog
    "NameRequest",
    "PlantRequest",
    "CreateConditionRequest",
    "UpdateConditionRequest",
    # Reports
    "DashboardQuery",
    "SubmitReportRequest",
    "ReportSelectionRequest",
]
