"""
Service Organization
====================

**application/**
  Singleton services managed by ServiceContainer. One instance per application.
  Examples: ReportService, CatalogService, ReportExportService, ShareService

Construction lives in ``container_builder.ContainerBuilder``; blueprints reach
the services through ``app.blueprints.api._common``.
"""

from .application.catalog_service import CatalogService
from .application.export_service import ReportExportService
from .application.report_service import ReportService, SubmissionResult
from .application.share_service import ShareService

__all__ = [
    "CatalogService",
    "ReportExportService",
    "ReportService",
    "ShareService",
    "SubmissionResult",
]
