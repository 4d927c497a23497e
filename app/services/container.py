from __future__ import annotations

import logging
from dataclasses import dataclass, field

from app.config import AppConfig
from app.services.application.catalog_service import CatalogService
from app.services.application.export_service import ReportExportService
from app.services.application.report_service import ReportService
from app.services.application.share_service import ShareService
from app.services.container_builder import ContainerBuilder
from infrastructure.database.repositories.catalog import CatalogRepository
from infrastructure.database.repositories.reports import ReportRepository
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler
from infrastructure.storage.media_storage import MediaStorage

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Aggregate and manage core backend services."""

    config: AppConfig
    database: SQLiteDatabaseHandler
    report_repo: ReportRepository
    catalog_repo: CatalogRepository
    media_storage: MediaStorage
    report_service: ReportService
    catalog_service: CatalogService
    export_service: ReportExportService
    share_service: ShareService
    _shutdown_complete: bool = field(default=False, init=False, repr=False)

    @classmethod
    def build(cls, config: AppConfig) -> "ServiceContainer":
        """Construct the service container with all dependencies.

        Args:
            config: Application configuration
        """
        logger.info("Building ServiceContainer using ContainerBuilder...")
        builder = ContainerBuilder(config)
        container = cls(**builder.build())
        logger.info("ServiceContainer built successfully.")
        return container

    def shutdown(self) -> None:
        """Release external resources before process exit."""
        if self._shutdown_complete:
            return
        try:
            self.database.close_db()
        except Exception as e:
            logger.warning(f"Failed to close database: {e}")
        self._shutdown_complete = True
        logger.info("ServiceContainer shut down.")
