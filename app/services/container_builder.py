"""
Container Builder
=================

Extracts service container construction logic from ServiceContainer.build().

Each build_*() method constructs one layer:
- build_infrastructure(): database handler, repositories, media storage
- build_application_components(): report, catalog, export and share services
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.config import AppConfig
from app.services.application.catalog_service import CatalogService
from app.services.application.export_service import ReportExportService
from app.services.application.report_service import ReportService
from app.services.application.share_service import ShareService
from infrastructure.database.repositories.catalog import CatalogRepository
from infrastructure.database.repositories.reports import ReportRepository
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler
from infrastructure.storage.media_storage import MediaStorage

logger = logging.getLogger(__name__)


@dataclass
class InfrastructureComponents:
    """Infrastructure layer components (database, repos, blob storage)."""

    database: SQLiteDatabaseHandler
    report_repo: ReportRepository
    catalog_repo: CatalogRepository
    media_storage: MediaStorage


@dataclass
class ApplicationComponents:
    """Application services used by the blueprints."""

    report_service: ReportService
    catalog_service: CatalogService
    export_service: ReportExportService
    share_service: ShareService


class ContainerBuilder:
    """Builds every component the ServiceContainer holds."""

    def __init__(self, config: AppConfig):
        self.config = config

    def build_infrastructure(self) -> InfrastructureComponents:
        """
        Build infrastructure layer (database, repositories, media storage).

        Returns:
            InfrastructureComponents with all infrastructure services
        """
        logger.info("Building infrastructure components...")

        database = SQLiteDatabaseHandler(self.config.database_path, seed_catalog=self.config.seed_catalog)
        database.init_app(None)

        return InfrastructureComponents(
            database=database,
            report_repo=ReportRepository(database),
            catalog_repo=CatalogRepository(database),
            media_storage=MediaStorage(self.config.media_dir, self.config.media_url_prefix),
        )

    def build_application_components(self, infra: InfrastructureComponents) -> ApplicationComponents:
        logger.info("Building application services...")
        return ApplicationComponents(
            report_service=ReportService(
                infra.report_repo,
                infra.catalog_repo,
                infra.media_storage,
                page_size=self.config.page_size,
                condition_sort_mode=self.config.condition_sort_mode,
            ),
            catalog_service=CatalogService(infra.catalog_repo),
            export_service=ReportExportService(),
            share_service=ShareService(self.config.share_base_url),
        )

    def build(self) -> dict[str, Any]:
        """
        Build the complete service container.

        Returns:
            Dictionary with all components for ServiceContainer construction
        """
        infra = self.build_infrastructure()
        app_components = self.build_application_components(infra)

        return {
            "config": self.config,
            "database": infra.database,
            "report_repo": infra.report_repo,
            "catalog_repo": infra.catalog_repo,
            "media_storage": infra.media_storage,
            "report_service": app_components.report_service,
            "catalog_service": app_components.catalog_service,
            "export_service": app_components.export_service,
            "share_service": app_components.share_service,
        }
