"""Repository facades returning domain entities from the SQLite handler."""

from infrastructure.database.repositories.catalog import CatalogRepository
from infrastructure.database.repositories.reports import ReportRepository

__all__ = [
    "CatalogRepository",
    "ReportRepository",
]
