"""
Shared test fixtures for the GardenGuard test suite.

Provides:
- In-memory SQLite database with all tables created
- Repository instances wired to the test database
- Media storage rooted in a temporary directory
- Service factories for the application services
- Helper utilities for seeding test data
- A Flask app/client backed by a temporary database file

Usage:
    def test_example(catalog_repo):
        garden = catalog_repo.create_garden("Garden A")
        assert garden is not None
"""

from __future__ import annotations

import logging
from typing import Any

import pytest

from app.domain.catalog import Condition, Garden
from app.domain.report import Report
from app.services.application.catalog_service import CatalogService
from app.services.application.report_service import ReportService
from infrastructure.database.repositories.catalog import CatalogRepository
from infrastructure.database.repositories.reports import ReportRepository

# ---------------------------------------------------------------------------
# Database & Repositories
# ---------------------------------------------------------------------------
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler
from infrastructure.storage.media_storage import MediaStorage

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.getLogger("infrastructure").setLevel(logging.WARNING)
logging.getLogger("app").setLevel(logging.WARNING)


# ========================== Database Fixtures ==============================


@pytest.fixture()
def db_handler():
    """In-memory SQLite database with all tables created.

    Each test gets a fresh database — no cross-test contamination.
    """
    handler = SQLiteDatabaseHandler(":memory:")
    handler.create_tables()
    yield handler


@pytest.fixture()
def db_connection(db_handler):
    """Raw sqlite3 connection for direct SQL in tests."""
    with db_handler.connection() as conn:
        yield conn


# ========================== Repository Fixtures ============================


@pytest.fixture()
def report_repo(db_handler):
    """ReportRepository backed by the in-memory DB."""
    return ReportRepository(db_handler)


@pytest.fixture()
def catalog_repo(db_handler):
    """CatalogRepository backed by the in-memory DB."""
    return CatalogRepository(db_handler)


@pytest.fixture()
def media_storage(tmp_path):
    """MediaStorage writing into a per-test directory."""
    return MediaStorage(str(tmp_path / "media"), url_prefix="/media")


# ========================== Service Fixtures ===============================


@pytest.fixture()
def catalog_service(catalog_repo):
    return CatalogService(catalog_repo)


@pytest.fixture()
def report_service(report_repo, catalog_repo, media_storage):
    return ReportService(report_repo, catalog_repo, media_storage, page_size=10)


# ========================== Seed Helpers ===================================


class SeedData:
    """Helper to create a small catalog in the test database."""

    def __init__(self, catalog_repo: CatalogRepository, report_repo: ReportRepository):
        self.catalog = catalog_repo
        self.reports = report_repo

    def garden(self, name: str = "Garden A") -> Garden:
        garden = self.catalog.create_garden(name)
        assert garden is not None
        return garden

    def plant_type(self, name: str = "Mango"):
        plant_type = self.catalog.create_plant_type(name)
        assert plant_type is not None
        return plant_type

    def plant(self, garden_id: int, plant_type_id: int, name: str = "Mango 1"):
        plant = self.catalog.create_plant(garden_id, plant_type_id, name)
        assert plant is not None
        return plant

    def condition(self, name: str, display_order: int, *, is_active: bool = True) -> Condition:
        slug = name.lower().replace(" ", "-")
        condition = self.catalog.create_condition(name, slug, "#10B981", "✅", display_order, is_active)
        assert condition is not None
        return condition

    def report(self, garden_name: str = "Garden A", plant: str = "Mango 1", **overrides: Any) -> Report:
        fields: dict[str, Any] = {
            "timestamp": "2026-10-19T09:00:00+00:00",
            "type_name": "Mango",
            "description": "Leaves look fine",
        }
        fields.update(overrides)
        report = self.reports.create_report(garden_name, plant, **fields)
        assert report is not None
        return report


@pytest.fixture()
def seed(catalog_repo, report_repo):
    return SeedData(catalog_repo, report_repo)


@pytest.fixture()
def garden_setup(seed):
    """One garden with two plant types and three plants."""
    garden = seed.garden("Garden A")
    mango = seed.plant_type("Mango")
    orange = seed.plant_type("Orange")
    plants = {
        "Mango 1": seed.plant(garden.id, mango.id, "Mango 1"),
        "Mango 2": seed.plant(garden.id, mango.id, "Mango 2"),
        "Orange 1": seed.plant(garden.id, orange.id, "Orange 1"),
    }
    return {"garden": garden, "types": {"Mango": mango, "Orange": orange}, "plants": plants}


# ========================== Flask Fixtures =================================


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("GARDENGUARD_SECRET_KEY", "test-secret")
    app = _create_test_app(tmp_path)
    yield app
    app.config["CONTAINER"].shutdown()


@pytest.fixture()
def make_app(tmp_path):
    """Factory for apps with extra config overrides, e.g. ``make_app(seed_catalog=True)``."""
    created = []

    def _make(**overrides: Any):
        app = _create_test_app(tmp_path, **overrides)
        created.append(app)
        return app

    yield _make
    for app in created:
        app.config["CONTAINER"].shutdown()


def _create_test_app(tmp_path, **overrides: Any):
    from app import create_app

    config = {
        "database_path": str(tmp_path / "test.db"),
        "media_dir": str(tmp_path / "media"),
        "log_dir": str(tmp_path / "logs"),
        "seed_catalog": False,
    }
    config.update(overrides)
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def container(app):
    return app.config["CONTAINER"]
