"""Tests for the report and catalog repositories."""

from __future__ import annotations

import json

from infrastructure.database.sqlite_handler import SEED_CONDITIONS, SQLiteDatabaseHandler
from infrastructure.database.repositories.catalog import CatalogRepository

# ============================================================================
# Reports
# ============================================================================


def test_create_report_stores_array_media(report_repo, db_connection):
    report = report_repo.create_report(
        "Garden A",
        "Mango 1",
        "2026-10-19T09:00:00+00:00",
        type_name="Mango",
        description="Fruit set",
        media_urls=["/media/a.jpg", "/media/b.mp4"],
        media_kinds=["image/jpeg", "video/mp4"],
        condition_ids=[4, 1],
    )
    assert report is not None
    assert report.media_urls == ["/media/a.jpg", "/media/b.mp4"]
    assert report.condition_ids == [4, 1]

    row = db_connection.execute("SELECT media, media_type, condition_ids FROM reports WHERE id = ?", (report.id,)).fetchone()
    assert json.loads(row["media"]) == ["/media/a.jpg", "/media/b.mp4"]
    assert json.loads(row["media_type"]) == ["image/jpeg", "video/mp4"]
    assert json.loads(row["condition_ids"]) == [4, 1]


def test_legacy_scalar_media_rows_are_normalized(report_repo, db_connection):
    db_connection.execute(
        """
        INSERT INTO reports (garden, type, plant_id, description, media, media_type, date)
        VALUES ('Garden A', 'Mango', 'Mango 2', 'Old', 'https://cdn.test/x.mp4', 'video/mp4', '10/19/2026, 9:05:12 AM')
        """
    )
    db_connection.commit()

    [report] = report_repo.list_reports()
    assert report.media_urls == ["https://cdn.test/x.mp4"]
    assert report.media_kinds == ["video/mp4"]
    assert report.condition_ids == []


def test_list_reports_newest_first_and_by_garden(seed, report_repo):
    first = seed.report("Garden A", created_at="2026-10-01T00:00:00+00:00")
    second = seed.report("Garden B", created_at="2026-10-02T00:00:00+00:00")
    third = seed.report("Garden A", created_at="2026-10-03T00:00:00+00:00")

    assert [r.id for r in report_repo.list_reports()] == [third.id, second.id, first.id]
    assert [r.id for r in report_repo.list_reports("Garden A")] == [third.id, first.id]
    assert report_repo.list_reports("Nowhere") == []


def test_get_reports_keeps_selection_order(seed, report_repo):
    a = seed.report()
    b = seed.report()
    c = seed.report()
    result = report_repo.get_reports([c.id, a.id, 999, c.id, b.id])
    assert [r.id for r in result] == [c.id, a.id, b.id]
    assert report_repo.get_reports([]) == []


def test_update_report_is_partial(seed, report_repo):
    report = seed.report(description="Before", condition_ids=[1])
    updated = report_repo.update_report(report.id, description="After")
    assert updated.description == "After"
    assert updated.condition_ids == [1]
    assert updated.timestamp == report.timestamp


def test_update_report_replaces_media_pair(seed, report_repo):
    report = seed.report(media_urls=["/media/a.jpg"], media_kinds=["image/jpeg"])
    updated = report_repo.update_report(report.id, media_urls=["/media/b.mp4"], media_kinds=["video/mp4"])
    assert updated.media_urls == ["/media/b.mp4"]
    assert updated.media_kinds == ["video/mp4"]


def test_update_missing_report_returns_none(report_repo):
    assert report_repo.update_report(404, description="x") is None


def test_delete_report(seed, report_repo):
    report = seed.report()
    assert report_repo.delete_report(report.id) is True
    assert report_repo.delete_report(report.id) is False
    assert report_repo.get_report(report.id) is None
    assert report_repo.count_reports() == 0


# ============================================================================
# Catalog
# ============================================================================


def test_garden_names_are_unique(catalog_repo):
    assert catalog_repo.create_garden("Garden A") is not None
    assert catalog_repo.create_garden("Garden A") is None
    assert [g.name for g in catalog_repo.list_gardens()] == ["Garden A"]


def test_plants_join_garden_and_type_names(garden_setup, catalog_repo):
    garden = garden_setup["garden"]
    plants = catalog_repo.list_plants_by_garden(garden.id)
    assert [p.plant_name for p in plants] == ["Mango 1", "Mango 2", "Orange 1"]
    assert {p.garden_name for p in plants} == {"Garden A"}
    assert plants[2].plant_type_name == "Orange"


def test_plant_name_unique_within_garden(garden_setup, catalog_repo, seed):
    garden = garden_setup["garden"]
    mango = garden_setup["types"]["Mango"]
    assert catalog_repo.create_plant(garden.id, mango.id, "Mango 1") is None

    other = seed.garden("Garden B")
    assert catalog_repo.create_plant(other.id, mango.id, "Mango 1") is not None


def test_deleting_garden_cascades_to_plants(garden_setup, catalog_repo):
    garden = garden_setup["garden"]
    assert catalog_repo.delete_garden(garden.id) is True
    assert catalog_repo.list_plants_by_garden(garden.id) == []
    assert catalog_repo.count_plants() == 0


def test_update_plant(garden_setup, catalog_repo):
    plant = garden_setup["plants"]["Mango 2"]
    updated = catalog_repo.update_plant(plant.id, plant_name="Mango 20")
    assert updated.plant_name == "Mango 20"
    assert catalog_repo.update_plant(9999, plant_name="x") is None


def test_conditions_ordered_and_filtered_by_active(seed, catalog_repo):
    seed.condition("Flowering", 3)
    seed.condition("Healthy", 1)
    seed.condition("Retired", 2, is_active=False)

    assert [c.name for c in catalog_repo.list_conditions()] == ["Healthy", "Flowering"]
    assert [c.name for c in catalog_repo.list_conditions(active_only=False)] == ["Healthy", "Retired", "Flowering"]


def test_update_condition_toggles_active(seed, catalog_repo):
    condition = seed.condition("Healthy", 1)
    updated = catalog_repo.update_condition(condition.id, is_active=False, color="#000000")
    assert updated.is_active is False
    assert updated.color == "#000000"


def test_seeded_catalog():
    handler = SQLiteDatabaseHandler(":memory:", seed_catalog=True)
    handler.create_tables()
    repo = CatalogRepository(handler)

    assert [g.name for g in repo.list_gardens()] == ["Garden 1", "Garden 2", "Garden 3"]
    assert len(repo.list_plant_types()) == 5
    assert repo.count_plants() == 150
    assert [c.slug for c in repo.list_conditions()] == [row[1] for row in SEED_CONDITIONS]

    # seeding runs only against empty tables
    handler.create_tables()
    assert repo.count_plants() == 150
