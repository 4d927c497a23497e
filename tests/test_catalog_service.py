"""Tests for CatalogService (gardens, plant types, plants, conditions)."""

from __future__ import annotations

import pytest

from app.domain.exceptions import ConflictError, NotFoundError, ValidationError


def test_create_garden_trims_and_rejects_blank(catalog_service):
    garden = catalog_service.create_garden("  Garden North  ")
    assert garden.name == "Garden North"

    with pytest.raises(ValidationError, match="Please enter a garden name"):
        catalog_service.create_garden("   ")
    with pytest.raises(ConflictError):
        catalog_service.create_garden("Garden North")


def test_gardens_have_no_rename(catalog_service):
    # reports match gardens by name, so a garden keeps the name it was created with
    assert not hasattr(catalog_service, "update_garden")
    assert not hasattr(catalog_service.repo, "update_garden")


def test_plant_type_crud(catalog_service):
    mango = catalog_service.create_plant_type("Mango")
    with pytest.raises(ValidationError, match="Please enter a plant type"):
        catalog_service.create_plant_type("")
    assert catalog_service.update_plant_type(mango.id, "Mangifera").name == "Mangifera"

    catalog_service.delete_plant_type(mango.id)
    with pytest.raises(NotFoundError):
        catalog_service.get_plant_type(mango.id)


def test_create_plant_validates_fields(catalog_service, garden_setup):
    garden = garden_setup["garden"]
    mango = garden_setup["types"]["Mango"]

    with pytest.raises(ValidationError, match="Please fill in all fields"):
        catalog_service.create_plant(garden.id, None, "Mango 9")
    with pytest.raises(ValidationError, match="Please fill in all fields"):
        catalog_service.create_plant(garden.id, mango.id, "  ")
    with pytest.raises(ConflictError):
        catalog_service.create_plant(garden.id, mango.id, "Mango 1")

    plant = catalog_service.create_plant(garden.id, mango.id, "Mango 9")
    assert plant.garden_name == "Garden A"
    assert plant.plant_type_name == "Mango"


def test_list_plants_newest_first_and_per_garden(catalog_service, garden_setup):
    garden = garden_setup["garden"]
    assert [p.plant_name for p in catalog_service.list_plants(garden.id)] == ["Mango 1", "Mango 2", "Orange 1"]
    assert catalog_service.list_plants()[0].plant_name == "Orange 1"


def test_move_plant_to_another_garden(catalog_service, garden_setup, seed):
    other = seed.garden("Garden B")
    plant = garden_setup["plants"]["Orange 1"]
    moved = catalog_service.update_plant(plant.id, other.id, plant.plant_type_id, "Orange 1")
    assert moved.garden_name == "Garden B"


def test_summary_counts(catalog_service, garden_setup):
    assert catalog_service.summary() == {"gardens": 1, "plant_types": 2, "plants": 3}


def test_create_condition_defaults(catalog_service):
    first = catalog_service.create_condition("Needs Water")
    assert first.slug == "needs-water"
    assert first.display_order == 1
    assert first.color == "#10B981"
    assert first.icon == "✅"

    second = catalog_service.create_condition("Pest Damage", slug="Bugs!", color="#EF4444", icon="🐛")
    assert second.slug == "bugs"
    assert second.display_order == 2

    with pytest.raises(ValidationError, match="Name and slug are required"):
        catalog_service.create_condition("  ")


def test_update_condition_partial(catalog_service):
    condition = catalog_service.create_condition("Healthy", display_order=5)
    updated = catalog_service.update_condition(condition.id, icon="🌿")
    assert updated.icon == "🌿"
    assert updated.name == "Healthy"
    assert updated.display_order == 5

    renamed = catalog_service.update_condition(condition.id, name="Thriving", slug="")
    assert renamed.slug == "thriving"


def test_toggle_condition(catalog_service):
    condition = catalog_service.create_condition("Healthy")
    toggled, message = catalog_service.toggle_condition(condition.id)
    assert toggled.is_active is False
    assert message == "Condition disabled!"
    assert catalog_service.list_conditions() == []
    assert len(catalog_service.list_conditions(include_inactive=True)) == 1

    toggled, message = catalog_service.toggle_condition(condition.id)
    assert toggled.is_active is True
    assert message == "Condition enabled!"


def test_delete_condition_leaves_reports_alone(catalog_service, seed, report_repo):
    condition = catalog_service.create_condition("Healthy")
    report = seed.report(condition_ids=[condition.id])

    catalog_service.delete_condition(condition.id)
    assert report_repo.get_report(report.id).condition_ids == [condition.id]
    with pytest.raises(NotFoundError):
        catalog_service.get_condition(condition.id)
