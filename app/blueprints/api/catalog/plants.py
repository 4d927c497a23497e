"""
Plant Catalog
=============

Endpoints for plants within gardens, plus the report-form helpers that list
the plant types and plants available in one garden.
"""

from __future__ import annotations

import logging

from flask import Response, request

from app.blueprints.api._common import get_catalog_service as _catalog_service
from app.blueprints.api._common import get_json
from app.blueprints.api._common import get_report_service as _report_service
from app.blueprints.api._common import success as _success
from app.schemas.catalog import PlantRequest
from app.utils.http import safe_route

from . import catalog_api

logger = logging.getLogger("catalog_api.plants")


@catalog_api.get("/summary")
@safe_route("Failed to load catalog summary")
def get_summary() -> Response:
    """Counts of gardens, plant types and plants."""
    return _success(_catalog_service().summary())


@catalog_api.get("/plants")
@safe_route("Failed to list plants")
def list_plants() -> Response:
    """List plants, newest first. Optional ``?garden_id=`` narrows to one garden."""
    garden_id = request.args.get("garden_id", type=int)
    plants = [p.to_dict() for p in _catalog_service().list_plants(garden_id)]
    return _success({"plants": plants, "count": len(plants)})


@catalog_api.get("/plants/<int:plant_id>")
@safe_route("Failed to load plant")
def get_plant(plant_id: int) -> Response:
    return _success(_catalog_service().get_plant(plant_id).to_dict())


@catalog_api.post("/plants")
@safe_route("Failed to add plant")
def create_plant() -> Response:
    """Body: {"garden_id": 1, "plant_type_id": 2, "plant_name": "Orange 11"}"""
    body = PlantRequest.model_validate(get_json())
    plant = _catalog_service().create_plant(body.garden_id, body.plant_type_id, body.plant_name)
    logger.info("Plant %s added to garden %s", plant.id, body.garden_id)
    return _success(plant.to_dict(), 201, message="Plant added!")


@catalog_api.put("/plants/<int:plant_id>")
@safe_route("Failed to update plant")
def update_plant(plant_id: int) -> Response:
    body = PlantRequest.model_validate(get_json())
    plant = _catalog_service().update_plant(plant_id, body.garden_id, body.plant_type_id, body.plant_name)
    return _success(plant.to_dict(), message="Plant updated!")


@catalog_api.delete("/plants/<int:plant_id>")
@safe_route("Failed to delete plant")
def delete_plant(plant_id: int) -> Response:
    _catalog_service().delete_plant(plant_id)
    return _success({"id": plant_id}, message="Plant deleted!")


# ============================================================================
# REPORT FORM HELPERS
# ============================================================================


@catalog_api.get("/gardens/<int:garden_id>/plant-types")
@safe_route("Failed to list plant types")
def list_garden_plant_types(garden_id: int) -> Response:
    """Distinct plant type names that have at least one plant in the garden."""
    return _success({"plant_types": _report_service().available_plant_types(garden_id)})


@catalog_api.get("/gardens/<int:garden_id>/plants")
@safe_route("Failed to list plants")
def list_garden_plants(garden_id: int) -> Response:
    """Plants in the garden, optionally narrowed by ``?plant_type=<name>``."""
    plant_type = request.args.get("plant_type") or None
    plants = [p.to_dict() for p in _report_service().available_plants(garden_id, plant_type)]
    return _success({"plants": plants, "count": len(plants)})
