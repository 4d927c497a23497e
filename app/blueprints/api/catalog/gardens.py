"""
Gardens & Plant Types
=====================

The two top-level catalog lists. Names are trimmed and must be unique;
deleting a garden or plant type cascades to its plants. Reports match
gardens by name, so gardens are never renamed.
"""

from __future__ import annotations

import logging

from flask import Response

from app.blueprints.api._common import get_catalog_service as _catalog_service
from app.blueprints.api._common import get_json
from app.blueprints.api._common import success as _success
from app.schemas.catalog import NameRequest
from app.utils.http import safe_route

from . import catalog_api

logger = logging.getLogger("catalog_api.gardens")


# ============================================================================
# GARDENS
# ============================================================================


@catalog_api.get("/gardens")
@safe_route("Failed to list gardens")
def list_gardens() -> Response:
    gardens = [g.to_dict() for g in _catalog_service().list_gardens()]
    return _success({"gardens": gardens, "count": len(gardens)})


@catalog_api.get("/gardens/<int:garden_id>")
@safe_route("Failed to load garden")
def get_garden(garden_id: int) -> Response:
    return _success(_catalog_service().get_garden(garden_id).to_dict())


@catalog_api.post("/gardens")
@safe_route("Failed to create garden")
def create_garden() -> Response:
    """Body: {"name": "Garden 4"}"""
    body = NameRequest.model_validate(get_json())
    garden = _catalog_service().create_garden(body.name)
    return _success(garden.to_dict(), 201, message="Garden added!")


@catalog_api.delete("/gardens/<int:garden_id>")
@safe_route("Failed to delete garden")
def delete_garden(garden_id: int) -> Response:
    _catalog_service().delete_garden(garden_id)
    return _success({"id": garden_id}, message="Garden deleted!")


# ============================================================================
# PLANT TYPES
# ============================================================================


@catalog_api.get("/plant-types")
@safe_route("Failed to list plant types")
def list_plant_types() -> Response:
    plant_types = [t.to_dict() for t in _catalog_service().list_plant_types()]
    return _success({"plant_types": plant_types, "count": len(plant_types)})


@catalog_api.get("/plant-types/<int:plant_type_id>")
@safe_route("Failed to load plant type")
def get_plant_type(plant_type_id: int) -> Response:
    return _success(_catalog_service().get_plant_type(plant_type_id).to_dict())


@catalog_api.post("/plant-types")
@safe_route("Failed to create plant type")
def create_plant_type() -> Response:
    body = NameRequest.model_validate(get_json())
    plant_type = _catalog_service().create_plant_type(body.name)
    return _success(plant_type.to_dict(), 201, message="Plant type added!")


@catalog_api.put("/plant-types/<int:plant_type_id>")
@safe_route("Failed to update plant type")
def update_plant_type(plant_type_id: int) -> Response:
    body = NameRequest.model_validate(get_json())
    plant_type = _catalog_service().update_plant_type(plant_type_id, body.name)
    return _success(plant_type.to_dict(), message="Plant type updated!")


@catalog_api.delete("/plant-types/<int:plant_type_id>")
@safe_route("Failed to delete plant type")
def delete_plant_type(plant_type_id: int) -> Response:
    _catalog_service().delete_plant_type(plant_type_id)
    return _success({"id": plant_type_id}, message="Plant type deleted!")
