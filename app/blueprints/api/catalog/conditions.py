"""
Condition Tags
==============

Admin endpoints for the tags attached to reports. Inactive tags are hidden
from badges and filters unless ``?include_inactive=true`` is given.
"""

from __future__ import annotations

import logging

from flask import Response, request

from app.blueprints.api._common import get_catalog_service as _catalog_service
from app.blueprints.api._common import get_json
from app.blueprints.api._common import success as _success
from app.schemas.catalog import CreateConditionRequest, UpdateConditionRequest
from app.utils.http import safe_route

from . import catalog_api

logger = logging.getLogger("catalog_api.conditions")


@catalog_api.get("/conditions")
@safe_route("Failed to list conditions")
def list_conditions() -> Response:
    include_inactive = request.args.get("include_inactive", "false").lower() in {"1", "true", "yes"}
    conditions = [c.to_dict() for c in _catalog_service().list_conditions(include_inactive)]
    return _success({"conditions": conditions, "count": len(conditions)})


@catalog_api.get("/conditions/<int:condition_id>")
@safe_route("Failed to load condition")
def get_condition(condition_id: int) -> Response:
    return _success(_catalog_service().get_condition(condition_id).to_dict())


@catalog_api.post("/conditions")
@safe_route("Failed to create condition")
def create_condition() -> Response:
    body = CreateConditionRequest.model_validate(get_json())
    condition = _catalog_service().create_condition(**body.model_dump())
    return _success(condition.to_dict(), 201, message="Condition created!")


@catalog_api.put("/conditions/<int:condition_id>")
@safe_route("Failed to update condition")
def update_condition(condition_id: int) -> Response:
    body = UpdateConditionRequest.model_validate(get_json())
    condition = _catalog_service().update_condition(condition_id, **body.model_dump(exclude_unset=True))
    return _success(condition.to_dict(), message="Condition updated!")


@catalog_api.post("/conditions/<int:condition_id>/toggle")
@safe_route("Failed to update condition")
def toggle_condition(condition_id: int) -> Response:
    condition, message = _catalog_service().toggle_condition(condition_id)
    return _success(condition.to_dict(), message=message)


@catalog_api.delete("/conditions/<int:condition_id>")
@safe_route("Failed to delete condition")
def delete_condition(condition_id: int) -> Response:
    _catalog_service().delete_condition(condition_id)
    return _success({"id": condition_id}, message="Condition deleted!")
