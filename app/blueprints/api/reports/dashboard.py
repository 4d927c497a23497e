"""
Report Views
============

Read-only endpoints:
- GET /                     dashboard projection (filter, sort, paginate)
- GET /gardens/<id>/feed    one garden's reports, newest first
- GET /<id>                 report detail
- GET /<id>/edit            edit-form working state
"""
from __future__ import annotations

import logging

from flask import Response, request

from app.blueprints.api._common import get_report_service as _report_service
from app.blueprints.api._common import success as _success
from app.schemas.reports import DashboardQuery
from app.utils.http import safe_route

from . import reports_api

logger = logging.getLogger("reports_api.dashboard")


@reports_api.get("")
@safe_route("Failed to load reports")
def get_dashboard() -> Response:
    """
    Dashboard listing.

    Query params:
        garden: 'all' or garden id
        plant: 'all' or plant identifier
        condition: 'all' or condition id
        sort: date | plantName | garden | condition
        order: asc | desc
        page, page_size: pagination (page outside range falls back to 1)

    Returns:
        {"items": [...], "pagination": {...}, "view": {...}, "filter_options": {...}}
    """
    service = _report_service()
    query = DashboardQuery.model_validate(request.args.to_dict())
    state = query.to_view_state(service.page_size)
    return _success(service.project_dashboard(state))


@reports_api.get("/gardens/<int:garden_id>/feed")
@safe_route("Failed to load garden feed")
def get_garden_feed(garden_id: int) -> Response:
    return _success(_report_service().list_feed(garden_id))


@reports_api.get("/<int:report_id>")
@safe_route("Failed to load report")
def get_report(report_id: int) -> Response:
    return _success(_report_service().get_report_detail(report_id))


@reports_api.get("/<int:report_id>/edit")
@safe_route("Failed to load report for editing")
def get_report_edit_form(report_id: int) -> Response:
    return _success(_report_service().get_edit_form(report_id))
