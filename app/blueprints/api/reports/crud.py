"""
Report CRUD
===========

- POST /        create (JSON or multipart with ``media`` files)
- PUT  /<id>    update, same payload as create
- DELETE /<id>  delete the report and its stored media
"""
from __future__ import annotations

import logging

from flask import Response

from app.blueprints.api._common import collect_uploads, get_payload
from app.blueprints.api._common import get_report_service as _report_service
from app.blueprints.api._common import success as _success
from app.schemas.reports import SubmitReportRequest
from app.utils.http import safe_route

from . import reports_api

logger = logging.getLogger("reports_api.crud")


def _submit(report_id: int | None) -> Response:
    payload = SubmitReportRequest.model_validate(get_payload())
    result = _report_service().submit_report(
        payload.garden_id,
        payload.plant_id,
        payload.description,
        media_urls=payload.media_urls,
        media_kinds=payload.media_kinds,
        uploads=collect_uploads(payload.inline_media),
        condition_ids=payload.condition_ids,
        report_id=report_id,
    )
    data = {
        "report": result.report.to_dict(),
        "skipped_uploads": result.skipped_uploads,
    }
    return _success(data, 201 if result.created else 200, message=result.message)


@reports_api.post("")
@safe_route("Failed to save report")
def create_report() -> Response:
    """
    Create a report.

    Body (JSON or multipart):
        garden_id, plant_id, description (required)
        media_urls, media_kinds, inline_media, condition_ids (optional lists)
        media: uploaded files (multipart only)
    """
    return _submit(None)


@reports_api.put("/<int:report_id>")
@safe_route("Failed to update report")
def update_report(report_id: int) -> Response:
    return _submit(report_id)


@reports_api.delete("/<int:report_id>")
@safe_route("Failed to delete report")
def delete_report(report_id: int) -> Response:
    message = _report_service().delete_report(report_id)
    return _success({"id": report_id}, message=message)
