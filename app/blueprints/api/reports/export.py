"""
Report Export & Share
=====================

- POST /export/pdf     selected reports as a PDF attachment
- POST /share          bulk share text + wa.me link for selected reports
- GET  /<id>/share     single-report share text + link
"""
from __future__ import annotations

import logging
from io import BytesIO

from flask import Response, send_file

from app.blueprints.api._common import get_export_service as _export_service
from app.blueprints.api._common import get_json
from app.blueprints.api._common import get_report_service as _report_service
from app.blueprints.api._common import get_share_service as _share_service
from app.blueprints.api._common import success as _success
from app.schemas.reports import ReportSelectionRequest
from app.utils.http import safe_route

from . import reports_api

logger = logging.getLogger("reports_api.export")


def _selected_reports():
    selection = ReportSelectionRequest.model_validate(get_json())
    return _report_service().get_reports(selection.ids)


@reports_api.post("/export/pdf")
@safe_route("An error occurred while generating PDF.")
def export_pdf() -> Response:
    """
    Body: {"ids": [3, 1, 2]}

    Returns:
        application/pdf attachment named garden_report_<epoch-ms>.pdf
    """
    exporter = _export_service()
    pdf = exporter.render_pdf(_selected_reports())
    response = send_file(
        BytesIO(pdf),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=exporter.filename(),
    )
    response.headers["X-Toast-Message"] = "PDF Downloaded!"
    return response


@reports_api.post("/share")
@safe_route("Failed to build share text")
def share_reports() -> Response:
    """Body: {"ids": [...]}; returns {"text": ..., "url": "https://wa.me/?text=..."}."""
    return _success(_share_service().share_bulk(_selected_reports()))


@reports_api.get("/<int:report_id>/share")
@safe_route("Failed to build share text")
def share_report(report_id: int) -> Response:
    report = _report_service().get_report(report_id)
    return _success(_share_service().share_single(report))
