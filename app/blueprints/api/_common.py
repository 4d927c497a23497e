"""
Blueprint Common Utilities
==========================

Shared helper functions for all API blueprints.
Import these instead of duplicating helper code in each blueprint.

Usage:
    from app.blueprints.api._common import (
        get_container, get_json, get_payload, success,
        get_report_service, get_catalog_service, ...
    )

This module centralizes:
- Service container access
- Request JSON / multipart parsing
- Standardized response helpers
- Common service accessors
"""
from __future__ import annotations

import json
import logging
from typing import Any

from flask import current_app, request

from app.domain.exceptions import MediaError
from app.utils.http import success_response
from infrastructure.storage.media_storage import MediaUpload, decode_data_url

logger = logging.getLogger("api._common")

_LIST_FIELDS = {"media_urls", "media_kinds", "condition_ids"}

# ============================================================================
# CONTAINER ACCESS
# ============================================================================


def get_container():
    """
    Get the service container from Flask app config.

    Returns:
        ServiceContainer: The application service container

    Raises:
        RuntimeError: If container is not configured
    """
    container = current_app.config.get("CONTAINER")
    if not container:
        raise RuntimeError("ServiceContainer not found in app config")
    return container


# ============================================================================
# REQUEST HELPERS
# ============================================================================


def get_json() -> dict:
    """
    Get JSON request body with silent failure.

    Returns:
        dict: Parsed JSON body or empty dict if not available
    """
    return request.get_json(silent=True) or {}


def get_form_list(name: str) -> list[str]:
    """
    Read a list-valued multipart field.

    Accepts repeated fields (``name=a&name=b``), a single JSON array string,
    or a comma-separated string.
    """
    values = [v for v in request.form.getlist(name) if v != ""]
    if len(values) == 1:
        raw = values[0].strip()
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
            except ValueError:
                logger.debug("Field %s is not a JSON array, splitting on commas", name)
            else:
                if isinstance(parsed, list):
                    return [str(v) for v in parsed]
        if raw.startswith("data:"):
            return [raw]
        return [v.strip() for v in raw.split(",") if v.strip()]
    return values


def get_payload() -> dict[str, Any]:
    """
    Merge JSON or multipart form fields into one dict for schema validation.

    Multipart list fields (``media_urls``, ``condition_ids`` and friends) are read with
    :func:`get_form_list`; uploaded files are left on ``request.files``.
    """
    if request.is_json:
        return get_json()

    payload: dict[str, Any] = {}
    for key in request.form.keys():
        if key in _LIST_FIELDS:
            payload[key] = get_form_list(key)
        elif key == "inline_media":
            # data: URLs contain commas, so only repeated fields are accepted
            payload[key] = [v for v in request.form.getlist(key) if v]
        else:
            payload[key] = request.form.get(key)
    return payload


def collect_uploads(inline_media: list[str] | None = None) -> list[MediaUpload]:
    """
    Gather uploaded ``media`` files plus decoded ``data:`` URLs.

    Inline entries that fail to decode are logged and skipped.
    """
    uploads: list[MediaUpload] = []
    for storage in request.files.getlist("media"):
        if not storage or not storage.filename:
            continue
        uploads.append(
            MediaUpload(data=storage.read(), filename=storage.filename, content_type=storage.mimetype or "")
        )

    for value in inline_media or []:
        try:
            uploads.append(decode_data_url(value))
        except MediaError as exc:
            logger.warning("Skipping inline media: %s", exc)
    return uploads


# ============================================================================
# RESPONSE HELPERS
# ============================================================================


def success(data: dict | list | None = None, status: int = 200, *, message: str | None = None):
    """
    Standard success response wrapper.

    Args:
        data: Response data (dict or list)
        status: HTTP status code (default 200)
        message: Optional success message

    Returns:
        Flask Response with format: {"ok": true, "data": ..., "error": null}
    """
    return success_response(data, status, message=message)


# ============================================================================
# SERVICE ACCESSORS
# ============================================================================


def get_report_service():
    """
    Get report service from container.

    Raises:
        RuntimeError: If service not available
    """
    container = get_container()
    if not getattr(container, "report_service", None):
        raise RuntimeError("Report service not available")
    return container.report_service


def get_catalog_service():
    """
    Get catalog service from container.

    Raises:
        RuntimeError: If service not available
    """
    container = get_container()
    if not getattr(container, "catalog_service", None):
        raise RuntimeError("Catalog service not available")
    return container.catalog_service


def get_export_service():
    """
    Get PDF export service from container.

    Raises:
        RuntimeError: If service not available
    """
    container = get_container()
    if not getattr(container, "export_service", None):
        raise RuntimeError("Export service not available")
    return container.export_service


def get_share_service():
    """
    Get share-text service from container.

    Raises:
        RuntimeError: If service not available
    """
    container = get_container()
    if not getattr(container, "share_service", None):
        raise RuntimeError("Share service not available")
    return container.share_service


def get_media_storage():
    """
    Get media storage from container.

    Raises:
        RuntimeError: If storage not available
    """
    container = get_container()
    if not getattr(container, "media_storage", None):
        raise RuntimeError("Media storage not available")
    return container.media_storage
