"""
Media API
=========

- POST /api/v1/media        store uploaded files, return their URLs
- GET  <media_url_prefix>/<name>  serve a stored file

The serving view is registered by the app factory because its URL follows
the configured media prefix rather than the API version prefix.
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, abort, send_file

from app.blueprints.api._common import collect_uploads, get_payload
from app.blueprints.api._common import get_media_storage as _media_storage
from app.blueprints.api._common import success as _success
from app.domain.exceptions import ValidationError
from app.utils.http import error_response, safe_route

logger = logging.getLogger("media_api")

media_api = Blueprint("media_api", __name__)


@media_api.errorhandler(405)
def method_not_allowed(error):
    """Handle 405 errors"""
    return error_response("Method not allowed", 405)


@media_api.post("/media")
@safe_route("Failed to upload media")
def upload_media() -> Response:
    """
    Store one or more media blobs.

    Body:
        multipart ``media`` files and/or ``inline_media`` data URLs

    Returns:
        {"media": [{"url", "kind", "name"}, ...], "skipped": int}
    """
    payload = get_payload()
    inline_media = payload.get("inline_media") or []
    if isinstance(inline_media, str):
        inline_media = [inline_media]

    uploads = collect_uploads(inline_media)
    if not uploads:
        raise ValidationError("No media provided")

    stored = _media_storage().upload_many(uploads)
    skipped = len(uploads) - len(stored)
    if skipped:
        logger.warning("%d of %d uploads were skipped", skipped, len(uploads))
    media = [{"url": m.url, "kind": m.kind, "name": m.name} for m in stored]
    return _success({"media": media, "skipped": skipped}, 201 if media else 200)


def serve_media(name: str) -> Response:
    """Send a stored file; unknown or unsafe names are 404."""
    path = _media_storage().resolve(name)
    if path is None:
        abort(404)
    return send_file(path, conditional=True, max_age=86400)


__all__ = ["media_api", "serve_media"]
