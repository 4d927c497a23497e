from __future__ import annotations

import atexit
import dataclasses
import logging
from typing import Any

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from app.blueprints.api.catalog import catalog_api
from app.blueprints.api.health import health_api
from app.blueprints.api.media import media_api, serve_media
from app.blueprints.api.reports import reports_api
from app.config import load_config, setup_logging
from app.extensions import init_extensions


def create_app(config_overrides: dict[str, Any] | None = None) -> Flask:
    config = load_config()
    if config_overrides:
        # replace() re-runs AppConfig validation on the overridden values
        config = dataclasses.replace(config, **{key.lower(): value for key, value in config_overrides.items()})

    # Configure logging early so container startup (schema creation, catalog seeding)
    # is visible in the terminal and gardenguard.log.
    setup_logging(debug=config.debug, log_dir=config.log_dir, level=config.log_level)

    flask_app = Flask(__name__, static_folder=None)
    flask_app.config.update(config.as_flask_config())

    init_extensions(flask_app)

    from app.services.container import ServiceContainer

    container = ServiceContainer.build(config)
    flask_app.config["CONTAINER"] = container
    flask_app.teardown_appcontext(container.database.close_db)
    atexit.register(container.shutdown)

    # Global JSON error handler for /api/ routes; returns a generic message
    # instead of a stack trace.
    # Domain exceptions carry their own ``http_status``.
    @flask_app.errorhandler(Exception)
    def _handle_unhandled(exc):
        from app.domain.exceptions import GardenGuardError
        from app.utils.http import error_response, safe_error

        if not request.path.startswith("/api/"):
            if isinstance(exc, HTTPException):
                return exc
            return safe_error(exc, 500, context="unhandled")

        if isinstance(exc, HTTPException):
            status = int(exc.code or 500)
            if status >= 500:
                return safe_error(exc, status, context="http-exception")
            return error_response(exc.description or "Request failed", status)

        if isinstance(exc, GardenGuardError):
            status = exc.http_status
            if status >= 500:
                return safe_error(exc, status, context=type(exc).__name__)
            # 4xx messages are written for the caller
            return error_response(str(exc) or "Request failed", status)

        return safe_error(exc, 500, context="unhandled")

    @flask_app.errorhandler(413)
    def _handle_too_large(_exc):
        from app.utils.http import error_response

        return error_response("Request payload too large", 413)

    # ── API version prefix ──────────────────────────────────────────
    V1 = "/api/v1"

    flask_app.register_blueprint(reports_api, url_prefix=f"{V1}/reports")
    flask_app.register_blueprint(catalog_api, url_prefix=f"{V1}/catalog")
    flask_app.register_blueprint(media_api, url_prefix=V1)
    flask_app.register_blueprint(health_api, url_prefix=f"{V1}/health")

    # Stored media is served under the configured prefix, outside the API
    flask_app.add_url_rule(f"{config.media_url_prefix.rstrip('/')}/<path:name>", "serve_media", serve_media)

    for bp_name, _bp in flask_app.blueprints.items():
        logging.info(f" Registered blueprint: {bp_name}")

    logger = logging.getLogger(__name__)
    logger.info("GardenGuard application initialized successfully.")

    return flask_app


__all__ = ["create_app"]
