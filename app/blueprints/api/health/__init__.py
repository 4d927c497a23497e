"""
Health API Blueprint
====================

Liveness and database checks.

Routes:
- GET /api/v1/health/ping - Basic liveness check
- GET /api/v1/health/database - Database connection health
- GET /api/v1/health - Combined status
"""

from __future__ import annotations

import logging

from flask import Blueprint

logger = logging.getLogger("health_api")

# Create the blueprint
health_api = Blueprint("health_api", __name__)

# Import and register routes from submodules
from app.blueprints.api.health.system import register_system_routes  # noqa: E402

# Register all routes on the blueprint
register_system_routes(health_api)

__all__ = ["health_api"]
