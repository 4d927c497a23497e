"""
System Health Endpoints
=======================

Core system health monitoring endpoints.
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response

from app.blueprints.api._common import get_container as _container
from app.blueprints.api._common import success as _success
from app.enums.common import HealthLevel
from app.utils.http import safe_route
from app.utils.time import iso_now

logger = logging.getLogger("health_api")


def _check_database() -> dict:
    """Run a trivial query and count the main tables."""
    container = _container()
    try:
        with container.database.connection() as conn:
            conn.execute("SELECT 1").fetchone()
            tables = {
                table: conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
                for table in ("gardens", "plant_types", "plants", "conditions", "reports")
            }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {"status": "error", "tables": {}}
    return {"status": "connected", "tables": tables}


def register_system_routes(health_api: Blueprint):
    """Register system health routes on the blueprint."""

    @health_api.get("/ping")
    @safe_route("Failed to handle ping request")
    def ping() -> Response:
        """
        Basic liveness check for monitoring tools.

        Returns:
            {"status": "ok", "timestamp": "..."}
        """
        return _success({"status": "ok", "timestamp": iso_now()})

    @health_api.get("/database")
    @safe_route("Failed to check database health")
    def get_database_health() -> Response:
        """
        Check database connection health.

        Returns:
            {"status": "connected|error", "tables": {"reports": int, ...}}
        """
        return _success(_check_database())

    @health_api.get("")
    @safe_route("Failed to get system health")
    def get_system_health() -> Response:
        database = _check_database()
        status = HealthLevel.HEALTHY if database["status"] == "connected" else HealthLevel.CRITICAL
        return _success(
            {
                "status": str(status),
                "database": database,
                "timestamp": iso_now(),
            }
        )
