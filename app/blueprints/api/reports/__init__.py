"""
Reports API Module
==================

Report endpoints organized by concern:
- dashboard.py: Dashboard projection, per-garden feed, detail and edit views
- crud.py: Create, update and delete
- export.py: PDF export and share text
"""

from flask import Blueprint

from app.utils.http import error_response

# Create blueprint here to avoid circular imports
reports_api = Blueprint("reports_api", __name__)


# Error handlers
@reports_api.errorhandler(404)
def not_found(error):
    """Handle 404 errors"""
    return error_response("Resource not found", 404)


@reports_api.errorhandler(405)
def method_not_allowed(error):
    """Handle 405 errors"""
    return error_response("Method not allowed", 405)


# Import submodules to register routes (must be after blueprint creation)
from . import crud, dashboard, export  # noqa: E402

__all__ = ["reports_api"]
