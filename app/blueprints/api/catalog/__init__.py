"""
Catalog API Module
==================

Plant management endpoints organized by entity:
- gardens.py: Gardens and plant types
- plants.py: Plants and the catalog summary
- conditions.py: Condition tags
"""

from flask import Blueprint

from app.utils.http import error_response

# Create blueprint here to avoid circular imports
catalog_api = Blueprint("catalog_api", __name__)


# Error handlers
@catalog_api.errorhandler(404)
def not_found(error):
    """Handle 404 errors"""
    return error_response("Resource not found", 404)


@catalog_api.errorhandler(405)
def method_not_allowed(error):
    """Handle 405 errors"""
    return error_response("Method not allowed", 405)


# Import submodules to register routes (must be after blueprint creation)
from . import conditions, gardens, plants  # noqa: E402

__all__ = ["catalog_api"]
