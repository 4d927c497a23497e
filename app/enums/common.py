"""
Common Enumerations
====================

Enums shared by the report dashboard, the media normalizer and the
configuration layer.
"""

from enum import Enum


class SortField(str, Enum):
    """
    Sort keys offered by the report dashboard.
    Values match the query-string tokens the dashboard sends.
    """
    DATE = "date"
    PLANT_NAME = "plantName"
    GARDEN = "garden"
    CONDITION = "condition"

    def __str__(self) -> str:
        return self.value


class SortOrder(str, Enum):
    """Sort direction."""
    ASC = "asc"
    DESC = "desc"

    def __str__(self) -> str:
        return self.value


class ConditionSortMode(str, Enum):
    """
    How the ``condition`` sort key orders reports.

    PLANT_IDENTIFIER reproduces the legacy dashboard, whose condition sort
    compared plant identifiers. DISPLAY_ORDER sorts by the lowest display
    order among the report's conditions.
    """
    PLANT_IDENTIFIER = "plant_identifier"
    DISPLAY_ORDER = "display_order"

    def __str__(self) -> str:
        return self.value


class MediaKind(str, Enum):
    """Render class of an attached media asset."""
    IMAGE = "image"
    VIDEO = "video"

    def __str__(self) -> str:
        return self.value


class HealthLevel(str, Enum):
    """
    Component health levels.
    Used by: health API
    """
    HEALTHY = "healthy"
    CRITICAL = "critical"

    def __str__(self) -> str:
        return self.value
