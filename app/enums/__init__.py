"""
Enums Module
============

This module provides enumeration types for the GardenGuard application.
Enums ensure type safety and consistency across the codebase.
"""

from app.enums.common import ConditionSortMode, HealthLevel, MediaKind, SortField, SortOrder

__all__ = [
    "ConditionSortMode",
    "HealthLevel",
    "MediaKind",
    "SortField",
    "SortOrder",
]
