"""
Catalog Schemas
===============

Request schemas for garden, plant type, plant and condition endpoints.
"""

from pydantic import BaseModel, Field


class NameRequest(BaseModel):
    """Create/rename payload for gardens and plant types."""

    name: str | None = Field(default=None, description="Display name")


class PlantRequest(BaseModel):
    """Create/update payload for a plant."""

    garden_id: int | None = Field(default=None, description="Owning garden")
    plant_type_id: int | None = Field(default=None, description="Plant type")
    plant_name: str | None = Field(default=None, description="Display name, unique within the garden")


class CreateConditionRequest(BaseModel):
    """Request schema for creating a condition tag."""

    name: str | None = Field(default=None, description="Display name (required)")
    slug: str | None = Field(default=None, description="URL-safe key; generated from name when blank")
    color: str | None = Field(default=None, max_length=32, description="Badge color, e.g. #10B981")
    icon: str | None = Field(default=None, max_length=16, description="Badge icon (emoji)")
    display_order: int | None = Field(default=None, description="Sort position; defaults to count + 1")
    is_active: bool = Field(default=True, description="Inactive tags are hidden from badges and filters")


class UpdateConditionRequest(BaseModel):
    """Partial update; only fields present in the body change."""

    name: str | None = None
    slug: str | None = None
    color: str | None = Field(default=None, max_length=32)
    icon: str | None = Field(default=None, max_length=16)
    display_order: int | None = None
    is_active: bool | None = None
