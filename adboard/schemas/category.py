"""Category Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - CategoryCreate.name: 1-50 chars, stripped, non-empty
    - Responses are built from core dataclasses (from_attributes)
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from adboard.core.domain_types import (
    CATEGORY_NAME_MAX_LENGTH, CATEGORY_DESCRIPTION_MAX_LENGTH,
)


class CategoryCreate(BaseModel):
    """Create/update payload. parent_category_id null = root level."""
    name: str = Field(min_length=1, max_length=CATEGORY_NAME_MAX_LENGTH)
    description: str | None = Field(None, max_length=CATEGORY_DESCRIPTION_MAX_LENGTH)
    parent_category_id: UUID | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class CategoryMove(BaseModel):
    new_parent_id: UUID | None = None


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    parent_id: UUID | None = None


class CategoryTreeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    parent_id: UUID | None = None
    children: list["CategoryTreeResponse"] = []


CategoryTreeResponse.model_rebuild()


class CategorySelectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    parent_id: UUID | None = None
    has_children: bool


class CountResponse(BaseModel):
    id: UUID
    count: int
