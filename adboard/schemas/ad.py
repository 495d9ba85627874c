"""Ad Schemas — request/response models for advertisements.

Invariants:
    - AdCreate.title 1-100 chars, description 1-2000 chars, price >= 0 with 2 decimals
    - AdUpdate fields are all optional; only fields actually sent are applied
      (model_dump(exclude_unset=True))
    - AdUpdate rejects an explicit null for title, description, featured and status
    - AdStatus enum used for every status field
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from adboard.core.domain_types import (
    AD_DESCRIPTION_MAX_LENGTH, AD_TITLE_MAX_LENGTH, AdStatus,
)


class AdCreate(BaseModel):
    """Ad creation — creator comes from the X-User-Id header."""
    title: str = Field(min_length=1, max_length=AD_TITLE_MAX_LENGTH)
    description: str = Field(min_length=1, max_length=AD_DESCRIPTION_MAX_LENGTH)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    expiration_date: datetime | None = None
    featured: bool = False
    status: AdStatus = AdStatus.DRAFT
    category_ids: set[UUID] = Field(default_factory=set)
    tag_ids: set[UUID] = Field(default_factory=set)

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class AdUpdate(BaseModel):
    """Partial update: omitted fields are untouched, null clears nullable fields only."""
    title: str | None = Field(None, min_length=1, max_length=AD_TITLE_MAX_LENGTH)
    description: str | None = Field(
        None, min_length=1, max_length=AD_DESCRIPTION_MAX_LENGTH,
    )
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    expiration_date: datetime | None = None
    featured: bool | None = None
    status: AdStatus | None = None
    category_ids: set[UUID] | None = None
    tag_ids: set[UUID] | None = None

    @field_validator("featured", "status")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("cannot be null")
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class AdStatusUpdate(BaseModel):
    new_status: AdStatus
    expiration_date: datetime | None = None


class AdPublish(BaseModel):
    expiration_date: datetime | None = None


class AdResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    price: Decimal | None = None
    status: AdStatus
    creator_id: UUID
    creation_date: datetime
    modification_date: datetime | None = None
    publication_date: datetime | None = None
    expiration_date: datetime | None = None
    views: int
    featured: bool
    category_ids: set[UUID]
    tag_ids: set[UUID]


class ViewsResponse(BaseModel):
    id: UUID
    views: int


class ExpireResponse(BaseModel):
    affected: int
