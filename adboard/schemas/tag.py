"""Tag Schemas — request/response models for tags.

Invariants:
    - Normalization (strip + lowercase) happens in core.tag_rules, not here,
      so the same rule applies to every caller
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TagCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class TagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class TagUsageResponse(TagResponse):
    ad_count: int
