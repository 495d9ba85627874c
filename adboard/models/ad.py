"""Ad ORM — persists one classified advertisement.

Invariants:
    - creation_date set once on insert, never updated
    - status is one of AdStatus values; DELETED rows stay in the table (soft delete)
    - publication_date non-NULL iff the ad has ever been PUBLISHED
    - views only ever incremented

Design Decisions:
    - Categories and tags via association tables, loaded eagerly (selectin)
      because the repository maps every ad to a record with both id sets
    - Index on (status, expiration_date): the expiration sweep filters on both
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    String, Integer, Boolean, DateTime, Numeric, ForeignKey, Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from adboard.core.domain_types import (
    AD_TITLE_MAX_LENGTH, AD_DESCRIPTION_MAX_LENGTH, AdStatus,
)
from adboard.db.base import Base
from adboard.models.associations import ad_categories, ad_tags


class Ad(Base):
    """Advertisement entity — owned by a user, linked to categories and tags."""
    __tablename__ = "ads"
    __table_args__ = (
        Index("ix_ads_status_expiration_date", "status", "expiration_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(AD_TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(
        String(AD_DESCRIPTION_MAX_LENGTH), nullable=False,
    )
    price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AdStatus.DRAFT.value,
    )
    creation_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    modification_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    publication_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    expiration_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    creator_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True,
    )

    # Relationships
    categories: Mapped[list["Category"]] = relationship(
        "Category", secondary=ad_categories, lazy="selectin",
    )
    tags: Mapped[list["Tag"]] = relationship(
        "Tag", secondary=ad_tags, lazy="selectin",
    )
