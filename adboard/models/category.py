"""Category ORM — one node of the category forest.

Invariants:
    - name is unique case-insensitively: a functional unique index on lower(name)
      backs the repository's lower(name) lookups
    - parent_category_id is a nullable self-reference by id; NULL means root
    - No ORM relationship to parent or children: the hierarchy is walked by id

Design Decisions:
    - Index on parent_category_id: children lookups and recursive CTEs join on it
"""

import uuid

from sqlalchemy import ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from adboard.core.domain_types import (
    CATEGORY_NAME_MAX_LENGTH, CATEGORY_DESCRIPTION_MAX_LENGTH,
)
from adboard.db.base import Base


class Category(Base):
    """Category node — parent by id only."""
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(CATEGORY_NAME_MAX_LENGTH), nullable=False, unique=True,
    )
    description: Mapped[str | None] = mapped_column(
        String(CATEGORY_DESCRIPTION_MAX_LENGTH), nullable=True,
    )
    parent_category_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("categories.id"),
        nullable=True, index=True,
    )


Index("uq_categories_name_lower", func.lower(Category.name), unique=True)
