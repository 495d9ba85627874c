"""Association tables — many-to-many links between ads and categories/tags.

Invariants:
    - Composite primary key: an ad links to a category or tag at most once
    - Rows are removed with their ad; category/tag deletion is blocked while rows exist
"""

from sqlalchemy import Column, ForeignKey, Table
from sqlalchemy.dialects.postgresql import UUID

from adboard.db.base import Base


ad_categories = Table(
    "ad_categories",
    Base.metadata,
    Column(
        "ad_id", UUID(as_uuid=True),
        ForeignKey("ads.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "category_id", UUID(as_uuid=True),
        ForeignKey("categories.id"), primary_key=True, index=True,
    ),
)

ad_tags = Table(
    "ad_tags",
    Base.metadata,
    Column(
        "ad_id", UUID(as_uuid=True),
        ForeignKey("ads.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "tag_id", UUID(as_uuid=True),
        ForeignKey("tags.id"), primary_key=True, index=True,
    ),
)
