"""Initial schema — users, categories, tags, ads and their link tables.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "categories",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("parent_category_id", UUID(as_uuid=True), sa.ForeignKey("categories.id"), nullable=True),
    )
    op.create_index("ix_categories_parent_category_id", "categories", ["parent_category_id"])
    op.create_index(
        "uq_categories_name_lower", "categories", [sa.text("lower(name)")], unique=True,
    )

    op.create_table(
        "tags",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
    )

    op.create_table(
        "ads",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.String(2000), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="DRAFT"),
        sa.Column("creation_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("modification_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("publication_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expiration_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("views", sa.Integer, nullable=False, server_default="0"),
        sa.Column("featured", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("creator_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
    )
    op.create_index("ix_ads_creator_id", "ads", ["creator_id"])
    op.create_index("ix_ads_status_expiration_date", "ads", ["status", "expiration_date"])

    op.create_table(
        "ad_categories",
        sa.Column("ad_id", UUID(as_uuid=True), sa.ForeignKey("ads.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("category_id", UUID(as_uuid=True), sa.ForeignKey("categories.id"), primary_key=True),
    )
    op.create_index("ix_ad_categories_category_id", "ad_categories", ["category_id"])

    op.create_table(
        "ad_tags",
        sa.Column("ad_id", UUID(as_uuid=True), sa.ForeignKey("ads.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("tag_id", UUID(as_uuid=True), sa.ForeignKey("tags.id"), primary_key=True),
    )
    op.create_index("ix_ad_tags_tag_id", "ad_tags", ["tag_id"])


def downgrade() -> None:
    op.drop_table("ad_tags")
    op.drop_table("ad_categories")
    op.drop_table("ads")
    op.drop_table("tags")
    op.drop_table("categories")
    op.drop_table("users")
