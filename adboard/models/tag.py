"""Tag ORM — free-form label, stored lowercase."""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from adboard.core.domain_types import TAG_NAME_MAX_LENGTH
from adboard.db.base import Base


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(TAG_NAME_MAX_LENGTH), nullable=False, unique=True,
    )
