"""Route Dependencies — wire request-scoped services onto the request's DB session.

Invariants:
    - One AsyncSession per request; every repository of a request shares it
    - The acting user comes only from the X-User-Id header (auth lives upstream)
"""

from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from adboard.core.domain_types import UserId
from adboard.core.errors import AdboardError, ErrorCategory
from adboard.infrastructure.database import get_db
from adboard.infrastructure.repositories import (
    SqlAdRepository,
    SqlCategoryRepository,
    SqlTagRepository,
    SqlUserRepository,
)
from adboard.services.ad_service import AdService
from adboard.services.ad_status_machine import AdStatusMachine
from adboard.services.category_hierarchy_manager import CategoryHierarchyManager
from adboard.services.tag_service import TagService


async def get_actor_id(
    x_user_id: UUID | None = Header(None, alias="X-User-Id"),
) -> UserId | None:
    return UserId(x_user_id) if x_user_id else None


async def require_actor_id(
    actor_id: UserId | None = Depends(get_actor_id),
) -> UserId:
    if actor_id is None:
        raise AdboardError(
            "X-User-Id header is required", "ACTOR_REQUIRED",
            ErrorCategory.VALIDATION, http_status=400,
        )
    return actor_id


def get_category_manager(
    db: AsyncSession = Depends(get_db),
) -> CategoryHierarchyManager:
    return CategoryHierarchyManager(SqlCategoryRepository(db))


def get_tag_service(db: AsyncSession = Depends(get_db)) -> TagService:
    return TagService(SqlTagRepository(db))


def get_ad_service(db: AsyncSession = Depends(get_db)) -> AdService:
    return AdService(
        SqlAdRepository(db),
        SqlCategoryRepository(db),
        SqlTagRepository(db),
        SqlUserRepository(db),
    )


def get_status_machine(db: AsyncSession = Depends(get_db)) -> AdStatusMachine:
    return AdStatusMachine(SqlAdRepository(db))
