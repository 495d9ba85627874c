"""User lookups needed by ad ownership checks."""

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from adboard.core.domain_types import UserId
from adboard.models import User


class SqlUserRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists(self, user_id: UserId) -> bool:
        return bool(await self.db.scalar(select(exists().where(User.id == user_id))))
