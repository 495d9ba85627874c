"""SQL Tag Repository — tag persistence; names arrive already normalized.

Invariants:
    - Usage queries count rows of ad_tags: soft-deleted ads still count
    - Ties in usage order are broken by tag name so results are stable
"""

from sqlalchemy import and_, delete, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from adboard.core.domain_types import AdId, TagId
from adboard.core.tag_rules import TagRecord, TagUsage
from adboard.models import Tag, ad_tags


def _to_record(row: Tag) -> TagRecord:
    return TagRecord(id=TagId(row.id), name=row.name)


def _to_usage(row) -> TagUsage:
    return TagUsage(id=TagId(row.id), name=row.name, ad_count=int(row.ad_count))


class SqlTagRepository:
    """TagRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, tag_id: TagId, *, for_update: bool = False) -> TagRecord | None:
        query = select(Tag).where(Tag.id == tag_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        row = result.scalar_one_or_none()
        return _to_record(row) if row else None

    async def find_by_name(self, name: str) -> TagRecord | None:
        result = await self.db.execute(
            select(Tag).where(func.lower(Tag.name) == name.lower()),
        )
        row = result.scalar_one_or_none()
        return _to_record(row) if row else None

    async def exists_by_name(self, name: str) -> bool:
        return bool(await self.db.scalar(
            select(exists().where(func.lower(Tag.name) == name.lower())),
        ))

    async def count_referencing_ads(self, tag_id: TagId) -> int:
        count = await self.db.scalar(
            select(func.count()).select_from(ad_tags).where(ad_tags.c.tag_id == tag_id),
        )
        return int(count or 0)

    async def add(self, name: str) -> TagRecord:
        row = Tag(name=name)
        self.db.add(row)
        await self.db.flush()
        return _to_record(row)

    async def rename(self, tag_id: TagId, name: str) -> TagRecord:
        row = await self.db.get(Tag, tag_id)
        row.name = name
        await self.db.flush()
        return _to_record(row)

    async def most_used(self, limit: int) -> list[TagUsage]:
        ad_count = func.count(ad_tags.c.ad_id).label("ad_count")
        result = await self.db.execute(
            select(Tag.id, Tag.name, ad_count)
            .join(ad_tags, ad_tags.c.tag_id == Tag.id)
            .group_by(Tag.id, Tag.name)
            .order_by(ad_count.desc(), Tag.name)
            .limit(limit),
        )
        return [_to_usage(row) for row in result.all()]

    async def co_occurring(self, tag_id: TagId, limit: int) -> list[TagUsage]:
        """Tags sharing at least one ad with tag_id, by number of shared ads."""
        source = ad_tags.alias("source")
        other = ad_tags.alias("other")
        shared = func.count(other.c.ad_id).label("ad_count")
        result = await self.db.execute(
            select(Tag.id, Tag.name, shared)
            .select_from(source)
            .join(other, and_(
                other.c.ad_id == source.c.ad_id, other.c.tag_id != source.c.tag_id,
            ))
            .join(Tag, Tag.id == other.c.tag_id)
            .where(source.c.tag_id == tag_id)
            .group_by(Tag.id, Tag.name)
            .order_by(shared.desc(), Tag.name)
            .limit(limit),
        )
        return [_to_usage(row) for row in result.all()]

    async def find_by_ad(self, ad_id: AdId) -> list[TagRecord]:
        result = await self.db.execute(
            select(Tag)
            .join(ad_tags, ad_tags.c.tag_id == Tag.id)
            .where(ad_tags.c.ad_id == ad_id)
            .order_by(Tag.name),
        )
        return [_to_record(row) for row in result.scalars().all()]

    async def delete(self, tag_id: TagId) -> None:
        await self.db.execute(delete(Tag).where(Tag.id == tag_id))

    async def commit(self) -> None:
        await self.db.commit()
