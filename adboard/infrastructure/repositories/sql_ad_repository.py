"""SQL Ad Repository — advertisement persistence and set-based status sweeps.

Invariants:
    - get() always reloads from the database (populate_existing) so bulk UPDATEs are visible
    - increment_views and expire_published_before are single UPDATE statements:
      no read-modify-write window
    - expire_published_before only ever moves PUBLISHED → EXPIRED

Design Decisions:
    - synchronize_session=False on bulk UPDATEs: the identity map is refreshed on the
      next get() instead of evaluating criteria against loaded objects
"""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from adboard.core.ad_status import AdRecord, as_utc
from adboard.core.domain_types import AdId, AdStatus, CategoryId, TagId, UserId
from adboard.models import Ad, Category, Tag


def _utc_or_none(value: datetime | None) -> datetime | None:
    return as_utc(value) if value is not None else None


def _to_record(ad: Ad) -> AdRecord:
    return AdRecord(
        id=AdId(ad.id),
        title=ad.title,
        description=ad.description,
        creator_id=UserId(ad.creator_id),
        creation_date=as_utc(ad.creation_date),
        status=AdStatus(ad.status),
        price=ad.price,
        modification_date=_utc_or_none(ad.modification_date),
        publication_date=_utc_or_none(ad.publication_date),
        expiration_date=_utc_or_none(ad.expiration_date),
        views=ad.views,
        featured=ad.featured,
        category_ids=frozenset(CategoryId(c.id) for c in ad.categories),
        tag_ids=frozenset(TagId(t.id) for t in ad.tags),
    )


class SqlAdRepository:
    """AdRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, ad_id: AdId, *, for_update: bool = False) -> AdRecord | None:
        query = select(Ad).where(Ad.id == ad_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(
            query.execution_options(populate_existing=True),
        )
        ad = result.scalar_one_or_none()
        return _to_record(ad) if ad else None

    async def add(self, record: AdRecord) -> AdRecord:
        ad = Ad(id=record.id, creator_id=record.creator_id)
        self._copy_fields(record, ad)
        ad.creation_date = record.creation_date
        ad.views = record.views
        ad.categories = await self._load_categories(record.category_ids)
        ad.tags = await self._load_tags(record.tag_ids)
        self.db.add(ad)
        await self.db.flush()
        return _to_record(ad)

    async def save(self, record: AdRecord) -> AdRecord:
        ad = await self.db.get(Ad, record.id)
        self._copy_fields(record, ad)
        if {c.id for c in ad.categories} != set(record.category_ids):
            ad.categories = await self._load_categories(record.category_ids)
        if {t.id for t in ad.tags} != set(record.tag_ids):
            ad.tags = await self._load_tags(record.tag_ids)
        await self.db.flush()
        return _to_record(ad)

    async def increment_views(self, ad_id: AdId) -> int:
        await self.db.execute(
            update(Ad)
            .where(Ad.id == ad_id)
            .values(views=Ad.views + 1)
            .execution_options(synchronize_session=False),
        )
        return int(await self.db.scalar(select(Ad.views).where(Ad.id == ad_id)))

    async def expire_published_before(self, now: datetime) -> int:
        result = await self.db.execute(
            update(Ad)
            .where(Ad.status == AdStatus.PUBLISHED.value)
            .where(Ad.expiration_date.is_not(None))
            .where(Ad.expiration_date < now)
            .values(status=AdStatus.EXPIRED.value, modification_date=now)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount or 0

    async def find_published_expiring_between(
        self, start: datetime, end: datetime,
    ) -> list[AdRecord]:
        result = await self.db.execute(
            select(Ad)
            .where(Ad.status == AdStatus.PUBLISHED.value)
            .where(Ad.expiration_date >= start)
            .where(Ad.expiration_date <= end)
            .order_by(Ad.expiration_date)
            .execution_options(populate_existing=True),
        )
        return [_to_record(ad) for ad in result.scalars().all()]

    async def commit(self) -> None:
        await self.db.commit()

    @staticmethod
    def _copy_fields(record: AdRecord, ad: Ad) -> None:
        ad.title = record.title
        ad.description = record.description
        ad.price = record.price
        ad.status = record.status.value
        ad.modification_date = record.modification_date
        ad.publication_date = record.publication_date
        ad.expiration_date = record.expiration_date
        ad.featured = record.featured

    async def _load_categories(self, ids: frozenset[CategoryId]) -> list[Category]:
        if not ids:
            return []
        result = await self.db.execute(select(Category).where(Category.id.in_(list(ids))))
        return list(result.scalars().all())

    async def _load_tags(self, ids: frozenset[TagId]) -> list[Tag]:
        if not ids:
            return []
        result = await self.db.execute(select(Tag).where(Tag.id.in_(list(ids))))
        return list(result.scalars().all())
