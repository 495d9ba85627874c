"""Ad Service — creation, field updates, soft delete and expiry lookups for advertisements.

Invariants:
    - Referenced creator, categories and tags must exist (ResourceNotFoundError otherwise)
    - New ads start DRAFT unless created PUBLISHED; never created DELETED
    - A status change inside an update goes through the same transition table as
      AdStatusMachine.transition
    - DELETED ads are read-only
    - Only the owner may edit an ad when an acting user is given

Design Decisions:
    - update_ad takes a dict of changed fields: key present = field updated,
      so a nullable field (price, expiration_date) can be cleared by passing None;
      None for title, description, featured or status is rejected
    - A status key is always validated, even when equal to the current status,
      exactly like AdStatusMachine.transition
    - Deletion is delegated to AdStatusMachine (soft delete = transition to DELETED)
"""

import logging
import uuid
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta
from decimal import Decimal

from adboard.core.ad_status import (
    AdRecord,
    apply_transition,
    initialize_status,
    utcnow,
)
from adboard.core.domain_types import (
    AdId, AdStatus, CategoryId, ResourceType, TagId, UserId,
)
from adboard.core.errors import (
    InvalidOperationError,
    ResourceNotFoundError,
    UnauthorizedError,
)
from adboard.core.repository_protocols import (
    AdRepository,
    CategoryRepository,
    TagRepository,
    UserRepository,
)
from adboard.services.ad_status_machine import AdStatusMachine

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({
    "title", "description", "price", "expiration_date", "featured",
    "status", "category_ids", "tag_ids",
})

# Columns that may not be set to None through update_ad
NON_NULLABLE_FIELDS = frozenset({"title", "description", "featured", "status"})


class AdService:
    """Advertisement CRUD around the status machine."""

    def __init__(
        self,
        ads: AdRepository,
        categories: CategoryRepository,
        tags: TagRepository,
        users: UserRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.ads = ads
        self.categories = categories
        self.tags = tags
        self.users = users
        self._clock = clock
        self.status_machine = AdStatusMachine(ads, clock)

    async def create_ad(
        self,
        creator_id: UserId,
        title: str,
        description: str,
        price: Decimal | None = None,
        expiration_date: datetime | None = None,
        featured: bool = False,
        status: AdStatus = AdStatus.DRAFT,
        category_ids: Iterable[CategoryId] = (),
        tag_ids: Iterable[TagId] = (),
    ) -> AdRecord:
        if not await self.users.exists(creator_id):
            raise ResourceNotFoundError(ResourceType.USER.value, creator_id)
        category_ids = await self._require_categories(category_ids)
        tag_ids = await self._require_tags(tag_ids)

        now = self._clock()
        ad = AdRecord(
            id=AdId(uuid.uuid4()),
            title=title,
            description=description,
            creator_id=creator_id,
            creation_date=now,
            price=price,
            expiration_date=expiration_date,
            featured=featured,
            category_ids=category_ids,
            tag_ids=tag_ids,
        )
        initialize_status(ad, status, now)

        saved = await self.ads.add(ad)
        await self.ads.commit()
        logger.info(
            f"Ad '{saved.title}' created as {saved.status.value}",
            extra={"ad_id": saved.id, "actor_id": creator_id},
        )
        return saved

    async def update_ad(
        self,
        ad_id: AdId,
        changes: dict,
        actor_id: UserId | None = None,
    ) -> AdRecord:
        """Apply changed fields; a 'status' key goes through the transition table."""
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise InvalidOperationError(
                f"Unknown ad fields: {', '.join(sorted(unknown))}",
                "VALIDATION_ERROR",
            )
        nulled = {k for k in NON_NULLABLE_FIELDS if k in changes and changes[k] is None}
        if nulled:
            raise InvalidOperationError(
                f"Ad fields cannot be null: {', '.join(sorted(nulled))}",
                "VALIDATION_ERROR",
            )

        ad = await self._get_or_404(ad_id, for_update=True)
        if actor_id is not None and actor_id != ad.creator_id:
            raise UnauthorizedError(ResourceType.AD.value, ad_id, actor_id)
        if ad.status is AdStatus.DELETED:
            raise InvalidOperationError(
                f"Ad '{ad_id}' is deleted and cannot be modified", "AD_DELETED",
            )

        if "category_ids" in changes:
            ad.category_ids = await self._require_categories(changes["category_ids"] or ())
        if "tag_ids" in changes:
            ad.tag_ids = await self._require_tags(changes["tag_ids"] or ())
        for field_name in ("title", "description", "price", "expiration_date", "featured"):
            if field_name in changes:
                setattr(ad, field_name, changes[field_name])

        now = self._clock()
        if "status" in changes:
            apply_transition(
                ad, AdStatus(changes["status"]), now, changes.get("expiration_date"),
            )
        ad.modification_date = now

        saved = await self.ads.save(ad)
        await self.ads.commit()
        logger.info(
            f"Ad '{saved.title}' updated",
            extra={"ad_id": ad_id, "actor_id": actor_id},
        )
        return saved

    async def get_ad(self, ad_id: AdId) -> AdRecord:
        return await self._get_or_404(ad_id)

    async def delete_ad(self, ad_id: AdId) -> AdRecord:
        """Soft delete: transition to DELETED."""
        return await self.status_machine.transition(ad_id, AdStatus.DELETED)

    async def expiring_soon(
        self, days: int, now: datetime | None = None,
    ) -> list[AdRecord]:
        """PUBLISHED ads whose expiration date falls within the next `days` days."""
        start = now or self._clock()
        return await self.ads.find_published_expiring_between(
            start, start + timedelta(days=days),
        )

    async def _get_or_404(self, ad_id: AdId, *, for_update: bool = False) -> AdRecord:
        ad = await self.ads.get(ad_id, for_update=for_update)
        if ad is None:
            raise ResourceNotFoundError(ResourceType.AD.value, ad_id)
        return ad

    async def _require_categories(
        self, category_ids: Iterable[CategoryId],
    ) -> frozenset[CategoryId]:
        ids = frozenset(category_ids)
        for category_id in ids:
            if await self.categories.get(category_id) is None:
                raise ResourceNotFoundError(ResourceType.CATEGORY.value, category_id)
        return ids

    async def _require_tags(self, tag_ids: Iterable[TagId]) -> frozenset[TagId]:
        ids = frozenset(tag_ids)
        for tag_id in ids:
            if await self.tags.get(tag_id) is None:
                raise ResourceNotFoundError(ResourceType.TAG.value, tag_id)
        return ids
