"""Ad Status Machine — applies validated status transitions to stored ads.

Invariants:
    - Every single-ad transition is read (for_update) → apply_transition → save → commit
    - The expiration sweep is one conditional UPDATE restricted to PUBLISHED → EXPIRED,
      so it cannot violate the transition table even while single transitions run
    - Running the sweep again with the same clock affects zero rows

Design Decisions:
    - Clock injected (defaults to UTC now) so tests can pin publication/expiration times
"""

import logging
from collections.abc import Callable
from datetime import datetime

from adboard.core.ad_status import AdRecord, apply_transition, utcnow
from adboard.core.domain_types import AdId, AdStatus, ResourceType
from adboard.core.errors import ResourceNotFoundError
from adboard.core.repository_protocols import AdRepository

logger = logging.getLogger(__name__)


class AdStatusMachine:
    """Status transitions, publication, view counting and expiration sweep."""

    def __init__(
        self, ads: AdRepository, clock: Callable[[], datetime] = utcnow,
    ):
        self.ads = ads
        self._clock = clock

    async def transition(
        self,
        ad_id: AdId,
        new_status: AdStatus,
        expiration_date: datetime | None = None,
    ) -> AdRecord:
        """Move one ad to new_status, or raise InvalidStatusTransitionError."""
        ad = await self._get_or_404(ad_id)
        previous = apply_transition(ad, new_status, self._clock(), expiration_date)
        saved = await self.ads.save(ad)
        await self.ads.commit()
        logger.info(
            f"Ad status {previous.value} -> {new_status.value}",
            extra={
                "ad_id": ad_id,
                "from_status": previous.value,
                "to_status": new_status.value,
            },
        )
        return saved

    async def publish(
        self, ad_id: AdId, expiration_date: datetime | None = None,
    ) -> AdRecord:
        return await self.transition(ad_id, AdStatus.PUBLISHED, expiration_date)

    async def increment_views(self, ad_id: AdId) -> int:
        """Add one view atomically. Returns the new count."""
        if await self.ads.get(ad_id) is None:
            raise ResourceNotFoundError(ResourceType.AD.value, ad_id)
        views = await self.ads.increment_views(ad_id)
        await self.ads.commit()
        return views

    async def mark_expired_ads(self, now: datetime | None = None) -> int:
        """Expire every PUBLISHED ad whose expiration date is before now."""
        affected = await self.ads.expire_published_before(now or self._clock())
        await self.ads.commit()
        if affected:
            logger.info(
                f"Expired {affected} ad(s)", extra={"affected": affected},
            )
        return affected

    async def _get_or_404(self, ad_id: AdId) -> AdRecord:
        ad = await self.ads.get(ad_id, for_update=True)
        if ad is None:
            raise ResourceNotFoundError(ResourceType.AD.value, ad_id)
        return ad
