"""Tag Service — normalized unique labels with a referenced-by-ads delete guard.

Invariants:
    - Names are normalized (core.tag_rules) before every lookup and write
    - Uniqueness is checked against the normalized name
    - Deletion uses the same reference rule as categories
    - Usage rankings are ordered by ad count, then name; related tags exclude the tag itself
"""

import logging

from adboard.core.domain_types import AdId, ResourceType, TagId, UserId
from adboard.core.errors import DuplicateNameError, ResourceNotFoundError
from adboard.core.reference_rules import check_not_referenced
from adboard.core.repository_protocols import TagRepository
from adboard.core.tag_rules import TagRecord, TagUsage, normalize_tag_name

logger = logging.getLogger(__name__)

_TAG = ResourceType.TAG.value


class TagService:

    def __init__(self, tags: TagRepository):
        self.tags = tags

    async def create(self, name: str, actor_id: UserId | None = None) -> TagRecord:
        normalized = normalize_tag_name(name)
        if await self.tags.exists_by_name(normalized):
            raise DuplicateNameError(_TAG, normalized)
        tag = await self.tags.add(normalized)
        await self.tags.commit()
        logger.info(
            f"Tag '{tag.name}' created",
            extra={"tag_id": tag.id, "actor_id": actor_id},
        )
        return tag

    async def rename(
        self, tag_id: TagId, name: str, actor_id: UserId | None = None,
    ) -> TagRecord:
        await self._get_or_404(tag_id, for_update=True)
        normalized = normalize_tag_name(name)
        owner = await self.tags.find_by_name(normalized)
        if owner is not None and owner.id != tag_id:
            raise DuplicateNameError(_TAG, normalized)
        tag = await self.tags.rename(tag_id, normalized)
        await self.tags.commit()
        logger.info(
            f"Tag renamed to '{tag.name}'",
            extra={"tag_id": tag_id, "actor_id": actor_id},
        )
        return tag

    async def delete(self, tag_id: TagId, actor_id: UserId | None = None) -> None:
        await self._get_or_404(tag_id, for_update=True)
        check_not_referenced(
            ResourceType.TAG, tag_id, await self.tags.count_referencing_ads(tag_id),
        )
        await self.tags.delete(tag_id)
        await self.tags.commit()
        logger.info("Tag deleted", extra={"tag_id": tag_id, "actor_id": actor_id})

    async def get(self, tag_id: TagId) -> TagRecord:
        return await self._get_or_404(tag_id)

    async def get_by_name(self, name: str) -> TagRecord:
        tag = await self.tags.find_by_name(name.strip().lower())
        if tag is None:
            raise ResourceNotFoundError(_TAG, name)
        return tag

    async def name_exists(self, name: str) -> bool:
        return await self.tags.exists_by_name(name.strip().lower())

    async def ad_count(self, tag_id: TagId) -> int:
        await self._get_or_404(tag_id)
        return await self.tags.count_referencing_ads(tag_id)

    async def most_popular(self, limit: int = 10) -> list[TagUsage]:
        return await self.tags.most_used(limit)

    async def related(self, tag_id: TagId, limit: int = 10) -> list[TagUsage]:
        """Tags that appear on the same ads as tag_id, most shared first."""
        await self._get_or_404(tag_id)
        return await self.tags.co_occurring(tag_id, limit)

    async def tags_for_ad(self, ad_id: AdId) -> list[TagRecord]:
        """Tags attached to an ad, by name. Unknown ads simply have none."""
        return await self.tags.find_by_ad(ad_id)

    async def _get_or_404(self, tag_id: TagId, *, for_update: bool = False) -> TagRecord:
        tag = await self.tags.get(tag_id, for_update=for_update)
        if tag is None:
            raise ResourceNotFoundError(_TAG, tag_id)
        return tag
