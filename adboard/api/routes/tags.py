"""Tag Routes — thin HTTP surface over TagService.

Invariants:
    - Fixed paths (/popular, /by-name, /by-ad) registered before /{tag_id}
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from adboard.api.dependencies import get_actor_id, get_tag_service
from adboard.core.domain_types import AdId, TagId, UserId
from adboard.schemas.category import CountResponse
from adboard.schemas.tag import TagCreate, TagResponse, TagUsageResponse
from adboard.services.tag_service import TagService

router = APIRouter(prefix="/api/v1/tags", tags=["tags"])


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    body: TagCreate,
    service: TagService = Depends(get_tag_service),
    actor_id: UserId | None = Depends(get_actor_id),
):
    return TagResponse.model_validate(await service.create(body.name, actor_id))


@router.get("/popular", response_model=list[TagUsageResponse])
async def get_popular_tags(
    limit: int = Query(10, ge=1, le=100),
    service: TagService = Depends(get_tag_service),
):
    return [TagUsageResponse.model_validate(t) for t in await service.most_popular(limit)]


@router.get("/by-ad/{ad_id}", response_model=list[TagResponse])
async def get_tags_by_ad(ad_id: UUID, service: TagService = Depends(get_tag_service)):
    return [TagResponse.model_validate(t) for t in await service.tags_for_ad(AdId(ad_id))]


@router.get("/by-name/{name}", response_model=TagResponse)
async def get_tag_by_name(name: str, service: TagService = Depends(get_tag_service)):
    return TagResponse.model_validate(await service.get_by_name(name))


@router.get("/{tag_id}", response_model=TagResponse)
async def get_tag(tag_id: UUID, service: TagService = Depends(get_tag_service)):
    return TagResponse.model_validate(await service.get(TagId(tag_id)))


@router.put("/{tag_id}", response_model=TagResponse)
async def rename_tag(
    tag_id: UUID,
    body: TagCreate,
    service: TagService = Depends(get_tag_service),
    actor_id: UserId | None = Depends(get_actor_id),
):
    return TagResponse.model_validate(
        await service.rename(TagId(tag_id), body.name, actor_id),
    )


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: UUID,
    service: TagService = Depends(get_tag_service),
    actor_id: UserId | None = Depends(get_actor_id),
):
    await service.delete(TagId(tag_id), actor_id)


@router.get("/{tag_id}/ads/count", response_model=CountResponse)
async def count_tag_ads(tag_id: UUID, service: TagService = Depends(get_tag_service)):
    return CountResponse(id=tag_id, count=await service.ad_count(TagId(tag_id)))


@router.get("/{tag_id}/related", response_model=list[TagUsageResponse])
async def get_related_tags(
    tag_id: UUID,
    limit: int = Query(10, ge=1, le=100),
    service: TagService = Depends(get_tag_service),
):
    related = await service.related(TagId(tag_id), limit)
    return [TagUsageResponse.model_validate(t) for t in related]
