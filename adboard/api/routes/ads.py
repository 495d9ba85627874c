"""Ad Routes — thin HTTP surface over AdService and AdStatusMachine.

Invariants:
    - Creating an ad requires X-User-Id (the creator); edits pass it as the acting user
    - Status changes only via /status, /publish and DELETE, or a status field on PATCH,
      all validated against the same transition table
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from adboard.api.dependencies import (
    get_actor_id,
    get_ad_service,
    get_status_machine,
    require_actor_id,
)
from adboard.config import get_settings
from adboard.core.domain_types import AdId, CategoryId, TagId, UserId
from adboard.schemas.ad import (
    AdCreate,
    AdPublish,
    AdResponse,
    AdStatusUpdate,
    AdUpdate,
    ExpireResponse,
    ViewsResponse,
)
from adboard.services.ad_service import AdService
from adboard.services.ad_status_machine import AdStatusMachine

router = APIRouter(prefix="/api/v1/ads", tags=["ads"])


@router.post("", response_model=AdResponse, status_code=status.HTTP_201_CREATED)
async def create_ad(
    body: AdCreate,
    service: AdService = Depends(get_ad_service),
    creator_id: UserId = Depends(require_actor_id),
):
    ad = await service.create_ad(
        creator_id,
        body.title,
        body.description,
        price=body.price,
        expiration_date=body.expiration_date,
        featured=body.featured,
        status=body.status,
        category_ids=[CategoryId(c) for c in body.category_ids],
        tag_ids=[TagId(t) for t in body.tag_ids],
    )
    return AdResponse.model_validate(ad)


@router.post("/expire", response_model=ExpireResponse)
async def expire_ads(machine: AdStatusMachine = Depends(get_status_machine)):
    """Run the expiration sweep now."""
    return ExpireResponse(affected=await machine.mark_expired_ads())


@router.get("/expiring", response_model=list[AdResponse])
async def get_expiring_ads(
    days: int | None = Query(None, ge=0, le=365),
    service: AdService = Depends(get_ad_service),
):
    if days is None:
        days = get_settings().expiring_soon_default_days
    return [AdResponse.model_validate(ad) for ad in await service.expiring_soon(days)]


@router.get("/{ad_id}", response_model=AdResponse)
async def get_ad(ad_id: UUID, service: AdService = Depends(get_ad_service)):
    return AdResponse.model_validate(await service.get_ad(AdId(ad_id)))


@router.patch("/{ad_id}", response_model=AdResponse)
async def update_ad(
    ad_id: UUID,
    body: AdUpdate,
    service: AdService = Depends(get_ad_service),
    actor_id: UserId | None = Depends(get_actor_id),
):
    ad = await service.update_ad(
        AdId(ad_id), body.model_dump(exclude_unset=True), actor_id,
    )
    return AdResponse.model_validate(ad)


@router.post("/{ad_id}/status", response_model=AdResponse)
async def change_ad_status(
    ad_id: UUID,
    body: AdStatusUpdate,
    machine: AdStatusMachine = Depends(get_status_machine),
):
    ad = await machine.transition(AdId(ad_id), body.new_status, body.expiration_date)
    return AdResponse.model_validate(ad)


@router.post("/{ad_id}/publish", response_model=AdResponse)
async def publish_ad(
    ad_id: UUID,
    body: AdPublish | None = None,
    machine: AdStatusMachine = Depends(get_status_machine),
):
    expiration_date = body.expiration_date if body else None
    return AdResponse.model_validate(await machine.publish(AdId(ad_id), expiration_date))


@router.delete("/{ad_id}", response_model=AdResponse)
async def delete_ad(ad_id: UUID, service: AdService = Depends(get_ad_service)):
    """Soft delete: the ad stays stored with status DELETED."""
    return AdResponse.model_validate(await service.delete_ad(AdId(ad_id)))


@router.post("/{ad_id}/views", response_model=ViewsResponse)
async def increment_ad_views(
    ad_id: UUID, machine: AdStatusMachine = Depends(get_status_machine),
):
    views = await machine.increment_views(AdId(ad_id))
    return ViewsResponse(id=ad_id, views=views)
