"""Ad Status Machine — verifies stored transitions, view counting and the expiry sweep.

Invariants:
    - First publication stamps publication_date; renewal after expiry keeps it
    - Illegal transitions raise and leave the stored ad unchanged
    - mark_expired_ads moves only PUBLISHED ads strictly past expiration;
      a second run with the same clock affects zero ads
    - increment_views is atomic and survives later saves of the same ad
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from adboard.core.domain_types import AdId, AdStatus, UserId
from adboard.core.errors import InvalidStatusTransitionError, ResourceNotFoundError
from adboard.infrastructure.repositories import SqlAdRepository
from adboard.services.ad_status_machine import AdStatusMachine
from tests.services.conftest import T0


@pytest.fixture
def clock():
    """Mutable clock: tests advance clock.now."""
    class _Clock:
        now = T0

        def __call__(self):
            return self.now

    return _Clock()


@pytest.fixture
def machine(test_db, clock):
    return AdStatusMachine(SqlAdRepository(test_db), clock)


async def _create(ad_service, owner, **kwargs):
    return await ad_service.create_ad(UserId(owner.id), "Sofa", "Three seats", **kwargs)


async def test_publish_stamps_publication_date(machine, ad_service, seed_user, clock):
    ad = await _create(ad_service, seed_user)
    clock.now = T0 + timedelta(hours=2)

    published = await machine.publish(ad.id)

    assert published.status is AdStatus.PUBLISHED
    assert published.publication_date == T0 + timedelta(hours=2)
    assert published.modification_date == T0 + timedelta(hours=2)


async def test_renewal_keeps_first_publication_date(machine, ad_service, seed_user, clock):
    ad = await _create(ad_service, seed_user)
    await machine.publish(ad.id, T0 + timedelta(days=1))

    clock.now = T0 + timedelta(days=2)
    await machine.transition(ad.id, AdStatus.EXPIRED)

    clock.now = T0 + timedelta(days=3)
    renewed = await machine.publish(ad.id, T0 + timedelta(days=30))

    assert renewed.publication_date == T0
    assert renewed.expiration_date == T0 + timedelta(days=30)
    assert renewed.status is AdStatus.PUBLISHED


async def test_illegal_transition_leaves_ad_unchanged(machine, ad_service, seed_user):
    ad = await _create(ad_service, seed_user, status=AdStatus.PUBLISHED)

    with pytest.raises(InvalidStatusTransitionError):
        await machine.transition(ad.id, AdStatus.DRAFT)

    assert (await ad_service.get_ad(ad.id)).status is AdStatus.PUBLISHED


async def test_suspend_and_reinstate(machine, ad_service, seed_user):
    ad = await _create(ad_service, seed_user, status=AdStatus.PUBLISHED)

    assert (await machine.transition(ad.id, AdStatus.SUSPENDED)).status is AdStatus.SUSPENDED
    assert (await machine.publish(ad.id)).status is AdStatus.PUBLISHED


async def test_transition_unknown_ad_raises(machine):
    with pytest.raises(ResourceNotFoundError):
        await machine.transition(AdId(uuid4()), AdStatus.PUBLISHED)


# ─── expiration sweep ────────────────────────────────────────────

async def test_mark_expired_ads_is_idempotent(machine, ad_service, seed_user, clock):
    overdue_1 = await _create(
        ad_service, seed_user, status=AdStatus.PUBLISHED,
        expiration_date=T0 + timedelta(days=1),
    )
    overdue_2 = await _create(
        ad_service, seed_user, status=AdStatus.PUBLISHED,
        expiration_date=T0 + timedelta(days=2),
    )
    future = await _create(
        ad_service, seed_user, status=AdStatus.PUBLISHED,
        expiration_date=T0 + timedelta(days=30),
    )
    draft = await _create(ad_service, seed_user, expiration_date=T0 + timedelta(days=1))
    no_expiry = await _create(ad_service, seed_user, status=AdStatus.PUBLISHED)

    clock.now = T0 + timedelta(days=5)
    assert await machine.mark_expired_ads() == 2
    assert await machine.mark_expired_ads() == 0

    statuses = {
        ad.id: (await ad_service.get_ad(ad.id)).status
        for ad in (overdue_1, overdue_2, future, draft, no_expiry)
    }
    assert statuses == {
        overdue_1.id: AdStatus.EXPIRED,
        overdue_2.id: AdStatus.EXPIRED,
        future.id: AdStatus.PUBLISHED,
        draft.id: AdStatus.DRAFT,
        no_expiry.id: AdStatus.PUBLISHED,
    }


async def test_sweep_skips_ads_expiring_exactly_now(machine, ad_service, seed_user):
    await _create(
        ad_service, seed_user, status=AdStatus.PUBLISHED, expiration_date=T0,
    )
    assert await machine.mark_expired_ads(now=T0) == 0
    assert await machine.mark_expired_ads(now=T0 + timedelta(seconds=1)) == 1


async def test_expired_ad_can_be_renewed_after_sweep(machine, ad_service, seed_user):
    ad = await _create(
        ad_service, seed_user, status=AdStatus.PUBLISHED,
        expiration_date=T0 + timedelta(days=1),
    )
    await machine.mark_expired_ads(now=T0 + timedelta(days=2))

    renewed = await machine.publish(ad.id, T0 + timedelta(days=40))

    assert renewed.status is AdStatus.PUBLISHED
    assert renewed.publication_date == T0


# ─── views ───────────────────────────────────────────────────────

async def test_increment_views_counts_up(machine, ad_service, seed_user):
    ad = await _create(ad_service, seed_user)
    assert await machine.increment_views(ad.id) == 1
    assert await machine.increment_views(ad.id) == 2
    assert (await ad_service.get_ad(ad.id)).views == 2


async def test_views_survive_later_updates(machine, ad_service, seed_user):
    ad = await _create(ad_service, seed_user)
    await machine.increment_views(ad.id)

    updated = await ad_service.update_ad(ad.id, {"title": "Corner sofa"})

    assert updated.views == 1


async def test_increment_views_unknown_ad_raises(machine):
    with pytest.raises(ResourceNotFoundError):
        await machine.increment_views(AdId(uuid4()))
