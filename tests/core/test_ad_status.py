"""Ad Status — verifies the transition table and its timestamp side effects.

Tests:
    - Every allowed pair passes; every other pair raises InvalidStatusTransitionError
    - DELETED is terminal; PUBLISHED → DRAFT is illegal
    - First publication stamps publication_date; re-publication keeps it
    - Supplied expiration_date written on every entry into PUBLISHED
    - Failed transitions leave the record untouched
    - initialize_status accepts only DRAFT and PUBLISHED
    - as_utc reads naive datetimes as UTC
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from adboard.core.ad_status import (
    ALLOWED_TRANSITIONS,
    AdRecord,
    apply_transition,
    as_utc,
    can_transition,
    initialize_status,
    validate_transition,
)
from adboard.core.domain_types import AdId, AdStatus, UserId
from adboard.core.errors import InvalidOperationError, InvalidStatusTransitionError

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def _ad(status: AdStatus = AdStatus.DRAFT, **kwargs) -> AdRecord:
    return AdRecord(
        id=AdId(uuid4()),
        title="Bike",
        description="Red bike",
        creator_id=UserId(uuid4()),
        creation_date=T0,
        status=status,
        **kwargs,
    )


EXPECTED = {
    (AdStatus.DRAFT, AdStatus.PUBLISHED),
    (AdStatus.DRAFT, AdStatus.DELETED),
    (AdStatus.PUBLISHED, AdStatus.EXPIRED),
    (AdStatus.PUBLISHED, AdStatus.SUSPENDED),
    (AdStatus.PUBLISHED, AdStatus.DELETED),
    (AdStatus.EXPIRED, AdStatus.PUBLISHED),
    (AdStatus.EXPIRED, AdStatus.DELETED),
    (AdStatus.SUSPENDED, AdStatus.PUBLISHED),
    (AdStatus.SUSPENDED, AdStatus.DELETED),
}


def test_table_matches_lifecycle():
    actual = {
        (current, new)
        for current, targets in ALLOWED_TRANSITIONS.items()
        for new in targets
    }
    assert actual == EXPECTED


def test_table_covers_every_status():
    assert set(ALLOWED_TRANSITIONS) == set(AdStatus)


@pytest.mark.parametrize("current", list(AdStatus))
@pytest.mark.parametrize("new", list(AdStatus))
def test_can_transition_agrees_with_table(current, new):
    assert can_transition(current, new) == ((current, new) in EXPECTED)


@pytest.mark.parametrize("new", list(AdStatus))
def test_deleted_is_terminal(new):
    with pytest.raises(InvalidStatusTransitionError):
        validate_transition(AdId(uuid4()), AdStatus.DELETED, new)


def test_published_to_draft_is_illegal():
    ad = _ad(AdStatus.PUBLISHED, publication_date=T0)
    with pytest.raises(InvalidStatusTransitionError) as exc_info:
        apply_transition(ad, AdStatus.DRAFT, T0 + timedelta(hours=1))
    assert exc_info.value.current_status == "PUBLISHED"
    assert exc_info.value.attempted_status == "DRAFT"
    assert exc_info.value.code == "INVALID_STATUS_TRANSITION"


def test_failed_transition_leaves_record_untouched():
    ad = _ad(AdStatus.DRAFT)
    with pytest.raises(InvalidStatusTransitionError):
        apply_transition(ad, AdStatus.EXPIRED, T0)
    assert ad.status is AdStatus.DRAFT
    assert ad.modification_date is None


def test_first_publish_stamps_publication_date():
    ad = _ad(AdStatus.DRAFT)
    previous = apply_transition(ad, AdStatus.PUBLISHED, T0)
    assert previous is AdStatus.DRAFT
    assert ad.status is AdStatus.PUBLISHED
    assert ad.publication_date == T0
    assert ad.modification_date == T0


def test_republish_keeps_first_publication_date():
    ad = _ad(AdStatus.DRAFT)
    apply_transition(ad, AdStatus.PUBLISHED, T0)
    apply_transition(ad, AdStatus.SUSPENDED, T0 + timedelta(days=1))
    apply_transition(ad, AdStatus.PUBLISHED, T0 + timedelta(days=2))
    assert ad.publication_date == T0
    assert ad.modification_date == T0 + timedelta(days=2)


def test_publish_writes_supplied_expiration_date():
    ad = _ad(AdStatus.EXPIRED, publication_date=T0, expiration_date=T0)
    renewed_until = T0 + timedelta(days=30)
    apply_transition(ad, AdStatus.PUBLISHED, T0 + timedelta(days=1), renewed_until)
    assert ad.expiration_date == renewed_until


def test_publish_without_expiration_keeps_existing_one():
    until = T0 + timedelta(days=10)
    ad = _ad(AdStatus.DRAFT, expiration_date=until)
    apply_transition(ad, AdStatus.PUBLISHED, T0)
    assert ad.expiration_date == until


def test_non_publish_transition_ignores_expiration_argument():
    ad = _ad(AdStatus.PUBLISHED, publication_date=T0)
    apply_transition(ad, AdStatus.SUSPENDED, T0, T0 + timedelta(days=5))
    assert ad.expiration_date is None


def test_initialize_draft_leaves_publication_date_empty():
    ad = _ad()
    initialize_status(ad, AdStatus.DRAFT, T0)
    assert ad.status is AdStatus.DRAFT
    assert ad.publication_date is None


def test_initialize_published_stamps_publication_date():
    ad = _ad()
    initialize_status(ad, AdStatus.PUBLISHED, T0)
    assert ad.status is AdStatus.PUBLISHED
    assert ad.publication_date == T0


@pytest.mark.parametrize(
    "status", [AdStatus.EXPIRED, AdStatus.SUSPENDED, AdStatus.DELETED],
)
def test_initialize_rejects_other_statuses(status):
    with pytest.raises(InvalidOperationError) as exc_info:
        initialize_status(_ad(), status, T0)
    assert exc_info.value.code == "INVALID_INITIAL_STATUS"


def test_as_utc_treats_naive_as_utc():
    naive = datetime(2026, 1, 1, 12, 0)
    assert as_utc(naive) == T0
    assert as_utc(naive).tzinfo is timezone.utc
