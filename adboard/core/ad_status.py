"""Ad Status Machine — pure transition table and timestamp side effects.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - DELETED is terminal: no outgoing transitions
    - publication_date is set the first time an ad enters PUBLISHED and never reset afterwards
    - A supplied expiration_date is written whenever a transition enters PUBLISHED
      (first publication or renewal); otherwise the existing one is kept
    - Validation happens before any field is touched

Design Decisions:
    - Transition table as a frozen mapping: one source of truth for services, sweep and tests
    - AdRecord is a plain mutable dataclass: the shell loads it, the core mutates it,
      the shell saves it back
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from types import MappingProxyType

from adboard.core.domain_types import AdId, AdStatus, CategoryId, TagId, UserId
from adboard.core.errors import InvalidOperationError, InvalidStatusTransitionError


ALLOWED_TRANSITIONS: MappingProxyType[AdStatus, frozenset[AdStatus]] = MappingProxyType({
    AdStatus.DRAFT: frozenset({AdStatus.PUBLISHED, AdStatus.DELETED}),
    AdStatus.PUBLISHED: frozenset({
        AdStatus.EXPIRED, AdStatus.SUSPENDED, AdStatus.DELETED,
    }),
    AdStatus.EXPIRED: frozenset({AdStatus.PUBLISHED, AdStatus.DELETED}),
    AdStatus.SUSPENDED: frozenset({AdStatus.PUBLISHED, AdStatus.DELETED}),
    AdStatus.DELETED: frozenset(),
})

# Statuses an ad may be created in
INITIAL_STATUSES = frozenset({AdStatus.DRAFT, AdStatus.PUBLISHED})


@dataclass
class AdRecord:
    """Advertisement as the core sees it — relations by id only."""
    id: AdId
    title: str
    description: str
    creator_id: UserId
    creation_date: datetime
    status: AdStatus = AdStatus.DRAFT
    price: Decimal | None = None
    modification_date: datetime | None = None
    publication_date: datetime | None = None
    expiration_date: datetime | None = None
    views: int = 0
    featured: bool = False
    category_ids: frozenset[CategoryId] = field(default_factory=frozenset)
    tag_ids: frozenset[TagId] = field(default_factory=frozenset)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def can_transition(current: AdStatus, new: AdStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


def validate_transition(ad_id: AdId, current: AdStatus, new: AdStatus) -> None:
    """Raise InvalidStatusTransitionError for any pair not in the table."""
    if not can_transition(current, new):
        raise InvalidStatusTransitionError(ad_id, current.value, new.value)


def apply_transition(
    ad: AdRecord,
    new_status: AdStatus,
    now: datetime,
    expiration_date: datetime | None = None,
) -> AdStatus:
    """Validate and apply one transition in place. Returns the previous status."""
    previous = ad.status
    validate_transition(ad.id, previous, new_status)

    ad.status = new_status
    ad.modification_date = now
    if new_status is AdStatus.PUBLISHED:
        if ad.publication_date is None:
            ad.publication_date = now
        if expiration_date is not None:
            ad.expiration_date = expiration_date
    return previous


def initialize_status(ad: AdRecord, status: AdStatus, now: datetime) -> None:
    """Set the status of a new ad, stamping publication_date if born PUBLISHED."""
    if status not in INITIAL_STATUSES:
        raise InvalidOperationError(
            f"Ads cannot be created with status {status.value}",
            "INVALID_INITIAL_STATUS",
        )
    ad.status = status
    if status is AdStatus.PUBLISHED:
        ad.publication_date = now


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (SQLite round-trips drop tzinfo) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
