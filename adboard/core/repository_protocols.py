"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Reads with for_update=True hold the row until commit()

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these protocols are never async themselves —
      the shell orchestrates the async calls around the pure logic
    - ancestor_chain/descendant_ids may be one recursive query or repeated lookups;
      callers cannot tell the difference
"""

from collections.abc import Collection
from datetime import datetime
from typing import Protocol

from adboard.core.ad_status import AdRecord
from adboard.core.category_hierarchy import CategoryNode
from adboard.core.domain_types import AdId, CategoryId, TagId, UserId
from adboard.core.tag_rules import TagRecord, TagUsage


class CategoryRepository(Protocol):
    """Contract for category persistence — implemented by shell."""
    async def get(
        self, category_id: CategoryId, *, for_update: bool = False,
    ) -> CategoryNode | None: ...
    async def find_by_name(self, name: str) -> CategoryNode | None: ...
    async def exists_by_name(self, name: str) -> bool: ...
    async def find_children(
        self, parent_id: CategoryId | None,
    ) -> list[CategoryNode]: ...
    async def has_children(self, category_id: CategoryId) -> bool: ...
    async def list_all(self) -> list[CategoryNode]: ...
    async def search(self, term: str) -> list[CategoryNode]: ...
    async def ancestor_chain(self, category_id: CategoryId) -> list[CategoryNode]: ...
    async def descendant_ids(self, category_id: CategoryId) -> list[CategoryId]: ...
    async def count_referencing_ads(
        self, category_ids: Collection[CategoryId],
    ) -> int: ...
    async def add(
        self, name: str, description: str | None, parent_id: CategoryId | None,
    ) -> CategoryNode: ...
    async def save(self, node: CategoryNode) -> CategoryNode: ...
    async def delete(self, category_id: CategoryId) -> None: ...
    async def commit(self) -> None: ...


class TagRepository(Protocol):
    """Contract for tag persistence — implemented by shell."""
    async def get(self, tag_id: TagId, *, for_update: bool = False) -> TagRecord | None: ...
    async def find_by_name(self, name: str) -> TagRecord | None: ...
    async def exists_by_name(self, name: str) -> bool: ...
    async def count_referencing_ads(self, tag_id: TagId) -> int: ...
    async def add(self, name: str) -> TagRecord: ...
    async def rename(self, tag_id: TagId, name: str) -> TagRecord: ...
    async def most_used(self, limit: int) -> list[TagUsage]: ...
    async def co_occurring(self, tag_id: TagId, limit: int) -> list[TagUsage]: ...
    async def find_by_ad(self, ad_id: AdId) -> list[TagRecord]: ...
    async def delete(self, tag_id: TagId) -> None: ...
    async def commit(self) -> None: ...


class AdRepository(Protocol):
    """Contract for advertisement persistence — implemented by shell."""
    async def get(self, ad_id: AdId, *, for_update: bool = False) -> AdRecord | None: ...
    async def add(self, ad: AdRecord) -> AdRecord: ...
    async def save(self, ad: AdRecord) -> AdRecord: ...
    async def increment_views(self, ad_id: AdId) -> int: ...
    async def expire_published_before(self, now: datetime) -> int: ...
    async def find_published_expiring_between(
        self, start: datetime, end: datetime,
    ) -> list[AdRecord]: ...
    async def commit(self) -> None: ...


class UserRepository(Protocol):
    """Contract for the minimal user lookup ads need — implemented by shell."""
    async def exists(self, user_id: UserId) -> bool: ...
