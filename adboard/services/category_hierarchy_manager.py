"""Category Hierarchy Manager — forest-preserving operations over a CategoryRepository.

Invariants:
    - Every check (existence, name uniqueness, cycle) runs before the first write
    - The node being changed is read with for_update=True; the write and the commit
      happen in the same transaction
    - Reparent cycle check walks UP from the proposed parent: its ancestor chain is
      loaded in one query and handed to would_create_cycle
    - parent_id=None always means "root level"

Design Decisions:
    - Store-agnostic: path and subtree queries go through ancestor_chain/descendant_ids,
      which the SQL repository answers with a recursive CTE and the in-memory one by walking
    - Acting user is an explicit argument, used for the audit log line only
"""

import logging
from dataclasses import replace

from adboard.core.category_hierarchy import (
    CategoryNode,
    CategorySelectItem,
    CategoryTreeNode,
    build_select_list,
    build_tree,
    would_create_cycle,
)
from adboard.core.domain_types import CategoryId, ResourceType, UserId
from adboard.core.errors import (
    CircularReferenceError,
    DuplicateNameError,
    ResourceNotFoundError,
)
from adboard.core.reference_rules import check_category_deletable
from adboard.core.repository_protocols import CategoryRepository

logger = logging.getLogger(__name__)

_CATEGORY = ResourceType.CATEGORY.value


class CategoryHierarchyManager:
    """Create, rename, move, delete and aggregate categories."""

    def __init__(self, categories: CategoryRepository):
        self.categories = categories

    # ─── Mutations ────────────────────────────────────────────────

    async def create(
        self,
        name: str,
        description: str | None = None,
        parent_id: CategoryId | None = None,
        actor_id: UserId | None = None,
    ) -> CategoryNode:
        """Insert a new node under parent_id (root when None)."""
        if await self.categories.exists_by_name(name):
            raise DuplicateNameError(_CATEGORY, name)
        if parent_id is not None:
            await self._get_or_404(parent_id, for_update=True)

        node = await self.categories.add(name, description, parent_id)
        await self.categories.commit()
        logger.info(
            f"Category '{node.name}' created",
            extra={"category_id": node.id, "actor_id": actor_id},
        )
        return node

    async def update(
        self,
        category_id: CategoryId,
        name: str,
        description: str | None = None,
        parent_id: CategoryId | None = None,
        actor_id: UserId | None = None,
    ) -> CategoryNode:
        """Rename/redescribe a node; reparent it if parent_id differs from the current one."""
        node = await self._get_or_404(category_id, for_update=True)

        owner = await self.categories.find_by_name(name)
        if owner is not None and owner.id != category_id:
            raise DuplicateNameError(_CATEGORY, name)

        if parent_id != node.parent_id:
            await self._check_reparent(category_id, parent_id)

        updated = await self.categories.save(
            replace(node, name=name, description=description, parent_id=parent_id),
        )
        await self.categories.commit()
        logger.info(
            f"Category '{updated.name}' updated",
            extra={"category_id": category_id, "actor_id": actor_id},
        )
        return updated

    async def move(
        self,
        category_id: CategoryId,
        new_parent_id: CategoryId | None = None,
        actor_id: UserId | None = None,
    ) -> CategoryNode:
        """Reparent a node; None promotes it to root."""
        node = await self._get_or_404(category_id, for_update=True)
        await self._check_reparent(category_id, new_parent_id)

        moved = await self.categories.save(replace(node, parent_id=new_parent_id))
        await self.categories.commit()
        logger.info(
            f"Category '{moved.name}' moved under {new_parent_id or 'root'}",
            extra={"category_id": category_id, "actor_id": actor_id},
        )
        return moved

    async def delete(
        self, category_id: CategoryId, actor_id: UserId | None = None,
    ) -> None:
        """Remove a leaf category that no ad references."""
        await self._get_or_404(category_id, for_update=True)
        has_children = await self.categories.has_children(category_id)
        ad_count = await self.categories.count_referencing_ads([category_id])
        check_category_deletable(category_id, has_children, ad_count)

        await self.categories.delete(category_id)
        await self.categories.commit()
        logger.info(
            "Category deleted",
            extra={"category_id": category_id, "actor_id": actor_id},
        )

    async def _check_reparent(
        self, category_id: CategoryId, parent_id: CategoryId | None,
    ) -> None:
        """Raise unless parent_id can become the parent of category_id."""
        if parent_id is None:
            return

        await self._get_or_404(parent_id, for_update=True)
        ancestors = await self.categories.ancestor_chain(parent_id)
        parent_of = {node.id: node.parent_id for node in ancestors}
        if would_create_cycle(category_id, parent_id, parent_of):
            raise CircularReferenceError(category_id, parent_id)

    # ─── Queries ──────────────────────────────────────────────────

    async def get(self, category_id: CategoryId) -> CategoryNode:
        return await self._get_or_404(category_id)

    async def get_by_name(self, name: str) -> CategoryNode:
        node = await self.categories.find_by_name(name)
        if node is None:
            raise ResourceNotFoundError(_CATEGORY, name)
        return node

    async def name_exists(self, name: str) -> bool:
        return await self.categories.exists_by_name(name)

    async def path(self, category_id: CategoryId) -> list[CategoryNode]:
        """Breadcrumbs: ancestors root → category_id inclusive."""
        chain = await self.categories.ancestor_chain(category_id)
        if not chain:
            raise ResourceNotFoundError(_CATEGORY, category_id)
        return chain

    async def children_of(
        self, parent_id: CategoryId | None = None,
    ) -> list[CategoryNode]:
        """Direct children ordered by name; roots when parent_id is None."""
        return await self.categories.find_children(parent_id)

    async def tree(self) -> list[CategoryTreeNode]:
        return build_tree(await self.categories.list_all())

    async def select_list(self) -> list[CategorySelectItem]:
        return build_select_list(await self.categories.list_all())

    async def search(self, term: str) -> list[CategoryNode]:
        return await self.categories.search(term)

    async def ad_count(self, category_id: CategoryId) -> int:
        """Ads linked directly to this category (descendants excluded)."""
        await self._get_or_404(category_id)
        return await self.categories.count_referencing_ads([category_id])

    async def subtree_ad_count(self, category_id: CategoryId) -> int:
        """Ads linked to this category or any descendant, summed per category."""
        await self._get_or_404(category_id)
        subtree = await self.categories.descendant_ids(category_id)
        return await self.categories.count_referencing_ads(subtree)

    async def _get_or_404(
        self, category_id: CategoryId, *, for_update: bool = False,
    ) -> CategoryNode:
        node = await self.categories.get(category_id, for_update=for_update)
        if node is None:
            raise ResourceNotFoundError(_CATEGORY, category_id)
        return node
