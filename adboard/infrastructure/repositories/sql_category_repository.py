"""SQL Category Repository — category forest persistence with recursive CTE traversals.

Invariants:
    - Name lookups are case-insensitive (lower(name) comparison)
    - ancestor_chain is ordered root → requested node; empty when the id is unknown
    - descendant_ids includes the requested id itself
    - count_referencing_ads sums link rows per category (an ad linked to two
      categories of the set counts twice)

Design Decisions:
    - WITH RECURSIVE pushed to the database: one round-trip per path/subtree query,
      works on PostgreSQL and SQLite alike
    - descendant CTE uses UNION (not UNION ALL) so corrupted cyclic data still terminates
"""

from collections.abc import Collection

from sqlalchemy import Integer, delete, exists, func, literal_column, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from adboard.core.category_hierarchy import CategoryNode
from adboard.core.domain_types import CategoryId
from adboard.models import Category, ad_categories


def _to_node(row) -> CategoryNode:
    return CategoryNode(
        id=CategoryId(row.id),
        name=row.name,
        description=row.description,
        parent_id=(
            CategoryId(row.parent_category_id)
            if row.parent_category_id is not None else None
        ),
    )


class SqlCategoryRepository:
    """CategoryRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(
        self, category_id: CategoryId, *, for_update: bool = False,
    ) -> CategoryNode | None:
        query = select(Category).where(Category.id == category_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(
            query.execution_options(populate_existing=True),
        )
        row = result.scalar_one_or_none()
        return _to_node(row) if row else None

    async def find_by_name(self, name: str) -> CategoryNode | None:
        result = await self.db.execute(
            select(Category).where(func.lower(Category.name) == name.lower()),
        )
        row = result.scalar_one_or_none()
        return _to_node(row) if row else None

    async def exists_by_name(self, name: str) -> bool:
        return bool(await self.db.scalar(
            select(exists().where(func.lower(Category.name) == name.lower())),
        ))

    async def find_children(
        self, parent_id: CategoryId | None,
    ) -> list[CategoryNode]:
        query = select(Category)
        if parent_id is None:
            query = query.where(Category.parent_category_id.is_(None))
        else:
            query = query.where(Category.parent_category_id == parent_id)
        result = await self.db.execute(query.order_by(func.lower(Category.name)))
        return [_to_node(row) for row in result.scalars().all()]

    async def has_children(self, category_id: CategoryId) -> bool:
        return bool(await self.db.scalar(
            select(exists().where(Category.parent_category_id == category_id)),
        ))

    async def list_all(self) -> list[CategoryNode]:
        result = await self.db.execute(
            select(Category).order_by(func.lower(Category.name)),
        )
        return [_to_node(row) for row in result.scalars().all()]

    async def search(self, term: str) -> list[CategoryNode]:
        pattern = f"%{term}%"
        result = await self.db.execute(
            select(Category)
            .where(or_(
                Category.name.ilike(pattern),
                Category.description.ilike(pattern),
            ))
            .order_by(func.lower(Category.name)),
        )
        return [_to_node(row) for row in result.scalars().all()]

    async def ancestor_chain(self, category_id: CategoryId) -> list[CategoryNode]:
        path = (
            select(
                Category.id, Category.name, Category.description,
                Category.parent_category_id, literal_column("0", Integer).label("level"),
            )
            .where(Category.id == category_id)
            .cte("category_path", recursive=True)
        )
        parent = aliased(Category)
        path = path.union_all(
            select(
                parent.id, parent.name, parent.description,
                parent.parent_category_id, (path.c.level + 1).label("level"),
            )
            .where(parent.id == path.c.parent_category_id),
        )
        result = await self.db.execute(
            select(path).order_by(path.c.level.desc()),
        )
        return [_to_node(row) for row in result.all()]

    async def descendant_ids(self, category_id: CategoryId) -> list[CategoryId]:
        subtree = (
            select(Category.id)
            .where(Category.id == category_id)
            .cte("subcategories", recursive=True)
        )
        child = aliased(Category)
        subtree = subtree.union(
            select(child.id).where(child.parent_category_id == subtree.c.id),
        )
        result = await self.db.execute(select(subtree.c.id))
        return [CategoryId(cid) for cid in result.scalars().all()]

    async def count_referencing_ads(
        self, category_ids: Collection[CategoryId],
    ) -> int:
        if not category_ids:
            return 0
        count = await self.db.scalar(
            select(func.count())
            .select_from(ad_categories)
            .where(ad_categories.c.category_id.in_(list(category_ids))),
        )
        return int(count or 0)

    async def add(
        self, name: str, description: str | None, parent_id: CategoryId | None,
    ) -> CategoryNode:
        row = Category(
            name=name, description=description, parent_category_id=parent_id,
        )
        self.db.add(row)
        await self.db.flush()
        return _to_node(row)

    async def save(self, node: CategoryNode) -> CategoryNode:
        row = await self.db.get(Category, node.id)
        row.name = node.name
        row.description = node.description
        row.parent_category_id = node.parent_id
        await self.db.flush()
        return _to_node(row)

    async def delete(self, category_id: CategoryId) -> None:
        await self.db.execute(delete(Category).where(Category.id == category_id))

    async def commit(self) -> None:
        await self.db.commit()
