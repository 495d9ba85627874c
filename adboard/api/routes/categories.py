"""Category Routes — thin HTTP surface over CategoryHierarchyManager.

Invariants:
    - No business logic here: every rule lives in the manager or core
    - Fixed paths (/tree, /select, /roots, /search) registered before /{category_id}
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from adboard.api.dependencies import get_actor_id, get_category_manager
from adboard.core.domain_types import CategoryId, UserId
from adboard.schemas.category import (
    CategoryCreate,
    CategoryMove,
    CategoryResponse,
    CategorySelectResponse,
    CategoryTreeResponse,
    CountResponse,
)
from adboard.services.category_hierarchy_manager import CategoryHierarchyManager

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


@router.post(
    "", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: CategoryCreate,
    manager: CategoryHierarchyManager = Depends(get_category_manager),
    actor_id: UserId | None = Depends(get_actor_id),
):
    node = await manager.create(
        body.name, body.description,
        CategoryId(body.parent_category_id) if body.parent_category_id else None,
        actor_id,
    )
    return CategoryResponse.model_validate(node)


@router.get("/tree", response_model=list[CategoryTreeResponse])
async def get_category_tree(
    manager: CategoryHierarchyManager = Depends(get_category_manager),
):
    return [CategoryTreeResponse.model_validate(n) for n in await manager.tree()]


@router.get("/select", response_model=list[CategorySelectResponse])
async def get_category_select_list(
    manager: CategoryHierarchyManager = Depends(get_category_manager),
):
    return [CategorySelectResponse.model_validate(i) for i in await manager.select_list()]


@router.get("/roots", response_model=list[CategoryResponse])
async def get_root_categories(
    manager: CategoryHierarchyManager = Depends(get_category_manager),
):
    return [CategoryResponse.model_validate(n) for n in await manager.children_of(None)]


@router.get("/search", response_model=list[CategoryResponse])
async def search_categories(
    q: str = Query(..., min_length=1, max_length=100),
    manager: CategoryHierarchyManager = Depends(get_category_manager),
):
    return [CategoryResponse.model_validate(n) for n in await manager.search(q)]


@router.get("/exists")
async def category_name_exists(
    name: str = Query(..., min_length=1),
    manager: CategoryHierarchyManager = Depends(get_category_manager),
):
    return {"name": name, "exists": await manager.name_exists(name)}


@router.get("/by-name/{name}", response_model=CategoryResponse)
async def get_category_by_name(
    name: str, manager: CategoryHierarchyManager = Depends(get_category_manager),
):
    return CategoryResponse.model_validate(await manager.get_by_name(name))


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: UUID,
    manager: CategoryHierarchyManager = Depends(get_category_manager),
):
    return CategoryResponse.model_validate(await manager.get(CategoryId(category_id)))


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    body: CategoryCreate,
    manager: CategoryHierarchyManager = Depends(get_category_manager),
    actor_id: UserId | None = Depends(get_actor_id),
):
    node = await manager.update(
        CategoryId(category_id), body.name, body.description,
        CategoryId(body.parent_category_id) if body.parent_category_id else None,
        actor_id,
    )
    return CategoryResponse.model_validate(node)


@router.post("/{category_id}/move", response_model=CategoryResponse)
async def move_category(
    category_id: UUID,
    body: CategoryMove,
    manager: CategoryHierarchyManager = Depends(get_category_manager),
    actor_id: UserId | None = Depends(get_actor_id),
):
    node = await manager.move(
        CategoryId(category_id),
        CategoryId(body.new_parent_id) if body.new_parent_id else None,
        actor_id,
    )
    return CategoryResponse.model_validate(node)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    manager: CategoryHierarchyManager = Depends(get_category_manager),
    actor_id: UserId | None = Depends(get_actor_id),
):
    await manager.delete(CategoryId(category_id), actor_id)


@router.get("/{category_id}/path", response_model=list[CategoryResponse])
async def get_category_path(
    category_id: UUID,
    manager: CategoryHierarchyManager = Depends(get_category_manager),
):
    return [CategoryResponse.model_validate(n) for n in await manager.path(CategoryId(category_id))]


@router.get("/{category_id}/children", response_model=list[CategoryResponse])
async def get_subcategories(
    category_id: UUID,
    manager: CategoryHierarchyManager = Depends(get_category_manager),
):
    children = await manager.children_of(CategoryId(category_id))
    return [CategoryResponse.model_validate(n) for n in children]


@router.get("/{category_id}/ads/count", response_model=CountResponse)
async def count_category_ads(
    category_id: UUID,
    include_subcategories: bool = Query(False),
    manager: CategoryHierarchyManager = Depends(get_category_manager),
):
    cid = CategoryId(category_id)
    count = (
        await manager.subtree_ad_count(cid)
        if include_subcategories else await manager.ad_count(cid)
    )
    return CountResponse(id=category_id, count=count)
