"""Reference Rules — deletion preconditions shared by categories and tags.

Invariants:
    - A category or tag referenced by at least one ad cannot be deleted
    - A category with at least one direct child cannot be deleted, checked before ads
    - Soft-deleted ads still count as references (the ad row and its links remain)
"""

from adboard.core.domain_types import CategoryId, ResourceType
from adboard.core.errors import HasSubcategoriesError, ReferencedByAdsError


def check_not_referenced(
    resource_type: ResourceType, resource_id: object, ad_count: int,
) -> None:
    if ad_count > 0:
        raise ReferencedByAdsError(resource_type.value, resource_id, ad_count)


def check_category_deletable(
    category_id: CategoryId, has_children: bool, ad_count: int,
) -> None:
    """Children first: a non-empty subtree blocks deletion regardless of ads."""
    if has_children:
        raise HasSubcategoriesError(category_id)
    check_not_referenced(ResourceType.CATEGORY, category_id, ad_count)
