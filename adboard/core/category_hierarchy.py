"""Category Hierarchy — pure forest rules over parent ids.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Categories reference their parent by id only; children are derived, never stored
    - A parent change is rejected iff the proposed parent is the node itself or one of its
      descendants, detected by walking UP from the proposed parent
    - Every walk is bounded by a visited set: a revisit is reported as a cycle, never looped on

Design Decisions:
    - would_create_cycle takes a parent_of mapping: the manager fills it from the
      proposed parent's ancestor chain, AncestorWalk holds the single step
    - build_tree groups once by parent id, then emits each node once: O(n) overall
"""

from collections import defaultdict, deque
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

from adboard.core.domain_types import CategoryId


@dataclass(frozen=True)
class CategoryNode:
    """One category as the core sees it — parent by id, no object graph."""
    id: CategoryId
    name: str
    description: str | None = None
    parent_id: CategoryId | None = None


@dataclass
class CategoryTreeNode:
    """Nested view of a category and its subtree, children ordered by name."""
    id: CategoryId
    name: str
    description: str | None
    parent_id: CategoryId | None
    children: list["CategoryTreeNode"] = field(default_factory=list)


@dataclass(frozen=True)
class CategorySelectItem:
    """Flat row for populating a category picker."""
    id: CategoryId
    name: str
    parent_id: CategoryId | None
    has_children: bool


# ─── Cycle check ─────────────────────────────────────────────────

@dataclass
class AncestorWalk:
    """Upward walk from a proposed parent, looking for the node being moved."""

    category_id: CategoryId
    visited: set[CategoryId] = field(default_factory=set)

    def visit(self, ancestor_id: CategoryId) -> bool:
        """Record one step up. True when the step proves a cycle."""
        if ancestor_id == self.category_id or ancestor_id in self.visited:
            return True
        self.visited.add(ancestor_id)
        return False


def would_create_cycle(
    category_id: CategoryId,
    proposed_parent_id: CategoryId | None,
    parent_of: Mapping[CategoryId, CategoryId | None],
) -> bool:
    """True if making proposed_parent_id the parent of category_id closes a loop.

    None as proposed parent means "promote to root", which is always legal.
    Unknown ids end the walk (they have no parent to follow).
    """
    if proposed_parent_id is None:
        return False
    walk = AncestorWalk(category_id)
    current: CategoryId | None = proposed_parent_id
    while current is not None:
        if walk.visit(current):
            return True
        current = parent_of.get(current)
    return False


# ─── Ancestors / descendants ─────────────────────────────────────

def walk_to_root(
    category_id: CategoryId,
    lookup: Callable[[CategoryId], CategoryNode | None],
) -> list[CategoryNode]:
    """Ancestor chain ordered root → category_id inclusive. Empty if unknown."""
    chain: list[CategoryNode] = []
    seen: set[CategoryId] = set()
    current = lookup(category_id)
    while current is not None and current.id not in seen:
        seen.add(current.id)
        chain.append(current)
        current = lookup(current.parent_id) if current.parent_id is not None else None
    chain.reverse()
    return chain


def expand_descendants(
    root_id: CategoryId,
    children_of: Callable[[CategoryId], Iterable[CategoryId]],
) -> list[CategoryId]:
    """root_id plus every transitive child, breadth-first."""
    ordered: list[CategoryId] = [root_id]
    seen: set[CategoryId] = {root_id}
    queue: deque[CategoryId] = deque([root_id])
    while queue:
        for child_id in children_of(queue.popleft()):
            if child_id not in seen:
                seen.add(child_id)
                ordered.append(child_id)
                queue.append(child_id)
    return ordered


# ─── Tree / select list ──────────────────────────────────────────

def group_by_parent(
    nodes: Iterable[CategoryNode],
) -> dict[CategoryId | None, list[CategoryNode]]:
    """Partition nodes by parent id (None key = roots), each group sorted by name."""
    groups: dict[CategoryId | None, list[CategoryNode]] = defaultdict(list)
    for node in nodes:
        groups[node.parent_id].append(node)
    for members in groups.values():
        members.sort(key=lambda n: n.name.lower())
    return dict(groups)


def build_tree(nodes: Iterable[CategoryNode]) -> list[CategoryTreeNode]:
    """Nest the whole forest, starting from the root group."""
    groups = group_by_parent(nodes)

    def _emit(node: CategoryNode) -> CategoryTreeNode:
        return CategoryTreeNode(
            id=node.id,
            name=node.name,
            description=node.description,
            parent_id=node.parent_id,
            children=[_emit(child) for child in groups.get(node.id, [])],
        )

    return [_emit(root) for root in groups.get(None, [])]


def build_select_list(nodes: Iterable[CategoryNode]) -> list[CategorySelectItem]:
    nodes = list(nodes)
    parent_ids = {n.parent_id for n in nodes if n.parent_id is not None}
    return [
        CategorySelectItem(
            id=n.id, name=n.name, parent_id=n.parent_id,
            has_children=n.id in parent_ids,
        )
        for n in sorted(nodes, key=lambda n: n.name.lower())
    ]
