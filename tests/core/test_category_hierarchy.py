"""Category Hierarchy — verifies the pure forest rules.

Tests:
    - would_create_cycle: self-parent, descendant-parent, ancestor-parent, root promotion
    - AncestorWalk reports a revisit instead of looping on corrupted data
    - walk_to_root orders root → node and returns [] for unknown ids
    - expand_descendants includes the root and every transitive child once
    - build_tree nests A ⊃ B ⊃ C with depth 3; siblings sorted by name
    - build_select_list flags parents and sorts case-insensitively
"""

from uuid import uuid4

from adboard.core.category_hierarchy import (
    AncestorWalk,
    CategoryNode,
    build_select_list,
    build_tree,
    expand_descendants,
    group_by_parent,
    walk_to_root,
    would_create_cycle,
)
from adboard.core.domain_types import CategoryId
from tests.core.tree_helpers import tree_depth


def _id() -> CategoryId:
    return CategoryId(uuid4())


def _chain():
    """A ← B ← C (C is the deepest)."""
    a, b, c = _id(), _id(), _id()
    nodes = [
        CategoryNode(a, "A"),
        CategoryNode(b, "B", parent_id=a),
        CategoryNode(c, "C", parent_id=b),
    ]
    return a, b, c, nodes


def _parent_map(nodes):
    return {n.id: n.parent_id for n in nodes}


# ─── would_create_cycle ──────────────────────────────────────────

def test_self_parent_is_a_cycle():
    a, _, _, nodes = _chain()
    assert would_create_cycle(a, a, _parent_map(nodes))


def test_descendant_as_parent_is_a_cycle():
    a, b, c, nodes = _chain()
    parents = _parent_map(nodes)
    assert would_create_cycle(a, c, parents)
    assert would_create_cycle(a, b, parents)
    assert would_create_cycle(b, c, parents)


def test_ancestor_as_parent_is_allowed():
    a, _, c, nodes = _chain()
    assert not would_create_cycle(c, a, _parent_map(nodes))


def test_unrelated_parent_is_allowed():
    _, b, _, nodes = _chain()
    other = _id()
    parents = _parent_map(nodes) | {other: None}
    assert not would_create_cycle(b, other, parents)


def test_promote_to_root_is_never_a_cycle():
    a, _, _, nodes = _chain()
    assert not would_create_cycle(a, None, _parent_map(nodes))


def test_unknown_parent_ends_the_walk():
    a, _, _, nodes = _chain()
    assert not would_create_cycle(a, _id(), _parent_map(nodes))


def test_corrupted_loop_terminates_as_cycle():
    x, y, moved = _id(), _id(), _id()
    assert would_create_cycle(moved, x, {x: y, y: x})


def test_ancestor_walk_records_visits():
    target = _id()
    walk = AncestorWalk(target)
    step = _id()
    assert walk.visit(step) is False
    assert walk.visit(step) is True
    assert walk.visit(target) is True


# ─── Ancestors / descendants ─────────────────────────────────────

def test_walk_to_root_orders_root_first():
    a, b, c, nodes = _chain()
    by_id = {n.id: n for n in nodes}
    chain = walk_to_root(c, by_id.get)
    assert [n.id for n in chain] == [a, b, c]


def test_walk_to_root_of_root_is_itself():
    a, _, _, nodes = _chain()
    by_id = {n.id: n for n in nodes}
    assert [n.id for n in walk_to_root(a, by_id.get)] == [a]


def test_walk_to_root_unknown_is_empty():
    _, _, _, nodes = _chain()
    by_id = {n.id: n for n in nodes}
    assert walk_to_root(_id(), by_id.get) == []


def test_expand_descendants_includes_root_and_all_levels():
    a, b, c, nodes = _chain()
    sibling = CategoryNode(_id(), "B2", parent_id=a)
    groups = group_by_parent(nodes + [sibling])

    ids = expand_descendants(a, lambda pid: [n.id for n in groups.get(pid, [])])

    assert ids[0] == a
    assert set(ids) == {a, b, c, sibling.id}
    assert len(ids) == 4


def test_expand_descendants_of_leaf_is_only_leaf():
    _, _, c, nodes = _chain()
    groups = group_by_parent(nodes)
    assert expand_descendants(c, lambda pid: [n.id for n in groups.get(pid, [])]) == [c]


# ─── Tree / select list ──────────────────────────────────────────

def test_build_tree_nests_chain_with_depth_three():
    a, b, c, nodes = _chain()
    roots = build_tree(nodes)

    assert len(roots) == 1
    assert roots[0].id == a
    assert roots[0].children[0].id == b
    assert roots[0].children[0].children[0].id == c
    assert roots[0].children[0].children[0].children == []
    assert tree_depth(roots) == 3


def test_build_tree_sorts_siblings_by_name():
    root = _id()
    nodes = [
        CategoryNode(root, "Root"),
        CategoryNode(_id(), "zeta", parent_id=root),
        CategoryNode(_id(), "Alpha", parent_id=root),
        CategoryNode(_id(), "beta", parent_id=root),
    ]
    children = build_tree(nodes)[0].children
    assert [c.name for c in children] == ["Alpha", "beta", "zeta"]


def test_build_tree_forest_has_multiple_roots():
    nodes = [CategoryNode(_id(), "Vehicles"), CategoryNode(_id(), "Housing")]
    roots = build_tree(nodes)
    assert [r.name for r in roots] == ["Housing", "Vehicles"]
    assert tree_depth(roots) == 1


def test_tree_depth_of_empty_forest_is_zero():
    assert build_tree([]) == []
    assert tree_depth([]) == 0


def test_select_list_flags_parents():
    a, b, c, nodes = _chain()
    items = {i.id: i for i in build_select_list(nodes)}
    assert items[a].has_children
    assert items[b].has_children
    assert not items[c].has_children
    assert items[c].parent_id == b


def test_select_list_sorted_case_insensitively():
    nodes = [CategoryNode(_id(), "b"), CategoryNode(_id(), "A"), CategoryNode(_id(), "c")]
    assert [i.name for i in build_select_list(nodes)] == ["A", "b", "c"]
