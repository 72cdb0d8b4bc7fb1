"""Tests for building a forest from a flat record store."""

from iab_taxonomy.core.tree.builder import build_forest, is_root
from iab_taxonomy.core.tree.navigation import iter_preorder
from iab_taxonomy.models.record import Forest, RecordStore
from tests.unit.fakes import make_store


def _root_ids(forest: Forest) -> list[str]:
    return [r.record_id for r in forest.roots]


def _child_ids(forest: Forest, record_id: str) -> list[str]:
    return [c.record_id for c in forest.nodes[record_id].children]


def test_self_reference_is_a_root() -> None:
    store = make_store([("1", "", "Root1"), ("2", "1", "Child1"), ("1000", "1000", "SelfRef")])
    forest = build_forest(store)

    assert _root_ids(forest) == ["1", "1000"]
    assert _child_ids(forest, "1") == ["2"]
    assert _child_ids(forest, "1000") == []


def test_unknown_parent_is_a_root() -> None:
    store = make_store([("5", "404", "Dangling"), ("6", "5", "Below dangling")])
    assert is_root(store["5"], store)
    assert _root_ids(build_forest(store)) == ["5"]


def test_children_keep_store_order(insurance_forest: Forest) -> None:
    assert _root_ids(insurance_forest) == ["10", "12"]
    assert _child_ids(insurance_forest, "10") == ["11", "14"]
    assert _child_ids(insurance_forest, "11") == ["13"]


def test_child_listed_before_parent_is_attached() -> None:
    store = make_store([("c", "p", "Child"), ("p", "", "Parent")])
    forest = build_forest(store)
    assert _root_ids(forest) == ["p"]
    assert _child_ids(forest, "p") == ["c"]


def test_empty_store_gives_empty_forest() -> None:
    forest = build_forest(make_store([]))
    assert forest.roots == ()
    assert len(forest) == 0


def test_two_node_cycle_terminates_and_keeps_each_record_once() -> None:
    store = make_store([("a", "b", "A"), ("b", "a", "B")])
    forest = build_forest(store)

    ids = [node.record_id for node, _depth, _path in iter_preorder(forest)]
    assert sorted(ids) == ["a", "b"]
    assert _root_ids(forest) == ["a"]
    assert _child_ids(forest, "a") == ["b"]
    assert _child_ids(forest, "b") == []
    assert forest.truncated_edges == 1


def test_records_hanging_off_a_cycle_stay_under_it() -> None:
    store = make_store(
        [("x", "p", "Hanger"), ("p", "q", "P"), ("q", "p", "Q"), ("r", "", "Real root")]
    )
    forest = build_forest(store)

    assert _root_ids(forest) == ["r", "p"]
    assert _child_ids(forest, "p") == ["x", "q"]
    assert len(forest) == 4


def test_long_cycle_terminates() -> None:
    rows = [(str(i), str((i + 1) % 50), f"Node {i}") for i in range(50)]
    store: RecordStore = make_store(rows)
    forest = build_forest(store)

    ids = [node.record_id for node, _depth, _path in iter_preorder(forest)]
    assert len(ids) == 50
    assert len(set(ids)) == 50
