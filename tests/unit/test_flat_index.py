"""Tests for mapping between selections and flat row offsets."""

from iab_taxonomy.core.tree.flat_index import (
    at_offset,
    clamp_offset,
    index_of,
    reselect,
    scroll_position,
    step,
)
from iab_taxonomy.core.tree.builder import build_forest
from iab_taxonomy.core.tree.visibility import visible_rows
from iab_taxonomy.models.record import FilterState, Forest, ScrollPosition
from tests.unit.fakes import make_store


def test_offset_round_trip(insurance_forest: Forest) -> None:
    rows = visible_rows(insurance_forest, {"10", "11", "12", "15"}, FilterState.empty())
    for k in range(len(rows)):
        assert index_of(rows, at_offset(rows, k)) == k


def test_out_of_range_offsets(insurance_forest: Forest) -> None:
    rows = visible_rows(insurance_forest, set(), FilterState.empty())
    assert at_offset(rows, -1) is None
    assert at_offset(rows, len(rows)) is None
    assert clamp_offset(rows, 99) == len(rows) - 1
    assert clamp_offset(rows, -5) == 0
    assert clamp_offset((), 0) is None


def test_step_clamps_page_moves(insurance_forest: Forest) -> None:
    rows = visible_rows(insurance_forest, {"10", "11", "12", "15"}, FilterState.empty())
    assert step(rows, "10", 10) == rows[-1].record_id
    assert step(rows, rows[-1].record_id, -10) == "10"
    assert step(rows, "11", 1) == "13"
    assert step((), "11", 1) is None


def test_collapsing_parent_hides_selected_child_and_promotes_parent() -> None:
    store = make_store(
        [("10", "", "Insurance"), ("11", "10", "Home Insurance"), ("12", "", "Banking")]
    )
    forest = build_forest(store)

    expanded_rows = visible_rows(forest, {"10"}, FilterState.empty())
    assert index_of(expanded_rows, "11") == 1

    collapsed_rows = visible_rows(forest, set(), FilterState.empty())
    assert index_of(collapsed_rows, "11") is None
    assert reselect(forest, collapsed_rows, "11") == "10"


def test_reselect_prefers_nearest_visible_ancestor(insurance_forest: Forest) -> None:
    rows = visible_rows(insurance_forest, {"10"}, FilterState.empty())
    assert reselect(insurance_forest, rows, "13") == "11"


def test_reselect_falls_back_to_first_row(insurance_forest: Forest) -> None:
    rows = visible_rows(insurance_forest, set(), FilterState.empty())
    assert reselect(insurance_forest, rows, "missing") == "10"
    assert reselect(insurance_forest, rows, None) == "10"
    assert reselect(insurance_forest, (), "10") is None


def test_scroll_position(insurance_forest: Forest) -> None:
    rows = visible_rows(insurance_forest, {"12"}, FilterState.empty())
    assert scroll_position(rows, "15") == ScrollPosition(offset=2, total=3)
    assert scroll_position(rows, "13") == ScrollPosition(offset=None, total=3)
