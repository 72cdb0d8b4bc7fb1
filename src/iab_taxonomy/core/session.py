"""Browsing session: the state behind one interactive run."""

from collections.abc import Sequence

from loguru import logger

from iab_taxonomy.config import PAGE_SIZE
from iab_taxonomy.core.search.filter import apply_filter
from iab_taxonomy.core.tree import flat_index
from iab_taxonomy.core.tree.builder import build_forest
from iab_taxonomy.core.tree.navigation import ancestor_path
from iab_taxonomy.core.tree.visibility import visible_rows
from iab_taxonomy.models.record import (
    DatasetKind,
    FilterState,
    Forest,
    Record,
    RecordHighlights,
    RecordStore,
    ScrollPosition,
    VisibleRow,
)


class BrowserSession:
    """Owns dataset choice, filter text, expansion and selection.

    Every command updates the state and then repairs the selection, so after any
    call ``selected_id`` is either a visible row or None when nothing is shown.
    Derived rows are recomputed from scratch and memoised per state version.
    """

    def __init__(self, stores: Sequence[RecordStore], *, page_size: int = PAGE_SIZE) -> None:
        if not stores:
            msg = "A session needs at least one record store"
            raise ValueError(msg)
        self.stores = tuple(stores)
        self.page_size = page_size
        self.active_index = 0
        self.filter_text = ""
        self.filter_state = FilterState.empty()
        self.expanded_ids: set[str] = set()
        self.selected_id: str | None = None
        self.forest = Forest()

        self._forest_version = 0
        self._expansion_version = 0
        self._filter_version = 0
        self._rows_key: tuple[int, int, int] | None = None
        self._rows: tuple[VisibleRow, ...] = ()

        self._load_active_dataset()

    # derived state

    @property
    def active_store(self) -> RecordStore:
        return self.stores[self.active_index]

    @property
    def active_kind(self) -> DatasetKind:
        return self.active_store.kind

    @property
    def rows(self) -> tuple[VisibleRow, ...]:
        key = (self._forest_version, self._expansion_version, self._filter_version)
        if key != self._rows_key:
            self._rows = visible_rows(self.forest, self.expanded_ids, self.filter_state)
            self._rows_key = key
        return self._rows

    @property
    def selected_record(self) -> Record | None:
        if self.selected_id is None:
            return None
        return self.active_store.get(self.selected_id)

    @property
    def scroll_position(self) -> ScrollPosition:
        return flat_index.scroll_position(self.rows, self.selected_id)

    def highlights_for(self, record_id: str) -> RecordHighlights | None:
        return self.filter_state.highlights.get(record_id)

    # dataset

    def switch_dataset(self, step: int = 1) -> None:
        """Move to another dataset, wrapping around; drops manual expansion."""
        self.active_index = (self.active_index + step) % len(self.stores)
        self._load_active_dataset()

    def _load_active_dataset(self) -> None:
        self.forest = build_forest(self.active_store)
        self._forest_version += 1
        self.expanded_ids = set()
        self._expansion_version += 1
        self._refilter()
        self.selected_id = flat_index.at_offset(self.rows, 0)
        logger.debug("Switched to {} taxonomy", self.active_kind.title)

    # filter

    def append_filter(self, text: str) -> None:
        self.set_filter(self.filter_text + text)

    def trim_filter(self) -> None:
        if self.filter_text:
            self.set_filter(self.filter_text[:-1])

    def clear_filter(self) -> None:
        self.set_filter("")

    def set_filter(self, text: str) -> None:
        """Replace the filter text and select the first visible match.

        Manual expansion survives; the expansion a filter forces lasts only while
        the filter is active.
        """
        if text == self.filter_text:
            return
        self.filter_text = text
        self._refilter()
        if self.filter_state.active and self.filter_state.matched_ids:
            self.selected_id = self._first_match_or_row()
        else:
            self._repair_selection()

    def _refilter(self) -> None:
        self.filter_state = apply_filter(self.forest, self.active_store, self.filter_text)
        self._filter_version += 1

    def _first_match_or_row(self) -> str | None:
        rows = self.rows
        for row in rows:
            if row.record_id in self.filter_state.matched_ids:
                return row.record_id
        return flat_index.at_offset(rows, 0)

    # expansion

    def expand(self, record_id: str | None = None) -> None:
        target = record_id or self.selected_id
        if not self._has_children(target) or target in self.expanded_ids:
            return
        self.expanded_ids.add(target)  # type: ignore[arg-type]
        self._expansion_version += 1

    def collapse(self, record_id: str | None = None) -> None:
        target = record_id or self.selected_id
        if target not in self.expanded_ids:
            return
        self.expanded_ids.discard(target)  # type: ignore[arg-type]
        self._expansion_version += 1
        self._repair_selection()

    def toggle(self, record_id: str | None = None) -> None:
        target = record_id or self.selected_id
        if target in self.expanded_ids:
            self.collapse(target)
        else:
            self.expand(target)

    def _has_children(self, record_id: str | None) -> bool:
        node = self.forest.nodes.get(record_id) if record_id is not None else None
        return node is not None and bool(node.children)

    # selection

    def select(self, record_id: str) -> None:
        """Select a record, expanding its ancestors when no filter hides them."""
        path = ancestor_path(self.forest, record_id)
        if path is None:
            return
        if not self.filter_state.active:
            missing = set(path) - self.expanded_ids
            if missing:
                self.expanded_ids |= missing
                self._expansion_version += 1
        self.selected_id = record_id
        self._repair_selection()

    def move(self, delta: int) -> None:
        self.selected_id = flat_index.step(self.rows, self.selected_id, delta)

    def page_down(self) -> None:
        self.move(self.page_size)

    def page_up(self) -> None:
        self.move(-self.page_size)

    def _repair_selection(self) -> None:
        self.selected_id = flat_index.reselect(self.forest, self.rows, self.selected_id)
