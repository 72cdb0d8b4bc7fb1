"""Map between selected ids and flat offsets in the visible rows."""

from collections.abc import Sequence

from iab_taxonomy.core.tree.navigation import ancestor_path
from iab_taxonomy.models.record import Forest, ScrollPosition, VisibleRow


def index_of(rows: Sequence[VisibleRow], record_id: str | None) -> int | None:
    """Position of ``record_id`` in the visible rows, or None if it is not shown."""
    if record_id is None:
        return None
    for offset, row in enumerate(rows):
        if row.record_id == record_id:
            return offset
    return None


def at_offset(rows: Sequence[VisibleRow], offset: int) -> str | None:
    """Record id shown at ``offset``, or None outside the rows."""
    if 0 <= offset < len(rows):
        return rows[offset].record_id
    return None


def clamp_offset(rows: Sequence[VisibleRow], offset: int) -> int | None:
    if not rows:
        return None
    return max(0, min(offset, len(rows) - 1))


def step(rows: Sequence[VisibleRow], record_id: str | None, delta: int) -> str | None:
    """Record id ``delta`` rows away from the selection, clamped to the rows.

    An invisible selection moves from the first row.
    """
    current = index_of(rows, record_id)
    target = clamp_offset(rows, (current if current is not None else 0) + delta)
    if target is None:
        return None
    return rows[target].record_id


def reselect(forest: Forest, rows: Sequence[VisibleRow], record_id: str | None) -> str | None:
    """Pick a selection that is visible.

    Keeps ``record_id`` if shown, else its nearest shown ancestor, else the first row.
    """
    if index_of(rows, record_id) is not None:
        return record_id
    if not rows:
        return None

    path = ancestor_path(forest, record_id) if record_id is not None else None
    if path:
        shown = {row.record_id for row in rows}
        for ancestor in reversed(path):
            if ancestor in shown:
                return ancestor
    return rows[0].record_id


def scroll_position(rows: Sequence[VisibleRow], record_id: str | None) -> ScrollPosition:
    return ScrollPosition(offset=index_of(rows, record_id), total=len(rows))
