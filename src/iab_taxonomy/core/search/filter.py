"""Multi-token substring filter over a taxonomy forest."""

import re
from types import MappingProxyType

from loguru import logger

from iab_taxonomy.core.tree.navigation import iter_preorder, iter_subtree
from iab_taxonomy.models.record import (
    FilterState,
    Forest,
    HighlightSpan,
    Record,
    RecordHighlights,
    RecordStore,
)


def tokenize(query: str) -> tuple[str, ...]:
    """Split a query on whitespace into lowercase tokens."""
    return tuple(token.lower() for token in query.split())


def record_matches(record: Record, tokens: tuple[str, ...]) -> bool:
    """True if every token is a substring of at least one searchable field.

    Fields are checked case-insensitively and independently per token, so the
    tokens of one query may be satisfied by different fields.
    """
    fields = [f.lower() for f in record.searchable_fields]
    return all(any(token in f for f in fields) for token in tokens)


def _field_spans(text: str, tokens: tuple[str, ...]) -> tuple[HighlightSpan, ...]:
    # Match against the original text: lowercasing may change its length.
    ranges: list[tuple[int, int]] = []
    for token in tokens:
        pattern = re.compile(f"(?=({re.escape(token)}))", re.IGNORECASE)
        ranges.extend(m.span(1) for m in pattern.finditer(text))

    merged: list[tuple[int, int]] = []
    for start, end in sorted(ranges):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return tuple(HighlightSpan(start, end) for start, end in merged)


def highlight_record(record: Record, tokens: tuple[str, ...]) -> RecordHighlights:
    """Matched character ranges in the record's id and name, sorted and merged."""
    return RecordHighlights(
        id_spans=_field_spans(record.id, tokens),
        name_spans=_field_spans(record.name, tokens),
    )


def apply_filter(forest: Forest, store: RecordStore, query: str) -> FilterState:
    """Filter a forest with a query.

    Args:
        forest: Forest built from ``store``.
        store: Records to match against.
        query: Raw filter text; whitespace separates tokens that must all match.

    Returns:
        FilterState with the matching ids and the ids that must stay visible to
        keep their context: the matches, their ancestors and their descendants.
        An empty query yields an inactive state.
    """
    tokens = tokenize(query)
    if not tokens:
        return FilterState(query=query)

    matched: set[str] = set()
    required: set[str] = set()
    for node, _depth, path in iter_preorder(forest):
        record = store.get(node.record_id)
        if record is None or not record_matches(record, tokens):
            continue
        matched.add(node.record_id)
        required.add(node.record_id)
        required.update(path)
        required.update(iter_subtree(node))

    highlights = {
        record_id: highlight_record(store[record_id], tokens) for record_id in matched
    }
    logger.debug(
        "Filter {!r}: {} matches, {} visible", query, len(matched), len(required)
    )
    return FilterState(
        query=query,
        tokens=tokens,
        matched_ids=frozenset(matched),
        required_visible_ids=frozenset(required),
        highlights=MappingProxyType(highlights),
    )
