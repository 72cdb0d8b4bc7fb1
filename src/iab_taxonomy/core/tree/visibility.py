"""Derive the visible rows from the forest, expansion state and filter."""

from collections.abc import Set

from iab_taxonomy.core.tree.navigation import iter_preorder
from iab_taxonomy.models.record import FilterState, Forest, VisibleRow


def effective_expanded(
    forest: Forest, expanded_ids: Set[str], filter_state: FilterState
) -> frozenset[str]:
    """Expanded ids in effect for rendering.

    Without a filter this is ``expanded_ids``. With one, every required-visible node
    that has a required-visible child is forced open too. The required set always
    holds the ancestors of its members, so those are exactly the ancestors to open.
    """
    if not filter_state.active:
        return frozenset(expanded_ids)

    required = filter_state.required_visible_ids
    forced = {
        record_id
        for record_id in required
        if record_id in forest.nodes
        and any(child.record_id in required for child in forest.nodes[record_id].children)
    }
    return frozenset(expanded_ids) | forced


def visible_rows(
    forest: Forest, expanded_ids: Set[str], filter_state: FilterState
) -> tuple[VisibleRow, ...]:
    """List the rows to display, in pre-order.

    A node is shown when it is a root or all its ancestors are expanded. Under an
    active filter the shown nodes are exactly the required-visible set.
    """
    expanded = effective_expanded(forest, expanded_ids, filter_state)
    required = filter_state.required_visible_ids if filter_state.active else None
    rows: list[VisibleRow] = []

    for node, depth, path in iter_preorder(forest):
        if required is not None and node.record_id not in required:
            continue
        if path and not all(ancestor in expanded for ancestor in path):
            continue
        rows.append(
            VisibleRow(
                record_id=node.record_id,
                depth=depth,
                is_expanded=node.record_id in expanded,
                has_children=bool(node.children),
            )
        )

    return tuple(rows)
