"""Build a forest of tree nodes from a flat record store."""

from collections import defaultdict
from types import MappingProxyType

from loguru import logger

from iab_taxonomy.models.record import Forest, Record, RecordStore, TreeNode


def is_root(record: Record, store: RecordStore) -> bool:
    """A record is a root if its parent is absent, unknown, or itself."""
    parent_id = record.parent_id
    return parent_id is None or parent_id == record.id or parent_id not in store


class _ForestBuilder:
    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self.children_of: defaultdict[str, list[str]] = defaultdict(list)
        self.nodes: dict[str, TreeNode] = {}
        self.truncated = 0

        for record in store:
            if not is_root(record, store):
                self.children_of[record.parent_id].append(record.id)  # type: ignore[index]

    def attach(self, root_id: str) -> TreeNode:
        """Attach the subtree under ``root_id`` and return its node.

        Iterative post-order build: a node is created once all its children are.
        ``on_path`` holds the ids between the root and the node being expanded.
        """
        on_path: set[str] = {root_id}
        built: dict[str, list[TreeNode]] = {root_id: []}
        stack: list[tuple[str, int]] = [(root_id, 0)]

        while stack:
            node_id, next_child = stack[-1]
            child_ids = self.children_of.get(node_id, [])
            if next_child < len(child_ids):
                stack[-1] = (node_id, next_child + 1)
                child_id = child_ids[next_child]
                if child_id in on_path or child_id in self.nodes:
                    self.truncated += 1
                    logger.warning(
                        "Parent cycle in {} taxonomy: not descending from {!r} into {!r} again",
                        self.store.kind.title, node_id, child_id,
                    )
                    continue
                on_path.add(child_id)
                built[child_id] = []
                stack.append((child_id, 0))
                continue

            stack.pop()
            on_path.discard(node_id)
            node = TreeNode(record_id=node_id, children=tuple(built.pop(node_id)))
            self.nodes[node_id] = node
            if stack:
                built[stack[-1][0]].append(node)

        return self.nodes[root_id]

    def cycle_entry(self, record: Record) -> str:
        """Follow parent links up from ``record`` until an id repeats; return that id."""
        seen: set[str] = set()
        current: Record = record
        while current.id not in seen:
            seen.add(current.id)
            # Only called for unplaced records, whose parents all exist
            current = self.store[current.parent_id]  # type: ignore[index]
        return current.id


def build_forest(store: RecordStore) -> Forest:
    """Convert a record store into a forest.

    Roots come first in store order; children keep store order under their parent.
    Records no root reaches hang off a parent cycle. For each such group, the cycle
    member first reached from the earliest unplaced record becomes an extra root, so
    every record still appears exactly once. Never raises.
    """
    builder = _ForestBuilder(store)
    roots: list[TreeNode] = [builder.attach(r.id) for r in store if is_root(r, store)]

    for record in store:
        if record.id in builder.nodes:
            continue
        entry_id = builder.cycle_entry(record)
        logger.warning(
            "Records of {} taxonomy around {!r} form a parent cycle, showing {!r} as a root",
            store.kind.title, record.id, entry_id,
        )
        roots.append(builder.attach(entry_id))

    forest = Forest(
        roots=tuple(roots),
        nodes=MappingProxyType(builder.nodes),
        truncated_edges=builder.truncated,
    )
    logger.debug(
        "Built {} forest: {} nodes, {} roots", store.kind.title, len(forest), len(forest.roots)
    )
    return forest
