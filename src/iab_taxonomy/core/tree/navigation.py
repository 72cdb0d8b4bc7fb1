"""Tree navigation: pre-order walks, ancestor paths, subtrees."""

from collections.abc import Iterator

from iab_taxonomy.models.record import Forest, TreeNode


def iter_preorder(forest: Forest) -> Iterator[tuple[TreeNode, int, tuple[str, ...]]]:
    """Walk the forest in pre-order.

    Yields (node, depth, path) where path holds the ancestor ids from the root down
    to, but excluding, the node. Each node is yielded at most once.
    """
    visited: set[str] = set()
    stack: list[tuple[TreeNode, tuple[str, ...]]] = [(r, ()) for r in reversed(forest.roots)]
    while stack:
        node, path = stack.pop()
        if node.record_id in visited:
            continue
        visited.add(node.record_id)
        yield node, len(path), path
        child_path = (*path, node.record_id)
        stack.extend((child, child_path) for child in reversed(node.children))


def iter_subtree(node: TreeNode) -> Iterator[str]:
    """Yield the ids of every descendant of a node, excluding the node itself."""
    visited: set[str] = {node.record_id}
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        if current.record_id in visited:
            continue
        visited.add(current.record_id)
        yield current.record_id
        stack.extend(reversed(current.children))


def ancestor_path(forest: Forest, record_id: str) -> tuple[str, ...] | None:
    """Get ancestor ids for a node, from its root down to its parent.

    Returns None if the node is not in the forest.
    """
    if record_id not in forest.nodes:
        return None
    for node, _depth, path in iter_preorder(forest):
        if node.record_id == record_id:
            return path
    return None

