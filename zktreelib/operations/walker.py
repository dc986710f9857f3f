"""Recursive listing of a subtree."""

from typing import List

from ..core.adapter import NamespaceAdapter
from ..core.session import Session
from ..core.traverser import DepthFirstPreOrderTraverser


def list_recursive(session: Session, root_path: str) -> List[str]:
    """List every descendant of root_path, relative to it, in pre-order.

    Children are visited in lexicographic order at every level, and each
    node appears strictly before all of its descendants. The root itself
    is excluded, so a leaf yields an empty list.

    The whole walk uses the given session. Any error (NoNodeError for a
    missing root, or a failure partway down) propagates and no partial
    listing is returned.

    Args:
        session: Open session, owned by the caller
        root_path: Absolute path of the subtree root

    Returns:
        Relative paths such as ["a", "a/x", "b"]
    """
    adapter = NamespaceAdapter(session)
    traverser = DepthFirstPreOrderTraverser(adapter)

    listing = []
    for node, depth in traverser.traverse(adapter.create_node(root_path)):
        if depth > 0:
            listing.append(node.relative_path)
    return listing
