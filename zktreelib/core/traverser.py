"""Tree traversal for ZKTreeLib.

The traverser implements the walking algorithm and works through a
NamespaceAdapter, so it knows nothing about sessions or the wire.
"""

from typing import Iterator, List, Tuple

from .adapter import NamespaceAdapter
from .node import ZNode


class DepthFirstPreOrderTraverser:
    """Depth-first pre-order traversal strategy.

    Visits parent before children, children in the order the adapter
    returns them. Every node is therefore yielded before any of its
    descendants, which is what recursive deletion relies on when it
    replays the order backwards.

    Uses an explicit stack rather than recursion so namespace depth is
    not limited by the interpreter's recursion limit.
    """

    def __init__(self, adapter: NamespaceAdapter):
        """Initialize traverser with an adapter.

        Args:
            adapter: NamespaceAdapter for navigating the namespace
        """
        self.adapter = adapter

    def traverse(self, root: ZNode) -> Iterator[Tuple[ZNode, int]]:
        """Traverse the tree starting from root.

        Args:
            root: Starting node for traversal

        Yields:
            Tuples of (node, depth) where depth is relative to root
        """
        stack: List[Tuple[ZNode, int]] = [(root, 0)]

        while stack:
            node, depth = stack.pop()

            # Yield parent first (pre-order)
            yield (node, depth)

            # Push children reversed so the first child is popped next
            children = list(self.adapter.get_children(node))
            for child in reversed(children):
                stack.append((child, depth + 1))
