"""Tree adapter over a namespace session.

The adapter provides the navigation logic for the remote namespace,
decoupling the node representation from the traversal mechanism. It
borrows a session from its caller and never opens or closes one itself,
so a whole traversal runs over a single connection.
"""

import logging
from typing import Iterator

from .node import ZNode
from .session import Session

logger = logging.getLogger(__name__)


class NamespaceAdapter:
    """Navigates a namespace through one Session.

    Children are returned sorted by name, which makes every traversal
    built on this adapter deterministic.
    """

    def __init__(self, session: Session):
        """Initialize adapter with a borrowed session.

        Args:
            session: Open session; the caller owns its lifetime
        """
        self.session = session

    def get_children(self, node: ZNode) -> Iterator[ZNode]:
        """Get child nodes in lexicographic name order.

        Errors from the session (NoNodeError and friends) propagate.
        """
        names = sorted(self.session.children(node.path))
        for name in names:
            child = node.child(name)
            logger.debug("incremental child: %s", child.relative_path)
            yield child

    def create_node(self, path: str) -> ZNode:
        """Create the root node for a traversal starting at path."""
        return ZNode(path)
