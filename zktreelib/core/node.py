"""Value types for namespace nodes.

ZNode is intentionally kept simple - it's a path wrapper. Navigation is
delegated to the NamespaceAdapter, which asks a session for children.
"""

import posixpath
from dataclasses import dataclass


ROOT = '/'


def join_path(parent: str, child: str) -> str:
    """Join a child name onto a path ("/" + "a" -> "/a", "" + "a" -> "a")."""
    if not parent:
        return child
    return posixpath.join(parent, child)


def parent_path(path: str) -> str:
    """Return the parent of an absolute path ("/a/b" -> "/a", "/a" -> "/")."""
    return posixpath.dirname(path.rstrip('/')) or ROOT


class ZNode:
    """A node in the remote namespace.

    Attributes:
        path: Absolute path of the node
        relative_path: Path relative to the traversal root ("" for the root)
    """

    def __init__(self, path: str, relative_path: str = ''):
        self.path = path
        self.relative_path = relative_path

    def child(self, name: str) -> 'ZNode':
        """Build the node for an immediate child called name."""
        return ZNode(join_path(self.path, name), join_path(self.relative_path, name))

    def __str__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"ZNode(path={self.path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZNode):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)


@dataclass(frozen=True)
class NodeStat:
    """Metadata the server keeps for every node.

    Returned by data and ACL updates.
    """
    version: int = 0
    cversion: int = 0
    aversion: int = 0
    data_length: int = 0
    num_children: int = 0
    ephemeral_owner: int = 0
    czxid: int = 0
    mzxid: int = 0
    pzxid: int = 0
    ctime: int = 0
    mtime: int = 0

    @property
    def is_ephemeral(self) -> bool:
        return self.ephemeral_owner != 0

