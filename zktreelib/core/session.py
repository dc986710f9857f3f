"""Session abstraction for ZKTreeLib.

A Session is one live connection to the coordination service. It exposes
the atomic path-oriented primitives; everything recursive in ZKTreeLib is
built on top of these calls. Concrete sessions live in zktreelib.adapters.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Sequence, TYPE_CHECKING

from ..acl import ACLEntry
from ..flags import NodeFlags
from .node import NodeStat

if TYPE_CHECKING:
    from ..config import ClientConfig


# Version argument meaning "whatever the current version is".
ANY_VERSION = -1


class Session(ABC):
    """Abstract connection to a tree-structured coordination namespace.

    Every method either returns its result or raises a NamespaceError
    subclass (NoNodeError, NodeExistsError, NotEmptyError,
    VersionMismatchError, ConnectionFailedError).

    Sessions are context managers; leaving the block closes the session
    whether or not an error occurred.
    """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True iff a node exists at path."""
        pass

    @abstractmethod
    def get(self, path: str) -> bytes:
        """Return the payload stored at path.

        Raises:
            NoNodeError: If path does not exist
        """
        pass

    @abstractmethod
    def children(self, path: str) -> List[str]:
        """Return the names of the immediate children of path, in any order.

        Raises:
            NoNodeError: If path does not exist
        """
        pass

    @abstractmethod
    def create(self,
               path: str,
               data: bytes,
               flags: NodeFlags,
               acl: Sequence[ACLEntry]) -> str:
        """Create a single node and return its actual path.

        The returned path differs from path for sequential nodes.

        Raises:
            NodeExistsError: If path already exists
            NoNodeError: If the parent of path does not exist
        """
        pass

    @abstractmethod
    def set_data(self, path: str, data: bytes, version: int = ANY_VERSION) -> NodeStat:
        """Replace the payload at path.

        Raises:
            NoNodeError: If path does not exist
            VersionMismatchError: If version is given and does not match
        """
        pass

    @abstractmethod
    def set_acl(self,
                path: str,
                acl: Sequence[ACLEntry],
                version: int = ANY_VERSION) -> NodeStat:
        """Replace the ACL of path.

        Raises:
            NoNodeError: If path does not exist
        """
        pass

    @abstractmethod
    def get_acl(self, path: str) -> List[ACLEntry]:
        """Return the ACL of path in server order.

        Raises:
            NoNodeError: If path does not exist
        """
        pass

    @abstractmethod
    def delete(self, path: str, version: int = ANY_VERSION) -> None:
        """Delete a single node.

        Raises:
            NoNodeError: If path does not exist
            NotEmptyError: If path still has children
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        pass

    def __enter__(self) -> 'Session':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


# Opens a session for a configuration. Raises ConnectionFailedError.
SessionFactory = Callable[['ClientConfig'], Session]
