"""Path Namespace Client for ZKTreeLib.

NamespaceClient is the primary entry point. Every public method opens one
session, performs its remote calls over it and closes it again before
returning, on success and on failure alike. Recursive operations run over
that single session from start to finish.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Set, Union

from .acl import ACLEntry, format_acl, parse_acl
from .config import ClientConfig
from .core.node import ROOT, NodeStat
from .core.session import Session, SessionFactory
from .flags import NodeFlags, normalize_flags
from .operations import create_with_auto_parent, delete_recursive, list_recursive

logger = logging.getLogger(__name__)

# ACL given as text ("world:anyone:cdrwa"), as entries, or None for the default.
ACLSpec = Union[str, Sequence[ACLEntry], None]


def _default_session_factory(config: ClientConfig) -> Session:
    from .adapters.zookeeper import KazooSession
    return KazooSession.open(config)


class NamespaceClient:
    """High-level client for a tree-structured coordination namespace.

    Example:
        >>> client = NamespaceClient(ClientConfig.from_servers_string("zk1,zk2"))
        >>> client.create("/app/config/db", b"primary", force=True)
        '/app/config/db'
        >>> client.children_recursive("/app")
        ['config', 'config/db']
    """

    def __init__(self,
                 config: Optional[ClientConfig] = None,
                 session_factory: Optional[SessionFactory] = None):
        """Initialize the client.

        Args:
            config: Connection settings and creation defaults
            session_factory: Opens sessions; defaults to the kazoo adapter
        """
        self.config = config or ClientConfig()
        self._session_factory = session_factory or _default_session_factory

    # Configuration

    def set_servers(self, servers: List[str]) -> None:
        """Set the servers to connect to, each "host" or "host:port"."""
        self.config.servers = list(servers)

    def set_auth(self, scheme: str, credential: bytes) -> None:
        """Authenticate every future session with scheme and credential."""
        logger.debug("setting auth scheme %s", scheme)
        self.config.auth_scheme = scheme
        self.config.auth_credential = credential

    def set_flags(self, value: int) -> NodeFlags:
        """Set creation flags; values outside 0..2 become NONE."""
        self.config.flags = normalize_flags(value)
        return self.config.flags

    def set_ephemeral(self) -> None:
        self.set_flags(NodeFlags.EPHEMERAL)

    def set_sequential(self) -> None:
        self.set_flags(NodeFlags.SEQUENTIAL)

    # Session handling

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Open a session for the duration of one public call."""
        session = self._session_factory(self.config)
        with session:
            yield session

    def _resolve_acl(self, acl: ACLSpec) -> List[ACLEntry]:
        if acl is None:
            return list(self.config.acl)
        if isinstance(acl, str):
            return parse_acl(acl) if acl else list(self.config.acl)
        return list(acl)

    # Atomic operations

    def exists(self, path: str) -> bool:
        """Return True when path exists."""
        with self._session() as session:
            return session.exists(path)

    def get(self, path: str) -> bytes:
        """Return the payload of path. Raises NoNodeError if absent."""
        with self._session() as session:
            return session.get(path)

    def get_acl(self, path: str) -> List[ACLEntry]:
        """Return the ACL of path."""
        with self._session() as session:
            return session.get_acl(path)

    def get_acl_text(self, path: str) -> List[str]:
        """Return the ACL of path rendered as "scheme:id:cdrwa" strings."""
        return format_acl(self.get_acl(path))

    def children(self, path: str) -> Set[str]:
        """Return names of the immediate children of path."""
        with self._session() as session:
            return set(session.children(path))

    def has_children(self, path: str) -> bool:
        return len(self.children(path)) > 0

    def create_single(self,
                      path: str,
                      data: bytes,
                      flags: Optional[int] = None,
                      acl: ACLSpec = None) -> str:
        """Create exactly one node.

        The root always exists, so creating "/" returns "/" without
        contacting the server.

        Raises:
            NodeExistsError: If path already exists
            NoNodeError: If the parent of path does not exist
        """
        if path == ROOT:
            return ROOT
        node_flags = self.config.flags if flags is None else normalize_flags(flags)
        entries = self._resolve_acl(acl)
        with self._session() as session:
            return session.create(path, data, node_flags, entries)

    def set_data(self, path: str, data: bytes) -> NodeStat:
        """Overwrite the payload of path regardless of its version."""
        with self._session() as session:
            return session.set_data(path, data)

    def delete(self, path: str) -> None:
        """Delete one node. Raises NoNodeError or NotEmptyError."""
        with self._session() as session:
            session.delete(path)

    # Multi-step operations

    def children_recursive(self, path: str) -> List[str]:
        """List all descendants of path as relative paths, in pre-order."""
        with self._session() as session:
            return list_recursive(session, path)

    def create(self,
               path: str,
               data: bytes,
               acl: ACLSpec = None,
               force: bool = False) -> str:
        """Create path, creating missing ancestors when force is set.

        Args:
            path: Absolute path to create
            data: Payload of the new node
            acl: ACL text, entries, or None for the configured default
            force: Create missing ancestors instead of failing

        Returns:
            The created path

        Raises:
            ACLParseError: If acl text is malformed (nothing is created)
            NamespaceError: If the node could not be created
        """
        entries = self._resolve_acl(acl)
        if path == ROOT:
            return ROOT
        with self._session() as session:
            return create_with_auto_parent(
                session, path, data, entries, force=force, flags=self.config.flags
            )

    def set_acl(self, path: str, acl: ACLSpec, force: bool = False) -> str:
        """Replace the ACL of path.

        ACL text is always parsed, so empty text is rejected rather than
        falling back to the configured default.

        With force set and path missing, path is created (empty payload,
        missing ancestors included) with this ACL instead.

        Returns:
            path

        Raises:
            ACLParseError: If acl text is malformed
            NoNodeError: If path is missing and force is not set
        """
        entries = parse_acl(acl) if isinstance(acl, str) else self._resolve_acl(acl)
        with self._session() as session:
            if force and not session.exists(path):
                return create_with_auto_parent(
                    session, path, b"", entries, force=True, flags=self.config.flags
                )
            session.set_acl(path, entries)
            return path

    def delete_recursive(self, path: str) -> None:
        """Delete path and its whole subtree, deepest nodes first.

        Not atomic: a failure stops the deletion and leaves the remaining
        nodes in place.
        """
        with self._session() as session:
            delete_recursive(session, path)

    def __repr__(self) -> str:
        return f"NamespaceClient(servers={self.config.servers!r})"


__all__ = ['NamespaceClient', 'ACLSpec']
