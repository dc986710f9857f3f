"""In-memory namespace for ZKTreeLib.

InMemoryNamespace keeps a whole tree in process and hands out sessions
with the same semantics a ZooKeeper server enforces: a parent must exist
before its children, non-empty nodes cannot be deleted, ephemeral nodes
vanish with the session that created them, and sequential nodes get a
ten-digit suffix. Useful for tests and for dry runs of automation.
"""

import itertools
import logging
import posixpath
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from ..acl import ACLEntry, world_acl
from ..config import ClientConfig
from ..core.node import ROOT, NodeStat, parent_path
from ..core.session import ANY_VERSION, Session
from ..errors import (
    ConnectionFailedError,
    NamespaceError,
    NodeExistsError,
    NoNodeError,
    NotEmptyError,
    VersionMismatchError,
)
from ..flags import NodeFlags

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class _Entry:
    """Server-side state of one node."""
    data: bytes
    acl: List[ACLEntry]
    czxid: int
    ephemeral_owner: int = 0
    children: Set[str] = field(default_factory=set)
    version: int = 0
    cversion: int = 0
    aversion: int = 0
    mzxid: int = 0
    pzxid: int = 0
    ctime: int = field(default_factory=_now_ms)
    mtime: int = 0

    def stat(self) -> NodeStat:
        return NodeStat(
            version=self.version,
            cversion=self.cversion,
            aversion=self.aversion,
            data_length=len(self.data),
            num_children=len(self.children),
            ephemeral_owner=self.ephemeral_owner,
            czxid=self.czxid,
            mzxid=self.mzxid or self.czxid,
            pzxid=self.pzxid or self.czxid,
            ctime=self.ctime,
            mtime=self.mtime or self.ctime,
        )


class InMemoryNamespace:
    """A process-local namespace that sessions can be opened against.

    Pass ``namespace.open`` wherever a SessionFactory is expected.

    Attributes:
        available: When False, open() fails with ConnectionFailedError
        opened: Number of sessions opened so far
    """

    def __init__(self):
        self._zxid = itertools.count(1)
        self._session_ids = itertools.count(1)
        self._nodes: Dict[str, _Entry] = {ROOT: _Entry(b"", world_acl(), czxid=0)}
        self._live_sessions: Set[int] = set()
        self.available = True
        self.opened = 0

    def open(self, config: Optional[ClientConfig] = None) -> 'InMemorySession':
        """Open a new session. The config is accepted for interface parity."""
        if not self.available:
            raise ConnectionFailedError("namespace unavailable")
        session_id = next(self._session_ids)
        self._live_sessions.add(session_id)
        self.opened += 1
        logger.debug("opened in-memory session %d", session_id)
        return InMemorySession(self, session_id)

    @property
    def live_sessions(self) -> int:
        """Number of sessions opened and not yet closed."""
        return len(self._live_sessions)

    def paths(self) -> List[str]:
        """Every path in the namespace, sorted, root included."""
        return sorted(self._nodes)

    # Server-side operations, called by InMemorySession

    def _entry(self, path: str) -> _Entry:
        try:
            return self._nodes[path]
        except KeyError:
            raise NoNodeError(path=path) from None

    def _check_version(self, path: str, expected: int, actual: int) -> None:
        if expected != ANY_VERSION and expected != actual:
            raise VersionMismatchError(
                f"version mismatch at {path}: expected {expected}, found {actual}", path
            )

    def _create(self,
                session_id: int,
                path: str,
                data: bytes,
                flags: NodeFlags,
                acl: Sequence[ACLEntry]) -> str:
        _validate_path(path)
        if path == ROOT:
            raise NodeExistsError(path=path)

        parent = self._nodes.get(parent_path(path))
        if parent is None:
            raise NoNodeError(f"parent node does not exist: {path}", path)
        if parent.ephemeral_owner:
            raise NamespaceError(f"ephemeral nodes may not have children: {path}", path)

        if flags & NodeFlags.SEQUENTIAL:
            path = f"{path}{parent.cversion:010d}"
        if path in self._nodes:
            raise NodeExistsError(path=path)

        zxid = next(self._zxid)
        self._nodes[path] = _Entry(
            bytes(data),
            list(acl),
            czxid=zxid,
            ephemeral_owner=session_id if flags & NodeFlags.EPHEMERAL else 0,
        )
        parent.children.add(posixpath.basename(path))
        parent.cversion += 1
        parent.pzxid = zxid
        return path

    def _delete(self, path: str, version: int) -> None:
        _validate_path(path)
        if path == ROOT:
            raise NamespaceError("the root node cannot be deleted", path)
        entry = self._entry(path)
        self._check_version(path, version, entry.version)
        if entry.children:
            raise NotEmptyError(path=path)

        del self._nodes[path]
        parent = self._nodes[parent_path(path)]
        parent.children.discard(posixpath.basename(path))
        parent.cversion += 1
        parent.pzxid = next(self._zxid)

    def _set_data(self, path: str, data: bytes, version: int) -> NodeStat:
        entry = self._entry(path)
        self._check_version(path, version, entry.version)
        entry.data = bytes(data)
        entry.version += 1
        entry.mzxid = next(self._zxid)
        entry.mtime = _now_ms()
        return entry.stat()

    def _set_acl(self, path: str, acl: Sequence[ACLEntry], version: int) -> NodeStat:
        entry = self._entry(path)
        self._check_version(path, version, entry.aversion)
        entry.acl = list(acl)
        entry.aversion += 1
        return entry.stat()

    def _expire(self, session_id: int) -> None:
        """Drop a session and every ephemeral node it owns."""
        self._live_sessions.discard(session_id)
        owned = [path for path, entry in self._nodes.items()
                 if entry.ephemeral_owner == session_id]
        for path in owned:
            self._delete(path, ANY_VERSION)
        logger.debug("closed in-memory session %d (%d ephemeral nodes removed)",
                     session_id, len(owned))


def _validate_path(path: str) -> None:
    if not path.startswith(ROOT) or (path != ROOT and path.endswith('/')) or '//' in path:
        raise NamespaceError(f"invalid path: {path!r}", path)


class InMemorySession(Session):
    """Session on an InMemoryNamespace.

    Calls on a closed session raise ConnectionFailedError.
    """

    def __init__(self, namespace: InMemoryNamespace, session_id: int):
        self.namespace = namespace
        self.session_id = session_id
        self.closed = False

    def _live(self) -> InMemoryNamespace:
        if self.closed:
            raise ConnectionFailedError(f"session {self.session_id} is closed")
        return self.namespace

    def exists(self, path: str) -> bool:
        return path in self._live()._nodes

    def get(self, path: str) -> bytes:
        return self._live()._entry(path).data

    def children(self, path: str) -> List[str]:
        return list(self._live()._entry(path).children)

    def create(self,
               path: str,
               data: bytes,
               flags: NodeFlags,
               acl: Sequence[ACLEntry]) -> str:
        return self._live()._create(self.session_id, path, data, flags, acl)

    def set_data(self, path: str, data: bytes, version: int = ANY_VERSION) -> NodeStat:
        return self._live()._set_data(path, data, version)

    def set_acl(self,
                path: str,
                acl: Sequence[ACLEntry],
                version: int = ANY_VERSION) -> NodeStat:
        return self._live()._set_acl(path, acl, version)

    def get_acl(self, path: str) -> List[ACLEntry]:
        return list(self._live()._entry(path).acl)

    def delete(self, path: str, version: int = ANY_VERSION) -> None:
        self._live()._delete(path, version)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.namespace._expire(self.session_id)

    def __repr__(self) -> str:
        return f"InMemorySession(id={self.session_id}, closed={self.closed})"
