"""ZooKeeper adapter for ZKTreeLib.

KazooSession implements the Session contract on top of the kazoo client.
Requires the optional ``zookeeper`` extra:

    pip install zktreelib[zookeeper]
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from kazoo import exceptions as kazoo_errors
from kazoo.client import KazooClient
from kazoo.handlers.threading import KazooTimeoutError
from kazoo.security import ACL, Id

from ..acl import ACLEntry, Perm
from ..config import ClientConfig
from ..core.node import NodeStat
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

# Kazoo errors that mean the connection itself is unusable.
_CONNECTION_ERRORS = (
    kazoo_errors.ConnectionLoss,
    kazoo_errors.SessionExpiredError,
    kazoo_errors.ConnectionClosedError,
    kazoo_errors.AuthFailedError,
    KazooTimeoutError,
)


@contextmanager
def _translated_errors(path: Optional[str] = None) -> Iterator[None]:
    """Re-raise kazoo exceptions as ZKTreeLib exceptions."""
    try:
        yield
    except kazoo_errors.NoNodeError as e:
        raise NoNodeError(path=path) from e
    except kazoo_errors.NodeExistsError as e:
        raise NodeExistsError(path=path) from e
    except kazoo_errors.NotEmptyError as e:
        raise NotEmptyError(path=path) from e
    except kazoo_errors.BadVersionError as e:
        raise VersionMismatchError(path=path) from e
    except _CONNECTION_ERRORS as e:
        raise ConnectionFailedError(str(e) or type(e).__name__, path) from e
    except kazoo_errors.KazooException as e:
        raise NamespaceError(f"{type(e).__name__}: {path}", path) from e


def to_kazoo_acl(acl: Sequence[ACLEntry]) -> List[ACL]:
    return [ACL(int(entry.perms), Id(entry.scheme, entry.id)) for entry in acl]


def from_kazoo_acl(acl: Sequence[ACL]) -> List[ACLEntry]:
    return [ACLEntry(entry.id.scheme, entry.id.id, Perm(entry.perms)) for entry in acl]


def to_node_stat(stat) -> NodeStat:
    """Convert a kazoo ZnodeStat."""
    return NodeStat(
        version=stat.version,
        cversion=stat.cversion,
        aversion=stat.aversion,
        data_length=stat.dataLength,
        num_children=stat.numChildren,
        ephemeral_owner=stat.ephemeralOwner,
        czxid=stat.czxid,
        mzxid=stat.mzxid,
        pzxid=stat.pzxid,
        ctime=stat.ctime,
        mtime=stat.mtime,
    )


class KazooSession(Session):
    """Session backed by one started KazooClient."""

    def __init__(self, client: KazooClient):
        """Wrap an already started client.

        Args:
            client: Started KazooClient; the session takes ownership
        """
        self._client = client

    @classmethod
    def open(cls, config: ClientConfig) -> 'KazooSession':
        """Connect to config.servers and authenticate if configured.

        Usable directly as a SessionFactory.

        Raises:
            ConnectionFailedError: If the connection or the auth fails
        """
        client = KazooClient(
            hosts=config.hosts(),
            timeout=config.timeout_seconds,
            logger=logger,
        )
        try:
            with _translated_errors():
                client.start(timeout=config.timeout_seconds)
                if config.auth_scheme:
                    logger.debug("add auth %s", config.auth_scheme)
                    credential = (config.auth_credential or b"").decode('utf-8')
                    client.add_auth(config.auth_scheme, credential)
        except NamespaceError:
            client.stop()
            client.close()
            raise
        return cls(client)

    def _connected(self) -> KazooClient:
        if self._client is None:
            raise ConnectionFailedError("session is closed")
        return self._client

    def exists(self, path: str) -> bool:
        with _translated_errors(path):
            return self._connected().exists(path) is not None

    def get(self, path: str) -> bytes:
        with _translated_errors(path):
            data, _ = self._connected().get(path)
        return data

    def children(self, path: str) -> List[str]:
        with _translated_errors(path):
            return list(self._connected().get_children(path))

    def create(self,
               path: str,
               data: bytes,
               flags: NodeFlags,
               acl: Sequence[ACLEntry]) -> str:
        with _translated_errors(path):
            return self._connected().create(
                path,
                data,
                acl=to_kazoo_acl(acl),
                ephemeral=bool(flags & NodeFlags.EPHEMERAL),
                sequence=bool(flags & NodeFlags.SEQUENTIAL),
            )

    def set_data(self, path: str, data: bytes, version: int = ANY_VERSION) -> NodeStat:
        with _translated_errors(path):
            stat = self._connected().set(path, data, version=version)
        return to_node_stat(stat)

    def set_acl(self,
                path: str,
                acl: Sequence[ACLEntry],
                version: int = ANY_VERSION) -> NodeStat:
        with _translated_errors(path):
            stat = self._connected().set_acls(path, to_kazoo_acl(acl), version=version)
        return to_node_stat(stat)

    def get_acl(self, path: str) -> List[ACLEntry]:
        with _translated_errors(path):
            acl, _ = self._connected().get_acls(path)
        return from_kazoo_acl(acl)

    def delete(self, path: str, version: int = ANY_VERSION) -> None:
        with _translated_errors(path):
            self._connected().delete(path, version=version)

    def close(self) -> None:
        if self._client is None:
            return
        client, self._client = self._client, None
        client.stop()
        client.close()
