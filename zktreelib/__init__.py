"""ZKTreeLib - Subtree operations for tree-structured coordination namespaces.

ZKTreeLib sits above the single remote calls of a ZooKeeper-style service
(exists, get, set, create, delete, children, ACLs) and provides the
multi-step operations operators and automation actually need:

    from zktreelib import NamespaceClient, ClientConfig

    client = NamespaceClient(ClientConfig.from_servers_string("zk1,zk2"))
    client.create("/app/config/db", b"primary", force=True)   # missing ancestors too
    client.children_recursive("/app")                          # ['config', 'config/db']
    client.delete_recursive("/app")                            # deepest nodes first

Sessions are pluggable: pass any SessionFactory (for example
InMemoryNamespace().open) to run without a server.
"""

__version__ = "0.1.0"

from .acl import (
    Perm,
    ACLEntry,
    parse_acl,
    parse_perms,
    format_acl,
    format_perms,
    world_acl,
    digest_acl,
    build_digest_acl,
)
from .flags import NodeFlags, normalize_flags
from .errors import (
    ZKTreeError,
    ACLParseError,
    NamespaceError,
    ConnectionFailedError,
    NoNodeError,
    NodeExistsError,
    NotEmptyError,
    VersionMismatchError,
)
from .config import ClientConfig
from .core import Session, SessionFactory, NodeStat, ZNode
from .operations import list_recursive, create_with_auto_parent, delete_recursive
from .client import NamespaceClient
from .adapters import InMemoryNamespace, InMemorySession

__all__ = [
    "__version__",
    # ACL codec
    "Perm",
    "ACLEntry",
    "parse_acl",
    "parse_perms",
    "format_acl",
    "format_perms",
    "world_acl",
    "digest_acl",
    "build_digest_acl",
    # Flags
    "NodeFlags",
    "normalize_flags",
    # Errors
    "ZKTreeError",
    "ACLParseError",
    "NamespaceError",
    "ConnectionFailedError",
    "NoNodeError",
    "NodeExistsError",
    "NotEmptyError",
    "VersionMismatchError",
    # Config and core
    "ClientConfig",
    "Session",
    "SessionFactory",
    "NodeStat",
    "ZNode",
    # Operations
    "list_recursive",
    "create_with_auto_parent",
    "delete_recursive",
    "NamespaceClient",
    # Adapters
    "InMemoryNamespace",
    "InMemorySession",
]
