"""Session adapters for specific namespace backends.

Adapters implement the Session interface for different backends. The
ZooKeeper adapter needs the optional kazoo dependency and is imported
from its own module:

    from zktreelib.adapters.zookeeper import KazooSession
"""

from .memory import InMemoryNamespace, InMemorySession

__all__ = [
    "InMemoryNamespace",
    "InMemorySession",
]
