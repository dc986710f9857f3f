"""Configuration system for ZKTreeLib.

ClientConfig holds everything a NamespaceClient needs to open sessions
and create nodes: where the servers are, how to authenticate, and the
flags and ACL applied to newly created nodes.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .acl import ACLEntry, world_acl
from .flags import NodeFlags, normalize_flags


DEFAULT_PORT = 2181
DEFAULT_TIMEOUT_SECONDS = 1.0


@dataclass
class ClientConfig:
    """Complete configuration for a NamespaceClient.

    Each entry of servers is "host" or "host:port".
    """

    # Connection
    servers: List[str] = field(default_factory=list)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    # Authentication, added to every session when auth_scheme is set
    auth_scheme: Optional[str] = None
    auth_credential: Optional[bytes] = None

    # Defaults for created nodes
    flags: NodeFlags = NodeFlags.NONE
    acl: List[ACLEntry] = field(default_factory=world_acl)

    def __post_init__(self):
        self.flags = normalize_flags(int(self.flags))

    @classmethod
    def from_servers_string(cls, servers: str, **kwargs) -> 'ClientConfig':
        """Create config from a comma-separated server list.

        Args:
            servers: e.g. "zk1:2181,zk2:2181,zk3"
            **kwargs: Other ClientConfig fields

        Returns:
            ClientConfig with servers populated
        """
        server_list = [s.strip() for s in servers.split(',') if s.strip()]
        return cls(servers=server_list, **kwargs)

    def hosts(self) -> str:
        """Server list as a single connect string, default port filled in."""
        return ','.join(
            server if ':' in server else f"{server}:{DEFAULT_PORT}"
            for server in self.servers
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.servers:
            errors.append("at least one server is required")

        for server in self.servers:
            host, _, port = server.partition(':')
            if not host:
                errors.append(f"server {server!r} has no host")
            if port and not port.isdigit():
                errors.append(f"server {server!r} has a non-numeric port")

        if self.timeout_seconds <= 0:
            errors.append("timeout_seconds must be positive")

        if self.auth_credential is not None and not self.auth_scheme:
            errors.append("auth_credential given without auth_scheme")

        return errors
