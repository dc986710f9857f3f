"""Exception hierarchy for ZKTreeLib.

Remote-call failures all derive from NamespaceError so callers can catch
"anything the namespace said no to" in one place, while input-validation
failures (ACLParseError) stay separate and are never retried.
"""

from typing import Optional


class ZKTreeError(Exception):
    """Base class for every error raised by ZKTreeLib."""
    pass


class ACLParseError(ZKTreeError, ValueError):
    """Raised when ACL or permission text is malformed."""

    def __init__(self, message: str, text: Optional[str] = None):
        super().__init__(message)
        self.text = text


class NamespaceError(ZKTreeError):
    """A remote namespace operation failed.

    Attributes:
        path: The path the failing operation was applied to, if known
    """

    default_message = "namespace operation failed"

    def __init__(self, message: str = "", path: Optional[str] = None):
        if not message and path is not None:
            message = f"{self.default_message}: {path}"
        super().__init__(message or self.default_message)
        self.path = path


class ConnectionFailedError(NamespaceError, ConnectionError):
    """The session could not be established or was lost."""
    default_message = "connection to namespace failed"


class NoNodeError(NamespaceError):
    """The operand path does not exist."""
    default_message = "node does not exist"


class NodeExistsError(NamespaceError):
    """The create target already exists."""
    default_message = "node already exists"


class NotEmptyError(NamespaceError):
    """The delete target still has children."""
    default_message = "node has children"


class VersionMismatchError(NamespaceError):
    """The expected version did not match the node's version."""
    default_message = "version mismatch"


__all__ = [
    'ZKTreeError',
    'ACLParseError',
    'NamespaceError',
    'ConnectionFailedError',
    'NoNodeError',
    'NodeExistsError',
    'NotEmptyError',
    'VersionMismatchError',
]
