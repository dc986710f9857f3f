"""Test fixtures for ZKTreeLib consumers.

These helpers let a test suite observe exactly which remote calls an
operation made, in which order, and inject failures at chosen calls,
without a running coordination service.
"""

import functools
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from ..acl import world_acl
from ..adapters.memory import InMemoryNamespace
from ..config import ClientConfig
from ..core.session import Session
from ..flags import NodeFlags

# (method name, path) -> exception to raise instead of calling through
FailureMap = Dict[Tuple[str, str], Exception]


class RecordingSession:
    """Session proxy that records every call and can inject failures.

    This uses the dynamic proxy pattern: any method of the wrapped session
    is looked up through __getattr__ and wrapped so that the call is
    appended to ``calls`` as (method_name, first_argument) before it runs.

    Example:
        namespace = InMemoryNamespace()
        session = RecordingSession(namespace.open())
        delete_recursive(session, "/app")
        assert [p for m, p in session.calls if m == "delete"][-1] == "/app"
    """

    def __init__(self, base_session: Session, failures: Optional[FailureMap] = None):
        self._base_session = base_session
        self._failures = dict(failures or {})
        self.calls: List[Tuple[str, Any]] = []

    def calls_to(self, method_name: str) -> List[Any]:
        """First arguments (usually paths) of every call to method_name."""
        return [arg for name, arg in self.calls if name == method_name]

    def __enter__(self) -> 'RecordingSession':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._base_session, name)
        if not callable(attr):
            return attr

        @functools.wraps(attr)
        def wrapper(*args, **kwargs):
            arg = args[0] if args else None
            self.calls.append((name, arg))
            failure = self._failures.get((name, arg))
            if failure is not None:
                raise failure
            return attr(*args, **kwargs)

        return wrapper


class RecordingSessionFactory:
    """SessionFactory that wraps every session it opens in a RecordingSession.

    Attributes:
        sessions: Every RecordingSession handed out, in order
    """

    def __init__(self, namespace: InMemoryNamespace, failures: Optional[FailureMap] = None):
        self.namespace = namespace
        self.failures = failures
        self.sessions: List[RecordingSession] = []

    def __call__(self, config: Optional[ClientConfig] = None) -> RecordingSession:
        session = RecordingSession(self.namespace.open(config), self.failures)
        self.sessions.append(session)
        return session

    @property
    def calls(self) -> List[Tuple[str, Any]]:
        """Calls of every session, concatenated in opening order."""
        return [call for session in self.sessions for call in session.calls]


def build_namespace(nodes: Union[Iterable[str], Dict[str, bytes]],
                    namespace: Optional[InMemoryNamespace] = None) -> InMemoryNamespace:
    """Populate an in-memory namespace.

    Args:
        nodes: Absolute paths, or a mapping of path -> payload. Missing
            ancestors are created with an empty payload.
        namespace: Namespace to populate (a new one by default)

    Returns:
        The populated namespace
    """
    namespace = namespace or InMemoryNamespace()
    payloads = nodes if isinstance(nodes, dict) else {path: b"" for path in nodes}

    with namespace.open() as session:
        for path in sorted(payloads, key=lambda p: p.count('/')):
            _ensure_path(session, path, payloads[path])
    return namespace


def _ensure_path(session: Session, path: str, data: bytes) -> None:
    parts = [part for part in path.split('/') if part]
    current = ''
    for index, part in enumerate(parts):
        current = f"{current}/{part}"
        if session.exists(current):
            if index == len(parts) - 1:
                session.set_data(current, data)
            continue
        payload = data if index == len(parts) - 1 else b""
        session.create(current, payload, NodeFlags.NONE, world_acl())

