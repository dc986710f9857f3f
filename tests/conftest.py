"""Shared fixtures for ZKTreeLib tests."""

import pytest

from zktreelib import ClientConfig, InMemoryNamespace, NamespaceClient
from zktreelib.testing import RecordingSessionFactory, build_namespace


SAMPLE_TREE = {
    "/app": b"app",
    "/app/config": b"",
    "/app/config/db": b"primary",
    "/app/config/cache": b"redis",
    "/app/workers": b"",
    "/app/workers/w2": b"busy",
    "/app/workers/w1": b"idle",
    "/app/workers/w1/lock": b"",
    "/other": b"",
}


@pytest.fixture
def namespace():
    """Empty in-memory namespace (root only)."""
    return InMemoryNamespace()


@pytest.fixture
def sample_namespace():
    """Namespace populated with SAMPLE_TREE.

    Structure:
    /
    ├── app
    │   ├── config
    │   │   ├── cache
    │   │   └── db
    │   └── workers
    │       ├── w1
    │       │   └── lock
    │       └── w2
    └── other
    """
    return build_namespace(SAMPLE_TREE)


@pytest.fixture
def recorder(sample_namespace):
    """Recording session factory over the sample namespace."""
    return RecordingSessionFactory(sample_namespace)


@pytest.fixture
def client(sample_namespace):
    """Client whose sessions open against the sample namespace."""
    return NamespaceClient(ClientConfig(servers=["memory"]), session_factory=sample_namespace.open)


@pytest.fixture
def empty_client(namespace):
    return NamespaceClient(ClientConfig(servers=["memory"]), session_factory=namespace.open)
