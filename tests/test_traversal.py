"""Tests for the namespace adapter and the pre-order traverser."""

import pytest

from zktreelib.core import (
    DepthFirstPreOrderTraverser,
    NamespaceAdapter,
    ZNode,
    join_path,
    parent_path,
)
from zktreelib.errors import NoNodeError


def test_path_helpers():
    """Joining and splitting paths."""
    assert join_path("/", "a") == "/a"
    assert join_path("/a", "b") == "/a/b"
    assert join_path("", "a") == "a"
    assert join_path("a", "b") == "a/b"
    assert parent_path("/a/b") == "/a"
    assert parent_path("/a") == "/"
    assert parent_path("/") == "/"


def test_child_tracks_relative_path():
    root = ZNode("/app")
    child = root.child("config").child("db")
    assert child.path == "/app/config/db"
    assert child.relative_path == "config/db"
    assert child == ZNode("/app/config/db")
    assert len({child, ZNode("/app/config/db")}) == 1


def test_adapter_sorts_children(sample_namespace):
    with sample_namespace.open() as session:
        adapter = NamespaceAdapter(session)
        names = [c.relative_path for c in adapter.get_children(adapter.create_node("/app/workers"))]
    assert names == ["w1", "w2"]


def test_traversal_depths(sample_namespace):
    """Every node comes with its depth below the root."""
    with sample_namespace.open() as session:
        adapter = NamespaceAdapter(session)
        traverser = DepthFirstPreOrderTraverser(adapter)
        visited = [(node.path, depth)
                   for node, depth in traverser.traverse(adapter.create_node("/app"))]

    assert visited == [
        ("/app", 0),
        ("/app/config", 1),
        ("/app/config/cache", 2),
        ("/app/config/db", 2),
        ("/app/workers", 1),
        ("/app/workers/w1", 2),
        ("/app/workers/w1/lock", 3),
        ("/app/workers/w2", 2),
    ]


def test_traversal_missing_root(namespace):
    with namespace.open() as session:
        adapter = NamespaceAdapter(session)
        traversal = DepthFirstPreOrderTraverser(adapter).traverse(adapter.create_node("/nope"))
        # The root is yielded before its children are requested
        assert next(traversal)[0].path == "/nope"
        with pytest.raises(NoNodeError):
            next(traversal)
