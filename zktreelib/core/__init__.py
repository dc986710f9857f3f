"""Core components: node values, the session contract and traversal."""

from .node import ZNode, NodeStat, ROOT, join_path, parent_path
from .session import Session, SessionFactory, ANY_VERSION
from .adapter import NamespaceAdapter
from .traverser import DepthFirstPreOrderTraverser

__all__ = [
    'ZNode',
    'NodeStat',
    'ROOT',
    'join_path',
    'parent_path',
    'Session',
    'SessionFactory',
    'ANY_VERSION',
    'NamespaceAdapter',
    'DepthFirstPreOrderTraverser',
]
