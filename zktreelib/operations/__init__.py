"""Multi-step operations built from atomic session calls.

Each function borrows an open session from its caller and uses it for
every remote call it makes.
"""

from .walker import list_recursive
from .ancestors import create_with_auto_parent, PLACEHOLDER_DATA
from .deleter import delete_recursive

__all__ = [
    'list_recursive',
    'create_with_auto_parent',
    'PLACEHOLDER_DATA',
    'delete_recursive',
]
