"""Recursive deletion of a subtree."""

import logging

from ..core.node import join_path
from ..core.session import Session
from .walker import list_recursive

logger = logging.getLogger(__name__)


def delete_recursive(session: Session, root_path: str) -> None:
    """Delete root_path and everything below it.

    The pre-order listing places every node before its descendants, so
    deleting the listing back to front removes children before parents.
    The root goes last.

    This is not a transaction. The first failing delete stops the
    operation and propagates, leaving the subtree partially deleted.

    Args:
        session: Open session, owned by the caller
        root_path: Absolute path of the subtree root

    Raises:
        NoNodeError: If root_path does not exist
        NamespaceError: If any individual delete fails
    """
    listing = list_recursive(session, root_path)
    for relative_path in reversed(listing):
        path = join_path(root_path, relative_path)
        logger.debug("deleting: %s", path)
        session.delete(path)

    logger.debug("deleting: %s", root_path)
    session.delete(root_path)
