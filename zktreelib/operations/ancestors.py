"""Create-with-retry that fills in missing ancestors."""

import logging
from typing import List, Sequence, Tuple

from ..acl import ACLEntry
from ..core.node import ROOT, parent_path
from ..core.session import Session
from ..errors import ConnectionFailedError, NamespaceError
from ..flags import NodeFlags

logger = logging.getLogger(__name__)

# Payload written into ancestors created on demand.
PLACEHOLDER_DATA = b"auto-generated"


def create_with_auto_parent(session: Session,
                            path: str,
                            data: bytes,
                            acl: Sequence[ACLEntry],
                            force: bool = False,
                            flags: NodeFlags = NodeFlags.NONE) -> str:
    """Create path, optionally creating missing ancestors first.

    The create is attempted once. If it fails and force is set, the
    parent is created the same way (placeholder payload, same ACL, same
    force) and the requested create is retried exactly once more. This
    climbs an arbitrarily deep chain of missing ancestors.

    Ancestors are always persistent; flags applies to path only.

    Args:
        session: Open session, owned by the caller
        path: Absolute path to create
        data: Payload for path
        acl: ACL for path and for every ancestor created
        force: Create missing ancestors instead of failing
        flags: Creation flags for path

    Returns:
        The created path ("/" for the root, which always exists)

    Raises:
        NamespaceError: The error of the first attempt when force is off,
            or of the retry when it is on
    """
    if path == ROOT:
        return ROOT

    # Pending creates, innermost (the requested path) at the bottom.
    pending: List[Tuple[str, bytes, NodeFlags]] = [(path, data, flags)]
    retried = set()
    created = ROOT

    while pending:
        current, payload, current_flags = pending[-1]
        if current == ROOT:
            pending.pop()
            continue

        logger.debug("creating: %s", current)
        try:
            created = session.create(current, payload, current_flags, acl)
        except ConnectionFailedError:
            raise
        except NamespaceError as e:
            logger.debug("create status for %s: %s", current, e)
            parent = parent_path(current)
            if force and current not in retried and parent != current:
                retried.add(current)
                pending.append((parent, PLACEHOLDER_DATA, NodeFlags.NONE))
                continue
            if len(pending) == 1:
                raise
            # An ancestor that still cannot be created is left to the
            # requested path's own retry to report.
            pending.pop()
            continue

        logger.debug("create status for %s: created %s", current, created)
        pending.pop()

    return created
