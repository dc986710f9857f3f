"""Node creation flags."""

import logging
from enum import IntEnum

logger = logging.getLogger(__name__)


class NodeFlags(IntEnum):
    """Lifecycle flags applied when a node is created."""
    NONE = 0            # Persistent node
    EPHEMERAL = 1       # Removed when the creating session ends
    SEQUENTIAL = 2      # Server appends a monotonically increasing suffix


def normalize_flags(value: int) -> NodeFlags:
    """Return value as NodeFlags, coercing anything out of range to NONE.

    Out-of-range input is not an error: it silently becomes a persistent,
    non-sequential node.
    """
    if 0 <= value <= 2:
        return NodeFlags(value)
    logger.debug("coercing out-of-range node flags %r to NONE", value)
    return NodeFlags.NONE
