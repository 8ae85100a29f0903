"""Per-node read outcome enumeration."""

from enum import Enum


class NodeStatus(Enum):
    """Outcome of reading one node's diagnostics page."""

    OK = "ok"
    EMPTY = "empty"
    UNREACHABLE = "unreachable"
    FAILED = "failed"

    def is_failure(self) -> bool:
        """
        Whether the node could not be read at all.

        Returns:
            bool: True for UNREACHABLE and FAILED
        """
        return self in (NodeStatus.UNREACHABLE, NodeStatus.FAILED)
