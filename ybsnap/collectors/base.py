"""Base collector abstract class for per-node diagnostic readers."""

from abc import ABC, abstractmethod
from datetime import datetime
from functools import wraps
from typing import Any, Optional
import logging

from ..utils.records import Address, NodeResult
from ..utils.status import NodeStatus
from .http_client import NodeHttpClient


class BaseCollector(ABC):
    """Abstract base class for collectors that read one page per node."""

    # Page path on the node's web server, without leading slash
    path: str = ""

    def __init__(self, http_client: NodeHttpClient, logger: Optional[logging.Logger] = None):
        """
        Initialize base collector.

        Args:
            http_client: Probe and fetch collaborator
            logger: Logger instance
        """
        self.http_client = http_client
        self.logger = (logger or logging.getLogger(__name__)).getChild(self.__class__.__name__)

    @abstractmethod
    async def read_node(self, address: Address, timestamp: datetime) -> NodeResult:
        """
        Read and parse one node's page.

        Args:
            address: Node to read
            timestamp: Collection time captured before the read began

        Returns:
            NodeResult: Parsed items for this node, empty on failure

        Note:
            Implementations should use the @safe_read decorator so that a
            failing node never affects the rest of the pass.
        """
        pass

    async def read_http(self, address: Address) -> Optional[str]:
        """
        Probe the node, then fetch this collector's page.

        Args:
            address: Node to read

        Returns:
            Page body ("" on fetch failure), or None when the probe failed
        """
        if not await self.http_client.probe(address.host, address.port):
            self.logger.debug(f"{address.label} unreachable, skipping fetch")
            return None
        return await self.http_client.fetch(address.host, address.port, self.path)

    def _node_result(self, address: Address, timestamp: datetime, http_data: Optional[str], items: Any) -> NodeResult:
        if http_data is None:
            status = NodeStatus.UNREACHABLE
        elif not items:
            status = NodeStatus.EMPTY
        else:
            status = NodeStatus.OK
        return NodeResult(address=address, timestamp=timestamp, items=list(items), status=status)


def safe_read(func):
    """
    Decorator to turn any per-node exception into an empty FAILED result.

    Args:
        func: Collector read_node method to wrap

    Returns:
        Wrapped coroutine that never raises for a node failure
    """
    @wraps(func)
    async def wrapper(self, address: Address, timestamp: datetime, *args, **kwargs):
        try:
            return await func(self, address, timestamp, *args, **kwargs)
        except Exception as e:
            self.logger.error(f"Read failed for {address.label}: {e}", exc_info=True)
            return NodeResult(
                address=address,
                timestamp=timestamp,
                items=[],
                status=NodeStatus.FAILED,
                error=str(e)
            )
    return wrapper
