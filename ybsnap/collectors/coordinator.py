"""Bounded fan-out of per-node reads across the host x port address space."""

import asyncio
import logging
import time
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, Sequence

from ..utils.records import Address, NodeResult
from ..utils.status import NodeStatus

NodeReader = Callable[[Address, datetime], Awaitable[NodeResult]]


def address_space(hosts: Sequence[str], ports: Sequence[int]) -> List[Address]:
    """Every host combined with every port, hosts outermost."""
    return [Address(host, port) for host in hosts for port in ports]


class CollectionCoordinator:
    """
    Run one read task per address on a fixed pool of worker tasks.

    Workers pull addresses from a shared queue and push one NodeResult each
    onto a results queue. collect() joins every worker before draining the
    results, so callers only ever see a complete pass. Arrival order is
    arbitrary.
    """

    def __init__(self, parallel: int = 1, logger: Optional[logging.Logger] = None):
        """
        Initialize coordinator.

        Args:
            parallel: Number of worker tasks, the bound on concurrent reads
            logger: Optional logger instance
        """
        if parallel < 1:
            raise ValueError(f"parallel must be at least 1, got {parallel}")
        self.parallel = parallel
        self.logger = (logger or logging.getLogger(__name__)).getChild(self.__class__.__name__)

    async def collect(
        self,
        hosts: Sequence[str],
        ports: Sequence[int],
        read_node: NodeReader
    ) -> List[NodeResult]:
        """
        Read every address and return one NodeResult per address.

        Args:
            hosts: Host list
            ports: Port list
            read_node: Coroutine reading one node

        Returns:
            List[NodeResult]: Exactly len(hosts) * len(ports) results, unordered
        """
        addresses = address_space(hosts, ports)
        self.logger.info(f"Begin parallel http read: {len(addresses)} tasks, {self.parallel} workers")
        start_time = time.monotonic()

        pending: asyncio.Queue = asyncio.Queue()
        for address in addresses:
            pending.put_nowait(address)
        results: asyncio.Queue = asyncio.Queue()

        workers = [
            asyncio.create_task(self._worker(pending, results, read_node))
            for _ in range(self.parallel)
        ]
        await asyncio.gather(*workers)

        node_results = []
        while not results.empty():
            node_results.append(results.get_nowait())

        failed = sum(1 for r in node_results if r.status.is_failure())
        self.logger.info(
            f"End parallel http read: {len(node_results)} nodes, {failed} failed, "
            f"{time.monotonic() - start_time:.3f}s"
        )
        return node_results

    async def _worker(self, pending: asyncio.Queue, results: asyncio.Queue, read_node: NodeReader) -> None:
        while True:
            try:
                address = pending.get_nowait()
            except asyncio.QueueEmpty:
                return

            timestamp = datetime.now().astimezone()
            try:
                result = await read_node(address, timestamp)
            except Exception as e:
                self.logger.error(f"Read task failed for {address.label}: {e}")
                result = NodeResult(
                    address=address,
                    timestamp=timestamp,
                    items=[],
                    status=NodeStatus.FAILED,
                    error=str(e)
                )
            results.put_nowait(result)
