"""Locate the cluster leader from a stored snapshot or by polling the nodes."""

import json
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from ..errors import LeaderNotFoundError
from ..services.snapshot_store import SnapshotStore
from ..utils.records import Address, NodeResult, StoredIsLeader
from .base import BaseCollector, safe_read
from .coordinator import CollectionCoordinator
from .http_client import NodeHttpClient

LEADER_STATUS = "OK"


class IsLeaderCollector(BaseCollector):
    """Collector for the master's is-leader endpoint."""

    path = "api/v1/is-leader"
    category = "isleader"

    @staticmethod
    def parse_isleader(http_data: str) -> Optional[str]:
        """
        Extract STATUS from an is-leader response body.

        Returns:
            The status string, or None when the body is empty or not the expected JSON
        """
        if not http_data:
            return None
        try:
            data = json.loads(http_data)
        except json.JSONDecodeError:
            return None
        if not isinstance(data, dict):
            return None
        status = data.get("STATUS")
        return str(status) if status is not None else None

    @safe_read
    async def read_node(self, address: Address, timestamp: datetime) -> NodeResult:
        http_data = await self.read_http(address)
        status = self.parse_isleader(http_data or "")
        items = [StoredIsLeader(address.label, timestamp, status)] if status is not None else []
        return self._node_result(address, timestamp, http_data, items)

    async def read_isleader(self, hosts: Sequence[str], ports: Sequence[int], parallel: int = 1) -> List[StoredIsLeader]:
        """Leader status of every node that answered, in no particular order."""
        coordinator = CollectionCoordinator(parallel, self.logger)
        node_results = await coordinator.collect(hosts, ports, self.read_node)
        return [item for node_result in node_results for item in node_result.items]


def find_leader(records: Sequence[StoredIsLeader]) -> str:
    """
    Return the hostname_port of the record reporting leader status.

    Raises:
        LeaderNotFoundError: If no record reports leader status
    """
    leaders = sorted({r.hostname_port for r in records if r.status == LEADER_STATUS})
    if not leaders:
        raise LeaderNotFoundError("No node reported leader status")
    return leaders[0]


class LeaderLocator:
    """Resolve the leader's "host:port" label."""

    def __init__(
        self,
        store: SnapshotStore,
        http_client: NodeHttpClient,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize leader locator.

        Args:
            store: Snapshot store holding isleader records
            http_client: Probe and fetch collaborator for live lookups
            logger: Optional logger instance
        """
        self.store = store
        self.logger = (logger or logging.getLogger(__name__)).getChild(self.__class__.__name__)
        self.collector = IsLeaderCollector(http_client, self.logger)

    def leader_from_snapshot(self, snapshot_id: int) -> str:
        """
        Leader recorded in a snapshot.

        Raises:
            SnapshotError: If the snapshot holds no isleader data
            LeaderNotFoundError: If no stored record reports leader status
        """
        records = [
            StoredIsLeader.from_dict(data)
            for data in self.store.load(snapshot_id, IsLeaderCollector.category)
        ]
        try:
            leader = find_leader(records)
        except LeaderNotFoundError:
            raise LeaderNotFoundError(f"No leader recorded in snapshot {snapshot_id}") from None
        self.logger.info(f"Leader in snapshot {snapshot_id}: {leader}")
        return leader

    async def leader_from_live_probe(self, hosts: Sequence[str], ports: Sequence[int], parallel: int = 1) -> str:
        """
        Leader found by polling every host and port now.

        Raises:
            LeaderNotFoundError: If no reachable node reports leader status
        """
        records = await self.collector.read_isleader(hosts, ports, parallel)
        leader = find_leader(records)
        self.logger.info(f"Live leader: {leader}")
        return leader
