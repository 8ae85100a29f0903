"""Tablet server clocks collector."""

import logging
import time
from datetime import datetime
from typing import List, Optional, Sequence

from ..services.snapshot_store import SnapshotStore
from ..utils.records import Address, ClockRecord, NodeResult, StoredClock
from .base import BaseCollector, safe_read
from .coordinator import CollectionCoordinator
from .html_table import FieldMapper, extract_table, strip_markup
from .http_client import NodeHttpClient

# Record field -> header text on the clocks page, as the server renders it
CLOCK_COLUMNS = {
    "server": "Server",
    "time_since_heartbeat": "Time since <br>heartbeat",
    "status_uptime": "Status &amp; Uptime",
    "physical_time_utc": "Physical Time (UTC)",
    "hybrid_time_utc": "Hybrid Time (UTC)",
    "heartbeat_rtt": "Heartbeat RTT",
    "cloud": "Cloud",
    "region": "Region",
    "zone": "Zone",
}


class ClocksCollector(BaseCollector):
    """Collector for the master's tablet server clocks page."""

    path = "tablet-server-clocks?raw"
    category = "clocks"

    # The server column is a link plus a uuid span, keep its text only
    mapper = FieldMapper(CLOCK_COLUMNS, converters={"server": strip_markup})

    def __init__(self, http_client: NodeHttpClient, logger: Optional[logging.Logger] = None):
        """
        Initialize clocks collector.

        Args:
            http_client: Probe and fetch collaborator
            logger: Logger instance
        """
        super().__init__(http_client, logger)

    @classmethod
    def parse_clocks(cls, http_data: str) -> List[ClockRecord]:
        """
        Parse a clocks page into one ClockRecord per table row.

        Args:
            http_data: Page body, possibly empty

        Returns:
            List[ClockRecord]: Empty when the page holds no table
        """
        table = extract_table(http_data)
        return [ClockRecord(**fields) for fields in cls.mapper.map_rows(table)]

    @safe_read
    async def read_node(self, address: Address, timestamp: datetime) -> NodeResult:
        """
        Read one node's clocks.

        Args:
            address: Node to read
            timestamp: Collection time captured before the read began

        Returns:
            NodeResult: StoredClock items for this node
        """
        http_data = await self.read_http(address)
        clocks = [
            StoredClock.from_record(address.label, timestamp, record)
            for record in self.parse_clocks(http_data or "")
        ]
        return self._node_result(address, timestamp, http_data, clocks)

    async def read_clocks(self, hosts: Sequence[str], ports: Sequence[int], parallel: int = 1) -> List[StoredClock]:
        """
        Read clocks from every host and port.

        Args:
            hosts: Host list
            ports: Port list
            parallel: Number of concurrent reads

        Returns:
            List[StoredClock]: All clock rows of the pass, in no particular order
        """
        coordinator = CollectionCoordinator(parallel, self.logger)
        node_results = await coordinator.collect(hosts, ports, self.read_node)

        stored_clocks = []
        for node_result in node_results:
            stored_clocks.extend(node_result.items)
        return stored_clocks

    async def perform_snapshot(
        self,
        hosts: Sequence[str],
        ports: Sequence[int],
        snapshot_id: int,
        parallel: int,
        store: SnapshotStore
    ) -> List[StoredClock]:
        """
        Read clocks and store them under a snapshot number.

        Raises:
            SnapshotError: If the records cannot be stored
        """
        self.logger.info("Begin snapshot")
        start_time = time.monotonic()

        stored_clocks = await self.read_clocks(hosts, ports, parallel)
        store.save(snapshot_id, self.category, [clock.to_dict() for clock in stored_clocks])

        self.logger.info(f"End snapshot: {time.monotonic() - start_time:.3f}s")
        return stored_clocks

    @classmethod
    def load_snapshot(cls, store: SnapshotStore, snapshot_id: int) -> List[StoredClock]:
        """
        Read stored clocks back from a snapshot.

        Raises:
            SnapshotError: If the snapshot holds no clocks or is corrupt
        """
        return [StoredClock.from_dict(data) for data in store.load(snapshot_id, cls.category)]
