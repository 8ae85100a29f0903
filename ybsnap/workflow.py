"""Snapshot and ad-hoc print workflows tying collectors, store and report together."""

import logging
import time
from typing import List, Optional, TextIO

from .collectors.clocks_collector import ClocksCollector
from .collectors.http_client import NodeHttpClient
from .collectors.leader_locator import IsLeaderCollector, LeaderLocator
from .config.models import YbSnapConfig
from .reporting.clocks_report import ClocksReport
from .services.snapshot_store import SnapshotStore
from .utils.records import StoredClock


class SnapshotWorkflow:
    """
    Entry points for one collection pass.

    Hosts, ports and parallelism come from the configuration. Persistence and
    leader resolution errors propagate; per-node failures never do.
    """

    def __init__(
        self,
        config: YbSnapConfig,
        logger: logging.Logger,
        store: Optional[SnapshotStore] = None,
        http_client: Optional[NodeHttpClient] = None
    ):
        """
        Initialize workflow.

        Args:
            config: Validated configuration
            logger: Logger instance
            store: Snapshot store, built from config when omitted
            http_client: Node client, built from config when omitted
        """
        self.config = config
        self.logger = logger.getChild(self.__class__.__name__)
        self.store = store or SnapshotStore(config.snapshots.directory, self.logger)
        self.http_client = http_client or NodeHttpClient(
            probe_timeout_s=config.timeouts.probe_timeout_s,
            fetch_timeout_s=config.timeouts.fetch_timeout_s,
            logger=self.logger
        )
        self.clocks = ClocksCollector(self.http_client, self.logger)
        self.isleader = IsLeaderCollector(self.http_client, self.logger)
        self.leader_locator = LeaderLocator(self.store, self.http_client, self.logger)

    @property
    def hosts(self) -> List[str]:
        return self.config.cluster.hosts

    @property
    def ports(self) -> List[int]:
        return self.config.cluster.ports

    @property
    def parallel(self) -> int:
        return self.config.cluster.parallel

    async def take_snapshot(self, comment: str = "") -> int:
        """
        Store leader status and clocks of every node under a new snapshot number.

        Returns:
            int: The snapshot number

        Raises:
            SnapshotError: If the snapshot cannot be stored
        """
        snapshot_id = self.store.next_snapshot_id()
        self.logger.info(f"Begin snapshot {snapshot_id}")
        start_time = time.monotonic()

        isleader = await self.isleader.read_isleader(self.hosts, self.ports, self.parallel)
        self.store.save(snapshot_id, IsLeaderCollector.category, [r.to_dict() for r in isleader])

        await self.clocks.perform_snapshot(self.hosts, self.ports, snapshot_id, self.parallel, self.store)
        self.store.register(snapshot_id, comment)

        self.logger.info(f"End snapshot {snapshot_id}: {time.monotonic() - start_time:.3f}s")
        return snapshot_id

    def print_snapshot(self, snapshot_id: int, details_enable: bool = False, file: TextIO = None) -> None:
        """
        Print the clocks stored in a snapshot relative to that snapshot's leader.

        Raises:
            SnapshotError: If the snapshot is missing or unreadable
            LeaderNotFoundError: If the snapshot recorded no leader
        """
        stored_clocks = ClocksCollector.load_snapshot(self.store, snapshot_id)
        leader = self.leader_locator.leader_from_snapshot(snapshot_id)
        ClocksReport(stored_clocks, leader, self.logger).print_snapshot(details_enable, file)

    async def _read_adhoc(self) -> ClocksReport:
        stored_clocks: List[StoredClock] = await self.clocks.read_clocks(self.hosts, self.ports, self.parallel)
        leader = await self.leader_locator.leader_from_live_probe(self.hosts, self.ports, self.parallel)
        return ClocksReport(stored_clocks, leader, self.logger)

    async def print_adhoc(self, details_enable: bool = False, file: TextIO = None) -> None:
        """
        Read clocks now and print them relative to the live leader.

        Raises:
            LeaderNotFoundError: If no node reports leader status
        """
        report = await self._read_adhoc()
        report.print_adhoc(details_enable, file)

    async def print_adhoc_latency(self, details_enable: bool = False, file: TextIO = None) -> None:
        """
        Read clocks now and print heartbeat RTT from the live leader.

        Raises:
            LeaderNotFoundError: If no node reports leader status
        """
        report = await self._read_adhoc()
        report.print_latency(details_enable, file)

    def list_snapshots(self, file: TextIO = None) -> None:
        """Print the snapshot index, one snapshot per line."""
        for entry in self.store.list_snapshots():
            print(f"{entry['number']} {entry['timestamp']} {entry['comment']}".rstrip(), file=file)
