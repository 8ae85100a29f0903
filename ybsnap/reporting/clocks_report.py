"""Leader-relative text rendering of clock records."""

import logging
import sys
from typing import List, Optional, Sequence, TextIO

from ..utils.records import StoredClock


class ClocksReport:
    """
    Render clock records relative to the cluster leader.

    Without details only the rows gathered from the leader are printed; with
    details every row is printed, prefixed by the node it was read from. The
    records are never modified.
    """

    def __init__(self, stored_clocks: Sequence[StoredClock], leader: str, logger: Optional[logging.Logger] = None):
        """
        Initialize clocks report.

        Args:
            stored_clocks: Records of one pass or snapshot
            leader: "host:port" label of the current leader
            logger: Optional logger instance
        """
        self.stored_clocks = tuple(stored_clocks)
        self.leader = leader
        self.logger = logger or logging.getLogger(__name__)

    def _selected(self, details_enable: bool) -> List[StoredClock]:
        if details_enable:
            return list(self.stored_clocks)
        return [row for row in self.stored_clocks if row.hostname_port == self.leader]

    @staticmethod
    def _fields(row: StoredClock) -> str:
        return " ".join(row.record.values())

    def snapshot_lines(self, details_enable: bool = False) -> List[str]:
        """Lines for a stored snapshot; detail rows read "host:port: fields"."""
        if details_enable:
            return [f"{row.hostname_port}: {self._fields(row)}" for row in self._selected(True)]
        return [self._fields(row) for row in self._selected(False)]

    def adhoc_lines(self, details_enable: bool = False) -> List[str]:
        """Lines for a live read; detail rows read "host:port fields"."""
        if details_enable:
            return [f"{row.hostname_port} {self._fields(row)}" for row in self._selected(True)]
        return [self._fields(row) for row in self._selected(False)]

    def latency_lines(self, details_enable: bool = False) -> List[str]:
        """Heartbeat round trip from the leader to every server it reports."""
        lines = []
        for row in self._selected(details_enable):
            tokens = row.server.split()
            server = tokens[0] if tokens else ""
            line = f"{self.leader} -> {server}: {row.heartbeat_rtt} RTT ({row.cloud} {row.region} {row.zone})"
            lines.append(f"{row.hostname_port} {line}" if details_enable else line)
        return lines

    def print_snapshot(self, details_enable: bool = False, file: TextIO = None) -> None:
        self.logger.info("Print tablet server clocks")
        self._write(self.snapshot_lines(details_enable), file)

    def print_adhoc(self, details_enable: bool = False, file: TextIO = None) -> None:
        self.logger.info("Print adhoc tablet server clocks")
        self._write(self.adhoc_lines(details_enable), file)

    def print_latency(self, details_enable: bool = False, file: TextIO = None) -> None:
        self.logger.info("Print adhoc tablet server clocks latency")
        self._write(self.latency_lines(details_enable), file)

    @staticmethod
    def _write(lines: List[str], file: Optional[TextIO]) -> None:
        out = file or sys.stdout
        for line in lines:
            print(line, file=out)
