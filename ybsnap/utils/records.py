"""Record data structures for collectors."""

from dataclasses import dataclass, field, fields, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

from .status import NodeStatus

MISSING = "<Missing>"


@dataclass(frozen=True)
class Address:
    """One node's diagnostics endpoint."""

    host: str
    port: int

    @property
    def label(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass
class RawTable:
    """Header and row cell markup of one extracted HTML table."""

    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.headers and not self.rows


@dataclass(frozen=True)
class ClockRecord:
    """One row of a node's tablet server clocks table."""

    server: str
    time_since_heartbeat: str
    status_uptime: str
    physical_time_utc: str
    hybrid_time_utc: str
    heartbeat_rtt: str
    cloud: str
    region: str
    zone: str

    def values(self) -> List[str]:
        """Field values in declaration order."""
        return [getattr(self, f.name) for f in fields(ClockRecord)]


@dataclass(frozen=True)
class StoredClock:
    """A ClockRecord tagged with its originating node and collection time."""

    hostname_port: str
    timestamp: datetime
    server: str
    time_since_heartbeat: str
    status_uptime: str
    physical_time_utc: str
    hybrid_time_utc: str
    heartbeat_rtt: str
    cloud: str
    region: str
    zone: str

    @classmethod
    def from_record(cls, hostname_port: str, timestamp: datetime, record: ClockRecord) -> "StoredClock":
        return cls(hostname_port=hostname_port, timestamp=timestamp, **asdict(record))

    @property
    def record(self) -> ClockRecord:
        return ClockRecord(**{f.name: getattr(self, f.name) for f in fields(ClockRecord)})

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoredClock":
        values = dict(data)
        values["timestamp"] = datetime.fromisoformat(values["timestamp"])
        return cls(**values)


@dataclass(frozen=True)
class StoredIsLeader:
    """Leader status reported by one node."""

    hostname_port: str
    timestamp: datetime
    status: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hostname_port": self.hostname_port,
            "timestamp": self.timestamp.isoformat(),
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoredIsLeader":
        return cls(
            hostname_port=data["hostname_port"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            status=data["status"],
        )


@dataclass
class NodeResult:
    """What a single worker hands back to the coordinator for one address."""

    address: Address
    timestamp: datetime
    items: List[Any]
    status: NodeStatus = NodeStatus.OK
    error: Optional[str] = None
