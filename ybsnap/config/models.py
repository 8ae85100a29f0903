"""Pydantic configuration models for the snapshot collector."""

from pydantic import BaseModel, Field, field_validator
from typing import List


class ClusterConfig(BaseModel):
    """Address space of the cluster's diagnostics endpoints."""
    hosts: List[str] = Field(default_factory=lambda: ["localhost"])
    ports: List[int] = Field(default_factory=lambda: [7000, 9000])
    parallel: int = Field(default=1, ge=1)

    @field_validator('hosts')
    @classmethod
    def validate_hosts(cls, v: List[str]) -> List[str]:
        """Reject an empty host list and blank host names."""
        hosts = [h.strip() for h in v]
        if not hosts or not all(hosts):
            raise ValueError('At least one non-empty host is required')
        return hosts

    @field_validator('ports')
    @classmethod
    def validate_ports(cls, v: List[int]) -> List[int]:
        """Ports must be valid TCP ports."""
        if not v:
            raise ValueError('At least one port is required')
        for port in v:
            if not 1 <= port <= 65535:
                raise ValueError(f'Invalid port: {port}')
        return v


class TimeoutsConfig(BaseModel):
    """Per-node network timeouts in seconds."""
    probe_timeout_s: float = Field(default=1.0, gt=0)
    fetch_timeout_s: float = Field(default=10.0, gt=0)


class SnapshotsConfig(BaseModel):
    """Snapshot storage configuration."""
    directory: str = "yb_stats.snapshots"


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "WARNING"

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f'Unknown log level: {v}')
        return level


class YbSnapConfig(BaseModel):
    """Root configuration model."""
    cluster: ClusterConfig = Field(default_factory=ClusterConfig)
    timeouts: TimeoutsConfig = Field(default_factory=TimeoutsConfig)
    snapshots: SnapshotsConfig = Field(default_factory=SnapshotsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
