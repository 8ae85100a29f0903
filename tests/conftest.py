"""Shared pytest configuration and fixtures."""

import asyncio
from typing import Dict, Iterable, Tuple

import pytest

from ybsnap.config.models import YbSnapConfig
from ybsnap.utils.logger import setup_logger


# Columns deliberately not in the order the collector declares them
CLOCKS_PAGE = """<!DOCTYPE html><html><head><title>YugabyteDB</title></head>
<body>
<div class='yb-main container-fluid'><h2>Tablet Server Clocks</h2>
<table class='table table-striped'>
  <tr>
    <th>Zone</th><th>Server</th><th>Heartbeat RTT</th><th>Time since <br>heartbeat</th>
    <th>Status &amp; Uptime</th><th>Region</th><th>Hybrid Time (UTC)</th>
    <th>Physical Time (UTC)</th><th>Cloud</th>
  </tr>
  <tr>
    <td>rack1</td>
    <td><a href="http://yb-1.local:9000/">yb-1.local:9000</a><br> <font color="#888888">8a1c2b9a60ee4c1d</font></td>
    <td>0.52ms</td><td>0.4s</td><td>ALIVE: 2:13:44</td><td>datacenter1</td>
    <td>2022-03-16 12:33:37.634419</td><td>2022-03-16 12:33:37.634398</td><td>cloud1</td>
  </tr>
  <tr>
    <td>rack2</td>
    <td><a href="http://yb-2.local:9000/">yb-2.local:9000</a><br> <font color="#888888">5e0f6c5f3a2d4b7e</font></td>
    <td>0.61ms</td><td>0.9s</td><td>ALIVE: 2:13:40</td><td>datacenter1</td>
    <td>2022-03-16 12:33:37.635001</td><td>2022-03-16 12:33:37.634987</td><td>cloud1</td>
  </tr>
</table>
<table><tr><th>Server</th></tr><tr><td>not this one</td></tr></table>
</div></body></html>"""


class FakeNodeHttpClient:
    """In-memory stand-in for NodeHttpClient."""

    def __init__(
        self,
        pages: Dict[Tuple[str, int, str], str] = None,
        unreachable: Iterable[Tuple[str, int]] = (),
        delay: float = 0.0
    ):
        self.pages = pages or {}
        self.unreachable = set(unreachable)
        self.delay = delay
        self.probed = []
        self.fetched = []

    async def probe(self, host, port):
        self.probed.append((host, port))
        await asyncio.sleep(self.delay)
        return (host, port) not in self.unreachable

    async def fetch(self, host, port, path):
        self.fetched.append((host, port, path))
        await asyncio.sleep(self.delay)
        return self.pages.get((host, port, path), "")


@pytest.fixture
def logger():
    """Create logger for tests."""
    return setup_logger("test", "DEBUG")


@pytest.fixture
def clocks_page():
    return CLOCKS_PAGE


@pytest.fixture
def fake_client_factory():
    """Build a FakeNodeHttpClient."""
    return FakeNodeHttpClient


@pytest.fixture
def config(tmp_path):
    """Two hosts on the master port, snapshots under tmp_path."""
    return YbSnapConfig(
        cluster={"hosts": ["yb-1.local", "yb-2.local"], "ports": [7000], "parallel": 2},
        snapshots={"directory": str(tmp_path / "snapshots")},
    )
