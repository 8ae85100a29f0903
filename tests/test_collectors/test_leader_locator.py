"""Tests for leader lookup."""

from datetime import datetime

import pytest

from ybsnap.collectors.leader_locator import IsLeaderCollector, LeaderLocator, find_leader
from ybsnap.errors import LeaderNotFoundError, SnapshotError
from ybsnap.services.snapshot_store import SnapshotStore
from ybsnap.utils.records import StoredIsLeader

ISLEADER_PATH = "api/v1/is-leader"

NOW = datetime(2022, 3, 16, 12, 33, 37).astimezone()


@pytest.fixture
def store(tmp_path, logger):
    return SnapshotStore(str(tmp_path), logger)


@pytest.mark.parametrize("body, expected", [
    ('{"STATUS":"OK"}', "OK"),
    ('{"STATUS":"NOT_LEADER"}', "NOT_LEADER"),
    ('', None),
    ('<html>404</html>', None),
    ('["OK"]', None),
    ('{"other": 1}', None),
])
def test_parse_isleader(body, expected):
    assert IsLeaderCollector.parse_isleader(body) == expected


def test_find_leader():
    records = [
        StoredIsLeader("yb-1.local:7000", NOW, "NOT_LEADER"),
        StoredIsLeader("yb-2.local:7000", NOW, "OK"),
    ]
    assert find_leader(records) == "yb-2.local:7000"


def test_find_leader_none():
    with pytest.raises(LeaderNotFoundError):
        find_leader([StoredIsLeader("yb-1.local:7000", NOW, "NOT_LEADER")])


def test_leader_from_snapshot(store, fake_client_factory, logger):
    store.save(2, "isleader", [
        StoredIsLeader("yb-1.local:7000", NOW, "OK").to_dict(),
    ])
    locator = LeaderLocator(store, fake_client_factory(), logger)

    assert locator.leader_from_snapshot(2) == "yb-1.local:7000"


def test_leader_from_snapshot_without_leader(store, fake_client_factory, logger):
    store.save(2, "isleader", [])
    locator = LeaderLocator(store, fake_client_factory(), logger)

    with pytest.raises(LeaderNotFoundError):
        locator.leader_from_snapshot(2)


def test_leader_from_missing_snapshot(store, fake_client_factory, logger):
    locator = LeaderLocator(store, fake_client_factory(), logger)

    with pytest.raises(SnapshotError):
        locator.leader_from_snapshot(99)


@pytest.mark.asyncio
async def test_leader_from_live_probe(store, fake_client_factory, logger):
    client = fake_client_factory(
        pages={
            ("yb-1.local", 7000, ISLEADER_PATH): '{"STATUS":"NOT_LEADER"}',
            ("yb-2.local", 7000, ISLEADER_PATH): '{"STATUS":"OK"}',
        },
        unreachable=[("yb-3.local", 7000)],
    )
    locator = LeaderLocator(store, client, logger)

    leader = await locator.leader_from_live_probe(["yb-1.local", "yb-2.local", "yb-3.local"], [7000, 9000], 3)

    assert leader == "yb-2.local:7000"


@pytest.mark.asyncio
async def test_leader_from_live_probe_no_leader(store, fake_client_factory, logger):
    locator = LeaderLocator(store, fake_client_factory(unreachable=[("yb-1.local", 7000)]), logger)

    with pytest.raises(LeaderNotFoundError):
        await locator.leader_from_live_probe(["yb-1.local"], [7000], 1)
