"""End-to-end tests for SnapshotWorkflow with an in-memory cluster."""

import io

import pytest

from ybsnap.errors import LeaderNotFoundError, SnapshotError
from ybsnap.workflow import SnapshotWorkflow

CLOCKS_PATH = "tablet-server-clocks?raw"
ISLEADER_PATH = "api/v1/is-leader"


@pytest.fixture
def cluster_client(fake_client_factory, clocks_page):
    """yb-1 is the leader master, yb-2 is a follower."""
    return fake_client_factory(pages={
        ("yb-1.local", 7000, ISLEADER_PATH): '{"STATUS":"OK"}',
        ("yb-2.local", 7000, ISLEADER_PATH): '{"STATUS":"NOT_LEADER"}',
        ("yb-1.local", 7000, CLOCKS_PATH): clocks_page,
        ("yb-2.local", 7000, CLOCKS_PATH): clocks_page,
    })


@pytest.fixture
def workflow(config, logger, cluster_client):
    return SnapshotWorkflow(config, logger, http_client=cluster_client)


@pytest.mark.asyncio
async def test_take_snapshot_then_print(workflow):
    snapshot_id = await workflow.take_snapshot("before upgrade")
    assert snapshot_id == 0
    assert await workflow.take_snapshot() == 1

    out = io.StringIO()
    workflow.print_snapshot(0, details_enable=False, file=out)
    lines = out.getvalue().splitlines()

    assert len(lines) == 2
    assert lines[0].startswith("yb-1.local:9000 8a1c2b9a60ee4c1d 0.4s ALIVE: 2:13:44")
    assert lines[0].endswith("0.52ms cloud1 datacenter1 rack1")


@pytest.mark.asyncio
async def test_print_snapshot_details(workflow):
    await workflow.take_snapshot()

    out = io.StringIO()
    workflow.print_snapshot(0, details_enable=True, file=out)
    lines = out.getvalue().splitlines()

    assert len(lines) == 4
    assert {line.split(" ", 1)[0] for line in lines} == {"yb-1.local:7000:", "yb-2.local:7000:"}


def test_print_missing_snapshot(workflow):
    with pytest.raises(SnapshotError):
        workflow.print_snapshot(42)


@pytest.mark.asyncio
async def test_print_adhoc_latency(workflow):
    out = io.StringIO()
    await workflow.print_adhoc_latency(details_enable=False, file=out)

    assert set(out.getvalue().splitlines()) == {
        "yb-1.local:7000 -> yb-1.local:9000: 0.52ms RTT (cloud1 datacenter1 rack1)",
        "yb-1.local:7000 -> yb-2.local:9000: 0.61ms RTT (cloud1 datacenter1 rack2)",
    }


@pytest.mark.asyncio
async def test_print_adhoc_without_leader(config, logger, fake_client_factory, clocks_page):
    client = fake_client_factory(pages={("yb-1.local", 7000, CLOCKS_PATH): clocks_page})
    workflow = SnapshotWorkflow(config, logger, http_client=client)

    with pytest.raises(LeaderNotFoundError):
        await workflow.print_adhoc()


@pytest.mark.asyncio
async def test_list_snapshots(workflow):
    await workflow.take_snapshot("first")

    out = io.StringIO()
    workflow.list_snapshots(file=out)

    number, _, comment = out.getvalue().strip().split(" ", 2)
    assert number == "0"
    assert comment == "first"
