import asyncio
from datetime import datetime, timedelta

import pytest
from conftest import make_snapshot

from rvstats.aggregator import Aggregator
from rvstats.discovery import DiscoveryError
from rvstats.models import ServerSnapshot, Target
from rvstats.poller import POLL_JOB_ID, Poller
from rvstats.store import SnapshotStore


class _FakeListing:
    def __init__(self, targets: list[Target] | None) -> None:
        self.targets = targets
        self.calls = 0

    async def fetch_targets(self) -> list[Target]:
        self.calls += 1
        if self.targets is None:
            raise DiscoveryError("listing unreachable")
        return self.targets


class _EchoFetcher:
    async def fetch(self, target: Target) -> ServerSnapshot:
        return make_snapshot(host=target.host, port=target.port)


class _SlowEchoFetcher:
    async def fetch(self, target: Target) -> ServerSnapshot:
        await asyncio.sleep(0.2)
        return make_snapshot(host=target.host, port=target.port)


class _PartlyBrokenFetcher:
    async def fetch(self, target: Target) -> ServerSnapshot:
        if target.host == "10.0.0.9":
            raise KeyError(target.host)
        return make_snapshot(host=target.host, port=target.port)


class _RecordingScheduler:
    def __init__(self) -> None:
        self.jobs: list[dict] = []

    def add_job(self, func, trigger, **kwargs) -> None:
        self.jobs.append(dict(func=func, trigger=trigger, **kwargs))


@pytest.mark.asyncio
async def test_cycle_populates_store() -> None:
    store = SnapshotStore()
    listing = _FakeListing([Target("10.0.0.1", 7777), Target("10.0.0.2", 7777)])
    poller = Poller(listing, Aggregator(store, _EchoFetcher()))

    assert await poller.run_once() is True
    assert len(store) == 2


@pytest.mark.asyncio
async def test_discovery_failure_aborts_cycle_only() -> None:
    store = SnapshotStore()
    listing = _FakeListing(None)
    poller = Poller(listing, Aggregator(store, _EchoFetcher()))

    assert await poller.run_once() is False
    assert len(store) == 0

    listing.targets = [Target("10.0.0.1", 7777)]
    assert await poller.run_once() is True
    assert listing.calls == 2
    assert len(store) == 1


@pytest.mark.asyncio
async def test_unexpected_fetch_error_is_contained() -> None:
    store = SnapshotStore()
    targets = [Target("10.0.0.1", 7777), Target("10.0.0.9", 7777), Target("10.0.0.2", 7777)]
    poller = Poller(_FakeListing(targets), Aggregator(store, _PartlyBrokenFetcher()))

    assert await poller.run_once() is True
    assert sorted(s.ip_address for s in await store.snapshot()) == ["10.0.0.1", "10.0.0.2"]


@pytest.mark.asyncio
async def test_schedule_waits_interval_after_cycle_ends() -> None:
    store = SnapshotStore()
    scheduler = _RecordingScheduler()
    poller = Poller(_FakeListing([Target("10.0.0.1", 7777)]), Aggregator(store, _SlowEchoFetcher()))

    poller.schedule(scheduler, 30)
    first = scheduler.jobs[0]
    assert first["trigger"] == "date"
    assert first["id"] == POLL_JOB_ID
    assert first["replace_existing"] is True
    assert first["run_date"] <= datetime.now()

    started = datetime.now()
    await first["func"](*first["args"])
    finished = datetime.now()

    assert len(store) == 1
    assert len(scheduler.jobs) == 2
    follow_up = scheduler.jobs[1]
    assert follow_up["id"] == POLL_JOB_ID
    # the pause starts when the slow cycle ends, not when it started
    assert follow_up["run_date"] - started >= timedelta(seconds=30.2)
    assert follow_up["run_date"] - finished >= timedelta(seconds=29)
    assert follow_up["run_date"] - finished <= timedelta(seconds=30)


@pytest.mark.asyncio
async def test_schedule_continues_after_failed_discovery() -> None:
    scheduler = _RecordingScheduler()
    poller = Poller(_FakeListing(None), Aggregator(SnapshotStore(), _EchoFetcher()))

    poller.schedule(scheduler, 30)
    job = scheduler.jobs[0]
    await job["func"](*job["args"])

    assert len(scheduler.jobs) == 2
