from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Protocol

from nonebot.log import logger

from rvstats.beacon import BeaconError
from rvstats.models import ServerSnapshot, Target
from rvstats.store import SnapshotStore


class Fetcher(Protocol):
    async def fetch(self, target: Target) -> ServerSnapshot: ...


class Aggregator:
    def __init__(self, store: SnapshotStore, fetcher: Fetcher) -> None:
        self.store = store
        self.fetcher = fetcher

    async def _collect_one(self, target: Target) -> bool:
        try:
            snapshot = await self.fetcher.fetch(target)
        except BeaconError as exc:
            logger.warning("Beacon error for {}:{}: {}", target.host, target.port, exc)
            return False
        except Exception:
            logger.exception("Status fetch for {}:{} failed", target.host, target.port)
            return False
        if snapshot.current_players == 0:
            return False
        return await self.store.merge(snapshot)

    async def collect(self, targets: Iterable[Target]) -> int:
        """Fetch every target concurrently and merge the results.

        Returns once all fetches have finished, with the number of snapshots
        that changed the store.
        """
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(self._collect_one(t)) for t in targets]
        return sum(1 for task in tasks if task.result())
