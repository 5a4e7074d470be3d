from __future__ import annotations

from datetime import datetime, timedelta

from nonebot.log import logger

from rvstats.aggregator import Aggregator
from rvstats.discovery import DiscoveryError, ListingClient

POLL_JOB_ID = "rvstats_poll"


class Poller:
    def __init__(self, listing: ListingClient, aggregator: Aggregator) -> None:
        self.listing = listing
        self.aggregator = aggregator

    async def run_once(self) -> bool:
        """Run one discovery, fetch and merge cycle. Returns False if it was aborted."""
        try:
            targets = await self.listing.fetch_targets()
        except DiscoveryError as exc:
            logger.warning("Server discovery failed: {}", exc)
            return False

        try:
            merged = await self.aggregator.collect(targets)
        except Exception:
            logger.exception("Poll cycle over {} targets failed", len(targets))
            return False

        logger.info(
            "server info updated: {} targets, {} merged, {} known",
            len(targets),
            merged,
            len(self.aggregator.store),
        )
        return True

    def schedule(self, scheduler, interval: float, delay: float = 0) -> None:
        """Queue the next cycle on ``scheduler`` as a one-shot job.

        Each cycle queues its successor only after it has finished, so the
        pause between cycles is always ``interval`` regardless of how long a
        cycle takes.
        """
        scheduler.add_job(
            self._run_and_reschedule,
            "date",
            run_date=datetime.now() + timedelta(seconds=delay),
            args=(scheduler, interval),
            id=POLL_JOB_ID,
            replace_existing=True,
        )

    async def _run_and_reschedule(self, scheduler, interval: float) -> None:
        try:
            await self.run_once()
        finally:
            self.schedule(scheduler, interval, delay=interval)
