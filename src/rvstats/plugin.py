from __future__ import annotations

import httpx
from nonebot import get_app, get_driver, logger
from nonebot.plugin import require

from rvstats.aggregator import Aggregator
from rvstats.beacon import BeaconClient
from rvstats.config import settings
from rvstats.discovery import ListingClient
from rvstats.fetcher import StatusFetcher
from rvstats.poller import Poller
from rvstats.routes import build_router
from rvstats.store import SnapshotStore

require("nonebot_plugin_apscheduler")
from nonebot_plugin_apscheduler import scheduler


driver = get_driver()
store = SnapshotStore(settings.merge_policy)
http_client = httpx.AsyncClient()
poller = Poller(
    listing=ListingClient(
        http_client,
        url=settings.listing_url,
        timeout=settings.listing_timeout_seconds,
    ),
    aggregator=Aggregator(
        store,
        StatusFetcher(
            BeaconClient(),
            port_offset=settings.beacon_port_offset,
            timeout=settings.beacon_timeout_seconds,
        ),
    ),
)

get_app().include_router(build_router(store, settings.web_dir))


@driver.on_startup
async def _on_startup() -> None:
    logger.info("rvstats polling {} every {}s", settings.listing_url, settings.poll_interval_seconds)
    logger.info("rvstats merge policy: {}", settings.merge_policy)

    poller.schedule(scheduler, settings.poll_interval_seconds)


@driver.on_shutdown
async def _on_shutdown() -> None:
    await http_client.aclose()
