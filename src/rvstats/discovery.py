from __future__ import annotations

import httpx
from nonebot.log import logger

from rvstats.models import Target

MIN_PORT = 1
MAX_PORT = 65535


class DiscoveryError(RuntimeError):
    pass


def parse_targets(text: str) -> list[Target]:
    lines = text.removesuffix("\n").split("\n")
    targets: dict[Target, None] = {}
    # First line is the listing header.
    for line in lines[1:]:
        fields = line.rstrip("\r").split(",")
        if len(fields) < 3:
            logger.warning("Skip short listing row: {!r}", line)
            continue
        host = fields[1].strip()
        try:
            port = int(fields[2])
        except ValueError:
            logger.warning("Skip listing row with bad port {!r}: {!r}", fields[2], line)
            continue
        if not MIN_PORT <= port <= MAX_PORT:
            logger.warning("Skip listing row with out-of-range port {}: {!r}", port, line)
            continue
        targets.setdefault(Target(host=host, port=port), None)
    return list(targets)


class ListingClient:
    def __init__(self, client: httpx.AsyncClient, url: str, timeout: float) -> None:
        self._client = client
        self.url = url
        self.timeout = timeout

    async def fetch_targets(self) -> list[Target]:
        try:
            resp = await self._client.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
            text = resp.content.decode("utf-8")
        except httpx.HTTPError as exc:
            raise DiscoveryError(f"listing request to {self.url} failed: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise DiscoveryError(f"listing response from {self.url} is not utf-8") from exc
        return parse_targets(text)
