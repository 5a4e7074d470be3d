from __future__ import annotations

import asyncio
from enum import StrEnum

from rvstats.models import ServerSnapshot


class MergePolicy(StrEnum):
    # Keep the first snapshot seen for a server and drop later reports.
    RETAIN = "retain"
    # Overwrite the stored snapshot with the newest report.
    REPLACE = "replace"


class SnapshotStore:
    """Process-lifetime collection of server snapshots keyed by (host, port).

    Written only by the aggregator through :meth:`merge`; readers take a
    point-in-time copy through :meth:`snapshot`. Both go through the same lock
    so a reader never sees a half-applied merge.
    """

    def __init__(self, policy: MergePolicy = MergePolicy.RETAIN) -> None:
        self.policy = policy
        self._entries: dict[tuple[str, int], ServerSnapshot] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    async def merge(self, snapshot: ServerSnapshot) -> bool:
        """Insert ``snapshot`` unless the policy says to keep an existing entry.

        Returns True when the store changed.
        """
        async with self._lock:
            known = snapshot.key in self._entries
            changed = not known or self.policy is MergePolicy.REPLACE
            if changed:
                self._entries[snapshot.key] = snapshot
        return changed

    async def snapshot(self) -> list[ServerSnapshot]:
        async with self._lock:
            return list(self._entries.values())
