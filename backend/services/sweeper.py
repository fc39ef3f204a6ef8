"""Background eviction of games that have not been written to for a while."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING
from weakref import WeakValueDictionary

from services.store import GameStore

if TYPE_CHECKING:
    from app.config import Settings

logger = logging.getLogger(__name__)

# id(store) -> its sweeper. A live sweeper keeps its store alive, so ids are never reused here.
_sweepers: WeakValueDictionary[int, ExpirySweeper] = WeakValueDictionary()


class SweeperState(str, Enum):
    SLEEPING = "sleeping"
    SWEEPING = "sweeping"


class ExpirySweeper:
    """
    Periodically evicts stale games from a GameStore.

    Runs only when both ``max_age_seconds`` and ``interval_seconds`` are set.
    Each sweep is a single store operation, so cancelling between sweeps never
    leaves the store half-swept.
    """

    def __init__(
        self,
        store: GameStore,
        *,
        max_age_seconds: float | None,
        interval_seconds: float | None,
    ) -> None:
        self._store = store
        self._max_age = max_age_seconds
        self._interval = interval_seconds
        self._task: asyncio.Task[None] | None = None
        self.state = SweeperState.SLEEPING
        self.sweeps = 0

    @property
    def enabled(self) -> bool:
        return bool(self._max_age and self._max_age > 0 and self._interval and self._interval > 0)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sweep_once(self, now: datetime | None = None) -> list[str]:
        """One eviction pass. Does nothing when the sweeper is disabled."""
        if not self.enabled:
            return []
        self.state = SweeperState.SWEEPING
        try:
            evicted = self._store.evict_expired(self._max_age, now)
        finally:
            self.state = SweeperState.SLEEPING
        self.sweeps += 1
        if evicted:
            logger.info("[sweeper] Evicted %d stale game(s): %s", len(evicted), ", ".join(evicted))
        else:
            logger.debug("[sweeper] Sweep #%d evicted nothing", self.sweeps)
        return evicted

    async def run(self) -> None:
        if not self.enabled:
            raise RuntimeError("sweeper needs both an expiry age and a sweep interval")
        while True:
            await asyncio.sleep(self._interval)
            self.sweep_once()

    def start(self) -> asyncio.Task[None] | None:
        """Start the loop on the running event loop. Idempotent; no-op when disabled."""
        if not self.enabled:
            logger.info("[sweeper] Expiry or interval not configured; games never expire")
            return None
        if self.running:
            return self._task
        self._task = asyncio.create_task(self.run())
        logger.info(
            "[sweeper] Started: max_age=%ss interval=%ss",
            self._max_age,
            self._interval,
        )
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None


def start_sweeper(store: GameStore, settings: Settings) -> ExpirySweeper:
    """
    Start the sweeper for ``store``, once.

    Later calls for the same store return the sweeper from the first call
    (restarting its loop if it was stopped) instead of adding another loop.
    """
    sweeper = _sweepers.get(id(store))
    if sweeper is None:
        sweeper = ExpirySweeper(
            store,
            max_age_seconds=settings.game_expiry_seconds,
            interval_seconds=settings.sweep_interval_seconds,
        )
        _sweepers[id(store)] = sweeper
    sweeper.start()
    return sweeper
