"""In-memory game store. Keyed by game ID."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable

from models import TurnRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    # Naive datetimes are taken as local time.
    return moment.astimezone(timezone.utc)


class GameStore:
    """
    Concurrent map of game id -> TurnRecord.

    Every operation holds the store-wide lock for exactly one logical step and
    works on copies, so callers never see or hold the live records. The lock is
    a threading.Lock because sync route handlers run in the threadpool while
    the sweeper runs on the event loop.

    Writes to the same id are serialized; the last one to take the lock wins.
    The ``turn`` field is not compared, so a late write with a lower turn
    overwrites a higher one.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._lock = threading.Lock()
        self._games: dict[str, TurnRecord] = {}
        self._clock = clock

    def __contains__(self, game_id: object) -> bool:
        with self._lock:
            return game_id in self._games

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)

    def get(self, game_id: str) -> TurnRecord | None:
        with self._lock:
            record = self._games.get(game_id)
            return record.copy() if record is not None else None

    def put(self, game_id: str, record: TurnRecord) -> TurnRecord:
        """Insert or replace the record, stamping ``updated_at``. Returns the stored copy."""
        with self._lock:
            stored = replace(record, updated_at=_as_utc(self._clock()))
            self._games[game_id] = stored
            return stored.copy()

    def reserve(self, game_id: str) -> bool:
        """Claim ``game_id`` with an empty record. False if it is already taken."""
        with self._lock:
            if game_id in self._games:
                return False
            self._games[game_id] = TurnRecord()
            return True

    def clear(self) -> None:
        with self._lock:
            count = len(self._games)
            self._games.clear()
        logger.info("[store] Cleared %d game(s)", count)

    def snapshot(self) -> dict[str, TurnRecord]:
        with self._lock:
            return {game_id: record.copy() for game_id, record in self._games.items()}

    def evict_expired(self, max_age_seconds: float, now: datetime | None = None) -> list[str]:
        """
        Remove every record last written more than ``max_age_seconds`` before ``now``.

        Records that were reserved but never written have no ``updated_at`` and
        are always kept.
        """
        now = _as_utc(now or self._clock())
        cutoff = now - timedelta(seconds=max_age_seconds)
        with self._lock:
            expired = [
                game_id
                for game_id, record in self._games.items()
                if record.updated_at is not None and record.updated_at < cutoff
            ]
            for game_id in expired:
                del self._games[game_id]
        return expired
