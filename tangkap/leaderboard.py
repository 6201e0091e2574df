"""
Leaderboard Store

Ranked score entries per game mode, persisted as one JSON document, plus
the last-used player name persisted under its own key.

Ranking: score (higher first), then level (higher first), then creation
time (earlier first). The table is re-sorted on every insert, so readers
only ever slice already-ranked data.

Failure handling:
    - A stored table that cannot be parsed, or has the wrong shape, loads
      as an empty table.
    - A failed write is logged; the store keeps serving from memory and
      add_entry() still returns the new entry.

Usage:
    store = LeaderboardStore(JsonFileStorage(config.get_data_dir()))
    entry = store.add_entry(GameMode.TIMED, "Rina", score=120, level=3)
    top = store.get_top_entries(GameMode.TIMED, 10)
"""

import time
import uuid
from typing import Callable, List, Optional

from pydantic import ValidationError

from tangkap import config
from tangkap.game_state import GameMode
from tangkap.logging import emit_record, ensure_sink, get_logger
from tangkap.models import LeaderboardEntry, LeaderboardTable
from tangkap.storage import Storage, StorageError

log = get_logger('leaderboard')


def _now_ms() -> int:
    return int(time.time() * 1000)


def rank_entries(entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
    """Return entries in ranked order (stable for identical keys)."""
    return sorted(entries, key=LeaderboardEntry.sort_key)


class LeaderboardStore:
    """Per-mode ranked leaderboard with whole-document persistence.

    Args:
        storage: Persistence backend
        clock: Returns the current time in milliseconds
        max_entries: Keep only the best N entries per mode (0 = unlimited)
    """

    def __init__(
        self,
        storage: Storage,
        clock: Optional[Callable[[], int]] = None,
        max_entries: Optional[int] = None,
    ):
        self._storage = storage
        self._clock = clock or _now_ms
        self._max_entries = config.LEADERBOARD_MAX_ENTRIES if max_entries is None else max_entries
        self._table = self._load()
        ensure_sink('leaderboard')

    # =========================================================================
    # Loading / saving
    # =========================================================================

    def _load(self) -> LeaderboardTable:
        raw = self._storage.get_item(config.LEADERBOARD_KEY)
        if not raw:
            return LeaderboardTable()
        try:
            table = LeaderboardTable.model_validate_json(raw)
        except ValidationError as e:
            log.warning("Stored leaderboard is unreadable, starting empty (%d errors)",
                        e.error_count())
            return LeaderboardTable()

        # Re-rank and drop duplicate ids in case the document was edited by hand
        for mode in GameMode:
            seen = set()
            unique = []
            for entry in rank_entries(table.entries_for(mode)):
                if entry.id not in seen:
                    seen.add(entry.id)
                    unique.append(entry)
            table.set_entries(mode, unique)
        return table

    def _persist(self) -> bool:
        try:
            self._storage.set_item(
                config.LEADERBOARD_KEY,
                self._table.model_dump_json(by_alias=True),
            )
        except StorageError as e:
            log.error("Leaderboard not saved, keeping it in memory: %s", e)
            return False
        return True

    # =========================================================================
    # Entries
    # =========================================================================

    def _next_created_at(self) -> int:
        """Current time, bumped past every stored entry so ties stay ordered."""
        now = self._clock()
        latest = max(
            (e.created_at for mode in GameMode for e in self._table.entries_for(mode)),
            default=None,
        )
        if latest is not None and now <= latest:
            return latest + 1
        return now

    def add_entry(self, mode: GameMode, name: str, score: int, level: int) -> LeaderboardEntry:
        """Insert a result and persist the whole table.

        Returns:
            The stored entry, looked up again by id after ranking. If the
            entry fell off a capped table it is still returned as created.

        Raises:
            pydantic.ValidationError: If score < 0 or level < 1
        """
        entry = LeaderboardEntry(
            id=uuid.uuid4().hex,
            name=name,
            score=score,
            level=level,
            created_at=self._next_created_at(),
        )

        ranked = rank_entries(self._table.entries_for(mode) + [entry])
        if self._max_entries > 0:
            ranked = ranked[:self._max_entries]
        self._table.set_entries(mode, ranked)
        self._persist()

        stored = next((e for e in ranked if e.id == entry.id), entry)
        log.info("Recorded %s entry for %s: score=%d level=%d",
                 GameMode(mode).value, name, score, level)
        emit_record('leaderboard', {
            'type': 'entry_added',
            'mode': GameMode(mode).value,
            **stored.model_dump(by_alias=True),
        })
        return stored

    def entries(self, mode: GameMode) -> List[LeaderboardEntry]:
        """All entries for a mode, ranked."""
        return list(self._table.entries_for(mode))

    def get_top_entries(self, mode: GameMode, n: int) -> List[LeaderboardEntry]:
        """First n ranked entries for a mode."""
        if n <= 0:
            return []
        return list(self._table.entries_for(mode)[:n])

    def rank_of(self, mode: GameMode, entry_id: str) -> Optional[int]:
        """1-based rank of an entry, or None if it is not on the board."""
        for index, entry in enumerate(self._table.entries_for(mode)):
            if entry.id == entry_id:
                return index + 1
        return None

    def reset(self, mode: GameMode) -> None:
        """Clear one mode's entries, leaving the other modes untouched."""
        self._table.set_entries(mode, [])
        self._persist()
        log.info("Leaderboard reset for %s", GameMode(mode).value)

    # =========================================================================
    # Player identity
    # =========================================================================

    @property
    def saved_name(self) -> str:
        """Last confirmed player name on this device, or "" if none.

        Stored as the bare name, the way the browser build wrote it.
        """
        return (self._storage.get_item(config.LAST_NAME_KEY) or "").strip()

    def store_name(self, name: str) -> None:
        """Remember name as the device's last-used identity."""
        try:
            self._storage.set_item(config.LAST_NAME_KEY, name)
        except StorageError as e:
            log.error("Player name not saved: %s", e)
