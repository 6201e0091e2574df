"""
Tangkap Seru: catch-the-right-object minigame core.

Provides:
- game: round/level state machine, spawner, instructions, catalog
- leaderboard: ranked per-mode leaderboard with persistence
- storage: key/value document storage adapters
- scheduler: logical-time repeating timers
- events: typed notifications for a toast/audio layer
- models: pydantic data models
"""

from tangkap.events import EventBus, EventType, GameEvent
from tangkap.game import CatchGameMode, CatchVerdict
from tangkap.game_state import GameMode, GameState
from tangkap.leaderboard import LeaderboardStore
from tangkap.scheduler import IntervalScheduler, StateCell
from tangkap.storage import JsonFileStorage, MemoryStorage, Storage, StorageError

__version__ = "1.0.0"

__all__ = [
    'CatchGameMode',
    'CatchVerdict',
    'EventBus',
    'EventType',
    'GameEvent',
    'GameMode',
    'GameState',
    'IntervalScheduler',
    'JsonFileStorage',
    'LeaderboardStore',
    'MemoryStorage',
    'StateCell',
    'Storage',
    'StorageError',
]
