"""
Tangkap Seru game logic.

- catalog: object families and their classified items
- instructions: per-level target draw and localized sentences
- spawner: biased object spawning
- pacing: countdown, spawn cadence and fall speed per level
- resolver: catch verdicts
- game_mode: round/level state machine
"""

from tangkap.game.catalog import classifications_for, items_for, unlocked_families
from tangkap.game.game_mode import CatchGameMode
from tangkap.game.instructions import InstructionGenerator, Locale
from tangkap.game.pacing import (
    fall_speed_for_level,
    get_duration_for_level,
    spawn_interval_ms,
)
from tangkap.game.resolver import CatchVerdict, resolve
from tangkap.game.spawner import ObjectSpawner

__all__ = [
    'CatchGameMode',
    'CatchVerdict',
    'InstructionGenerator',
    'Locale',
    'ObjectSpawner',
    'classifications_for',
    'fall_speed_for_level',
    'get_duration_for_level',
    'items_for',
    'resolve',
    'spawn_interval_ms',
    'unlocked_families',
]
