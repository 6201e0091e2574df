"""
Level pacing: countdown duration, spawn cadence and fall speed.

All three are pure functions of the level (and mode), so the state
machine can re-derive them whenever the level changes.
"""

from tangkap import config
from tangkap.config import PACING_PRESETS, SpawnPacing
from tangkap.game_state import GameMode


def get_pacing_preset(mode: GameMode) -> SpawnPacing:
    """Spawn pacing preset for a game mode."""
    return PACING_PRESETS[GameMode(mode).value]


def get_duration_for_level(level: int) -> int:
    """
    Countdown length in seconds for a timed-mode level.

    Shrinks by DURATION_STEP per level but never drops below MIN_DURATION:
    level 1 -> 60, level 5 -> 40, level 9 and later -> 20.
    """
    return max(config.MIN_DURATION, config.BASE_DURATION - (level - 1) * config.DURATION_STEP)


def spawn_interval_ms(mode: GameMode, level: int) -> int:
    """
    Milliseconds between spawns.

    timed:   max(1000 - level*50, 500)
    untimed: max(2000 - level*100, 1000)
    """
    preset = get_pacing_preset(mode)
    return max(preset.base_interval - level * preset.level_step, preset.min_interval)


def fall_speed_for_level(level: int) -> float:
    """Field units an object falls per position tick."""
    return config.BASE_FALL_SPEED + level * config.FALL_SPEED_PER_LEVEL
