"""
Tangkap Seru - Configuration loader with per-mode pacing presets.

Values come from a .env file next to the package and can be overridden
through the environment.
"""
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv

# Load .env from package directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


def _get_str(key: str, default: str) -> str:
    """Get string from environment."""
    return os.getenv(key, default)


# Level progression
TARGET_CATCH_COUNT = _get_int('TARGET_CATCH_COUNT', 10)  # Correct catches to clear a level
CORRECT_REWARD = _get_int('CORRECT_REWARD', 10)

# Timed mode durations (seconds)
BASE_DURATION = _get_int('BASE_DURATION', 60)
MIN_DURATION = _get_int('MIN_DURATION', 20)
DURATION_STEP = _get_int('DURATION_STEP', 5)

# Timer cadence (milliseconds)
POSITION_TICK_MS = _get_int('POSITION_TICK_MS', 50)
COUNTDOWN_TICK_MS = _get_int('COUNTDOWN_TICK_MS', 1000)

# Play field, in percent of the field size
SPAWN_Y = _get_float('SPAWN_Y', -10.0)  # above the visible field
FIELD_BOTTOM = _get_float('FIELD_BOTTOM', 110.0)
SPAWN_X_MIN = _get_float('SPAWN_X_MIN', 10.0)
SPAWN_X_MAX = _get_float('SPAWN_X_MAX', 90.0)

# Fall speed (field units per position tick)
BASE_FALL_SPEED = _get_float('BASE_FALL_SPEED', 1.0)
FALL_SPEED_PER_LEVEL = _get_float('FALL_SPEED_PER_LEVEL', 0.2)

# Spawn bias
MIN_CORRECT_RATIO = _get_float('MIN_CORRECT_RATIO', 0.4)
FORCE_CORRECT_CHANCE = _get_float('FORCE_CORRECT_CHANCE', 0.5)

# Player identity
MIN_NAME_LENGTH = _get_int('MIN_NAME_LENGTH', 2)

# Instruction and toast language (id, en)
LOCALE = _get_str('LOCALE', 'id')

# Leaderboard
LEADERBOARD_MAX_ENTRIES = _get_int('LEADERBOARD_MAX_ENTRIES', 0)  # 0 = unlimited
LEADERBOARD_KEY = 'tangkap-seru-leaderboard'
LAST_NAME_KEY = 'tangkap-seru-last-player-name'


# Spawn pacing presets - one per game mode
@dataclass(frozen=True)
class SpawnPacing:
    """Spawn cadence parameters for a game mode (milliseconds)."""
    name: str
    base_interval: int    # Interval before the level term is subtracted
    level_step: int       # Subtracted once per level
    min_interval: int     # Floor


PACING_PRESETS: Dict[str, SpawnPacing] = {
    # Timed mode spawns twice as often
    'timed': SpawnPacing(
        name='timed',
        base_interval=_get_int('TIMED_SPAWN_BASE_MS', 1000),
        level_step=_get_int('TIMED_SPAWN_STEP_MS', 50),
        min_interval=_get_int('TIMED_SPAWN_MIN_MS', 500),
    ),
    'untimed': SpawnPacing(
        name='untimed',
        base_interval=_get_int('UNTIMED_SPAWN_BASE_MS', 2000),
        level_step=_get_int('UNTIMED_SPAWN_STEP_MS', 100),
        min_interval=_get_int('UNTIMED_SPAWN_MIN_MS', 1000),
    ),
}


def get_data_dir() -> Path:
    """Directory for persisted leaderboard and player name.

    TANGKAP_DATA_DIR wins; otherwise a platform user data directory.
    """
    env_dir = os.environ.get('TANGKAP_DATA_DIR')
    if env_dir:
        return Path(env_dir).expanduser()

    if sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support' / 'TangkapSeru'
    if sys.platform == 'win32':
        return Path(os.environ.get('APPDATA', str(Path.home()))) / 'TangkapSeru'
    xdg_data = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
    return Path(xdg_data) / 'tangkap-seru'
