"""Game mode and game state enums shared by the core.

GameState is what the presentation layer switches on to decide which
screen to show:

    IDLE                 nothing running (menu)
    AWAITING_IDENTITY    timed mode, waiting for a player name
    PLAYING              objects falling, catches accepted
    LEVEL_COMPLETE       target reached, spawning and countdown paused
    GAME_OVER            timed mode, countdown hit zero

Usage:
    from tangkap.game_state import GameMode, GameState

    if game.state.phase == GameState.LEVEL_COMPLETE:
        show_next_level_button()
"""
from enum import Enum


class GameMode(str, Enum):
    """Play modes. Each mode has its own leaderboard table."""
    TIMED = "timed"
    UNTIMED = "untimed"


class GameState(Enum):
    """Round lifecycle states."""
    IDLE = "idle"
    AWAITING_IDENTITY = "awaiting_identity"
    PLAYING = "playing"
    LEVEL_COMPLETE = "level_complete"
    GAME_OVER = "game_over"
