"""
Round data models: falling objects, instructions, spawn statistics and the
round state snapshot handed to the presentation layer.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..game_state import GameMode, GameState
from .catalog import ObjectFamily


class FallingObject(BaseModel):
    """An object currently falling through the play field.

    Positions are percentages of the field: x in [0, 100], y grows
    downwards and starts above the visible field.

    Attributes:
        id: Unique per spawn
        family: Object family it was drawn from
        value: Semantic value of the catalog item
        classification: Class matched against the instruction target
        glyph: What the presentation layer draws
        x: Horizontal position
        y: Vertical position
        speed: Field units added to y on every position tick
    """
    id: str
    family: ObjectFamily
    value: str
    classification: str
    glyph: str
    x: float = Field(..., ge=0, le=100)
    y: float
    speed: float = Field(..., gt=0)

    def advance(self) -> float:
        """Move one position tick down the field and return the new y."""
        self.y += self.speed
        return self.y

    def is_below(self, bound: float) -> bool:
        """True once the object has left the field through the bottom."""
        return self.y > bound


class Instruction(BaseModel):
    """What the player has to catch this level."""
    text: str
    target_classification: str
    family: ObjectFamily

    model_config = ConfigDict(frozen=True)


@dataclass
class SpawnStatistics:
    """Per-level spawn counters used to bias the next spawn choice."""
    correct_spawned: int = 0
    total_spawned: int = 0

    @property
    def correct_ratio(self) -> float:
        """Share of correct objects spawned so far (0.5 before any spawn)."""
        if self.total_spawned > 0:
            return self.correct_spawned / self.total_spawned
        return 0.5

    def record(self, is_correct: bool) -> None:
        self.total_spawned += 1
        if is_correct:
            self.correct_spawned += 1

    def reset(self) -> None:
        self.correct_spawned = 0
        self.total_spawned = 0


class RoundState(BaseModel):
    """Snapshot of a round, read by the presentation layer.

    Attributes:
        mode: Timed or untimed play
        phase: Current lifecycle state
        level: Current level (starts at 1)
        score: Total points this round
        catch_count: Correct catches in the current level
        target_catch_count: Correct catches needed to clear a level
        family: Object family of the current level
        target_classification: Class the player must catch
        instruction: Localized instruction sentence
        time_remaining: Seconds left (timed mode only)
        player_name: Confirmed player name (timed mode only)
    """
    mode: GameMode
    phase: GameState = GameState.IDLE
    level: int = Field(default=1, ge=1)
    score: int = Field(default=0, ge=0)
    catch_count: int = Field(default=0, ge=0)
    target_catch_count: int = Field(default=10, gt=0)
    family: Optional[ObjectFamily] = None
    target_classification: Optional[str] = None
    instruction: str = ""
    time_remaining: Optional[int] = None
    player_name: str = ""

    @computed_field
    @property
    def is_level_complete(self) -> bool:
        return self.phase == GameState.LEVEL_COMPLETE

    @computed_field
    @property
    def is_game_over(self) -> bool:
        return self.phase == GameState.GAME_OVER

    @computed_field
    @property
    def progress(self) -> float:
        """Level progress in [0, 1] for the progress bar."""
        return self.catch_count / self.target_catch_count
