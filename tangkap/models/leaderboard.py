"""
Leaderboard data models.

Entries are stored in the same JSON shape the browser build wrote to
localStorage ({id, name, score, level, createdAt}), so an exported table
can be loaded as-is.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..game_state import GameMode


class LeaderboardEntry(BaseModel):
    """Immutable ranked result.

    Attributes:
        id: Unique id
        name: Player display name
        score: Final score
        level: Level reached
        created_at: Creation time in milliseconds, earlier ranks higher on ties
    """
    id: str
    name: str
    score: int = Field(..., ge=0)
    level: int = Field(..., ge=1)
    created_at: int = Field(..., alias='createdAt')

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def sort_key(self):
        """Ranking key: score desc, level desc, created_at asc."""
        return (-self.score, -self.level, self.created_at)


class LeaderboardTable(BaseModel):
    """All ranked entries, one sequence per mode, persisted as one document."""
    timed: List[LeaderboardEntry] = Field(default_factory=list)
    untimed: List[LeaderboardEntry] = Field(default_factory=list)

    def entries_for(self, mode: GameMode) -> List[LeaderboardEntry]:
        return getattr(self, GameMode(mode).value)

    def set_entries(self, mode: GameMode, entries: List[LeaderboardEntry]) -> None:
        setattr(self, GameMode(mode).value, entries)
