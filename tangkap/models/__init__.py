"""
Pydantic data models for Tangkap Seru.

- Catalog: ObjectFamily, CatalogItem
- Round: FallingObject, Instruction, SpawnStatistics, RoundState
- Leaderboard: LeaderboardEntry, LeaderboardTable

Usage:
    >>> from tangkap.models import CatalogItem, ObjectFamily
    >>> from tangkap.models import LeaderboardEntry
"""

from .catalog import CatalogItem, ObjectFamily
from .leaderboard import LeaderboardEntry, LeaderboardTable
from .round import FallingObject, Instruction, RoundState, SpawnStatistics

__all__ = [
    # Catalog
    "ObjectFamily",
    "CatalogItem",
    # Round
    "FallingObject",
    "Instruction",
    "SpawnStatistics",
    "RoundState",
    # Leaderboard
    "LeaderboardEntry",
    "LeaderboardTable",
]
