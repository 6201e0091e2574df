"""
Tangkap Seru - Object spawner with correct-ratio bias.

Decides which catalog item falls next. The choice is biased toward the
current target so that a level always stays winnable: while fewer than
40% of this level's spawns matched the target, or when a coin flip says
so, a matching item is forced; otherwise any item may fall.
"""
import itertools
import random
from typing import List, Optional

from tangkap import config
from tangkap.game import catalog
from tangkap.game.pacing import fall_speed_for_level
from tangkap.logging import get_logger
from tangkap.models import CatalogItem, FallingObject, ObjectFamily, SpawnStatistics

log = get_logger('spawner')


class ObjectSpawner:
    """Creates falling objects for the current level.

    The spawner holds no per-level state; the caller owns the
    SpawnStatistics and passes them in on every spawn.

    Args:
        rng: Random source (seed it for reproducible runs)
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._ids = itertools.count(1)

    def choose_item(
        self,
        items: List[CatalogItem],
        target_classification: str,
        stats: SpawnStatistics,
    ) -> CatalogItem:
        """Pick the next item, forcing a match when the level runs short of them."""
        force_correct = (
            stats.correct_ratio < config.MIN_CORRECT_RATIO
            or self._rng.random() < config.FORCE_CORRECT_CHANCE
        )
        if force_correct:
            matching = [item for item in items if item.classification == target_classification]
            if matching:
                return self._rng.choice(matching)
        return self._rng.choice(items)

    def spawn_one(
        self,
        family: ObjectFamily,
        target_classification: str,
        level: int,
        stats: SpawnStatistics,
    ) -> FallingObject:
        """Create one falling object and record it in stats.

        Args:
            family: Object family of the current level
            target_classification: Classification the player must catch
            level: Current level (sets fall speed)
            stats: This level's spawn counters, updated in place

        Returns:
            New FallingObject positioned above the field
        """
        item = self.choose_item(catalog.items_for(family), target_classification, stats)
        stats.record(item.classification == target_classification)

        obj = FallingObject(
            id=f"obj-{next(self._ids)}",
            family=family,
            value=item.value,
            classification=item.classification,
            glyph=item.glyph,
            x=self._rng.uniform(config.SPAWN_X_MIN, config.SPAWN_X_MAX),
            y=config.SPAWN_Y,
            speed=fall_speed_for_level(level),
        )
        log.trace("Spawned %s (%s) ratio=%.2f", obj.id, obj.classification, stats.correct_ratio)
        return obj
