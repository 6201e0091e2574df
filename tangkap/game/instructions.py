"""
Tangkap Seru - Instruction generator and localized strings.

Each level draws an object family from the families unlocked so far and a
target classification from that family, then renders the instruction
sentence in the configured language.

Strings live in tangkap/data/locales.yaml.
"""
import random
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from tangkap import config
from tangkap.game.catalog import classifications_for, unlocked_families
from tangkap.logging import get_logger
from tangkap.models import Instruction, ObjectFamily

log = get_logger('instructions')

LOCALES_PATH = Path(__file__).parent.parent / 'data' / 'locales.yaml'
DEFAULT_LOCALE = 'id'


@lru_cache(maxsize=1)
def _load_locales() -> Dict[str, Dict[str, Any]]:
    with open(LOCALES_PATH, encoding='utf-8') as f:
        return yaml.safe_load(f)


def available_locales() -> list:
    return sorted(_load_locales().keys())


class Locale:
    """Localized instruction sentences and toast messages for one language."""

    def __init__(self, code: Optional[str] = None):
        code = code or config.LOCALE
        locales = _load_locales()
        if code not in locales:
            log.warning("Unknown locale %r, falling back to %r", code, DEFAULT_LOCALE)
            code = DEFAULT_LOCALE
        self.code = code
        self._strings = locales[code]

    def classification_name(self, classification: str) -> str:
        return self._strings['classifications'].get(classification, classification)

    def instruction(self, family: ObjectFamily, target: str) -> str:
        template = self._strings['instructions'][ObjectFamily(family).value]
        return template.format(target=self.classification_name(target))

    def message(self, key: str, **kwargs) -> str:
        """Toast message for key, formatted with kwargs."""
        return self._strings['messages'][key].format(**kwargs)


class InstructionGenerator:
    """Draws families and target classifications, renders instructions.

    Args:
        rng: Random source (seed it for reproducible runs)
        locale: Language for instruction sentences
    """

    def __init__(self, rng: Optional[random.Random] = None, locale: Optional[Locale] = None):
        self._rng = rng or random.Random()
        self.locale = locale or Locale()

    def choose_family(self, level: int) -> ObjectFamily:
        """Uniform pick among the families unlocked at this level."""
        return self._rng.choice(unlocked_families(level))

    def generate(self, family: ObjectFamily, level: int) -> Instruction:
        """Pick a target classification for family and render its instruction.

        The level does not change the instruction today; it is accepted so
        callers pass the same arguments as the family draw.
        """
        target = self._rng.choice(classifications_for(family))
        text = self.locale.instruction(family, target)
        log.debug("Level %d instruction: %s", level, text)
        return Instruction(text=text, target_classification=target, family=ObjectFamily(family))
