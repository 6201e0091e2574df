"""
Tangkap Seru - Object catalog.

Static catalog of the four object families. Each item carries the
classification instructions are matched against.
"""
from typing import Dict, List, Tuple

from tangkap.models import CatalogItem, ObjectFamily

VOWELS = "AEIOU"

FRUIT_COLORS: Tuple[str, ...] = ("red", "yellow", "orange", "purple", "green")
SHAPE_COLORS: Tuple[str, ...] = ("red", "blue", "green", "yellow", "purple", "orange")

_FRUITS = [
    CatalogItem(glyph="🍎", value="apel", classification="red"),
    CatalogItem(glyph="🍌", value="pisang", classification="yellow"),
    CatalogItem(glyph="🍊", value="jeruk", classification="orange"),
    CatalogItem(glyph="🍇", value="anggur", classification="purple"),
    CatalogItem(glyph="🍓", value="stroberi", classification="red"),
    CatalogItem(glyph="🍉", value="semangka", classification="red"),
    CatalogItem(glyph="🥝", value="kiwi", classification="green"),
    CatalogItem(glyph="🍑", value="persik", classification="orange"),
]

_NUMBERS = [
    CatalogItem(glyph=str(n), value=str(n), classification="even" if n % 2 == 0 else "odd")
    for n in range(10)
]

_LETTERS = [
    CatalogItem(glyph=letter, value=letter,
                classification="vowel" if letter in VOWELS else "consonant")
    for letter in "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
]

# Shapes are all circles; only the color differs
_SHAPES = [
    CatalogItem(glyph="🔴", value="lingkaran", classification="red"),
    CatalogItem(glyph="🔵", value="lingkaran", classification="blue"),
    CatalogItem(glyph="🟢", value="lingkaran", classification="green"),
    CatalogItem(glyph="🟡", value="lingkaran", classification="yellow"),
    CatalogItem(glyph="🟣", value="lingkaran", classification="purple"),
    CatalogItem(glyph="🟠", value="lingkaran", classification="orange"),
]

CATALOG: Dict[ObjectFamily, Tuple[CatalogItem, ...]] = {
    ObjectFamily.FRUIT: tuple(_FRUITS),
    ObjectFamily.NUMBER: tuple(_NUMBERS),
    ObjectFamily.LETTER: tuple(_LETTERS),
    ObjectFamily.SHAPE: tuple(_SHAPES),
}

# Classification values an instruction may target, per family
CLASSIFICATIONS: Dict[ObjectFamily, Tuple[str, ...]] = {
    ObjectFamily.FRUIT: FRUIT_COLORS,
    ObjectFamily.NUMBER: ("even", "odd"),
    ObjectFamily.LETTER: ("vowel", "consonant"),
    ObjectFamily.SHAPE: SHAPE_COLORS,
}

# Unlock order: level 1 has fruit only, level 4+ has every family
FAMILY_ORDER: Tuple[ObjectFamily, ...] = (
    ObjectFamily.FRUIT,
    ObjectFamily.NUMBER,
    ObjectFamily.LETTER,
    ObjectFamily.SHAPE,
)


def items_for(family: ObjectFamily) -> List[CatalogItem]:
    """Catalog items of a family, in catalog order."""
    return list(CATALOG[ObjectFamily(family)])


def classifications_for(family: ObjectFamily) -> Tuple[str, ...]:
    """Classification values valid as an instruction target for a family."""
    return CLASSIFICATIONS[ObjectFamily(family)]


def unlocked_families(level: int) -> Tuple[ObjectFamily, ...]:
    """Families available at a level: the first min(level, 4) in unlock order."""
    return FAMILY_ORDER[:max(1, min(level, len(FAMILY_ORDER)))]
