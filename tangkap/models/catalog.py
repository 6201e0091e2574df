"""
Catalog data models.

An object family is a kind of falling object (fruit, number, letter,
shape). Every catalog item carries the classification that instructions
are matched against: a color for fruit and shapes, parity for numbers,
vowel class for letters.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class ObjectFamily(str, Enum):
    """Families of falling objects, in the order they unlock."""
    FRUIT = "fruit"
    NUMBER = "number"
    LETTER = "letter"
    SHAPE = "shape"


class CatalogItem(BaseModel):
    """Immutable catalog entry.

    Attributes:
        glyph: What the presentation layer draws (emoji, digit, letter)
        value: Semantic value (fruit name, digit, letter)
        classification: Class matched against the instruction target

    Examples:
        >>> apple = CatalogItem(glyph="🍎", value="apel", classification="red")
        >>> apple.classification
        'red'
    """
    glyph: str
    value: str
    classification: str

    model_config = ConfigDict(frozen=True)

    @field_validator('classification')
    @classmethod
    def validate_classification(cls, v: str) -> str:
        if not v:
            raise ValueError('classification must not be empty')
        return v
