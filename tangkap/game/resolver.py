"""
Catch resolution.

A catch is correct when the object's classification equals the current
target. Misses (objects leaving the field) never reach the resolver.
"""
from enum import Enum

from tangkap.models import FallingObject


class CatchVerdict(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"


def resolve(obj: FallingObject, target_classification: str) -> CatchVerdict:
    """Judge a caught object against the target classification."""
    if obj.classification == target_classification:
        return CatchVerdict.CORRECT
    return CatchVerdict.INCORRECT
