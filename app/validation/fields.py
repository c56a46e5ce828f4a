"""
Reusable predicates for primitive field shapes.
"""
from typing import Collection

UNITS = frozenset({"ml", "l", "g", "kg", "lbs", "cups", "tbsp", "tsp"})
DIFFICULTIES = frozenset({"easy", "moderate", "hard"})


def is_non_empty(value: str | None) -> bool:
    return bool(value)


def is_non_zero(value: int) -> bool:
    return value != 0


def is_non_negative(value: int) -> bool:
    return value >= 0


def is_positive(value: int) -> bool:
    return value > 0


def is_one_of(value: str, allowed: Collection[str]) -> bool:
    return value in allowed
