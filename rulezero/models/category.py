"""
Card categories used for bracket analysis.

Four built-in categories always exist. Rule configurations may add custom
categories, keyed by camelCase identifiers.
"""

import re
from enum import Enum


class BuiltinCategory(str, Enum):
    """Categories present in every rule model."""

    TUTORS = "tutors"
    TWO_CARD_COMBOS = "twoCardCombos"
    GAME_CHANGERS = "gameChangers"
    LAND_DENIAL = "landDenial"


BUILTIN_CATEGORIES: tuple[str, ...] = tuple(category.value for category in BuiltinCategory)


def is_builtin(category: str) -> bool:
    """True if ``category`` is one of the built-in category keys."""
    return category in BUILTIN_CATEGORIES


def to_camel_case(name: str) -> str:
    """
    Convert a display name to a category key.

    Example: "Fast Mana" -> "fastMana", "game_changers" -> "gameChangers"
    """
    camel = re.sub(r"[^a-zA-Z0-9]+(.)", lambda m: m.group(1).upper(), name.strip())
    return camel[:1].lower() + camel[1:]


def format_category_name(category: str) -> str:
    """
    Convert a category key to a display name.

    Example: "twoCardCombos" -> "Two Card Combos"
    """
    spaced = re.sub(r"([A-Z])", r" \1", category)
    return spaced[:1].upper() + spaced[1:]


def collides_with_builtin(category: str) -> bool:
    """
    True if a custom key is a spelling variant of a built-in key.

    The built-in key itself does not collide.
    """
    if is_builtin(category):
        return False
    folded = to_camel_case(category).lower()
    return any(folded == builtin.lower() for builtin in BUILTIN_CATEGORIES)
