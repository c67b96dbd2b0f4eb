"""
enumattr.inflection
===================

Just enough English pluralization to name the value‑list constant of an
enumerated attribute (``status`` → ``STATUSES``, ``category`` →
``CATEGORIES``).
"""

from __future__ import annotations

_IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "foot": "feet",
    "tooth": "teeth",
    "mouse": "mice",
    "datum": "data",
    "medium": "media",
    "criterion": "criteria",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
}

_UNCOUNTABLE = {"equipment", "information", "series", "species", "metadata"}


def pluralize(word: str) -> str:
    """
    Plural form of a snake_case identifier.

    Only the last ``_``‑separated segment is inflected:

    >>> pluralize("status")
    'statuses'
    >>> pluralize("order_category")
    'order_categories'
    >>> pluralize("locale")
    'locales'
    """
    if not word:
        return word

    head, sep, last = word.rpartition("_")
    if head and last:
        return head + sep + pluralize(last)

    lower = word.lower()
    if lower in _UNCOUNTABLE:
        return word
    if lower in _IRREGULAR_PLURALS:
        plural = _IRREGULAR_PLURALS[lower]
        return plural.capitalize() if word[0].isupper() else plural

    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    if lower.endswith("y"):
        if len(word) > 1 and lower[-2] in "aeiou":
            return word + "s"
        return word[:-1] + "ies"
    if lower.endswith(("elf", "alf", "olf", "eaf", "oaf", "arf")):
        return word[:-1] + "ves"
    if lower.endswith("fe"):
        return word[:-2] + "ves"
    if lower.endswith(("hero", "potato", "tomato", "echo", "veto")):
        return word + "es"
    return word + "s"


def constant_name(attribute: str) -> str:
    """Name of the class constant listing an attribute's allowed values."""
    return pluralize(attribute).upper()
