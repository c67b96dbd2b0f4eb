"""
enumattr.tokens
===============

The two shapes an enumerated value takes.

* ``RawValue`` – what the database column holds: ``str`` or ``None``.
* ``Token``    – what application code sees: a normalized ``str``.

Both are plain strings at runtime, but keeping the conversions in one place
means the rest of the package never has to guess which side of the boundary
a value came from.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, List, Optional

from enumattr.errors import EnumDeclarationError

RawValue = Optional[str]
Token = str


def to_token(value: Any) -> Optional[Token]:
    """
    Normalize application input to a token.

    Accepts ``str`` and :class:`enum.Enum` members.  A member whose value is a
    string (the ``class Status(str, Enum)`` idiom) maps to that value, any
    other member maps to its lower‑cased name.  ``None`` and ``""`` map to
    ``None``.
    """
    if value is None:
        return None
    if isinstance(value, Enum):
        return value.value if isinstance(value.value, str) else value.name.lower()
    if isinstance(value, str):
        return value or None
    raise TypeError(f"cannot use {type(value).__name__} {value!r} as an enum value")


def raw_to_token(raw: RawValue) -> Optional[Token]:
    """Stored column value → token (``None`` and ``""`` both read as ``None``)."""
    if raw is None or raw == "":
        return None
    return raw


def token_to_raw(token: Optional[Token]) -> RawValue:
    """Token → value written to the column."""
    return None if token is None else str(token)


def tokens_of(values: Iterable[Any]) -> List[Token]:
    """
    Normalize a declared value list, keeping order.

    *values* may be an iterable of strings / members or an ``Enum`` subclass.
    """
    tokens = []
    for value in values:
        token = to_token(value)
        if token is None:
            raise EnumDeclarationError(f"enum values cannot be empty: {value!r}")
        tokens.append(token)
    return tokens
