"""
enumattr
========

Enumerated attributes for SQLModel records.

Declare that a string column only ever holds one of a fixed, ordered list
of values, and get typed accessors, ``is_*`` / ``set_*`` helpers, change
callbacks, save‑time validation and ``select`` scopes generated for you.

Sub‑modules
~~~~~~~~~~~
- :pymod:`enumattr.registrar`   – ``register`` / ``@enum_attribute`` (the core)
- :pymod:`enumattr.record`      – ``Record`` host base + ``raw_column``
- :pymod:`enumattr.tokens`      – raw ⇄ token conversions
- :pymod:`enumattr.inflection`  – pluralization for the value‑list constant
- :pymod:`enumattr.db`          – engine, sessions, ``create_all``
- :pymod:`enumattr.settings`    – environment configuration

Quick start
-----------
>>> from typing import Optional
>>> from sqlmodel import Field
>>> from enumattr import Record, enum_attribute, raw_column
>>> @enum_attribute("status", ["available", "canceled", "completed"])
... class Listing(Record, table=True):
...     id: Optional[int] = Field(default=None, primary_key=True)
...     status_raw: Optional[str] = raw_column("status")
>>> Listing.STATUSES
['available', 'canceled', 'completed']
"""

from enumattr.errors import (
    EnumCollisionError,
    EnumDeclarationError,
    RecordInvalid,
    RecordNotAttached,
)
from enumattr.record import Record, raw_column
from enumattr.registrar import (
    EnumAttribute,
    claimed_names,
    enum_attribute,
    enum_attributes,
    register,
)

__all__ = [
    "Record",
    "raw_column",
    "register",
    "enum_attribute",
    "enum_attributes",
    "claimed_names",
    "EnumAttribute",
    "EnumDeclarationError",
    "EnumCollisionError",
    "RecordInvalid",
    "RecordNotAttached",
]

__version__ = "0.1.0"
