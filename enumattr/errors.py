"""
enumattr.errors
===============

Exceptions raised by the registrar and the record host layer.
"""

from __future__ import annotations

from typing import Dict, List


class EnumDeclarationError(Exception):
    """A model declaration cannot be turned into an enumerated attribute."""


class EnumCollisionError(EnumDeclarationError):
    """A generated member name is already taken on the model."""

    def __init__(self, model: type, name: str) -> None:
        self.model = model
        self.name = name
        super().__init__(f"Collision in enum values method {name} on {model.__name__}")


class RecordInvalid(Exception):
    """Raised by ``Record.create`` when the new record fails validation."""

    def __init__(self, record, errors: Dict[str, List[str]]) -> None:
        self.record = record
        self.errors = errors
        details = "; ".join(f"{attr} {msg}" for attr, msgs in errors.items() for msg in msgs)
        super().__init__(f"{type(record).__name__} is invalid: {details}")


class RecordNotAttached(Exception):
    """``save()`` was called without a session on a detached record."""
