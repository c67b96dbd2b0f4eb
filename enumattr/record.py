"""
enumattr.record
===============

Host record base for enumerated attributes.

:class:`Record` is a non‑table ``SQLModel`` that concrete tables extend.  It
supplies the primitives the registrar builds on:

* ``read_attribute`` / ``write_attribute`` – raw column access by column name
* ``save`` – validate, then add + commit through the record's session
* ``declare_validation`` – per‑model inclusion rules checked on save
* ``declare_scope`` – per‑model registry of named, composable ``select`` filters
* ``member_exists`` – introspection used for collision detection

Raw enum columns are mapped under a *different* attribute name than the
column itself (see :func:`raw_column`), leaving the column name free for the
generated accessor property.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple

from sqlalchemy import Column, String
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import object_session
from sqlmodel import Field, Session, SQLModel, select

from enumattr.errors import RecordInvalid, RecordNotAttached

logger = logging.getLogger(__name__)

ScopeBuilder = Callable[[type, Any], Any]


def raw_column(name: str, length: Optional[int] = None, index: bool = False) -> Any:
    """
    Field for the raw string column behind an enumerated attribute.

    Example
    -------
    >>> class Order(Record, table=True):
    ...     id: Optional[int] = Field(default=None, primary_key=True)
    ...     status_raw: Optional[str] = raw_column("status")
    """
    return Field(default=None, sa_column=Column(name, String(length), index=index))


@dataclass(frozen=True)
class InclusionRule:
    """Raw value of *attribute* must be one of *allowed* (or ``None`` if *allow_nil*)."""

    attribute: str
    allowed: Tuple[str, ...]
    allow_nil: bool = False

    message: ClassVar[str] = "is not included in the list"

    def check(self, record: "Record") -> Optional[str]:
        raw = record.read_attribute(self.attribute)
        if raw is None:
            return None if self.allow_nil else self.message
        return None if raw in self.allowed else self.message


class Record(SQLModel):
    """
    Base class for tables that declare enumerated attributes.

    Subclass with ``table=True`` and declare raw columns with
    :func:`raw_column`; see :func:`enumattr.registrar.enum_attribute`.
    """

    # ------------------------------------------------------------------
    # Attribute plumbing
    # ------------------------------------------------------------------
    def __init__(self, **data: Any) -> None:
        # SQLModel drops keywords that are not fields; route accessors through their property
        assigned = {
            name: data.pop(name)
            for name in list(data)
            if isinstance(getattr(type(self), name, None), property)
        }
        super().__init__(**data)
        for name, value in assigned.items():
            setattr(self, name, value)

    def __setattr__(self, name: str, value: Any) -> None:
        # pydantic only accepts declared fields; generated accessors are properties
        descriptor = getattr(type(self), name, None)
        if isinstance(descriptor, property):
            descriptor.__set__(self, value)
            return
        super().__setattr__(name, value)

    @classmethod
    def column_key(cls, column: str) -> str:
        """Mapped attribute name of the table column *column*."""
        table_column = cls.__table__.c[column]
        return sa_inspect(cls).get_property_by_column(table_column).key

    def read_attribute(self, column: str) -> Optional[str]:
        """Raw stored value of *column*."""
        return getattr(self, type(self).column_key(column))

    def write_attribute(self, column: str, raw: Optional[str]) -> None:
        """Overwrite the raw stored value of *column* (no save)."""
        setattr(self, type(self).column_key(column), raw)

    @classmethod
    def member_exists(cls, name: str) -> bool:
        return hasattr(cls, name)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    @classmethod
    def declare_validation(cls, attribute: str, allowed, allow_nil: bool = False) -> InclusionRule:
        """Register an inclusion rule checked by :meth:`validation_errors`."""
        rule = InclusionRule(attribute, tuple(allowed), allow_nil)
        rules = list(cls.validation_rules())
        rules.append(rule)
        setattr(cls, "__validation_rules__", rules)
        return rule

    @classmethod
    def validation_rules(cls) -> List[InclusionRule]:
        for klass in cls.__mro__:
            if "__validation_rules__" in vars(klass):
                return vars(klass)["__validation_rules__"]
        return []

    def validation_errors(self) -> Dict[str, List[str]]:
        """Map of attribute → messages for every failing rule."""
        errors: Dict[str, List[str]] = {}
        for rule in type(self).validation_rules():
            message = rule.check(self)
            if message:
                errors.setdefault(rule.attribute, []).append(message)
        return errors

    def is_valid(self) -> bool:
        return not self.validation_errors()

    # ------------------------------------------------------------------
    # Scopes
    # ------------------------------------------------------------------
    @classmethod
    def declare_scope(cls, name: str, builder: ScopeBuilder) -> None:
        """
        Register the named filter *builder* and expose it as ``cls.<name>()``.

        ``builder(model, stmt)`` must return *stmt* narrowed by a ``where``
        clause.  The exposed classmethod starts from ``select(cls)`` when no
        statement is passed, so scopes chain:

        >>> Order.not_canceled(Order.not_completed())
        """
        scopes = dict(cls.scopes())
        scopes[name] = builder

        def scope(model, stmt=None):
            return builder(model, select(model) if stmt is None else stmt)

        scope.__name__ = name
        setattr(cls, "__scopes__", scopes)
        setattr(cls, name, classmethod(scope))

    @classmethod
    def scopes(cls) -> Dict[str, ScopeBuilder]:
        for klass in cls.__mro__:
            if "__scopes__" in vars(klass):
                return vars(klass)["__scopes__"]
        return {}

    @classmethod
    def scoped(cls, name: str, stmt=None):
        """Apply the registered scope *name* to *stmt* (or ``select(cls)``)."""
        builder = cls.scopes()[name]
        return builder(cls, select(cls) if stmt is None else stmt)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save(self, session: Optional[Session] = None) -> bool:
        """
        Validate and commit the record.

        Returns ``False`` (without touching the session) when validation
        fails.  Database errors from ``commit`` propagate unchanged.
        """
        errors = self.validation_errors()
        if errors:
            logger.info(f"Not saving invalid {type(self).__name__}: {errors}")
            return False
        if session is None:
            session = object_session(self)
        if session is None:
            raise RecordNotAttached(
                f"{type(self).__name__} is not attached to a session; pass one to save()"
            )
        session.add(self)
        session.commit()
        return True

    @classmethod
    def build(cls, **values: Any) -> "Record":
        """Instantiate with *values*, accessors included (no save)."""
        return cls(**values)

    @classmethod
    def create(cls, session: Session, **values: Any) -> "Record":
        """:meth:`build` then :meth:`save`; raise :class:`RecordInvalid` if invalid."""
        record = cls.build(**values)
        if not record.save(session):
            raise RecordInvalid(record, record.validation_errors())
        return record
