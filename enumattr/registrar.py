"""
enumattr.registrar
==================

Declares enumerated attributes on :class:`enumattr.record.Record` tables.

An enumerated attribute is a string column restricted to a fixed, ordered
list of values.  Registering one installs, on the model class:

* a ``<name>`` property that reads / assigns tokens (assignment does not save)
* ``_set_<name>(value, persist)``, the shared internal setter
* per value ``v``: ``is_v()``, ``set_v()`` (assign + save) and the scopes
  ``Model.v()`` / ``Model.not_v()``
* ``<NAMES>``, the declared values in order (``status`` → ``STATUSES``)
* an inclusion rule checked by ``Record.save``

Example
-------
>>> @enum_attribute("status", ["available", "canceled", "completed"])
... class Listing(Record, table=True):
...     id: Optional[int] = Field(default=None, primary_key=True)
...     status_raw: Optional[str] = raw_column("status")
>>> listing = Listing.create(session, status="available")
>>> listing.is_available(), listing.is_canceled()
(True, False)
>>> listing.set_canceled()          # saves, then calls status_changed("available", "canceled")
'canceled'
>>> session.exec(Listing.not_canceled()).all()
[]

If the model defines ``<name>_changed(old, new)`` it is called after every
change whose previous value was not ``None``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from enumattr.errors import EnumCollisionError, EnumDeclarationError
from enumattr.inflection import constant_name
from enumattr.record import Record
from enumattr.tokens import Token, raw_to_token, to_token, token_to_raw, tokens_of

logger = logging.getLogger(__name__)

__all__ = [
    "EnumAttribute",
    "ValueMembers",
    "register",
    "enum_attribute",
    "enum_attributes",
    "claimed_names",
]


@dataclass
class ValueMembers:
    """The members generated for one allowed value."""

    predicate: Callable[[Record], bool]
    mutator: Callable[[Record], Optional[Token]]
    scope: Callable[[type, Any], Any]
    negation: Optional[Callable[[type, Any], Any]] = None


@dataclass
class EnumAttribute:
    """One enumerated attribute declaration, resolved at class‑definition time."""

    name: str
    values: List[Any]
    tokens: List[Token]
    allow_nil: bool = False
    method_prefix: Optional[str] = None
    raw_key: str = ""
    members: Dict[Token, ValueMembers] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Generated names
    # ------------------------------------------------------------------
    @property
    def constant(self) -> str:
        return constant_name(self.name)

    @property
    def setter_name(self) -> str:
        return f"_set_{self.name}"

    @property
    def hook_name(self) -> str:
        return f"{self.name}_changed"

    def full_name(self, token: Token) -> str:
        prefix = f"{self.method_prefix}_" if self.method_prefix else ""
        return f"{prefix}{token}"

    def predicate_name(self, token: Token) -> str:
        return f"is_{self.full_name(token)}"

    def mutator_name(self, token: Token) -> str:
        return f"set_{self.full_name(token)}"

    def negation_name(self, token: Token) -> str:
        return f"not_{self.full_name(token)}"

    def claimed_names(self) -> Set[str]:
        """Every member name this declaration installed."""
        names = {self.name, self.setter_name}
        for token, members in self.members.items():
            names.update(
                (self.predicate_name(token), self.mutator_name(token), self.full_name(token))
            )
            if members.negation is not None:
                names.add(self.negation_name(token))
        return names


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
def enum_attributes(model: type) -> Dict[str, EnumAttribute]:
    """Enumerated attributes declared on *model* and its bases, by name."""
    found: Dict[str, EnumAttribute] = {}
    for klass in reversed(model.__mro__):
        found.update(vars(klass).get("__enum_attributes__", {}))
    return found


def claimed_names(model: type) -> Set[str]:
    """Member names already installed by enum declarations on *model*."""
    return {name for attr in enum_attributes(model).values() for name in attr.claimed_names()}


def _member_exists(model: type, name: str, claimed: Set[str]) -> bool:
    return name in claimed or model.member_exists(name)


# ---------------------------------------------------------------------------
# Pre‑flight checks
# ---------------------------------------------------------------------------
def _resolve_raw_key(model: type, name: str) -> str:
    if not (isinstance(model, type) and issubclass(model, Record)):
        raise EnumDeclarationError(f"{model!r} is not a Record subclass")
    table = getattr(model, "__table__", None)
    if table is None:
        raise EnumDeclarationError(f"{model.__name__} is not a table model")
    if name not in table.c:
        raise EnumDeclarationError(f"{model.__name__} has no column {name!r}")
    key = model.column_key(name)
    if key == name:
        raise EnumDeclarationError(
            f"column {name!r} of {model.__name__} must be mapped under another attribute, "
            f"e.g. {name}_raw: Optional[str] = raw_column({name!r})"
        )
    return key


def _check_collisions(model: type, attribute: EnumAttribute) -> None:
    """Fail before anything is installed if any generated name is taken."""
    claimed = claimed_names(model)
    seen: Set[str] = set()

    for name in (attribute.name, attribute.setter_name):
        if name in seen or _member_exists(model, name, claimed):
            raise EnumCollisionError(model, name)
        seen.add(name)

    for token in attribute.tokens:
        names = (
            attribute.predicate_name(token),
            attribute.mutator_name(token),
            attribute.full_name(token),
        )
        if any(name in seen or _member_exists(model, name, claimed) for name in names):
            raise EnumCollisionError(model, attribute.full_name(token))
        seen.update(names)


# ---------------------------------------------------------------------------
# Member builders
# ---------------------------------------------------------------------------
def _build_accessor(attribute: EnumAttribute) -> property:
    name = attribute.name
    setter_name = attribute.setter_name

    def getter(self):
        return raw_to_token(self.read_attribute(name))

    def setter(self, value):
        getattr(self, setter_name)(value, False)

    getter.__name__ = setter.__name__ = name
    return property(getter, setter, doc=f"One of {attribute.tokens!r}, or None.")


def _build_internal_setter(attribute: EnumAttribute) -> Callable:
    name = attribute.name
    hook_name = attribute.hook_name

    def set_value(self, value, persist):
        value = to_token(value)
        old = raw_to_token(self.read_attribute(name))
        if old == value:
            return value

        self.write_attribute(name, token_to_raw(value))
        logger.debug(f"{type(self).__name__}.{name}: {old!r} -> {value!r}")
        if persist:
            self.save()
        # null -> value is initialization, not a change
        if old is not None and callable(getattr(type(self), hook_name, None)):
            getattr(self, hook_name)(old, value)
        return value

    set_value.__name__ = attribute.setter_name
    return set_value


def _build_value_members(attribute: EnumAttribute, token: Token) -> ValueMembers:
    name = attribute.name
    setter_name = attribute.setter_name
    raw = token_to_raw(token)

    def predicate(self):
        return getattr(self, name) == token

    def mutator(self):
        return getattr(self, setter_name)(token, True)

    def scope(model, stmt):
        return stmt.where(model.__table__.c[name] == raw)

    predicate.__name__ = attribute.predicate_name(token)
    mutator.__name__ = attribute.mutator_name(token)
    scope.__name__ = attribute.full_name(token)
    return ValueMembers(predicate, mutator, scope)


def _build_negation(attribute: EnumAttribute, token: Token) -> Callable:
    name = attribute.name
    raw = token_to_raw(token)

    # bound to the owning table so a join with a same-named column stays unambiguous
    def negation(model, stmt):
        return stmt.where(model.__table__.c[name] != raw)

    negation.__name__ = attribute.negation_name(token)
    return negation


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def register(
    model: type,
    name: str,
    values: Iterable[Any] = (),
    *,
    allow_nil: bool = False,
    method_prefix: Optional[str] = None,
) -> EnumAttribute:
    """
    Declare *name* on *model* as an enumerated attribute over *values*.

    *values* is an ordered iterable of strings / ``Enum`` members, or an
    ``Enum`` subclass.  Raises :class:`EnumCollisionError` (installing
    nothing) if any generated member name already exists on *model*.
    """
    if not name or not name.isidentifier():
        raise EnumDeclarationError(f"invalid attribute name {name!r}")

    values = list(values)
    attribute = EnumAttribute(
        name=name,
        values=values,
        tokens=tokens_of(values),
        allow_nil=bool(allow_nil),
        method_prefix=method_prefix or None,
    )
    attribute.raw_key = _resolve_raw_key(model, name)
    _check_collisions(model, attribute)

    model.declare_validation(
        name, [token_to_raw(token) for token in attribute.tokens], attribute.allow_nil
    )
    setattr(model, attribute.constant, list(values))
    setattr(model, name, _build_accessor(attribute))
    setattr(model, attribute.setter_name, _build_internal_setter(attribute))

    for token in attribute.tokens:
        members = _build_value_members(attribute, token)
        setattr(model, members.predicate.__name__, members.predicate)
        setattr(model, members.mutator.__name__, members.mutator)
        model.declare_scope(attribute.full_name(token), members.scope)
        attribute.members[token] = members

    # positive scopes first, so `not_expired` the value is never replaced by
    # the negation of `expired`
    for token in attribute.tokens:
        negation_name = attribute.negation_name(token)
        if model.member_exists(negation_name):
            logger.debug(f"{model.__name__}.{negation_name} already defined, not overriding")
            continue
        negation = _build_negation(attribute, token)
        model.declare_scope(negation_name, negation)
        attribute.members[token].negation = negation

    registry = dict(vars(model).get("__enum_attributes__", {}))
    registry[name] = attribute
    setattr(model, "__enum_attributes__", registry)

    logger.debug(
        f"Registered enum attribute {model.__name__}.{name} "
        f"({len(attribute.tokens)} values, allow_nil={attribute.allow_nil})"
    )
    return attribute


def enum_attribute(name: str, values: Iterable[Any] = (), **options: Any) -> Callable[[type], type]:
    """Class decorator form of :func:`register`."""

    def decorate(model: type) -> type:
        register(model, name, values, **options)
        return model

    return decorate
