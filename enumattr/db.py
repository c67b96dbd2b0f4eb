"""
enumattr.db
===========

SQLModel engine and session plumbing for enumerated‑attribute records.

This module exposes:

* ``engine`` – a global engine built from :pydata:`enumattr.settings.settings`
* ``make_engine(url)`` – build another engine (tests use in‑memory SQLite)
* ``SessionLocal()`` – a session factory used via ``with SessionLocal() as s:``
* ``create_all()`` – helper to create tables for every imported model
"""

from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from enumattr.settings import settings

logger = logging.getLogger(__name__)


def make_engine(url: str | None = None, echo: bool | None = None) -> Engine:
    """
    Build an engine for *url* (defaults to ``settings.db_url``).

    In‑memory SQLite URLs get a ``StaticPool`` so every session sees the
    same database.
    """
    url = url or settings.db_url
    echo = settings.db_echo if echo is None else echo
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=echo)


# ---------------------------------------------------------------------------
# Engine + session factory
# ---------------------------------------------------------------------------
engine = make_engine()


def SessionLocal(bind: Engine | None = None) -> Session:  # noqa: N802 (factory camel‑case)
    """Return a new Session bound to *bind* or the global engine."""
    return Session(bind or engine)


# ---------------------------------------------------------------------------
# Utility: create tables
# ---------------------------------------------------------------------------
def create_all(bind: Engine | None = None) -> None:
    """Create all tables for imported SQLModel subclasses."""
    bind = bind or engine
    logger.info(f"Creating {len(SQLModel.metadata.tables)} table(s) on {bind.url}")
    SQLModel.metadata.create_all(bind)


# ---------------------------------------------------------------------------
# Lightweight CLI
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    """
    Schema bootstrap helper.

    Examples
    --------
    $ python -m enumattr.db --create --models myapp.models
    """
    import argparse
    import importlib
    import textwrap

    parser = argparse.ArgumentParser(
        prog="python -m enumattr.db",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            enumattr DB utilities
            ---------------------
            --create   Create all SQLModel tables (safe if they already exist)
            --models   Module(s) declaring the record models to create
            """
        ),
    )
    parser.add_argument("--create", action="store_true", help="create tables")
    parser.add_argument("--models", action="append", default=[], help="module to import first")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)

    for module in args.models:
        importlib.import_module(module)

    if args.create:
        create_all()
        print(f"✅ {settings.db_url} schema initialised")
