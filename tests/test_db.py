"""
tests/test_db.py
================

Engine / session helpers in enumattr.db
"""

from sqlalchemy import inspect
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from enumattr.db import SessionLocal, create_all, make_engine
from sample_models import Listing


def test_memory_engine_uses_static_pool():
    engine = make_engine("sqlite://")
    assert isinstance(engine.pool, StaticPool)


def test_create_all_creates_sample_tables():
    engine = make_engine("sqlite://")
    create_all(engine)
    tables = set(inspect(engine).get_table_names())
    assert {"listings", "subscriptions", "translations", "documents"} <= tables


def test_session_local_binds_engine(engine):
    with SessionLocal(engine) as s:
        assert isinstance(s, Session)
        Listing.create(s, status="available")
    with SessionLocal(engine) as s2:
        (listing,) = s2.exec(Listing.available()).all()
        assert listing.status == "available"
