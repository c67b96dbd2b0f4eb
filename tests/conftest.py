"""
Pytest configuration: make sure `import enumattr` works regardless of
where pytest is invoked, and give every test a fresh in‑memory database.
"""

import sys
from pathlib import Path
from types import SimpleNamespace

# /path/to/project/tests -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent
TESTS_DIR = Path(__file__).resolve().parent

for path in (PROJECT_ROOT, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import pytest  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from enumattr.db import make_engine  # noqa: E402
from sample_models import Listing, Subscription, Translation  # noqa: E402


@pytest.fixture
def engine():
    """In‑memory SQLite with every sample table created."""
    engine = make_engine("sqlite://", echo=False)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def records(session):
    """A handful of saved records across the sample tables."""
    available = Listing.create(session, status="available")
    canceled = Listing.create(session, status="canceled")
    completed = Listing.create(session, status="completed")

    return SimpleNamespace(
        available=available,
        canceled=canceled,
        completed=completed,
        active=Subscription.create(session, status="active", listing_id=available.id),
        expired=Subscription.create(session, status="expired", listing_id=canceled.id),
        not_expired=Subscription.create(session, status="not_expired", listing_id=canceled.id),
        en=Translation.create(session, locale="en"),
        es=Translation.create(session, locale="es"),
        fr=Translation.create(session, locale="fr"),
    )
