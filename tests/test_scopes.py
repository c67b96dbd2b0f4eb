"""
tests/test_scopes.py
====================

Positive and negation scopes generated by enumattr.registrar, alone,
chained, and composed with joins against a table that has a column of the
same name.
"""

from sqlmodel import select

from sample_models import Listing, NullableSubscription, Subscription, Translation


def _ids(session, stmt):
    return [row.id for row in session.exec(stmt).all()]


def test_positive_scope_returns_matching_records(session, records):
    assert _ids(session, Listing.available()) == [records.available.id]
    assert _ids(session, Listing.canceled()) == [records.canceled.id]


def test_positive_scope_with_join_filters_owning_table(session, records):
    stmt = select(Subscription).join(Listing)
    assert _ids(session, Subscription.active(stmt)) == [records.active.id]


def test_prefixed_scopes(session, records):
    assert _ids(session, Translation.loc_en()) == [records.en.id]
    assert _ids(session, Translation.loc_es()) == [records.es.id]
    assert set(_ids(session, Translation.not_loc_en())) == {records.es.id, records.fr.id}


def test_negation_scope_excludes_value(session, records):
    ids = set(_ids(session, Listing.not_available()))
    assert ids == {records.canceled.id, records.completed.id}


def test_negation_scope_with_join(session, records):
    stmt = select(Subscription).join(Listing)
    ids = set(_ids(session, Subscription.not_active(stmt)))
    assert ids == {records.expired.id, records.not_expired.id}


def test_negation_does_not_override_positive_scope(session, records):
    """`not_expired` is a declared value, so it must select that value only."""
    assert _ids(session, Subscription.not_expired()) == [records.not_expired.id]
    ids = set(_ids(session, Subscription.not_not_expired()))
    assert ids == {records.active.id, records.expired.id}


def test_negation_filter_is_table_qualified():
    sql = str(Subscription.not_active(select(Subscription).join(Listing)).compile())
    assert "subscriptions.status !=" in sql


def test_scopes_chain(session, records):
    stmt = Listing.not_available(Listing.not_canceled())
    assert _ids(session, stmt) == [records.completed.id]


def test_scoped_looks_up_registry(session, records):
    assert _ids(session, Listing.scoped("completed")) == [records.completed.id]
    assert set(Listing.scopes()) == {
        "available", "canceled", "completed",
        "not_available", "not_canceled", "not_completed",
    }


def test_negation_skips_null_rows(session):
    """SQL `!=` never matches NULL, so unset records are in no negation scope."""
    unset = NullableSubscription.create(session)
    active = NullableSubscription.create(session, status="active")
    expired = NullableSubscription.create(session, status="expired")

    assert _ids(session, NullableSubscription.not_active()) == [expired.id]
    assert unset.id not in _ids(session, NullableSubscription.not_expired())
    assert _ids(session, NullableSubscription.active()) == [active.id]
