"""
tests/test_inflection.py
========================

Unit tests for enumattr.inflection
"""

from enumattr.inflection import constant_name, pluralize


def test_regular_words():
    assert pluralize("locale") == "locales"
    assert pluralize("phase") == "phases"


def test_sibilant_endings_add_es():
    assert pluralize("status") == "statuses"
    assert pluralize("box") == "boxes"
    assert pluralize("batch") == "batches"


def test_y_endings():
    assert pluralize("priority") == "priorities"
    assert pluralize("day") == "days"


def test_f_and_fe_endings():
    assert pluralize("shelf") == "shelves"
    assert pluralize("life") == "lives"
    assert pluralize("roof") == "roofs"


def test_irregular_and_uncountable():
    assert pluralize("person") == "people"
    assert pluralize("criterion") == "criteria"
    assert pluralize("series") == "series"


def test_snake_case_inflects_last_segment_only():
    assert pluralize("order_status") == "order_statuses"
    assert pluralize("billing_category") == "billing_categories"


def test_empty_string():
    assert pluralize("") == ""


def test_constant_name_is_upper_plural():
    assert constant_name("status") == "STATUSES"
    assert constant_name("order_category") == "ORDER_CATEGORIES"
