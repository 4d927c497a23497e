"""Tests for condition badge resolution and slugs."""

from __future__ import annotations

import pytest

from app.domain.catalog import Condition
from app.domain.conditions import (
    index_conditions,
    lookup_condition,
    min_display_order,
    resolve_badges,
    slugify_condition_name,
)


@pytest.fixture()
def conditions():
    return [
        Condition(id=1, name="Healthy", slug="healthy", display_order=3),
        Condition(id=2, name="Needs Treatment", slug="needs-treatment", display_order=1),
    ]


def test_dangling_ids_are_skipped_in_input_order(conditions):
    badges = resolve_badges([2, 1, 99], conditions)
    assert [c.id for c in badges] == [2, 1]


def test_badge_order_follows_report_not_display_order(conditions):
    badges = resolve_badges([1, 2], conditions)
    assert [c.name for c in badges] == ["Healthy", "Needs Treatment"]


def test_no_ids_means_no_badges(conditions):
    assert resolve_badges(None, conditions) == []
    assert resolve_badges([], conditions) == []


def test_lookup_returns_none_for_missing(conditions):
    by_id = index_conditions(conditions)
    assert lookup_condition(by_id, 1).name == "Healthy"
    assert lookup_condition(by_id, 42) is None


def test_min_display_order(conditions):
    by_id = index_conditions(conditions)
    assert min_display_order([1, 2], by_id) == 1
    assert min_display_order([1, 99], by_id) == 3
    assert min_display_order([99], by_id) is None


def test_badge_payload(conditions):
    assert conditions[0].to_badge() == {"id": 1, "name": "Healthy", "color": "#10B981", "icon": "✅"}


@pytest.mark.parametrize(
    "name,slug",
    [
        ("Healthy", "healthy"),
        ("Needs  Treatment", "needs-treatment"),
        ("  Pest Damage! ", "pest-damage"),
        ("Fruiting 🍊", "fruiting-"),
    ],
)
def test_slugify(name, slug):
    assert slugify_condition_name(name) == slug
