"""Tests for selector evaluation and query objects."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from memex_lite.store.errors import UnsupportedSelector
from memex_lite.store.queries import (
    DEFAULT_WINDOW_MS,
    DateRange,
    get_field,
    is_missing,
    key_bounds,
    matches,
)

DOC = {"_id": "visit/000000000000100/n", "page": {"_id": "page/a"}, "n": 3, "none": None}


def test_get_field_dotted():
    assert get_field(DOC, "page._id") == "page/a"


def test_get_field_missing_vs_none():
    assert is_missing(get_field(DOC, "page.url"))
    assert is_missing(get_field(DOC, "n.deeper"))
    assert get_field(DOC, "none") is None
    assert not is_missing(get_field(DOC, "none"))


def test_literal_equality():
    assert matches({"page._id": "page/a"}, DOC)
    assert not matches({"page._id": "page/b"}, DOC)


def test_literal_equality_on_missing_field():
    assert not matches({"title": None}, DOC)


def test_in_operator():
    assert matches({"page._id": {"$in": ["page/b", "page/a"]}}, DOC)
    assert not matches({"page._id": {"$in": []}}, DOC)


def test_in_requires_a_list():
    with pytest.raises(UnsupportedSelector, match=r"\$in expects a list"):
        matches({"page._id": {"$in": "page/a"}}, DOC)


@pytest.mark.parametrize("condition, expected", [
    ({"$gte": 3}, True),
    ({"$gt": 3}, False),
    ({"$lte": 3}, True),
    ({"$lt": 3}, False),
    ({"$gte": 1, "$lte": 5}, True),
    ({"$gte": 4, "$lte": 5}, False),
    ({"$eq": 3}, True),
])
def test_range_operators(condition, expected):
    assert matches({"n": condition}, DOC) is expected


def test_range_across_types_never_matches():
    assert not matches({"n": {"$gte": "a"}}, DOC)


def test_operator_on_missing_field_never_matches():
    assert not matches({"title": {"$gte": ""}}, DOC)


def test_unknown_operator_raises():
    with pytest.raises(UnsupportedSelector, match="Unsupported selector operator"):
        matches({"n": {"$ne": 3}}, DOC)


def test_all_clauses_must_match():
    assert matches({"n": 3, "page._id": "page/a"}, DOC)
    assert not matches({"n": 3, "page._id": "page/b"}, DOC)


# ---------------------------------------------------------------------------
# key_bounds
# ---------------------------------------------------------------------------

def test_key_bounds_unbounded_without_id_clause():
    assert key_bounds({"page._id": "page/a"}) == (None, None)


def test_key_bounds_range():
    assert key_bounds({"_id": {"$gte": "a", "$lte": "m"}}) == ("a", "m")
    assert key_bounds({"_id": {"$gt": "a"}}) == ("a", None)


def test_key_bounds_equality_and_membership():
    assert key_bounds({"_id": "k"}) == ("k", "k")
    assert key_bounds({"_id": {"$eq": "k"}}) == ("k", "k")
    assert key_bounds({"_id": {"$in": ["q", "c", "x"]}}) == ("c", "x")


# ---------------------------------------------------------------------------
# DateRange
# ---------------------------------------------------------------------------

NOW = 1_700_000_000_000


def test_date_range_defaults():
    assert DateRange().resolve(NOW) == (NOW - DEFAULT_WINDOW_MS, NOW)


def test_date_range_one_end_set():
    assert DateRange(start=5).resolve(NOW) == (5, NOW)
    assert DateRange(end=NOW - 10).resolve(NOW) == (NOW - DEFAULT_WINDOW_MS, NOW - 10)


def test_default_window_is_one_hundred_days():
    assert DEFAULT_WINDOW_MS == 100 * 86_400_000


def test_inverted_range_is_empty_not_an_error():
    window = DateRange(start=200, end=100)
    assert window.is_empty(NOW)
    assert not window.contains(150, NOW)


def test_contains_boundaries():
    window = DateRange(start=100, end=200)
    assert window.contains(100, NOW)
    assert window.contains(200, NOW)
    assert not window.contains(99, NOW)
    assert not window.contains(201, NOW)


def test_from_datetimes():
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    window = DateRange.from_datetimes(start=start)
    assert window.start == 1_704_067_200_000
    assert window.end is None


def test_date_range_is_frozen():
    window = DateRange(start=1, end=2)
    with pytest.raises(AttributeError):
        window.start = 5  # type: ignore[misc]
