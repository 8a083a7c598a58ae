"""Query objects and selector evaluation for the document store.

SortField names a field and a direction. DateRange is the user's
selected time window: either end may be unset, in which case the
default window (the last 100 days, up to now) fills it in at query time.

matches() evaluates a Mango-style selector against a document:

    {"page._id": {"$in": [...]}, "_id": {"$gte": lo, "$lte": hi}}

Unknown operators raise UnsupportedSelector rather than being ignored.
"""
from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from memex_lite.domain.types import Document, Timestamp
from memex_lite.store.errors import UnsupportedSelector

DEFAULT_WINDOW_MS = 100 * 24 * 60 * 60 * 1000   # 100 days

_MISSING = object()

_RANGE_OPERATORS = ("$gte", "$gt", "$lte", "$lt")


def now_ms() -> Timestamp:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


@dataclass(frozen=True, slots=True)
class SortField:
    field: str
    descending: bool = False


@dataclass(frozen=True, slots=True)
class DateRange:
    """Closed time window [start, end] in epoch milliseconds.

    Unlike most ranges, start > end is allowed: the window is simply
    empty and queries over it return nothing.
    """
    start: Timestamp | None = None
    end: Timestamp | None = None

    @classmethod
    def from_datetimes(
        cls,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> DateRange:
        """Build a range from (timezone-aware) datetimes, e.g. a date picker."""
        return cls(
            start=int(start.timestamp() * 1000) if start is not None else None,
            end=int(end.timestamp() * 1000) if end is not None else None,
        )

    def resolve(self, now: Timestamp) -> tuple[Timestamp, Timestamp]:
        """Fill unset ends with the defaults relative to `now`."""
        start = self.start if self.start is not None else now - DEFAULT_WINDOW_MS
        end = self.end if self.end is not None else now
        return start, end

    def is_empty(self, now: Timestamp) -> bool:
        start, end = self.resolve(now)
        return start > end

    def contains(self, timestamp: Timestamp, now: Timestamp) -> bool:
        """Check whether a timestamp falls within the resolved window (inclusive)."""
        start, end = self.resolve(now)
        return start <= timestamp <= end


def get_field(doc: Mapping[str, Any], path: str) -> Any:
    """Read a dotted field path from a nested document.

    Returns the module-private _MISSING sentinel when any step is absent,
    so a stored None is distinguishable from no value at all.
    """
    value: Any = doc
    for part in path.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return _MISSING
        value = value[part]
    return value


def is_missing(value: Any) -> bool:
    return value is _MISSING


def _compare(op: str, value: Any, arg: Any) -> bool:
    try:
        if op == "$gte":
            return value >= arg
        if op == "$gt":
            return value > arg
        if op == "$lte":
            return value <= arg
        return value < arg
    except TypeError:
        # values of different types never satisfy a range bound
        return False


def _check(op: str, value: Any, arg: Any) -> bool:
    if op == "$eq":
        return value == arg
    if op == "$in":
        if not isinstance(arg, (list, tuple, set, frozenset)):
            raise UnsupportedSelector(f"$in expects a list, got {type(arg).__name__}")
        return value in arg
    if op in _RANGE_OPERATORS:
        return _compare(op, value, arg)
    raise UnsupportedSelector(f"Unsupported selector operator: {op}")


def matches(selector: Mapping[str, Any], doc: Document) -> bool:
    """True if `doc` satisfies every clause of `selector`."""
    for path, condition in selector.items():
        value = get_field(doc, path)
        if isinstance(condition, Mapping):
            if value is _MISSING:
                return False
            for op, arg in condition.items():
                if not _check(op, value, arg):
                    return False
        elif value is _MISSING or value != condition:
            return False
    return True


def key_bounds(selector: Mapping[str, Any]) -> tuple[str | None, str | None]:
    """Inclusive (low, high) bounds on _id implied by a selector.

    Used to narrow the candidate keys before filtering. The bounds may be
    looser than the selector (a $gt is treated like $gte); matches() still
    has the final word. None means unbounded on that side.
    """
    condition = selector.get("_id", _MISSING)
    if condition is _MISSING:
        return None, None
    if not isinstance(condition, Mapping):
        return condition, condition

    low: str | None = None
    high: str | None = None
    for op, arg in condition.items():
        if op in ("$gte", "$gt"):
            low = arg if low is None else max(low, arg)
        elif op in ("$lte", "$lt"):
            high = arg if high is None else min(high, arg)
        elif op == "$eq":
            low = high = arg
        elif op == "$in" and arg:
            low, high = min(arg), max(arg)
    return low, high
