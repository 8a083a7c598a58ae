"""Visit key codec.

Visit documents are keyed by the time they happened:

    visit/<timestamp>/<nonce>

The timestamp is zero-padded to a fixed width so that plain string
comparison of keys gives the same order as comparing timestamps. The
nonce keeps two visits in the same millisecond from colliding.

A key with an empty nonce ("visit/000001700000000/") sorts before every
real key with that timestamp, and the same key followed by U+FFFF sorts
after all of them. Range queries use the pair as inclusive bounds.
"""
from __future__ import annotations

import uuid

from memex_lite.domain.types import Document, Timestamp, VisitId

VISIT_KEY_PREFIX = "visit/"
KEY_SUFFIX_MAX = "\uffff"

# 15 digits covers millisecond timestamps far past the year 30000
_TIMESTAMP_WIDTH = 15


def encode_visit_key(timestamp: Timestamp, nonce: str = "") -> VisitId:
    """Build the key for a visit at `timestamp`.

    With the default empty nonce the result is the lowest possible key
    for that millisecond.
    """
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise ValueError(f"Visit timestamp must be an int, got {timestamp!r}")
    if timestamp < 0:
        raise ValueError(f"Visit timestamp must be >= 0, got {timestamp}")
    return f"{VISIT_KEY_PREFIX}{timestamp:0{_TIMESTAMP_WIDTH}d}/{nonce}"


def visit_key_upper_bound(timestamp: Timestamp) -> VisitId:
    """Highest possible key for a visit at `timestamp`."""
    return encode_visit_key(timestamp) + KEY_SUFFIX_MAX


def visit_namespace_bounds() -> tuple[str, str]:
    """(low, high) keys enclosing every visit key."""
    return VISIT_KEY_PREFIX, VISIT_KEY_PREFIX + KEY_SUFFIX_MAX


def new_visit_id(timestamp: Timestamp) -> VisitId:
    """Fresh key for a visit, with a random nonce."""
    return encode_visit_key(timestamp, nonce=uuid.uuid4().hex[:12])


def decode_visit_key(key: VisitId) -> Timestamp:
    """Recover the timestamp from a visit key.

    Raises ValueError if the key is not a visit key.
    """
    if not key.startswith(VISIT_KEY_PREFIX):
        raise ValueError(f"Not a visit key: {key!r}")
    ts_part, sep, _nonce = key[len(VISIT_KEY_PREFIX):].partition("/")
    if not sep or not ts_part.isdigit():
        raise ValueError(f"Malformed visit key: {key!r}")
    return int(ts_part)


def get_timestamp(doc: Document) -> Timestamp:
    """Timestamp of a visit document, read from its key."""
    return decode_visit_key(doc["_id"])
