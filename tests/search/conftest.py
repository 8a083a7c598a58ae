"""Shared fixtures for search tests.

The history used throughout:

    offset  visit   page
    0 min   v1      alpha
    1 min   v2      beta
    2 min   v3      gamma
    3 min   v4      alpha
    60 min  v5      delta       (alone: > 20 min from any other visit)
    90 min  v6      beta
    91 min  v7      old         (old redirects to alpha)
"""
from __future__ import annotations

import pytest

from memex_lite.domain.documents import make_page_doc, make_redirect_doc, make_visit_doc
from memex_lite.domain.keys import encode_visit_key
from memex_lite.store.memory_store import MemoryDocumentStore

T0 = 1_700_000_000_000
MINUTE = 60_000

VISIT_PLAN = {
    "v1": (0, "page/alpha"),
    "v2": (1, "page/beta"),
    "v3": (2, "page/gamma"),
    "v4": (3, "page/alpha"),
    "v5": (60, "page/delta"),
    "v6": (90, "page/beta"),
    "v7": (91, "page/old"),
}


def _pages() -> list[dict]:
    return [
        make_page_doc("page/alpha", "https://alpha.example", "Alpha"),
        make_page_doc("page/beta", "https://beta.example", "Beta"),
        make_page_doc("page/gamma", "https://gamma.example", "Gamma"),
        make_page_doc("page/delta", "https://delta.example", "Delta"),
        make_redirect_doc("page/old", "http://alpha.example", "page/alpha"),
    ]


def _visits() -> dict[str, dict]:
    return {
        name: make_visit_doc(
            T0 + offset * MINUTE,
            page,
            visit_id=encode_visit_key(T0 + offset * MINUTE, nonce=name),
        )
        for name, (offset, page) in VISIT_PLAN.items()
    }


class RecordingStore(MemoryDocumentStore):
    """MemoryDocumentStore that records every query it answers."""

    def __init__(self, documents=None) -> None:
        super().__init__(documents)
        self.calls: list[tuple[str, tuple]] = []

    async def find(self, selector, sort=None, limit=None):
        self.calls.append(("find", (selector, sort, limit)))
        return await super().find(selector, sort, limit)

    async def range_scan(self, start_key, end_key, *, descending=False, limit=None):
        self.calls.append(("range_scan", (start_key, end_key, descending, limit)))
        return await super().range_scan(
            start_key, end_key, descending=descending, limit=limit,
        )

    async def get_many(self, ids, *, follow_redirects=False):
        self.calls.append(("get_many", (tuple(ids), follow_redirects)))
        return await super().get_many(ids, follow_redirects=follow_redirects)


@pytest.fixture()
def visits() -> dict[str, dict]:
    """Visit documents by name (v1..v7)."""
    return _visits()


@pytest.fixture()
def visit_ids(visits) -> dict[str, str]:
    return {name: doc["_id"] for name, doc in visits.items()}


@pytest.fixture()
def documents(visits) -> list[dict]:
    """Every page and visit document in the history."""
    return _pages() + list(visits.values())


@pytest.fixture()
def store(documents) -> RecordingStore:
    return RecordingStore(documents)


@pytest.fixture()
def empty_store() -> RecordingStore:
    return RecordingStore()
