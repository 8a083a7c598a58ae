"""Shared fixtures for document store tests."""
from __future__ import annotations

import pytest

from memex_lite.domain.documents import make_page_doc, make_redirect_doc, make_visit_doc
from memex_lite.domain.keys import encode_visit_key
from memex_lite.store.memory_store import MemoryDocumentStore


def _visit(ts: int, page: str, nonce: str = "n") -> dict:
    return make_visit_doc(ts, page, visit_id=encode_visit_key(ts, nonce=nonce))


@pytest.fixture()
def documents() -> list[dict]:
    """A few pages (one redirecting) and visits at 100..500 ms."""
    return [
        make_page_doc("page/a", "https://a.example", "A"),
        make_page_doc("page/b", "https://b.example", "B"),
        make_redirect_doc("page/old-a", "http://a.example", "page/a"),
        make_redirect_doc("page/older-a", "http://www.a.example", "page/old-a"),
        _visit(100, "page/a"),
        _visit(200, "page/b"),
        _visit(300, "page/a"),
        _visit(300, "page/b", nonce="m"),
        _visit(400, "page/old-a"),
        _visit(500, "page/b"),
    ]


@pytest.fixture()
def store(documents) -> MemoryDocumentStore:
    return MemoryDocumentStore(documents)
