"""Tests for get_last_visits."""
from __future__ import annotations

import pytest

from memex_lite.domain.keys import get_timestamp
from memex_lite.search.visits import get_last_visits
from memex_lite.store.errors import StoreError
from memex_lite.store.memory_store import MemoryDocumentStore


@pytest.mark.asyncio
async def test_returns_all_visits_newest_first(store, visit_ids):
    result = await get_last_visits(store)
    assert result.ids() == [visit_ids[f"v{i}"] for i in range(7, 0, -1)]


@pytest.mark.asyncio
async def test_limit(store, visit_ids):
    result = await get_last_visits(store, limit=3)
    assert result.ids() == [visit_ids["v7"], visit_ids["v6"], visit_ids["v5"]]


@pytest.mark.asyncio
async def test_recency_ordering(store):
    result = await get_last_visits(store)
    stamps = [get_timestamp(row.doc) for row in result]
    assert all(a >= b for a, b in zip(stamps, stamps[1:]))


@pytest.mark.asyncio
async def test_pages_joined_with_redirects_followed(store):
    result = await get_last_visits(store, limit=2)
    newest, second = result.rows
    assert newest.doc["page"]["_id"] == "page/alpha"   # v7 visited page/old
    assert newest.doc["page"]["url"] == "https://alpha.example"
    assert second.doc["page"]["title"] == "Beta"
    assert not any(row.is_contextual_result for row in result)


@pytest.mark.asyncio
async def test_only_visit_documents_are_returned(store):
    result = await get_last_visits(store)
    assert all(row.id.startswith("visit/") for row in result)


@pytest.mark.asyncio
async def test_one_find_then_one_positional_lookup(store):
    await get_last_visits(store, limit=2)
    kinds = [kind for kind, _ in store.calls]
    assert kinds == ["find", "get_many"]
    _, (ids, follow_redirects) = store.calls[1]
    assert ids == ("page/old", "page/beta")
    assert follow_redirects is True


@pytest.mark.asyncio
async def test_empty_store(empty_store):
    result = await get_last_visits(empty_store, limit=10)
    assert len(result) == 0


class _BrokenStore(MemoryDocumentStore):
    async def find(self, selector, sort=None, limit=None):
        raise StoreError("index unavailable")


@pytest.mark.asyncio
async def test_store_error_propagates_unchanged():
    with pytest.raises(StoreError, match="index unavailable"):
        await get_last_visits(_BrokenStore())
