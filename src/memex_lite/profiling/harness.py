"""Profiling harness for the search pipeline.

Builds an in-memory store from a generated history and times the three
search operations in the order an overview screen would run them:

  1. get_last_visits(limit)            -- the default "recent" listing
  2. find_visits_to_pages(...)         -- visits to the pages seen in (1),
                                          over the whole generated span
  3. add_visits_context(...)           -- neighbours around every hit of (2)

The harness is meant to be profiled, not to be fast.
"""
from __future__ import annotations

import time
from dataclasses import dataclass

from memex_lite.profiling.load_generator import HistoryGenerator
from memex_lite.search.context import ContextSettings, add_visits_context
from memex_lite.search.visits import find_visits_to_pages, get_last_visits
from memex_lite.store.memory_store import MemoryDocumentStore
from memex_lite.store.queries import DateRange


@dataclass(slots=True)
class QueryTimings:
    """Timing results from a single harness run."""
    documents: int
    recent_rows: int
    recent_time_ms: float
    temporal_rows: int
    temporal_time_ms: float
    context_rows: int
    contextual_rows: int
    context_time_ms: float
    total_time_ms: float


def _elapsed_ms(start_ns: int) -> float:
    return (time.perf_counter_ns() - start_ns) / 1_000_000


async def run_queries(
    num_pages: int = 500,
    num_visits: int = 10_000,
    limit: int = 50,
    target_pages: int = 10,
    seed: int = 42,
    settings: ContextSettings | None = None,
) -> QueryTimings:
    """Generate a history, run the search pipeline over it, return timings."""
    gen = HistoryGenerator(num_pages=num_pages, num_visits=num_visits, seed=seed)
    store = MemoryDocumentStore()
    gen.populate(store)

    total_start = time.perf_counter_ns()

    start = time.perf_counter_ns()
    recent = await get_last_visits(store, limit=limit)
    recent_ms = _elapsed_ms(start)

    # Target the pages the recent visits point at, as stored (not redirected)
    page_ids = list(dict.fromkeys(
        row.doc["page"]["_id"] for row in recent.rows
    ))[:target_pages]
    pages = await store.get_many(page_ids)

    start = time.perf_counter_ns()
    temporal = await find_visits_to_pages(
        store,
        pages,
        DateRange(start=gen.start_ms, end=gen.end_ms),
        now=gen.end_ms,
    )
    temporal_ms = _elapsed_ms(start)

    start = time.perf_counter_ns()
    expanded = await add_visits_context(store, temporal, settings)
    context_ms = _elapsed_ms(start)

    return QueryTimings(
        documents=store.count(),
        recent_rows=len(recent),
        recent_time_ms=recent_ms,
        temporal_rows=len(temporal),
        temporal_time_ms=temporal_ms,
        context_rows=len(expanded),
        contextual_rows=sum(row.is_contextual_result for row in expanded.rows),
        context_time_ms=context_ms,
        total_time_ms=_elapsed_ms(total_start),
    )
