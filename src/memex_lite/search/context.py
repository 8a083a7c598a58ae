"""Context expander: surround each visit with the visits just before and after it.

For every row in a result set, two key-range scans pick up its
neighbours in time:

    preceding   descending from the last key at t-1 down to the first
                key at t - max_preceding_time, at most max_preceding_visits
    succeeding  ascending from the first key at t+1 up to the last key
                at t + max_succeeding_time, at most max_succeeding_visits

The one-millisecond offsets keep the row itself out of its own context;
the store has no exclusive-start option. Each row's neighbours get
their pages joined and are flagged is_contextual_result.

Fan-out / fan-in:
    One coroutine per input row, all started together with
    asyncio.gather(), at most max_concurrency of them inside the store
    at once (an asyncio.Semaphore). The first failure fails the whole
    call; there is no partial result.

Merge:
    original rows, then each row's context batch in input order, are
    merged by visit id with the first copy winning. Original rows thus
    always beat a contextual duplicate. The survivors are sorted newest
    first. Neither step depends on which fetch finished first, so the
    output is the same for any interleaving.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass

from memex_lite.domain.keys import encode_visit_key, get_timestamp, visit_key_upper_bound
from memex_lite.domain.results import ResultSet, Row
from memex_lite.search.join import insert_pages_into_visits
from memex_lite.search.merge import mark_contextual, sort_by_recency, union_by_id
from memex_lite.store.base import DocumentStore

log = logging.getLogger(__name__)

_TWENTY_MINUTES_MS = 20 * 60 * 1000


@dataclass(frozen=True, slots=True)
class ContextSettings:
    """How much context to fetch around each visit.

    Counts are numbers of visits; times are milliseconds.
    max_concurrency caps how many rows fetch context at the same time;
    None lets every row go at once.
    """
    max_preceding_visits: int = 2
    max_succeeding_visits: int = 2
    max_preceding_time: int = _TWENTY_MINUTES_MS
    max_succeeding_time: int = _TWENTY_MINUTES_MS
    max_concurrency: int | None = 8

    def __post_init__(self) -> None:
        for name in (
            "max_preceding_visits", "max_succeeding_visits",
            "max_preceding_time", "max_succeeding_time",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")
        if self.max_concurrency is not None and self.max_concurrency < 1:
            raise ValueError(
                f"max_concurrency must be >= 1 or None, got {self.max_concurrency}"
            )


async def _preceding(store: DocumentStore, ts: int, settings: ContextSettings) -> tuple[Row, ...]:
    if settings.max_preceding_visits == 0 or ts < 1:
        return ()
    result = await store.range_scan(
        visit_key_upper_bound(ts - 1),
        encode_visit_key(max(ts - settings.max_preceding_time, 0)),
        descending=True,
        limit=settings.max_preceding_visits,
    )
    return result.rows


async def _succeeding(store: DocumentStore, ts: int, settings: ContextSettings) -> tuple[Row, ...]:
    if settings.max_succeeding_visits == 0:
        return ()
    result = await store.range_scan(
        encode_visit_key(ts + 1),
        visit_key_upper_bound(ts + settings.max_succeeding_time),
        limit=settings.max_succeeding_visits,
    )
    return result.rows


async def fetch_context(
    store: DocumentStore,
    row: Row,
    settings: ContextSettings,
) -> ResultSet:
    """Neighbours of one visit, pages joined, flagged as contextual."""
    ts = get_timestamp(row.doc)
    preceding = await _preceding(store, ts, settings)
    succeeding = await _succeeding(store, ts, settings)
    # Reversing makes the batch roughly newest first; the final sort
    # in add_visits_context() fixes the order anyway.
    batch = ResultSet(rows=preceding + tuple(reversed(succeeding)))
    if not batch.rows:
        return batch
    joined = await insert_pages_into_visits(store, batch)
    return mark_contextual(joined)


async def add_visits_context(
    store: DocumentStore,
    visits: ResultSet,
    settings: ContextSettings | None = None,
) -> ResultSet:
    """Expand `visits` with neighbouring visits, deduplicated and time-sorted."""
    if not visits.rows:
        return ResultSet()
    settings = settings or ContextSettings()

    if settings.max_concurrency is None:
        gate: contextlib.AbstractAsyncContextManager = contextlib.nullcontext()
    else:
        gate = asyncio.Semaphore(settings.max_concurrency)

    async def _gated(row: Row) -> ResultSet:
        async with gate:
            return await fetch_context(store, row, settings)

    batches = await asyncio.gather(*(_gated(row) for row in visits.rows))

    merged = union_by_id(visits.rows, *(batch.rows for batch in batches))
    log.debug(
        "context: %d rows + %d fetched -> %d merged",
        len(visits), sum(len(b) for b in batches), len(merged),
    )
    return ResultSet(rows=tuple(sort_by_recency(merged)))
