"""Document store contract and the in-memory implementation.

The search layer depends only on DocumentStore; MemoryDocumentStore is
the implementation used by the tests and the profiling harness.
"""
from memex_lite.store.base import DocumentStore
from memex_lite.store.errors import (
    DocumentNotFound,
    RedirectLoopError,
    StoreError,
    UnsupportedSelector,
)
from memex_lite.store.memory_store import MAX_REDIRECT_HOPS, MemoryDocumentStore
from memex_lite.store.queries import DEFAULT_WINDOW_MS, DateRange, SortField, now_ms

__all__ = [
    "DocumentStore",
    "DocumentNotFound",
    "RedirectLoopError",
    "StoreError",
    "UnsupportedSelector",
    "MAX_REDIRECT_HOPS",
    "MemoryDocumentStore",
    "DEFAULT_WINDOW_MS",
    "DateRange",
    "SortField",
    "now_ms",
]
