"""In-memory document store: a sorted key index plus a document map.

Layout:
    _keys:  list[str]             every document id, kept sorted
    _docs:  dict[str, Document]   id -> document

Because visit ids encode their timestamp, a sorted id list doubles as a
time index: range scans and _id-bounded finds bisect to the boundaries
in O(log n) and then walk only the k matching keys. Everything else
(page._id membership, other fields) is a filter over those candidates.

Documents are deep-copied on the way in and on the way out, so neither
the caller nor the search layer can change what the store holds.

This is the store the tests and the profiling harness run against. A
production adapter (CouchDB, SQLite, ...) implements the same
DocumentStore interface.
"""
from __future__ import annotations

import bisect
import copy
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from memex_lite.domain.results import ResultSet, Row
from memex_lite.domain.types import Document
from memex_lite.store.base import DocumentStore
from memex_lite.store.errors import DocumentNotFound, RedirectLoopError
from memex_lite.store.queries import SortField, get_field, is_missing, key_bounds, matches

log = logging.getLogger(__name__)

# Longest see_instead chain get_many() will follow before giving up
MAX_REDIRECT_HOPS = 10


class MemoryDocumentStore(DocumentStore):
    """Dict-backed store with a bisectable, sorted id index.

    INVARIANT: _keys is sorted and holds exactly the keys of _docs.
    """

    __slots__ = ("_keys", "_docs")

    def __init__(self, documents: Iterable[Document] | None = None) -> None:
        self._keys: list[str] = []
        self._docs: dict[str, Document] = {}
        if documents is not None:
            self.put_many(documents)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def put(self, doc: Document) -> str:
        """Insert or replace a document. Returns its id."""
        doc_id = doc["_id"]
        if not isinstance(doc_id, str):
            raise ValueError(f"Document _id must be a string, got {doc_id!r}")
        if doc_id not in self._docs:
            bisect.insort(self._keys, doc_id)
        self._docs[doc_id] = copy.deepcopy(doc)
        return doc_id

    def put_many(self, docs: Iterable[Document]) -> int:
        count = 0
        for doc in docs:
            self.put(doc)
            count += 1
        return count

    def count(self) -> int:
        return len(self._keys)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def find(
        self,
        selector: Mapping[str, Any],
        sort: Sequence[SortField] | None = None,
        limit: int | None = None,
    ) -> ResultSet:
        low, high = key_bounds(selector)
        candidates = self._slice(low, high)
        docs = [self._docs[k] for k in candidates if matches(selector, self._docs[k])]

        if sort:
            # Documents without a sort field cannot be ordered by it
            docs = [
                d for d in docs
                if not any(is_missing(get_field(d, s.field)) for s in sort)
            ]
            # Stable multi-key sort: apply the least significant key first
            for s in reversed(sort):
                docs.sort(key=lambda d, f=s.field: get_field(d, f), reverse=s.descending)

        if limit is not None:
            docs = docs[:max(limit, 0)]

        log.debug("find %s -> %d docs", selector, len(docs))
        return ResultSet.from_docs(copy.deepcopy(docs))

    async def range_scan(
        self,
        start_key: str,
        end_key: str,
        *,
        descending: bool = False,
        limit: int | None = None,
    ) -> ResultSet:
        if descending:
            keys = self._slice(end_key, start_key)[::-1]
        else:
            keys = self._slice(start_key, end_key)
        if limit is not None:
            keys = keys[:max(limit, 0)]

        log.debug(
            "range_scan %r..%r desc=%s limit=%s -> %d docs",
            start_key, end_key, descending, limit, len(keys),
        )
        return ResultSet(rows=tuple(
            Row(id=k, doc=copy.deepcopy(self._docs[k])) for k in keys
        ))

    async def get_many(
        self,
        ids: Sequence[str],
        *,
        follow_redirects: bool = False,
    ) -> ResultSet:
        rows = []
        for doc_id in ids:
            doc = self._get(doc_id)
            if follow_redirects:
                doc = self._follow(doc)
            rows.append(Row(id=doc_id, doc=copy.deepcopy(doc)))
        return ResultSet(rows=tuple(rows))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get(self, doc_id: str) -> Document:
        try:
            return self._docs[doc_id]
        except KeyError:
            raise DocumentNotFound(doc_id) from None

    def _follow(self, doc: Document) -> Document:
        """Walk see_instead pointers to the final document."""
        origin = doc["_id"]
        seen = {origin}
        hops = 0
        while "see_instead" in doc:
            target = doc["see_instead"]["_id"]
            hops += 1
            if target in seen or hops > MAX_REDIRECT_HOPS:
                raise RedirectLoopError(
                    f"Redirect chain from {origin!r} does not end "
                    f"(stopped at {target!r} after {hops} hops)"
                )
            seen.add(target)
            doc = self._get(target)
        return doc

    def _slice(self, low: str | None, high: str | None) -> list[str]:
        """Sorted keys in [low, high]. Inverted bounds give an empty list."""
        left = 0 if low is None else bisect.bisect_left(self._keys, low)
        right = len(self._keys) if high is None else bisect.bisect_right(self._keys, high)
        return self._keys[left:right]
