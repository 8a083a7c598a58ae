"""Simulate a realistic browsing history for profiling.

History shape:
  - num_pages pages on a mix of sites, with Zipf-like popularity
    (the top 10% of pages collect most of the visits)
  - roughly redirect_ratio of pages are redirects (see_instead) to
    another page; visits still reference the redirecting page
  - num_visits visits spread over span_ms milliseconds ending at end_ms,
    in bursts: most visits follow the previous one within a few
    minutes, some start a new browsing session hours later

The generator produces plain store documents so the harness can load
them into any DocumentStore.
"""
from __future__ import annotations

import random
from dataclasses import dataclass

from memex_lite.domain.documents import (
    make_page_doc,
    make_redirect_doc,
    make_visit_doc,
    page_id_for,
)
from memex_lite.domain.keys import encode_visit_key
from memex_lite.domain.types import Document, Timestamp
from memex_lite.store.memory_store import MemoryDocumentStore

_SITES = [
    "wikipedia.org", "github.com", "news.ycombinator.com", "docs.python.org",
    "stackoverflow.com", "arxiv.org", "lwn.net", "nytimes.com",
    "reddit.com", "youtube.com", "bbc.co.uk", "mozilla.org",
]
_WORDS = [
    "memex", "history", "search", "python", "asyncio", "index", "bisect",
    "archive", "timeline", "browser", "context", "journal", "notes",
    "reading", "trail", "link", "graph", "query", "store", "recall",
]

# Within a session, the gap to the next visit (ms)
_SESSION_GAP_MS = (2_000, 5 * 60 * 1000)
_NEW_SESSION_PROBABILITY = 0.05


@dataclass(slots=True)
class GeneratedHistory:
    pages: list[Document]
    visits: list[Document]

    @property
    def documents(self) -> list[Document]:
        return self.pages + self.visits


class HistoryGenerator:
    """Generate page and visit documents with a fixed seed."""

    __slots__ = (
        "_rng", "_num_pages", "_num_visits", "_span_ms", "_end_ms",
        "_redirect_ratio", "_zipf_weights",
    )

    def __init__(
        self,
        num_pages: int = 500,
        num_visits: int = 10_000,
        span_ms: int = 30 * 24 * 60 * 60 * 1000,
        end_ms: Timestamp = 1_750_000_000_000,
        redirect_ratio: float = 0.05,
        seed: int = 42,
    ) -> None:
        if num_pages < 1:
            raise ValueError(f"num_pages must be >= 1, got {num_pages}")
        self._rng = random.Random(seed)
        self._num_pages = num_pages
        self._num_visits = num_visits
        self._span_ms = span_ms
        self._end_ms = end_ms
        self._redirect_ratio = redirect_ratio
        # Zipf weights: page i has weight 1/(i+1)
        self._zipf_weights = [1.0 / (i + 1) for i in range(num_pages)]

    @property
    def start_ms(self) -> Timestamp:
        return self._end_ms - self._span_ms

    @property
    def end_ms(self) -> Timestamp:
        return self._end_ms

    def _generate_pages(self) -> list[Document]:
        pages = []
        for i in range(self._num_pages):
            site = self._rng.choice(_SITES)
            slug = "-".join(self._rng.sample(_WORDS, 3))
            page_id = page_id_for(f"{i:05d}")
            url = f"https://{site}/{slug}"
            # Page 0 never redirects so every chain has somewhere to end
            if i > 0 and self._rng.random() < self._redirect_ratio:
                target = page_id_for(f"{self._rng.randrange(0, i):05d}")
                pages.append(make_redirect_doc(page_id, url, target))
            else:
                title = slug.replace("-", " ").title()
                pages.append(make_page_doc(page_id, url, title))
        return pages

    def _generate_timestamps(self) -> list[Timestamp]:
        timestamps = []
        ts = self.start_ms
        for _ in range(self._num_visits):
            if self._rng.random() < _NEW_SESSION_PROBABILITY:
                ts += self._rng.randint(60 * 60 * 1000, 8 * 60 * 60 * 1000)
            else:
                ts += self._rng.randint(*_SESSION_GAP_MS)
            timestamps.append(ts)
        # Squash into the requested span if the walk overshot
        overshoot = timestamps[-1] - self._end_ms if timestamps else 0
        if overshoot > 0:
            scale = self._span_ms / (timestamps[-1] - self.start_ms)
            timestamps = [
                self.start_ms + int((t - self.start_ms) * scale) for t in timestamps
            ]
        return timestamps

    def generate(self) -> GeneratedHistory:
        pages = self._generate_pages()
        page_ids = [p["_id"] for p in pages]
        visits = []
        for n, ts in enumerate(self._generate_timestamps()):
            page_id = self._rng.choices(page_ids, weights=self._zipf_weights, k=1)[0]
            # Deterministic nonce so the same seed yields the same keys
            visit_id = encode_visit_key(ts, nonce=f"{n:08x}")
            visits.append(make_visit_doc(ts, page_id, visit_id=visit_id))
        return GeneratedHistory(pages=pages, visits=visits)

    def populate(self, store: MemoryDocumentStore) -> GeneratedHistory:
        """Generate a history and load it into `store`."""
        history = self.generate()
        store.put_many(history.documents)
        return history
