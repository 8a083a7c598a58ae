"""Visit-page joiner: replace each visit's page stub with the page document.

Two modes, chosen explicitly by the caller:

    POSITIONAL  pages.rows[i] belongs to visits.rows[i]. O(n), no lookup
                table. The lengths must match; a mismatch raises
                PositionalJoinMismatch instead of silently misjoining.
    KEYED       build page id -> row from the pages, then look up each
                visit's doc["page"]["_id"]. A missing page raises
                PageLookupError.

Neither mode mutates its inputs: every joined row is a new Row with a
new doc dict.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum, auto

from memex_lite.domain.results import ResultSet, Row
from memex_lite.store.base import DocumentStore

log = logging.getLogger(__name__)


class JoinMode(Enum):
    POSITIONAL = auto()
    KEYED = auto()


class PositionalJoinMismatch(ValueError):
    """Pages and visits passed to a positional join are not 1:1."""


class PageLookupError(KeyError):
    """A visit references a page that is not in the page result set."""

    def __init__(self, page_id: str, visit_id: str) -> None:
        super().__init__(page_id)
        self.page_id = page_id
        self.visit_id = visit_id

    def __str__(self) -> str:
        return f"Page {self.page_id!r} referenced by visit {self.visit_id!r} was not found"


def _with_page(row: Row, page_doc: dict) -> Row:
    return replace(row, doc={**row.doc, "page": page_doc})


def join_positional(visits: ResultSet, pages: ResultSet) -> ResultSet:
    """Join row i of `visits` with row i of `pages`."""
    if len(visits) != len(pages):
        raise PositionalJoinMismatch(
            f"Positional join needs one page per visit: "
            f"{len(visits)} visits, {len(pages)} pages"
        )
    return ResultSet(rows=tuple(
        _with_page(row, page_row.doc)
        for row, page_row in zip(visits.rows, pages.rows)
    ))


def join_keyed(visits: ResultSet, pages: ResultSet) -> ResultSet:
    """Join each visit with the page whose row id matches its page stub."""
    pages_by_id = pages.rows_by_id()
    rows = []
    for row in visits.rows:
        page_id = row.doc["page"]["_id"]
        try:
            page_row = pages_by_id[page_id]
        except KeyError:
            raise PageLookupError(page_id, row.id) from None
        rows.append(_with_page(row, page_row.doc))
    return ResultSet(rows=tuple(rows))


def join(visits: ResultSet, pages: ResultSet, mode: JoinMode) -> ResultSet:
    if mode is JoinMode.POSITIONAL:
        return join_positional(visits, pages)
    return join_keyed(visits, pages)


async def resolve_pages(
    store: DocumentStore,
    visits: ResultSet,
    *,
    unique: bool = False,
) -> ResultSet:
    """Fetch the page of every visit, following redirects.

    With unique=False the result has one row per visit, in visit order,
    ready for a positional join. With unique=True each page is fetched
    once, which is enough for a keyed join.
    """
    page_ids = [row.doc["page"]["_id"] for row in visits.rows]
    if unique:
        page_ids = list(dict.fromkeys(page_ids))
    log.debug("resolving %d pages for %d visits", len(page_ids), len(visits))
    return await store.get_many(page_ids, follow_redirects=True)


async def insert_pages_into_visits(
    store: DocumentStore,
    visits: ResultSet,
    pages: ResultSet | None = None,
    mode: JoinMode = JoinMode.KEYED,
) -> ResultSet:
    """Nest page documents into visit documents.

    If `pages` is None the pages are first looked up in `store` (always
    following redirects), then joined using `mode`.
    """
    if pages is None:
        pages = await resolve_pages(store, visits, unique=mode is JoinMode.KEYED)
    return join(visits, pages, mode)
