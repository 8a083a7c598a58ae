"""Factories for the documents the store holds.

Page documents:

    {"_id": "page/<id>", "url": ..., "title": ..., ...}

A page that was redirected carries a pointer to where it went:

    {"_id": ..., "url": ..., "see_instead": {"_id": <target page id>}}

Visit documents reference their page by id only:

    {"_id": "visit/<ts>/<nonce>", "page": {"_id": <page id>}, ...}
"""
from __future__ import annotations

from typing import Any

from memex_lite.domain.keys import new_visit_id
from memex_lite.domain.types import Document, PageId, Timestamp, VisitId

PAGE_KEY_PREFIX = "page/"


def page_id_for(slug: str) -> PageId:
    return f"{PAGE_KEY_PREFIX}{slug}"


def make_page_doc(page_id: PageId, url: str, title: str = "", **meta: Any) -> Document:
    return {"_id": page_id, "url": url, "title": title, **meta}


def make_redirect_doc(page_id: PageId, url: str, target_id: PageId) -> Document:
    """A page that should be read as `target_id` instead."""
    return {"_id": page_id, "url": url, "see_instead": {"_id": target_id}}


def make_visit_doc(
    timestamp: Timestamp,
    page_id: PageId,
    visit_id: VisitId | None = None,
    **meta: Any,
) -> Document:
    """Build a visit document with a page stub.

    If `visit_id` is None a fresh key is generated for `timestamp`.
    """
    return {
        "_id": visit_id if visit_id is not None else new_visit_id(timestamp),
        "page": {"_id": page_id},
        **meta,
    }
