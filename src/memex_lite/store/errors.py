"""Errors raised by document stores.

Callers of the search layer see these unchanged: nothing between the
store and the caller retries or wraps them.
"""
from __future__ import annotations


class StoreError(Exception):
    """Base class for failures raised by a document store."""


class DocumentNotFound(StoreError, KeyError):
    """A requested document id does not exist."""

    def __init__(self, doc_id: str) -> None:
        super().__init__(doc_id)
        self.doc_id = doc_id

    def __str__(self) -> str:
        return f"Document not found: {self.doc_id!r}"


class RedirectLoopError(StoreError):
    """Following see_instead pointers did not reach a final page."""


class UnsupportedSelector(StoreError, ValueError):
    """A selector used an operator the store does not understand."""
