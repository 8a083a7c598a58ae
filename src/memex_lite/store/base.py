"""Abstract base for document stores.

The search layer only ever talks to this interface, so the in-memory
store used in tests and profiling can be swapped for a real database
adapter without touching calling code.

Every read is a coroutine: a real store answers over a network or disk
boundary, and the context expander relies on being able to have many
reads in flight at once.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from memex_lite.domain.results import ResultSet
from memex_lite.store.queries import SortField


class DocumentStore(ABC):
    """Interface every store implementation provides."""

    @abstractmethod
    async def find(
        self,
        selector: Mapping[str, Any],
        sort: Sequence[SortField] | None = None,
        limit: int | None = None,
    ) -> ResultSet:
        """Return documents matching `selector`, sorted, then truncated.

        Selectors support literal equality plus the $eq, $in, $gte, $gt,
        $lte and $lt operators; dotted field names reach into nested
        documents ("page._id").
        """
        ...

    @abstractmethod
    async def range_scan(
        self,
        start_key: str,
        end_key: str,
        *,
        descending: bool = False,
        limit: int | None = None,
    ) -> ResultSet:
        """Return documents whose id lies between the two keys, inclusive.

        With descending=True the scan walks from `start_key` downwards,
        so `start_key` is the high end of the range.
        """
        ...

    @abstractmethod
    async def get_many(
        self,
        ids: Sequence[str],
        *,
        follow_redirects: bool = False,
    ) -> ResultSet:
        """Return one row per requested id, in request order.

        Each row's id is the id that was asked for; its doc is the final
        document after following redirects (when requested).

        Raises DocumentNotFound if any id (or redirect target) is missing.
        """
        ...
