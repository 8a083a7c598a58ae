"""Merge helpers shared by the search operations."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from memex_lite.domain.keys import get_timestamp
from memex_lite.domain.results import ResultSet, Row


def union_by_id(*sources: Iterable[Row]) -> list[Row]:
    """Concatenate row sources, keeping only the first row seen per id.

    Sources are in priority order: when an id appears in several of
    them, the copy from the earliest source wins, and within a source
    the earliest row wins.
    """
    seen: set[str] = set()
    merged: list[Row] = []
    for source in sources:
        for row in source:
            if row.id in seen:
                continue
            seen.add(row.id)
            merged.append(row)
    return merged


def sort_by_recency(rows: Iterable[Row]) -> list[Row]:
    """Newest first. Stable, so rows with equal timestamps keep their order."""
    return sorted(rows, key=lambda row: -get_timestamp(row.doc))


def mark_contextual(result: ResultSet) -> ResultSet:
    """Flag every row as having been fetched as context."""
    return ResultSet(rows=tuple(
        replace(row, is_contextual_result=True) for row in result.rows
    ))
