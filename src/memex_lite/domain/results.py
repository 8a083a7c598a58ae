"""Result rows and result sets returned by every store query.

A Row pairs a document id with the document itself. Visit rows carry a
page stub ({"_id": ...}) under doc["page"] until the joiner swaps in the
full page document.

Rows are frozen; joining or flagging a row builds a new one with
dataclasses.replace(), so a result set handed to a caller is never
changed behind its back.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from memex_lite.domain.types import Document


@dataclass(frozen=True, slots=True)
class Row:
    """One row of a query result."""
    id: str
    doc: Document
    is_contextual_result: bool = False   # fetched as context, not as a match


@dataclass(frozen=True, slots=True)
class ResultSet:
    """Ordered rows. Order means recency until someone re-sorts."""
    rows: tuple[Row, ...] = field(default_factory=tuple)

    @classmethod
    def from_rows(cls, rows: Iterable[Row]) -> ResultSet:
        return cls(rows=tuple(rows))

    @classmethod
    def from_docs(cls, docs: Iterable[Document]) -> ResultSet:
        """Normalise a list of documents (a find() result) into rows."""
        return cls(rows=tuple(Row(id=doc["_id"], doc=doc) for doc in docs))

    def rows_by_id(self) -> dict[str, Row]:
        """Map row id -> row. Later duplicates overwrite earlier ones."""
        return {row.id: row for row in self.rows}

    def ids(self) -> list[str]:
        return [row.id for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)
