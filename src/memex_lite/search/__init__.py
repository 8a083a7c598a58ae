"""Visit search: joins, recent/temporal queries and context expansion."""
from memex_lite.search.context import ContextSettings, add_visits_context, fetch_context
from memex_lite.search.join import (
    JoinMode,
    PageLookupError,
    PositionalJoinMismatch,
    insert_pages_into_visits,
    join,
    join_keyed,
    join_positional,
    resolve_pages,
)
from memex_lite.search.merge import mark_contextual, sort_by_recency, union_by_id
from memex_lite.search.visits import find_visits_to_pages, get_last_visits

__all__ = [
    "ContextSettings",
    "add_visits_context",
    "fetch_context",
    "JoinMode",
    "PageLookupError",
    "PositionalJoinMismatch",
    "insert_pages_into_visits",
    "join",
    "join_keyed",
    "join_positional",
    "resolve_pages",
    "mark_contextual",
    "sort_by_recency",
    "union_by_id",
    "find_visits_to_pages",
    "get_last_visits",
]
