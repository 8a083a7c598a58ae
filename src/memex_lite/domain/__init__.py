"""Domain model for memex-lite.

Re-exports the public types for convenient access:
    from memex_lite.domain import ResultSet, Row, encode_visit_key
"""
from memex_lite.domain.documents import (
    PAGE_KEY_PREFIX,
    make_page_doc,
    make_redirect_doc,
    make_visit_doc,
    page_id_for,
)
from memex_lite.domain.keys import (
    KEY_SUFFIX_MAX,
    VISIT_KEY_PREFIX,
    decode_visit_key,
    encode_visit_key,
    get_timestamp,
    new_visit_id,
    visit_key_upper_bound,
    visit_namespace_bounds,
)
from memex_lite.domain.results import ResultSet, Row
from memex_lite.domain.types import Document, PageId, Timestamp, VisitId

__all__ = [
    "PAGE_KEY_PREFIX",
    "make_page_doc",
    "make_redirect_doc",
    "make_visit_doc",
    "page_id_for",
    "KEY_SUFFIX_MAX",
    "VISIT_KEY_PREFIX",
    "decode_visit_key",
    "encode_visit_key",
    "get_timestamp",
    "new_visit_id",
    "visit_key_upper_bound",
    "visit_namespace_bounds",
    "ResultSet",
    "Row",
    "Document",
    "PageId",
    "Timestamp",
    "VisitId",
]
