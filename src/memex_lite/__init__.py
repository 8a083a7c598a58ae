"""memex-lite: search over a browsing history kept in a document store.

Visits are keyed by timestamp, pages are keyed by URL-ish ids, and the
search layer joins the two, filters by time window and expands results
with temporally adjacent visits.
"""

__version__ = "0.1.0"
