"""Visit queries: the most recent visits, and visits to given pages.

Both return visits newest first, with the page document nested under
doc["page"].
"""
from __future__ import annotations

import logging

from memex_lite.domain.keys import (
    VISIT_KEY_PREFIX,
    encode_visit_key,
    visit_key_upper_bound,
    visit_namespace_bounds,
)
from memex_lite.domain.results import ResultSet
from memex_lite.domain.types import Timestamp
from memex_lite.search.join import JoinMode, insert_pages_into_visits, join_keyed
from memex_lite.store.base import DocumentStore
from memex_lite.store.queries import DateRange, SortField, now_ms

log = logging.getLogger(__name__)

_NEWEST_FIRST = [SortField("_id", descending=True)]


async def get_last_visits(
    store: DocumentStore,
    limit: int | None = None,
) -> ResultSet:
    """Return the `limit` most recent visits (all of them if None).

    Pages are looked up with redirects followed and joined by position,
    since get_many() answers in request order.
    """
    low, high = visit_namespace_bounds()
    visits = await store.find(
        {"_id": {"$gte": low, "$lte": high}},
        sort=_NEWEST_FIRST,
        limit=limit,
    )
    log.debug("last visits: %d (limit=%s)", len(visits), limit)
    return await insert_pages_into_visits(store, visits, mode=JoinMode.POSITIONAL)


async def find_visits_to_pages(
    store: DocumentStore,
    pages: ResultSet,
    date_range: DateRange | None = None,
    now: Timestamp | None = None,
) -> ResultSet:
    """Find visits to any page in `pages` within the date window.

    `date_range` is the caller's selected window; unset ends default to
    100 days before `now` and `now`. Both ends are inclusive. A window
    whose start lies after its end matches nothing.

    Pages are joined from `pages` as given. Redirects are not followed:
    visits recorded against a page that later redirected elsewhere are
    only found through the page they originally referenced.
    """
    if now is None:
        now = now_ms()
    start, end = (date_range or DateRange()).resolve(now)
    # Keys have no negative timestamps; a window ending before the epoch
    # gets a high bound below every visit key.
    low = encode_visit_key(max(start, 0))
    high = visit_key_upper_bound(end) if end >= 0 else VISIT_KEY_PREFIX

    selector = {
        "page._id": {"$in": pages.ids()},
        "_id": {"$gte": low, "$lte": high},
    }
    visits = await store.find(selector, sort=_NEWEST_FIRST)
    log.debug(
        "visits to %d pages in [%d, %d]: %d", len(pages), start, end, len(visits),
    )
    return join_keyed(visits, pages)
