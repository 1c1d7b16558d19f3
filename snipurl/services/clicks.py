"""Best-effort click accounting

A click is recorded after the redirect response is built, on a background
thread, with at most one attempt per path:

    1. Atomic server-side increment (DAO.increment_clicks).
    2. On any DAO failure, one plain write of `known_clicks + 1`, where
       `known_clicks` is the count observed when the shortcode was resolved.
    3. On a second failure, the click is dropped and logged.

Nothing is retried or re-queued and no exception escapes `record_click()`.

NOTE: the fallback write races with concurrent increments. Redirects resolved
      before the write can be lost (under-counting), and a write based on a
      stale `known_clicks` can lower a counter other requests already raised.
      Exact counts are not guaranteed on this path.

Example:
    >>> short_url = resolve_shortcode(dao, 'abc123')
    >>> response = response_302(location=short_url.target)
    >>> dispatch_click(dao, short_url.shortcode, short_url.clicks)
    <Future at 0x... state=pending>
"""

import logging
from concurrent.futures import Future
from enum import StrEnum

from snipurl.dao.base import ShortURLBaseDAO
from snipurl.dao.exceptions import DAOError
from snipurl.utils.background import fire_and_forget


logger = logging.getLogger(__name__)


class ClickOutcome(StrEnum):
    INCREMENTED = 'incremented'  # atomic increment succeeded
    FALLBACK = 'fallback'  # atomic increment failed, plain write succeeded
    DROPPED = 'dropped'  # both failed, click lost


def record_click(dao: ShortURLBaseDAO, shortcode: str, known_clicks: int) -> ClickOutcome:
    """Record one click for `shortcode`, never raising DAO errors.

    Args:
        dao (ShortURLBaseDAO):
            DAO used for the redirect.
        shortcode (str):
            Shortcode that was just redirected.
        known_clicks (int):
            Click count observed at resolution time (fallback base value).

    Returns:
        ClickOutcome: which path recorded the click, or DROPPED.
    """
    try:
        clicks = dao.increment_clicks(shortcode=shortcode)
    except DAOError as e:
        logger.info(
            'Atomic click increment failed. Falling back to direct update.',
            extra={'shortcode': shortcode, 'reason': repr(e)},
        )
    else:
        logger.debug('Click recorded.', extra={'shortcode': shortcode, 'clicks': clicks})
        return ClickOutcome.INCREMENTED

    try:
        dao.set_clicks(shortcode=shortcode, clicks=known_clicks + 1)
    except DAOError as e:
        logger.warning(
            'Click dropped: atomic increment and direct update both failed.',
            extra={'shortcode': shortcode, 'reason': repr(e)},
        )
        return ClickOutcome.DROPPED

    logger.debug('Click recorded via direct update.', extra={'shortcode': shortcode, 'clicks': known_clicks + 1})
    return ClickOutcome.FALLBACK


def dispatch_click(dao: ShortURLBaseDAO, shortcode: str, known_clicks: int) -> Future:
    """Hand a click to the background executor and return without waiting."""
    return fire_and_forget(record_click, dao, shortcode, known_clicks)
