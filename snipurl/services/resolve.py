"""Short code resolution

Resolution is a single read: it never waits on, nor triggers, click accounting.
The caller issues the redirect first and hands the click to `dispatch_click()`.
"""

import logging

from snipurl.models import ShortURLModel
from snipurl.dao.base import ShortURLBaseDAO


logger = logging.getLogger(__name__)


def resolve_shortcode(dao: ShortURLBaseDAO, shortcode: str) -> ShortURLModel:
    """Look up the record a shortcode redirects to.

    Args:
        dao (ShortURLBaseDAO):
            DAO scoped to the caller.
        shortcode (str):
            Shortcode taken from the request path.

    Returns:
        ShortURLModel: the stored record; `target` is the redirect location and
        `clicks` the count observed at resolution time.

    Raises:
        ShortURLNotFoundError:
            If the shortcode was never issued.
        DataStoreError:
            If the data store is unreachable or times out.
    """
    short_url = dao.get(shortcode=shortcode)
    logger.debug('Resolved shortcode.', extra={'shortcode': shortcode, 'clicks': short_url.clicks})
    return short_url
