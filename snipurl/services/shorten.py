"""URL shortening

Procedure:
    - Step 1: Validate the target URL (before any data store call)
    - Step 2: Generate a random shortcode
    - Step 3: Insert the record (clicks=0, created_at=now)
    - Step 4: On a shortcode collision, go back to step 2 (bounded attempts)
    - Step 5: Compose the public short URL

Example:
    >>> result = shorten_url(dao, 'https://example.com/very/long/path', base_url='https://sn.ip')
    >>> result.short_url
    'https://sn.ip/V1StGX'
"""

import logging
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Any, Optional

from snipurl.models import ShortURLModel
from snipurl.dao.base import ShortURLBaseDAO
from snipurl.dao.exceptions import ShortURLAlreadyExistsError
from snipurl.exceptions import ShortcodeAllocationError
from snipurl.utils.config import ShortenerSettings
from snipurl.utils.helpers import get_short_url
from snipurl.utils.shortener import generate_shortcode
from snipurl.utils.validators import validate_url


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShortenResult:
    shortcode: str
    short_url: str
    target: str
    owner_id: Optional[str]
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            'shortCode': self.shortcode,
            'shortUrl': self.short_url,
            'originalUrl': self.target,
        }


def shorten_url(
    dao: ShortURLBaseDAO,
    target_url: str,
    *,
    base_url: str,
    owner_id: Optional[str] = None,
    settings: Optional[ShortenerSettings] = None,
) -> ShortenResult:
    """Allocate a unique shortcode for `target_url` and store the mapping.

    Args:
        dao (ShortURLBaseDAO):
            DAO scoped to the caller (its owner must match `owner_id`).
        target_url (str):
            URL to shorten. Must be a well-formed absolute URI.
        base_url (str):
            Public base URL short links are composed with.
        owner_id (Optional[str]):
            Authenticated owner, or None for anonymous links.
        settings (Optional[ShortenerSettings]):
            Shortcode length, alphabet and attempt budget. Defaults apply if None.

    Returns:
        ShortenResult: the stored shortcode, public short URL and metadata.

    Raises:
        InvalidURLError:
            If `target_url` is malformed. No shortcode is generated.
        ShortcodeAllocationError:
            If every attempt hit an existing shortcode.
        DataStoreError:
            If the data store is unreachable (not retried).
    """
    settings = settings or ShortenerSettings()
    validate_url(target_url)

    for attempt in range(1, settings.max_allocation_attempts + 1):
        short_url = ShortURLModel(
            target=target_url,
            shortcode=generate_shortcode(length=settings.shortcode_length, alphabet=settings.alphabet),
            owner_id=owner_id,
            clicks=0,
            created_at=datetime.now(UTC),
        )
        try:
            dao.insert(short_url=short_url)
        except ShortURLAlreadyExistsError:
            logger.info(
                'Shortcode collision. Retrying with a fresh shortcode.',
                extra={'shortcode': short_url.shortcode, 'attempt': attempt},
            )
            continue

        logger.info('Shortened URL.', extra={'shortcode': short_url.shortcode, 'attempt': attempt, 'anonymous': owner_id is None})
        return ShortenResult(
            shortcode=short_url.shortcode,
            short_url=get_short_url(short_url.shortcode, base_url),
            target=short_url.target,
            owner_id=short_url.owner_id,
            created_at=short_url.created_at,
        )

    raise ShortcodeAllocationError(f'Unable to allocate a unique shortcode after {settings.max_allocation_attempts} attempts.')
