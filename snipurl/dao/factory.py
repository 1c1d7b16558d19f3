"""Scoped DAO construction

Handlers never share a module-level DAO. Each request builds a DAO scoped to the
caller (the authenticated owner, or None for anonymous callers) and passes it
explicitly into the services.

Functions:
    short_url_dao(app_config: LambdaConfiguration, user_id: str | None = None) -> ShortURLBaseDAO
        Build a ShortURL DAO for the active backend, scoped to `user_id`.

Example:
    >>> app_config = load_config('shorten_url')
    >>> dao = short_url_dao(app_config, user_id='user-42')
    >>> dao.owner_id
    'user-42'
"""

import logging

from snipurl.types import LambdaConfiguration
from snipurl.dao.base import ShortURLBaseDAO
from snipurl.dao.redis import ShortURLRedisDAO
from snipurl.exceptions import BadConfigurationError
from snipurl.utils.config import app_prefix


logger = logging.getLogger(__name__)


def short_url_dao(app_config: LambdaConfiguration, user_id: str | None = None) -> ShortURLBaseDAO:
    """Build a ShortURL DAO for the configured backend, scoped to a caller

    Args:
        app_config (LambdaConfiguration):
            Lambda configuration as returned by `load_config()`.
        user_id (str | None):
            Authenticated owner id, or None for anonymous callers.

    Returns:
        ShortURLBaseDAO: DAO instance acting on behalf of `user_id`.

    Raises:
        BadConfigurationError:
            If the configuration holds no supported backend section.
        DataStoreError:
            If the backend is unreachable.
    """
    if 'redis' in app_config:
        logger.debug('Using Redis as the backend database for short URLs.', extra={'scoped': user_id is not None})
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}
        return ShortURLRedisDAO(**redis_config, prefix=app_prefix(), owner_id=user_id)

    backends = sorted(k for k in app_config if k != 'shortener')
    raise BadConfigurationError(f'No supported short URL backend configured (given backends: {backends}).')
