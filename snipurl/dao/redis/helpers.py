import functools
from typing import Any
from collections.abc import Callable

import redis

from snipurl.dao.exceptions import DataStoreError


__all__ = ['redis_location', 'handle_redis_connection_error']

# Checked in order; message templates take the client's location
CONNECTIVITY_ERRORS: tuple[tuple[type[redis.exceptions.RedisError], str], ...] = (
    (redis.exceptions.TimeoutError, 'Redis at {location} timed out.'),
    (redis.exceptions.ConnectionError, "Can't connect to Redis at {location}."),
)


def redis_location(client: redis.Redis) -> str:
    """Return 'host:port/db' of a Redis client, for error messages."""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_connection_error[F: Callable[..., Any]](method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate outages into DataStoreError

    Timeouts and connection failures raised by redis-py become DataStoreError
    naming the Redis location. Every other exception (including
    redis.exceptions.ResponseError) propagates unchanged.

    Example:
        >>> @handle_redis_connection_error
        ... def get_clicks(self, shortcode):
        ...     return self.redis.hget(self.keys.link_key(shortcode), 'clicks')
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.TimeoutError, redis.exceptions.ConnectionError) as e:
            template = next(message for error_type, message in CONNECTIVITY_ERRORS if isinstance(e, error_type))
            raise DataStoreError(template.format(location=redis_location(self.redis))) from e

    return wrapper
