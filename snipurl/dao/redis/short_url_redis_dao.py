"""Redis backend for short URL records

ShortURLRedisDAO stores each record as a Redis hash and keeps a sorted-set
index per owner for the dashboard listing.

Responsibilities:
    - Insert and retrieve short URLs from Redis;
    - Maintain a per-owner index of short URLs (newest first);
    - Increment click counters atomically (server-side Lua script);
    - Overwrite click counters for the click accounting fallback path;
    - Provide defensive error handling and raise appropriate DAO exceptions.

Layout in Redis:
    <prefix>:links:<shortcode>        HASH  target, clicks, created_at[, owner_id]
    <prefix>:users:<owner_id>:links   ZSET  shortcode -> created_at (epoch seconds)

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving ShortURLModel in a Redis datastore.

Example:
    >>> from snipurl.models import ShortURLModel
    >>> from snipurl.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(prefix="snipurl:dev")

    >>> short_url = ShortURLModel(
    ...     target="https://example.com/page",
    ...     shortcode="abc123"
    ... )
    >>> dao.insert(short_url)
    <ShortURLRedisDAO>

    >>> retrieved = dao.get("abc123")
    >>> retrieved.target
    'https://example.com/page'
    >>> retrieved.clicks
    0

    >>> dao.increment_clicks("abc123")
    1
"""

from datetime import datetime, UTC
from typing import Optional

import redis
from beartype import beartype

from snipurl.types import RedisHash
from snipurl.models import ShortURLModel
from snipurl.dao.base import ShortURLBaseDAO
from snipurl.dao.redis.mixins import RedisClientMixin
from snipurl.dao.redis.helpers import handle_redis_connection_error
from snipurl.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, UnsupportedOperationError


# Returns the new counter value, or nil if the link doesn't exist.
# HINCRBY alone would create a bare hash for unknown shortcodes.
INCREMENT_CLICKS_LUA = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return nil
end
return redis.call('HINCRBY', KEYS[1], 'clicks', 1)
"""


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL mappings

    This class implements the ShortURLBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        owner_id (Optional[str]):
            Owner this DAO acts on behalf of (None for anonymous callers).

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLRedisDAO:
            Insert a short URL mapping and index it under its owner.
            Raises ShortURLAlreadyExistsError when a URL with the same shortcode exists.
            Raises ScopeViolationError when the record belongs to another owner.
            Raises DataStoreError when Redis is unreachable or times out.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a short URL mapping and its metadata by shortcode.
            Raises ShortURLNotFoundError for unknown (or malformed) shortcodes.
            Raises DataStoreError when Redis is unreachable or times out.

        increment_clicks(shortcode: str, **kwargs) -> int:
            Atomically increment the click counter via a Lua script.
            Raises ShortURLNotFoundError for unknown (or malformed) shortcodes.
            Raises UnsupportedOperationError when Redis refuses to run the script.
            Raises DataStoreError when Redis is unreachable or times out.

        set_clicks(shortcode: str, clicks: int, **kwargs) -> ShortURLRedisDAO:
            Overwrite the click counter of an existing short URL.
            Raises ShortURLNotFoundError for unknown (or malformed) shortcodes.
            Raises DataStoreError when Redis is unreachable or times out.

        list_by_owner(owner_id: str, limit: int = 50, **kwargs) -> list[ShortURLModel]:
            List the owner's short URLs, newest first.
            Raises ScopeViolationError when owner_id isn't this DAO's owner.
            Raises DataStoreError when Redis is unreachable or times out.
    """

    def __init__(self, *args, owner_id: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.owner_id = owner_id
        self._increment_clicks_script = self.redis.register_script(INCREMENT_CLICKS_LUA)

    @handle_redis_connection_error
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLRedisDAO':
        """Insert a short URL mapping into Redis

        The link key is WATCHed while its existence is checked, and the record and
        owner index entry are written in a single MULTI/EXEC transaction. If another
        client writes the same link key in between, Redis aborts the transaction and
        the insert is reported as a collision rather than overwriting the other record.

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
            ScopeViolationError:
                If short_url.owner_id isn't the owner this DAO acts for.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.

        Example:
            >>> short_url = ShortURLModel(
            ...     target='https://example.com',
            ...     shortcode='abc123'
            ... )
            >>> dao.insert(short_url)
            <ShortURLRedisDAO>
        """
        self._authorize(short_url.owner_id)

        link_key = self.keys.link_key(short_url.shortcode)

        with self.redis.pipeline(transaction=True) as pipe:
            try:
                pipe.watch(link_key)
                if pipe.exists(link_key):
                    raise ShortURLAlreadyExistsError(short_url.shortcode)

                pipe.multi()
                pipe.hset(link_key, mapping=self._to_mapping(short_url))
                if short_url.owner_id is not None:
                    user_links_key = self.keys.user_links_key(short_url.owner_id)
                    pipe.zadd(user_links_key, {short_url.shortcode: short_url.created_at.timestamp()})
                pipe.execute()
            except redis.exceptions.WatchError as e:
                raise ShortURLAlreadyExistsError(short_url.shortcode) from e
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by shortcode

        Args:
            shortcode (str):
                Shortcode of the record.

        Returns:
            ShortURLModel:
                The retrieved ShortURLModel instance if found.

        Raises:
            ShortURLNotFoundError:
                If no record is stored under the shortcode.
            DataStoreError:
                If Redis is unreachable or times out.

        Example:
            >>> dao.get('abc123')
            ShortURLModel(target='https://example.com', shortcode='abc123', ...)
        """
        data = self.redis.hgetall(self._link_key(shortcode))
        if not data:
            raise ShortURLNotFoundError(shortcode)

        return self._from_mapping(shortcode, data)

    @handle_redis_connection_error
    @beartype
    def increment_clicks(self, shortcode: str, **kwargs) -> int:
        """Atomically increment the click counter of a short URL

        The existence check and HINCRBY run inside one Lua script, so concurrent
        increments are serialized by Redis and none of them are lost.

        Args:
            shortcode (str):
                Shortcode of the record.

        Returns:
            int:
                Click counter value after the increment.

        Raises:
            ShortURLNotFoundError:
                If no record is stored under the shortcode.
            UnsupportedOperationError:
                If Redis rejects the script (e.g., scripting disabled or denied by ACL).
            DataStoreError:
                If Redis is unreachable or times out.

        Example:
            >>> dao.increment_clicks('abc123')
            42
        """
        try:
            clicks = self._increment_clicks_script(keys=[self._link_key(shortcode)])
        except redis.exceptions.ResponseError as e:
            raise UnsupportedOperationError(f"Redis refused to increment clicks for '{shortcode}': {e}") from e

        if clicks is None:
            raise ShortURLNotFoundError(shortcode)
        return int(clicks)

    @handle_redis_connection_error
    @beartype
    def set_clicks(self, shortcode: str, clicks: int, **kwargs) -> 'ShortURLRedisDAO':
        """Overwrite the click counter of an existing short URL

        NOTE: EXISTS followed by HSET is not atomic with respect to concurrent
              increments. A concurrent HINCRBY landing between the caller's read
              and this write is overwritten.

        Args:
            shortcode (str):
                Shortcode of the record.
            clicks (int):
                New (non-negative) click counter value.

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            ValueError:
                If clicks is negative.
            ShortURLNotFoundError:
                If no record is stored under the shortcode.
            DataStoreError:
                If Redis is unreachable or times out.
        """
        if clicks < 0:
            raise ValueError(f'Clicks must be a non-negative integer (given value: {clicks}).')

        link_key = self._link_key(shortcode)
        if not self.redis.exists(link_key):
            raise ShortURLNotFoundError(shortcode)

        self.redis.hset(link_key, 'clicks', clicks)
        return self

    @handle_redis_connection_error
    @beartype
    def list_by_owner(self, owner_id: str, limit: int = 50, **kwargs) -> list[ShortURLModel]:
        """List an owner's short URLs, newest first

        Reads the owner's index (ZREVRANGE) and fetches every record in a single
        pipeline round trip. Index entries whose record no longer exists are skipped.

        Args:
            owner_id (str):
                Owner whose short URLs are listed.
            limit (int):
                Maximum number of short URLs returned. Defaults to 50.

        Returns:
            list[ShortURLModel]:
                The owner's short URLs ordered by creation time, descending.

        Raises:
            ScopeViolationError:
                If owner_id isn't the owner this DAO acts for.
            DataStoreError:
                If Redis is unreachable or times out.
        """
        self._authorize(owner_id)
        if limit <= 0:
            return []

        shortcodes = self.redis.zrevrange(self.keys.user_links_key(owner_id), 0, limit - 1)
        if not shortcodes:
            return []

        with self.redis.pipeline(transaction=False) as pipe:
            for shortcode in shortcodes:
                pipe.hgetall(self.keys.link_key(shortcode))
            records = pipe.execute()

        return [self._from_mapping(shortcode, data) for shortcode, data in zip(shortcodes, records) if data]

    def _link_key(self, shortcode: str) -> str:
        try:
            return self.keys.link_key(shortcode)
        except ValueError as e:
            # nothing can be stored under a malformed key
            raise ShortURLNotFoundError(shortcode) from e

    @staticmethod
    def _to_mapping(short_url: ShortURLModel) -> dict[str, str | int]:
        mapping = {
            'target': short_url.target,
            'clicks': short_url.clicks,
            'created_at': short_url.created_at.isoformat(),
        }
        # Redis hashes can't hold None, anonymous links simply have no owner field
        if short_url.owner_id is not None:
            mapping['owner_id'] = short_url.owner_id
        return mapping

    @staticmethod
    def _from_mapping(shortcode: str, data: RedisHash) -> ShortURLModel:
        return ShortURLModel(
            target=data['target'],
            shortcode=shortcode,
            owner_id=data.get('owner_id'),
            clicks=int(data.get('clicks', 0)),
            created_at=datetime.fromisoformat(data['created_at']) if 'created_at' in data else datetime.fromtimestamp(0, UTC),
        )
