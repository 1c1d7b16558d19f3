from snipurl.dao.redis.redis_key_schema import RedisKeySchema
from snipurl.dao.redis.mixins import RedisClientMixin
from snipurl.dao.redis.short_url_redis_dao import ShortURLRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'ShortURLRedisDAO',
]
