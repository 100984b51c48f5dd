from burnclip.dao.redis.redis_key_schema import RedisKeySchema
from burnclip.dao.redis.mixins import RedisClientMixin
from burnclip.dao.redis.clip_redis_dao import ClipRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'ClipRedisDAO',
]
