"""Unit tests for the RedisKeySchema class in redis_key_schema.py.

Test coverage includes:

1. Clip key generation
   - Ensures clip_key() generates correct Redis keys for a given code.

2. Clip keyspace pattern
   - Ensures clip_pattern() matches every clip key and nothing else.

3. Custom prefix behavior
   - Confirms keys are correctly prefixed when a valid prefix is provided.

4. Invalid prefix types
   - Ensures improper prefix types raise TypeError.
"""

import pytest

from burnclip.dao.redis.redis_key_schema import RedisKeySchema


# -------------------------------
# 1. Clip key generation
# -------------------------------


@pytest.mark.parametrize(
    'code, expected',
    [
        ('K3Q', 'clips:K3Q'),
        ('000', 'clips:000'),
    ],
)
def test_clip_key(code, expected):
    keys = RedisKeySchema()
    assert keys.clip_key(code) == expected


# -------------------------------
# 2. Clip keyspace pattern
# -------------------------------


def test_clip_pattern():
    keys = RedisKeySchema()
    assert keys.clip_pattern() == 'clips:*'


# -------------------------------
# 3. Custom prefix behavior
# -------------------------------


def test_keys_with_prefix():
    """Ensure every generated key is namespaced by the prefix."""
    keys = RedisKeySchema(prefix='burnclip:prod')

    assert keys.clip_key('K3Q') == 'burnclip:prod:clips:K3Q'
    assert keys.clip_pattern() == 'burnclip:prod:clips:*'


# -------------------------------
# 4. Invalid prefix types
# -------------------------------


@pytest.mark.parametrize('prefix', [123, ['burnclip'], b'burnclip:prod'])
def test_invalid_prefix_type(prefix):
    with pytest.raises(TypeError, match='Prefix must be of type string'):
        RedisKeySchema(prefix=prefix)
