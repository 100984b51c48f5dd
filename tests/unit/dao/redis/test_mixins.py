"""Unit tests for Redis-based mixins.

Test coverage includes:
    1. Initialization and configuration
       - Ensures correct initialization with or without a Redis client.
       - Confirms socket timeouts are always configured.
       - Confirms invalid Redis configuration raises DataStoreError.
    2. Healthcheck behavior
       - Healthcheck pings Redis.
       - Missed pong from Redis returns False or raises, depending on raise_error.
"""

from unittest.mock import MagicMock, patch

import pytest
import redis

from burnclip.dao.exceptions import DataStoreError
from burnclip.dao.redis.mixins import RedisClientMixin


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def redis_client():
    _redis_client = MagicMock(
        spec=redis.Redis, connection_pool=MagicMock(spec=redis.ConnectionPool, connection_kwargs={'host': 'redis', 'port': 6379, 'db': 0})
    )
    _redis_client.ping.return_value = True
    return _redis_client


# -------------------------------
# 1. Initialization and configuration
# -------------------------------


def test_initialize_without_redis_client():
    """Ensure the mixin creates a Redis client with timeouts when none is provided."""
    redis_config = {
        'redis_host': 'redis',
        'redis_port': 6379,
        'redis_db': 0,
        'redis_decode_responses': True,
        'redis_username': 'default',
        'redis_password': 'password',
        'redis_timeout': 2.5,
    }

    with patch('burnclip.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        redis_mock_instance = redis_mock.return_value
        mixin = RedisClientMixin(**redis_config, prefix='testapp:test')

        redis_mock.assert_called_once_with(
            host='redis',
            port=6379,
            db=0,
            decode_responses=True,
            username='default',
            password='password',
            socket_timeout=2.5,
            socket_connect_timeout=2.5,
        )
        assert mixin.redis is redis_mock_instance
        assert mixin.keys.prefix == 'testapp:test'


def test_initialize_with_redis_client(redis_client):
    """Ensure the mixin uses a pre-initialized Redis client."""
    mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')
    assert mixin.redis is redis_client


def test_initialize_with_invalid_redis_config():
    """Ensure unreachable Redis raises DataStoreError on initialization."""
    redis_config = {
        'redis_host': '203.0.113.1',
        'redis_port': 18000,
        'redis_db': 5,
    }
    exception_message = "Can't connect to Redis at 203.0.113.1:18000/5. Check the provided configuration parameters."

    with patch('burnclip.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        redis_mock_instance = redis_mock.return_value
        redis_mock_instance.ping.side_effect = redis.exceptions.ConnectionError('Connection error')
        redis_mock_instance.connection_pool = MagicMock()
        redis_mock_instance.connection_pool.connection_kwargs = {'host': '203.0.113.1', 'port': 18000, 'db': 5}

        with pytest.raises(DataStoreError, match=exception_message):
            RedisClientMixin(**redis_config, prefix='testapp:test')


# -------------------------------
# 2. Healthcheck behavior
# -------------------------------


def test_healthcheck_passes(redis_client):
    """Ensure healthcheck passes when Redis responds."""
    mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')
    redis_client.ping.assert_called_once()  # initialization performs a healthcheck

    assert mixin.healthcheck() is True
    assert redis_client.ping.call_count == 2


@pytest.mark.parametrize(
    'error',
    [
        redis.exceptions.ConnectionError('Connection error'),
        redis.exceptions.TimeoutError('Timeout connecting to server'),
    ],
)
def test_healthcheck_fails_quietly(redis_client, error):
    """Ensure healthcheck reports False when Redis goes away after initialization."""
    mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')
    redis_client.ping.side_effect = error

    assert mixin.healthcheck() is False


def test_healthcheck_fails(redis_client):
    """Ensure healthcheck raises DataStoreError when asked to."""
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis:6379/0."):
        RedisClientMixin(redis_client=redis_client, prefix='testapp:test')
