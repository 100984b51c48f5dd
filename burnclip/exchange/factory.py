"""Wire an ExchangeProtocol for the configured backend

Backends:
    redis:  clips in Redis, files in S3
    memory: clips and files in process memory (local development, tests)

Example:
    >>> os.environ['BURNCLIP_BACKEND'] = 'memory'
    >>> exchange = build_exchange()
    >>> exchange.redeem(exchange.send_text('hello')).content
    'hello'
"""

import logging

from burnclip.constants import Backend
from burnclip.dao.memory import BlobMemoryDAO, ClipMemoryDAO
from burnclip.dao.redis import ClipRedisDAO
from burnclip.dao.s3 import BlobS3DAO
from burnclip.exchange.protocol import ExchangeProtocol
from burnclip.types import AppConfig
from burnclip.utils.config import app_prefix, load_config


logger = logging.getLogger(__name__)


def build_exchange(config: AppConfig | None = None) -> ExchangeProtocol:
    """Build an ExchangeProtocol from configuration

    Args:
        config (AppConfig | None):
            Output of load_config(). Loaded on demand when omitted.

    Returns:
        ExchangeProtocol: Ready to send and redeem.

    Raises:
        ConfigurationError:
            If configuration can't be loaded.
        DataStoreError:
            If Redis is unreachable while connecting.
    """
    config = config if config is not None else load_config()
    backend = Backend(config['active_backend'])

    if backend == Backend.MEMORY:
        logger.debug('Using in-process memory as the clip and blob store.')
        return ExchangeProtocol(clips=ClipMemoryDAO(), blobs=BlobMemoryDAO())

    logger.debug('Using Redis as the clip store and S3 as the blob store.')
    redis_config = {f'redis_{k}': v for k, v in config['redis'].items()}
    clips = ClipRedisDAO(**redis_config, prefix=app_prefix())
    blobs = BlobS3DAO(**config['s3'])
    return ExchangeProtocol(clips=clips, blobs=blobs)
