import functools
import json
from dataclasses import asdict
from datetime import datetime
from typing import TypeVar, Any
from collections.abc import Callable

import redis

from burnclip.dao.exceptions import ClipCorruptedError, DataStoreError, DataStoreRejectedError
from burnclip.models import ClipKind, ClipModel, FileRef


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_redis_errors[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate redis-py errors into DAO errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.ConnectionError,
            redis.exceptions.TimeoutError or redis.exceptions.ResponseError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with Redis and
            DataStoreRejectedError when Redis refuses a command.

    Example:
        >>> @handle_redis_errors
        ... def exists(self, code):
        ...     return self.redis.exists(code)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            info = self.redis.connection_pool.connection_kwargs
            redis_host = info.get('host')
            redis_port = info.get('port')
            redis_db = info.get('db')
            raise DataStoreError(f"Can't connect to Redis at {redis_host}:{redis_port}/{redis_db}.") from e
        except redis.exceptions.ResponseError as e:
            raise DataStoreRejectedError(f'Redis rejected {method.__name__}(): {e}') from e

    return wrapper


def dump_clip(clip: ClipModel) -> str:
    """Serialize a ClipModel into the JSON document stored under its key"""
    document = {
        'code': clip.code,
        'kind': str(clip.kind),
        'created_at': clip.created_at.isoformat(),
        'expires_at': clip.expires_at.isoformat(),
    }
    if clip.content is not None:
        document['content'] = clip.content
    if clip.file is not None:
        document['file'] = asdict(clip.file)
    return json.dumps(document)


def load_clip(raw: str | bytes) -> ClipModel:
    """Deserialize a stored JSON document into a ClipModel

    Raises:
        ClipCorruptedError:
            If the stored document is corrupt.
    """
    try:
        document = json.loads(raw)
        file = document.get('file')
        return ClipModel(
            code=document['code'],
            kind=ClipKind(document['kind']),
            content=document.get('content'),
            file=FileRef(**file) if file is not None else None,
            created_at=datetime.fromisoformat(document['created_at']),
            expires_at=datetime.fromisoformat(document['expires_at']),
        )
    except (ValueError, KeyError, TypeError) as e:
        raise ClipCorruptedError(f'Malformed clip document in Redis: {e}') from e
