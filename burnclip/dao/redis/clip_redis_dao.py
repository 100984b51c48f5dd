"""Data Access Object (DAO) implementation for managing clips in Redis

This module provides a Redis-based implementation of ClipBaseDAO for storing,
fetching and burning ClipModel instances.

Responsibilities:
    - Insert clips atomically only if their code is unused (SET NX);
    - Fetch-and-delete clips atomically on redeem (GETDEL);
    - Keep expired clips around long enough to report them as expired, and let
      Redis reap the ones nobody redeems;
    - Translate redis-py errors into DAO exceptions.

Classes:
    ClipRedisDAO:
        DAO for storing and retrieving ClipModel in a Redis datastore.

Example:
    >>> from burnclip.dao.redis import ClipRedisDAO

    >>> dao = ClipRedisDAO(prefix="burnclip:dev")
    >>> dao.insert(clip)
    <ClipRedisDAO>

    >>> dao.take("K3Q").content
    'hello'
    >>> dao.take("K3Q")
    Traceback (most recent call last):
        ...
    burnclip.dao.exceptions.ClipNotFoundError: Clip with code 'K3Q' not found.
"""

import logging
from datetime import datetime, timedelta

import redis
from beartype import beartype

from burnclip.constants import TTL, CLIP_CORRUPTED
from burnclip.models import ClipModel
from burnclip.dao.base import ClipBaseDAO
from burnclip.dao.redis.mixins import RedisClientMixin
from burnclip.dao.redis.helpers import handle_redis_errors, dump_clip, load_clip
from burnclip.dao.exceptions import ClipAlreadyExistsError, ClipCorruptedError, ClipNotFoundError


logger = logging.getLogger(__name__)


class ClipRedisDAO(RedisClientMixin, ClipBaseDAO):
    """Redis-based Data Access Object (DAO) for managing clips

    This class implements the ClipBaseDAO interface using Redis as a data store.
    Each clip is a single JSON string under `<prefix>:clips:<code>`.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        exists(code: str, **kwargs) -> bool
        insert(clip: ClipModel, **kwargs) -> ClipRedisDAO
        get(code: str, **kwargs) -> ClipModel
        take(code: str, **kwargs) -> ClipModel
        delete(code: str, **kwargs) -> bool
        discard(clip: ClipModel, **kwargs) -> bool
        expired(now: datetime, **kwargs) -> list[ClipModel]
        healthcheck(raise_error: bool = False) -> bool

    Example:
        >>> dao = ClipRedisDAO(redis_host="localhost", prefix="burnclip:test")
        >>> dao.insert(clip)
        <ClipRedisDAO>
        >>> dao.exists("K3Q")
        True
    """

    @handle_redis_errors
    @beartype
    def exists(self, code: str, **kwargs) -> bool:
        return bool(self.redis.exists(self.keys.clip_key(code)))

    @handle_redis_errors
    @beartype
    def insert(self, clip: ClipModel, **kwargs) -> 'ClipRedisDAO':
        """Insert a clip into Redis unless its code is already live

        SET NX makes the existence check and the write a single command, so two
        senders that drew the same code can't both store a clip under it.

        The key expires CLIP_RETENTION after the clip itself expires. Until then,
        a late redeem still finds the record and reports it as expired instead
        of unknown.

        Args:
            clip (ClipModel):
                ClipModel instance to store.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ClipRedisDAO: self (for method chaining)

        Raises:
            ClipAlreadyExistsError:
                If a clip with the same code already exists.
            DataStoreError:
                If a Redis connection issue occurs.

        Example:
            >>> dao.insert(clip)
            <ClipRedisDAO>
        """
        reap_at = clip.expires_at + timedelta(seconds=TTL.CLIP_RETENTION)
        # fmt: off
        created = self.redis.set(self.keys.clip_key(clip.code),
                                 dump_clip(clip),
                                 nx=True,
                                 exat=int(reap_at.timestamp()))
        # fmt: on
        if not created:
            raise ClipAlreadyExistsError(f"Clip with code '{clip.code}' already exists.")
        return self

    @handle_redis_errors
    @beartype
    def get(self, code: str, **kwargs) -> ClipModel:
        raw = self.redis.get(self.keys.clip_key(code))
        if raw is None:
            raise ClipNotFoundError(f"Clip with code '{code}' not found.")
        return load_clip(raw)

    @handle_redis_errors
    @beartype
    def take(self, code: str, **kwargs) -> ClipModel:
        """Fetch and delete a clip with a single GETDEL

        NOTE: A GET followed by a DEL would let two concurrent redeemers both
              read the clip before either deletes it:

              (receiver 1): GET <app>:clips:<code>  => clip
              (receiver 2): GET <app>:clips:<code>  => clip
              (receiver 1): DEL <app>:clips:<code>
              (receiver 2): DEL <app>:clips:<code>  => no-op, but content was delivered twice

              GETDEL returns the value to exactly one caller, every other caller gets nil.

        Args:
            code (str):
                The clip code.

        Returns:
            ClipModel: The clip, which no longer exists in Redis.

        Raises:
            ClipNotFoundError:
                If no clip is stored under the code.
            ClipCorruptedError:
                If the stored record can't be decoded. The key is deleted regardless.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        raw = self.redis.getdel(self.keys.clip_key(code))
        if raw is None:
            raise ClipNotFoundError(f"Clip with code '{code}' not found.")
        return load_clip(raw)

    @handle_redis_errors
    @beartype
    def delete(self, code: str, **kwargs) -> bool:
        return bool(self.redis.delete(self.keys.clip_key(code)))

    @handle_redis_errors
    @beartype
    def expired(self, now: datetime, **kwargs) -> list[ClipModel]:
        """List clips whose expires_at lies before `now`

        Walks the clip keyspace with SCAN so Redis isn't blocked. Keys that vanish
        between SCAN and GET (redeemed or reaped meanwhile) are skipped, and so
        are records that can't be decoded. Redis reaps those through their key expiry.

        Args:
            now (datetime):
                Reference time (UTC).
            **kwargs:
                count (int): SCAN batch size hint. Defaults to 500.

        Returns:
            list[ClipModel]: Expired clips still present in Redis.
        """
        clips = []
        for key in self.redis.scan_iter(match=self.keys.clip_pattern(), count=kwargs.get('count', 500)):
            raw = self.redis.get(key)
            if raw is None:
                continue
            try:
                clip = load_clip(raw)
            except ClipCorruptedError:
                logger.warning(
                    'Skipping unreadable clip record.',
                    exc_info=True,
                    extra={'event': CLIP_CORRUPTED, 'key': key},
                )
                continue
            if clip.expires_at < now:
                clips.append(clip)
        return clips

    @handle_redis_errors
    @beartype
    def discard(self, clip: ClipModel, **kwargs) -> bool:
        """Delete a clip only if its key still holds this exact clip

        WATCH makes the DEL fail if anything touched the key after we read it,
        e.g. a receiver redeemed the clip and a sender reused the code.

        Returns:
            bool: True if the clip was deleted, False otherwise.
        """
        key = self.keys.clip_key(clip.code)
        with self.redis.pipeline() as pipe:
            try:
                pipe.watch(key)
                raw = pipe.get(key)
                try:
                    stored = load_clip(raw) if raw is not None else None
                except ClipCorruptedError:
                    stored = None
                if stored != clip:
                    pipe.unwatch()
                    return False
                pipe.multi()
                pipe.delete(key)
                pipe.execute()
            except redis.exceptions.WatchError:
                return False
        return True
