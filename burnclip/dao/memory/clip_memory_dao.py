"""In-process clip store

Backs the 'memory' backend used for local runs and tests. A single lock guards
the dictionary, which gives the same atomic insert-if-absent and fetch-and-delete
guarantees as the Redis implementation within one process.
"""

import threading
from datetime import datetime

from beartype import beartype

from burnclip.models import ClipModel
from burnclip.dao.base import ClipBaseDAO
from burnclip.dao.exceptions import ClipAlreadyExistsError, ClipNotFoundError


class ClipMemoryDAO(ClipBaseDAO):
    def __init__(self):
        self._clips: dict[str, ClipModel] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._clips)

    @beartype
    def exists(self, code: str, **kwargs) -> bool:
        with self._lock:
            return code in self._clips

    @beartype
    def insert(self, clip: ClipModel, **kwargs) -> 'ClipMemoryDAO':
        with self._lock:
            if clip.code in self._clips:
                raise ClipAlreadyExistsError(f"Clip with code '{clip.code}' already exists.")
            self._clips[clip.code] = clip
        return self

    @beartype
    def get(self, code: str, **kwargs) -> ClipModel:
        with self._lock:
            clip = self._clips.get(code)
        if clip is None:
            raise ClipNotFoundError(f"Clip with code '{code}' not found.")
        return clip

    @beartype
    def take(self, code: str, **kwargs) -> ClipModel:
        with self._lock:
            clip = self._clips.pop(code, None)
        if clip is None:
            raise ClipNotFoundError(f"Clip with code '{code}' not found.")
        return clip

    @beartype
    def delete(self, code: str, **kwargs) -> bool:
        with self._lock:
            return self._clips.pop(code, None) is not None

    @beartype
    def discard(self, clip: ClipModel, **kwargs) -> bool:
        with self._lock:
            if self._clips.get(clip.code) != clip:
                return False
            del self._clips[clip.code]
            return True

    @beartype
    def expired(self, now: datetime, **kwargs) -> list[ClipModel]:
        with self._lock:
            return [clip for clip in self._clips.values() if clip.expires_at < now]

    def healthcheck(self, raise_error: bool = False) -> bool:
        return True
