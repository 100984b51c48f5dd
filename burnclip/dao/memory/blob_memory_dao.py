"""In-process blob store backing the 'memory' backend"""

import threading
from urllib.parse import quote

from beartype import beartype

from burnclip.dao.base import BlobBaseDAO


class BlobMemoryDAO(BlobBaseDAO):
    """Keep blobs in a dictionary and hand out `memory://` locators for them."""

    def __init__(self, base_url: str = 'memory://blobs'):
        self.base_url = base_url.rstrip('/')
        self._blobs: dict[str, bytes] = {}
        self._lock = threading.Lock()

    @beartype
    def upload(self, path: str, data: bytes, content_type: str | None = None) -> 'BlobMemoryDAO':
        with self._lock:
            self._blobs[path] = bytes(data)
        return self

    @beartype
    def url(self, path: str) -> str:
        return f'{self.base_url}/{quote(path)}'

    @beartype
    def exists(self, path: str) -> bool:
        with self._lock:
            return path in self._blobs

    @beartype
    def delete(self, path: str) -> None:
        with self._lock:
            self._blobs.pop(path, None)
