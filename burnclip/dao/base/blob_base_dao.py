"""Abstract base class for blob store data access objects (DAOs).

The blob store keeps file bytes for FILE clips. Bytes are addressed by a path
derived from the clip code, a per-send nonce and the original filename,
e.g. 'K3Q/9f2c61ab/report.pdf'.
"""

from abc import ABC, abstractmethod


class BlobBaseDAO(ABC):
    """Interface for path-addressed blob stores.

    Methods:
        upload(path: str, data: bytes, content_type: str | None = None) -> BlobBaseDAO:
            Write bytes under a path, replacing anything stored there.

        url(path: str) -> str:
            Return a locator the receiver can download the bytes from.

        exists(path: str) -> bool:
            Check whether bytes are stored under a path.

        delete(path: str) -> None:
            Idempotently delete the bytes under a path.

    All methods raise BlobStoreError when the blob store fails or times out.
    """

    @abstractmethod
    def upload(self, path: str, data: bytes, content_type: str | None = None) -> 'BlobBaseDAO':
        pass

    @abstractmethod
    def url(self, path: str) -> str:
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def delete(self, path: str) -> None:
        pass
