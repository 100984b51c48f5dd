"""Turn send payloads into clip records and clean up their blobs

Classes:
    PayloadHandler:
        Pack inline text and uploaded files into ClipModel records, and release
        file bytes once a clip is gone.

Functions:
    blob_path(code, filename, nonce) -> str:
        Blob store path for a file clip, e.g. 'K3Q/9f2c61ab/report.pdf'.
"""

import logging
import mimetypes
import secrets
from datetime import datetime, timedelta
from pathlib import PurePosixPath

from beartype import beartype

from burnclip.constants import TTL
from burnclip.dao.base import BlobBaseDAO
from burnclip.dao.exceptions import BlobStoreError, BlobStoreRejectedError
from burnclip.exceptions import TransientError, UploadFailedError
from burnclip.exchange.constants import BLOB_RELEASE_FAILED
from burnclip.models import ClipKind, ClipModel, FileRef
from burnclip.types import Clock
from burnclip.utils.helpers import utc_now


logger = logging.getLogger(__name__)


@beartype
def blob_path(code: str, filename: str, nonce: str) -> str:
    """Derive the blob path of a file clip from its code, filename and a per-send nonce

    Only the last path component of the filename is kept, so senders can't
    write outside their clip's folder. The nonce keeps two senders racing for
    the same code from sharing a path.

    Raises:
        ValueError:
            If the filename has no usable name component.

    Example:
        >>> blob_path('K3Q', 'drafts/report.pdf', '9f2c61ab')
        'K3Q/9f2c61ab/report.pdf'
    """
    name = PurePosixPath(filename.replace('\\', '/')).name
    if not name or name in {'.', '..'}:
        raise ValueError(f'Filename must name a file (given value: {filename!r}).')
    return f'{code}/{nonce}/{name}'


class PayloadHandler:
    """Normalize text and file payloads into a single storable record shape

    Attributes:
        blobs (BlobBaseDAO):
            Blob store holding file bytes.
        ttl (int):
            Clip lifetime in seconds.
        clock (Clock):
            Source of the current UTC time.
    """

    def __init__(self, blobs: BlobBaseDAO, ttl: int = TTL.CLIP, clock: Clock = utc_now):
        if ttl <= 0:
            raise ValueError(f'Clip TTL must be a positive number of seconds (given value: {ttl}).')

        self.blobs = blobs
        self.ttl = ttl
        self.clock = clock

    def _lifetime(self) -> tuple[datetime, datetime]:
        created_at = self.clock()
        return created_at, created_at + timedelta(seconds=self.ttl)

    @beartype
    def pack_text(self, code: str, content: str) -> ClipModel:
        if not content.strip():
            raise ValueError('Text clips must contain non-whitespace content.')

        created_at, expires_at = self._lifetime()
        return ClipModel(code=code, kind=ClipKind.TEXT, content=content, created_at=created_at, expires_at=expires_at)

    @beartype
    def pack_file(self, code: str, data: bytes, filename: str, content_type: str | None = None) -> ClipModel:
        """Upload file bytes and return a clip referencing them

        If the upload or the URL lookup fails no record is returned. Bytes that
        did reach the blob store stay there unreferenced.

        Args:
            code (str):
                Code of the clip being sent.
            data (bytes):
                File contents.
            filename (str):
                Original filename, kept on the record.
            content_type (str | None):
                MIME type. Guessed from the filename when omitted.

        Returns:
            ClipModel: A FILE clip.

        Raises:
            UploadFailedError:
                If the blob store rejects the upload.
            TransientError:
                If the blob store can't be reached or times out.
        """
        path = blob_path(code, filename, secrets.token_hex(4))
        content_type = content_type or mimetypes.guess_type(filename)[0]

        try:
            self.blobs.upload(path, data, content_type=content_type)
            url = self.blobs.url(path)
        except BlobStoreRejectedError as e:
            raise UploadFailedError(f"Upload of '{filename}' failed: {e}") from e
        except BlobStoreError as e:
            raise TransientError(f"Upload of '{filename}' didn't complete: {e}") from e

        created_at, expires_at = self._lifetime()
        # fmt: off
        return ClipModel(code=code,
                         kind=ClipKind.FILE,
                         file=FileRef(path=path, url=url, filename=filename),
                         created_at=created_at,
                         expires_at=expires_at)
        # fmt: on

    def release_file(self, file: FileRef) -> bool:
        """Delete the bytes behind a file reference, best effort

        Failures are logged and swallowed: a clip is consumed once its record is
        gone, whether or not its bytes could be cleaned up.

        Returns:
            bool: True if the blob store confirmed the delete.
        """
        try:
            self.blobs.delete(file.path)
        except BlobStoreError:
            logger.warning(
                'Failed to release clip file from blob store.',
                exc_info=True,
                extra={'event': BLOB_RELEASE_FAILED, 'path': file.path},
            )
            return False
        return True
