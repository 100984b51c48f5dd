"""Unit tests for the PayloadHandler

Test coverage includes:

1. Blob paths
   - Ensures only the last filename component is used.
   - Confirms filenames without a name component raise ValueError.

2. Text payloads
   - Ensures text clips expire one TTL after creation.
   - Confirms whitespace-only text raises ValueError.

3. File payloads
   - Ensures file bytes are uploaded and referenced by the clip.
   - Confirms blob store failures map to UploadFailedError and TransientError.

4. Releasing files
   - Ensures blobs are deleted and failures are logged but never raised.
"""

import logging
import re
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from burnclip.constants import TTL
from burnclip.dao.base import BlobBaseDAO
from burnclip.dao.exceptions import BlobStoreError, BlobStoreRejectedError
from burnclip.dao.memory import BlobMemoryDAO
from burnclip.exceptions import SendFailedError, TransientError, UploadFailedError
from burnclip.exchange.constants import BLOB_RELEASE_FAILED
from burnclip.exchange.payloads import PayloadHandler, blob_path
from burnclip.models import ClipKind, FileRef


@pytest.fixture
def blobs() -> BlobMemoryDAO:
    return BlobMemoryDAO()


@pytest.fixture
def payloads(blobs, now) -> PayloadHandler:
    return PayloadHandler(blobs, clock=lambda: now)


# -------------------------------
# 1. Blob paths
# -------------------------------


@pytest.mark.parametrize(
    'filename, expected',
    [
        ('report.pdf', 'K3Q/9f2c61ab/report.pdf'),
        ('drafts/report.pdf', 'K3Q/9f2c61ab/report.pdf'),
        ('../../etc/passwd', 'K3Q/9f2c61ab/passwd'),
        ('C:\\Users\\me\\notes.txt', 'K3Q/9f2c61ab/notes.txt'),
    ],
)
def test_blob_path(filename, expected):
    assert blob_path('K3Q', filename, '9f2c61ab') == expected


@pytest.mark.parametrize('filename', ['', '..', '.', 'drafts/..'])
def test_blob_path_without_name(filename):
    with pytest.raises(ValueError, match='Filename must name a file'):
        blob_path('K3Q', filename, '9f2c61ab')


# -------------------------------
# 2. Text payloads
# -------------------------------


def test_pack_text(payloads, now):
    clip = payloads.pack_text('K3Q', 'hello')

    assert clip.kind == ClipKind.TEXT
    assert clip.content == 'hello'
    assert clip.file is None
    assert clip.created_at == now
    assert clip.expires_at == now + timedelta(seconds=TTL.CLIP)


@pytest.mark.parametrize('content', ['', '   ', '\n\t'])
def test_pack_blank_text(payloads, content):
    with pytest.raises(ValueError, match='non-whitespace content'):
        payloads.pack_text('K3Q', content)


@pytest.mark.parametrize('ttl', [0, -60])
def test_handler_with_invalid_ttl(blobs, ttl):
    with pytest.raises(ValueError, match='Clip TTL must be a positive number of seconds'):
        PayloadHandler(blobs, ttl=ttl)


def test_pack_text_with_custom_ttl(blobs, now):
    clip = PayloadHandler(blobs, ttl=60, clock=lambda: now).pack_text('K3Q', 'hello')
    assert clip.expires_at == now + timedelta(seconds=60)


# -------------------------------
# 3. File payloads
# -------------------------------


def test_pack_file(payloads, blobs, now):
    clip = payloads.pack_file('F1L', b'%PDF-1.7', 'report.pdf')

    assert clip.kind == ClipKind.FILE
    assert clip.content is None
    assert clip.file.filename == 'report.pdf'
    assert re.fullmatch(r'F1L/[0-9a-f]{8}/report\.pdf', clip.file.path)
    assert clip.file.url == f'memory://blobs/{clip.file.path}'
    assert blobs.exists(clip.file.path)
    assert clip.expires_at == now + timedelta(seconds=TTL.CLIP)


def test_pack_file_uses_fresh_paths(payloads):
    first = payloads.pack_file('F1L', b'one', 'report.pdf')
    second = payloads.pack_file('F1L', b'two', 'report.pdf')

    assert first.file.path != second.file.path


def test_pack_file_guesses_content_type(now):
    blobs = MagicMock(spec=BlobBaseDAO)
    blobs.url.return_value = 'https://files.burnclip.test/F1L/9f2c61ab/report.pdf'

    PayloadHandler(blobs, clock=lambda: now).pack_file('F1L', b'%PDF-1.7', 'report.pdf')

    path = blobs.upload.call_args.args[0]
    blobs.upload.assert_called_once_with(path, b'%PDF-1.7', content_type='application/pdf')
    blobs.url.assert_called_once_with(path)


@pytest.mark.parametrize(
    'error, expected',
    [
        (BlobStoreRejectedError('S3 bucket burnclip-files rejected upload() (AccessDenied).'), UploadFailedError),
        (BlobStoreError("Can't reach S3 bucket burnclip-files during upload()."), TransientError),
    ],
)
def test_pack_file_with_failing_blob_store(now, error, expected):
    blobs = MagicMock(spec=BlobBaseDAO)
    blobs.upload.side_effect = error

    with pytest.raises(expected, match="Upload of 'report.pdf'") as exc_info:
        PayloadHandler(blobs, clock=lambda: now).pack_file('F1L', b'%PDF-1.7', 'report.pdf')

    assert exc_info.value.__cause__ is error
    assert isinstance(exc_info.value, SendFailedError) is (expected is UploadFailedError)


# -------------------------------
# 4. Releasing files
# -------------------------------


def test_release_file(payloads, blobs):
    clip = payloads.pack_file('F1L', b'%PDF-1.7', 'report.pdf')

    assert payloads.release_file(clip.file) is True
    assert not blobs.exists(clip.file.path)
    assert payloads.release_file(clip.file) is True  # already gone


def test_release_file_failure_is_logged(now, caplog):
    blobs = MagicMock(spec=BlobBaseDAO)
    blobs.delete.side_effect = BlobStoreError("Can't reach S3 bucket burnclip-files during delete().")
    file = FileRef(path='F1L/9f2c61ab/report.pdf', url='https://files.burnclip.test/F1L/9f2c61ab/report.pdf', filename='report.pdf')

    with caplog.at_level(logging.WARNING, logger='burnclip.exchange.payloads'):
        assert PayloadHandler(blobs, clock=lambda: now).release_file(file) is False

    record = caplog.records[-1]
    assert record.event == BLOB_RELEASE_FAILED
    assert record.path == 'F1L/9f2c61ab/report.pdf'
    assert record.exc_info is not None
