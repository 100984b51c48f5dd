"""Unit tests for the ClipModel, FileRef and Redemption dataclasses.

Test coverage includes:

1. Model creation
   - Ensures text and file clips can be created with valid data.
   - Ensures kinds given as plain strings are coerced to ClipKind.

2. Validation
   - Rejects malformed codes.
   - Rejects payloads that don't match the kind.
   - Rejects clips that expire before (or when) they are created.

3. Expiry semantics
   - is_expired() is strict: a clip is still live at exactly expires_at.

4. Immutability
   - Verifies that fields are frozen.

5. Redemption
   - Builds receiver-facing results for text and file clips.
"""

from dataclasses import FrozenInstanceError
from datetime import timedelta

import pytest

from burnclip.models import ClipKind, ClipModel, FileRef, Redemption
from burnclip.models.clip_model import is_valid_code


# -------------------------------------------------
# 1. Model creation
# -------------------------------------------------


def test_valid_text_clip_creation(text_clip):
    """Ensure a text clip keeps its content and carries no file reference."""
    assert text_clip.code == 'K3Q'
    assert text_clip.kind == ClipKind.TEXT
    assert text_clip.content == 'hello'
    assert text_clip.file is None
    assert text_clip.expires_at - text_clip.created_at == timedelta(hours=1)


def test_valid_file_clip_creation(file_clip):
    """Ensure a file clip references its blob and carries no inline content."""
    assert file_clip.kind == ClipKind.FILE
    assert file_clip.content is None
    assert file_clip.file == FileRef(path='F1L/9f2c61ab/report.pdf', url='memory://blobs/F1L/9f2c61ab/report.pdf', filename='report.pdf')


def test_kind_is_coerced_from_string(now):
    clip = ClipModel(code='ABC', kind='text', content='hi', created_at=now, expires_at=now + timedelta(seconds=1))
    assert clip.kind is ClipKind.TEXT


# -------------------------------------------------
# 2. Validation
# -------------------------------------------------


@pytest.mark.parametrize('code', ['', 'AB', 'ABCD', 'ab1', 'A-1', 'ÄB1', 123])
def test_invalid_code_is_rejected(now, code):
    with pytest.raises(ValueError):
        ClipModel(code=code, kind=ClipKind.TEXT, content='hi', created_at=now, expires_at=now + timedelta(seconds=1))


def test_text_clip_without_content_is_rejected(now):
    with pytest.raises(ValueError, match='Text clips'):
        ClipModel(code='ABC', kind=ClipKind.TEXT, created_at=now, expires_at=now + timedelta(seconds=1))


def test_file_clip_with_inline_content_is_rejected(now):
    file = FileRef(path='ABC/a.txt', url='memory://blobs/ABC/a.txt', filename='a.txt')
    with pytest.raises(ValueError, match='File clips'):
        ClipModel(code='ABC', kind=ClipKind.FILE, content='hi', file=file, created_at=now, expires_at=now + timedelta(seconds=1))


@pytest.mark.parametrize('lifetime', [timedelta(0), timedelta(seconds=-1)])
def test_clip_must_expire_after_creation(now, lifetime):
    with pytest.raises(ValueError, match='expire after'):
        ClipModel(code='ABC', kind=ClipKind.TEXT, content='hi', created_at=now, expires_at=now + lifetime)


def test_unknown_kind_is_rejected(now):
    with pytest.raises(ValueError):
        ClipModel(code='ABC', kind='image', content='hi', created_at=now, expires_at=now + timedelta(seconds=1))


def test_is_valid_code():
    assert is_valid_code('Z9Z')
    assert not is_valid_code('z9z')
    assert not is_valid_code(None)


# -------------------------------------------------
# 3. Expiry semantics
# -------------------------------------------------


def test_clip_is_live_until_after_expires_at(text_clip):
    assert not text_clip.is_expired(text_clip.created_at)
    assert not text_clip.is_expired(text_clip.expires_at)
    assert text_clip.is_expired(text_clip.expires_at + timedelta(microseconds=1))


# -------------------------------------------------
# 4. Immutability
# -------------------------------------------------


def test_clip_is_frozen(text_clip):
    with pytest.raises(FrozenInstanceError):
        text_clip.content = 'changed'


# -------------------------------------------------
# 5. Redemption
# -------------------------------------------------


def test_redemption_from_text_clip(text_clip):
    assert Redemption.from_clip(text_clip) == Redemption(code='K3Q', kind=ClipKind.TEXT, content='hello')


def test_redemption_from_file_clip(file_clip):
    redemption = Redemption.from_clip(file_clip)
    assert redemption.kind == ClipKind.FILE
    assert redemption.content is None
    assert redemption.url == 'memory://blobs/F1L/9f2c61ab/report.pdf'
    assert redemption.filename == 'report.pdf'
