from datetime import datetime, timedelta, UTC

import pytest

from burnclip.constants import TTL
from burnclip.models import ClipKind, ClipModel, FileRef


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 17, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def text_clip(now: datetime) -> ClipModel:
    return ClipModel(
        code='K3Q',
        kind=ClipKind.TEXT,
        content='hello',
        created_at=now,
        expires_at=now + timedelta(seconds=TTL.CLIP),
    )


@pytest.fixture
def file_clip(now: datetime) -> ClipModel:
    return ClipModel(
        code='F1L',
        kind=ClipKind.FILE,
        file=FileRef(path='F1L/9f2c61ab/report.pdf', url='memory://blobs/F1L/9f2c61ab/report.pdf', filename='report.pdf'),
        created_at=now,
        expires_at=now + timedelta(seconds=TTL.CLIP),
    )
