"""Clip record stored behind a short code.

Classes:
    ClipKind:
        Payload kind of a clip (inline text or uploaded file).
    FileRef:
        Reference to file bytes held by the blob store.
    ClipModel:
        Immutable clip record keyed by its code.

Example:
    >>> from datetime import datetime, timedelta, UTC
    >>> now = datetime.now(UTC)
    >>> clip = ClipModel(
    ...     code='K3Q',
    ...     kind=ClipKind.TEXT,
    ...     content='hello',
    ...     created_at=now,
    ...     expires_at=now + timedelta(hours=1),
    ... )
    >>> clip.is_expired(now)
    False
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from burnclip.constants import Code


class ClipKind(StrEnum):
    TEXT = 'text'
    FILE = 'file'


# fmt: off
@dataclass(frozen=True)
class FileRef:
    path: str       # Blob store key, e.g. 'K3Q/9f2c61ab/report.pdf'
    url: str        # Retrievable locator handed to the receiver
    filename: str   # Original filename as uploaded by the sender
# fmt: on


@dataclass(frozen=True)
class ClipModel:
    """Represent one pending exchange.

    Records are never updated once created. Deleting them is the only mutation,
    and existence in the store means the clip is live and redeemable.

    Attributes:
        code (str):
            3-character identifier over [A-Z0-9].
        kind (ClipKind):
            Payload kind.
        content (str | None):
            Inline text. Present iff kind is TEXT.
        file (FileRef | None):
            Blob reference. Present iff kind is FILE.
        created_at (datetime):
            Creation time (UTC).
        expires_at (datetime):
            Time after which the clip can no longer be redeemed (UTC).

    Raises:
        ValueError:
            If the code is malformed, the payload doesn't match the kind,
            or expires_at isn't after created_at.
    """

    code: str
    kind: ClipKind
    created_at: datetime
    expires_at: datetime
    content: str | None = None
    file: FileRef | None = None

    def __post_init__(self):
        object.__setattr__(self, 'kind', ClipKind(self.kind))
        if not is_valid_code(self.code):
            raise ValueError(f"Clip code must be {Code.LENGTH} characters from [A-Z0-9] (given value: {self.code!r}).")
        if self.kind == ClipKind.TEXT and (self.content is None or self.file is not None):
            raise ValueError('Text clips carry inline content and no file reference.')
        if self.kind == ClipKind.FILE and (self.file is None or self.content is not None):
            raise ValueError('File clips carry a file reference and no inline content.')
        if self.expires_at <= self.created_at:
            raise ValueError(f'Clip must expire after it is created (created_at={self.created_at}, expires_at={self.expires_at}).')

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


def is_valid_code(code: object) -> bool:
    return isinstance(code, str) and len(code) == Code.LENGTH and all(c in Code.ALPHABET for c in code)
