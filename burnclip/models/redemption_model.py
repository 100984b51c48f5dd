from dataclasses import dataclass

from burnclip.models.clip_model import ClipKind, ClipModel


@dataclass(frozen=True)
class Redemption:
    """What a receiver gets back from a successful redeem.

    Text clips fill `content`; file clips fill `url` and `filename`.
    """

    code: str
    kind: ClipKind
    content: str | None = None
    url: str | None = None
    filename: str | None = None

    @classmethod
    def from_clip(cls, clip: ClipModel) -> 'Redemption':
        if clip.kind == ClipKind.FILE:
            return cls(code=clip.code, kind=clip.kind, url=clip.file.url, filename=clip.file.filename)
        return cls(code=clip.code, kind=clip.kind, content=clip.content)
