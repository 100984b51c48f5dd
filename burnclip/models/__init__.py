from burnclip.models.clip_model import ClipKind, FileRef, ClipModel
from burnclip.models.redemption_model import Redemption


__all__ = [
    'ClipKind',
    'FileRef',
    'ClipModel',
    'Redemption',
]
