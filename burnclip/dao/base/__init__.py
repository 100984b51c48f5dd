from burnclip.dao.base.clip_base_dao import ClipBaseDAO
from burnclip.dao.base.blob_base_dao import BlobBaseDAO


__all__ = [
    'ClipBaseDAO',
    'BlobBaseDAO',
]
