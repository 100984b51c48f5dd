from burnclip.dao.memory.clip_memory_dao import ClipMemoryDAO
from burnclip.dao.memory.blob_memory_dao import BlobMemoryDAO


__all__ = [
    'ClipMemoryDAO',
    'BlobMemoryDAO',
]
