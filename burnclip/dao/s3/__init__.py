from burnclip.dao.s3.mixins import S3ClientMixin
from burnclip.dao.s3.blob_s3_dao import BlobS3DAO


__all__ = [
    'S3ClientMixin',
    'BlobS3DAO',
]
