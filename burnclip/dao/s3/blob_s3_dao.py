"""Data Access Object (DAO) implementation for clip file bytes in S3

Classes:
    BlobS3DAO:
        DAO for uploading, locating and deleting clip files in an S3 bucket.

Example:
    >>> from burnclip.dao.s3 import BlobS3DAO
    >>> blobs = BlobS3DAO(bucket='burnclip-files', region='eu-central-1')
    >>> blobs.upload('K3Q/9f2c61ab/report.pdf', b'%PDF-1.7 ...')
    <BlobS3DAO>
    >>> blobs.url('K3Q/9f2c61ab/report.pdf')
    'https://burnclip-files.s3.amazonaws.com/K3Q/9f2c61ab/report.pdf?X-Amz-Algorithm=...'
"""

from urllib.parse import quote

from beartype import beartype
from botocore.exceptions import ClientError

from burnclip.dao.base import BlobBaseDAO
from burnclip.dao.s3.mixins import S3ClientMixin
from burnclip.dao.s3.helpers import handle_s3_client_error


class BlobS3DAO(S3ClientMixin, BlobBaseDAO):
    """S3-based blob store for FILE clips

    Attributes (see S3ClientMixin):
        s3 (S3Client):
            boto3 S3 client.
        bucket (str):
            Bucket holding the blobs.

    Methods:
        upload(path: str, data: bytes, content_type: str | None = None) -> BlobS3DAO
        url(path: str) -> str
        exists(path: str) -> bool
        delete(path: str) -> None

    All methods raise BlobStoreError on S3 failures.
    """

    @handle_s3_client_error
    @beartype
    def upload(self, path: str, data: bytes, content_type: str | None = None) -> 'BlobS3DAO':
        extra = {'ContentType': content_type} if content_type else {}
        self.s3.put_object(Bucket=self.bucket, Key=path, Body=data, **extra)
        return self

    @handle_s3_client_error
    @beartype
    def url(self, path: str) -> str:
        """Return a download URL for the blob under `path`

        Uses the configured public base URL if any, otherwise a presigned GET URL
        which stops working after `url_expires_in` seconds.
        """
        if self.public_base_url is not None:
            return f'{self.public_base_url}/{quote(path)}'
        # fmt: off
        return self.s3.generate_presigned_url('get_object',
                                              Params={'Bucket': self.bucket, 'Key': path},
                                              ExpiresIn=self.url_expires_in)
        # fmt: on

    @handle_s3_client_error
    @beartype
    def exists(self, path: str) -> bool:
        try:
            self.s3.head_object(Bucket=self.bucket, Key=path)
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') in ('404', 'NoSuchKey', 'NotFound'):
                return False
            raise
        return True

    @handle_s3_client_error
    @beartype
    def delete(self, path: str) -> None:
        # DeleteObject succeeds for missing keys, which keeps this idempotent
        self.s3.delete_object(Bucket=self.bucket, Key=path)
