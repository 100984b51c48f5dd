"""S3 mixin providing shared boto3 client initialization for blob DAOs.

Classes:
    - S3ClientMixin: Base mixin to inject an S3 client configured with timeouts and no retries.
"""

import boto3
from botocore.config import Config

from burnclip.constants import TTL, Timeout
from burnclip.types import S3Client


class S3ClientMixin:
    """Mixin boto3 S3 client setup for S3-backed DAOs.

    Attributes:
        s3 (S3Client):
            boto3 S3 client used by subclasses.
        bucket (str):
            Bucket holding the blobs.
        public_base_url (str | None):
            Public URL prefix of the bucket. When unset, presigned URLs are handed out.
        url_expires_in (int):
            Lifetime of presigned URLs in seconds.
    """

    def __init__(
        self,
        bucket: str,
        region: str | None = None,
        endpoint_url: str | None = None,
        public_base_url: str | None = None,
        timeout: float = Timeout.S3,
        url_expires_in: int = TTL.CLIP,
        s3_client: S3Client | None = None,
    ):
        """Initialize an S3-based DAO

        Args:
            bucket (str):
                Name of the S3 bucket.
            region (str | None):
                AWS region of the bucket. Falls back to boto3's default resolution.
            endpoint_url (str | None):
                Custom endpoint, e.g. LocalStack when running locally.
            public_base_url (str | None):
                Public URL prefix used to build download URLs.
            timeout (float):
                Connect and read timeout in seconds. Defaults to Timeout.S3.
            url_expires_in (int):
                Presigned URL lifetime in seconds. Defaults to the clip TTL.
            s3_client (S3Client | None):
                Pre-initialized boto3 S3 client. If None, a new client is created.
        """
        if not bucket:
            raise ValueError('S3 bucket name must be a non-empty string.')

        if s3_client is None:
            # Retries belong to the caller, so boto3 gets exactly one attempt per call
            s3_client = boto3.client(
                's3',
                region_name=region,
                endpoint_url=endpoint_url,
                config=Config(
                    connect_timeout=timeout,
                    read_timeout=timeout,
                    retries={'total_max_attempts': 1, 'mode': 'standard'},
                ),
            )

        self.s3 = s3_client
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip('/') if public_base_url else None
        self.url_expires_in = int(url_expires_in)
