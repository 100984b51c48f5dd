import functools
from typing import TypeVar, Any
from collections.abc import Callable

from botocore.exceptions import BotoCoreError, ClientError

from burnclip.dao.exceptions import BlobStoreError, BlobStoreRejectedError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_s3_client_error[F](method: F) -> F:
    """Wrap S3-interacting DAO methods to handle client errors, connection errors and timeouts

    Args:
        method (Callable[..., Any]):
            DAO method performing S3 operations which may raise botocore's ClientError
            or BotoCoreError (e.g. EndpointConnectionError, ReadTimeoutError).

    Returns:
        Callable[..., Any]:
            Wrapped method which raises BlobStoreRejectedError when S3 refuses a request
            and BlobStoreError when S3 can't be reached.

    Example:
        >>> @handle_s3_client_error
        ... def delete(self, path):
        ...     self.s3.delete_object(Bucket=self.bucket, Key=path)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code', 'Unknown')
            raise BlobStoreRejectedError(f'S3 bucket {self.bucket} rejected {method.__name__}() ({error_code}).') from e
        except BotoCoreError as e:
            raise BlobStoreError(f"Can't reach S3 bucket {self.bucket} during {method.__name__}().") from e

    return wrapper
