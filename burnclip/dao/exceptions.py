"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ClipNotFoundError:
        Raised when a ClipModel is not found in the clip store.

    ClipAlreadyExistsError:
        Raised when attempting to insert a ClipModel whose code is already live.

    DataStoreError:
        Raised when the clip store can't be reached (e.g., connection issues, timeouts).

    DataStoreRejectedError:
        Raised when the clip store is reachable but rejects a command (e.g., OOM, READONLY replica).

    ClipCorruptedError:
        Raised when a stored clip record can't be decoded.

    BlobStoreError:
        Raised when the blob store can't be reached (e.g., connection issues, timeouts).

    BlobStoreRejectedError:
        Raised when the blob store rejects an upload, lookup or delete (e.g., AccessDenied).

Example:
    >>> from burnclip.dao.exceptions import ClipNotFoundError
    >>> raise ClipNotFoundError("Clip with code 'K3Q' not found.")
    Traceback (most recent call last):
        ...
    burnclip.dao.exceptions.ClipNotFoundError: Clip with code 'K3Q' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ClipNotFoundError(DAOError):
    """Exception raised when a ClipModel is not found in the clip store."""

    pass


class ClipAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a ClipModel whose code is already live."""

    pass


class DataStoreError(DAOError):
    """Exception raised when the clip store can't be reached.

    e.g. connection issues, timeouts, etc.
    """

    pass


class DataStoreRejectedError(DataStoreError):
    """Exception raised when the clip store is reachable but rejects a command.

    e.g. OOM, writes against a read-only replica, etc.
    """

    pass


class ClipCorruptedError(DataStoreError):
    """Exception raised when a stored clip record can't be decoded into a ClipModel."""

    pass


class BlobStoreError(DAOError):
    """Exception raised when the blob store can't be reached (connection issues, timeouts)."""

    pass


class BlobStoreRejectedError(BlobStoreError):
    """Exception raised when the blob store rejects an upload, lookup or delete."""

    pass
