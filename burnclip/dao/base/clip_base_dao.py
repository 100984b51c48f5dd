"""Abstract base class for clip data access objects (DAOs).

This class establishes a consistent contract for all clip store implementations,
regardless of the underlying storage mechanism (e.g., Redis, in-process memory).

Responsibilities:
    - Provide an interface for inserting, fetching and deleting ClipModel objects.
    - Offer atomic insert-if-absent and fetch-and-delete primitives so that codes are
      never handed to two senders and clips are never delivered to two receivers.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from burnclip.dao.redis import ClipRedisDAO

        >>> dao = ClipRedisDAO(...)
        >>> dao.insert(clip)

        >>> dao.exists('K3Q')
        True
        >>> dao.take('K3Q').content
        'hello'
        >>> dao.exists('K3Q')
        False
"""

from abc import ABC, abstractmethod
from datetime import datetime

from burnclip.models import ClipModel


class ClipBaseDAO(ABC):
    """Interface for clip data access objects (DAOs).

    Methods:
        exists(code: str, **kwargs) -> bool:
            Check whether a live clip is stored under the code.

        insert(clip: ClipModel, **kwargs) -> ClipBaseDAO:
            Atomically insert a clip unless its code is already live.
            Raises ClipAlreadyExistsError if the code is taken.

        get(code: str, **kwargs) -> ClipModel:
            Retrieve a clip without consuming it.
            Raises ClipNotFoundError if the code is unknown.

        take(code: str, **kwargs) -> ClipModel:
            Atomically retrieve and delete a clip.
            Raises ClipNotFoundError if the code is unknown.

        delete(code: str, **kwargs) -> bool:
            Idempotently delete a clip.

        discard(clip: ClipModel, **kwargs) -> bool:
            Delete a clip only if the stored record is still this exact clip.

        expired(now: datetime, **kwargs) -> list[ClipModel]:
            List clips whose expiry lies before `now`.

        healthcheck(raise_error: bool = False) -> bool:
            Check connectivity with the data store.

    All methods raise DataStoreError on connection or timeout failures.

    Subclassing:
        Datastore-specific implementations (e.g., ClipRedisDAO or
        ClipMemoryDAO) must extend this class and implement all
        abstract methods.
    """

    @abstractmethod
    def exists(self, code: str, **kwargs) -> bool:
        """Check whether a clip is stored under the given code.

        Args:
            code (str):
                The clip code.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bool: True if the code is live, False otherwise.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def insert(self, clip: ClipModel, **kwargs) -> 'ClipBaseDAO':
        """Insert a new ClipModel unless its code is already live.

        The existence check and the write must be a single atomic step.

        Args:
            clip (ClipModel):
                The ClipModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ClipBaseDAO: self (for method chaining)

        Raises:
            ClipAlreadyExistsError:
                If a ClipModel with the same code already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, code: str, **kwargs) -> ClipModel:
        """Retrieve a ClipModel by its code without deleting it.

        Raises:
            ClipNotFoundError:
                If no ClipModel with the given code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def take(self, code: str, **kwargs) -> ClipModel:
        """Retrieve and delete a ClipModel in one atomic step.

        When several callers take the same code concurrently, exactly one
        receives the clip and every other caller gets ClipNotFoundError.

        Args:
            code (str):
                The clip code.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ClipModel: The clip, which is no longer stored.

        Raises:
            ClipNotFoundError:
                If no ClipModel with the given code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, code: str, **kwargs) -> bool:
        """Delete a ClipModel. Deleting an unknown code is not an error.

        Returns:
            bool: True if a clip was deleted, False if nothing was stored.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def discard(self, clip: ClipModel, **kwargs) -> bool:
        """Delete `clip` only if its code still maps to this exact record (compare-and-delete).

        Used by housekeeping that decided to delete a clip based on an earlier read.
        If the clip was redeemed meanwhile and its code reused by a new clip, the new
        clip survives.

        Returns:
            bool: True if the clip was deleted, False if the code is gone or holds another clip.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def expired(self, now: datetime, **kwargs) -> list[ClipModel]:
        """List stored clips whose expires_at lies before `now`.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def healthcheck(self, raise_error: bool = False) -> bool:
        """Check connectivity with the data store.

        Args:
            raise_error (bool):
                If True, raises DataStoreError on failure. Defaults to False.

        Returns:
            bool: True if the data store is reachable.
        """
        pass
