"""
Port interfaces (ABCs) for the directory bounded context.

Ports define the contracts that the domain requires from storage.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod

from email_hint.domain.directory.entities import FoundPhone


class PhoneDirectory(ABC):
    """Port for a request-scoped database handle.

    Exposes exactly one lookup plus the release of the handle.
    """

    @abstractmethod
    def get_phones_by_email_prefix(self, prefix: str) -> list[FoundPhone]:
        """Return employees whose email starts with ``prefix``.

        Rows come back in the store's natural order. An empty list is a
        valid result.

        Raises:
            QueryFailedError: If the query or the row scan fails.
        """
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Release the handle. Safe to call more than once."""
        raise NotImplementedError


class DirectoryProvider(ABC):
    """Port for obtaining ``PhoneDirectory`` handles.

    Hides connection establishment and pooling from the callers.
    """

    @abstractmethod
    def acquire(self) -> PhoneDirectory:
        """Return a handle the caller must ``close()`` when done.

        Raises:
            StorageUnavailableError: If no connection can be established.
        """
        raise NotImplementedError

    @abstractmethod
    def ping(self) -> None:
        """Check that the store answers.

        Raises:
            StorageUnavailableError: If the health check fails.
        """
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Dispose of shared resources (pools, engines)."""
        raise NotImplementedError
