"""
Domain-specific errors for the directory bounded context.

All errors raised from the domain, application and storage layers are
defined here. They are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class DirectoryDomainError(Exception):
    """Base error for all directory errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class IncorrectPrefixError(DirectoryDomainError):
    """Raised when the requested email prefix is not acceptable."""

    def __init__(self, prefix: str, reason: str = "the passed prefix is empty") -> None:
        super().__init__(f"Incorrect email prefix: {reason}")
        self.prefix = prefix
        self.reason = reason


class DBRequestFailedError(DirectoryDomainError):
    """Raised by the lookup service when the data layer fails.

    The underlying storage error is chained as ``__cause__``.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"A request to the database failed: {reason}")
        self.reason = reason


class SerializationFailedError(DirectoryDomainError):
    """Raised when lookup results cannot be encoded into a response."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to serialize the phones list: {reason}")
        self.reason = reason


class ContextMisconfiguredError(DirectoryDomainError):
    """Raised when the request pipeline has no usable directory provider."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Request pipeline is misconfigured: {reason}")
        self.reason = reason


class StorageError(DirectoryDomainError):
    """Base error for failures reported by storage adapters."""


class StorageUnavailableError(StorageError):
    """Raised when a database handle cannot be obtained.

    Covers connection failures, failed health checks, connect timeouts
    and waits for a free pooled connection that time out.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Storage unavailable: {reason}")
        self.reason = reason


class QueryFailedError(StorageError):
    """Raised when the lookup query or the row scan fails."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Query failed: {reason}")
        self.reason = reason
