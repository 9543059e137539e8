"""
Dependency injection for the directory bounded context.

Provides FastAPI dependency functions that wire the application-owned
DirectoryProvider into use cases via constructor injection.

The request-scoped PhoneDirectory is acquired before the route runs and
released after it returns, on every exit path.
"""

from typing import Iterator

from fastapi import Depends, Request

from email_hint.application.directory.get_phones_by_email_prefix import (
    GetPhonesByEmailPrefixUseCase,
)
from email_hint.domain.directory.errors import ContextMisconfiguredError
from email_hint.domain.directory.ports import DirectoryProvider, PhoneDirectory

PROVIDER_STATE_KEY = "directory_provider"


def get_directory_provider(request: Request) -> DirectoryProvider:
    """Return the provider the application was built with."""
    provider = getattr(request.app.state, PROVIDER_STATE_KEY, None)
    if provider is None:
        raise ContextMisconfiguredError("no directory provider is attached to the application")
    if not isinstance(provider, DirectoryProvider):
        raise ContextMisconfiguredError(
            f"{type(provider).__name__} is not a DirectoryProvider"
        )
    return provider


def get_phone_directory(
    provider: DirectoryProvider = Depends(get_directory_provider),
) -> Iterator[PhoneDirectory]:
    """Acquire a database handle for the duration of one request."""
    directory = provider.acquire()
    try:
        yield directory
    finally:
        directory.close()


def get_phones_use_case(
    directory: PhoneDirectory = Depends(get_phone_directory),
) -> GetPhonesByEmailPrefixUseCase:
    """Build GetPhonesByEmailPrefixUseCase with the request's directory."""
    return GetPhonesByEmailPrefixUseCase(directory=directory)
