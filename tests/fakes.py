"""
In-memory doubles for the directory ports.
"""

from typing import Optional

from email_hint.domain.directory.entities import FoundPhone
from email_hint.domain.directory.ports import DirectoryProvider, PhoneDirectory

ALICE = FoundPhone(
    first_name="Alice",
    last_name="Liddell",
    phone="+12345",
    email="aliddl@x.com",
)


class FakePhoneDirectory(PhoneDirectory):
    """PhoneDirectory double that records every lookup."""

    def __init__(
        self,
        phones: Optional[list] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.phones = list(phones or [])
        self.error = error
        self.prefixes: list[str] = []
        self.close_calls = 0

    @property
    def call_count(self) -> int:
        return len(self.prefixes)

    def get_phones_by_email_prefix(self, prefix: str) -> list:
        self.prefixes.append(prefix)
        if self.error is not None:
            raise self.error
        return list(self.phones)

    def close(self) -> None:
        self.close_calls += 1


class FakeDirectoryProvider(DirectoryProvider):
    """DirectoryProvider double handing out one FakePhoneDirectory."""

    def __init__(
        self,
        directory: Optional[FakePhoneDirectory] = None,
        acquire_error: Optional[Exception] = None,
        ping_error: Optional[Exception] = None,
    ) -> None:
        self.directory = directory or FakePhoneDirectory()
        self.acquire_error = acquire_error
        self.ping_error = ping_error
        self.acquire_calls = 0
        self.closed = False

    def acquire(self) -> PhoneDirectory:
        self.acquire_calls += 1
        if self.acquire_error is not None:
            raise self.acquire_error
        return self.directory

    def ping(self) -> None:
        if self.ping_error is not None:
            raise self.ping_error

    def close(self) -> None:
        self.closed = True
