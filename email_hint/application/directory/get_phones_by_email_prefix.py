"""
Use case: Find employees' phones by the beginning of their email address.

Input: GetPhonesByEmailPrefixQuery (email_prefix)
Output: list[FoundPhone], in the store's natural order
Side effects: None.
Failure cases: IncorrectPrefixError, DBRequestFailedError.
"""

import logging

from email_hint.application.directory.dtos import GetPhonesByEmailPrefixQuery
from email_hint.domain.directory.entities import FoundPhone
from email_hint.domain.directory.errors import (
    DBRequestFailedError,
    IncorrectPrefixError,
    StorageError,
)
from email_hint.domain.directory.ports import PhoneDirectory

logger = logging.getLogger(__name__)


class GetPhonesByEmailPrefixUseCase:
    """Validates the prefix and delegates the lookup to the PhoneDirectory port.

    Case sensitivity is whatever the store's collation makes of ``LIKE``;
    the prefix is passed through unchanged.
    """

    def __init__(self, directory: PhoneDirectory) -> None:
        self._directory = directory

    def execute(self, query: GetPhonesByEmailPrefixQuery) -> list[FoundPhone]:
        """Run the lookup.

        Args:
            query: The lookup request.

        Returns:
            Matching phones, possibly empty.

        Raises:
            IncorrectPrefixError: If the prefix is empty.
            DBRequestFailedError: If the data layer fails.
        """
        if not query.email_prefix:
            raise IncorrectPrefixError(query.email_prefix)

        logger.debug("Looking up phones for email prefix=%r", query.email_prefix)

        try:
            phones = self._directory.get_phones_by_email_prefix(query.email_prefix)
        except StorageError as exc:
            raise DBRequestFailedError(
                "failed to get phones by email prefix"
            ) from exc

        logger.info(
            "Found %d phone(s) for email prefix=%r",
            len(phones),
            query.email_prefix,
        )
        return phones
