"""
Adapter: psycopg2 phone directory.

Implements the PhoneDirectory port with a single raw SQL query
against the employees table.
"""

import logging
from typing import Callable, Optional

import psycopg2
from psycopg2.extras import RealDictCursor

from email_hint.domain.directory.entities import FoundPhone
from email_hint.domain.directory.errors import QueryFailedError
from email_hint.domain.directory.ports import PhoneDirectory

logger = logging.getLogger(__name__)

# The prefix is always bound as a parameter; '%%' is a literal '%' for psycopg2.
PHONES_BY_EMAIL_PREFIX_SQL = """
    SELECT first_name, last_name, phone, email
    FROM employees
    WHERE email LIKE %s || '%%'
"""


class PsycopgPhoneDirectory(PhoneDirectory):
    """Looks up phones over one psycopg2 connection.

    The connection is handed back through ``release`` when the
    directory is closed: either closed outright or returned to a pool.
    """

    def __init__(
        self,
        connection,
        release: Optional[Callable[[object], None]] = None,
    ) -> None:
        self._connection = connection
        self._release = release or _close_connection

    def get_phones_by_email_prefix(self, prefix: str) -> list[FoundPhone]:
        """Return employees whose email starts with ``prefix``.

        Args:
            prefix: Leading part of the email, bound as a query parameter.

        Returns:
            List of FoundPhone in the order the database returned them.
        """
        if self._connection is None:
            raise QueryFailedError("the directory handle is already closed")

        try:
            with self._connection.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(PHONES_BY_EMAIL_PREFIX_SQL, (prefix,))
                rows = cur.fetchall()
            # Read-only lookup; end the implicit transaction so pooled
            # connections go back idle.
            self._connection.rollback()
        except psycopg2.Error as exc:
            raise QueryFailedError(f"failed to query phones by email: {exc}") from exc

        try:
            return [
                FoundPhone(
                    first_name=row["first_name"],
                    last_name=row["last_name"],
                    phone=row["phone"],
                    email=row["email"],
                )
                for row in rows
            ]
        except KeyError as exc:
            raise QueryFailedError(f"failed to scan a received phone: missing {exc}") from exc

    def close(self) -> None:
        if self._connection is None:
            return
        connection, self._connection = self._connection, None
        self._release(connection)


def _close_connection(connection) -> None:
    try:
        connection.close()
    except psycopg2.Error:
        logger.warning("Failed to close a database connection.", exc_info=True)
