"""
Adapter: SQLAlchemy ORM phone directory.

Implements the PhoneDirectory port through a declarative mapping of the
employees table. The table itself is owned by an external migration tool;
this service only reads from it.
"""

import logging

from sqlalchemy import Column, Date, Integer, String, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base

from email_hint.domain.directory.entities import FoundPhone
from email_hint.domain.directory.errors import QueryFailedError
from email_hint.domain.directory.ports import PhoneDirectory

logger = logging.getLogger(__name__)

Base = declarative_base()


class EmployeeRecord(Base):
    """Persistence-side projection of an employee row."""

    __tablename__ = "employees"

    id = Column(Integer, primary_key=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    salary = Column(String)
    manager_id = Column(Integer)
    department = Column(Integer)
    position = Column(Integer)
    entry_at = Column(Date)
    phone = Column(String)
    email = Column(String, index=True)


class OrmPhoneDirectory(PhoneDirectory):
    """Looks up phones through one SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_phones_by_email_prefix(self, prefix: str) -> list[FoundPhone]:
        """Return employees whose email starts with ``prefix``.

        Only the four lookup columns are selected; the prefix is bound
        as a parameter of the LIKE pattern.
        """
        if self._session is None:
            raise QueryFailedError("the directory handle is already closed")

        statement = select(
            EmployeeRecord.first_name,
            EmployeeRecord.last_name,
            EmployeeRecord.phone,
            EmployeeRecord.email,
        ).where(EmployeeRecord.email.like(prefix + "%"))

        try:
            rows = self._session.execute(statement).all()
        except SQLAlchemyError as exc:
            raise QueryFailedError(f"failed to query phones by email: {exc}") from exc

        return [
            FoundPhone(
                first_name=row.first_name,
                last_name=row.last_name,
                phone=row.phone,
                email=row.email,
            )
            for row in rows
        ]

    def close(self) -> None:
        if self._session is None:
            return
        session, self._session = self._session, None
        session.close()
