"""
Domain entities for the directory bounded context.

Value records only. They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FoundPhone:
    """Contact details of one employee matched by an email-prefix lookup.

    Built only from a successfully read row; never persisted by this service.
    """

    first_name: str
    last_name: str
    phone: str
    email: str
