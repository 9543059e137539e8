"""
Data Transfer Objects for the directory application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GetPhonesByEmailPrefixQuery:
    """Input DTO for an email-prefix phone lookup.

    Attributes:
        email_prefix: Leading part of the email address, used as-is.
    """

    email_prefix: str
