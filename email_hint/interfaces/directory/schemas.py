"""
Pydantic schemas for the directory API responses.

These schemas define the API contract.
No business logic belongs here.
"""

from pydantic import BaseModel


class FoundPhoneItem(BaseModel):
    """A single matched employee in the phone lookup response."""

    first_name: str
    last_name: str
    phone: str
    email: str


class HealthResponse(BaseModel):
    """Response schema for the health endpoints."""

    status: str
    version: str
