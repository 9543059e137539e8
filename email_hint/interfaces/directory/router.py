"""
FastAPI router for the directory bounded context.

Routes delegate to use cases. No business logic here.
Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError

from email_hint.application.directory.dtos import GetPhonesByEmailPrefixQuery
from email_hint.application.directory.get_phones_by_email_prefix import (
    GetPhonesByEmailPrefixUseCase,
)
from email_hint.domain.directory.errors import SerializationFailedError
from email_hint.interfaces.directory.dependencies import get_phones_use_case
from email_hint.interfaces.directory.schemas import FoundPhoneItem

router = APIRouter(tags=["directory"])


def single_segment_prefix(email_prefix: str) -> str:
    """Keep the prefix to one path segment.

    The path converter is only there to let an empty prefix through, so
    "/phone/a/b" is answered with 404 before a handle is acquired.
    """
    if "/" in email_prefix:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return email_prefix


# The path converter also matches an empty prefix, so "/phone/" reaches
# the use case and is rejected there with 400.
@router.get(
    "/phone/{email_prefix:path}",
    response_model=list[FoundPhoneItem],
    responses={
        400: {"description": "Empty email prefix"},
        404: {"description": "Prefix spans more than one path segment"},
        500: {"description": "Storage or serialization failure"},
    },
    summary="Find phones by email prefix",
    description=(
        "Return the names and phone numbers of employees whose email "
        "starts with the given prefix. Matching follows the database "
        "collation; results are not sorted."
    ),
)
def get_phones_by_email_prefix(
    email_prefix: str = Depends(single_segment_prefix),
    use_case: GetPhonesByEmailPrefixUseCase = Depends(get_phones_use_case),
) -> list[FoundPhoneItem]:
    """Look up employees' phones by the beginning of their email."""
    phones = use_case.execute(GetPhonesByEmailPrefixQuery(email_prefix=email_prefix))
    try:
        return [
            FoundPhoneItem(
                first_name=p.first_name,
                last_name=p.last_name,
                phone=p.phone,
                email=p.email,
            )
            for p in phones
        ]
    except ValidationError as exc:
        raise SerializationFailedError(
            f"{exc.error_count()} invalid field(s) in the phones list"
        ) from exc
