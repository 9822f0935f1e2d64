"""Swedish identity number endpoints.

Invalid numbers are a normal outcome and come back as 200 with the
failure kind and a Swedish message.
"""

from __future__ import annotations

from fastapi import APIRouter

from ...models.domain import PersonalNumber
from ...schemas.identity import (
    IdentityNumberRequest,
    MaskedNumberResponse,
    OrganizationNumberResponse,
    PersonalNumberResponse,
)
from ...services.identity import mask_personal_number, validate_organization_number, validate_personal_number

router = APIRouter(prefix="/identity", tags=["identity"])


@router.post("/personal-number/validate", response_model=PersonalNumberResponse)
def validate_personal(payload: IdentityNumberRequest) -> PersonalNumberResponse:
    result = validate_personal_number(payload.value, today=payload.reference_date)
    value = result.value
    if not isinstance(value, PersonalNumber):
        return PersonalNumberResponse(is_valid=False, error=result.error, message=result.message)
    return PersonalNumberResponse(
        is_valid=True,
        formatted=value.formatted,
        birth_date=value.birth_date,
        is_coordination_number=value.is_coordination_number,
    )


@router.post("/personal-number/mask", response_model=MaskedNumberResponse)
def mask_personal(payload: IdentityNumberRequest) -> MaskedNumberResponse:
    return MaskedNumberResponse(masked=mask_personal_number(payload.value, today=payload.reference_date))


@router.post("/organization-number/validate", response_model=OrganizationNumberResponse)
def validate_organization(payload: IdentityNumberRequest) -> OrganizationNumberResponse:
    result = validate_organization_number(payload.value)
    return OrganizationNumberResponse(
        is_valid=result.is_valid,
        formatted=result.formatted,
        error=result.error,
        message=result.message,
    )
