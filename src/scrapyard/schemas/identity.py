"""Identity number API schemas."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from ..models.domain import IdentityErrorKind


class IdentityNumberRequest(BaseModel):
    value: str = Field(..., description="Number as entered, separators allowed.")
    reference_date: Optional[date] = Field(
        default=None,
        description="Date anchoring the century window for 10-digit personal numbers. Defaults to today.",
    )


class PersonalNumberResponse(BaseModel):
    is_valid: bool
    formatted: Optional[str] = None
    birth_date: Optional[date] = None
    is_coordination_number: Optional[bool] = None
    error: Optional[IdentityErrorKind] = None
    message: Optional[str] = None


class OrganizationNumberResponse(BaseModel):
    is_valid: bool
    formatted: Optional[str] = None
    error: Optional[IdentityErrorKind] = None
    message: Optional[str] = None


class MaskedNumberResponse(BaseModel):
    masked: str
