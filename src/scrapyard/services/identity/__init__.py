"""Swedish identity number helpers."""

from .swedish import (
    MASKED_PLACEHOLDER,
    luhn_check_digit,
    mask_personal_number,
    validate_organization_number,
    validate_personal_number,
)

__all__ = [
    "MASKED_PLACEHOLDER",
    "luhn_check_digit",
    "mask_personal_number",
    "validate_organization_number",
    "validate_personal_number",
]
