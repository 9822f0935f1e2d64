"""Swedish personnummer and organisationsnummer validation.

Both number kinds end in a Luhn check digit computed over the nine digits
before it. For personal numbers the checksum always runs over the 10-digit
``YYMMDDNNN`` form, so the century digits of a 12-digit input never take
part in it.

Worked example for ``811218-9876``::

    digits   8  1  1  2  1  8  9  8  7
    weight   2  1  2  1  2  1  2  1  2
    product 16  1  2  2  2  8 18  8 14
    summed   7  1  2  2  2  8  9  8  5   -> 44

    check digit = (10 - 44 % 10) % 10 = 6

All validators return an :class:`IdentityValidation` and never raise.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from ...config import settings
from ...models.domain import (
    IdentityErrorKind,
    IdentityValidation,
    OrganizationNumber,
    PersonalNumber,
)

MASKED_PLACEHOLDER = "****-****"
COORDINATION_DAY_OFFSET = 60

_NON_DIGITS = re.compile(r"[^0-9]")

PERSONAL_NUMBER_MESSAGES: dict[IdentityErrorKind, str] = {
    IdentityErrorKind.INVALID_LENGTH: "Personnummer måste vara 10 eller 12 siffror",
    IdentityErrorKind.INVALID_MONTH: "Ogiltig månad i personnummer",
    IdentityErrorKind.INVALID_DAY: "Ogiltig dag i personnummer",
    IdentityErrorKind.INVALID_DATE: "Ogiltigt datum i personnummer",
    IdentityErrorKind.INVALID_CHECKSUM: "Ogiltigt personnummer (kontrollsiffra)",
}

ORGANIZATION_NUMBER_MESSAGES: dict[IdentityErrorKind, str] = {
    IdentityErrorKind.INVALID_LENGTH: "Organisationsnummer måste vara 10 siffror",
    IdentityErrorKind.INVALID_FORMAT: "Ogiltigt organisationsnummer format",
    IdentityErrorKind.INVALID_CHECKSUM: "Ogiltigt organisationsnummer (kontrollsiffra)",
}


def _only_digits(value: str | None) -> str:
    return _NON_DIGITS.sub("", value or "")


def _today() -> date:
    return datetime.now(ZoneInfo(settings.timezone)).date()


def luhn_check_digit(digits: str) -> int:
    """Compute the check digit for a run of data digits.

    Digits at even 0-based positions are doubled; doubled values above 9
    have 9 subtracted.
    """
    total = 0
    for index, char in enumerate(digits):
        digit = int(char)
        if index % 2 == 0:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return (10 - (total % 10)) % 10


def resolve_century(two_digit_year: int, today: date) -> int:
    """Expand a two-digit year with a sliding window anchored on ``today``.

    Years above the current two-digit year fall in the previous century.
    Someone aged 100 or more cannot be told apart from a newborn.
    """
    current_century = (today.year // 100) * 100
    if two_digit_year > today.year % 100:
        return current_century - 100 + two_digit_year
    return current_century + two_digit_year


def _personal_failure(kind: IdentityErrorKind) -> IdentityValidation:
    return IdentityValidation(is_valid=False, error=kind, message=PERSONAL_NUMBER_MESSAGES[kind])


def _organization_failure(kind: IdentityErrorKind) -> IdentityValidation:
    return IdentityValidation(is_valid=False, error=kind, message=ORGANIZATION_NUMBER_MESSAGES[kind])


def validate_personal_number(value: str | None, today: Optional[date] = None) -> IdentityValidation:
    """Validate a personnummer in ``YYMMDD-NNNC`` or ``YYYYMMDD-NNNC`` form.

    Anything but ASCII 0-9 (separators, whitespace, ``+``) is ignored;
    other Unicode digits are dropped too, not read as numbers.
    ``today`` anchors the century window for 10-digit input.
    """
    digits = _only_digits(value)
    if len(digits) not in (10, 12):
        return _personal_failure(IdentityErrorKind.INVALID_LENGTH)

    if len(digits) == 10:
        year = resolve_century(int(digits[0:2]), today or _today())
    else:
        year = int(digits[0:4])
    short = digits[-10:]
    month = int(short[2:4])
    day_field = int(short[4:6])

    if not 1 <= month <= 12:
        return _personal_failure(IdentityErrorKind.INVALID_MONTH)

    is_coordination = day_field > COORDINATION_DAY_OFFSET
    day = day_field - COORDINATION_DAY_OFFSET if is_coordination else day_field
    if not 1 <= day <= 31:
        return _personal_failure(IdentityErrorKind.INVALID_DAY)

    try:
        date(year, month, day)
    except ValueError:
        return _personal_failure(IdentityErrorKind.INVALID_DATE)

    check_digit = int(short[9])
    if luhn_check_digit(short[:9]) != check_digit:
        return _personal_failure(IdentityErrorKind.INVALID_CHECKSUM)

    return IdentityValidation(
        is_valid=True,
        value=PersonalNumber(
            raw=value or "",
            digits=digits,
            year=year,
            month=month,
            day=day,
            serial=short[6:9],
            check_digit=check_digit,
            is_coordination_number=is_coordination,
        ),
    )


def validate_organization_number(value: str | None) -> IdentityValidation:
    """Validate a 10-digit organisationsnummer (``NNNNNN-NNNN``)."""
    digits = _only_digits(value)
    if len(digits) != 10:
        return _organization_failure(IdentityErrorKind.INVALID_LENGTH)

    if int(digits[0]) < 5:
        return _organization_failure(IdentityErrorKind.INVALID_FORMAT)

    if luhn_check_digit(digits[:9]) != int(digits[9]):
        return _organization_failure(IdentityErrorKind.INVALID_CHECKSUM)

    return IdentityValidation(is_valid=True, value=OrganizationNumber(raw=value or "", digits=digits))


def mask_personal_number(value: str | None, today: Optional[date] = None) -> str:
    """Show only the birth date part, e.g. ``811218-****``."""
    result = validate_personal_number(value, today=today)
    if not result.is_valid or result.formatted is None:
        return MASKED_PLACEHOLDER
    return f"{result.formatted[:6]}-****"
