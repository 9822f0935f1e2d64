"""Swedish presentation formatting for amounts, dates, phone numbers and postal codes."""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import ROUND_HALF_EVEN, Decimal
from zoneinfo import ZoneInfo

from ..config import settings

NBSP = "\u00a0"
MINUS = "\u2212"

MONTHS = (
    "januari", "februari", "mars", "april", "maj", "juni",
    "juli", "augusti", "september", "oktober", "november", "december",
)
MONTHS_SHORT = (
    "jan.", "feb.", "mars", "apr.", "maj", "juni",
    "juli", "aug.", "sep.", "okt.", "nov.", "dec.",
)

_NON_DIGITS = re.compile(r"[^0-9]")


def _coerce_datetime(value: str | date | datetime) -> datetime:
    """Parse ISO strings; aware values are shifted to the configured local zone."""
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = f"{text[:-1]}+00:00"
        moment = datetime.fromisoformat(text)
    if moment.tzinfo is not None:
        return moment.astimezone(ZoneInfo(settings.timezone))
    return moment


def format_currency(amount_in_ore: int) -> str:
    """Format an amount stored in öre as kronor, e.g. ``123450`` -> ``1 234,5 kr``."""
    kronor = (Decimal(amount_in_ore) / 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_EVEN)
    sign = MINUS if kronor < 0 else ""
    whole, _, fraction = f"{abs(kronor):.2f}".partition(".")
    fraction = fraction.rstrip("0")
    grouped = f"{int(whole):,}".replace(",", NBSP)
    number = f"{grouped},{fraction}" if fraction else grouped
    return f"{sign}{number}{NBSP}kr"


def format_date(value: str | date | datetime) -> str:
    moment = _coerce_datetime(value)
    return f"{moment.day} {MONTHS[moment.month - 1]} {moment.year}"


def format_datetime(value: str | date | datetime) -> str:
    moment = _coerce_datetime(value)
    return f"{moment.day} {MONTHS_SHORT[moment.month - 1]} {moment.year} {moment:%H:%M}"


def format_phone(phone: str) -> str:
    """Format Swedish mobile and landline numbers; unknown patterns pass through."""
    digits = _NON_DIGITS.sub("", phone)

    if digits.startswith("46"):
        national = digits[2:]
        if national.startswith("7"):
            return f"+46 {national[:2]} {national[2:5]} {national[5:7]} {national[7:]}"

    if digits.startswith("07"):
        return f"{digits[:3]}-{digits[3:6]} {digits[6:8]} {digits[8:]}"

    # Stockholm
    if digits.startswith("08"):
        return f"{digits[:2]}-{digits[2:5]} {digits[5:7]} {digits[7:]}"

    if len(digits) >= 10:
        return f"{digits[:3]}-{digits[3:6]} {digits[6:8]} {digits[8:]}"

    return phone


def format_postal_code(postal_code: str) -> str:
    digits = _NON_DIGITS.sub("", postal_code)
    if len(digits) == 5:
        return f"{digits[:3]} {digits[3:]}"
    return postal_code
