"""Domain models for pickups, drivers and Swedish identity numbers."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union


class PickupStatus(str, Enum):
    """Lifecycle of a pickup order, stored verbatim in ``pickup_orders.status``."""

    PENDING = "pending"
    SCHEDULED = "scheduled"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


class DriverStatus(str, Enum):
    """Driver availability. Any state may follow any other."""

    AVAILABLE = "available"
    BUSY = "busy"
    BREAK = "break"
    OFFLINE = "offline"


class IdentityErrorKind(str, Enum):
    INVALID_LENGTH = "invalid_length"
    INVALID_MONTH = "invalid_month"
    INVALID_DAY = "invalid_day"
    INVALID_DATE = "invalid_date"
    INVALID_CHECKSUM = "invalid_checksum"
    INVALID_FORMAT = "invalid_format"


@dataclass(frozen=True, slots=True)
class PersonalNumber:
    """A validated Swedish personnummer or samordningsnummer."""

    raw: str
    digits: str
    year: int
    month: int
    day: int
    serial: str
    check_digit: int
    is_coordination_number: bool = False

    @property
    def short_digits(self) -> str:
        """The 10-digit ``YYMMDDNNNC`` form, century dropped."""
        return self.digits[-10:]

    @property
    def formatted(self) -> str:
        short = self.short_digits
        return f"{short[:6]}-{short[6:]}"

    @property
    def birth_date(self) -> date:
        return date(self.year, self.month, self.day)


@dataclass(frozen=True, slots=True)
class OrganizationNumber:
    """A validated Swedish organisationsnummer."""

    raw: str
    digits: str

    @property
    def formatted(self) -> str:
        return f"{self.digits[:6]}-{self.digits[6:]}"


@dataclass(frozen=True, slots=True)
class IdentityValidation:
    """Outcome of validating an identification number.

    Exactly one of ``value`` and ``error`` is set. ``message`` is the
    Swedish text shown to end users for failures.
    """

    is_valid: bool
    value: Union[PersonalNumber, OrganizationNumber, None] = None
    error: Optional[IdentityErrorKind] = None
    message: Optional[str] = None

    @property
    def formatted(self) -> Optional[str]:
        return self.value.formatted if self.value is not None else None


@dataclass(slots=True)
class DriverStatusChange:
    """One entry of a driver's availability history."""

    driver_id: str
    old_status: Optional[DriverStatus]
    new_status: DriverStatus
    reason: str
    source: str
    changed_at: datetime
