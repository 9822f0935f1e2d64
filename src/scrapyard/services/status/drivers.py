"""Driver availability normalization and display text."""

from __future__ import annotations

from ...models.domain import DriverStatus

DRIVER_STATUS_TEXTS: dict[DriverStatus, str] = {
    DriverStatus.AVAILABLE: "Tillgänglig",
    DriverStatus.BUSY: "Upptagen",
    DriverStatus.BREAK: "Rast",
    DriverStatus.OFFLINE: "Offline",
}

# Legacy values still present in older driver rows.
_ALIASES: dict[str, DriverStatus] = {
    "available": DriverStatus.AVAILABLE,
    "on_duty": DriverStatus.AVAILABLE,
    "busy": DriverStatus.BUSY,
    "on_job": DriverStatus.BUSY,
    "in_progress": DriverStatus.BUSY,
    "break": DriverStatus.BREAK,
    "rest": DriverStatus.BREAK,
    "offline": DriverStatus.OFFLINE,
    "off_duty": DriverStatus.OFFLINE,
    "inactive": DriverStatus.OFFLINE,
}


def normalize_driver_status(value: DriverStatus | str | None) -> DriverStatus:
    """Map any stored driver status onto the four canonical states.

    Unknown and empty values count as offline.
    """
    if isinstance(value, DriverStatus):
        return value
    return _ALIASES.get((value or "").strip().lower(), DriverStatus.OFFLINE)


def parse_driver_status(value: DriverStatus | str | None) -> DriverStatus:
    """Strict variant for writes: canonical values and known aliases only.

    Raises:
        ValueError: ``value`` is not a recognised driver status.
    """
    if isinstance(value, DriverStatus):
        return value
    status = _ALIASES.get(str(value or "").strip().lower())
    if status is None:
        raise ValueError(f"Unknown driver status: {value}")
    return status


def driver_status_text(value: DriverStatus | str | None) -> str:
    return DRIVER_STATUS_TEXTS[normalize_driver_status(value)]
