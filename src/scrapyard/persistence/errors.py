"""Errors raised by the database collaborators."""

from __future__ import annotations

from ..models.domain import PickupStatus


class PersistenceError(Exception):
    """Base class for failures writing to or reading from Supabase."""


class DatabaseNotConfiguredError(PersistenceError):
    def __init__(self) -> None:
        super().__init__(
            "Supabase not configured. Set SCRAPYARD_SUPABASE_URL and SCRAPYARD_SUPABASE_KEY environment variables."
        )


class PickupNotFoundError(PersistenceError):
    pass


class InvalidStatusTransitionError(PersistenceError):
    """Raised when a pickup status write would break the transition table."""

    def __init__(self, pickup_order_id: str, current_status: str | None, target_status: PickupStatus):
        self.pickup_order_id = pickup_order_id
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(
            f"Pickup {pickup_order_id} cannot move from {current_status} to {target_status.value}"
        )


class DriverStatusUpdateError(PersistenceError):
    pass


class DriverNotFoundError(PersistenceError):
    pass
