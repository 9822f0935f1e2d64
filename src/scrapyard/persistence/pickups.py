"""Pickup order status persistence.

``pickup_orders.status`` is the single source of truth; a database trigger
mirrors it onto ``customer_requests.status``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import PickupStatus
from ..services.status.progression import can_progress, coerce_status, is_valid_transition, next_status
from .errors import DatabaseNotConfiguredError, InvalidStatusTransitionError, PickupNotFoundError

PICKUP_ORDERS_TABLE = "pickup_orders"


def _client():
    supabase = get_supabase_client()
    if not supabase:
        raise DatabaseNotConfiguredError()
    return supabase


def get_pickup_status(pickup_order_id: str) -> Optional[str]:
    """Return the stored status string of a pickup order.

    Raises:
        PickupNotFoundError: No pickup order has this id.
    """
    supabase = _client()
    response = (
        supabase.table(PICKUP_ORDERS_TABLE)
        .select("id, status")
        .eq("id", pickup_order_id)
        .limit(1)
        .execute()
    )
    if not response.data:
        raise PickupNotFoundError(f"Pickup order not found: {pickup_order_id}")
    return response.data[0].get("status")


def update_pickup_status(
    pickup_order_id: str,
    new_status: PickupStatus | str,
    driver_notes: Optional[str] = None,
    completion_photos: Optional[list[str]] = None,
    *,
    enforce_transition: bool = True,
) -> list[dict[str, Any]]:
    """Write a new status for a pickup order.

    Args:
        pickup_order_id: ``pickup_orders.id`` (not the customer request id)
        new_status: Target status
        driver_notes: Free text stored alongside the change
        completion_photos: Storage paths of photos taken at completion
        enforce_transition: Refuse writes the transition table does not allow

    Returns:
        The updated rows as returned by Supabase.
    """
    target = coerce_status(new_status)
    if target is None:
        raise ValueError(f"Unknown pickup status: {new_status}")

    supabase = _client()
    if enforce_transition:
        current = get_pickup_status(pickup_order_id)
        if not is_valid_transition(current, target):
            logging.warning(f"Rejected pickup {pickup_order_id} transition {current} -> {target.value}")
            raise InvalidStatusTransitionError(pickup_order_id, current, target)

    logging.info(f"Updating pickup {pickup_order_id} status to: {target.value}")
    response = (
        supabase.table(PICKUP_ORDERS_TABLE)
        .update(
            {
                "status": target.value,
                "driver_notes": driver_notes or None,
                "completion_photos": completion_photos or None,
            }
        )
        .eq("id", pickup_order_id)
        .execute()
    )
    if not response.data:
        raise PickupNotFoundError(f"Pickup order not found: {pickup_order_id}")

    logging.info(f"Pickup {pickup_order_id} status updated to {target.value}")
    return response.data


def progress_pickup(
    pickup_order_id: str,
    driver_name: str,
    completion_photos: Optional[list[str]] = None,
) -> list[dict[str, Any]]:
    """Advance an assigned or in-progress pickup one step along the happy path."""
    current = get_pickup_status(pickup_order_id)
    target = next_status(current)
    if not can_progress(current) or target is None:
        raise InvalidStatusTransitionError(pickup_order_id, current, target or PickupStatus.COMPLETED)

    if target is PickupStatus.IN_PROGRESS:
        return start_pickup(pickup_order_id, driver_name)
    return complete_pickup(pickup_order_id, driver_name, completion_photos)


def assign_to_driver(pickup_order_id: str, driver_name: str) -> list[dict[str, Any]]:
    return update_pickup_status(pickup_order_id, PickupStatus.ASSIGNED, f"Assigned to driver: {driver_name}")


def start_pickup(pickup_order_id: str, driver_name: str) -> list[dict[str, Any]]:
    return update_pickup_status(pickup_order_id, PickupStatus.IN_PROGRESS, f"Pickup started by: {driver_name}")


def complete_pickup(
    pickup_order_id: str, driver_name: str, photos: Optional[list[str]] = None
) -> list[dict[str, Any]]:
    return update_pickup_status(
        pickup_order_id,
        PickupStatus.COMPLETED,
        f"Pickup completed by: {driver_name}",
        photos,
    )


def cancel_pickup(pickup_order_id: str, reason: str = "Cancelled by admin") -> list[dict[str, Any]]:
    return update_pickup_status(pickup_order_id, PickupStatus.CANCELLED, reason)


def schedule_pickup(pickup_order_id: str, scheduled_at: str) -> list[dict[str, Any]]:
    return update_pickup_status(pickup_order_id, PickupStatus.SCHEDULED, f"Scheduled for: {scheduled_at}")


def self_assign(pickup_order_id: str) -> list[dict[str, Any]]:
    today = datetime.now(ZoneInfo(settings.timezone)).date().isoformat()
    return update_pickup_status(
        pickup_order_id,
        PickupStatus.ASSIGNED,
        f"Self-assigned by driver - {today}",
    )


def ensure_pickup_order_id(customer_request_id: str) -> str:
    """Resolve the pickup order that belongs to a customer request.

    Callers regularly hold a ``customer_request_id`` where a
    ``pickup_order_id`` is needed.
    """
    supabase = _client()
    logging.info(f"Looking up pickup_order_id for customer_request_id: {customer_request_id}")
    response = (
        supabase.table(PICKUP_ORDERS_TABLE)
        .select("id")
        .eq("customer_request_id", customer_request_id)
        .limit(1)
        .execute()
    )
    if not response.data:
        raise PickupNotFoundError(f"No pickup order found for customer request: {customer_request_id}")
    return response.data[0]["id"]
