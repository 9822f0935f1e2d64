"""Driver availability persistence and status history."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from ..db.supabase import get_supabase_client
from ..models.domain import DriverStatus, DriverStatusChange
from ..services.status.drivers import normalize_driver_status, parse_driver_status
from .errors import DatabaseNotConfiguredError, DriverNotFoundError, DriverStatusUpdateError

DRIVERS_TABLE = "drivers"
HISTORY_TABLE = "driver_status_history"
DEFAULT_REASON = "Status changed via DriverStatusManager"


class DriverStatusManager:
    """Writes driver availability changes and records each one in the history table."""

    @staticmethod
    def _client():
        supabase = get_supabase_client()
        if not supabase:
            raise DatabaseNotConfiguredError()
        return supabase

    @classmethod
    def change_driver_status(
        cls,
        driver_id: str,
        new_status: DriverStatus | str,
        source: str,
        reason: Optional[str] = None,
    ) -> DriverStatusChange:
        supabase = cls._client()
        status = parse_driver_status(new_status)
        changed_at = datetime.now(timezone.utc)

        current = (
            supabase.table(DRIVERS_TABLE)
            .select("driver_status")
            .eq("id", driver_id)
            .limit(1)
            .execute()
        )
        if not current.data:
            raise DriverNotFoundError(f"Driver not found: {driver_id}")
        old_value = current.data[0].get("driver_status")
        old_status = normalize_driver_status(old_value) if old_value else None

        try:
            updated = supabase.table(DRIVERS_TABLE).update(
                {
                    "driver_status": status.value,
                    "last_activity_update": changed_at.isoformat(),
                }
            ).eq("id", driver_id).execute()
        except Exception as exc:
            logging.error(f"Failed to update status for driver {driver_id}: {exc}")
            raise DriverStatusUpdateError(f"Failed to update status for driver {driver_id}") from exc
        if not updated.data:
            raise DriverNotFoundError(f"Driver not found: {driver_id}")

        change = DriverStatusChange(
            driver_id=driver_id,
            old_status=old_status,
            new_status=status,
            reason=reason or DEFAULT_REASON,
            source=source,
            changed_at=changed_at,
        )

        # The status itself is already written; a missing history row is not fatal.
        try:
            supabase.table(HISTORY_TABLE).insert(
                {
                    "driver_id": driver_id,
                    "old_status": old_status.value if old_status else None,
                    "new_status": status.value,
                    "reason": change.reason,
                    "source": source,
                }
            ).execute()
        except Exception as exc:
            logging.warning(f"Failed to record status history for driver {driver_id}: {exc}")

        logging.info(
            f"Driver {driver_id} status {old_status.value if old_status else None} -> {status.value} ({source})"
        )
        return change

    @classmethod
    def on_driver_login(cls, driver_id: str) -> DriverStatusChange:
        return cls.change_driver_status(driver_id, DriverStatus.AVAILABLE, "driver_app", "Driver logged in")

    @classmethod
    def on_driver_logout(cls, driver_id: str) -> DriverStatusChange:
        return cls.change_driver_status(driver_id, DriverStatus.OFFLINE, "driver_app", "Driver logged out")

    @classmethod
    def set_driver_busy(cls, driver_id: str, pickup_order_id: str) -> DriverStatusChange:
        return cls.change_driver_status(
            driver_id, DriverStatus.BUSY, "pickup_assignment", f"Assigned to pickup {pickup_order_id}"
        )

    @classmethod
    def set_driver_available(cls, driver_id: str, pickup_order_id: Optional[str] = None) -> DriverStatusChange:
        reason = f"Completed pickup {pickup_order_id}" if pickup_order_id else "Manual status change"
        return cls.change_driver_status(driver_id, DriverStatus.AVAILABLE, "pickup_completion", reason)

    @classmethod
    def recent_status_changes(cls, driver_id: str, limit: int = 10) -> list[dict[str, Any]]:
        supabase = cls._client()
        response = (
            supabase.table(HISTORY_TABLE)
            .select("*")
            .eq("driver_id", driver_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return response.data or []
