"""Driver availability endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from ...persistence.drivers import DriverStatusManager
from ...persistence.errors import DatabaseNotConfiguredError, DriverNotFoundError, DriverStatusUpdateError
from ...schemas.drivers import DriverStatusChangeModel, DriverStatusHistoryResponse, DriverStatusRequest
from ...services.formatting import format_datetime
from ...services.status import driver_status_text

router = APIRouter(prefix="/drivers", tags=["drivers"])


@router.post("/{driver_id}/status", response_model=DriverStatusChangeModel)
def change_status(driver_id: str, payload: DriverStatusRequest) -> DriverStatusChangeModel:
    try:
        change = DriverStatusManager.change_driver_status(driver_id, payload.status, payload.source, payload.reason)
    except DriverNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DatabaseNotConfiguredError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except DriverStatusUpdateError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return DriverStatusChangeModel(
        driver_id=change.driver_id,
        old_status=change.old_status,
        new_status=change.new_status,
        new_status_text=driver_status_text(change.new_status),
        reason=change.reason,
        source=change.source,
        changed_at=change.changed_at,
        changed_at_text=format_datetime(change.changed_at),
    )


@router.get("/{driver_id}/status-history", response_model=DriverStatusHistoryResponse)
def status_history(
    driver_id: str,
    limit: int = Query(default=10, gt=0, le=100, description="Maximum number of changes to return"),
) -> DriverStatusHistoryResponse:
    try:
        items = DriverStatusManager.recent_status_changes(driver_id, limit=limit)
    except DatabaseNotConfiguredError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return DriverStatusHistoryResponse(driver_id=driver_id, items=items)
