"""Pickup status endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ...models.domain import PickupStatus
from ...persistence import pickups as pickup_store
from ...persistence.errors import DatabaseNotConfiguredError, InvalidStatusTransitionError, PickupNotFoundError
from ...schemas.pickups import (
    PickupUpdateResponse,
    ProgressRequest,
    StatusInfoModel,
    StatusUpdateRequest,
)
from ...services.status import (
    TERMINAL_STATUSES,
    allowed_transitions,
    can_progress,
    next_status,
    progress_button_label,
    status_text,
)

router = APIRouter(prefix="/pickups", tags=["pickups"])


def _status_info(current: PickupStatus) -> StatusInfoModel:
    return StatusInfoModel(
        status=current,
        text=status_text(current),
        allowed_transitions=sorted(allowed_transitions(current), key=lambda s: list(PickupStatus).index(s)),
        next_status=next_status(current),
        can_progress=can_progress(current),
        progress_label=progress_button_label(current),
        is_terminal=current in TERMINAL_STATUSES,
    )


def _raise_http(exc: Exception) -> None:
    if isinstance(exc, PickupNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if isinstance(exc, InvalidStatusTransitionError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if isinstance(exc, DatabaseNotConfiguredError):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    raise exc


@router.get("/statuses", response_model=list[StatusInfoModel])
def list_statuses() -> list[StatusInfoModel]:
    return [_status_info(item) for item in PickupStatus]


@router.get("/statuses/{current}", response_model=StatusInfoModel)
def get_status(current: PickupStatus) -> StatusInfoModel:
    return _status_info(current)


@router.post("/{pickup_order_id}/status", response_model=PickupUpdateResponse)
def update_status(pickup_order_id: str, payload: StatusUpdateRequest) -> PickupUpdateResponse:
    try:
        rows = pickup_store.update_pickup_status(
            pickup_order_id,
            payload.status,
            payload.driver_notes,
            payload.completion_photos,
        )
    except (PickupNotFoundError, InvalidStatusTransitionError, DatabaseNotConfiguredError) as exc:
        _raise_http(exc)
    return PickupUpdateResponse(pickup_order_id=pickup_order_id, status=payload.status, rows=rows)


@router.post("/{pickup_order_id}/progress", response_model=PickupUpdateResponse)
def progress(pickup_order_id: str, payload: ProgressRequest) -> PickupUpdateResponse:
    try:
        rows = pickup_store.progress_pickup(pickup_order_id, payload.driver_name, payload.completion_photos)
    except (PickupNotFoundError, InvalidStatusTransitionError, DatabaseNotConfiguredError) as exc:
        _raise_http(exc)
    new_status = rows[0].get("status") if rows else None
    return PickupUpdateResponse(
        pickup_order_id=pickup_order_id,
        status=PickupStatus(new_status),
        rows=rows,
    )
