"""Pickup status API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import PickupStatus


class StatusInfoModel(BaseModel):
    status: PickupStatus
    text: str
    allowed_transitions: List[PickupStatus]
    next_status: Optional[PickupStatus] = None
    can_progress: bool
    progress_label: Optional[str] = None
    is_terminal: bool


class StatusUpdateRequest(BaseModel):
    status: PickupStatus
    driver_notes: Optional[str] = None
    completion_photos: Optional[List[str]] = None


class ProgressRequest(BaseModel):
    driver_name: str = Field(..., min_length=1)
    completion_photos: Optional[List[str]] = None


class PickupUpdateResponse(BaseModel):
    pickup_order_id: str
    status: PickupStatus
    rows: List[dict]
