"""Driver availability API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.domain import DriverStatus
from ..services.status.drivers import parse_driver_status


class DriverStatusRequest(BaseModel):
    status: DriverStatus = Field(..., description="Target status; legacy aliases such as 'on_duty' are accepted.")
    source: str = Field(default="admin_panel")
    reason: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _accept_aliases(cls, value: Any) -> DriverStatus:
        return parse_driver_status(value)


class DriverStatusChangeModel(BaseModel):
    driver_id: str
    old_status: Optional[DriverStatus] = None
    new_status: DriverStatus
    new_status_text: str
    reason: str
    source: str
    changed_at: datetime
    changed_at_text: str = Field(..., description="Local Swedish rendering of changed_at.")


class DriverStatusHistoryResponse(BaseModel):
    driver_id: str
    items: List[dict]
