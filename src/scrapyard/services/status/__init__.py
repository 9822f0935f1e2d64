"""Pickup and driver status rules."""

from .drivers import DRIVER_STATUS_TEXTS, driver_status_text, normalize_driver_status, parse_driver_status
from .progression import (
    PICKUP_STATUS_TRANSITIONS,
    STATUS_TEXTS,
    TERMINAL_STATUSES,
    allowed_transitions,
    can_progress,
    is_valid_transition,
    next_status,
    progress_button_label,
    status_text,
)

__all__ = [
    "DRIVER_STATUS_TEXTS",
    "PICKUP_STATUS_TRANSITIONS",
    "STATUS_TEXTS",
    "TERMINAL_STATUSES",
    "allowed_transitions",
    "can_progress",
    "driver_status_text",
    "is_valid_transition",
    "next_status",
    "normalize_driver_status",
    "parse_driver_status",
    "progress_button_label",
    "status_text",
]
