"""Pickup order status progression.

Workflow: pending -> scheduled -> assigned -> in_progress -> completed.
Cancelled and rejected orders can be scheduled again; completed is final.
"""

from __future__ import annotations

from typing import Optional

from ...models.domain import PickupStatus

P = PickupStatus

PICKUP_STATUS_TRANSITIONS: dict[PickupStatus, frozenset[PickupStatus]] = {
    P.PENDING: frozenset({P.SCHEDULED, P.CANCELLED}),
    P.SCHEDULED: frozenset({P.ASSIGNED, P.CANCELLED}),
    P.ASSIGNED: frozenset({P.IN_PROGRESS, P.REJECTED, P.CANCELLED}),
    P.IN_PROGRESS: frozenset({P.COMPLETED, P.CANCELLED}),
    P.COMPLETED: frozenset(),
    P.CANCELLED: frozenset({P.SCHEDULED}),  # reactivation
    P.REJECTED: frozenset({P.SCHEDULED}),  # reassignment
}

HAPPY_PATH: dict[PickupStatus, PickupStatus] = {
    P.PENDING: P.SCHEDULED,
    P.SCHEDULED: P.ASSIGNED,
    P.ASSIGNED: P.IN_PROGRESS,
    P.IN_PROGRESS: P.COMPLETED,
}

PROGRESS_BUTTON_LABELS: dict[PickupStatus, str] = {
    P.ASSIGNED: "Starta upphämtning",
    P.IN_PROGRESS: "Slutför upphämtning",
}

STATUS_TEXTS: dict[PickupStatus, str] = {
    P.PENDING: "Ny förfrågan",
    P.SCHEDULED: "Väntar på upphämtning",
    P.ASSIGNED: "Tilldelad",
    P.IN_PROGRESS: "Pågående",
    P.COMPLETED: "Slutförd",
    P.CANCELLED: "Avbruten",
    P.REJECTED: "Avvisad",
}

TERMINAL_STATUSES: frozenset[PickupStatus] = frozenset(
    status for status, targets in PICKUP_STATUS_TRANSITIONS.items() if not targets
)


def coerce_status(value: PickupStatus | str | None) -> Optional[PickupStatus]:
    """Return the matching ``PickupStatus`` or ``None`` for unknown values."""
    if isinstance(value, PickupStatus):
        return value
    try:
        return PickupStatus(value)
    except ValueError:
        return None


def is_valid_transition(current: PickupStatus | str | None, target: PickupStatus | str | None) -> bool:
    from_status = coerce_status(current)
    to_status = coerce_status(target)
    if from_status is None or to_status is None:
        return False
    return to_status in PICKUP_STATUS_TRANSITIONS.get(from_status, frozenset())


def allowed_transitions(current: PickupStatus | str | None) -> frozenset[PickupStatus]:
    status = coerce_status(current)
    if status is None:
        return frozenset()
    return PICKUP_STATUS_TRANSITIONS[status]


def next_status(current: PickupStatus | str | None) -> Optional[PickupStatus]:
    """Single happy-path successor, or ``None`` where the caller must choose."""
    status = coerce_status(current)
    if status is None:
        return None
    return HAPPY_PATH.get(status)


def progress_button_label(current: PickupStatus | str | None) -> Optional[str]:
    status = coerce_status(current)
    if status is None:
        return None
    return PROGRESS_BUTTON_LABELS.get(status)


def can_progress(current: PickupStatus | str | None) -> bool:
    return coerce_status(current) in PROGRESS_BUTTON_LABELS


def status_text(current: PickupStatus | str | None) -> str:
    """Swedish display text; unknown values are shown as given."""
    status = coerce_status(current)
    if status is None:
        return str(current or "")
    return STATUS_TEXTS[status]
