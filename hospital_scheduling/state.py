"""Appointment status state machine.

Forward path: scheduled -> confirmed -> in-progress -> completed.
Cancelled and no-show are reachable from any non-terminal status.
"""
from enum import Enum
from typing import Dict


class AppointmentStatus(str, Enum):
    """Discrete appointment statuses."""
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


TERMINAL_STATUSES = frozenset({
    AppointmentStatus.COMPLETED,
    AppointmentStatus.CANCELLED,
    AppointmentStatus.NO_SHOW,
})

# Statuses that still hold their slot
OCCUPYING_STATUSES = frozenset(AppointmentStatus) - {AppointmentStatus.CANCELLED}


# Pattern: Current status → [allowed next statuses]
VALID_TRANSITIONS: Dict[AppointmentStatus, list[AppointmentStatus]] = {
    AppointmentStatus.SCHEDULED: [
        AppointmentStatus.CONFIRMED,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.NO_SHOW,
    ],
    AppointmentStatus.CONFIRMED: [
        AppointmentStatus.IN_PROGRESS,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.NO_SHOW,
    ],
    AppointmentStatus.IN_PROGRESS: [
        AppointmentStatus.COMPLETED,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.NO_SHOW,
    ],
    AppointmentStatus.COMPLETED: [],
    AppointmentStatus.CANCELLED: [],
    AppointmentStatus.NO_SHOW: [],
}


def validate_transition(
    current: AppointmentStatus,
    intended: AppointmentStatus
) -> bool:
    """
    Validate a status transition.

    Prevents:
    - Skipping states (scheduled -> completed)
    - Backward transitions (confirmed -> scheduled)
    - Leaving a terminal status

    Args:
        current: Current appointment status
        intended: Requested next status

    Returns:
        True if transition is valid

    Example:
        >>> validate_transition(
        ...     AppointmentStatus.SCHEDULED,
        ...     AppointmentStatus.CONFIRMED
        ... )
        True
    """
    allowed = VALID_TRANSITIONS.get(current, [])
    return intended in allowed


def is_terminal(status: AppointmentStatus) -> bool:
    """Return True when no further transition is possible."""
    return status in TERMINAL_STATUSES
