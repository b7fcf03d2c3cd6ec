"""Leave/exception tracking: single dates on which a doctor is unavailable.

The tracker only records overrides. Appointments already booked on a leave
date are not cancelled automatically; see
AppointmentStore.conflicts_with_leave for surfacing them to staff.
"""
import uuid
from datetime import date, datetime
from typing import List, Optional, Union

from hospital_scheduling.errors import SchedulingError
from hospital_scheduling.logging_config import get_logger
from hospital_scheduling.models import Leave, as_day
from hospital_scheduling.repository import InMemoryRepository, Repository

logger = get_logger(__name__)


class LeaveValidationError(SchedulingError, ValueError):
    """Raised when a leave request is missing its date or has a bad one."""
    pass


def parse_leave_date(value: Union[date, str, None]) -> date:
    """
    Validate the date of a leave request.

    Args:
        value: date object or ISO string (YYYY-MM-DD)

    Raises:
        LeaveValidationError: If empty or not an ISO calendar date
    """
    if not value:
        raise LeaveValidationError("Leave date is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise LeaveValidationError(
            f"Invalid leave date '{value}'. Use YYYY-MM-DD"
        ) from None


class LeaveTracker:
    """Records leave dates per doctor on top of recurring schedules."""

    def __init__(self, repository: Optional[Repository] = None):
        self.repository = repository if repository is not None else InMemoryRepository()

    def mark_leave(
        self,
        doctor_id: str,
        leave_date: Union[date, str, None],
        note: Optional[str] = ""
    ) -> Leave:
        """
        Record a leave for a doctor.

        Args:
            doctor_id: Doctor going on leave
            leave_date: Date of the leave (required)
            note: Optional free text, e.g. "Medical conference"

        Returns:
            The stored Leave

        Raises:
            LeaveValidationError: If the date is missing or malformed
        """
        if not doctor_id:
            raise LeaveValidationError("Doctor is required")
        day = parse_leave_date(leave_date)

        leave = Leave(
            id=f"leave-{uuid.uuid4().hex[:12]}",
            doctor_id=doctor_id,
            date=day,
            note=(note or "").strip()
        )
        self.repository.create(leave)

        logger.info("leave_marked", doctor_id=doctor_id, date=day.isoformat(), leave_id=leave.id)
        return leave

    def list(self) -> List[Leave]:
        return self.repository.list()

    def leaves_for_doctor(self, doctor_id: str) -> List[Leave]:
        return [leave for leave in self.repository.list() if leave.doctor_id == doctor_id]

    def leaves_on(self, day: Union[date, datetime, str]) -> List[Leave]:
        day = as_day(day)
        return [leave for leave in self.repository.list() if leave.date == day]

    def is_on_leave(self, doctor_id: str, day: Union[date, datetime, str]) -> bool:
        """Whether the doctor has any leave recorded for this calendar date."""
        day = as_day(day)
        return any(
            leave.doctor_id == doctor_id and leave.date == day
            for leave in self.repository.list()
        )
