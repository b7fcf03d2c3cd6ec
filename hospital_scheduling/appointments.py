"""Appointment store: source of truth for bookings and slot occupancy.

Rules enforced at the store boundary:
- At most one non-cancelled appointment per (doctor, date, start_time)
- start_time must be a label of the slot grid
- Status changes follow the state machine in state.py
- Appointments are never removed; cancellation is a status
"""
import threading
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from hospital_scheduling import config
from hospital_scheduling.errors import NotFoundError, SchedulingError
from hospital_scheduling.logging_config import get_logger
from hospital_scheduling.models import (
    Appointment,
    AppointmentCreate,
    AppointmentFilters,
    AppointmentStats,
    Leave,
    as_day,
    utc_now,
)
from hospital_scheduling.repository import InMemoryRepository, RecordNotFoundError, Repository
from hospital_scheduling.slots import slot_times
from hospital_scheduling.state import AppointmentStatus, is_terminal, validate_transition

logger = get_logger(__name__)


class AppointmentNotFoundError(NotFoundError):
    """Raised when an appointment id is unknown."""
    pass


class SlotUnavailableError(SchedulingError, ValueError):
    """Raised when a slot already holds a non-cancelled appointment."""
    def __init__(self, message: str, existing_id: str):
        super().__init__(message)
        self.existing_id = existing_id


class SlotAlignmentError(SchedulingError, ValueError):
    """Raised when a start time is not on the slot grid."""
    pass


class DoctorOnLeaveError(SchedulingError, ValueError):
    """Raised when booking a doctor on one of their leave dates."""
    pass


class InvalidTransitionError(SchedulingError, ValueError):
    """Raised when a status change is not allowed by the state machine."""
    def __init__(self, current: AppointmentStatus, intended: AppointmentStatus):
        super().__init__(
            f"Cannot change appointment status from '{current.value}' to '{intended.value}'"
        )
        self.current = current
        self.intended = intended


class AppointmentLockedError(SchedulingError, ValueError):
    """Raised when editing an appointment in a terminal status."""
    pass


# Fields that update() may change; status and slot have dedicated operations
EDITABLE_FIELDS = frozenset({
    "patient_name",
    "type",
    "department",
    "room",
    "notes",
    "symptoms",
    "priority",
    "duration",
})

INITIAL_STATUSES = (AppointmentStatus.SCHEDULED, AppointmentStatus.CONFIRMED)

PENDING_STATUSES = (
    AppointmentStatus.SCHEDULED,
    AppointmentStatus.CONFIRMED,
    AppointmentStatus.IN_PROGRESS,
)


class AppointmentStore:
    """
    In-memory appointment store with a single authoritative owner.

    Pattern: repository for storage + a lock around every
    check-then-write, so two bookings for the same slot cannot both pass
    the occupancy check.
    """

    def __init__(
        self,
        repository: Optional[Repository] = None,
        leave_tracker=None,
        appointments: Optional[Iterable[Appointment]] = None,
        slot_grid: Optional[List[str]] = None
    ):
        """
        Args:
            repository: Backing repository (in-memory by default)
            leave_tracker: LeaveTracker; when given, bookings on leave days are rejected
            appointments: Existing appointments to load (e.g. seed data)
            slot_grid: Allowed start times (defaults to the configured day grid)
        """
        self.repository = repository if repository is not None else InMemoryRepository()
        self.leave_tracker = leave_tracker
        self.slot_grid = frozenset(slot_grid if slot_grid is not None else slot_times())
        self.lock = threading.RLock()
        self._counter = config.APPOINTMENT_ID_START

        for appointment in appointments or []:
            self.repository.create(appointment)
            self._observe_id(appointment.id)

    # ------------------------------------------------------------------
    # ids

    def _observe_id(self, appointment_id: str):
        """Keep the counter ahead of ids loaded from outside."""
        prefix = f"{config.APPOINTMENT_ID_PREFIX}-"
        if appointment_id.startswith(prefix):
            suffix = appointment_id[len(prefix):]
            if suffix.isdigit():
                self._counter = max(self._counter, int(suffix))

    def _next_id(self) -> str:
        self._counter += 1
        return f"{config.APPOINTMENT_ID_PREFIX}-{self._counter}"

    # ------------------------------------------------------------------
    # queries

    def list(self) -> List[Appointment]:
        return self.repository.list()

    def get(self, appointment_id: str) -> Appointment:
        """
        Get appointment by id.

        Raises:
            AppointmentNotFoundError: If the id is unknown
        """
        try:
            return self.repository.get(appointment_id)
        except RecordNotFoundError:
            raise AppointmentNotFoundError(
                f"Appointment '{appointment_id}' not found"
            ) from None

    def get_appointments_by_date(self, day: Union[date, datetime, str]) -> List[Appointment]:
        """All appointments on a calendar day, in store order."""
        day = as_day(day)
        return [a for a in self.repository.list() if a.date == day]

    def get_appointments_by_doctor(
        self,
        doctor_id: str,
        day: Optional[Union[date, datetime, str]] = None
    ) -> List[Appointment]:
        """All appointments for a doctor, optionally on one calendar day."""
        appointments = [a for a in self.repository.list() if a.doctor_id == doctor_id]
        if day is not None:
            day = as_day(day)
            appointments = [a for a in appointments if a.date == day]
        return appointments

    def find_occupant(
        self,
        doctor_id: str,
        day: date,
        start_time: str,
        exclude_id: Optional[str] = None
    ) -> Optional[Appointment]:
        """Non-cancelled appointment holding (doctor, day, start_time), if any."""
        for appointment in self.get_appointments_by_doctor(doctor_id, day):
            if appointment.id == exclude_id:
                continue
            if appointment.start_time == start_time and appointment.occupies_slot:
                return appointment
        return None

    def search(self, filters: AppointmentFilters) -> List[Appointment]:
        """Appointments matching every criterion that is set."""
        results = []
        needle = filters.patient_search.lower() if filters.patient_search else None

        for appointment in self.repository.list():
            if needle and needle not in appointment.patient_name.lower() \
                    and needle not in appointment.patient_id.lower():
                continue
            if filters.doctor_id and appointment.doctor_id != filters.doctor_id:
                continue
            if filters.department and appointment.department != filters.department:
                continue
            if filters.date_from and appointment.date < filters.date_from:
                continue
            if filters.date_to and appointment.date > filters.date_to:
                continue
            if filters.status and appointment.status != filters.status:
                continue
            if filters.type and appointment.type != filters.type:
                continue
            results.append(appointment)

        return results

    def get_stats(self, today: Optional[date] = None) -> AppointmentStats:
        """Dashboard counters; pending covers scheduled, confirmed and in-progress."""
        today = today or date.today()
        appointments = self.repository.list()

        return AppointmentStats(
            today_appointments=sum(1 for a in appointments if a.date == today),
            pending=sum(1 for a in appointments if a.status in PENDING_STATUSES),
            completed=sum(1 for a in appointments if a.status == AppointmentStatus.COMPLETED),
            cancelled=sum(1 for a in appointments if a.status == AppointmentStatus.CANCELLED),
        )

    def conflicts_with_leave(self, leave: Leave) -> List[Appointment]:
        """Slot-holding appointments on a leave day; staff resolve these by hand."""
        return [
            a for a in self.get_appointments_by_doctor(leave.doctor_id, leave.date)
            if a.occupies_slot
        ]

    # ------------------------------------------------------------------
    # writes

    def _check_slot(
        self,
        doctor_id: str,
        day: date,
        start_time: str,
        exclude_id: Optional[str] = None
    ):
        """Raise unless (doctor, day, start_time) can take a booking."""
        if start_time not in self.slot_grid:
            raise SlotAlignmentError(
                f"Start time {start_time} is not on the slot grid"
            )

        if self.leave_tracker is not None and self.leave_tracker.is_on_leave(doctor_id, day):
            raise DoctorOnLeaveError(
                f"Doctor {doctor_id} is on leave on {day.isoformat()}"
            )

        occupant = self.find_occupant(doctor_id, day, start_time, exclude_id=exclude_id)
        if occupant is not None:
            logger.warning(
                "slot_conflict",
                doctor_id=doctor_id,
                date=day.isoformat(),
                start_time=start_time,
                existing_id=occupant.id
            )
            raise SlotUnavailableError(
                f"Slot {day.isoformat()} {start_time} for doctor {doctor_id} "
                f"is already booked ({occupant.id})",
                existing_id=occupant.id
            )

    def create(self, data: Union[AppointmentCreate, dict]) -> Appointment:
        """
        Book a new appointment.

        Args:
            data: Booking form data

        Returns:
            Stored Appointment with a store-assigned id

        Raises:
            SlotUnavailableError: Slot already holds a non-cancelled appointment
            SlotAlignmentError: start_time not on the grid
            DoctorOnLeaveError: Doctor is on leave that day
            InvalidTransitionError: Initial status other than scheduled/confirmed
        """
        if isinstance(data, dict):
            data = AppointmentCreate(**data)

        if data.status not in INITIAL_STATUSES:
            raise InvalidTransitionError(AppointmentStatus.SCHEDULED, data.status)

        with self.lock:
            self._check_slot(data.doctor_id, data.date, data.start_time)

            now = utc_now()
            appointment = Appointment(
                **data.model_dump(),
                id=self._next_id(),
                created_at=now,
                updated_at=now
            )
            self.repository.create(appointment)

        logger.info(
            "appointment_created",
            appointment_id=appointment.id,
            doctor_id=appointment.doctor_id,
            date=appointment.date.isoformat(),
            start_time=appointment.start_time
        )
        return appointment

    def _ensure_editable(self, appointment: Appointment):
        if is_terminal(appointment.status):
            raise AppointmentLockedError(
                f"Appointment {appointment.id} is {appointment.status.value} and cannot be changed"
            )

    def _rebuild(self, appointment: Appointment, **changes) -> Appointment:
        """Validated copy with end_time re-derived from start_time + duration."""
        values = appointment.model_dump()
        values.update(changes)
        values["end_time"] = None
        values["updated_at"] = utc_now()
        return Appointment(**values)

    def reschedule(
        self,
        appointment_id: str,
        new_date: Union[date, datetime, str],
        new_start_time: str
    ) -> Appointment:
        """
        Move an appointment to another slot, keeping patient and doctor.

        Raises:
            AppointmentNotFoundError: Unknown id
            AppointmentLockedError: Appointment is in a terminal status
            SlotUnavailableError / SlotAlignmentError / DoctorOnLeaveError
        """
        new_day = as_day(new_date)

        with self.lock:
            appointment = self.get(appointment_id)
            self._ensure_editable(appointment)
            self._check_slot(
                appointment.doctor_id, new_day, new_start_time, exclude_id=appointment.id
            )
            updated = self._rebuild(appointment, date=new_day, start_time=new_start_time)
            self.repository.update(updated)

        logger.info(
            "appointment_rescheduled",
            appointment_id=appointment_id,
            date=new_day.isoformat(),
            start_time=new_start_time
        )
        return updated

    def update(self, appointment_id: str, **changes) -> Appointment:
        """
        Edit descriptive fields of a non-terminal appointment.

        Only fields in EDITABLE_FIELDS are accepted; use reschedule() to
        move a booking and transition() to change its status.

        Raises:
            ValueError: If a non-editable field is passed
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated directly: {', '.join(sorted(unknown))}")

        with self.lock:
            appointment = self.get(appointment_id)
            self._ensure_editable(appointment)
            updated = self._rebuild(appointment, **changes)
            self.repository.update(updated)

        logger.info("appointment_updated", appointment_id=appointment_id, fields=sorted(changes))
        return updated

    def transition(
        self,
        appointment_id: str,
        new_status: Union[AppointmentStatus, str],
        reason: Optional[str] = None
    ) -> Appointment:
        """
        Change status following the state machine.

        Args:
            appointment_id: Appointment to change
            new_status: Target status
            reason: Cancellation reason (stored for cancelled only)

        Raises:
            InvalidTransitionError: If the transition is not allowed
        """
        new_status = AppointmentStatus(new_status)

        with self.lock:
            appointment = self.get(appointment_id)
            if not validate_transition(appointment.status, new_status):
                raise InvalidTransitionError(appointment.status, new_status)

            now = utc_now()
            changes = {"status": new_status, "updated_at": now}
            if new_status == AppointmentStatus.COMPLETED:
                changes["completed_at"] = now
            elif new_status == AppointmentStatus.CANCELLED:
                changes["cancelled_at"] = now
                changes["cancellation_reason"] = reason

            updated = appointment.model_copy(update=changes)
            self.repository.update(updated)

        logger.info(
            "appointment_status_changed",
            appointment_id=appointment_id,
            from_status=appointment.status.value,
            to_status=new_status.value
        )
        return updated

    def confirm(self, appointment_id: str) -> Appointment:
        return self.transition(appointment_id, AppointmentStatus.CONFIRMED)

    def start(self, appointment_id: str) -> Appointment:
        return self.transition(appointment_id, AppointmentStatus.IN_PROGRESS)

    def complete(self, appointment_id: str) -> Appointment:
        return self.transition(appointment_id, AppointmentStatus.COMPLETED)

    def cancel(self, appointment_id: str, reason: Optional[str] = None) -> Appointment:
        return self.transition(appointment_id, AppointmentStatus.CANCELLED, reason=reason)

    def mark_no_show(self, appointment_id: str) -> Appointment:
        return self.transition(appointment_id, AppointmentStatus.NO_SHOW)
