"""Time-slot generation for a doctor's working day.

Slots are a read-side projection of the appointment store and the leave
tracker. They are recomputed on every call and never stored.
"""
from datetime import date, datetime
from typing import Dict, List, Optional, Union

from hospital_scheduling import config
from hospital_scheduling.models import (
    SlotPreview,
    SlotRange,
    TimeSlot,
    as_day,
    format_time,
    parse_time,
)


def slot_times(
    day_start: str = config.DAY_START,
    day_end: str = config.DAY_END,
    slot_minutes: int = config.SLOT_DURATION_MINUTES
) -> List[str]:
    """
    Slot labels from day_start inclusive to day_end exclusive.

    Example:
        >>> slot_times("09:00", "10:30", 30)
        ['09:00', '09:30', '10:00']
    """
    if slot_minutes <= 0:
        raise ValueError("slot_minutes must be positive")

    start = parse_time(day_start)
    end = parse_time(day_end)
    return [format_time(minute) for minute in range(start, end, slot_minutes)]


class TimeSlotGenerator:
    """
    Builds the bookable slot grid for (date, doctor).

    A slot is unavailable when a non-cancelled appointment starts at that
    time, or when the doctor is on leave that day. Occupied slots always
    carry the appointment id.
    """

    def __init__(
        self,
        store,
        leave_tracker=None,
        day_start: str = config.DAY_START,
        day_end: str = config.DAY_END,
        slot_minutes: int = config.SLOT_DURATION_MINUTES
    ):
        """
        Args:
            store: AppointmentStore consulted for occupancy
            leave_tracker: LeaveTracker consulted for leave days (optional)
            day_start: First slot label (HH:MM)
            day_end: End of the working day, exclusive (HH:MM)
            slot_minutes: Slot length in minutes
        """
        self.store = store
        self.leave_tracker = leave_tracker
        self.times = slot_times(day_start, day_end, slot_minutes)

    def _occupancy(self, day: date, doctor_id: str) -> Dict[str, str]:
        """Map of start_time -> appointment id for slot-holding appointments."""
        occupied = {}
        for appointment in self.store.get_appointments_by_doctor(doctor_id, day):
            if appointment.occupies_slot:
                occupied.setdefault(appointment.start_time, appointment.id)
        return occupied

    def generate_slots(self, day: Union[date, datetime, str], doctor_id: str) -> List[TimeSlot]:
        """
        Generate the slot grid for one doctor and calendar date.

        Args:
            day: Calendar date, datetime or ISO string (reduced to its date)
            doctor_id: Doctor whose grid is requested

        Returns:
            TimeSlots in ascending time order, one per grid label
        """
        day = as_day(day)
        occupied = self._occupancy(day, doctor_id)
        on_leave = (
            self.leave_tracker is not None
            and self.leave_tracker.is_on_leave(doctor_id, day)
        )

        return [
            TimeSlot(
                time=time,
                available=not on_leave and time not in occupied,
                appointment_id=occupied.get(time)
            )
            for time in self.times
        ]

    def available_times(self, day: date, doctor_id: str) -> List[str]:
        """Labels of the free slots only."""
        return [slot.time for slot in self.generate_slots(day, doctor_id) if slot.available]


def preview_schedule_slots(
    start_time: str,
    end_time: str,
    slot_duration: int,
    max_patients_per_session: int = 1
) -> SlotPreview:
    """
    Preview the slots a schedule session would produce.

    A trailing slot that would run past end_time is dropped.

    Args:
        start_time: Session start (HH:MM)
        end_time: Session end (HH:MM)
        slot_duration: Minutes per slot
        max_patients_per_session: Patients per slot

    Returns:
        SlotPreview with ranges and capacity totals (empty when inputs are missing)
    """
    if not start_time or not end_time or not slot_duration or slot_duration <= 0:
        return SlotPreview()

    start = parse_time(start_time)
    end = parse_time(end_time)

    ranges = []
    current = start
    while current + slot_duration <= end:
        ranges.append(SlotRange(
            start_time=format_time(current),
            end_time=format_time(current + slot_duration)
        ))
        current += slot_duration

    return SlotPreview(
        slots=ranges,
        total_slots=len(ranges),
        total_capacity=len(ranges) * max_patients_per_session,
        total_minutes=len(ranges) * slot_duration
    )


def format_slots(slots: List[TimeSlot], columns: int = 4) -> str:
    """
    Format a slot grid for terminal display.

    Example:
        09:00 ✅   09:30 ❌ APT-1001   10:00 ✅   10:30 ✅
    """
    if not slots:
        return "❌ No slots for this day."

    cells = []
    for slot in slots:
        if slot.available:
            cells.append(f"{slot.time} ✅")
        elif slot.appointment_id:
            cells.append(f"{slot.time} ❌ {slot.appointment_id}")
        else:
            cells.append(f"{slot.time} ⛔")

    width = max(len(cell) for cell in cells) + 3
    lines = []
    for i in range(0, len(cells), columns):
        row = cells[i:i + columns]
        lines.append("".join(cell.ljust(width) for cell in row).rstrip())

    return "\n".join(lines)
