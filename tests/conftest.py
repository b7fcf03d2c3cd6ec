"""Shared test fixtures."""
from datetime import date

import pytest

from hospital_scheduling.appointments import AppointmentStore
from hospital_scheduling.leaves import LeaveTracker
from hospital_scheduling.models import Schedule
from hospital_scheduling.slots import TimeSlotGenerator


@pytest.fixture
def booking_day() -> date:
    return date(2024, 12, 15)


@pytest.fixture
def leave_tracker() -> LeaveTracker:
    """Empty in-memory leave tracker."""
    return LeaveTracker()


@pytest.fixture
def store(leave_tracker) -> AppointmentStore:
    """Empty appointment store linked to the leave tracker."""
    return AppointmentStore(leave_tracker=leave_tracker)


@pytest.fixture
def generator(store, leave_tracker) -> TimeSlotGenerator:
    return TimeSlotGenerator(store, leave_tracker)


@pytest.fixture
def make_booking(booking_day):
    """Create booking form data with sensible defaults."""
    def _create(**overrides):
        data = {
            "patient_id": "p1",
            "patient_name": "John Doe",
            "doctor_id": "1",
            "doctor_name": "Dr. Sarah Johnson",
            "date": booking_day,
            "start_time": "09:00",
            "duration": 30,
            "department": "Cardiology",
        }
        data.update(overrides)
        return data
    return _create


@pytest.fixture
def make_schedule():
    """Create a Schedule with sensible defaults."""
    counter = iter(range(1, 1000))

    def _create(**overrides):
        data = {
            "id": f"s{next(counter)}",
            "doctor_id": "1",
            "doctor_name": "Dr. Sarah Johnson",
            "department_id": "1",
            "department_name": "Cardiology",
            "working_days": ["monday", "wednesday", "friday"],
            "start_time": "09:00",
            "end_time": "13:00",
            "valid_from": "2024-12-01",
            "valid_to": "always",
            "status": "active",
        }
        data.update(overrides)
        return Schedule(**data)
    return _create
