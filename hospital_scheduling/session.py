"""Wire the scheduling components together for one session."""
from hospital_scheduling.appointments import AppointmentStore
from hospital_scheduling.leaves import LeaveTracker
from hospital_scheduling.registry import (
    DoctorRegistry,
    seed_appointments,
    seed_leaves,
    seed_schedules,
)
from hospital_scheduling.repository import InMemoryRepository
from hospital_scheduling.schedules import ScheduleBook
from hospital_scheduling.slots import TimeSlotGenerator


class SchedulingSession:
    """
    Single in-memory data owner for a session.

    Pattern: one registry, one leave tracker, one store; the slot
    generator reads from the same store and tracker so its view is never
    stale.
    """

    def __init__(self, seed: bool = True):
        self.registry = DoctorRegistry()
        self.leaves = LeaveTracker(InMemoryRepository(seed_leaves() if seed else []))
        self.schedules = ScheduleBook(
            registry=self.registry,
            schedules=seed_schedules() if seed else []
        )
        self.appointments = AppointmentStore(
            leave_tracker=self.leaves,
            appointments=seed_appointments() if seed else []
        )
        self.slots = TimeSlotGenerator(self.appointments, self.leaves)
