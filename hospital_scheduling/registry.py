"""Doctor and department catalogue plus seed data for a session.

All business data centralized here - modify as needed without touching code.
"""
from datetime import date, datetime, UTC
from typing import Dict, List, Optional

from hospital_scheduling.errors import DoctorNotFoundError, NotFoundError
from hospital_scheduling.models import (
    Appointment,
    Department,
    Doctor,
    Leave,
    Schedule,
)


DEPARTMENTS = [
    {"id": "1", "name": "Cardiology"},
    {"id": "2", "name": "Neurology"},
    {"id": "3", "name": "Pediatrics"},
    {"id": "4", "name": "Orthopedics"},
    {"id": "5", "name": "Emergency Medicine"},
    {"id": "6", "name": "Dermatology"},
    {"id": "7", "name": "Gastroenterology"},
]

DOCTORS = [
    {
        "id": "1",
        "name": "Dr. Sarah Johnson",
        "department_id": "1",
        "department_name": "Cardiology",
        "specialization": "Interventional Cardiology",
        "email": "sarah.johnson@hospital.com",
    },
    {
        "id": "2",
        "name": "Dr. Michael Chen",
        "department_id": "2",
        "department_name": "Neurology",
        "specialization": "Neurosurgery",
        "email": "michael.chen@hospital.com",
    },
    {
        "id": "3",
        "name": "Dr. Emily Davis",
        "department_id": "3",
        "department_name": "Pediatrics",
        "specialization": "Pediatric Emergency",
        "email": "emily.davis@hospital.com",
    },
    {
        "id": "4",
        "name": "Dr. Robert Smith",
        "department_id": "4",
        "department_name": "Orthopedics",
        "specialization": "Spine Surgery",
        "email": "robert.smith@hospital.com",
    },
    {
        "id": "5",
        "name": "Dr. Lisa Wang",
        "department_id": "1",
        "department_name": "Cardiology",
        "specialization": "Pediatric Cardiology",
        "email": "lisa.wang@hospital.com",
    },
    {
        "id": "6",
        "name": "Dr. James Wilson",
        "department_id": "5",
        "department_name": "Emergency Medicine",
        "specialization": "Trauma Surgery",
        "email": "james.wilson@hospital.com",
    },
]

_SEEDED_AT = datetime(2025, 10, 1, 10, 0, tzinfo=UTC)

SCHEDULES = [
    {
        "id": "1",
        "doctor_id": "1",
        "doctor_name": "Dr. Sarah Johnson",
        "department_id": "1",
        "department_name": "Cardiology",
        "working_days": ["monday", "tuesday", "wednesday", "thursday", "friday"],
        "start_time": "09:00",
        "end_time": "13:00",
        "slot_duration": 30,
        "max_patients_per_session": 15,
        "consultation_mode": "both",
        "room_number": "C-101",
        "valid_from": "2025-01-01",
        "valid_to": "always",
        "status": "active",
        "created_at": _SEEDED_AT,
    },
    {
        "id": "2",
        "doctor_id": "2",
        "doctor_name": "Dr. Michael Chen",
        "department_id": "2",
        "department_name": "Neurology",
        "working_days": ["monday", "wednesday", "friday"],
        "start_time": "14:00",
        "end_time": "18:00",
        "slot_duration": 45,
        "max_patients_per_session": 10,
        "consultation_mode": "in-person",
        "room_number": "N-205",
        "valid_from": "2025-01-01",
        "valid_to": "always",
        "status": "active",
        "created_at": _SEEDED_AT,
    },
    {
        "id": "3",
        "doctor_id": "3",
        "doctor_name": "Dr. Emily Davis",
        "department_id": "3",
        "department_name": "Pediatrics",
        "working_days": ["tuesday", "thursday", "saturday"],
        "start_time": "10:00",
        "end_time": "14:00",
        "slot_duration": 20,
        "max_patients_per_session": 20,
        "consultation_mode": "both",
        "room_number": "P-102",
        "valid_from": "2025-01-01",
        "valid_to": "2025-12-31",
        "status": "active",
        "created_at": _SEEDED_AT,
    },
    {
        "id": "4",
        "doctor_id": "4",
        "doctor_name": "Dr. Robert Smith",
        "department_id": "4",
        "department_name": "Orthopedics",
        "working_days": ["monday", "tuesday", "wednesday", "thursday"],
        "start_time": "08:30",
        "end_time": "12:30",
        "slot_duration": 30,
        "max_patients_per_session": 12,
        "consultation_mode": "in-person",
        "room_number": "O-301",
        "valid_from": "2025-01-01",
        "valid_to": "always",
        "status": "inactive",
        "created_at": _SEEDED_AT,
    },
]

LEAVES = [
    {"id": "1", "doctor_id": "1", "date": "2025-10-25", "note": "Medical Conference"},
    {"id": "2", "doctor_id": "2", "date": "2025-10-30", "note": "Personal Leave"},
]

APPOINTMENTS = [
    {
        "id": "APT-1001",
        "patient_id": "p1",
        "patient_name": "John Doe",
        "doctor_id": "1",
        "doctor_name": "Dr. Sarah Johnson",
        "date": date(2024, 12, 15),
        "start_time": "09:00",
        "duration": 30,
        "type": "consultation",
        "status": "scheduled",
        "department": "Cardiology",
        "room": "Room 201",
        "priority": "medium",
        "symptoms": "Chest pain, shortness of breath",
    },
    {
        "id": "APT-1002",
        "patient_id": "p2",
        "patient_name": "Sarah Smith",
        "doctor_id": "2",
        "doctor_name": "Dr. Michael Chen",
        "date": date(2024, 12, 15),
        "start_time": "10:00",
        "duration": 30,
        "type": "follow-up",
        "status": "confirmed",
        "department": "Neurology",
        "room": "Room 105",
        "priority": "low",
        "notes": "Follow-up for vaccination",
    },
    {
        "id": "APT-1003",
        "patient_id": "p3",
        "patient_name": "Mike Johnson",
        "doctor_id": "6",
        "doctor_name": "Dr. James Wilson",
        "date": date(2024, 12, 15),
        "start_time": "14:00",
        "duration": 45,
        "type": "emergency",
        "status": "in-progress",
        "department": "Emergency Medicine",
        "room": "ER-3",
        "priority": "urgent",
        "symptoms": "Severe abdominal pain",
    },
]


class DepartmentNotFoundError(NotFoundError):
    """Raised when a department id is not in the registry."""
    pass


class DoctorRegistry:
    """Read-only catalogue of doctors and departments."""

    def __init__(
        self,
        doctors: Optional[List[Doctor]] = None,
        departments: Optional[List[Department]] = None
    ):
        if doctors is None:
            doctors = [Doctor(**d) for d in DOCTORS]
        if departments is None:
            departments = [Department(**d) for d in DEPARTMENTS]

        self._doctors: Dict[str, Doctor] = {d.id: d for d in doctors}
        self._departments: Dict[str, Department] = {d.id: d for d in departments}

    def get_doctor(self, doctor_id: str) -> Doctor:
        """
        Get doctor by id.

        Raises:
            DoctorNotFoundError: If doctor is unknown
        """
        doctor = self._doctors.get(doctor_id)
        if doctor is None:
            raise DoctorNotFoundError(f"Doctor '{doctor_id}' not found")
        return doctor

    def list_doctors(self, department_id: Optional[str] = None) -> List[Doctor]:
        """All doctors, optionally restricted to one department."""
        doctors = list(self._doctors.values())
        if department_id is not None:
            doctors = [d for d in doctors if d.department_id == department_id]
        return doctors

    def get_department(self, department_id: str) -> Department:
        department = self._departments.get(department_id)
        if department is None:
            raise DepartmentNotFoundError(f"Department '{department_id}' not found")
        return department

    def list_departments(self) -> List[Department]:
        return list(self._departments.values())


def seed_schedules() -> List[Schedule]:
    return [Schedule(**s) for s in SCHEDULES]


def seed_leaves() -> List[Leave]:
    return [Leave(**leave) for leave in LEAVES]


def seed_appointments() -> List[Appointment]:
    return [Appointment(**a) for a in APPOINTMENTS]
