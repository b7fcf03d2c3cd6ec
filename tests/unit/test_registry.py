"""Tests for the doctor registry and seed data."""
from datetime import date

import pytest

from hospital_scheduling.errors import DoctorNotFoundError
from hospital_scheduling.models import Department, Doctor
from hospital_scheduling.registry import (
    DepartmentNotFoundError,
    DoctorRegistry,
    seed_appointments,
    seed_leaves,
    seed_schedules,
)


@pytest.fixture
def registry():
    return DoctorRegistry()


def test_get_doctor(registry):
    doctor = registry.get_doctor("2")

    assert doctor.name == "Dr. Michael Chen"
    assert doctor.department_name == "Neurology"


def test_unknown_doctor(registry):
    with pytest.raises(DoctorNotFoundError):
        registry.get_doctor("42")


def test_list_doctors_by_department(registry):
    cardiology = registry.list_doctors(department_id="1")

    assert {d.id for d in cardiology} == {"1", "5"}
    assert len(registry.list_doctors()) == 6


def test_departments(registry):
    assert len(registry.list_departments()) == 7
    assert registry.get_department("5").name == "Emergency Medicine"

    with pytest.raises(DepartmentNotFoundError):
        registry.get_department("99")


def test_custom_catalogue():
    registry = DoctorRegistry(
        doctors=[Doctor(id="d1", name="Dr. Test", specialization="GP", department_id="x")],
        departments=[Department(id="x", name="General")],
    )

    assert registry.get_doctor("d1").name == "Dr. Test"
    assert registry.list_doctors(department_id="1") == []


def test_seed_data_is_consistent(registry):
    schedules = seed_schedules()
    leaves = seed_leaves()
    appointments = seed_appointments()

    assert [s.id for s in schedules] == ["1", "2", "3", "4"]
    assert [s.status.value for s in schedules].count("inactive") == 1
    assert schedules[2].valid_to == date(2025, 12, 31)
    assert leaves[0].date == date(2025, 10, 25)
    assert [a.id for a in appointments] == ["APT-1001", "APT-1002", "APT-1003"]

    for schedule in schedules:
        assert registry.get_doctor(schedule.doctor_id).name == schedule.doctor_name
