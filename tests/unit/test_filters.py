"""Tests for the schedule filter engine."""
import pytest
from pydantic import ValidationError

from hospital_scheduling.filters import (
    ScheduleFilters,
    active_filter_count,
    clear_filters,
    filter_schedules,
)


@pytest.fixture
def mixed_schedules(make_schedule):
    return [
        make_schedule(doctor_id="1", department_id="1", status="active",
                      working_days=["monday", "tuesday"]),
        make_schedule(doctor_id="1", department_id="1", status="inactive",
                      working_days=["monday"]),
        make_schedule(doctor_id="2", department_id="2", status="active",
                      working_days=["wednesday", "friday"]),
        make_schedule(doctor_id="5", department_id="1", status="active",
                      working_days=["saturday"]),
    ]


def test_all_wildcards_returns_everything_unchanged(mixed_schedules):
    result = filter_schedules(mixed_schedules, ScheduleFilters())

    assert result == mixed_schedules


def test_doctor_and_status_filter(mixed_schedules):
    """Only doctor 1's active schedules."""
    filters = ScheduleFilters(
        doctor_id="1", department_id="all", day_of_week="all", status="active"
    )

    result = filter_schedules(mixed_schedules, filters)

    assert len(result) == 1
    assert result[0].doctor_id == "1"
    assert result[0].status == "active"


def test_department_filter(mixed_schedules):
    result = filter_schedules(mixed_schedules, ScheduleFilters(department_id="1"))

    assert {s.doctor_id for s in result} == {"1", "5"}
    assert len(result) == 3


def test_day_of_week_matches_working_days(mixed_schedules):
    result = filter_schedules(mixed_schedules, ScheduleFilters(day_of_week="monday"))

    assert len(result) == 2
    assert all("monday" in s.working_days for s in result)


def test_no_match_returns_empty(mixed_schedules):
    result = filter_schedules(mixed_schedules, ScheduleFilters(doctor_id="99"))

    assert result == []


def test_exact_match_only(mixed_schedules):
    assert filter_schedules(mixed_schedules, ScheduleFilters(doctor_id="10")) == []


def test_empty_value_treated_as_wildcard(mixed_schedules):
    result = filter_schedules(mixed_schedules, ScheduleFilters(doctor_id=""))

    assert result == mixed_schedules


def test_active_filter_count():
    assert active_filter_count(ScheduleFilters()) == 0
    assert active_filter_count(ScheduleFilters(doctor_id="1")) == 1
    assert active_filter_count(
        ScheduleFilters(doctor_id="1", department_id="2", day_of_week="friday", status="inactive")
    ) == 4


def test_clear_filters_resets_to_wildcards():
    cleared = clear_filters()

    assert cleared == ScheduleFilters(
        doctor_id="all", department_id="all", day_of_week="all", status="all"
    )
    assert active_filter_count(cleared) == 0


def test_invalid_enum_values_rejected():
    with pytest.raises(ValidationError):
        ScheduleFilters(status="temporary")
    with pytest.raises(ValidationError):
        ScheduleFilters(day_of_week="someday")
