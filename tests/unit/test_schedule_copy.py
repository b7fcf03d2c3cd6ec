"""Tests for copying last week's schedules."""
from datetime import date

from hospital_scheduling.models import DayOfWeek
from hospital_scheduling.schedule_copy import copy_last_week


def test_copy_active_open_ended_schedule(make_schedule):
    """Covers last week (2024-12-08) so exactly one copy is produced."""
    original = make_schedule(id="1", doctor_id="1", status="active",
                             valid_from="2024-12-01", valid_to="always")

    result = copy_last_week([original], today=date(2024, 12, 15))

    assert result.copied
    assert result.last_week == date(2024, 12, 8)
    assert len(result.schedules) == 1

    copy = result.schedules[0]
    assert copy.id != original.id
    assert copy.id.startswith("1-copy-")
    assert copy.valid_from == date(2024, 12, 15)
    assert copy.valid_to == "always"
    assert copy.created_at >= original.created_at


def test_copy_keeps_other_fields(make_schedule):
    original = make_schedule(room_number="C-101", max_patients_per_session=15,
                             working_days=["tuesday"], start_time="10:00", end_time="14:00")

    copy = copy_last_week([original], today=date(2024, 12, 15)).schedules[0]

    for field in ("doctor_id", "doctor_name", "department_id", "working_days",
                  "start_time", "end_time", "slot_duration", "max_patients_per_session",
                  "consultation_mode", "room_number", "valid_to", "status"):
        assert getattr(copy, field) == getattr(original, field)


def test_inactive_schedules_never_copied(make_schedule):
    inactive = make_schedule(status="inactive")

    result = copy_last_week([inactive], today=date(2024, 12, 15))

    assert not result.copied
    assert result.schedules == []


def test_schedule_starting_after_last_week_not_copied(make_schedule):
    future = make_schedule(valid_from="2024-12-10")

    result = copy_last_week([future], today=date(2024, 12, 15))

    assert result.schedules == []


def test_schedule_ended_before_last_week_not_copied(make_schedule):
    expired = make_schedule(valid_from="2024-11-01", valid_to="2024-12-07")

    result = copy_last_week([expired], today=date(2024, 12, 15))

    assert result.schedules == []


def test_window_boundaries_are_inclusive(make_schedule):
    starts_on = make_schedule(valid_from="2024-12-08", valid_to="always")
    ends_after_today = make_schedule(valid_from="2024-11-01", valid_to="2024-12-31")

    result = copy_last_week([starts_on, ends_after_today], today=date(2024, 12, 15))

    assert len(result.schedules) == 2


def test_window_closing_before_today_skipped(make_schedule):
    """Covered last week but ends before today: the copy would be an empty window."""
    closing = make_schedule(valid_from="2024-11-01", valid_to="2024-12-10")

    result = copy_last_week([closing], today=date(2024, 12, 15))

    assert result.schedules == []


def test_input_not_mutated(make_schedule):
    schedules = [make_schedule(), make_schedule(status="inactive")]
    snapshot = [s.model_copy(deep=True) for s in schedules]

    copy_last_week(schedules, today=date(2024, 12, 15))

    assert schedules == snapshot
    assert len(schedules) == 2


def test_copy_does_not_share_working_days(make_schedule):
    original = make_schedule(working_days=["monday"], valid_from="2024-12-01")

    copy = copy_last_week([original], today=date(2024, 12, 15)).schedules[0]
    copy.working_days.append(DayOfWeek.FRIDAY)

    assert original.working_days == [DayOfWeek.MONDAY]


def test_copied_ids_are_distinct(make_schedule):
    original = make_schedule(id="same")

    first = copy_last_week([original], today=date(2024, 12, 15)).schedules[0]
    second = copy_last_week([original], today=date(2024, 12, 15)).schedules[0]

    assert first.id != second.id


def test_empty_input():
    result = copy_last_week([], today=date(2024, 12, 15))

    assert not result.copied
