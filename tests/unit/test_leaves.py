"""Tests for the leave/exception tracker."""
from datetime import date, datetime

import pytest

from hospital_scheduling.leaves import LeaveTracker, LeaveValidationError, parse_leave_date


def test_mark_leave_blocks_only_that_date(leave_tracker):
    leave = leave_tracker.mark_leave("1", date(2025, 10, 25), "Medical Conference")

    assert leave.id.startswith("leave-")
    assert leave.note == "Medical Conference"
    assert leave_tracker.is_on_leave("1", date(2025, 10, 25))
    assert not leave_tracker.is_on_leave("1", date(2025, 10, 24))
    assert not leave_tracker.is_on_leave("1", date(2025, 10, 26))


def test_leave_is_per_doctor(leave_tracker):
    leave_tracker.mark_leave("1", "2025-10-25")

    assert not leave_tracker.is_on_leave("2", date(2025, 10, 25))


def test_note_is_optional(leave_tracker):
    leave = leave_tracker.mark_leave("2", "2025-10-30", None)

    assert leave.note == ""


def test_note_is_stripped(leave_tracker):
    leave = leave_tracker.mark_leave("2", "2025-10-30", "  Personal Leave  ")

    assert leave.note == "Personal Leave"


@pytest.mark.parametrize("bad_date", [None, "", "30/10/2025", "2025-13-01"])
def test_missing_or_bad_date_rejected(leave_tracker, bad_date):
    with pytest.raises(LeaveValidationError):
        leave_tracker.mark_leave("1", bad_date)

    assert leave_tracker.list() == []


def test_missing_doctor_rejected(leave_tracker):
    with pytest.raises(LeaveValidationError):
        leave_tracker.mark_leave("", "2025-10-25")


def test_leave_queries(leave_tracker):
    leave_tracker.mark_leave("1", "2025-10-25")
    leave_tracker.mark_leave("1", "2025-11-03")
    leave_tracker.mark_leave("2", "2025-10-25")

    assert len(leave_tracker.list()) == 3
    assert [leave.date for leave in leave_tracker.leaves_for_doctor("1")] == [
        date(2025, 10, 25), date(2025, 11, 3)
    ]
    assert {leave.doctor_id for leave in leave_tracker.leaves_on(date(2025, 10, 25))} == {"1", "2"}


def test_leaves_get_distinct_ids(leave_tracker):
    first = leave_tracker.mark_leave("1", "2025-10-25")
    second = leave_tracker.mark_leave("1", "2025-10-25")

    assert first.id != second.id
    assert len(leave_tracker.leaves_for_doctor("1")) == 2


def test_parse_leave_date_accepts_datetime():
    assert parse_leave_date(datetime(2025, 10, 25, 14, 30)) == date(2025, 10, 25)
    assert parse_leave_date(" 2025-10-25 ") == date(2025, 10, 25)


def test_tracker_uses_given_repository():
    from hospital_scheduling.repository import InMemoryRepository

    repository = InMemoryRepository()
    tracker = LeaveTracker(repository)
    tracker.mark_leave("3", "2025-12-24")

    assert len(repository) == 1


def test_queries_accept_iso_strings_and_datetimes(leave_tracker):
    leave_tracker.mark_leave("1", date(2025, 10, 25))

    assert leave_tracker.is_on_leave("1", "2025-10-25")
    assert leave_tracker.is_on_leave("1", datetime(2025, 10, 25, 9, 0))
    assert len(leave_tracker.leaves_on("2025-10-25")) == 1
    assert leave_tracker.leaves_on("2025-10-26") == []
