"""Tests for the schedules view state machine."""
import pytest
from pydantic import ValidationError

from hospital_scheduling.filters import ScheduleFilters
from hospital_scheduling.view_state import (
    Dialog,
    InvalidViewTransition,
    ScheduleViewState,
    ViewAction,
    apply_view_action,
    with_filters,
)


def test_initial_state_is_closed():
    state = ScheduleViewState()

    assert state.dialog == Dialog.CLOSED
    assert state.selected_id is None
    assert state.filters == ScheduleFilters()


def test_open_create_and_save():
    state = apply_view_action(ScheduleViewState(), ViewAction.OPEN_CREATE)
    assert state.dialog == Dialog.CREATE_SCHEDULE

    state = apply_view_action(state, ViewAction.SAVE)
    assert state.dialog == Dialog.CLOSED


def test_open_edit_tracks_selection():
    state = apply_view_action(ScheduleViewState(), ViewAction.OPEN_EDIT, selected_id="1")

    assert state.dialog == Dialog.EDIT_SCHEDULE
    assert state.selected_id == "1"

    closed = apply_view_action(state, ViewAction.CLOSE)
    assert closed.selected_id is None


@pytest.mark.parametrize("action", [
    ViewAction.OPEN_EDIT,
    ViewAction.OPEN_LEAVE,
    ViewAction.OPEN_DETAILS,
])
def test_selection_required(action):
    with pytest.raises(InvalidViewTransition):
        apply_view_action(ScheduleViewState(), action)


def test_only_one_dialog_at_a_time():
    state = apply_view_action(ScheduleViewState(), ViewAction.OPEN_LEAVE, selected_id="2")

    with pytest.raises(InvalidViewTransition):
        apply_view_action(state, ViewAction.OPEN_CREATE)


def test_details_dialog_cannot_save():
    state = apply_view_action(ScheduleViewState(), ViewAction.OPEN_DETAILS, selected_id="APT-1001")

    with pytest.raises(InvalidViewTransition):
        apply_view_action(state, ViewAction.SAVE)

    assert apply_view_action(state, ViewAction.CLOSE).dialog == Dialog.CLOSED


def test_save_while_closed_rejected():
    with pytest.raises(InvalidViewTransition):
        apply_view_action(ScheduleViewState(), "save")


def test_filters_survive_dialogs():
    state = with_filters(ScheduleViewState(), ScheduleFilters(doctor_id="1"))
    state = apply_view_action(state, ViewAction.OPEN_CREATE)
    state = apply_view_action(state, ViewAction.CLOSE)

    assert state.filters.doctor_id == "1"


def test_state_is_immutable():
    state = ScheduleViewState()

    with pytest.raises(ValidationError):
        state.dialog = Dialog.MARK_LEAVE
