"""View state for the schedules and appointments screens.

One immutable value replaces scattered open/closed flags: the active
dialog, the selected record and the current filters. It only changes
through apply_view_action().
"""
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from hospital_scheduling.errors import SchedulingError
from hospital_scheduling.filters import ScheduleFilters, clear_filters


class Dialog(str, Enum):
    """Which dialog, if any, is open."""
    CLOSED = "closed"
    CREATE_SCHEDULE = "create_schedule"
    EDIT_SCHEDULE = "edit_schedule"
    MARK_LEAVE = "mark_leave"
    APPOINTMENT_DETAILS = "appointment_details"


class ViewAction(str, Enum):
    OPEN_CREATE = "open_create"
    OPEN_EDIT = "open_edit"
    OPEN_LEAVE = "open_leave"
    OPEN_DETAILS = "open_details"
    SAVE = "save"
    CLOSE = "close"


class InvalidViewTransition(SchedulingError, ValueError):
    """Raised when an action is not allowed from the current dialog."""
    pass


class ScheduleViewState(BaseModel):
    """Immutable view state passed down to presentation code."""
    dialog: Dialog = Dialog.CLOSED
    selected_id: Optional[str] = None
    filters: ScheduleFilters = Field(default_factory=clear_filters)

    model_config = ConfigDict(frozen=True)


# Actions that open a dialog, and whether they need a selected record
_OPENERS: Dict[ViewAction, tuple] = {
    ViewAction.OPEN_CREATE: (Dialog.CREATE_SCHEDULE, False),
    ViewAction.OPEN_EDIT: (Dialog.EDIT_SCHEDULE, True),
    ViewAction.OPEN_LEAVE: (Dialog.MARK_LEAVE, True),
    ViewAction.OPEN_DETAILS: (Dialog.APPOINTMENT_DETAILS, True),
}

# Dialogs that submit a form
_SAVEABLE = frozenset({Dialog.CREATE_SCHEDULE, Dialog.EDIT_SCHEDULE, Dialog.MARK_LEAVE})


def apply_view_action(
    state: ScheduleViewState,
    action: ViewAction,
    selected_id: Optional[str] = None
) -> ScheduleViewState:
    """
    Compute the next view state.

    Rules:
    - A dialog can only be opened while none is open
    - Edit, leave and details dialogs need a selected record
    - Save is only valid from a form dialog; save and close both return
      to CLOSED and clear the selection

    Raises:
        InvalidViewTransition: If the action is not allowed
    """
    action = ViewAction(action)

    if action in _OPENERS:
        dialog, needs_selection = _OPENERS[action]
        if state.dialog != Dialog.CLOSED:
            raise InvalidViewTransition(
                f"Cannot {action.value} while {state.dialog.value} is open"
            )
        if needs_selection and not selected_id:
            raise InvalidViewTransition(f"{action.value} requires a selected record")
        return state.model_copy(update={
            "dialog": dialog,
            "selected_id": selected_id if needs_selection else None,
        })

    if action == ViewAction.SAVE and state.dialog not in _SAVEABLE:
        raise InvalidViewTransition(f"Nothing to save from {state.dialog.value}")

    return state.model_copy(update={"dialog": Dialog.CLOSED, "selected_id": None})


def with_filters(state: ScheduleViewState, filters: ScheduleFilters) -> ScheduleViewState:
    return state.model_copy(update={"filters": filters})
