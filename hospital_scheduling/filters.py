"""Schedule filtering by doctor, department, weekday and status.

Every field is either a concrete value or the wildcard "all". Matching is
exact equality; the weekday matches when it is one of the schedule's
working days.
"""
from typing import Iterable, List, Literal, Union

from pydantic import BaseModel, ConfigDict

from hospital_scheduling.config import WILDCARD
from hospital_scheduling.models import DayOfWeek, Schedule, ScheduleStatus


Wildcard = Literal["all"]


class ScheduleFilters(BaseModel):
    """Filter set for the schedules view."""
    doctor_id: str = WILDCARD
    department_id: str = WILDCARD
    day_of_week: Union[Wildcard, DayOfWeek] = WILDCARD
    status: Union[Wildcard, ScheduleStatus] = WILDCARD

    model_config = ConfigDict(frozen=True)


FILTER_FIELDS = ("doctor_id", "department_id", "day_of_week", "status")


def _is_set(value) -> bool:
    return value is not None and value != "" and value != WILDCARD


def matches(schedule: Schedule, filters: ScheduleFilters) -> bool:
    """Whether one schedule passes every non-wildcard filter."""
    if _is_set(filters.doctor_id) and schedule.doctor_id != filters.doctor_id:
        return False
    if _is_set(filters.department_id) and schedule.department_id != filters.department_id:
        return False
    if _is_set(filters.day_of_week) and filters.day_of_week not in schedule.working_days:
        return False
    if _is_set(filters.status) and schedule.status != filters.status:
        return False
    return True


def filter_schedules(
    schedules: Iterable[Schedule],
    filters: ScheduleFilters
) -> List[Schedule]:
    """
    Narrow schedules to those matching the filters.

    Args:
        schedules: Schedules to filter
        filters: Filter set; wildcard fields are ignored

    Returns:
        Matching schedules in input order
    """
    return [s for s in schedules if matches(s, filters)]


def active_filter_count(filters: ScheduleFilters) -> int:
    """Number of fields holding a concrete value (UI feedback only)."""
    return sum(1 for field in FILTER_FIELDS if _is_set(getattr(filters, field)))


def clear_filters() -> ScheduleFilters:
    """Filter set with every field reset to the wildcard."""
    return ScheduleFilters()
