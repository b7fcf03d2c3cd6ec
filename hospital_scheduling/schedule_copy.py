"""Copy last week's active schedules into the current week."""
import uuid
from datetime import date, timedelta
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field

from hospital_scheduling.logging_config import get_logger
from hospital_scheduling.models import Schedule, utc_now

logger = get_logger(__name__)


class CopyResult(BaseModel):
    """Batch of new schedules produced by a copy; the caller merges it."""
    schedules: List[Schedule] = Field(default_factory=list)
    last_week: date

    @property
    def copied(self) -> bool:
        """False when no schedule was eligible."""
        return bool(self.schedules)


def copy_id(original_id: str) -> str:
    """New id derived from the original one."""
    return f"{original_id}-copy-{uuid.uuid4().hex[:12]}"


def eligible_for_copy(schedule: Schedule, last_week: date, today: date) -> bool:
    """Active and valid on last week's date, with a window still open today."""
    return (
        schedule.is_active
        and schedule.covers(last_week)
        and schedule.valid_until >= today
    )


def copy_last_week(
    schedules: Iterable[Schedule],
    today: Optional[date] = None
) -> CopyResult:
    """
    Duplicate schedules that were active a week ago, starting today.

    Args:
        schedules: Current schedules (not modified)
        today: Reference date (defaults to the current date)

    Returns:
        CopyResult with one new schedule per eligible original. Copies keep
        every field except id, valid_from (set to today) and created_at.
        Covering last week is not enough on its own: a schedule whose window
        closes before today is skipped, because its copy (valid_from = today)
        would break valid_from <= valid_to.
    """
    today = today or date.today()
    last_week = today - timedelta(days=7)

    copies = [
        schedule.model_copy(deep=True, update={
            "id": copy_id(schedule.id),
            "valid_from": today,
            "created_at": utc_now(),
        })
        for schedule in schedules
        if eligible_for_copy(schedule, last_week, today)
    ]

    if copies:
        logger.info(
            "schedules_copied",
            count=len(copies),
            last_week=last_week.isoformat(),
            valid_from=today.isoformat()
        )
    else:
        logger.info("no_schedules_to_copy", last_week=last_week.isoformat())

    return CopyResult(schedules=copies, last_week=last_week)
