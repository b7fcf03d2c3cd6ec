"""Schedule book: staff-facing create/update/deactivate for doctor schedules."""
import uuid
from datetime import date
from typing import Iterable, List, Optional

from hospital_scheduling import config
from hospital_scheduling.errors import NotFoundError
from hospital_scheduling.filters import ScheduleFilters, filter_schedules
from hospital_scheduling.logging_config import get_logger
from hospital_scheduling.models import Schedule, ScheduleFormData, ScheduleStatus, utc_now
from hospital_scheduling.registry import DoctorRegistry
from hospital_scheduling.repository import InMemoryRepository, RecordNotFoundError, Repository
from hospital_scheduling.schedule_copy import CopyResult, copy_last_week

logger = get_logger(__name__)


class ScheduleNotFoundError(NotFoundError):
    """Raised when a schedule id is unknown."""
    pass


class ScheduleBook:
    """
    Owns the schedule list of a session.

    Schedules are never hard-deleted: deactivate() flips the status so the
    history stays available to the copy operation and the filters.
    """

    def __init__(
        self,
        registry: Optional[DoctorRegistry] = None,
        repository: Optional[Repository] = None,
        schedules: Optional[Iterable[Schedule]] = None
    ):
        self.registry = registry or DoctorRegistry()
        self.repository = repository if repository is not None else InMemoryRepository()

        for schedule in schedules or []:
            self.repository.create(schedule)

    def list(self) -> List[Schedule]:
        return self.repository.list()

    def get(self, schedule_id: str) -> Schedule:
        try:
            return self.repository.get(schedule_id)
        except RecordNotFoundError:
            raise ScheduleNotFoundError(f"Schedule '{schedule_id}' not found") from None

    def filter(self, filters: ScheduleFilters) -> List[Schedule]:
        return filter_schedules(self.repository.list(), filters)

    def _build(self, schedule_id: str, form: ScheduleFormData, created_at) -> Schedule:
        """Resolve doctor and department names and validate the window."""
        doctor = self.registry.get_doctor(form.doctor_id)

        return Schedule(
            id=schedule_id,
            doctor_name=doctor.name,
            department_id=doctor.department_id,
            department_name=doctor.department_name,
            created_at=created_at,
            **form.model_dump(exclude={"valid_to"}),
            valid_to=form.valid_to or config.ALWAYS,
        )

    def create(self, form: ScheduleFormData) -> Schedule:
        """
        Create a schedule from form data.

        valid_to defaults to "always" when omitted.

        Raises:
            DoctorNotFoundError: If the doctor is not in the registry
            pydantic.ValidationError: If the window or session times are invalid
        """
        schedule = self._build(f"schedule-{uuid.uuid4().hex[:12]}", form, utc_now())
        self.repository.create(schedule)

        logger.info("schedule_created", schedule_id=schedule.id, doctor_id=schedule.doctor_id)
        return schedule

    def update(self, schedule_id: str, form: ScheduleFormData) -> Schedule:
        """Replace a schedule's fields, keeping its id and creation timestamp."""
        existing = self.get(schedule_id)
        schedule = self._build(existing.id, form, existing.created_at)
        self.repository.update(schedule)

        logger.info("schedule_updated", schedule_id=schedule_id)
        return schedule

    def deactivate(self, schedule_id: str) -> Schedule:
        """Mark a schedule inactive; it stays in the book."""
        schedule = self.get(schedule_id).model_copy(update={"status": ScheduleStatus.INACTIVE})
        self.repository.update(schedule)

        logger.info("schedule_deactivated", schedule_id=schedule_id)
        return schedule

    def merge(self, schedules: Iterable[Schedule]) -> List[Schedule]:
        """Add a batch of new schedules (e.g. from the copy operation)."""
        added = [self.repository.create(schedule) for schedule in schedules]
        return added

    def copy_last_week(self, today: Optional[date] = None) -> CopyResult:
        """Run the copy operation on this book and merge the result."""
        result = copy_last_week(self.repository.list(), today)
        if result.copied:
            self.merge(result.schedules)
        return result

    def active_count(self) -> int:
        return sum(1 for s in self.repository.list() if s.is_active)
