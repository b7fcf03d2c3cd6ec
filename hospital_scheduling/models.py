"""Pydantic models for doctors, schedules, leaves and appointments."""
from datetime import date, datetime, UTC
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from hospital_scheduling import config
from hospital_scheduling.state import OCCUPYING_STATUSES, AppointmentStatus


TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
MINUTES_PER_DAY = 24 * 60


def utc_now() -> datetime:
    """Get current UTC timestamp."""
    return datetime.now(UTC)


def parse_time(value: str) -> int:
    """Convert an HH:MM label to minutes since midnight."""
    hour, minute = map(int, value.split(":"))
    return hour * 60 + minute


def format_time(minutes: int) -> str:
    """Convert minutes since midnight to an HH:MM label."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def add_minutes(value: str, minutes: int) -> str:
    """
    Add minutes to an HH:MM label.

    Raises:
        ValueError: If the result reaches or runs past midnight
    """
    total = parse_time(value) + minutes
    if total >= MINUTES_PER_DAY:
        raise ValueError(f"{value} + {minutes} minutes runs past midnight")
    return format_time(total)


def as_day(value: Union[date, datetime, str]) -> date:
    """Reduce a date, datetime or ISO string to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


class ScheduleStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class ConsultationMode(str, Enum):
    IN_PERSON = "in-person"
    ONLINE = "online"
    BOTH = "both"


class DayOfWeek(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def for_date(cls, day: date) -> "DayOfWeek":
        """Weekday of a calendar date."""
        return cls(config.DAYS_OF_WEEK[day.weekday()])


class AppointmentType(str, Enum):
    CONSULTATION = "consultation"
    FOLLOW_UP = "follow-up"
    PROCEDURE = "procedure"
    EMERGENCY = "emergency"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Department(BaseModel):
    """Hospital department."""
    id: str = Field(..., min_length=1, description="Department ID")
    name: str = Field(..., min_length=1, max_length=100, description="Department name")

    model_config = ConfigDict(frozen=True)


class Doctor(BaseModel):
    """Doctor reference data, immutable within a session."""
    id: str = Field(..., min_length=1, description="Doctor ID")
    name: str = Field(..., min_length=1, max_length=200, description="Display name")
    specialization: str = Field(..., description="Clinical specialization")
    department_id: str = Field(..., description="Department reference")
    department_name: str = Field("", description="Department display name")
    email: Optional[str] = None
    avatar: Optional[str] = None

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "1",
                "name": "Dr. Sarah Johnson",
                "specialization": "Interventional Cardiology",
                "department_id": "1",
                "department_name": "Cardiology",
                "email": "sarah.johnson@hospital.com"
            }
        }
    )


class ScheduleFormData(BaseModel):
    """Staff input for creating or editing a recurring schedule."""
    doctor_id: str = Field(..., min_length=1, description="Doctor the schedule belongs to")
    working_days: List[DayOfWeek] = Field(..., min_length=1, description="Days the doctor works")
    start_time: str = Field(..., pattern=TIME_PATTERN, description="Session start (HH:MM)")
    end_time: str = Field(..., pattern=TIME_PATTERN, description="Session end (HH:MM)")
    slot_duration: int = Field(30, gt=0, le=480, description="Minutes per slot")
    max_patients_per_session: int = Field(1, ge=1, description="Patients per slot")
    consultation_mode: ConsultationMode = ConsultationMode.IN_PERSON
    room_number: str = ""
    valid_from: date
    valid_to: Optional[Union[Literal["always"], date]] = None
    status: ScheduleStatus = ScheduleStatus.ACTIVE

    @field_validator("slot_duration")
    @classmethod
    def check_slot_duration(cls, v):
        if v not in config.SLOT_DURATIONS:
            raise ValueError(f"slot_duration must be one of {config.SLOT_DURATIONS}")
        return v


class Schedule(BaseModel):
    """A doctor's recurring weekly availability with a validity window."""
    id: str = Field(..., min_length=1)
    doctor_id: str
    doctor_name: str = ""
    department_id: str = ""
    department_name: str = ""
    working_days: List[DayOfWeek] = Field(default_factory=list)
    start_time: str = Field("09:00", pattern=TIME_PATTERN)
    end_time: str = Field("17:00", pattern=TIME_PATTERN)
    slot_duration: int = Field(30, gt=0, le=480)
    max_patients_per_session: int = Field(1, ge=1)
    consultation_mode: ConsultationMode = ConsultationMode.IN_PERSON
    room_number: str = ""
    valid_from: date
    valid_to: Union[Literal["always"], date] = config.ALWAYS
    status: ScheduleStatus = ScheduleStatus.ACTIVE
    created_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "1",
                "doctor_id": "1",
                "doctor_name": "Dr. Sarah Johnson",
                "department_id": "1",
                "department_name": "Cardiology",
                "working_days": ["monday", "tuesday", "wednesday"],
                "start_time": "09:00",
                "end_time": "13:00",
                "slot_duration": 30,
                "max_patients_per_session": 15,
                "consultation_mode": "both",
                "room_number": "C-101",
                "valid_from": "2025-01-01",
                "valid_to": "always",
                "status": "active",
                "created_at": "2025-10-01T10:00:00Z"
            }
        }
    )

    @model_validator(mode="after")
    def check_window(self):
        """valid_from <= valid_to and start_time < end_time."""
        if self.valid_to != config.ALWAYS and self.valid_from > self.valid_to:
            raise ValueError("valid_from must not be after valid_to")
        if parse_time(self.start_time) >= parse_time(self.end_time):
            raise ValueError("start_time must be before end_time")
        return self

    @property
    def valid_until(self) -> date:
        """Upper bound of the validity window, with "always" mapped to a far date."""
        if self.valid_to == config.ALWAYS:
            return config.OPEN_ENDED_VALID_TO
        return self.valid_to

    @property
    def is_active(self) -> bool:
        return self.status == ScheduleStatus.ACTIVE

    def covers(self, day: date) -> bool:
        """Whether the validity window includes the given date."""
        return self.valid_from <= day <= self.valid_until


class Leave(BaseModel):
    """A single date on which a doctor's recurring schedule does not apply."""
    id: str = Field(..., min_length=1)
    doctor_id: str = Field(..., min_length=1)
    date: date
    note: str = Field("", max_length=500)


class AppointmentCreate(BaseModel):
    """Booking form data; end_time is derived from start_time + duration."""
    patient_id: str = Field(..., min_length=1)
    patient_name: str = Field(..., min_length=1, max_length=200)
    doctor_id: str = Field(..., min_length=1)
    doctor_name: str = ""
    date: date
    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    duration: int = Field(config.SLOT_DURATION_MINUTES, gt=0, le=480, description="Minutes")
    type: AppointmentType = AppointmentType.CONSULTATION
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    department: str = ""
    room: Optional[str] = None
    notes: Optional[str] = None
    symptoms: Optional[str] = None
    priority: Priority = Priority.MEDIUM

    @model_validator(mode="after")
    def derive_end_time(self):
        """end_time = start_time + duration."""
        expected = add_minutes(self.start_time, self.duration)
        if self.end_time is None:
            self.end_time = expected
        elif self.end_time != expected:
            raise ValueError(
                f"end_time {self.end_time} does not match "
                f"start_time {self.start_time} + {self.duration} minutes"
            )
        return self


class Appointment(AppointmentCreate):
    """A booked appointment as held by the store."""
    id: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    cancelled_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None

    @property
    def occupies_slot(self) -> bool:
        """Cancelled appointments release their slot."""
        return self.status in OCCUPYING_STATUSES

    @property
    def slot_key(self) -> tuple:
        return (self.doctor_id, self.date, self.start_time)


class AppointmentFilters(BaseModel):
    """Search criteria for the appointment list view."""
    patient_search: Optional[str] = None
    doctor_id: Optional[str] = None
    department: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    status: Optional[AppointmentStatus] = None
    type: Optional[AppointmentType] = None

    @field_validator("patient_search")
    @classmethod
    def strip_search(cls, v):
        if v is None:
            return v
        return v.strip() or None


class AppointmentStats(BaseModel):
    """Counters for the appointments dashboard."""
    today_appointments: int = 0
    pending: int = 0
    completed: int = 0
    cancelled: int = 0


class TimeSlot(BaseModel):
    """Derived view of one grid slot; never stored."""
    time: str
    available: bool
    appointment_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class SlotRange(BaseModel):
    start_time: str
    end_time: str

    model_config = ConfigDict(frozen=True)


class SlotPreview(BaseModel):
    """Slots a schedule's session would produce, with capacity totals."""
    slots: List[SlotRange] = Field(default_factory=list)
    total_slots: int = 0
    total_capacity: int = 0
    total_minutes: int = 0
