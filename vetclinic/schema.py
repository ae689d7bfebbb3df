"""Pydantic models for availability, bookings and the HTTP request/response schema."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from vetclinic.clock import format_24h

MINUTES_PER_DAY = 24 * 60
# Minutes assumed for an appointment stored without a duration.
DEFAULT_APPOINTMENT_DURATION = 30


class Weekday(str, Enum):
    """Day names, in date.weekday() order (0=Monday)."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return list(cls)[day.weekday()]


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


# Appointments in these states no longer hold their time.
INACTIVE_STATUSES = frozenset({AppointmentStatus.CANCELLED, AppointmentStatus.NO_SHOW})


# --- Scheduling core ---


class AvailabilityWindow(BaseModel):
    """Recurring weekly interval, minutes since local midnight."""

    weekday: Weekday
    start_minute: int = Field(..., ge=0, lt=MINUTES_PER_DAY)
    end_minute: int = Field(..., gt=0, le=MINUTES_PER_DAY)

    @model_validator(mode="after")
    def start_before_end(self) -> "AvailabilityWindow":
        if self.start_minute >= self.end_minute:
            raise ValueError("start_minute must be before end_minute")
        return self

    def to_display(self) -> str:
        """Serialise back to the 'Monday 09:00-17:00' form."""
        return (
            f"{self.weekday.value} "
            f"{format_24h(self.start_minute)}-{format_24h(self.end_minute)}"
        )


class BookedInterval(BaseModel):
    """An existing commitment on the staff member's day."""

    start_minute: int = Field(..., ge=0, lt=MINUTES_PER_DAY)
    duration_minutes: int = Field(..., gt=0)

    @property
    def end_minute(self) -> int:
        return self.start_minute + self.duration_minutes


class ExistingAppointment(BaseModel):
    """Appointment as stored by the clinic records layer."""

    time: str = Field(..., description="Start time, 'H:MM AM/PM' or 'HH:MM'")
    duration: Optional[int] = Field(default=None, description="Minutes; clinic default when missing")
    status: AppointmentStatus = AppointmentStatus.SCHEDULED


# --- Emergency allocation ---


class Veterinarian(BaseModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    role: str = "veterinarian"
    is_active: bool = True

    @property
    def is_veterinarian(self) -> bool:
        return self.role.strip().lower() == "veterinarian"


class ScheduledVisit(BaseModel):
    """Appointment with an absolute start, as used for emergency triage."""

    id: str
    staff_id: Optional[str] = None
    pet_id: Optional[str] = None
    start: datetime
    duration: Optional[int] = None
    type: str = ""
    status: AppointmentStatus = AppointmentStatus.SCHEDULED


class EmergencyAllocation(BaseModel):
    vet: Veterinarian
    to_cancel: list[ScheduledVisit] = Field(default_factory=list)


# --- Request / Response ---


class SlotsRequest(BaseModel):
    """Request body for POST /slots."""

    availability: list[str] = Field(
        default_factory=list,
        description="Staff weekly availability, e.g. ['Monday 09:00-17:00']",
    )
    target_date: date
    duration_minutes: int = Field(default=30, description="Appointment length in minutes")
    existing_appointments: list[ExistingAppointment] = Field(default_factory=list)


class SlotsResponse(BaseModel):
    target_date: date
    weekday: Weekday
    slots: list[str] = Field(..., description="Bookable start times, 'H:MM AM/PM', ascending")


class ParseDateRequest(BaseModel):
    """Request body for POST /parse-date."""

    text: str
    reference_date: Optional[date] = Field(
        default=None,
        description="Supplies the year for short dates; clinic 'today' when omitted",
    )


class ParseDateResponse(BaseModel):
    input: str
    parsed_date: Optional[date] = None
    is_past: Optional[bool] = None


class EmergencyVetRequest(BaseModel):
    """Request body for POST /emergency/vet."""

    vets: list[Veterinarian]
    appointments: list[ScheduledVisit] = Field(default_factory=list)
    now: Optional[datetime] = None


class RecentEmergencyRequest(BaseModel):
    """Request body for POST /emergency/recent."""

    appointments: list[ScheduledVisit] = Field(default_factory=list)
    now: Optional[datetime] = None
    hours: int = Field(default=4, gt=0, description="Look-back window in hours")


class RecentEmergencyResponse(BaseModel):
    recent: bool


class DayAvailability(BaseModel):
    """One day of the weekly availability editor."""

    is_available: bool = False
    start_time: str = ""
    end_time: str = ""


class WeeklyAvailabilityRequest(BaseModel):
    """Request body for POST /availability/week, keyed by lower-case day name."""

    days: dict[str, DayAvailability] = Field(default_factory=dict)


class WeeklyAvailabilityResponse(BaseModel):
    availability: list[str] = Field(..., description="Stored form, e.g. 'Monday 09:00-17:00'")
    windows: list[AvailabilityWindow] = Field(..., description="Entries that parse to a valid window")
