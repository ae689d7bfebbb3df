"""Emergency triage helpers: recent-emergency check and on-call vet allocation."""

import logging
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Iterable, Sequence

from vetclinic.schema import (
    DEFAULT_APPOINTMENT_DURATION,
    INACTIVE_STATUSES,
    AppointmentStatus,
    EmergencyAllocation,
    ScheduledVisit,
    Veterinarian,
)

logger = logging.getLogger(__name__)

EMERGENCY_TYPE = "emergency_care"


class SchedulingError(Exception):
    """Base error for scheduling decisions that cannot be made."""


class NoVeterinarianAvailable(SchedulingError):
    """Raised when no active veterinarian exists to take an emergency."""


def _as_aware(moment: datetime, tz: tzinfo) -> datetime:
    """Read a naive datetime as wall-clock time in tz; aware datetimes keep their offset."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment


def _visit_end(start: datetime, visit: ScheduledVisit, default_duration: int) -> datetime:
    """End of a visit, using default_duration when none was stored."""
    return start + timedelta(minutes=visit.duration or default_duration)


def has_recent_emergency(
    appointments: Iterable[ScheduledVisit],
    now: datetime,
    hours: int = 4,
    tz: tzinfo = timezone.utc,
) -> bool:
    """
    True if a non-cancelled emergency visit started within the last `hours` (inclusive of now).
    Naive datetimes are read in `tz`.
    """
    now = _as_aware(now, tz)
    since = now - timedelta(hours=hours)
    for visit in appointments:
        if visit.type != EMERGENCY_TYPE:
            continue
        if visit.status == AppointmentStatus.CANCELLED:
            continue
        start = _as_aware(visit.start, tz)
        if since < start <= now:
            return True
    return False


def find_vet_for_emergency(
    vets: Sequence[Veterinarian],
    appointments: Iterable[ScheduledVisit],
    now: datetime,
    window_hours: int = 4,
    default_duration: int = DEFAULT_APPOINTMENT_DURATION,
    tz: tzinfo = timezone.utc,
) -> EmergencyAllocation:
    """
    Pick a veterinarian for an emergency arriving at `now`.

    1. A vet with no visit in progress at `now` is returned with nothing to cancel.
    2. Otherwise the vet with the fewest visits starting in the next `window_hours`
       is returned together with those visits, which the caller cancels.

    Visits without a duration last `default_duration` minutes. Naive datetimes are read in `tz`.
    """
    active = [v for v in vets if v.is_active and v.is_veterinarian]
    if not active:
        raise NoVeterinarianAvailable("No active veterinarians found.")

    now = _as_aware(now, tz)
    window_end = now + timedelta(hours=window_hours)
    upcoming: dict[str, list[ScheduledVisit]] = {v.id: [] for v in active}
    busy: set[str] = set()
    for visit in appointments:
        if visit.status in INACTIVE_STATUSES or visit.staff_id not in upcoming:
            continue
        start = _as_aware(visit.start, tz)
        if start <= now < _visit_end(start, visit, default_duration):
            busy.add(visit.staff_id)
        if now <= start <= window_end:
            upcoming[visit.staff_id].append(visit)

    for vet in active:
        if vet.id not in busy:
            return EmergencyAllocation(vet=vet, to_cancel=[])

    # min() keeps the first vet on ties
    selected = min(active, key=lambda v: len(upcoming[v.id]))
    logger.info(
        "All vets busy; assigning emergency to %s with %d visit(s) to cancel",
        selected.id,
        len(upcoming[selected.id]),
    )
    return EmergencyAllocation(vet=selected, to_cancel=upcoming[selected.id])
