"""Deterministic slot engine: weekly availability -> bookable start times for a date."""

import logging
from datetime import date
from typing import Iterable, Sequence

from vetclinic.availability import parse_availability_string, window_for_weekday
from vetclinic.clock import format_clock_time, parse_clock_time
from vetclinic.schema import (
    DEFAULT_APPOINTMENT_DURATION,
    INACTIVE_STATUSES,
    MINUTES_PER_DAY,
    AvailabilityWindow,
    BookedInterval,
    ExistingAppointment,
    Weekday,
)

logger = logging.getLogger(__name__)

SLOT_INCREMENT_MINUTES = 30


def _conflicts_with_existing(
    slot_start: int,
    slot_end: int,
    existing: Sequence[BookedInterval],
) -> bool:
    """Check if slot overlaps with any existing booking."""
    for booking in existing:
        # Overlap: slot starts before booking ends AND slot ends after booking starts
        if slot_start < booking.end_minute and slot_end > booking.start_minute:
            return True
    return False


def compute_slots_for_window(
    window: AvailabilityWindow,
    duration_minutes: int,
    existing_bookings: Sequence[BookedInterval] = (),
) -> list[int]:
    """
    Walk a window in fixed 30-minute steps and return the start minutes
    whose [start, start + duration) fits inside the window and clears every booking.
    """
    if duration_minutes <= 0:
        return []

    slots: list[int] = []
    slot_start = window.start_minute
    while slot_start + duration_minutes <= window.end_minute:
        slot_end = slot_start + duration_minutes
        if not _conflicts_with_existing(slot_start, slot_end, existing_bookings):
            slots.append(slot_start)
        slot_start += SLOT_INCREMENT_MINUTES
    return slots


def compute_available_slots(
    availability: Iterable[str],
    target_date: date,
    duration_minutes: int,
    existing_bookings: Sequence[BookedInterval] = (),
) -> list[str]:
    """
    Compute the bookable start times ('H:MM AM/PM', ascending) for a staff member on target_date.
    A day without availability, a malformed entry or a too-short window all give an empty list.
    """
    if duration_minutes <= 0:
        return []

    weekday = Weekday.of(target_date)
    entry = window_for_weekday(availability, weekday)
    if entry is None:
        return []

    window = parse_availability_string(entry)
    if window is None:
        logger.debug("No usable %s window in %r", weekday.value, entry)
        return []

    return [
        format_clock_time(minute)
        for minute in compute_slots_for_window(window, duration_minutes, existing_bookings)
    ]


def bookings_from_appointments(
    appointments: Iterable[ExistingAppointment],
    default_duration: int = DEFAULT_APPOINTMENT_DURATION,
) -> list[BookedInterval]:
    """
    Convert stored appointments to booked intervals.
    Cancelled and no-show appointments free their time; missing durations use default_duration.
    """
    bookings: list[BookedInterval] = []
    for appt in appointments:
        if appt.status in INACTIVE_STATUSES:
            continue
        try:
            start = parse_clock_time(appt.time)
        except ValueError:
            start = None
        if start is None or start >= MINUTES_PER_DAY:
            logger.warning("Skipping appointment with unreadable time %r", appt.time)
            continue
        duration = appt.duration if appt.duration and appt.duration > 0 else default_duration
        bookings.append(BookedInterval(start_minute=start, duration_minutes=duration))
    return bookings
