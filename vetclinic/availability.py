"""Parse staff weekly availability strings ('Monday 09:00-17:00') into windows."""

import logging
import re
from typing import Iterable, Mapping, Optional

from pydantic import ValidationError

from vetclinic.clock import parse_clock_time
from vetclinic.schema import AvailabilityWindow, Weekday

logger = logging.getLogger(__name__)

_CLOCK = r"\d{1,2}:\d{2}(?:\s*[AaPp][Mm])?"
# Digits may not run into either end of the range.
_RANGE = re.compile(rf"(?<!\d)({_CLOCK})\s*-\s*({_CLOCK})(?!\d)")


def _leading_token(text: str) -> str:
    """First whitespace-separated word of an entry."""
    parts = text.split(maxsplit=1)
    return parts[0] if parts else ""


def _weekday_from_name(name: str) -> Optional[Weekday]:
    """Case-insensitive weekday lookup by full name."""
    for day in Weekday:
        if day.value.lower() == name.lower():
            return day
    return None


def window_for_weekday(availability: Iterable[str], weekday: Weekday) -> Optional[str]:
    """Return the first availability string whose leading token names the weekday."""
    for entry in availability:
        if not isinstance(entry, str):
            continue
        if _weekday_from_name(_leading_token(entry)) is weekday:
            return entry
    return None


def parse_time_range(text: str) -> Optional[tuple[int, int]]:
    """
    Extract the '<start>-<end>' range embedded in an availability string.
    Returns (start_minute, end_minute) or None if the pattern is missing or invalid.
    """
    match = _RANGE.search(text)
    if not match:
        return None
    try:
        return parse_clock_time(match.group(1)), parse_clock_time(match.group(2))
    except ValueError:
        return None


def parse_availability_string(text: str) -> Optional[AvailabilityWindow]:
    """Parse one availability string; malformed entries yield None."""
    weekday = _weekday_from_name(_leading_token(text))
    if weekday is None:
        logger.debug("Availability entry %r has no weekday", text)
        return None

    bounds = parse_time_range(text)
    if bounds is None:
        logger.debug("Availability entry %r has no valid time range", text)
        return None

    try:
        return AvailabilityWindow(weekday=weekday, start_minute=bounds[0], end_minute=bounds[1])
    except ValidationError:
        logger.debug("Availability entry %r has an empty or inverted range", text)
        return None


def parse_availability(availability: Iterable[str]) -> list[AvailabilityWindow]:
    """Parse a staff member's availability once, dropping malformed entries."""
    windows = []
    for entry in availability:
        if not isinstance(entry, str):
            continue
        window = parse_availability_string(entry)
        if window is not None:
            windows.append(window)
    return windows


def availability_from_week(days: Mapping[str, Mapping[str, object]]) -> list[str]:
    """
    Build availability strings from the weekly editor shape:
    {"monday": {"is_available": True, "start_time": "09:00", "end_time": "17:00"}, ...}
    Days that are unavailable or missing a time are skipped.
    """
    entries: list[str] = []
    for day in Weekday:
        config = days.get(day.value.lower())
        if not config or not config.get("is_available"):
            continue
        start = config.get("start_time")
        end = config.get("end_time")
        if not start or not end:
            continue
        entries.append(f"{day.value} {start}-{end}")
    return entries
