"""Clock-time parsing and formatting in minutes since local midnight."""

import re

_TWELVE_HOUR = re.compile(r"^(\d{1,2}):(\d{2})\s*([AaPp][Mm])$")
_TWENTY_FOUR_HOUR = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_clock_time(text: str) -> int:
    """
    Parse 'HH:MM' (24-hour) or 'H:MM AM/PM' into minutes since midnight.
    Raises ValueError when the text is not a valid clock time.
    """
    s = text.strip()

    match = _TWELVE_HOUR.match(s)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        period = match.group(3).upper()
        if not 1 <= hours <= 12 or minutes > 59:
            raise ValueError(f"Invalid 12-hour time: {text!r}")
        if period == "AM" and hours == 12:
            hours = 0
        elif period == "PM" and hours != 12:
            hours += 12
        return hours * 60 + minutes

    match = _TWENTY_FOUR_HOUR.match(s)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        # 24:00 closes a window that runs to midnight.
        if (hours, minutes) == (24, 0):
            return 24 * 60
        if hours > 23 or minutes > 59:
            raise ValueError(f"Invalid 24-hour time: {text!r}")
        return hours * 60 + minutes

    raise ValueError(f"Unrecognised clock time: {text!r}")


def format_clock_time(minutes: int) -> str:
    """Format minutes since midnight as 'H:MM AM/PM'."""
    hours24, mins = divmod(minutes, 60)
    hours24 %= 24
    hours12 = hours24 % 12 or 12
    period = "PM" if hours24 >= 12 else "AM"
    return f"{hours12}:{mins:02d} {period}"


def format_24h(minutes: int) -> str:
    """Format minutes since midnight as zero-padded 'HH:MM'."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"
