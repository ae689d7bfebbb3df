"""Free-text date parsing with a month-first, day-first fallback policy."""

import re
from datetime import date
from typing import Optional

_YEAR_FIRST = re.compile(r"^(\d{4})[/-](\d{1,2})[/-](\d{1,2})$")
_SHORT = re.compile(r"^(\d{1,2})[/-](\d{1,2})(?:[/-](\d{4}))?$")


def _make_date(year: int, month: int, day: int) -> Optional[date]:
    """Build a date, or None if it does not exist on the calendar (no roll-over)."""
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_user_date(text: str, reference_date: date) -> Optional[date]:
    """
    Interpret user-entered text as a calendar date.

    Accepts YYYY-MM-DD / YYYY/MM/DD and short numeric forms M/D, D/M, M/D/YYYY,
    D/M/YYYY (either separator). Short forms are read month-first; only when
    that is impossible are the roles swapped. A missing year is taken from
    reference_date. Returns None for anything else.
    """
    if not isinstance(text, str):
        return None
    s = text.strip()

    match = _YEAR_FIRST.match(s)
    if match:
        year, month, day = (int(g) for g in match.groups())
        return _make_date(year, month, day)

    match = _SHORT.match(s)
    if match:
        first, second = int(match.group(1)), int(match.group(2))
        year = int(match.group(3)) if match.group(3) else reference_date.year

        # Month-first reading
        parsed = _make_date(year, first, second)
        if parsed is not None:
            return parsed
        # Day-first fallback
        return _make_date(year, second, first)

    return None


def is_past_date(value: date, today: date) -> bool:
    """True when value falls before today; bookings are only offered from today onwards."""
    return value < today
