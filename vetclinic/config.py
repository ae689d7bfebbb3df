"""Runtime configuration read from the environment (and a local .env file)."""

import os
from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from vetclinic import schema

load_dotenv()


def _get_int(value: str | None, default: int) -> int:
    """Parse an integer setting, falling back to default when unset or blank."""
    if value is None or not value.strip():
        return default
    return int(value)


CLINIC_TIMEZONE = os.getenv("CLINIC_TIMEZONE", "UTC")
DEFAULT_APPOINTMENT_DURATION = _get_int(
    os.getenv("DEFAULT_APPOINTMENT_DURATION"), schema.DEFAULT_APPOINTMENT_DURATION
)
EMERGENCY_WINDOW_HOURS = _get_int(os.getenv("EMERGENCY_WINDOW_HOURS"), 4)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def clinic_zone() -> ZoneInfo:
    """Zone the clinic's wall clock runs in."""
    try:
        return ZoneInfo(CLINIC_TIMEZONE)
    except ZoneInfoNotFoundError as e:
        raise RuntimeError(f"CLINIC_TIMEZONE {CLINIC_TIMEZONE!r} is not a known IANA zone") from e


def clinic_now() -> datetime:
    """Current wall-clock time at the clinic."""
    return datetime.now(clinic_zone())


def clinic_today() -> date:
    """Current calendar date at the clinic."""
    return clinic_now().date()


def validate_runtime_config() -> None:
    """Fail fast on settings the service cannot run with."""
    clinic_zone()
    if DEFAULT_APPOINTMENT_DURATION <= 0:
        raise RuntimeError("DEFAULT_APPOINTMENT_DURATION must be positive.")
    if EMERGENCY_WINDOW_HOURS <= 0:
        raise RuntimeError("EMERGENCY_WINDOW_HOURS must be positive.")
