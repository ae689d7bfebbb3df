"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest

from vetclinic.schema import BookedInterval, ScheduledVisit, Veterinarian


@pytest.fixture
def weekday_availability() -> list[str]:
    """Typical staff record: weekdays, with a short Wednesday and a 12-hour Friday."""
    return [
        "Monday 09:00-17:00",
        "Tuesday 09:00-17:00",
        "Wednesday 14:00-18:00",
        "Thursday 09:00-12:00",
        "Friday 8:00 AM-1:00 PM",
    ]


@pytest.fixture
def morning_bookings() -> list[BookedInterval]:
    """9:00-9:30 and 11:00-12:00 already taken."""
    return [
        BookedInterval(start_minute=9 * 60, duration_minutes=30),
        BookedInterval(start_minute=11 * 60, duration_minutes=60),
    ]


@pytest.fixture
def vets() -> list[Veterinarian]:
    return [
        Veterinarian(id="vet-a", first_name="Ana", last_name="Levi"),
        Veterinarian(id="vet-b", first_name="Ben", last_name="Cohen"),
        Veterinarian(id="rec-1", first_name="Rae", last_name="Dahan", role="receptionist"),
    ]


@pytest.fixture
def emergency_now() -> datetime:
    return datetime(2024, 3, 18, 10, 0)


@pytest.fixture
def busy_morning(emergency_now) -> list[ScheduledVisit]:
    """vet-a is mid-visit at 10:00; vet-b is free now but has two visits coming up."""
    return [
        ScheduledVisit(id="a1", staff_id="vet-a", start=datetime(2024, 3, 18, 9, 45), duration=30),
        ScheduledVisit(id="a2", staff_id="vet-a", start=datetime(2024, 3, 18, 11, 0)),
        ScheduledVisit(id="b1", staff_id="vet-b", start=datetime(2024, 3, 18, 10, 30)),
        ScheduledVisit(id="b2", staff_id="vet-b", start=datetime(2024, 3, 18, 12, 0)),
    ]
