"""Tests for emergency triage helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from vetclinic.emergency import (
    NoVeterinarianAvailable,
    find_vet_for_emergency,
    has_recent_emergency,
)
from vetclinic.schema import AppointmentStatus, ScheduledVisit, Veterinarian


def test_free_vet_is_chosen_with_nothing_to_cancel(vets, busy_morning, emergency_now):
    """vet-a is mid-visit, vet-b is free at 10:00."""
    allocation = find_vet_for_emergency(vets, busy_morning, emergency_now)
    assert allocation.vet.id == "vet-b"
    assert allocation.to_cancel == []


def test_least_loaded_vet_when_everyone_is_busy(vets, busy_morning, emergency_now):
    busy_morning.append(
        ScheduledVisit(id="b0", staff_id="vet-b", start=datetime(2024, 3, 18, 9, 50), duration=30)
    )
    allocation = find_vet_for_emergency(vets, busy_morning, emergency_now)
    assert allocation.vet.id == "vet-a"
    assert [v.id for v in allocation.to_cancel] == ["a2"]


def test_cancelled_visits_do_not_make_a_vet_busy(vets, busy_morning, emergency_now):
    busy_morning[0] = busy_morning[0].model_copy(update={"status": AppointmentStatus.CANCELLED})
    allocation = find_vet_for_emergency(vets, busy_morning, emergency_now)
    assert allocation.vet.id == "vet-a"


def test_visits_outside_window_are_not_cancelled(vets, emergency_now):
    visits = [
        ScheduledVisit(id="a0", staff_id="vet-a", start=datetime(2024, 3, 18, 10, 0)),
        ScheduledVisit(id="b0", staff_id="vet-b", start=datetime(2024, 3, 18, 9, 30), duration=60),
        ScheduledVisit(id="b9", staff_id="vet-b", start=datetime(2024, 3, 18, 15, 0)),
    ]
    allocation = find_vet_for_emergency(vets, visits, emergency_now)
    assert allocation.vet.id == "vet-b"
    assert allocation.to_cancel == []


def test_no_active_veterinarian_raises(emergency_now):
    staff = [
        Veterinarian(id="rec-1", role="receptionist"),
        Veterinarian(id="vet-x", is_active=False),
    ]
    with pytest.raises(NoVeterinarianAvailable):
        find_vet_for_emergency(staff, [], emergency_now)


def test_has_recent_emergency(emergency_now):
    def visit(hour: int, **kwargs) -> ScheduledVisit:
        return ScheduledVisit(
            id=f"e{hour}", pet_id="pet-1", start=datetime(2024, 3, 18, hour, 0), type="emergency_care", **kwargs
        )

    assert has_recent_emergency([visit(8)], emergency_now)
    assert not has_recent_emergency([visit(5)], emergency_now)
    assert not has_recent_emergency([visit(11)], emergency_now)
    assert not has_recent_emergency([visit(8, status=AppointmentStatus.CANCELLED)], emergency_now)
    assert not has_recent_emergency(
        [ScheduledVisit(id="w", start=datetime(2024, 3, 18, 9, 0), type="wellness_exam")],
        emergency_now,
    )


def test_has_recent_emergency_with_aware_now():
    now = datetime(2024, 3, 18, 10, 0, tzinfo=timezone.utc)
    recent = ScheduledVisit(id="e", start=datetime(2024, 3, 18, 9, 0), type="emergency_care")
    assert has_recent_emergency([recent], now)


def test_default_duration_applies_to_visits_without_one(vets, emergency_now):
    """A 09:30 visit with no stored duration runs past 10:00 only when the default is longer than 30."""
    visits = [ScheduledVisit(id="a1", staff_id="vet-a", start=datetime(2024, 3, 18, 9, 30))]

    assert find_vet_for_emergency(vets, visits, emergency_now).vet.id == "vet-a"
    allocation = find_vet_for_emergency(vets, visits, emergency_now, default_duration=60)
    assert allocation.vet.id == "vet-b"


def test_aware_visit_is_compared_as_an_instant(vets, emergency_now):
    """11:45 at UTC+2 is 09:45 UTC, so vet-a is mid-visit at 10:00 UTC."""
    plus_two = timezone(timedelta(hours=2))
    visits = [
        ScheduledVisit(id="a1", staff_id="vet-a", start=datetime(2024, 3, 18, 11, 45, tzinfo=plus_two), duration=30)
    ]
    allocation = find_vet_for_emergency(vets, visits, emergency_now)
    assert allocation.vet.id == "vet-b"


def test_naive_now_is_read_in_given_zone(vets):
    """10:00 at UTC+2 is 08:00 UTC, before vet-a's 09:45 UTC visit starts."""
    plus_two = timezone(timedelta(hours=2))
    visits = [
        ScheduledVisit(
            id="a1", staff_id="vet-a", start=datetime(2024, 3, 18, 9, 45, tzinfo=timezone.utc), duration=30
        )
    ]
    now = datetime(2024, 3, 18, 10, 0)

    assert find_vet_for_emergency(vets, visits, now).vet.id == "vet-b"
    assert find_vet_for_emergency(vets, visits, now, tz=plus_two).vet.id == "vet-a"
