"""FastAPI service exposing slot availability, date parsing and emergency triage."""

import logging

from fastapi import FastAPI, HTTPException

from vetclinic import config
from vetclinic.availability import availability_from_week, parse_availability
from vetclinic.dates import is_past_date, parse_user_date
from vetclinic.emergency import (
    NoVeterinarianAvailable,
    find_vet_for_emergency,
    has_recent_emergency,
)
from vetclinic.scheduler import bookings_from_appointments, compute_available_slots
from vetclinic.schema import (
    EmergencyAllocation,
    EmergencyVetRequest,
    ParseDateRequest,
    ParseDateResponse,
    RecentEmergencyRequest,
    RecentEmergencyResponse,
    SlotsRequest,
    SlotsResponse,
    WeeklyAvailabilityRequest,
    WeeklyAvailabilityResponse,
    Weekday,
)

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s  %(levelname)s  %(name)s  %(message)s")
logger = logging.getLogger(__name__)

config.validate_runtime_config()

app = FastAPI(title="Vet Clinic Scheduler", version="0.1.0")


@app.post("/slots", response_model=SlotsResponse)
def slots(request: SlotsRequest) -> SlotsResponse:
    """
    Bookable start times for one staff member on one date.
    Returns an empty list when the staff member does not work that day.
    """
    bookings = bookings_from_appointments(
        request.existing_appointments,
        default_duration=config.DEFAULT_APPOINTMENT_DURATION,
    )
    available = compute_available_slots(
        request.availability,
        request.target_date,
        request.duration_minutes,
        bookings,
    )
    return SlotsResponse(
        target_date=request.target_date,
        weekday=Weekday.of(request.target_date),
        slots=available,
    )


@app.post("/parse-date", response_model=ParseDateResponse)
def parse_date(request: ParseDateRequest) -> ParseDateResponse:
    """
    Normalise free-text date input.
    Unrecognised text is not an error: parsed_date is null.
    """
    today = config.clinic_today()
    reference = request.reference_date or today
    parsed = parse_user_date(request.text, reference)
    if parsed is None:
        return ParseDateResponse(input=request.text)
    return ParseDateResponse(
        input=request.text,
        parsed_date=parsed,
        is_past=is_past_date(parsed, today),
    )


@app.post("/emergency/vet", response_model=EmergencyAllocation)
def emergency_vet(request: EmergencyVetRequest) -> EmergencyAllocation:
    """Choose the veterinarian to take an emergency now, and the visits to cancel."""
    now = request.now or config.clinic_now()
    try:
        return find_vet_for_emergency(
            request.vets,
            request.appointments,
            now,
            window_hours=config.EMERGENCY_WINDOW_HOURS,
            default_duration=config.DEFAULT_APPOINTMENT_DURATION,
            tz=config.clinic_zone(),
        )
    except NoVeterinarianAvailable as e:
        logger.warning("Emergency request with no vet to assign: %s", e)
        raise HTTPException(status_code=409, detail=str(e))


@app.post("/emergency/recent", response_model=RecentEmergencyResponse)
def emergency_recent(request: RecentEmergencyRequest) -> RecentEmergencyResponse:
    """Whether the pet's visits include an emergency within the last `hours`."""
    now = request.now or config.clinic_now()
    recent = has_recent_emergency(
        request.appointments,
        now,
        hours=request.hours,
        tz=config.clinic_zone(),
    )
    return RecentEmergencyResponse(recent=recent)


@app.post("/availability/week", response_model=WeeklyAvailabilityResponse)
def availability_week(request: WeeklyAvailabilityRequest) -> WeeklyAvailabilityResponse:
    """
    Convert the weekly availability editor into the stored string form.
    `windows` lists the entries that parse, so bad times show up before saving.
    """
    entries = availability_from_week(
        {day.lower(): config_.model_dump() for day, config_ in request.days.items()}
    )
    return WeeklyAvailabilityResponse(availability=entries, windows=parse_availability(entries))


@app.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}
