from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from ..dependencies import get_ledger
from ..schemas import ParseTripRequest, ParseTripResponse
from ..services.gemini_trip import interpret_trip
from ..services.ledger import EmissionLedger

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/parse_trip", response_model=ParseTripResponse)
async def parse_trip(
    payload: ParseTripRequest, ledger: EmissionLedger = Depends(get_ledger)
) -> ParseTripResponse:
    trip = await interpret_trip(payload.description)

    index = None
    if payload.account:
        index = await run_in_threadpool(
            ledger.record_trip,
            payload.account,
            trip.vehicle_mode,
            trip.fuel_type,
            trip.distance_km,
        )
    return ParseTripResponse(trip=trip, index=index)
