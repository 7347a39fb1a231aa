from typing import List

from fastapi import APIRouter, Depends

from ..dependencies import get_ledger
from ..models.trip import Trip
from ..schemas import (
    DailyEmissionsResponse,
    PersonalVehicleTripRequest,
    RecordTripResponse,
    TripCountResponse,
    TripRequest,
)
from ..services.ledger import EmissionLedger

router = APIRouter(prefix="/accounts/{account}", tags=["trips"])


@router.post("/trips", response_model=RecordTripResponse, status_code=201)
def record_trip(
    account: str, payload: TripRequest, ledger: EmissionLedger = Depends(get_ledger)
) -> RecordTripResponse:
    index = ledger.record_trip(
        account, payload.vehicle_mode, payload.fuel_type, payload.distance_km
    )
    return RecordTripResponse(index=index, trip=ledger.get_trip_data(account, index))


@router.post("/trips/personal-vehicle", response_model=RecordTripResponse, status_code=201)
def record_personal_vehicle_trip(
    account: str,
    payload: PersonalVehicleTripRequest,
    ledger: EmissionLedger = Depends(get_ledger),
) -> RecordTripResponse:
    index = ledger.record_personal_vehicle_trip(account, payload.fuel_type, payload.distance_km)
    return RecordTripResponse(index=index, trip=ledger.get_trip_data(account, index))


@router.get("/trips/count", response_model=TripCountResponse)
def trip_count(account: str, ledger: EmissionLedger = Depends(get_ledger)) -> TripCountResponse:
    return TripCountResponse(account=account, count=ledger.get_trip_count(account))


@router.get("/trips", response_model=List[Trip])
def list_trips(account: str, ledger: EmissionLedger = Depends(get_ledger)) -> List[Trip]:
    return ledger.get_trips(account)


@router.get("/trips/{index}", response_model=Trip)
def trip_data(account: str, index: int, ledger: EmissionLedger = Depends(get_ledger)) -> Trip:
    return ledger.get_trip_data(account, index)


@router.get("/emissions/daily", response_model=DailyEmissionsResponse)
def daily_emissions(
    account: str, ledger: EmissionLedger = Depends(get_ledger)
) -> DailyEmissionsResponse:
    return DailyEmissionsResponse(
        account=account,
        daily_emissions=ledger.get_daily_emissions(account),
        window_start=ledger.get_window_start(account),
    )
