from fastapi import APIRouter, Depends

from ..dependencies import get_ledger
from ..schemas import EmissionFactorEntry, EmissionFactorsResponse
from ..services.ledger import EmissionLedger

router = APIRouter(tags=["factors"])


@router.get("/factors", response_model=EmissionFactorsResponse)
def emission_factors(ledger: EmissionLedger = Depends(get_ledger)) -> EmissionFactorsResponse:
    entries = [
        EmissionFactorEntry(vehicle_mode=mode, fuel_type=fuel, grams_per_km=grams)
        for (mode, fuel), grams in sorted(ledger.factors.items())
    ]
    return EmissionFactorsResponse(factors=entries)
