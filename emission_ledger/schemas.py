from typing import Annotated, List

from pydantic import BaseModel, BeforeValidator, Field

from .models.enums import FuelType, VehicleMode
from .models.trip import Trip
from .services.emission_factors import coerce_enum

# Accept integer codes ("0", 0) as well as names ("petrol", "PERSONAL_VEHICLE")
VehicleModeField = Annotated[
    VehicleMode, BeforeValidator(lambda v: coerce_enum(VehicleMode, v))
]
FuelTypeField = Annotated[FuelType, BeforeValidator(lambda v: coerce_enum(FuelType, v))]


class TripRequest(BaseModel):
    vehicle_mode: VehicleModeField = Field(..., description="Vehicle mode code or name")
    fuel_type: FuelTypeField = Field(..., description="Fuel type code or name")
    distance_km: int = Field(..., ge=0, description="Distance travelled in kilometres")


class PersonalVehicleTripRequest(BaseModel):
    fuel_type: FuelTypeField = Field(..., description="Fuel type code or name")
    distance_km: int = Field(..., ge=0, description="Distance travelled in kilometres")


class RecordTripResponse(BaseModel):
    index: int = Field(..., description="Zero-based position in the account's trip log")
    trip: Trip


class TripCountResponse(BaseModel):
    account: str
    count: int


class DailyEmissionsResponse(BaseModel):
    account: str
    daily_emissions: int = Field(..., description="CO₂ in grams for the active window")
    window_start: float | None = Field(
        default=None, description="Unix timestamp the active window started at"
    )


class EmissionFactorEntry(BaseModel):
    vehicle_mode: VehicleMode
    fuel_type: FuelType
    grams_per_km: int


class EmissionFactorsResponse(BaseModel):
    factors: List[EmissionFactorEntry]


class ParseTripRequest(BaseModel):
    description: str = Field(..., min_length=1, description="Free-text trip description")
    account: str | None = Field(
        default=None, description="Record the interpreted trip for this account"
    )


class ParseTripResponse(BaseModel):
    trip: TripRequest
    index: int | None = Field(
        default=None, description="Trip index when the trip was recorded"
    )
