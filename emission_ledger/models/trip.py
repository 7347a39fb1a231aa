from pydantic import BaseModel, ConfigDict, Field

from .enums import FuelType, VehicleMode


class Trip(BaseModel):
    model_config = ConfigDict(frozen=True)

    vehicle_mode: VehicleMode
    fuel_type: FuelType
    distance_km: int = Field(..., ge=0, description="Distance travelled in kilometres")
    co2_emitted: int = Field(..., ge=0, description="CO₂ emitted in grams")
    recorded_at: float = Field(..., description="Unix timestamp of the recording")
