from enum import IntEnum


class VehicleMode(IntEnum):
    PERSONAL_VEHICLE = 0
    ROADWAYS = 1
    RAILWAYS = 2
    AIRWAYS = 3


class FuelType(IntEnum):
    PETROL = 0
    DIESEL = 1
    CNG = 2
    ELECTRIC = 3
    JET_FUEL = 4
