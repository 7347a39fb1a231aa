import json
import logging
from pathlib import Path
from types import MappingProxyType
from collections.abc import Iterator, Mapping
from typing import Any, Tuple, Type, TypeVar

from ..models.enums import FuelType, VehicleMode

logger = logging.getLogger(__name__)

E = TypeVar("E", VehicleMode, FuelType)

FactorKey = Tuple[VehicleMode, FuelType]

# Grams of CO2 per kilometre.
DEFAULT_FACTORS: dict[FactorKey, int] = {
    (VehicleMode.PERSONAL_VEHICLE, FuelType.PETROL): 192,
    (VehicleMode.PERSONAL_VEHICLE, FuelType.DIESEL): 171,
    (VehicleMode.PERSONAL_VEHICLE, FuelType.CNG): 142,
    (VehicleMode.PERSONAL_VEHICLE, FuelType.ELECTRIC): 53,
    (VehicleMode.ROADWAYS, FuelType.DIESEL): 105,
    (VehicleMode.ROADWAYS, FuelType.CNG): 89,
    (VehicleMode.ROADWAYS, FuelType.ELECTRIC): 30,
    (VehicleMode.RAILWAYS, FuelType.DIESEL): 41,
    (VehicleMode.RAILWAYS, FuelType.ELECTRIC): 35,
    (VehicleMode.AIRWAYS, FuelType.JET_FUEL): 255,
}


def coerce_enum(enum_cls: Type[E], value: Any) -> E:
    """Resolve an enum member from a member, its integer code or its name.

    Raises ValueError for anything that is not a known member.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, bool):
        raise ValueError(f"{value!r} is not a valid {enum_cls.__name__}")
    if isinstance(value, int):
        return enum_cls(value)
    if isinstance(value, str):
        key = value.strip().upper().replace("-", "_").replace(" ", "_")
        if key.isdigit():
            return enum_cls(int(key))
        try:
            return enum_cls[key]
        except KeyError:
            pass
    raise ValueError(f"{value!r} is not a valid {enum_cls.__name__}")


class EmissionFactorTable(Mapping[FactorKey, int]):
    """Read-only (vehicle mode, fuel type) -> grams/km lookup."""

    def __init__(self, factors: Mapping[FactorKey, int] | None = None):
        source = DEFAULT_FACTORS if factors is None else factors
        cleaned: dict[FactorKey, int] = {}
        for (mode, fuel), grams in source.items():
            if isinstance(grams, bool) or not isinstance(grams, int) or grams < 0:
                raise ValueError(f"Invalid emission factor for {mode}/{fuel}: {grams!r}")
            cleaned[(coerce_enum(VehicleMode, mode), coerce_enum(FuelType, fuel))] = grams
        self._factors = MappingProxyType(cleaned)

    def __getitem__(self, key: FactorKey) -> int:
        return self._factors[key]

    def __iter__(self) -> Iterator[FactorKey]:
        return iter(self._factors)

    def __len__(self) -> int:
        return len(self._factors)

    def grams_per_km(self, vehicle_mode: VehicleMode, fuel_type: FuelType) -> int:
        return self._factors[(vehicle_mode, fuel_type)]

    @classmethod
    def from_json_file(cls, path: str | Path) -> "EmissionFactorTable":
        """Load a table from a JSON list of {vehicle_mode, fuel_type, grams_per_km}."""
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError("Emission factor file must contain a JSON list")

        factors: dict[FactorKey, int] = {}
        for position, item in enumerate(raw):
            try:
                key = (
                    coerce_enum(VehicleMode, item["vehicle_mode"]),
                    coerce_enum(FuelType, item["fuel_type"]),
                )
                factors[key] = item["grams_per_km"]
            except (KeyError, TypeError, ValueError) as exc:
                raise ValueError(
                    f"Invalid emission factor entry #{position} in {path}: {item!r} ({exc})"
                ) from exc

        logger.info("Loaded %d emission factors from %s", len(factors), path)
        return cls(factors)
