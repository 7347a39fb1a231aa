import logging
import math
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable

from ..models.enums import FuelType, VehicleMode
from ..models.trip import Trip
from .emission_factors import EmissionFactorTable, coerce_enum

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400

Clock = Callable[[], float]


class LedgerError(Exception):
    """Base class for errors raised by the emission ledger."""


class InvalidInput(LedgerError):
    """Unknown vehicle/fuel type, unsupported combination or bad distance."""


class OutOfRange(LedgerError):
    """Trip index beyond what has been recorded for the account."""


def _check_timestamp(timestamp: Any) -> None:
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        raise InvalidInput(f"timestamp must be a number, got {timestamp!r}")
    # NaN would never compare >= a window boundary
    if not math.isfinite(timestamp):
        raise InvalidInput(f"timestamp must be finite, got {timestamp!r}")


@dataclass
class _AccountState:
    trips: list[Trip] = field(default_factory=list)
    accumulated_co2: int = 0
    window_start: float = 0.0
    lock: threading.Lock = field(default_factory=threading.Lock)


class EmissionLedger:
    """Per-account trip log with a rolling daily CO₂ total.

    Each account owns an append-only list of trips and one daily window.
    The window total is reset by the first trip recorded at or after
    ``window_start + window_seconds``; reads never reset it.

    Writes to one account are serialised by that account's lock, so the
    trip append and the window update happen as a single step.
    """

    def __init__(
        self,
        factors: EmissionFactorTable | None = None,
        clock: Clock = time.time,
        window_seconds: int = SECONDS_PER_DAY,
    ):
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.factors = factors if factors is not None else EmissionFactorTable()
        self.window_seconds = window_seconds
        self._clock = clock
        self._accounts: dict[str, _AccountState] = {}
        self._registry_lock = threading.Lock()

    def _state(self, account: str, create: bool = False) -> _AccountState | None:
        state = self._accounts.get(account)
        if state is None and create:
            with self._registry_lock:
                state = self._accounts.setdefault(account, _AccountState())
        return state

    def _validate(
        self, vehicle_mode: Any, fuel_type: Any, distance_km: Any
    ) -> tuple[VehicleMode, FuelType, int]:
        try:
            mode = coerce_enum(VehicleMode, vehicle_mode)
            fuel = coerce_enum(FuelType, fuel_type)
        except ValueError as exc:
            raise InvalidInput(str(exc)) from exc

        if isinstance(distance_km, bool) or not isinstance(distance_km, int):
            raise InvalidInput(f"distance_km must be an integer, got {distance_km!r}")
        if distance_km < 0:
            raise InvalidInput(f"distance_km must be >= 0, got {distance_km}")

        if (mode, fuel) not in self.factors:
            raise InvalidInput(f"No emission factor for {mode.name} with {fuel.name}")
        return mode, fuel, distance_km

    def record_trip(
        self,
        account: str,
        vehicle_mode: VehicleMode | int | str,
        fuel_type: FuelType | int | str,
        distance_km: int,
        *,
        timestamp: float | None = None,
    ) -> int:
        """Record a trip and return its zero-based index in the account's log."""
        if not account:
            raise InvalidInput("account must be a non-empty identifier")
        try:
            mode, fuel, distance = self._validate(vehicle_mode, fuel_type, distance_km)
            if timestamp is not None:
                _check_timestamp(timestamp)
        except InvalidInput as exc:
            logger.warning("Rejected trip for %s: %s", account, exc)
            raise

        co2 = distance * self.factors.grams_per_km(mode, fuel)
        state = self._state(account, create=True)

        with state.lock:
            now = self._clock() if timestamp is None else timestamp
            trip = Trip(
                vehicle_mode=mode,
                fuel_type=fuel,
                distance_km=distance,
                co2_emitted=co2,
                recorded_at=now,
            )

            if not state.trips:
                state.window_start = now
                state.accumulated_co2 = co2
            elif now >= state.window_start + self.window_seconds:
                logger.info(
                    "Daily window expired for %s, discarding %d g",
                    account,
                    state.accumulated_co2,
                )
                state.window_start = now
                state.accumulated_co2 = co2
            else:
                state.accumulated_co2 += co2

            state.trips.append(trip)
            index = len(state.trips) - 1

        logger.debug(
            "Recorded trip %d for %s: %s/%s %d km -> %d g",
            index,
            account,
            mode.name,
            fuel.name,
            distance,
            co2,
        )
        return index

    def record_personal_vehicle_trip(
        self,
        account: str,
        fuel_type: FuelType | int | str,
        distance_km: int,
        *,
        timestamp: float | None = None,
    ) -> int:
        return self.record_trip(
            account, VehicleMode.PERSONAL_VEHICLE, fuel_type, distance_km, timestamp=timestamp
        )

    def get_trip_count(self, account: str) -> int:
        state = self._state(account)
        if state is None:
            return 0
        with state.lock:
            return len(state.trips)

    def get_trip_data(self, account: str, index: int) -> Trip:
        state = self._state(account)
        count = 0
        if state is not None:
            with state.lock:
                count = len(state.trips)
                if 0 <= index < count:
                    return state.trips[index]
        raise OutOfRange(f"Trip index {index} out of range for {account} ({count} recorded)")

    def get_trips(self, account: str) -> list[Trip]:
        state = self._state(account)
        if state is None:
            return []
        with state.lock:
            return list(state.trips)

    def get_daily_emissions(self, account: str) -> int:
        state = self._state(account)
        if state is None:
            return 0
        with state.lock:
            return state.accumulated_co2

    def get_window_start(self, account: str) -> float | None:
        state = self._state(account)
        if state is None:
            return None
        with state.lock:
            return state.window_start if state.trips else None
