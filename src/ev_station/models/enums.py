"""Enumerations shared by config, engine and API."""

from __future__ import annotations

from enum import Enum, IntEnum


class Weather(str, Enum):
    """Process-wide weather signal consumed by solar power computations."""

    SUNNY = "sunny"
    CLOUDY = "cloudy"
    NIGHT = "night"


class EnergySourceKind(str, Enum):
    """Energy source variant backing a dock."""

    GRID = "grid"
    SOLAR = "solar"


class ChargingType(IntEnum):
    """Charging-type codes a booking is requested with.

    ``SOLAR`` is a 7 kW request that must land on a solar-backed dock;
    it is a charging-type code, not a distinct dock rating.
    """

    SLOW = 1
    MEDIUM = 2
    FAST = 3
    SOLAR = 4

    @property
    def power_kw(self) -> int:
        """Power rating (kW) a request of this type needs from a dock."""
        return _POWER_KW[self]

    @property
    def requires_solar(self) -> bool:
        return self is ChargingType.SOLAR


_POWER_KW = {
    ChargingType.SLOW: 7,
    ChargingType.MEDIUM: 22,
    ChargingType.FAST: 50,
    ChargingType.SOLAR: 7,
}


class RejectionReason(str, Enum):
    """Why an operation was refused."""

    CAPACITY_EXCEEDED = "capacity_exceeded"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    NO_AVAILABLE_DOCK = "no_available_dock"
    CONSISTENCY_FAULT = "consistency_fault"
