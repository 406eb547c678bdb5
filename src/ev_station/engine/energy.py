"""Energy-source policy — a capability table keyed by source variant.

Each variant supplies:
  - ``rate_adjustment``  multiplier on the per-kWh tariff, in (0, 1]
  - ``co2_per_kwh``      emission factor (kg CO2 / kWh)
  - ``available_power``  deliverable power for a dock rating under a given weather

  Grid:   1.0, 0.5, base power always
  Solar:  0.9, 0.0, base × {SUNNY: 1.0, CLOUDY: 0.5, NIGHT: 0.0}

Weather is always passed in explicitly; nothing here reads global state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ev_station.errors import InvalidInput
from ev_station.models.enums import EnergySourceKind, Weather

CO2_GRID_FACTOR = 0.5
"""kg CO2 per kWh drawn from the grid."""

SOLAR_WEATHER_FACTOR: dict[Weather, float] = {
    Weather.SUNNY: 1.0,
    Weather.CLOUDY: 0.5,
    Weather.NIGHT: 0.0,
}


@dataclass(frozen=True)
class SourceProfile:
    """Immutable policy for one energy-source variant."""

    name: str
    rate_adjustment: float
    co2_per_kwh: float
    power_fn: Callable[[float, Weather], float]

    def available_power(self, base_power: float, weather: Weather) -> float:
        return self.power_fn(base_power, weather)

    def co2_emission(self, energy_kwh: float) -> float:
        return energy_kwh * self.co2_per_kwh


SOURCE_PROFILES: dict[EnergySourceKind, SourceProfile] = {
    EnergySourceKind.GRID: SourceProfile(
        name="Grid",
        rate_adjustment=1.0,
        co2_per_kwh=CO2_GRID_FACTOR,
        power_fn=lambda base, weather: base,
    ),
    EnergySourceKind.SOLAR: SourceProfile(
        name="Solar",
        rate_adjustment=0.9,
        co2_per_kwh=0.0,
        power_fn=lambda base, weather: base * SOLAR_WEATHER_FACTOR[weather],
    ),
}


def profile_for(source: EnergySourceKind) -> SourceProfile:
    return SOURCE_PROFILES[source]


class WeatherSignal:
    """Current weather, settable by an operator and read on every power computation.

    No history is kept: a change applies to the next computation only.
    """

    def __init__(self, initial: Weather = Weather.SUNNY) -> None:
        self._current = Weather(initial)

    @property
    def current(self) -> Weather:
        return self._current

    def set(self, weather: Weather | str) -> Weather:
        try:
            self._current = Weather(weather)
        except ValueError as exc:
            raise InvalidInput(f"Unknown weather condition: {weather!r}") from exc
        return self._current
