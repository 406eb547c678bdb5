"""Dock pool — a fixed set of docks keyed by stable id.

Invariant kept together with the ledger:
  occupied  ⟺  occupying_vehicle_id is set  ⟺  one active booking references the dock
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from ev_station.config.station import DockSpec
from ev_station.engine.energy import SourceProfile, profile_for
from ev_station.models.enums import EnergySourceKind, Weather
from ev_station.models.results import DockStatus


@dataclass
class Dock:
    """One charging position.  Owns exactly one energy-source variant."""

    dock_id: int
    power_rating: int
    source: EnergySourceKind
    occupied: bool = False
    occupying_vehicle_id: int | None = None
    cumulative_occupied_hours: float = 0.0

    @property
    def profile(self) -> SourceProfile:
        return profile_for(self.source)

    @property
    def is_solar(self) -> bool:
        return self.source is EnergySourceKind.SOLAR

    def available_power(self, weather: Weather) -> float:
        return self.profile.available_power(self.power_rating, weather)

    def occupy(self, vehicle_id: int) -> None:
        self.occupied = True
        self.occupying_vehicle_id = vehicle_id

    def release(self) -> None:
        self.occupied = False
        self.occupying_vehicle_id = None

    def status(self) -> DockStatus:
        return DockStatus(
            dock_id=self.dock_id,
            power_rating_kw=self.power_rating,
            source=self.profile.name,
            occupied=self.occupied,
            vehicle_id=self.occupying_vehicle_id,
            cumulative_occupied_hours=round(self.cumulative_occupied_hours, 4),
        )


class DockPool:
    """Docks of one station, iterated in ascending dock id."""

    def __init__(self, specs: list[DockSpec]) -> None:
        self._docks: dict[int, Dock] = {
            spec.dock_id: Dock(spec.dock_id, spec.power_rating_kw, spec.source)
            for spec in sorted(specs, key=lambda s: s.dock_id)
        }

    def __iter__(self) -> Iterator[Dock]:
        return iter(self._docks.values())

    def __len__(self) -> int:
        return len(self._docks)

    def get(self, dock_id: int) -> Dock | None:
        return self._docks.get(dock_id)

    @property
    def total_occupied_hours(self) -> float:
        return sum(d.cumulative_occupied_hours for d in self._docks.values())

    def current_power_draw(self, weather: Weather) -> float:
        """Sum of weather-adjusted power across occupied docks (kW)."""
        return sum(d.available_power(weather) for d in self._docks.values() if d.occupied)
