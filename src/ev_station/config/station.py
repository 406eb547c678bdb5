"""Station layout and capacity limits."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from ev_station.models.enums import EnergySourceKind


class DockSpec(BaseModel):
    """One physical dock: id, power rating and the energy source it owns."""

    dock_id: int = Field(ge=1, description="Stable dock id (1..N)")
    power_rating_kw: Literal[7, 22, 50] = Field(description="SLOW=7, MEDIUM=22, FAST=50 kW")
    source: EnergySourceKind = Field(default=EnergySourceKind.GRID, description="Grid or solar")


def _default_docks() -> list[DockSpec]:
    return [
        DockSpec(dock_id=1, power_rating_kw=7, source=EnergySourceKind.GRID),
        DockSpec(dock_id=2, power_rating_kw=7, source=EnergySourceKind.SOLAR),
        DockSpec(dock_id=3, power_rating_kw=22, source=EnergySourceKind.GRID),
        DockSpec(dock_id=4, power_rating_kw=22, source=EnergySourceKind.SOLAR),
        DockSpec(dock_id=5, power_rating_kw=50, source=EnergySourceKind.GRID),
    ]


class StationConfig(BaseModel):
    """Per-station pools and admission thresholds."""

    max_users: int = Field(default=10, ge=1, description="User registry capacity")
    max_vehicles: int = Field(default=10, ge=1, description="Vehicle registry capacity")
    max_bookings: int = Field(default=20, ge=1, description="Booking ledger capacity (cancelled/completed included)")
    critical_soc_pct: float = Field(
        default=20.0, ge=0, le=100.0,
        description="Vehicles strictly below this SOC are critical and skip peak deferral.",
    )
    realtime_offset_hours: float = Field(
        default=1.0, ge=0,
        description="Default clock for real-time progress = baseline + this offset.",
    )
    docks: list[DockSpec] = Field(default_factory=_default_docks, min_length=1)

    @model_validator(mode="after")
    def _unique_dock_ids(self) -> StationConfig:
        ids = [d.dock_id for d in self.docks]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Dock ids must be unique, got {ids}")
        return self
