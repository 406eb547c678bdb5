"""Result types — the contract between the station engine and its callers."""

from __future__ import annotations

from pydantic import BaseModel

from ev_station.models.enums import RejectionReason


class AdmissionResult(BaseModel):
    """Outcome of one admission attempt (``try_book`` / queue drain)."""

    admitted: bool
    booking_id: int | None = None
    dock_id: int | None = None
    start_time: float | None = None
    """Effective start hour — 18.0 when a non-critical peak request was deferred."""
    deferred: bool = False
    reason: RejectionReason | None = None
    message: str = ""


class CancellationResult(BaseModel):
    """Outcome of a cancellation."""

    booking_id: int
    user_id: int
    dock_id: int
    penalty: float
    """Penalty charged ($), tiered by time-to-start from the station baseline."""


class Invoice(BaseModel):
    """Itemized settlement of one completed booking."""

    booking_id: int
    user_id: int
    vehicle_id: int
    dock_id: int
    energy_kwh: float
    rate_per_kwh: float
    """Effective rate after solar discount, peak surcharge and source adjustment."""
    total_cost: float
    """energy × rate, less the premium discount where it applies."""
    premium_discount_applied: bool = False
    new_battery_soc: float | None = None


class DockStatus(BaseModel):
    """Snapshot of one dock."""

    dock_id: int
    power_rating_kw: int
    source: str
    occupied: bool
    vehicle_id: int | None = None
    cumulative_occupied_hours: float = 0.0


class RealTimeEntry(BaseModel):
    """Progress of one active booking at a given clock time."""

    booking_id: int
    vehicle_id: int
    dock_id: int
    energy_delivered_kwh: float
    remaining_hours: float


class StationReport(BaseModel):
    """Read-only analytics over the booking ledger and dock pool."""

    station_id: int
    utilization_pct: float
    """Dock-occupied hours / (elapsed span × dock count) × 100."""
    average_session_hours: float
    """Mean duration over inactive bookings."""
    grid_energy_pct: float
    solar_energy_pct: float
    regular_bookings: int
    premium_bookings: int
    total_revenue: float
    co2_savings_kg: float
    """Sum of source CO2 factors applied to delivered energy (grid 0.5 kg/kWh, solar 0)."""
