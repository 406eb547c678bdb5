"""Read-only aggregation over the booking ledger and dock pool.

  utilization     = Σ dock occupied hours / (span × dock count) × 100
                    span = latest (start + duration) − baseline, 0 without bookings
  avg session     = mean duration over inactive bookings
  grid / solar %  = completed energy attributed to the dock's source variant
  revenue         = Σ cost over inactive bookings (cancelled ones add $0)
  CO2             = Σ source.co2(energy) over inactive bookings
"""

from __future__ import annotations

import numpy as np

from ev_station.engine.docks import DockPool
from ev_station.engine.ledger import BookingLedger
from ev_station.engine.registry import UserRegistry
from ev_station.models.enums import EnergySourceKind, Weather
from ev_station.models.results import RealTimeEntry, StationReport


def _pct(part: float, whole: float) -> float:
    return part / whole * 100.0 if whole > 0 else 0.0


def build_station_report(
    station_id: int,
    ledger: BookingLedger,
    pool: DockPool,
    users: UserRegistry,
    baseline_time: float | None,
) -> StationReport:
    bookings = list(ledger)
    inactive = ledger.inactive()

    # ── Utilization ────────────────────────────────────────────────────
    span = 0.0
    if bookings and baseline_time is not None:
        latest_end = max([baseline_time] + [b.end_time for b in bookings])
        span = latest_end - baseline_time
    utilization = _pct(pool.total_occupied_hours, span * len(pool))

    # ── Sessions ───────────────────────────────────────────────────────
    durations = np.array([b.duration for b in inactive], dtype=np.float64)
    avg_session = float(durations.mean()) if durations.size else 0.0

    # ── Energy mix, revenue, CO2 ───────────────────────────────────────
    energy_by_source = {kind: 0.0 for kind in EnergySourceKind}
    co2 = 0.0
    for b in inactive:
        dock = pool.get(b.dock_id)
        if dock is None:
            continue
        energy_by_source[dock.source] += b.energy_consumed
        co2 += dock.profile.co2_emission(b.energy_consumed)
    total_energy = sum(energy_by_source.values())
    revenue = float(np.sum([b.cost for b in inactive])) if inactive else 0.0

    # ── Demand trends ──────────────────────────────────────────────────
    regular = premium = 0
    for b in bookings:
        user = users.lookup(b.user_id)
        if user is None:
            continue
        if user.is_premium:
            premium += 1
        else:
            regular += 1

    return StationReport(
        station_id=station_id,
        utilization_pct=round(utilization, 4),
        average_session_hours=round(avg_session, 4),
        grid_energy_pct=round(_pct(energy_by_source[EnergySourceKind.GRID], total_energy), 4),
        solar_energy_pct=round(_pct(energy_by_source[EnergySourceKind.SOLAR], total_energy), 4),
        regular_bookings=regular,
        premium_bookings=premium,
        total_revenue=round(revenue, 4),
        co2_savings_kg=round(co2, 4),
    )


def build_real_time_data(
    ledger: BookingLedger,
    pool: DockPool,
    weather: Weather,
    at_time: float,
) -> list[RealTimeEntry]:
    """Energy delivered so far and time remaining for each active booking."""
    entries: list[RealTimeEntry] = []
    for b in ledger.active():
        dock = pool.get(b.dock_id)
        if dock is None:
            continue
        elapsed = min(max(at_time - b.start_time, 0.0), b.duration)
        entries.append(RealTimeEntry(
            booking_id=b.booking_id,
            vehicle_id=b.vehicle_id,
            dock_id=b.dock_id,
            energy_delivered_kwh=round(dock.available_power(weather) * elapsed, 4),
            remaining_hours=round(b.duration - elapsed, 4),
        ))
    return entries
