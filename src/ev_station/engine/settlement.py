"""Settlement — energy, tariff and state-of-charge arithmetic for completed sessions.

  energy = available_power(dock rating, weather at completion) × duration
  rate   = base_rate[type]
           × (1 − solar_discount)     if type is SOLAR
           × (1 + peak_surcharge)     if the *stored* start is in the peak window
           × source.rate_adjustment
  cost   = energy × rate × (1 − premium_discount if premium)
  SOC   += energy / capacity × 100, clamped to 100

A deferred booking is stored at the peak end, so it never pays the surcharge.
"""

from __future__ import annotations

from dataclasses import dataclass

from ev_station.config.schedule import PeakWindow
from ev_station.config.tariff import TariffConfig
from ev_station.engine.docks import Dock
from ev_station.models.enums import ChargingType, Weather
from ev_station.models.records import Booking


@dataclass(frozen=True)
class SessionCharge:
    """Immutable settlement figures for one booking."""

    energy_kwh: float
    rate_per_kwh: float
    cost: float
    premium_discount_applied: bool


def effective_rate(
    charging_type: ChargingType,
    start_time: float,
    rate_adjustment: float,
    tariff: TariffConfig,
    peak: PeakWindow,
) -> float:
    """Per-kWh rate after solar discount, peak surcharge and source adjustment."""
    rate = tariff.base_rate(charging_type)
    if charging_type is ChargingType.SOLAR:
        rate *= 1.0 - tariff.solar_discount_pct
    if peak.contains(start_time):
        rate *= 1.0 + tariff.peak_surcharge_pct
    return rate * rate_adjustment


def compute_session_charge(
    booking: Booking,
    dock: Dock,
    weather: Weather,
    premium: bool,
    tariff: TariffConfig,
    peak: PeakWindow,
) -> SessionCharge:
    energy = dock.available_power(weather) * booking.duration
    rate = effective_rate(
        booking.charging_type, booking.start_time, dock.profile.rate_adjustment, tariff, peak,
    )
    cost = energy * rate
    if premium:
        cost *= 1.0 - tariff.premium_discount_pct
    return SessionCharge(
        energy_kwh=energy,
        rate_per_kwh=rate,
        cost=cost,
        premium_discount_applied=premium,
    )


def soc_after_charge(soc: float, energy_kwh: float, capacity_kwh: float) -> float:
    """New SOC (%) after adding ``energy_kwh``; unchanged for a zero-capacity battery."""
    if capacity_kwh <= 0:
        return soc
    return min(100.0, soc + energy_kwh / capacity_kwh * 100.0)


def cancellation_penalty(start_time: float, baseline_time: float, tariff: TariffConfig) -> float:
    """Penalty ($) tiered on time-to-start measured from the station baseline."""
    time_to_start = start_time - baseline_time
    if time_to_start < tariff.late_cancel_window_hours:
        return tariff.late_cancel_penalty
    if time_to_start < tariff.short_notice_window_hours:
        return tariff.short_notice_penalty
    return 0.0
