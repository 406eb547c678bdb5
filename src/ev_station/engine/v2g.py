"""Vehicle-to-grid discharge.  Independent of docks and bookings."""

from __future__ import annotations

from ev_station.models.records import VehicleRecord


def discharge_amount(vehicle: VehicleRecord, requested_kwh: float) -> tuple[float, float]:
    """Return ``(discharged_kwh, new_soc)`` for a discharge request.

    Non-V2G vehicles discharge nothing.  Otherwise the request is capped at
    the energy currently stored and SOC is floored at 0.
    """
    if not vehicle.supports_v2g or vehicle.battery_capacity_kwh <= 0:
        return 0.0, vehicle.battery_soc

    stored = vehicle.battery_soc / 100.0 * vehicle.battery_capacity_kwh
    discharged = min(requested_kwh, stored)
    new_soc = vehicle.battery_soc - discharged / vehicle.battery_capacity_kwh * 100.0
    return discharged, max(0.0, new_soc)
