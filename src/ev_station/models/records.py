"""Record types — users, vehicles, bookings and queued requests.

Bookings hold only identifiers of users, vehicles and docks; their
lifetimes are independent of the booking's.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ev_station.models.enums import ChargingType


class UserRecord(BaseModel):
    """What the user registry answers for one user id."""

    user_id: int
    name: str = ""
    is_registered: bool = True
    membership_level: int = Field(default=0, ge=0, le=1, description="0 = regular, 1 = premium")

    @property
    def is_premium(self) -> bool:
        return self.membership_level == 1


class VehicleRecord(BaseModel):
    """What the vehicle registry answers for one vehicle id."""

    vehicle_id: int
    owner_user_id: int
    battery_soc: float = Field(default=0.0, ge=0.0, le=100.0, description="State of charge (%)")
    battery_capacity_kwh: float = Field(default=0.0, ge=0.0, description="Usable capacity (kWh)")
    supports_v2g: bool = False


class Booking(BaseModel):
    """One charging session on one dock.

    Created active; becomes inactive exactly once, either by cancellation
    (``cost`` and ``energy_consumed`` stay 0) or by completion.
    """

    booking_id: int
    user_id: int
    vehicle_id: int
    dock_id: int
    station_id: int
    start_time: float
    """Effective start hour in [0, 24) — already peak-adjusted if deferred."""
    duration: float
    charging_type: ChargingType
    active: bool = True
    energy_consumed: float = 0.0
    cost: float = 0.0

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def overlaps(self, start_time: float, duration: float) -> bool:
        """Half-open interval test: touching endpoints do not conflict."""
        return start_time < self.end_time and start_time + duration > self.start_time


class DeferredBookingRequest(BaseModel):
    """A booking request parked in the deferred queue — no booking id yet."""

    user_id: int
    vehicle_id: int
    requested_start: float
    duration: float
    power_rating: float = Field(gt=0, description="Requested kW, re-submitted unchanged on drain")
    charging_type: int


class Notification(BaseModel):
    """One fire-and-forget message to a user."""

    user_id: int
    message: str
    value: float | None = None
