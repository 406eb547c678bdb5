"""Admission engine — decides whether, where and when a session is admitted.

Sequence for one request:
  1. preconditions (ledger capacity, time range, duration, codes, user, vehicle)
  2. criticality: premium member OR vehicle SOC below the critical threshold
  3. peak deferral: non-critical start in [peak.start, peak.end) → peak.end
  4. dock search over the pool, consulting the ledger for overlap
  5. ledger append + dock occupancy + notifications

Steps 1–4 never mutate anything, so a rejection leaves no trace.
"""

from __future__ import annotations

import logging

from ev_station.config.schedule import PeakWindow
from ev_station.config.station import StationConfig
from ev_station.engine.docks import Dock, DockPool
from ev_station.engine.ledger import BookingLedger
from ev_station.engine.notifications import NotificationSink
from ev_station.engine.registry import UserRegistry, VehicleRegistry
from ev_station.errors import CapacityExceeded, InvalidInput, NoAvailableDock, NotFound
from ev_station.models.enums import ChargingType, Weather
from ev_station.models.records import Booking, UserRecord, VehicleRecord

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Pure policy helpers
# ═══════════════════════════════════════════════════════════════════════════

def is_critical(user: UserRecord, vehicle: VehicleRecord, critical_soc_pct: float) -> bool:
    """Premium members and low-SOC vehicles bypass peak deferral."""
    return user.is_premium or vehicle.battery_soc < critical_soc_pct


def effective_start(start_time: float, critical: bool, peak: PeakWindow) -> tuple[float, bool]:
    """Return ``(start, deferred)``.

    A non-critical start inside the peak window moves to the window's end;
    the original slot is discarded, not retried later.
    """
    if peak.contains(start_time) and not critical:
        return peak.end, True
    return start_time, False


def find_available_dock(
    pool: DockPool,
    ledger: BookingLedger,
    power_rating: float,
    start_time: float,
    duration: float,
    solar_only: bool,
    weather: Weather,
    peak: PeakWindow,
) -> Dock | None:
    """Pick a dock for ``[start_time, start_time + duration)``.

    Candidates are unoccupied, deliver at least ``power_rating`` under the
    current weather, have no overlapping active booking and, for solar
    requests, are solar-backed.  In the peak window a non-solar request
    prefers the first solar candidate; otherwise the lowest dock id wins.
    """
    candidates = [
        dock for dock in pool
        if not dock.occupied
        and dock.available_power(weather) >= power_rating
        and (not solar_only or dock.is_solar)
        and not ledger.has_overlap(dock.dock_id, start_time, duration)
    ]
    if not candidates:
        return None

    if peak.contains(start_time) and not solar_only:
        for dock in candidates:
            if dock.is_solar:
                return dock
    return candidates[0]


def parse_charging_type(code: int) -> ChargingType:
    try:
        return ChargingType(code)
    except ValueError as exc:
        raise InvalidInput(f"Invalid charging type: {code!r} (expected 1-4)") from exc


# ═══════════════════════════════════════════════════════════════════════════
# Engine
# ═══════════════════════════════════════════════════════════════════════════

class AdmissionEngine:
    """Admits booking requests against one station's docks and ledger.

    Not thread-safe on its own: the owning station serializes calls.
    """

    def __init__(
        self,
        station_id: int,
        pool: DockPool,
        ledger: BookingLedger,
        users: UserRegistry,
        vehicles: VehicleRegistry,
        notifier: NotificationSink,
        config: StationConfig,
        peak: PeakWindow,
    ) -> None:
        self._station_id = station_id
        self._pool = pool
        self._ledger = ledger
        self._users = users
        self._vehicles = vehicles
        self._notifier = notifier
        self._config = config
        self._peak = peak

    def _check_preconditions(
        self,
        user_id: int,
        vehicle_id: int,
        start_time: float,
        duration: float,
        power_rating: float,
        charging_type: int,
    ) -> tuple[UserRecord, VehicleRecord, ChargingType]:
        if self._ledger.is_full:
            raise CapacityExceeded(f"Maximum booking limit reached ({self._ledger.capacity})")
        if not 0.0 <= start_time < 24.0:
            raise InvalidInput(f"Invalid start time {start_time!r}: must be in [0, 24)")
        if not duration > 0.0:
            raise InvalidInput(f"Invalid duration {duration!r}: must be > 0")
        ctype = parse_charging_type(charging_type)
        if not power_rating > 0:
            raise InvalidInput(f"Invalid power rating {power_rating!r}: must be > 0")

        user = self._users.lookup(user_id)
        if user is None or not user.is_registered:
            raise NotFound(f"User {user_id} not found")
        vehicle = self._vehicles.lookup(vehicle_id)
        if vehicle is None or vehicle.owner_user_id != user_id:
            raise NotFound(f"Vehicle {vehicle_id} not found for user {user_id}")
        return user, vehicle, ctype

    def admit(
        self,
        user_id: int,
        vehicle_id: int,
        start_time: float,
        duration: float,
        power_rating: float,
        charging_type: int,
        weather: Weather,
    ) -> tuple[Booking, bool]:
        """Admit one request.  Returns ``(booking, deferred)`` or raises."""
        user, vehicle, ctype = self._check_preconditions(
            user_id, vehicle_id, start_time, duration, power_rating, charging_type,
        )

        critical = is_critical(user, vehicle, self._config.critical_soc_pct)
        start, deferred = effective_start(start_time, critical, self._peak)

        dock = find_available_dock(
            self._pool, self._ledger, power_rating, start, duration,
            solar_only=ctype.requires_solar, weather=weather, peak=self._peak,
        )
        if dock is None:
            logger.info(
                "Station %d: no dock for user %d vehicle %d at %.2f (%.2f kW, type %d)",
                self._station_id, user_id, vehicle_id, start, power_rating, ctype,
            )
            raise NoAvailableDock("No available dock. Booking cannot be created.")

        # ── Commit ─────────────────────────────────────────────────────
        booking = self._ledger.append(Booking(
            booking_id=self._ledger.next_booking_id,
            user_id=user_id,
            vehicle_id=vehicle_id,
            dock_id=dock.dock_id,
            station_id=self._station_id,
            start_time=start,
            duration=duration,
            charging_type=ctype,
        ))
        dock.occupy(vehicle_id)

        if deferred:
            self._notifier.notify(
                user_id, "Your booking has been deferred due to peak hours. New start time:", start,
            )
        self._notifier.notify(user_id, "Upcoming charging session scheduled at:", start)
        logger.info(
            "Station %d: booking %d admitted on dock %d at %.2f for %.2fh%s",
            self._station_id, booking.booking_id, dock.dock_id, start, duration,
            " (deferred from %.2f)" % start_time if deferred else "",
        )
        return booking, deferred
