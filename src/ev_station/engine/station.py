"""Charging station — owns docks, ledger and deferred queue as one serialization domain.

Every public operation takes the station lock, so admission's
overlap check → dock allocation → ledger append is indivisible, and no
caller ever observes another operation's partial effects.  Stations share
nothing but the (read-only to them) weather signal.

Usage::

    station = ChargingStation(1, NetworkConfig())
    station.users.register(1, "Ada", membership_level=0)
    station.vehicles.register(10, 1, battery_soc=50, battery_capacity_kwh=60)
    result = station.try_book(1, 10, start_time=9.0, duration=2.0,
                              power_rating=22, charging_type=2)
    invoice = station.complete(result.booking_id)
"""

from __future__ import annotations

import logging
import threading

from ev_station.config.network import NetworkConfig
from ev_station.engine.admission import AdmissionEngine
from ev_station.engine.deferred import DeferredQueue
from ev_station.engine.docks import DockPool
from ev_station.engine.energy import WeatherSignal
from ev_station.engine.ledger import BookingLedger
from ev_station.engine.notifications import NotificationOutbox, NotificationSink
from ev_station.engine.registry import (
    InMemoryUserRegistry,
    InMemoryVehicleRegistry,
    UserRegistry,
    VehicleRegistry,
)
from ev_station.engine.reporting import build_real_time_data, build_station_report
from ev_station.engine.settlement import (
    cancellation_penalty,
    compute_session_charge,
    soc_after_charge,
)
from ev_station.engine.v2g import discharge_amount
from ev_station.errors import ConsistencyFault, InvalidInput, NotFound, StationError
from ev_station.models.enums import RejectionReason
from ev_station.models.records import Booking, DeferredBookingRequest
from ev_station.models.results import (
    AdmissionResult,
    CancellationResult,
    DockStatus,
    Invoice,
    RealTimeEntry,
    StationReport,
)

logger = logging.getLogger(__name__)


class ChargingStation:
    """One station: five docks (by default), a bounded ledger and a FIFO deferred queue."""

    def __init__(
        self,
        station_id: int,
        config: NetworkConfig | None = None,
        weather: WeatherSignal | None = None,
        users: UserRegistry | None = None,
        vehicles: VehicleRegistry | None = None,
        notifier: NotificationSink | None = None,
    ) -> None:
        self._config = config or NetworkConfig()
        st = self._config.station

        self.station_id = station_id
        self.weather = weather or WeatherSignal(self._config.initial_weather)
        self.users = users if users is not None else InMemoryUserRegistry(st.max_users)
        self.vehicles = (
            vehicles if vehicles is not None
            else InMemoryVehicleRegistry(st.max_vehicles, self.users)
        )
        self.notifier = notifier if notifier is not None else NotificationOutbox()

        self.docks = DockPool(st.docks)
        self.ledger = BookingLedger(st.max_bookings)
        self.queue = DeferredQueue()
        self._baseline_time: float | None = None
        self._lock = threading.RLock()

        self._admission = AdmissionEngine(
            station_id, self.docks, self.ledger, self.users, self.vehicles,
            self.notifier, st, self._config.peak,
        )

    @property
    def baseline_time(self) -> float | None:
        """Requested start of the first booking ever admitted; ``None`` before that."""
        return self._baseline_time

    # ── Admission ──────────────────────────────────────────────────────

    def book(
        self,
        user_id: int,
        vehicle_id: int,
        start_time: float,
        duration: float,
        power_rating: float,
        charging_type: int,
    ) -> Booking:
        """Admit a session or raise a ``StationError`` subclass."""
        with self._lock:
            booking, _ = self._book(
                user_id, vehicle_id, start_time, duration, power_rating, charging_type,
            )
            return booking

    def _book(
        self,
        user_id: int,
        vehicle_id: int,
        start_time: float,
        duration: float,
        power_rating: float,
        charging_type: int,
    ) -> tuple[Booking, bool]:
        first = len(self.ledger) == 0
        booking, deferred = self._admission.admit(
            user_id, vehicle_id, start_time, duration, power_rating, charging_type,
            self.weather.current,
        )
        if first:
            self._baseline_time = start_time
        return booking, deferred

    def try_book(
        self,
        user_id: int,
        vehicle_id: int,
        start_time: float,
        duration: float,
        power_rating: float,
        charging_type: int,
    ) -> AdmissionResult:
        """Admit a session; rejections come back as a result instead of an exception."""
        with self._lock:
            try:
                booking, deferred = self._book(
                    user_id, vehicle_id, start_time, duration, power_rating, charging_type,
                )
            except StationError as exc:
                logger.info("Station %d: booking rejected (%s): %s",
                            self.station_id, exc.reason.value, exc.message)
                return AdmissionResult(admitted=False, reason=exc.reason, message=exc.message)
            return AdmissionResult(
                admitted=True,
                booking_id=booking.booking_id,
                dock_id=booking.dock_id,
                start_time=booking.start_time,
                deferred=deferred,
                message=f"Booking created successfully! Booking ID: {booking.booking_id}",
            )

    # ── Deferred queue ─────────────────────────────────────────────────

    def enqueue(self, request: DeferredBookingRequest) -> int:
        """Append a request to the back of the deferred queue; returns queue length."""
        with self._lock:
            self.queue.enqueue(request)
            return len(self.queue)

    def book_or_defer(
        self,
        user_id: int,
        vehicle_id: int,
        start_time: float,
        duration: float,
        power_rating: float,
        charging_type: int,
    ) -> tuple[AdmissionResult, bool, int]:
        """Like ``try_book``, but a ``no_available_dock`` rejection is queued.

        Returns ``(result, queued, queue_length)``, all read under one lock hold.
        """
        with self._lock:
            result = self.try_book(
                user_id, vehicle_id, start_time, duration, power_rating, charging_type,
            )
            queued = result.reason is RejectionReason.NO_AVAILABLE_DOCK
            if queued:
                self.queue.enqueue(DeferredBookingRequest(
                    user_id=user_id,
                    vehicle_id=vehicle_id,
                    requested_start=start_time,
                    duration=duration,
                    power_rating=power_rating,
                    charging_type=charging_type,
                ))
            return result, queued, len(self.queue)

    def drain_queue(self) -> list[AdmissionResult]:
        """Re-attempt queued requests in order, stopping at the first rejection."""
        with self._lock:
            return self.queue.drain(lambda r: self.try_book(
                r.user_id, r.vehicle_id, r.requested_start, r.duration,
                r.power_rating, r.charging_type,
            ))

    def queued(self) -> list[DeferredBookingRequest]:
        with self._lock:
            return self.queue.pending()

    # ── Cancellation / completion ──────────────────────────────────────

    def _active_booking(self, booking_id: int) -> Booking:
        booking = self.ledger.find_active(booking_id)
        if booking is None:
            raise NotFound(f"Booking {booking_id} not found or already inactive")
        return booking

    def cancel(self, booking_id: int) -> CancellationResult:
        """Cancel an active booking, free its dock and charge the tiered penalty."""
        with self._lock:
            booking = self._active_booking(booking_id)
            baseline = self._baseline_time if self._baseline_time is not None else 0.0
            penalty = cancellation_penalty(booking.start_time, baseline, self._config.tariff)

            booking.active = False
            dock = self.docks.get(booking.dock_id)
            if dock is not None:
                dock.release()
            self.notifier.notify(booking.user_id, "Booking cancelled. Penalty charged: $", penalty)
            logger.info("Station %d: booking %d cancelled, penalty $%.2f",
                        self.station_id, booking_id, penalty)
            return CancellationResult(
                booking_id=booking_id,
                user_id=booking.user_id,
                dock_id=booking.dock_id,
                penalty=penalty,
            )

    def complete(self, booking_id: int) -> Invoice:
        """Settle an active booking: energy, cost, SOC, dock hours; then free the dock."""
        with self._lock:
            booking = self._active_booking(booking_id)
            dock = self.docks.get(booking.dock_id)
            if dock is None:
                logger.error("Station %d: booking %d references invalid dock %d",
                             self.station_id, booking_id, booking.dock_id)
                raise ConsistencyFault(f"Booking {booking_id} references unknown dock {booking.dock_id}")

            user = self.users.lookup(booking.user_id)
            premium = user is not None and user.is_premium
            charge = compute_session_charge(
                booking, dock, self.weather.current, premium,
                self._config.tariff, self._config.peak,
            )

            booking.energy_consumed = charge.energy_kwh
            booking.cost = charge.cost
            booking.active = False
            dock.cumulative_occupied_hours += booking.duration
            dock.release()

            new_soc = None
            vehicle = self.vehicles.lookup(booking.vehicle_id)
            if vehicle is not None:
                new_soc = soc_after_charge(
                    vehicle.battery_soc, charge.energy_kwh, vehicle.battery_capacity_kwh,
                )
                self.vehicles.update_soc(booking.vehicle_id, new_soc)

            invoice = Invoice(
                booking_id=booking_id,
                user_id=booking.user_id,
                vehicle_id=booking.vehicle_id,
                dock_id=booking.dock_id,
                energy_kwh=charge.energy_kwh,
                rate_per_kwh=charge.rate_per_kwh,
                total_cost=charge.cost,
                premium_discount_applied=charge.premium_discount_applied,
                new_battery_soc=new_soc,
            )
            logger.info(
                "Invoice for booking %d: user %d vehicle %d, %.2f kWh @ $%.4f/kWh = $%.2f",
                booking_id, booking.user_id, booking.vehicle_id,
                charge.energy_kwh, charge.rate_per_kwh, charge.cost,
            )
            self.notifier.notify(
                booking.user_id, "Charging session completed. Energy consumed:", charge.energy_kwh,
            )
            self.notifier.notify(booking.user_id, "Total cost for the session: $", charge.cost)
            return invoice

    # ── Vehicle-to-grid ────────────────────────────────────────────────

    def discharge_to_grid(self, vehicle_id: int, requested_kwh: float) -> float:
        """Discharge up to ``requested_kwh`` from a V2G vehicle; returns kWh discharged."""
        if not requested_kwh >= 0:
            raise InvalidInput(f"Invalid discharge energy {requested_kwh!r}: must be >= 0")
        with self._lock:
            vehicle = self.vehicles.lookup(vehicle_id)
            if vehicle is None:
                raise NotFound(f"Vehicle ID {vehicle_id} not found.")
            discharged, new_soc = discharge_amount(vehicle, requested_kwh)
            if discharged > 0:
                self.vehicles.update_soc(vehicle_id, new_soc)
            logger.info("Vehicle %d discharged %.2f kWh to the grid", vehicle_id, discharged)
            return discharged

    # ── Read-only views ────────────────────────────────────────────────

    def dock_status(self) -> list[DockStatus]:
        with self._lock:
            return [dock.status() for dock in self.docks]

    def current_power_draw(self) -> float:
        with self._lock:
            return self.docks.current_power_draw(self.weather.current)

    def user_bookings(self, user_id: int) -> list[Booking]:
        with self._lock:
            return [b.model_copy() for b in self.ledger.for_user(user_id)]

    def real_time_data(self, at_time: float | None = None) -> list[RealTimeEntry]:
        """Progress of active bookings at ``at_time`` (default: baseline + offset)."""
        with self._lock:
            if at_time is None:
                baseline = self._baseline_time if self._baseline_time is not None else 0.0
                at_time = baseline + self._config.station.realtime_offset_hours
            return build_real_time_data(self.ledger, self.docks, self.weather.current, at_time)

    def report(self) -> StationReport:
        with self._lock:
            return build_station_report(
                self.station_id, self.ledger, self.docks, self.users, self._baseline_time,
            )
