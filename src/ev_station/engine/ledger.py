"""Booking ledger — append-only source of truth for overlap checks and reports."""

from __future__ import annotations

import logging
from typing import Iterator

from ev_station.errors import CapacityExceeded
from ev_station.models.records import Booking

logger = logging.getLogger(__name__)


class BookingLedger:
    """Bookings in creation order.  Ids are 1-based, sequential, never reused.

    Cancelled and completed bookings stay in the ledger and count towards
    ``capacity``.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._bookings: list[Booking] = []

    def __iter__(self) -> Iterator[Booking]:
        return iter(self._bookings)

    def __len__(self) -> int:
        return len(self._bookings)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._bookings) >= self._capacity

    @property
    def next_booking_id(self) -> int:
        return len(self._bookings) + 1

    def append(self, booking: Booking) -> Booking:
        if self.is_full:
            raise CapacityExceeded(f"Booking ledger full ({self._capacity} bookings)")
        if booking.booking_id != self.next_booking_id:
            raise ValueError(
                f"Expected booking id {self.next_booking_id}, got {booking.booking_id}"
            )
        self._bookings.append(booking)
        logger.debug("Ledger append: booking %d on dock %d", booking.booking_id, booking.dock_id)
        return booking

    def get(self, booking_id: int) -> Booking | None:
        if 1 <= booking_id <= len(self._bookings):
            return self._bookings[booking_id - 1]
        return None

    def find_active(self, booking_id: int) -> Booking | None:
        booking = self.get(booking_id)
        return booking if booking is not None and booking.active else None

    def active(self) -> list[Booking]:
        return [b for b in self._bookings if b.active]

    def inactive(self) -> list[Booking]:
        return [b for b in self._bookings if not b.active]

    def for_user(self, user_id: int) -> list[Booking]:
        return [b for b in self._bookings if b.user_id == user_id]

    def has_overlap(self, dock_id: int, start_time: float, duration: float) -> bool:
        """True if an active booking on ``dock_id`` intersects ``[start, start+duration)``."""
        return any(
            b.active and b.dock_id == dock_id and b.overlaps(start_time, duration)
            for b in self._bookings
        )
