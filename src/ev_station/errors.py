"""Error taxonomy for station operations.

Every error is raised synchronously by the operation that detected it.
None of them leave station state partially mutated.
"""

from __future__ import annotations

from ev_station.models.enums import RejectionReason


class StationError(Exception):
    """Base exception for charging-station operations."""

    reason: RejectionReason = RejectionReason.INVALID_INPUT

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CapacityExceeded(StationError):
    """Booking ledger, user pool or vehicle pool is full."""

    reason = RejectionReason.CAPACITY_EXCEEDED


class InvalidInput(StationError):
    """Bad time/duration range, unknown charging-type or weather code, duplicate id."""

    reason = RejectionReason.INVALID_INPUT


class NotFound(StationError):
    """Unknown user/vehicle/booking/station id, or vehicle not owned by the user."""

    reason = RejectionReason.NOT_FOUND


class NoAvailableDock(StationError):
    """Dock search yielded no candidate."""

    reason = RejectionReason.NO_AVAILABLE_DOCK


class ConsistencyFault(StationError):
    """An active booking references a missing dock or a dock without a source."""

    reason = RejectionReason.CONSISTENCY_FAULT
