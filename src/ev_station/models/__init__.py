"""Record and result models."""

from ev_station.models.enums import (
    ChargingType,
    EnergySourceKind,
    RejectionReason,
    Weather,
)
from ev_station.models.records import (
    Booking,
    DeferredBookingRequest,
    Notification,
    UserRecord,
    VehicleRecord,
)
from ev_station.models.results import (
    AdmissionResult,
    CancellationResult,
    DockStatus,
    Invoice,
    RealTimeEntry,
    StationReport,
)

__all__ = [
    "ChargingType",
    "EnergySourceKind",
    "RejectionReason",
    "Weather",
    "Booking",
    "DeferredBookingRequest",
    "Notification",
    "UserRecord",
    "VehicleRecord",
    "AdmissionResult",
    "CancellationResult",
    "DockStatus",
    "Invoice",
    "RealTimeEntry",
    "StationReport",
]
