"""Engine — dock allocation, deferral, settlement and reporting."""

from ev_station.engine.energy import SOURCE_PROFILES, SourceProfile, WeatherSignal
from ev_station.engine.docks import Dock, DockPool
from ev_station.engine.ledger import BookingLedger
from ev_station.engine.admission import AdmissionEngine, find_available_dock, is_critical
from ev_station.engine.deferred import DeferredQueue
from ev_station.engine.notifications import NotificationOutbox, NotificationSink
from ev_station.engine.registry import InMemoryUserRegistry, InMemoryVehicleRegistry
from ev_station.engine.station import ChargingStation
from ev_station.engine.network import ChargingNetwork

__all__ = [
    "SOURCE_PROFILES",
    "SourceProfile",
    "WeatherSignal",
    "Dock",
    "DockPool",
    "BookingLedger",
    "AdmissionEngine",
    "find_available_dock",
    "is_critical",
    "DeferredQueue",
    "NotificationOutbox",
    "NotificationSink",
    "InMemoryUserRegistry",
    "InMemoryVehicleRegistry",
    "ChargingStation",
    "ChargingNetwork",
]
