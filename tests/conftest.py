"""Shared test fixtures — a default network config and a populated station."""

from __future__ import annotations

import pytest

from ev_station.config import NetworkConfig, StationConfig
from ev_station.engine.station import ChargingStation

REGULAR_USER = 1
PREMIUM_USER = 2

HEALTHY_EV = 10      # user 1, SOC 50 %, 60 kWh
LOW_SOC_EV = 11      # user 1, SOC 10 %, 40 kWh
V2G_LOW_EV = 12      # user 1, SOC 10 %, 50 kWh, V2G
PREMIUM_EV = 20      # user 2, SOC 80 %, 75 kWh, V2G


@pytest.fixture
def config() -> NetworkConfig:
    return NetworkConfig()


def populate(station: ChargingStation) -> ChargingStation:
    station.users.register(REGULAR_USER, "Regular Rita", membership_level=0)
    station.users.register(PREMIUM_USER, "Premium Pat", membership_level=1)
    station.vehicles.register(HEALTHY_EV, REGULAR_USER, 50.0, 60.0, False)
    station.vehicles.register(LOW_SOC_EV, REGULAR_USER, 10.0, 40.0, False)
    station.vehicles.register(V2G_LOW_EV, REGULAR_USER, 10.0, 50.0, True)
    station.vehicles.register(PREMIUM_EV, PREMIUM_USER, 80.0, 75.0, True)
    return station


@pytest.fixture
def station(config: NetworkConfig) -> ChargingStation:
    """Station 1 with the default five-dock layout and four registered vehicles."""
    return populate(ChargingStation(1, config))


@pytest.fixture
def roomy_station() -> ChargingStation:
    """Same layout, but with a large ledger for long randomized runs."""
    cfg = NetworkConfig(station=StationConfig(max_bookings=1_000))
    return populate(ChargingStation(1, cfg))
