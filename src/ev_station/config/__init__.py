"""Configuration models — all station inputs."""

from ev_station.config.station import DockSpec, StationConfig
from ev_station.config.tariff import TariffConfig
from ev_station.config.schedule import PeakWindow
from ev_station.config.network import NetworkConfig, load_network_config

__all__ = [
    "DockSpec",
    "StationConfig",
    "TariffConfig",
    "PeakWindow",
    "NetworkConfig",
    "load_network_config",
]
