"""Top-level network config — bundles every station input, loadable from YAML."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from ev_station.config.schedule import PeakWindow
from ev_station.config.station import StationConfig
from ev_station.config.tariff import TariffConfig
from ev_station.models.enums import Weather


class NetworkConfig(BaseModel):
    """Complete input bundle for one charging network."""

    num_stations: int = Field(default=3, ge=1, le=3, description="Independent stations, ids 1..N")
    station: StationConfig = Field(default_factory=StationConfig)
    tariff: TariffConfig = Field(default_factory=TariffConfig)
    peak: PeakWindow = Field(default_factory=PeakWindow)
    initial_weather: Weather = Field(default=Weather.SUNNY)


def load_network_config(path: str | Path) -> NetworkConfig:
    """Load a ``NetworkConfig`` from a YAML file; missing sections use defaults."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return NetworkConfig(**data)
