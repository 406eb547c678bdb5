"""Charging network — independent stations sharing one weather signal."""

from __future__ import annotations

import logging

from ev_station.config.network import NetworkConfig
from ev_station.engine.energy import WeatherSignal
from ev_station.engine.station import ChargingStation
from ev_station.errors import NotFound
from ev_station.models.enums import Weather

logger = logging.getLogger(__name__)


class ChargingNetwork:
    """Stations with ids ``1..num_stations``.  No cross-station locking."""

    def __init__(self, config: NetworkConfig | None = None) -> None:
        self.config = config or NetworkConfig()
        self.weather = WeatherSignal(self.config.initial_weather)
        self._stations = {
            sid: ChargingStation(sid, self.config, weather=self.weather)
            for sid in range(1, self.config.num_stations + 1)
        }

    def __len__(self) -> int:
        return len(self._stations)

    @property
    def stations(self) -> list[ChargingStation]:
        return list(self._stations.values())

    def station(self, station_id: int) -> ChargingStation:
        try:
            return self._stations[station_id]
        except KeyError:
            raise NotFound(
                f"Invalid station ID {station_id} (expected 1-{len(self._stations)})"
            ) from None

    def set_weather(self, weather: Weather | str) -> Weather:
        """Change the weather for every station; applies from the next power computation."""
        current = self.weather.set(weather)
        logger.info("Weather condition updated: %s", current.value)
        return current
