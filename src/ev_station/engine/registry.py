"""User and vehicle registries.

The station only needs ``lookup`` (and ``update_soc`` for vehicles); the
in-memory registries below add bounded registration on top.
"""

from __future__ import annotations

import logging
from typing import Protocol

from ev_station.errors import CapacityExceeded, InvalidInput, NotFound
from ev_station.models.records import UserRecord, VehicleRecord

logger = logging.getLogger(__name__)


class UserRegistry(Protocol):
    def lookup(self, user_id: int) -> UserRecord | None: ...


class VehicleRegistry(Protocol):
    def lookup(self, vehicle_id: int) -> VehicleRecord | None: ...

    def update_soc(self, vehicle_id: int, soc: float) -> None: ...


class InMemoryUserRegistry:
    """Bounded user pool keyed by user id."""

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._users: dict[int, UserRecord] = {}

    def __len__(self) -> int:
        return len(self._users)

    def register(self, user_id: int, name: str, membership_level: int = 0) -> UserRecord:
        if len(self._users) >= self._capacity:
            raise CapacityExceeded("Maximum user limit reached!")
        if user_id in self._users:
            raise InvalidInput(f"User ID {user_id} already exists!")
        # Unknown membership levels fall back to regular.
        if membership_level not in (0, 1):
            membership_level = 0
        user = UserRecord(user_id=user_id, name=name[:49], membership_level=membership_level)
        self._users[user_id] = user
        logger.info("Registered user %d (level %d)", user_id, membership_level)
        return user

    def lookup(self, user_id: int) -> UserRecord | None:
        return self._users.get(user_id)


class InMemoryVehicleRegistry:
    """Bounded vehicle pool; every vehicle belongs to a registered user."""

    def __init__(self, capacity: int, users: UserRegistry) -> None:
        self._capacity = capacity
        self._users = users
        self._vehicles: dict[int, VehicleRecord] = {}

    def __len__(self) -> int:
        return len(self._vehicles)

    def register(
        self,
        vehicle_id: int,
        owner_user_id: int,
        battery_soc: float,
        battery_capacity_kwh: float,
        supports_v2g: bool = False,
    ) -> VehicleRecord:
        if len(self._vehicles) >= self._capacity:
            raise CapacityExceeded("Maximum vehicle limit reached!")
        owner = self._users.lookup(owner_user_id)
        if owner is None or not owner.is_registered:
            raise NotFound(f"User {owner_user_id} not found!")
        if vehicle_id in self._vehicles:
            raise InvalidInput(f"Vehicle ID {vehicle_id} already exists!")
        vehicle = VehicleRecord(
            vehicle_id=vehicle_id,
            owner_user_id=owner_user_id,
            battery_soc=max(0.0, min(100.0, battery_soc)),
            battery_capacity_kwh=max(0.0, battery_capacity_kwh),
            supports_v2g=supports_v2g,
        )
        self._vehicles[vehicle_id] = vehicle
        logger.info("Registered vehicle %d for user %d", vehicle_id, owner_user_id)
        return vehicle

    def lookup(self, vehicle_id: int) -> VehicleRecord | None:
        return self._vehicles.get(vehicle_id)

    def update_soc(self, vehicle_id: int, soc: float) -> None:
        vehicle = self._vehicles.get(vehicle_id)
        if vehicle is None:
            raise NotFound(f"Vehicle {vehicle_id} not found")
        vehicle.battery_soc = max(0.0, min(100.0, soc))
