"""Tests for vehicle-to-grid discharge (engine/v2g.py + ChargingStation.discharge_to_grid)."""

from __future__ import annotations

import pytest

from ev_station.engine.v2g import discharge_amount
from ev_station.errors import InvalidInput, NotFound
from ev_station.models.records import VehicleRecord

from conftest import HEALTHY_EV, PREMIUM_EV, V2G_LOW_EV


class TestDischargeAmount:

    def test_non_v2g_discharges_nothing(self):
        v = VehicleRecord(vehicle_id=1, owner_user_id=1, battery_soc=90, battery_capacity_kwh=60)
        assert discharge_amount(v, 10.0) == (0.0, 90.0)

    def test_capped_at_stored_energy(self):
        v = VehicleRecord(vehicle_id=1, owner_user_id=1, battery_soc=10,
                          battery_capacity_kwh=50, supports_v2g=True)
        discharged, soc = discharge_amount(v, 100.0)
        assert discharged == pytest.approx(5.0)
        assert soc == pytest.approx(0.0)

    def test_partial_discharge(self):
        v = VehicleRecord(vehicle_id=1, owner_user_id=1, battery_soc=80,
                          battery_capacity_kwh=75, supports_v2g=True)
        discharged, soc = discharge_amount(v, 15.0)
        assert discharged == pytest.approx(15.0)
        assert soc == pytest.approx(60.0)

    def test_zero_capacity(self):
        v = VehicleRecord(vehicle_id=1, owner_user_id=1, battery_soc=50,
                          battery_capacity_kwh=0, supports_v2g=True)
        assert discharge_amount(v, 5.0) == (0.0, 50.0)


class TestStationDischarge:

    def test_non_v2g_vehicle(self, station):
        assert station.discharge_to_grid(HEALTHY_EV, 10.0) == 0.0
        assert station.vehicles.lookup(HEALTHY_EV).battery_soc == 50.0

    def test_low_soc_v2g_vehicle_drained_to_zero(self, station):
        assert station.discharge_to_grid(V2G_LOW_EV, 100.0) == pytest.approx(5.0)
        assert station.vehicles.lookup(V2G_LOW_EV).battery_soc == pytest.approx(0.0)

    def test_partial(self, station):
        assert station.discharge_to_grid(PREMIUM_EV, 15.0) == pytest.approx(15.0)
        assert station.vehicles.lookup(PREMIUM_EV).battery_soc == pytest.approx(60.0)

    def test_bookings_untouched(self, station):
        station.discharge_to_grid(PREMIUM_EV, 15.0)
        assert len(station.ledger) == 0
        assert not any(d.occupied for d in station.dock_status())

    def test_unknown_vehicle(self, station):
        with pytest.raises(NotFound):
            station.discharge_to_grid(99, 1.0)

    def test_negative_request(self, station):
        with pytest.raises(InvalidInput):
            station.discharge_to_grid(PREMIUM_EV, -1.0)
