"""Tests for engine/ledger.py and engine/docks.py — bookkeeping primitives.

Covers:
  - Sequential 1-based booking ids, capacity limit
  - Half-open overlap: touching endpoints do not conflict
  - Inactive bookings never block a dock
  - Dock pool ordering, occupancy toggling, power draw
"""

from __future__ import annotations

import pytest

from ev_station.config.station import DockSpec, StationConfig
from ev_station.engine.docks import DockPool
from ev_station.engine.ledger import BookingLedger
from ev_station.errors import CapacityExceeded
from ev_station.models.enums import ChargingType, EnergySourceKind, Weather
from ev_station.models.records import Booking


def make_booking(booking_id: int, dock_id: int = 1, start: float = 10.0, duration: float = 2.0) -> Booking:
    return Booking(
        booking_id=booking_id, user_id=1, vehicle_id=10, dock_id=dock_id,
        station_id=1, start_time=start, duration=duration,
        charging_type=ChargingType.SLOW,
    )


# ═══════════════════════════════════════════════════════════════════════════
# Ledger
# ═══════════════════════════════════════════════════════════════════════════

class TestLedgerIds:

    def test_ids_are_sequential(self):
        ledger = BookingLedger(capacity=5)
        assert ledger.next_booking_id == 1
        ledger.append(make_booking(1))
        ledger.append(make_booking(2, dock_id=2))
        assert ledger.next_booking_id == 3
        assert [b.booking_id for b in ledger] == [1, 2]

    def test_out_of_sequence_id_rejected(self):
        ledger = BookingLedger(capacity=5)
        with pytest.raises(ValueError):
            ledger.append(make_booking(2))

    def test_capacity_enforced(self):
        ledger = BookingLedger(capacity=1)
        ledger.append(make_booking(1))
        assert ledger.is_full
        with pytest.raises(CapacityExceeded):
            ledger.append(make_booking(2))

    def test_inactive_bookings_still_count(self):
        ledger = BookingLedger(capacity=1)
        ledger.append(make_booking(1)).active = False
        assert ledger.is_full

    def test_get_and_find_active(self):
        ledger = BookingLedger(capacity=5)
        ledger.append(make_booking(1))
        ledger.append(make_booking(2)).active = False
        assert ledger.get(1).booking_id == 1
        assert ledger.get(0) is None
        assert ledger.get(3) is None
        assert ledger.find_active(1) is not None
        assert ledger.find_active(2) is None
        assert [b.booking_id for b in ledger.active()] == [1]
        assert [b.booking_id for b in ledger.inactive()] == [2]


class TestOverlap:

    @pytest.fixture
    def ledger(self) -> BookingLedger:
        ledger = BookingLedger(capacity=5)
        ledger.append(make_booking(1, dock_id=1, start=10.0, duration=2.0))  # [10, 12)
        return ledger

    @pytest.mark.parametrize(
        "start, duration, expected",
        [
            (8.0, 2.0, False),    # [8, 10) touches start
            (12.0, 1.0, False),   # [12, 13) touches end
            (9.0, 2.0, True),     # straddles start
            (11.5, 3.0, True),    # straddles end
            (10.5, 0.5, True),    # inside
            (9.0, 5.0, True),     # covers
        ],
    )
    def test_half_open_intervals(self, ledger, start, duration, expected):
        assert ledger.has_overlap(1, start, duration) is expected

    def test_other_dock_unaffected(self, ledger):
        assert not ledger.has_overlap(2, 10.0, 2.0)

    def test_inactive_booking_does_not_block(self, ledger):
        ledger.get(1).active = False
        assert not ledger.has_overlap(1, 10.0, 2.0)


# ═══════════════════════════════════════════════════════════════════════════
# Dock pool
# ═══════════════════════════════════════════════════════════════════════════

class TestDockPool:

    def test_iterates_in_ascending_id(self):
        pool = DockPool([
            DockSpec(dock_id=3, power_rating_kw=22),
            DockSpec(dock_id=1, power_rating_kw=7),
            DockSpec(dock_id=2, power_rating_kw=50, source=EnergySourceKind.SOLAR),
        ])
        assert [d.dock_id for d in pool] == [1, 2, 3]
        assert len(pool) == 3

    def test_occupy_and_release(self):
        pool = DockPool(StationConfig().docks)
        dock = pool.get(3)
        dock.occupy(42)
        assert dock.occupied and dock.occupying_vehicle_id == 42
        dock.release()
        assert not dock.occupied and dock.occupying_vehicle_id is None

    def test_unknown_dock(self):
        assert DockPool(StationConfig().docks).get(99) is None

    def test_status_reports_source_name(self):
        pool = DockPool(StationConfig().docks)
        status = pool.get(4).status()
        assert status.source == "Solar"
        assert status.power_rating_kw == 22
        assert not status.occupied

    def test_power_draw_counts_occupied_docks_only(self):
        pool = DockPool(StationConfig().docks)
        pool.get(4).occupy(1)   # 22 kW solar
        pool.get(5).occupy(2)   # 50 kW grid
        assert pool.current_power_draw(Weather.SUNNY) == pytest.approx(72.0)
        assert pool.current_power_draw(Weather.CLOUDY) == pytest.approx(61.0)
        assert pool.current_power_draw(Weather.NIGHT) == pytest.approx(50.0)
