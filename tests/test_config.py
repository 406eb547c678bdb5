"""Pydantic validation tests for config models, plus YAML loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from ev_station.config import (
    DockSpec,
    NetworkConfig,
    PeakWindow,
    StationConfig,
    TariffConfig,
    load_network_config,
)
from ev_station.models.enums import ChargingType, EnergySourceKind, Weather

SCENARIO_PATH = Path(__file__).parent.parent / "scenarios" / "default_network.yaml"


# ═══════════════════════════════════════════════════════════════════════════
# StationConfig / DockSpec
# ═══════════════════════════════════════════════════════════════════════════

class TestStationConfig:

    def test_default_layout(self):
        st = StationConfig()
        layout = [(d.dock_id, d.power_rating_kw, d.source) for d in st.docks]
        assert layout == [
            (1, 7, EnergySourceKind.GRID),
            (2, 7, EnergySourceKind.SOLAR),
            (3, 22, EnergySourceKind.GRID),
            (4, 22, EnergySourceKind.SOLAR),
            (5, 50, EnergySourceKind.GRID),
        ]

    def test_default_limits(self):
        st = StationConfig()
        assert st.max_users == 10
        assert st.max_vehicles == 10
        assert st.max_bookings == 20
        assert st.critical_soc_pct == 20.0

    def test_duplicate_dock_ids_rejected(self):
        with pytest.raises(ValidationError):
            StationConfig(docks=[
                DockSpec(dock_id=1, power_rating_kw=7),
                DockSpec(dock_id=1, power_rating_kw=22),
            ])

    def test_empty_dock_list_rejected(self):
        with pytest.raises(ValidationError):
            StationConfig(docks=[])

    def test_unknown_rating_rejected(self):
        with pytest.raises(ValidationError):
            DockSpec(dock_id=1, power_rating_kw=11)

    def test_unknown_source_rejected(self):
        with pytest.raises(ValidationError):
            DockSpec(dock_id=1, power_rating_kw=7, source="wind")

    def test_zero_dock_id_rejected(self):
        with pytest.raises(ValidationError):
            DockSpec(dock_id=0, power_rating_kw=7)

    def test_zero_booking_capacity_rejected(self):
        with pytest.raises(ValidationError):
            StationConfig(max_bookings=0)


# ═══════════════════════════════════════════════════════════════════════════
# PeakWindow
# ═══════════════════════════════════════════════════════════════════════════

class TestPeakWindow:

    def test_half_open(self):
        peak = PeakWindow()
        assert not peak.contains(11.99)
        assert peak.contains(12.0)
        assert peak.contains(17.99)
        assert not peak.contains(18.0)

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError):
            PeakWindow(start=18.0, end=12.0)

    def test_empty_window_rejected(self):
        with pytest.raises(ValidationError):
            PeakWindow(start=12.0, end=12.0)


# ═══════════════════════════════════════════════════════════════════════════
# TariffConfig
# ═══════════════════════════════════════════════════════════════════════════

class TestTariffConfig:

    @pytest.mark.parametrize(
        "ctype, rate",
        [
            (ChargingType.SLOW, 0.20),
            (ChargingType.MEDIUM, 0.30),
            (ChargingType.FAST, 0.40),
            (ChargingType.SOLAR, 0.15),
        ],
    )
    def test_base_rates(self, ctype: ChargingType, rate: float):
        assert TariffConfig().base_rate(ctype) == pytest.approx(rate)

    def test_negative_rate_rejected(self):
        with pytest.raises(ValidationError):
            TariffConfig(fast_rate_per_kwh=-0.1)

    def test_discount_above_one_rejected(self):
        with pytest.raises(ValidationError):
            TariffConfig(premium_discount_pct=1.5)

    def test_penalty_windows_must_be_ordered(self):
        with pytest.raises(ValidationError):
            TariffConfig(late_cancel_window_hours=5.0, short_notice_window_hours=4.0)


# ═══════════════════════════════════════════════════════════════════════════
# NetworkConfig + YAML
# ═══════════════════════════════════════════════════════════════════════════

class TestNetworkConfig:

    def test_defaults(self):
        cfg = NetworkConfig()
        assert cfg.num_stations == 3
        assert cfg.initial_weather is Weather.SUNNY

    def test_more_than_three_stations_rejected(self):
        with pytest.raises(ValidationError):
            NetworkConfig(num_stations=4)

    def test_zero_stations_rejected(self):
        with pytest.raises(ValidationError):
            NetworkConfig(num_stations=0)

    def test_json_round_trip(self):
        cfg = NetworkConfig(initial_weather=Weather.CLOUDY)
        assert NetworkConfig.model_validate_json(cfg.model_dump_json()) == cfg


class TestYamlLoading:

    def test_bundled_scenario_matches_defaults(self):
        assert load_network_config(SCENARIO_PATH) == NetworkConfig()

    def test_partial_file_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "net.yaml"
        path.write_text("num_stations: 1\ninitial_weather: night\ntariff:\n  fast_rate_per_kwh: 0.5\n")
        cfg = load_network_config(path)
        assert cfg.num_stations == 1
        assert cfg.initial_weather is Weather.NIGHT
        assert cfg.tariff.fast_rate_per_kwh == 0.5
        assert cfg.tariff.slow_rate_per_kwh == 0.20
        assert len(cfg.station.docks) == 5

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_network_config(path) == NetworkConfig()

    def test_invalid_values_rejected(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("peak:\n  start: 18\n  end: 12\n")
        with pytest.raises(ValidationError):
            load_network_config(path)
