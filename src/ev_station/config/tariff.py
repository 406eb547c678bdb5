"""Tariffs, discounts and cancellation penalties ($)."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from ev_station.models.enums import ChargingType


class TariffConfig(BaseModel):
    """Per-kWh base rates and the multiplicative adjustments applied on settlement."""

    slow_rate_per_kwh: float = Field(default=0.20, ge=0, description="Charging type 1")
    medium_rate_per_kwh: float = Field(default=0.30, ge=0, description="Charging type 2")
    fast_rate_per_kwh: float = Field(default=0.40, ge=0, description="Charging type 3")
    solar_rate_per_kwh: float = Field(default=0.15, ge=0, description="Charging type 4")
    solar_discount_pct: float = Field(default=0.15, ge=0, le=1.0, description="Extra discount on solar-type rate")
    peak_surcharge_pct: float = Field(default=0.20, ge=0, description="Surcharge when stored start is in the peak window")
    premium_discount_pct: float = Field(default=0.15, ge=0, le=1.0, description="Discount on final cost for premium members")

    # --- Cancellation penalty tiers ---
    late_cancel_window_hours: float = Field(default=1.0, ge=0, description="time-to-start below this → late penalty")
    late_cancel_penalty: float = Field(default=5.0, ge=0)
    short_notice_window_hours: float = Field(default=4.0, ge=0, description="time-to-start below this → short-notice penalty")
    short_notice_penalty: float = Field(default=2.0, ge=0)

    @model_validator(mode="after")
    def _ordered_windows(self) -> TariffConfig:
        if self.short_notice_window_hours < self.late_cancel_window_hours:
            raise ValueError("short_notice_window_hours must be >= late_cancel_window_hours")
        return self

    def base_rate(self, charging_type: ChargingType) -> float:
        return {
            ChargingType.SLOW: self.slow_rate_per_kwh,
            ChargingType.MEDIUM: self.medium_rate_per_kwh,
            ChargingType.FAST: self.fast_rate_per_kwh,
            ChargingType.SOLAR: self.solar_rate_per_kwh,
        }[charging_type]
