"""Peak-hour window on a 24-hour clock."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class PeakWindow(BaseModel):
    """Half-open hour interval ``[start, end)`` where non-critical demand is deferred."""

    start: float = Field(default=12.0, ge=0, lt=24.0)
    end: float = Field(default=18.0, gt=0, le=24.0)

    @model_validator(mode="after")
    def _end_after_start(self) -> PeakWindow:
        if self.end <= self.start:
            raise ValueError(f"Peak end ({self.end}) must be after start ({self.start})")
        return self

    def contains(self, hour: float) -> bool:
        return self.start <= hour < self.end
