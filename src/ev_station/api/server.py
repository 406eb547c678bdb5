"""FastAPI server — HTTP access to a charging network.

Run with:
    uvicorn ev_station.api.server:app --reload --port 8000

Or:
    python -m ev_station.api.server

Endpoints:
    GET  /health                                  — liveness
    GET  /config/defaults                         — default NetworkConfig as JSON
    PUT  /weather                                 — change the shared weather signal
    POST /stations/{sid}/users                    — register a user
    POST /stations/{sid}/vehicles                 — register a vehicle
    POST /stations/{sid}/bookings                 — admit a booking (optionally defer on no dock)
    POST /stations/{sid}/bookings/{bid}/complete  — settle → invoice
    POST /stations/{sid}/bookings/{bid}/cancel    — cancel → penalty
    GET  /stations/{sid}/queue                    — deferred requests in order
    POST /stations/{sid}/queue                    — enqueue a deferred request
    POST /stations/{sid}/queue/drain              — re-attempt queued requests
    GET  /stations/{sid}/docks                    — dock status + current power draw
    GET  /stations/{sid}/report                   — analytics report
    GET  /stations/{sid}/realtime                 — progress of active bookings
    GET  /stations/{sid}/users/{uid}/bookings     — a user's bookings
    POST /stations/{sid}/vehicles/{vid}/discharge — V2G discharge
    GET  /stations/{sid}/notifications            — notifications sent so far
"""

from __future__ import annotations

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ev_station import __version__, setup_logging
from ev_station.config.network import NetworkConfig
from ev_station.engine.network import ChargingNetwork
from ev_station.engine.notifications import NotificationOutbox
from ev_station.errors import (
    CapacityExceeded,
    ConsistencyFault,
    InvalidInput,
    NoAvailableDock,
    NotFound,
    StationError,
)
from ev_station.models.enums import ChargingType, Weather
from ev_station.models.records import (
    Booking,
    DeferredBookingRequest,
    Notification,
    UserRecord,
    VehicleRecord,
)
from ev_station.models.results import (
    AdmissionResult,
    CancellationResult,
    DockStatus,
    Invoice,
    RealTimeEntry,
    StationReport,
)

_STATUS_BY_ERROR: dict[type[StationError], int] = {
    NotFound: 404,
    InvalidInput: 422,
    CapacityExceeded: 409,
    NoAvailableDock: 409,
    ConsistencyFault: 500,
}


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class RegisterUserRequest(BaseModel):
    user_id: int
    name: str = ""
    membership_level: int = Field(default=0, description="0 = regular, 1 = premium; anything else → 0")


class RegisterVehicleRequest(BaseModel):
    vehicle_id: int
    user_id: int
    battery_soc: float = Field(description="State of charge (%), clamped to [0, 100]")
    battery_capacity_kwh: float = Field(description="Capacity (kWh), floored at 0")
    supports_v2g: bool = False


class BookingRequest(BaseModel):
    user_id: int
    vehicle_id: int
    start_time: float = Field(description="Start hour in [0, 24)")
    duration: float = Field(description="Hours, > 0")
    charging_type: int = Field(description="1 Slow 7kW, 2 Medium 22kW, 3 Fast 50kW, 4 Solar 7kW")
    power_rating: float | None = Field(
        default=None,
        description="Requested kW; defaults to the charging type's rating.",
    )
    defer_on_failure: bool = Field(
        default=False,
        description="Enqueue the request in the deferred queue when no dock is available.",
    )


class BookingResponse(BaseModel):
    result: AdmissionResult
    queued: bool = False
    queue_length: int = 0


class WeatherRequest(BaseModel):
    weather: Weather


class DischargeRequest(BaseModel):
    energy_kwh: float = Field(ge=0)


class DischargeResponse(BaseModel):
    vehicle_id: int
    discharged_kwh: float


class DockStatusResponse(BaseModel):
    docks: list[DockStatus]
    current_power_draw_kw: float
    weather: Weather


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _power_for(charging_type: int, power_rating: float | None) -> float:
    if power_rating is not None:
        return power_rating
    try:
        return float(ChargingType(charging_type).power_kw)
    except ValueError:
        # Unknown type; admission rejects it before the power is looked at.
        return 0.0


# ═══════════════════════════════════════════════════════════════════════════
# App factory
# ═══════════════════════════════════════════════════════════════════════════

def create_app(config: NetworkConfig | None = None) -> FastAPI:
    """Build an app around a fresh in-memory network."""
    network = ChargingNetwork(config)

    app = FastAPI(
        title="EV Charging Station Booking API",
        version=__version__,
        description=(
            "Dock allocation, peak-hour deferral, FIFO requeueing and settlement "
            "for a small network of EV charging stations."
        ),
    )
    app.state.network = network
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StationError)
    async def station_error_handler(request: Request, exc: StationError) -> JSONResponse:
        return JSONResponse(
            status_code=_STATUS_BY_ERROR.get(type(exc), 400),
            content={"reason": exc.reason.value, "detail": exc.message},
        )

    # ── Network-wide ───────────────────────────────────────────────────

    @app.get("/health")
    def health_check():
        return {"status": "ok", "stations": len(network)}

    @app.get("/config/defaults")
    def get_defaults():
        """Complete default NetworkConfig as JSON."""
        return NetworkConfig().model_dump(mode="json")

    @app.put("/weather")
    def set_weather(req: WeatherRequest):
        return {"weather": network.set_weather(req.weather).value}

    # ── Registration ───────────────────────────────────────────────────

    @app.post("/stations/{station_id}/users", response_model=UserRecord)
    def register_user(station_id: int, req: RegisterUserRequest):
        station = network.station(station_id)
        return station.users.register(req.user_id, req.name, req.membership_level)

    @app.post("/stations/{station_id}/vehicles", response_model=VehicleRecord)
    def register_vehicle(station_id: int, req: RegisterVehicleRequest):
        station = network.station(station_id)
        return station.vehicles.register(
            req.vehicle_id, req.user_id, req.battery_soc,
            req.battery_capacity_kwh, req.supports_v2g,
        )

    # ── Bookings ───────────────────────────────────────────────────────

    @app.post("/stations/{station_id}/bookings", response_model=BookingResponse)
    def create_booking(station_id: int, req: BookingRequest):
        """Admit a booking.

        Rejections come back with ``result.admitted = false`` and a reason.
        With ``defer_on_failure`` a ``no_available_dock`` rejection is queued.
        """
        station = network.station(station_id)
        power = _power_for(req.charging_type, req.power_rating)
        args = (req.user_id, req.vehicle_id, req.start_time, req.duration, power, req.charging_type)
        if req.defer_on_failure:
            result, queued, queue_length = station.book_or_defer(*args)
        else:
            result, queued, queue_length = station.try_book(*args), False, len(station.queued())
        return BookingResponse(result=result, queued=queued, queue_length=queue_length)

    @app.post("/stations/{station_id}/bookings/{booking_id}/complete", response_model=Invoice)
    def complete_booking(station_id: int, booking_id: int):
        return network.station(station_id).complete(booking_id)

    @app.post("/stations/{station_id}/bookings/{booking_id}/cancel", response_model=CancellationResult)
    def cancel_booking(station_id: int, booking_id: int):
        return network.station(station_id).cancel(booking_id)

    @app.get("/stations/{station_id}/users/{user_id}/bookings", response_model=list[Booking])
    def user_bookings(station_id: int, user_id: int):
        return network.station(station_id).user_bookings(user_id)

    # ── Deferred queue ─────────────────────────────────────────────────

    @app.get("/stations/{station_id}/queue", response_model=list[DeferredBookingRequest])
    def get_queue(station_id: int):
        return network.station(station_id).queued()

    @app.post("/stations/{station_id}/queue")
    def enqueue(station_id: int, req: DeferredBookingRequest):
        return {"queue_length": network.station(station_id).enqueue(req)}

    @app.post("/stations/{station_id}/queue/drain", response_model=list[AdmissionResult])
    def drain_queue(station_id: int):
        return network.station(station_id).drain_queue()

    # ── Views ──────────────────────────────────────────────────────────

    @app.get("/stations/{station_id}/docks", response_model=DockStatusResponse)
    def dock_status(station_id: int):
        station = network.station(station_id)
        return DockStatusResponse(
            docks=station.dock_status(),
            current_power_draw_kw=station.current_power_draw(),
            weather=network.weather.current,
        )

    @app.get("/stations/{station_id}/report", response_model=StationReport)
    def report(station_id: int):
        return network.station(station_id).report()

    @app.get("/stations/{station_id}/realtime", response_model=list[RealTimeEntry])
    def real_time(
        station_id: int,
        at_time: float | None = Query(default=None, description="Clock hour; default baseline + offset"),
    ):
        return network.station(station_id).real_time_data(at_time)

    @app.post("/stations/{station_id}/vehicles/{vehicle_id}/discharge", response_model=DischargeResponse)
    def discharge(station_id: int, vehicle_id: int, req: DischargeRequest):
        discharged = network.station(station_id).discharge_to_grid(vehicle_id, req.energy_kwh)
        return DischargeResponse(vehicle_id=vehicle_id, discharged_kwh=discharged)

    @app.get("/stations/{station_id}/notifications", response_model=list[Notification])
    def notifications(station_id: int, user_id: int | None = None):
        sink = network.station(station_id).notifier
        if not isinstance(sink, NotificationOutbox):
            return []
        return sink.messages if user_id is None else sink.for_user(user_id)

    return app


app = create_app()


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    setup_logging()
    uvicorn.run(
        "ev_station.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
