"""FastAPI entrypoint for the Flight Path Tracker API."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Request

from flight_path_tracker.adapters.io.exports import serialize_flight, serialize_flight_path, serialize_passenger
from flight_path_tracker.api.auth import TokenIssuer
from flight_path_tracker.api.schemas import FlightPayload, PassengerFlightPayload, PassengerPayload, TokenPayload
from flight_path_tracker.core.config import Settings, load_settings
from flight_path_tracker.core.errors import (
    AuthError,
    ConflictError,
    FlightPathTrackerError,
    NotFoundError,
    ReconstructionError,
    ValidationError,
)
from flight_path_tracker.services.tracker import FlightTracker

LOG = logging.getLogger(__name__)


def _http_error(exc: FlightPathTrackerError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, (ValidationError, ConflictError)):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, AuthError):
        return HTTPException(status_code=403 if exc.missing else 401, detail=str(exc))
    if isinstance(exc, ReconstructionError):
        return HTTPException(status_code=422, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def get_tracker(request: Request) -> FlightTracker:
    return request.app.state.tracker


def get_issuer(request: Request) -> TokenIssuer:
    return request.app.state.issuer


def require_caller(
    authorization: Optional[str] = Header(None),
    issuer: TokenIssuer = Depends(get_issuer),
) -> str:
    try:
        return issuer.verify_caller(authorization)
    except AuthError as exc:
        raise _http_error(exc) from exc


public = APIRouter(prefix="/v1")
router = APIRouter(prefix="/v1", dependencies=[Depends(require_caller)])


@public.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@public.post("/token")
def create_token(payload: TokenPayload, issuer: TokenIssuer = Depends(get_issuer)) -> Dict[str, str]:
    try:
        token = issuer.issue(payload.username, payload.password)
    except AuthError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"token": token}


@router.post("/add_passenger")
def add_passenger(payload: PassengerPayload, tracker: FlightTracker = Depends(get_tracker)) -> Dict[str, object]:
    try:
        passenger = tracker.add_passenger(payload.name)
    except FlightPathTrackerError as exc:
        raise _http_error(exc) from exc
    return serialize_passenger(passenger)


@router.post("/add_flight")
def add_flight(payload: FlightPayload, tracker: FlightTracker = Depends(get_tracker)) -> Dict[str, object]:
    try:
        flight = tracker.add_flight(payload.full_path)
    except FlightPathTrackerError as exc:
        raise _http_error(exc) from exc
    return serialize_flight(flight)


@router.post("/add_passenger_flight")
def add_passenger_flight(
    payload: PassengerFlightPayload,
    tracker: FlightTracker = Depends(get_tracker),
) -> Dict[str, str]:
    try:
        tracker.assign_flight(payload.passenger_id, payload.flight_id)
    except FlightPathTrackerError as exc:
        raise _http_error(exc) from exc
    return {"message": "Flight added to passenger successfully"}


@router.get("/passenger/search/{name}")
def search_passengers(name: str, tracker: FlightTracker = Depends(get_tracker)) -> List[Dict[str, object]]:
    try:
        matches = tracker.search_passengers(name)
    except FlightPathTrackerError as exc:
        raise _http_error(exc) from exc
    return [serialize_passenger(passenger) for passenger in matches]


@router.get("/passenger/{passenger_id}")
def get_passenger(passenger_id: str, tracker: FlightTracker = Depends(get_tracker)) -> Dict[str, object]:
    try:
        return serialize_passenger(tracker.get_passenger(passenger_id))
    except FlightPathTrackerError as exc:
        raise _http_error(exc) from exc


@router.get("/flight/{flight_id}")
def get_flight(flight_id: str, tracker: FlightTracker = Depends(get_tracker)) -> Dict[str, object]:
    try:
        return serialize_flight(tracker.get_flight(flight_id))
    except FlightPathTrackerError as exc:
        raise _http_error(exc) from exc


@router.get("/calculate/{passenger_id}")
def calculate(passenger_id: str, tracker: FlightTracker = Depends(get_tracker)) -> Dict[str, object]:
    try:
        path = tracker.calculate(passenger_id)
    except FlightPathTrackerError as exc:
        raise _http_error(exc) from exc
    return serialize_flight_path(path)


@router.delete("/delete_passenger/{passenger_id}")
def delete_passenger(passenger_id: str, tracker: FlightTracker = Depends(get_tracker)) -> Dict[str, str]:
    try:
        tracker.delete_passenger(passenger_id)
    except FlightPathTrackerError as exc:
        raise _http_error(exc) from exc
    return {"message": "Passenger deleted successfully"}


@router.delete("/delete_flight/{flight_id}")
def delete_flight(flight_id: str, tracker: FlightTracker = Depends(get_tracker)) -> Dict[str, str]:
    try:
        tracker.delete_flight(flight_id)
    except FlightPathTrackerError as exc:
        raise _http_error(exc) from exc
    return {"message": "Flight deleted successfully"}


def create_app(settings: Optional[Settings] = None, tracker: Optional[FlightTracker] = None) -> FastAPI:
    settings = settings or load_settings()
    if tracker is None:
        tracker = FlightTracker()
        if settings.seed_sample_data:
            passenger = tracker.seed_sample_data()
            LOG.info("Seeded sample passenger %s", passenger.passenger_id)

    application = FastAPI(
        title="Flight Path Tracker API",
        version="1.0.0",
        description="API to track flight paths for passengers",
        docs_url="/swagger",
    )
    application.state.settings = settings
    application.state.tracker = tracker
    application.state.issuer = TokenIssuer(settings)
    application.include_router(public)
    application.include_router(router)
    return application


app = create_app()
