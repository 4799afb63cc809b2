"""Passenger, flight and itinerary bookkeeping around path reconstruction."""

from __future__ import annotations

import logging
import secrets
import threading
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from flight_path_tracker.adapters.storage.repositories import InMemoryRepository, ItineraryIndex, Repository
from flight_path_tracker.core.errors import ConflictError, NotFoundError, ValidationError
from flight_path_tracker.core.models import Flight, FlightPath, Leg, Passenger, TaggedLeg
from flight_path_tracker.modules.itinerary.builder import build_flight_path, tag_legs

LOG = logging.getLogger(__name__)

INVALID_PATH_MESSAGE = "Full path must be an array of [src, dest] pairs"

SAMPLE_PASSENGER_NAME = "John Doe"
SAMPLE_FLIGHT_PATHS = (
    (("SFO", "ATL"), ("ATL", "EWR")),
    (("LAX", "ORD"), ("ORD", "JFK")),
)


def generate_id() -> str:
    return secrets.token_hex(4)


def normalize_legs(full_path: Optional[Iterable[Sequence[str]]]) -> Tuple[Leg, ...]:
    if not isinstance(full_path, (list, tuple)):
        raise ValidationError(INVALID_PATH_MESSAGE)
    legs = []
    for raw in full_path:
        if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence) or len(raw) != 2:
            raise ValidationError(INVALID_PATH_MESSAGE)
        origin, destination = raw
        if not isinstance(origin, str) or not isinstance(destination, str):
            raise ValidationError(INVALID_PATH_MESSAGE)
        legs.append(Leg(origin, destination))
    return tuple(legs)


class FlightTracker:
    def __init__(
        self,
        passengers: Optional[Repository[Passenger]] = None,
        flights: Optional[Repository[Flight]] = None,
        itineraries: Optional[ItineraryIndex] = None,
        id_factory: Callable[[], str] = generate_id,
    ) -> None:
        self.passengers = passengers if passengers is not None else InMemoryRepository()
        self.flights = flights if flights is not None else InMemoryRepository()
        self.itineraries = itineraries if itineraries is not None else ItineraryIndex()
        self._id_factory = id_factory
        self._lock = threading.RLock()

    def _new_id(self, repository: Repository) -> str:
        while True:
            candidate = self._id_factory()
            if candidate not in repository:
                return candidate

    def add_passenger(self, name: Optional[str]) -> Passenger:
        if not name:
            raise ValidationError("Name is required")
        with self._lock:
            if any(passenger.name == name for passenger in self.passengers.list()):
                raise ConflictError("Passenger with this name already exists")
            passenger = Passenger(passenger_id=self._new_id(self.passengers), name=name)
            self.passengers.put(passenger.passenger_id, passenger)
        LOG.info("Added passenger %s", passenger.passenger_id)
        return passenger

    def add_flight(self, full_path: Optional[Iterable[Sequence[str]]]) -> Flight:
        legs = normalize_legs(full_path)
        with self._lock:
            if any(flight.full_path == legs for flight in self.flights.list()):
                raise ConflictError("Flight with this path already exists")
            flight = Flight(flight_id=self._new_id(self.flights), full_path=legs)
            self.flights.put(flight.flight_id, flight)
        LOG.info("Added flight %s with %d legs", flight.flight_id, len(legs))
        return flight

    def assign_flight(self, passenger_id: Optional[str], flight_id: Optional[str]) -> List[str]:
        with self._lock:
            if not passenger_id or not flight_id:
                raise ValidationError("Invalid passenger or flight ID")
            if passenger_id not in self.passengers or flight_id not in self.flights:
                raise ValidationError("Invalid passenger or flight ID")
            assigned = self.itineraries.assign(passenger_id, flight_id)
        LOG.info("Assigned flight %s to passenger %s", flight_id, passenger_id)
        return assigned

    def get_passenger(self, passenger_id: str) -> Passenger:
        passenger = self.passengers.get(passenger_id)
        if passenger is None:
            raise NotFoundError("Passenger not found")
        return passenger

    def search_passengers(self, name: str) -> List[Passenger]:
        needle = name.lower()
        matches = [passenger for passenger in self.passengers.list() if passenger.name.lower() == needle]
        if not matches:
            raise NotFoundError("No passengers found")
        return matches

    def get_flight(self, flight_id: str) -> Flight:
        flight = self.flights.get(flight_id)
        if flight is None:
            raise NotFoundError("Flight not found")
        return flight

    def _assigned_flights(self, passenger_id: str) -> List[Flight]:
        self.get_passenger(passenger_id)
        return [self.get_flight(flight_id) for flight_id in self.itineraries.flights_for(passenger_id)]

    def gather_legs(self, passenger_id: str) -> List[TaggedLeg]:
        with self._lock:
            return tag_legs(self._assigned_flights(passenger_id))

    def calculate(self, passenger_id: str) -> FlightPath:
        with self._lock:
            flights = self._assigned_flights(passenger_id)
        return build_flight_path(passenger_id, flights)

    def delete_passenger(self, passenger_id: str) -> None:
        with self._lock:
            if self.itineraries.has_flights(passenger_id):
                raise ConflictError("Cannot delete passenger with active flights")
            if not self.passengers.delete(passenger_id):
                raise NotFoundError("Passenger not found")
        LOG.info("Deleted passenger %s", passenger_id)

    def delete_flight(self, flight_id: str) -> None:
        with self._lock:
            if self.itineraries.references(flight_id):
                raise ConflictError("Cannot delete flight with active passengers")
            if not self.flights.delete(flight_id):
                raise NotFoundError("Flight not found")
        LOG.info("Deleted flight %s", flight_id)

    def seed_sample_data(self) -> Passenger:
        passenger = self.add_passenger(SAMPLE_PASSENGER_NAME)
        flights = [self.add_flight(path) for path in SAMPLE_FLIGHT_PATHS]
        self.assign_flight(passenger.passenger_id, flights[0].flight_id)
        return passenger
