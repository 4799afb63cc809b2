"""Export helpers for API and CLI outputs."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from flight_path_tracker.core.models import Flight, FlightPath, Leg, Passenger, TaggedLeg


def serialize_leg(leg: Leg) -> List[str]:
    return [leg.origin, leg.destination]


def serialize_legs(legs: Sequence[Leg]) -> List[List[str]]:
    return [serialize_leg(leg) for leg in legs]


def serialize_passenger(passenger: Passenger) -> Dict[str, Any]:
    return {"passenger_id": passenger.passenger_id, "name": passenger.name}


def serialize_flight(flight: Flight) -> Dict[str, Any]:
    return {"flight_id": flight.flight_id, "full_path": serialize_legs(flight.full_path)}


def _serialize_tagged_leg(item: TaggedLeg) -> Dict[str, Any]:
    return {"leg": serialize_leg(item.leg), "flight_id": item.flight_id}


def serialize_flight_path(path: FlightPath) -> Dict[str, Any]:
    return {
        "passenger_id": path.passenger_id,
        "full_path": [_serialize_tagged_leg(item) for item in path.full_path],
        "sorted_path": serialize_legs(path.sorted_path),
        "optimized_path": serialize_legs(path.optimized_path),
    }
