"""Flight path builder for a passenger's assigned flights."""

from __future__ import annotations

from typing import Iterable, List

from flight_path_tracker.core.models import Flight, FlightPath, TaggedLeg
from flight_path_tracker.modules.itinerary.chaining import reconstruct_path, summarize_path


def tag_legs(flights: Iterable[Flight]) -> List[TaggedLeg]:
    return [TaggedLeg(leg=leg, flight_id=flight.flight_id) for flight in flights for leg in flight.full_path]


def build_flight_path(passenger_id: str, flights: Iterable[Flight]) -> FlightPath:
    tagged = tag_legs(flights)
    sorted_path = reconstruct_path([item.leg for item in tagged])
    summary = summarize_path(sorted_path)
    return FlightPath(
        passenger_id=passenger_id,
        full_path=tagged,
        sorted_path=sorted_path,
        optimized_path=[summary],
    )
