"""Shared domain models for the flight path tracker."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple, Tuple


class Leg(NamedTuple):
    origin: str
    destination: str


@dataclass(frozen=True)
class Passenger:
    passenger_id: str
    name: str


@dataclass(frozen=True)
class Flight:
    flight_id: str
    full_path: Tuple[Leg, ...]


@dataclass(frozen=True)
class TaggedLeg:
    leg: Leg
    flight_id: str


@dataclass
class FlightPath:
    passenger_id: str
    full_path: List[TaggedLeg] = field(default_factory=list)
    sorted_path: List[Leg] = field(default_factory=list)
    optimized_path: List[Leg] = field(default_factory=list)
