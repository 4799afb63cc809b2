"""Request schemas for the Flight Path Tracker API."""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class TokenPayload(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class PassengerPayload(BaseModel):
    name: Optional[str] = Field(None, examples=["John Doe"])


class FlightPayload(BaseModel):
    full_path: List[Tuple[str, str]] = Field(..., examples=[[["SFO", "ATL"], ["ATL", "EWR"]]])


class PassengerFlightPayload(BaseModel):
    passenger_id: Optional[str] = None
    flight_id: Optional[str] = None
