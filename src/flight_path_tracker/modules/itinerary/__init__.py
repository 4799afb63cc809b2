"""Itinerary module."""

from flight_path_tracker.modules.itinerary.builder import build_flight_path, tag_legs
from flight_path_tracker.modules.itinerary.chaining import reconstruct_path, summarize_path

__all__ = ["build_flight_path", "reconstruct_path", "summarize_path", "tag_legs"]
