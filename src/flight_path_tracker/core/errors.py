"""Custom exceptions for the flight path tracker."""

class FlightPathTrackerError(Exception):
    """Base error for tracker failures."""


class ValidationError(FlightPathTrackerError):
    """Raised when inputs are invalid or incomplete."""


class NotFoundError(FlightPathTrackerError):
    """Raised when a passenger or flight does not exist."""


class ConflictError(FlightPathTrackerError):
    """Raised when a write would break a uniqueness or reference rule."""


class AuthError(FlightPathTrackerError):
    """Raised when a caller cannot be authenticated."""

    def __init__(self, message: str, *, missing: bool = False) -> None:
        super().__init__(message)
        self.missing = missing


class ReconstructionError(FlightPathTrackerError):
    """Raised when no path can be reconstructed from a set of legs."""
