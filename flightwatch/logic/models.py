"""Flight records and derived per-cycle values."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

ON_TIME = "ON_TIME"
DELAYED = "DELAYED"
CANCELLED = "CANCELLED"
EN_ROUTE = "EN_ROUTE"
LANDED = "LANDED"
UNKNOWN = "UNKNOWN"

STATUS_LABELS = {
    ON_TIME: "On Time",
    DELAYED: "Delayed",
    CANCELLED: "Cancelled",
    EN_ROUTE: "En Route",
    LANDED: "Landed",
    UNKNOWN: "Unknown",
}


@dataclass(frozen=True)
class FlightCandidate:
    """One flight record returned by the provider for a flight number."""

    flight_number: str
    status: str = UNKNOWN
    origin: str | None = None
    destination: str | None = None
    scheduled_departure: datetime | None = None
    estimated_departure: datetime | None = None
    actual_departure: datetime | None = None
    scheduled_arrival: datetime | None = None
    estimated_arrival: datetime | None = None
    actual_arrival: datetime | None = None

    def departure_time(self) -> datetime | None:
        """Best known departure instant: actual, then estimated, then scheduled."""
        return self.actual_departure or self.estimated_departure or self.scheduled_departure

    def arrival_time(self) -> datetime | None:
        """Best known arrival instant: actual, then estimated, then scheduled."""
        return self.actual_arrival or self.estimated_arrival or self.scheduled_arrival


@dataclass(frozen=True)
class SelectedFlight:
    """Candidate chosen for display in one polling cycle."""

    candidate: FlightCandidate
    selected_at: datetime


@dataclass(frozen=True)
class ProgressSnapshot:
    """Elapsed fraction and time remaining for the selected flight."""

    fraction: float
    minutes_to_arrival: int | None
    arrival_time: datetime | None


__all__ = [
    "ON_TIME",
    "DELAYED",
    "CANCELLED",
    "EN_ROUTE",
    "LANDED",
    "UNKNOWN",
    "STATUS_LABELS",
    "FlightCandidate",
    "SelectedFlight",
    "ProgressSnapshot",
]
