"""Conversion of AeroAPI flight payloads into FlightCandidate records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from flightwatch.logic.models import (
    CANCELLED,
    DELAYED,
    EN_ROUTE,
    LANDED,
    ON_TIME,
    UNKNOWN,
    FlightCandidate,
)

_TIME_FIELDS = (
    "scheduled_off",
    "estimated_off",
    "actual_off",
    "scheduled_on",
    "estimated_on",
    "actual_on",
)


def parse_time(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp into an aware UTC datetime."""
    if not value:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Timestamp must be a string, got {type(value).__name__}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _airport_code(airport: Any) -> str | None:
    if not isinstance(airport, dict):
        return None
    return airport.get("code_iata") or airport.get("code_icao") or airport.get("code")


def determine_status(flight: dict[str, Any]) -> str:
    """Derive the status tag for a raw AeroAPI flight record."""
    if flight.get("cancelled"):
        return CANCELLED
    if flight.get("actual_on"):
        return LANDED
    if flight.get("actual_off"):
        return EN_ROUTE

    departure_delay = flight.get("departure_delay")
    arrival_delay = flight.get("arrival_delay")
    if isinstance(departure_delay, (int, float)) and departure_delay > 0:
        return DELAYED
    if isinstance(arrival_delay, (int, float)) and arrival_delay > 0:
        return DELAYED

    if not any(flight.get(field) for field in _TIME_FIELDS):
        return UNKNOWN
    return ON_TIME


def candidate_from_flight(flight: dict[str, Any]) -> FlightCandidate:
    """Build a FlightCandidate from one AeroAPI flight record."""
    if not isinstance(flight, dict):
        raise ValueError("Flight record must be a mapping")
    return FlightCandidate(
        flight_number=str(flight.get("ident") or flight.get("ident_iata") or ""),
        status=determine_status(flight),
        origin=_airport_code(flight.get("origin")),
        destination=_airport_code(flight.get("destination")),
        scheduled_departure=parse_time(flight.get("scheduled_off")),
        estimated_departure=parse_time(flight.get("estimated_off")),
        actual_departure=parse_time(flight.get("actual_off")),
        scheduled_arrival=parse_time(flight.get("scheduled_on")),
        estimated_arrival=parse_time(flight.get("estimated_on")),
        actual_arrival=parse_time(flight.get("actual_on")),
    )


def candidates_from_payload(payload: dict[str, Any]) -> list[FlightCandidate]:
    """Convert an AeroAPI ``{"flights": [...]}`` payload, preserving provider order."""
    flights = payload.get("flights", []) or []
    if not isinstance(flights, list):
        raise ValueError("'flights' must be a list")
    return [candidate_from_flight(flight) for flight in flights]


__all__ = [
    "parse_time",
    "determine_status",
    "candidate_from_flight",
    "candidates_from_payload",
]
