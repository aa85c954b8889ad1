"""Progress and time-remaining derivation for a single flight."""

from __future__ import annotations

from datetime import datetime

from flightwatch.logic.models import FlightCandidate, ProgressSnapshot


def _minutes_between(start: datetime, end: datetime) -> int:
    return round((end - start).total_seconds() / 60.0)


def compute_progress(flight: FlightCandidate, now: datetime) -> ProgressSnapshot:
    """Compute the elapsed fraction and minutes to arrival at ``now``."""
    departure = flight.departure_time()
    arrival = flight.arrival_time()

    if departure is None or arrival is None:
        minutes = _minutes_between(now, arrival) if arrival is not None else None
        return ProgressSnapshot(fraction=0.0, minutes_to_arrival=minutes, arrival_time=arrival)

    if arrival <= departure:
        fraction = 1.0
    else:
        elapsed = (now - departure).total_seconds()
        total = (arrival - departure).total_seconds()
        fraction = max(0.0, min(1.0, elapsed / total))

    return ProgressSnapshot(
        fraction=fraction,
        minutes_to_arrival=_minutes_between(now, arrival),
        arrival_time=arrival,
    )


__all__ = ["compute_progress"]
