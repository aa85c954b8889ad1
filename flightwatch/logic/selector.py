"""Pick the most relevant flight when a flight number matches several records."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Sequence

from flightwatch.logic.models import FlightCandidate

# Favors flights that landed recently or are airborne over later reuses of the number.
TARGET_OFFSET = timedelta(hours=2)


def select_flight(candidates: Sequence[FlightCandidate], now: datetime) -> FlightCandidate | None:
    """Return the candidate whose estimated arrival is closest to two hours ago.

    Candidates without an estimated arrival are ignored. Ties go to the earliest
    candidate in the input. If no candidate has an estimated arrival the first
    one is returned, and an empty input returns None.
    """
    if not candidates:
        return None

    target = now - TARGET_OFFSET
    best: FlightCandidate | None = None
    best_distance: timedelta | None = None
    for candidate in candidates:
        if candidate.estimated_arrival is None:
            continue
        distance = abs(candidate.estimated_arrival - target)
        if best_distance is None or distance < best_distance:
            best = candidate
            best_distance = distance

    if best is None:
        return candidates[0]
    return best


__all__ = ["TARGET_OFFSET", "select_flight"]
