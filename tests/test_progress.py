from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from flightwatch.logic.models import FlightCandidate
from flightwatch.logic.progress import compute_progress

DEPARTURE = datetime(2025, 11, 18, 10, 0, tzinfo=timezone.utc)
ARRIVAL = datetime(2025, 11, 18, 14, 0, tzinfo=timezone.utc)


def _flight(**kwargs) -> FlightCandidate:
    return FlightCandidate(flight_number="AA100", **kwargs)


def test_progress_midway() -> None:
    flight = _flight(scheduled_departure=DEPARTURE, scheduled_arrival=ARRIVAL)

    progress = compute_progress(flight, DEPARTURE + timedelta(hours=1))

    assert progress.fraction == pytest.approx(0.25)
    assert progress.minutes_to_arrival == 180
    assert progress.arrival_time == ARRIVAL


def test_progress_prefers_actual_then_estimated() -> None:
    flight = _flight(
        scheduled_departure=DEPARTURE,
        estimated_departure=DEPARTURE + timedelta(minutes=15),
        actual_departure=DEPARTURE + timedelta(minutes=20),
        scheduled_arrival=ARRIVAL,
        estimated_arrival=ARRIVAL + timedelta(minutes=20),
    )

    progress = compute_progress(flight, ARRIVAL)

    assert progress.arrival_time == ARRIVAL + timedelta(minutes=20)
    assert progress.minutes_to_arrival == 20
    assert progress.fraction == pytest.approx(220 / 240)


def test_progress_clamped_before_departure() -> None:
    flight = _flight(scheduled_departure=DEPARTURE, scheduled_arrival=ARRIVAL)

    progress = compute_progress(flight, DEPARTURE - timedelta(hours=3))

    assert progress.fraction == 0.0
    assert progress.minutes_to_arrival == 420


def test_progress_clamped_after_arrival_negative_minutes() -> None:
    flight = _flight(scheduled_departure=DEPARTURE, actual_arrival=ARRIVAL)

    progress = compute_progress(flight, ARRIVAL + timedelta(minutes=45))

    assert progress.fraction == 1.0
    assert progress.minutes_to_arrival == -45


def test_progress_equal_departure_and_arrival() -> None:
    flight = _flight(scheduled_departure=ARRIVAL, scheduled_arrival=ARRIVAL)

    progress = compute_progress(flight, DEPARTURE)

    assert progress.fraction == 1.0


def test_progress_arrival_before_departure() -> None:
    flight = _flight(scheduled_departure=ARRIVAL, scheduled_arrival=DEPARTURE)

    progress = compute_progress(flight, DEPARTURE)

    assert progress.fraction == 1.0
    assert progress.minutes_to_arrival == 0


def test_progress_missing_departure_uses_arrival_distance() -> None:
    flight = _flight(estimated_arrival=ARRIVAL)

    progress = compute_progress(flight, ARRIVAL - timedelta(minutes=90))

    assert progress.fraction == 0.0
    assert progress.minutes_to_arrival == 90
    assert progress.arrival_time == ARRIVAL


def test_progress_no_arrival_has_no_minutes() -> None:
    flight = _flight(scheduled_departure=DEPARTURE)

    progress = compute_progress(flight, DEPARTURE)

    assert progress.fraction == 0.0
    assert progress.minutes_to_arrival is None
    assert progress.arrival_time is None


def test_progress_rounds_to_nearest_minute() -> None:
    flight = _flight(scheduled_departure=DEPARTURE, scheduled_arrival=ARRIVAL)

    progress = compute_progress(flight, ARRIVAL - timedelta(minutes=10, seconds=40))

    assert progress.minutes_to_arrival == 11
