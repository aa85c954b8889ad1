from __future__ import annotations

from datetime import datetime, timedelta, timezone
import io

from rich.console import Console
from rich.panel import Panel

from flightwatch.data.poller import TrackerSnapshot
from flightwatch.logic.alert import FIRST_TRIGGER, NONE, STILL_TRIGGERED
from flightwatch.logic.models import EN_ROUTE, LANDED, FlightCandidate, ProgressSnapshot, SelectedFlight
from flightwatch.rendering.dashboard import (
    ALERT_BORDER_OFF,
    ALERT_BORDER_ON,
    ALERT_TITLE,
    NORMAL_BORDER,
    compose_dashboard,
)
from flightwatch.rendering.formatting import (
    PLANE_GLYPH,
    build_flight_path,
    format_arrival_time,
    format_time_remaining,
    plane_position,
)

NOW = datetime(2025, 11, 18, 12, 0, tzinfo=timezone.utc)
ARRIVAL = datetime(2025, 11, 18, 14, 30, tzinfo=timezone.utc)


def _render(panel: Panel) -> str:
    console = Console(file=io.StringIO(), width=80, color_system=None)
    console.print(panel)
    return console.file.getvalue()


def _snapshot(
    signal: str = NONE,
    error: str | None = None,
    with_flight: bool = True,
    status: str = EN_ROUTE,
    minutes: int = 150,
) -> TrackerSnapshot:
    flight = None
    progress = None
    if with_flight:
        candidate = FlightCandidate(
            flight_number="AA100",
            status=status,
            origin="JFK",
            destination="LAX",
            actual_departure=NOW - timedelta(hours=3),
            estimated_arrival=ARRIVAL,
        )
        flight = SelectedFlight(candidate=candidate, selected_at=NOW)
        progress = ProgressSnapshot(fraction=0.55, minutes_to_arrival=minutes, arrival_time=ARRIVAL)
    return TrackerSnapshot(
        cycle=1,
        flight=flight,
        progress=progress,
        signal=signal,
        blink_phase=True,
        error=error,
        updated_at=NOW,
    )


def test_format_arrival_time_in_zone() -> None:
    assert format_arrival_time(ARRIVAL, timezone.utc) == "Nov 18, 2025 at 2:30 PM UTC"


def test_format_arrival_time_missing() -> None:
    assert format_arrival_time(None) == "N/A"


def test_format_time_remaining() -> None:
    assert format_time_remaining(ProgressSnapshot(0.5, 150, ARRIVAL)) == "2h 30m"
    assert format_time_remaining(ProgressSnapshot(0.9, 45, ARRIVAL)) == "45m"
    assert format_time_remaining(ProgressSnapshot(1.0, -3, ARRIVAL)) == "Arrived"
    assert format_time_remaining(ProgressSnapshot(1.0, 20, ARRIVAL), LANDED) == "Arrived"
    assert format_time_remaining(ProgressSnapshot(0.0, None, None)) == "N/A"
    assert format_time_remaining(None) == "N/A"


def test_flight_path_plane_position() -> None:
    path = build_flight_path(22, 0.5)

    assert len(path.plain) == 22
    assert path.plain.index(PLANE_GLYPH) == plane_position(22, 0.5) + 1
    assert path.plain.startswith("●")
    assert path.plain.endswith("●")


def test_flight_path_full_progress_stays_inside() -> None:
    path = build_flight_path(20, 1.0)

    assert path.plain[-2] == PLANE_GLYPH


def test_flight_path_too_narrow() -> None:
    assert build_flight_path(5, 0.5).plain == ""


def test_dashboard_waiting_for_first_update() -> None:
    panel = compose_dashboard(None, "AA100")

    assert "Waiting for first update" in _render(panel)
    assert panel.border_style == NORMAL_BORDER


def test_dashboard_shows_flight_details() -> None:
    panel = compose_dashboard(_snapshot(), "AA100", tz=timezone.utc)
    text = _render(panel)

    assert "Flight: AA100" in text
    assert "En Route" in text
    assert "JFK" in text and "LAX" in text
    assert "55% • 2h 30m" in text
    assert "Nov 18, 2025 at 2:30 PM UTC" in text
    assert panel.title == "Tracking AA100"


def test_dashboard_no_matching_flight() -> None:
    text = _render(compose_dashboard(_snapshot(with_flight=False), "AA100"))

    assert "No matching flight for AA100" in text


def test_dashboard_error_indicator() -> None:
    text = _render(compose_dashboard(_snapshot(error="timeout"), "AA100"))

    assert "Last update failed: timeout" in text
    assert "Flight: AA100" in text


def test_dashboard_alert_border_blinks() -> None:
    on = compose_dashboard(_snapshot(signal=FIRST_TRIGGER, minutes=20), "AA100", blink_on=True)
    off = compose_dashboard(_snapshot(signal=STILL_TRIGGERED, minutes=19), "AA100", blink_on=False)

    assert on.title == ALERT_TITLE
    assert on.border_style == ALERT_BORDER_ON
    assert off.border_style == ALERT_BORDER_OFF


def test_dashboard_failed_fetch_before_any_flight() -> None:
    text = _render(compose_dashboard(_snapshot(with_flight=False, error="timeout"), "AA100"))

    assert "Flight data unavailable for AA100" in text
    assert "Last update failed: timeout" in text
    assert "No matching flight" not in text
