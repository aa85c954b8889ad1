"""Dashboard composer for the terminal display."""

from __future__ import annotations

from datetime import tzinfo

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from flightwatch.data.poller import TrackerSnapshot
from flightwatch.logic.alert import NONE
from flightwatch.logic.models import (
    CANCELLED,
    DELAYED,
    EN_ROUTE,
    LANDED,
    ON_TIME,
    STATUS_LABELS,
    UNKNOWN,
)
from flightwatch.rendering.formatting import (
    build_flight_path,
    format_arrival_time,
    format_percent,
    format_time_remaining,
)

DEFAULT_WIDTH = 60

STATUS_COLORS = {
    ON_TIME: "green",
    DELAYED: "yellow",
    CANCELLED: "red",
    EN_ROUTE: "blue",
    LANDED: "cyan",
    UNKNOWN: "white",
}

ALERT_TITLE = "⚠ LANDING SOON ⚠"
ALERT_BORDER_ON = "bold red"
ALERT_BORDER_OFF = "dim red"
NORMAL_BORDER = "cyan"

WAITING_TEXT = "Waiting for first update..."
NO_FLIGHT_TEXT = "No matching flight"
UNAVAILABLE_TEXT = "Flight data unavailable"
QUIT_HINT = "Ctrl+C to quit"


def _border_style(snapshot: TrackerSnapshot | None, blink_on: bool) -> str:
    if snapshot is None or snapshot.signal == NONE:
        return NORMAL_BORDER
    return ALERT_BORDER_ON if blink_on else ALERT_BORDER_OFF


def _flight_lines(snapshot: TrackerSnapshot, width: int, tz: tzinfo | None) -> list[RenderableType]:
    candidate = snapshot.flight.candidate
    alerting = snapshot.signal != NONE
    origin = candidate.origin or "???"
    destination = candidate.destination or "???"

    header = Text(f"Flight: {candidate.flight_number}", style="bold red" if alerting else "bold cyan")
    header.append(f"   {origin} → {destination}", style="white")

    status = Text("Status: ")
    status.append(
        STATUS_LABELS.get(candidate.status, STATUS_LABELS[UNKNOWN]),
        style=f"bold {STATUS_COLORS.get(candidate.status, 'white')}",
    )

    arrival_time = snapshot.progress.arrival_time if snapshot.progress else None
    arrival = Text(f"Estimated Arrival: {format_arrival_time(arrival_time, tz)}", style="white")

    half = max(width // 2, 1)
    airports = Text(f"{origin:<{half}}{destination:>{width - half}}", style="white")
    info = f"{format_percent(snapshot.progress)} • {format_time_remaining(snapshot.progress, candidate.status)}"
    progress_info = Text(info.center(width).rstrip(), style="bold cyan")
    fraction = snapshot.progress.fraction if snapshot.progress else 0.0
    path = build_flight_path(width, fraction)

    progress_panel = Panel(
        Group(airports, progress_info, path),
        title="Flight Progress",
        border_style="white",
        expand=True,
    )
    return [header, status, arrival, Text(""), progress_panel]


def _footer(snapshot: TrackerSnapshot, tz: tzinfo | None) -> list[RenderableType]:
    lines: list[RenderableType] = []
    if snapshot.error:
        lines.append(Text(f"⚠ Last update failed: {snapshot.error}", style="bold yellow"))
    updated = snapshot.updated_at.astimezone(tz).strftime("%H:%M:%S")
    lines.append(Text(f"Updated {updated} • {QUIT_HINT}", style="dim"))
    return lines


def compose_dashboard(
    snapshot: TrackerSnapshot | None,
    flight_number: str,
    blink_on: bool = True,
    width: int = DEFAULT_WIDTH,
    tz: tzinfo | None = None,
) -> Panel:
    """Build the full dashboard renderable for one frame."""
    alerting = snapshot is not None and snapshot.signal != NONE
    title = ALERT_TITLE if alerting else f"Tracking {flight_number}"

    if snapshot is None:
        body: list[RenderableType] = [Text(WAITING_TEXT, style="dim"), Text(QUIT_HINT, style="dim")]
    elif snapshot.flight is None and snapshot.error:
        body = [Text(f"{UNAVAILABLE_TEXT} for {flight_number}", style="dim"), Text("")]
        body.extend(_footer(snapshot, tz))
    elif snapshot.flight is None:
        body = [Text(f"{NO_FLIGHT_TEXT} for {flight_number}", style="bold yellow"), Text("")]
        body.extend(_footer(snapshot, tz))
    else:
        body = _flight_lines(snapshot, width, tz)
        body.extend(_footer(snapshot, tz))

    return Panel(
        Group(*body),
        title=title,
        border_style=_border_style(snapshot, blink_on),
        expand=True,
    )


__all__ = ["STATUS_COLORS", "ALERT_TITLE", "NO_FLIGHT_TEXT", "UNAVAILABLE_TEXT", "compose_dashboard"]
