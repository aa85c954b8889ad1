"""Text helpers for the terminal dashboard."""

from __future__ import annotations

from datetime import datetime, tzinfo

from rich.text import Text

from flightwatch.logic.models import LANDED, ProgressSnapshot

ORIGIN_MARK = "●"
PLANE_GLYPH = "✈"
PATH_GLYPH = "─"
MIN_PATH_WIDTH = 10


def format_arrival_time(arrival: datetime | None, tz: tzinfo | None = None) -> str:
    """Format an instant as local time, e.g. ``Nov 18, 2025 at 2:30 PM EST``."""
    if arrival is None:
        return "N/A"
    local = arrival.astimezone(tz)
    hour = local.hour % 12 or 12
    zone = local.strftime("%Z")
    text = f"{local:%b} {local.day}, {local.year} at {hour}:{local:%M} {local:%p}"
    return f"{text} {zone}" if zone else text


def format_time_remaining(progress: ProgressSnapshot | None, status: str | None = None) -> str:
    if status == LANDED:
        return "Arrived"
    if progress is None or progress.minutes_to_arrival is None:
        return "N/A"
    minutes = progress.minutes_to_arrival
    if minutes <= 0:
        return "Arrived"
    hours, minutes = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_percent(progress: ProgressSnapshot | None) -> str:
    fraction = progress.fraction if progress else 0.0
    return f"{fraction * 100:.0f}%"


def plane_position(width: int, fraction: float) -> int:
    """Column of the plane glyph inside a path of ``width`` cells."""
    path_width = max(width - 2, 1)
    clamped = max(0.0, min(1.0, fraction))
    return min(round(path_width * clamped), path_width - 1)


def build_flight_path(width: int, fraction: float) -> Text:
    """Origin dot, traveled trail, plane, remaining path, destination dot."""
    if width < MIN_PATH_WIDTH:
        return Text("")
    path_width = width - 2
    position = plane_position(width, fraction)

    path = Text(ORIGIN_MARK, style="white")
    path.append(PATH_GLYPH * position, style="yellow")
    path.append(PLANE_GLYPH, style="bold cyan")
    path.append(PATH_GLYPH * (path_width - position - 1), style="bright_black")
    path.append(ORIGIN_MARK, style="white")
    return path


__all__ = [
    "format_arrival_time",
    "format_time_remaining",
    "format_percent",
    "plane_position",
    "build_flight_path",
]
