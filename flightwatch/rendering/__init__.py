"""Rendering utilities for the terminal dashboard."""

from flightwatch.rendering.dashboard import compose_dashboard
from flightwatch.rendering.formatting import (
    build_flight_path,
    format_arrival_time,
    format_time_remaining,
)

__all__ = ["compose_dashboard", "build_flight_path", "format_arrival_time", "format_time_remaining"]
