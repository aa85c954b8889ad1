"""Configuration loader for the flightwatch tracker."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

from dotenv import load_dotenv
import yaml

from flightwatch.data.flightaware_client import AEROAPI_BASE

DEFAULT_REFRESH_INTERVAL_SECONDS = 180
DEFAULT_ALERT_THRESHOLD_MINUTES = 30
DEFAULT_REFRESH_PER_SECOND = 2
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class FlightAwareConfig:
    """FlightAware AeroAPI configuration."""

    api_key: str
    base_url: str


@dataclass(frozen=True)
class TrackerConfig:
    """What to track and how often to poll."""

    flight_number: str
    refresh_interval_seconds: int
    alert_threshold_minutes: int


@dataclass(frozen=True)
class DisplayConfig:
    """Terminal dashboard configuration."""

    refresh_per_second: int


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    flightaware: FlightAwareConfig
    tracker: TrackerConfig
    display: DisplayConfig
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' config must be a mapping")
    return section


def _log_level(value: Any) -> str:
    level = str(value).strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown logging level: {value!r}, expected one of {', '.join(LOG_LEVELS)}")
    return level


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"'{name}' must be a positive integer, got {value!r}")
    return value


def load_config(
    path: str = "config/config.yaml",
    flight_number: str | None = None,
    api_key: str | None = None,
    require_api_key: bool = True,
) -> AppConfig:
    """Load application configuration from a YAML file.

    ``flight_number`` and ``api_key`` override the environment
    (``FLIGHT_NUMBER``, ``FLIGHTAWARE_API_KEY``), which overrides the file.
    """
    load_dotenv()
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    tracker_section = _section(data, "tracker")
    flightaware_section = _section(data, "flightaware")
    display_section = _section(data, "display")
    logging_section = _require_key(data, "logging", "logging")
    if not isinstance(logging_section, dict):
        raise ValueError("'logging' config must be a mapping")

    flight_number = (
        flight_number
        or os.environ.get("FLIGHT_NUMBER", "").strip()
        or tracker_section.get("flight_number")
    )
    if not flight_number:
        raise ValueError(
            "Flight number is required. Provide via --flight-number flag, "
            "FLIGHT_NUMBER environment variable or tracker.flight_number"
        )

    api_key = api_key or os.environ.get("FLIGHTAWARE_API_KEY", "").strip()
    if require_api_key and not api_key:
        raise ValueError(
            "FlightAware API key is required. Provide via --api-key flag "
            "or FLIGHTAWARE_API_KEY environment variable"
        )

    tracker = TrackerConfig(
        flight_number=str(flight_number).strip().upper(),
        refresh_interval_seconds=_positive_int(
            tracker_section.get("refresh_interval_seconds", DEFAULT_REFRESH_INTERVAL_SECONDS),
            "refresh_interval_seconds",
        ),
        alert_threshold_minutes=_positive_int(
            tracker_section.get("alert_threshold_minutes", DEFAULT_ALERT_THRESHOLD_MINUTES),
            "alert_threshold_minutes",
        ),
    )

    flightaware = FlightAwareConfig(
        api_key=api_key or "",
        base_url=flightaware_section.get("base_url", AEROAPI_BASE),
    )

    display = DisplayConfig(
        refresh_per_second=_positive_int(
            display_section.get("refresh_per_second", DEFAULT_REFRESH_PER_SECOND),
            "refresh_per_second",
        ),
    )

    logging = LoggingConfig(
        level=_log_level(_require_key(logging_section, "level", "logging")),
        log_dir=_require_key(logging_section, "log_dir", "logging"),
    )

    return AppConfig(flightaware=flightaware, tracker=tracker, display=display, log=logging)
