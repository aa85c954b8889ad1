"""Command line entry point: poll one flight and show it in the terminal."""

from __future__ import annotations

import argparse
import logging
import sys
import time

from rich.console import Console
from rich.live import Live

from flightwatch.config import AppConfig, load_config
from flightwatch.data.flightaware_client import FlightAwareClient
from flightwatch.data.poller import FlightPoller, TrackerSnapshot
from flightwatch.data.sample_source import SampleFlightSource
from flightwatch.logging_setup import configure_logging
from flightwatch.logic.alert import NONE
from flightwatch.rendering import compose_dashboard

logger = logging.getLogger(__name__)

EXIT_CONFIG_ERROR = 2
PANEL_PADDING = 8
MIN_DASHBOARD_WIDTH = 20


def frame_blink_on(snapshot: TrackerSnapshot | None, frame: int) -> bool:
    """Alternate the alert border every frame, offset by the snapshot's blink phase."""
    even = frame % 2 == 0
    if snapshot is None:
        return even
    return even == snapshot.blink_phase


def should_ring(snapshot: TrackerSnapshot | None, already_rung: bool) -> bool:
    """Ring the bell once, on the first frame that shows an alert."""
    if already_rung or snapshot is None:
        return False
    return snapshot.signal != NONE


def run_dashboard(poller: FlightPoller, config: AppConfig, console: Console) -> int:
    flight_number = config.tracker.flight_number
    refresh_per_second = config.display.refresh_per_second
    frame = 0
    rung = False

    poller.start()
    try:
        with Live(
            compose_dashboard(None, flight_number),
            console=console,
            refresh_per_second=refresh_per_second,
            screen=True,
        ) as live:
            while True:
                snapshot = poller.get_latest()
                if should_ring(snapshot, rung):
                    console.bell()
                    rung = True
                width = max(console.width - PANEL_PADDING, MIN_DASHBOARD_WIDTH)
                live.update(
                    compose_dashboard(
                        snapshot,
                        flight_number,
                        blink_on=frame_blink_on(snapshot, frame),
                        width=width,
                    )
                )
                frame += 1
                time.sleep(1.0 / refresh_per_second)
    except KeyboardInterrupt:
        logger.info("Quit requested")
    finally:
        poller.stop()
    return 0


def _build_fetcher(config: AppConfig, sample_file: str | None):
    if sample_file:
        logger.info("Using sample flight data from %s", sample_file)
        return SampleFlightSource(sample_file).fetch_candidates
    client = FlightAwareClient(config.flightaware.api_key, base_url=config.flightaware.base_url)
    return client.fetch_candidates


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="flightwatch", description="Track a single flight in the terminal")
    parser.add_argument("--config", default="config/config.yaml", help="Path to the YAML config file")
    parser.add_argument("--flight-number", help="Flight number to track, e.g. AA100")
    parser.add_argument("--api-key", help="FlightAware AeroAPI key")
    parser.add_argument(
        "--sample-file",
        help="Serve flights from a saved AeroAPI JSON response instead of the live API",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config(
            args.config,
            flight_number=args.flight_number,
            api_key=args.api_key,
            require_api_key=not args.sample_file,
        )
        log_path = configure_logging(config.log)
    except (ValueError, OSError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    logger.info(
        "Tracking %s every %ss, alert at %s minutes (log: %s)",
        config.tracker.flight_number,
        config.tracker.refresh_interval_seconds,
        config.tracker.alert_threshold_minutes,
        log_path,
    )

    poller = FlightPoller(_build_fetcher(config, args.sample_file), config.tracker)
    return run_dashboard(poller, config, Console())


if __name__ == "__main__":
    raise SystemExit(main())
