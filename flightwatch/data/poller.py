"""Threaded poller that tracks one flight and publishes dashboard snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
import queue
import threading
import time
from typing import Callable, Sequence

from flightwatch.config import TrackerConfig
from flightwatch.data.flightaware_client import FetchError
from flightwatch.logic.alert import FIRST_TRIGGER, AlertState, current_signal, evaluate_alert
from flightwatch.logic.models import FlightCandidate, ProgressSnapshot, SelectedFlight
from flightwatch.logic.progress import compute_progress
from flightwatch.logic.selector import select_flight

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Sequence[FlightCandidate]]

STOP_JOIN_TIMEOUT_SECONDS = 2.0


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TrackerSnapshot:
    """Everything the dashboard needs for one polling cycle."""

    cycle: int
    flight: SelectedFlight | None
    progress: ProgressSnapshot | None
    signal: str
    blink_phase: bool
    error: str | None
    updated_at: datetime


class FlightPoller:
    """Background poller that refreshes the tracked flight on a schedule.

    The loop thread owns the alert state and the last good flight. Each fetch
    runs on its own daemon thread and reports back through a queue tagged with
    its cycle number, so a fetch that outlives its cycle is dropped instead of
    overwriting newer data.
    """

    def __init__(
        self,
        fetch: Fetcher,
        config: TrackerConfig,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._fetch = fetch
        self._flight_number = config.flight_number
        self._poll_interval_seconds = config.refresh_interval_seconds
        self._clock = clock
        self._alert = AlertState(threshold_minutes=config.alert_threshold_minutes)
        self._cycle = 0
        self._last_flight: SelectedFlight | None = None
        self._last_progress: ProgressSnapshot | None = None
        self._latest: TrackerSnapshot | None = None
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._results: queue.Queue = queue.Queue()
        self._thread: threading.Thread | None = None

    @property
    def alert_state(self) -> AlertState:
        return self._alert

    def get_latest(self) -> TrackerSnapshot | None:
        """Return the most recent published snapshot, if any."""
        with self._lock:
            return self._latest

    def start(self) -> None:
        """Start the background polling thread."""
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._results = queue.Queue()
        self._thread = threading.Thread(target=self._run_loop, name="flight-poller", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = STOP_JOIN_TIMEOUT_SECONDS) -> None:
        """Signal the polling thread to stop and wait briefly for it to exit."""
        self._stop_event.set()
        self._results.put(None)
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    def poll_once(self) -> TrackerSnapshot:
        """Run one fetch-select-compute-evaluate cycle synchronously."""
        self._cycle += 1
        candidates, error = self._fetch_once()
        return self._complete_cycle(self._cycle, candidates, error)

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            self._cycle += 1
            cycle = self._cycle
            deadline = time.monotonic() + self._poll_interval_seconds
            worker = threading.Thread(
                target=self._fetch_worker,
                args=(cycle, self._results),
                name=f"flight-fetch-{cycle}",
                daemon=True,
            )
            worker.start()

            if not self._await_cycle(cycle, deadline):
                break

            remaining = deadline - time.monotonic()
            if remaining > 0:
                self._stop_event.wait(timeout=remaining)
        logger.info("Poller stopped after %d cycles", self._cycle)

    def _await_cycle(self, cycle: int, deadline: float) -> bool:
        """Wait for this cycle's fetch; return False if asked to stop."""
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                self._complete_cycle(cycle, None, "Fetch did not finish within the refresh interval")
                return not self._stop_event.is_set()
            try:
                item = self._results.get(timeout=remaining)
            except queue.Empty:
                continue
            if item is None or self._stop_event.is_set():
                return False
            fetched_cycle, candidates, error = item
            if fetched_cycle != cycle:
                logger.debug("Discarding fetch result for cycle %d (current %d)", fetched_cycle, cycle)
                continue
            self._complete_cycle(cycle, candidates, error)
            return True

    def _fetch_worker(self, cycle: int, results: queue.Queue) -> None:
        candidates, error = self._fetch_once()
        results.put((cycle, candidates, error))

    def _fetch_once(self) -> tuple[list[FlightCandidate] | None, str | None]:
        try:
            return list(self._fetch(self._flight_number)), None
        except FetchError as exc:
            logger.warning("Fetch for %s failed: %s", self._flight_number, exc)
            return None, str(exc)
        except Exception as exc:
            logger.exception("Unexpected error fetching %s", self._flight_number)
            return None, f"Unexpected error: {exc}"

    def _complete_cycle(
        self,
        cycle: int,
        candidates: list[FlightCandidate] | None,
        error: str | None,
    ) -> TrackerSnapshot:
        now = self._clock()
        if candidates is None:
            return self._publish_failure(cycle, error or "Fetch failed", now)

        try:
            candidate = select_flight(candidates, now)
            flight = SelectedFlight(candidate=candidate, selected_at=now) if candidate else None
            progress = compute_progress(candidate, now) if candidate else None
            signal = evaluate_alert(self._alert, progress, candidate.status if candidate else None)
        except Exception as exc:
            logger.exception("Cycle %d could not process %d candidates", cycle, len(candidates))
            return self._publish_failure(cycle, f"Unexpected error: {exc}", now)
        if signal == FIRST_TRIGGER:
            logger.info(
                "Landing alert for %s: %s minutes to arrival",
                self._flight_number,
                progress.minutes_to_arrival if progress else None,
            )

        self._last_flight = flight
        self._last_progress = progress
        snapshot = TrackerSnapshot(
            cycle=cycle,
            flight=flight,
            progress=progress,
            signal=signal,
            blink_phase=self._alert.blink_phase,
            error=None,
            updated_at=now,
        )
        self._publish(snapshot)
        logger.info(
            "Cycle %d: %d candidates, selected=%s, minutes_to_arrival=%s, signal=%s",
            cycle,
            len(candidates),
            candidate.flight_number if candidate else None,
            progress.minutes_to_arrival if progress else None,
            signal,
        )
        return snapshot

    def _publish_failure(self, cycle: int, error: str, now: datetime) -> TrackerSnapshot:
        snapshot = TrackerSnapshot(
            cycle=cycle,
            flight=self._last_flight,
            progress=self._last_progress,
            signal=current_signal(self._alert),
            blink_phase=self._alert.blink_phase,
            error=error,
            updated_at=now,
        )
        self._publish(snapshot)
        return snapshot

    def _publish(self, snapshot: TrackerSnapshot) -> None:
        with self._lock:
            if self._latest is not None and snapshot.cycle <= self._latest.cycle:
                logger.debug("Dropping out-of-order snapshot for cycle %d", snapshot.cycle)
                return
            self._latest = snapshot


__all__ = ["Fetcher", "TrackerSnapshot", "FlightPoller"]
