"""Landing alert state machine.

The alert starts QUIET and moves to TRIGGERED the first time the flight is
within ``threshold_minutes`` of arrival and is neither cancelled nor landed.
TRIGGERED is terminal for the run: later snapshots never move it back, even if
the provider pushes the arrival out again.
"""

from __future__ import annotations

from dataclasses import dataclass

from flightwatch.logic.models import CANCELLED, LANDED, ProgressSnapshot

QUIET = "QUIET"
TRIGGERED = "TRIGGERED"

NONE = "NONE"
FIRST_TRIGGER = "FIRST_TRIGGER"
STILL_TRIGGERED = "STILL_TRIGGERED"

INACTIVE_STATUSES = frozenset({CANCELLED, LANDED})


@dataclass
class AlertState:
    """Alert progress carried across polling cycles."""

    threshold_minutes: int
    triggered: bool = False
    blink_phase: bool = False

    @property
    def phase(self) -> str:
        return TRIGGERED if self.triggered else QUIET


def should_trigger(threshold_minutes: int, progress: ProgressSnapshot | None, status: str | None) -> bool:
    """Return True if this snapshot crosses the landing threshold."""
    if progress is None or progress.minutes_to_arrival is None:
        return False
    if status in INACTIVE_STATUSES:
        return False
    return progress.minutes_to_arrival <= threshold_minutes


def evaluate_alert(state: AlertState, progress: ProgressSnapshot | None, status: str | None) -> str:
    """Advance ``state`` with a new snapshot and return the resulting signal."""
    if state.triggered:
        state.blink_phase = not state.blink_phase
        return STILL_TRIGGERED

    if should_trigger(state.threshold_minutes, progress, status):
        state.triggered = True
        state.blink_phase = True
        return FIRST_TRIGGER

    return NONE


def current_signal(state: AlertState) -> str:
    """Signal to republish when a cycle produced no fresh data."""
    return STILL_TRIGGERED if state.triggered else NONE


__all__ = [
    "QUIET",
    "TRIGGERED",
    "NONE",
    "FIRST_TRIGGER",
    "STILL_TRIGGERED",
    "AlertState",
    "should_trigger",
    "evaluate_alert",
    "current_signal",
]
