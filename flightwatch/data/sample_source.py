"""Offline flight source backed by a saved AeroAPI response."""

from __future__ import annotations

import json
from pathlib import Path

from flightwatch.data.converter import candidates_from_payload
from flightwatch.data.flightaware_client import ParseError
from flightwatch.logic.models import FlightCandidate


class SampleFlightSource:
    """Serve flight candidates from a JSON file instead of the live API.

    The file is re-read on every fetch so it can be edited while the tracker runs.
    Records whose ident does not match the requested flight number are skipped,
    unless none match, in which case every record is returned.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def fetch_candidates(self, ident: str) -> list[FlightCandidate]:
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except OSError as exc:
            raise ParseError(f"Sample file could not be read: {self._path}") from exc
        except json.JSONDecodeError as exc:
            raise ParseError(f"Sample file is not valid JSON: {self._path}") from exc

        if not isinstance(payload, dict):
            raise ParseError("Sample file must contain a JSON object")

        try:
            candidates = candidates_from_payload(payload)
        except ValueError as exc:
            raise ParseError(f"Sample flight record could not be parsed: {exc}") from exc

        matching = [c for c in candidates if c.flight_number.upper() == ident.upper()]
        return matching or candidates


__all__ = ["SampleFlightSource"]
