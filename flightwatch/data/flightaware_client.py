"""FlightAware AeroAPI client."""

from __future__ import annotations

from typing import Any

import requests

from flightwatch.data.converter import candidates_from_payload
from flightwatch.logic.models import FlightCandidate

AEROAPI_BASE = "https://aeroapi.flightaware.com/aeroapi"


class FetchError(Exception):
    """Raised when flight data could not be fetched or understood."""


class NetworkError(FetchError):
    """The request never produced an HTTP response."""


class AuthError(FetchError):
    """The provider rejected the API key."""


class ProviderError(FetchError):
    """The provider answered with a non-200 status."""


class ParseError(FetchError):
    """The provider payload was not valid JSON or had an unexpected shape."""


class FlightAwareClient:
    """Thin wrapper around the AeroAPI flights endpoint using requests."""

    def __init__(self, api_key: str, base_url: str = AEROAPI_BASE) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = 10

    def get_flights(self, ident: str) -> list[dict[str, Any]]:
        """Fetch the raw flight records for a flight number."""
        response_json = self._get(f"/flights/{ident}")
        flights = response_json.get("flights")
        if flights is None:
            return []
        if not isinstance(flights, list):
            raise ParseError("AeroAPI response field 'flights' is not a list")
        return flights

    def fetch_candidates(self, ident: str) -> list[FlightCandidate]:
        """Fetch and convert the flight records for a flight number."""
        flights = self.get_flights(ident)
        try:
            return candidates_from_payload({"flights": flights})
        except ValueError as exc:
            raise ParseError(f"AeroAPI flight record could not be parsed: {exc}") from exc

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        headers = {"x-apikey": self._api_key, "accept": "application/json"}
        try:
            response = requests.get(url, headers=headers, params=params, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise NetworkError(f"AeroAPI request failed: {exc}") from exc

        if response.status_code in (401, 403):
            raise AuthError(f"AeroAPI rejected the API key (status {response.status_code})")

        if response.status_code != 200:
            body_text = response.text.strip()
            detail = f"Status {response.status_code}"
            if body_text:
                detail = f"{detail}, Body: {body_text}"
            raise ProviderError(f"AeroAPI request failed: {detail}")

        try:
            data = response.json()
        except ValueError as exc:
            raise ParseError("AeroAPI response was not valid JSON") from exc
        if not isinstance(data, dict):
            raise ParseError("AeroAPI response was not a JSON object")
        return data


__all__ = [
    "AEROAPI_BASE",
    "FetchError",
    "NetworkError",
    "AuthError",
    "ProviderError",
    "ParseError",
    "FlightAwareClient",
]
