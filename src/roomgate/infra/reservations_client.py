"""HTTP client for the reservation backend.

Two calls only:
- GET  {base}/rooms/{room_id}/booked-dates  (read-only booked ranges)
- POST {base}/reservations                  (forward a gated booking)

The backend owns persistence; this client never caches or mutates ranges.
"""

from __future__ import annotations

from typing import Any

import requests

from roomgate.domain.availability import BookedRange, InvalidDateRange, parse_booked_ranges
from roomgate.infra.settings import Settings
from roomgate.observability.correlation import outgoing_headers
from roomgate.observability.logging import get_logger

logger = get_logger(__name__)


class ReservationServiceError(Exception):
    """Reservation backend unreachable or answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RoomNotFoundError(ReservationServiceError):
    def __init__(self, room_id: str) -> None:
        self.room_id = room_id
        super().__init__(f"Room {room_id} not found", status_code=404)


class ReservationsClient:
    """Thin requests-based client for the reservation backend."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReservationsClient":
        return cls(
            base_url=settings.reservations_api_base_url,
            timeout=settings.reservations_http_timeout,
        )

    def fetch_booked_ranges(self, room_id: str) -> list[BookedRange]:
        """Fetch the booked ranges of a room.

        Raises:
            RoomNotFoundError: Backend answered 404 for this room.
            ReservationServiceError: Transport failure or other error status.
            InvalidDateRange: Payload contains a malformed date or range.
        """
        url = f"{self._base_url}/rooms/{room_id}/booked-dates"
        response = self._send("GET", url, room_id=room_id)
        if response.status_code == 404:
            raise RoomNotFoundError(room_id)
        self._raise_for_status(response, url)

        try:
            payload = response.json()
        except ValueError as e:
            raise InvalidDateRange("malformed_payload", "booked dates body is not JSON") from e
        ranges = parse_booked_ranges(payload)
        logger.info(
            "booked ranges fetched",
            extra={"extra_fields": {"room_id": room_id, "range_count": len(ranges)}},
        )
        return ranges

    def create_reservation(
        self,
        payload: dict[str, Any],
        auth_token: str | None = None,
    ) -> dict[str, Any]:
        """Forward a reservation request and return the backend's JSON body.

        A 2xx answer means the reservation exists, so an empty or non-JSON
        body is returned as {} rather than failing the booking.
        """
        url = f"{self._base_url}/reservations"
        headers = {"Authorization": f"Bearer {auth_token}"} if auth_token else {}
        response = self._send(
            "POST", url, room_id=payload.get("roomId"), json=payload, headers=headers
        )
        self._raise_for_status(response, url)

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError:
            logger.warning(
                "reservation created but response body is not JSON",
                extra={"extra_fields": {"url": url, "status_code": response.status_code}},
            )
            return {}
        return body if isinstance(body, dict) else {}

    def _send(
        self,
        method: str,
        url: str,
        *,
        room_id: Any = None,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> requests.Response:
        all_headers = {"Accept": "application/json", **outgoing_headers(), **(headers or {})}
        try:
            return self._session.request(
                method, url, headers=all_headers, timeout=self._timeout, **kwargs
            )
        except requests.RequestException as e:
            logger.error(
                "reservation backend request failed",
                extra={
                    "extra_fields": {
                        "method": method,
                        "url": url,
                        "room_id": room_id,
                        "error": type(e).__name__,
                    }
                },
            )
            raise ReservationServiceError(f"{method} {url} failed: {type(e).__name__}") from e

    @staticmethod
    def _raise_for_status(response: requests.Response, url: str) -> None:
        if 200 <= response.status_code < 300:
            return
        logger.warning(
            "reservation backend returned error status",
            extra={"extra_fields": {"url": url, "status_code": response.status_code}},
        )
        raise ReservationServiceError(
            f"Reservation backend returned {response.status_code} for {url}",
            status_code=response.status_code,
        )
