"""Shared test helpers (plain functions, not fixtures)."""

from __future__ import annotations

import json
from datetime import date
from typing import Any
from unittest.mock import MagicMock

import requests

from roomgate.domain.availability import BookedRange
from roomgate.infra.reservations_client import ReservationsClient


def booked(check_in: str, check_out: str, reservation_id: str | None = None) -> BookedRange:
    return BookedRange(
        check_in=date.fromisoformat(check_in),
        check_out=date.fromisoformat(check_out),
        reservation_id=reservation_id,
    )


def fake_client(ranges: list[BookedRange] | None = None) -> MagicMock:
    """Mocked ReservationsClient returning the given booked ranges."""
    client = MagicMock(spec=ReservationsClient)
    client.fetch_booked_ranges.return_value = list(ranges or [])
    client.create_reservation.return_value = {"id": "res-new", "status": "PENDING"}
    return client


def http_response(status_code: int = 200, body: Any = None, text: str | None = None) -> requests.Response:
    """Real requests.Response with a JSON body (or raw text when given)."""
    response = requests.Response()
    response.status_code = status_code
    if text is not None:
        response._content = text.encode()
    elif body is not None:
        response._content = json.dumps(body).encode()
    else:
        response._content = b""
    response.headers["Content-Type"] = "application/json"
    return response
