"""Runtime settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_RESERVATIONS_API_BASE_URL = "http://localhost:8080/api"


@dataclass(frozen=True)
class Settings:
    """Settings for the availability gate.

    Attributes:
        reservations_api_base_url: Base URL of the reservation backend,
                                   without trailing slash.
        reservations_http_timeout: Seconds before an outgoing call is abandoned.
        max_booked_days_window: Widest window (in days) accepted by the
                                booked-days calendar query.
    """

    reservations_api_base_url: str = DEFAULT_RESERVATIONS_API_BASE_URL
    reservations_http_timeout: float = 10.0
    max_booked_days_window: int = 366

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            reservations_api_base_url=os.environ.get(
                "RESERVATIONS_API_BASE_URL", DEFAULT_RESERVATIONS_API_BASE_URL
            ).rstrip("/"),
            reservations_http_timeout=float(
                os.environ.get("RESERVATIONS_HTTP_TIMEOUT", "10")
            ),
            max_booked_days_window=int(os.environ.get("MAX_BOOKED_DAYS_WINDOW", "366")),
        )
