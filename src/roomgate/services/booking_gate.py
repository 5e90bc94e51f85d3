"""Booking gate: a reservation request only proceeds when the room is free.

Flow for initiate_booking:
1. Validate the stay (dates, guests, capacity).
2. Fetch the room's booked ranges from the reservation backend.
3. Reject on the first overlapping range (RoomConflictError).
4. Forward the reservation request to the backend.

Logs carry room id, dates and counts only (no guest data).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from roomgate.domain.availability import BookedRange, DateRange, ProposedRange, find_conflict
from roomgate.domain.room_status import RoomAvailability, count_overlapping, summarize_availability
from roomgate.domain.stay import StayRequest, nights, validate_stay
from roomgate.infra.reservations_client import ReservationsClient
from roomgate.observability.logging import get_logger
from roomgate.observability.redaction import redact_value

logger = get_logger(__name__)


class RoomConflictError(Exception):
    """Raised when a proposed stay overlaps an existing booking."""

    def __init__(self, room_id: str, proposed: DateRange, conflicting: BookedRange) -> None:
        self.room_id = room_id
        self.proposed = proposed
        self.conflicting = conflicting
        super().__init__(
            f"Room {room_id} has a conflicting reservation "
            f"({conflicting.check_in} to {conflicting.check_out})"
        )


@dataclass(frozen=True)
class AvailabilityResult:
    room_id: str
    proposed: ProposedRange
    available: bool
    conflict: BookedRange | None
    summary: RoomAvailability

    def to_dict(self) -> dict[str, Any]:
        return {
            "room_id": self.room_id,
            "check_in": self.proposed.check_in.isoformat() if self.proposed.check_in else None,
            "check_out": self.proposed.check_out.isoformat() if self.proposed.check_out else None,
            "available": self.available,
            "conflict": self.conflict.to_dict() if self.conflict else None,
            "summary": self.summary.to_dict(),
        }


def check_availability(
    client: ReservationsClient,
    room_id: str,
    proposed: ProposedRange,
    *,
    total_units: int = 1,
) -> AvailabilityResult:
    """Check a proposal against the room's current bookings.

    An incomplete proposal is reported as available without a backend call.
    available follows the same conflict rule as initiate_booking; total_units
    only shapes the room type summary.
    """
    if not proposed.is_complete:
        return AvailabilityResult(
            room_id=room_id,
            proposed=proposed,
            available=True,
            conflict=None,
            summary=summarize_availability(total_units, 0),
        )

    booked = client.fetch_booked_ranges(room_id)
    conflict = find_conflict(proposed, booked)
    summary = summarize_availability(total_units, count_overlapping(proposed, booked))

    return AvailabilityResult(
        room_id=room_id,
        proposed=proposed,
        available=conflict is None,
        conflict=conflict,
        summary=summary,
    )


def initiate_booking(
    client: ReservationsClient,
    room_id: str,
    request: StayRequest,
    *,
    today: date,
    guest: dict[str, Any] | None = None,
    auth_token: str | None = None,
) -> dict[str, Any]:
    """Validate, check for conflicts, then forward the reservation request.

    Returns:
        The reservation backend's response body.

    Raises:
        StayValidationError: The stay itself is invalid.
        RoomConflictError: The room is booked on at least one night of the stay.
        ReservationServiceError: Backend unreachable or refused the request.
    """
    stay = validate_stay(request, today=today)

    booked = client.fetch_booked_ranges(room_id)
    conflict = find_conflict(stay, booked)
    if conflict is not None:
        logger.warning(
            "booking rejected: room conflict",
            extra={
                "extra_fields": {
                    "room_id": room_id,
                    "requested_checkin": stay.check_in.isoformat(),
                    "requested_checkout": stay.check_out.isoformat(),
                    "conflicting_reservation_id": conflict.reservation_id,
                    "existing_checkin": conflict.check_in.isoformat(),
                    "existing_checkout": conflict.check_out.isoformat(),
                }
            },
        )
        raise RoomConflictError(room_id, stay, conflict)

    payload: dict[str, Any] = {
        "roomId": room_id,
        **stay.to_dict(),
        "numberOfGuests": request.guests,
    }
    if guest:
        payload.update(guest)

    result = client.create_reservation(payload, auth_token=auth_token)

    logger.info(
        "booking forwarded",
        extra={
            "extra_fields": {
                "room_id": room_id,
                "nights": nights(stay),
                "guests": request.guests,
                "guest": redact_value(guest),
            }
        },
    )
    return result
