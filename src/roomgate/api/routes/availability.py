"""Room availability endpoints.

GET  /rooms/{room_id}/availability?check_in=...&check_out=...  → conflict check
GET  /rooms/{room_id}/booked-days?start=...&end=...            → calendar days to disable
POST /rooms/{room_id}/bookings                                 → gated booking (201)
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Header, HTTPException, Path, Query
from pydantic import BaseModel, ConfigDict, Field

from roomgate.api.deps import get_reservations_client, get_settings, get_today
from roomgate.domain.availability import DateRange, InvalidDateRange, ProposedRange, booked_days
from roomgate.domain.stay import StayRequest, StayValidationError
from roomgate.infra.reservations_client import (
    ReservationsClient,
    ReservationServiceError,
    RoomNotFoundError,
)
from roomgate.infra.settings import Settings
from roomgate.observability.logging import get_logger
from roomgate.services.booking_gate import (
    RoomConflictError,
    check_availability,
    initiate_booking,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/rooms", tags=["availability"])


# ── Schemas ───────────────────────────────────────────────────────────────────


class GuestDetails(BaseModel):
    model_config = ConfigDict(extra="forbid")

    guestName: str | None = None
    guestEmail: str | None = None
    guestPhone: str | None = None


class BookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    check_in: date
    check_out: date
    guests: int
    # Advertised capacity from the room listing the guest booked from. Checking it
    # against the stored room record is left to the reservation backend.
    capacity: int = Field(ge=1, description="Room capacity from the room listing")
    guest: GuestDetails | None = None


# ── Helpers ───────────────────────────────────────────────────────────────────


def _backend_error(room_id: str, e: ReservationServiceError) -> HTTPException:
    if isinstance(e, RoomNotFoundError):
        return HTTPException(status_code=404, detail="room not found")
    if e.status_code == 409:
        # Lost a race with another booking between our check and the backend write
        return HTTPException(status_code=409, detail={"reason_code": "room_conflict"})
    logger.error(
        "reservation backend unavailable",
        extra={"extra_fields": {"room_id": room_id, "status_code": e.status_code}},
    )
    return HTTPException(status_code=502, detail="reservation backend unavailable")


def _invalid_payload(room_id: str, e: InvalidDateRange) -> HTTPException:
    logger.error(
        "reservation backend returned malformed ranges",
        extra={"extra_fields": {"room_id": room_id, "reason_code": e.reason_code}},
    )
    return HTTPException(status_code=502, detail="reservation backend returned malformed ranges")


def _bearer_token(authorization: str | None) -> str | None:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return None


# ── Endpoints ─────────────────────────────────────────────────────────────────


@router.get("/{room_id}/availability")
def get_availability(
    room_id: str = Path(..., min_length=1),
    check_in: date | None = Query(None, description="Check-in date (YYYY-MM-DD, inclusive)"),
    check_out: date | None = Query(None, description="Check-out date (YYYY-MM-DD, exclusive)"),
    total_units: int = Query(1, ge=1, description="Units of this room type"),
    client: ReservationsClient = Depends(get_reservations_client),
) -> dict:
    """Report whether the proposed dates overlap an existing booking.

    Missing dates are not an error: there is nothing to check yet.
    """
    if check_in is not None and check_out is not None and check_out <= check_in:
        raise HTTPException(status_code=422, detail="check_out must be after check_in")

    proposed = ProposedRange(check_in=check_in, check_out=check_out)
    try:
        result = check_availability(client, room_id, proposed, total_units=total_units)
    except ReservationServiceError as e:
        raise _backend_error(room_id, e) from e
    except InvalidDateRange as e:
        raise _invalid_payload(room_id, e) from e

    return result.to_dict()


@router.get("/{room_id}/booked-days")
def get_booked_days(
    room_id: str = Path(..., min_length=1),
    start: date = Query(..., description="Window start (YYYY-MM-DD, inclusive)"),
    end: date = Query(..., description="Window end (YYYY-MM-DD, exclusive)"),
    client: ReservationsClient = Depends(get_reservations_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    """List the booked days of a room inside a window, for the date picker."""
    if end <= start:
        raise HTTPException(status_code=422, detail="end must be greater than start")
    if (end - start).days > settings.max_booked_days_window:
        raise HTTPException(
            status_code=422,
            detail=f"Date range cannot exceed {settings.max_booked_days_window} days",
        )

    try:
        ranges = client.fetch_booked_ranges(room_id)
    except ReservationServiceError as e:
        raise _backend_error(room_id, e) from e
    except InvalidDateRange as e:
        raise _invalid_payload(room_id, e) from e

    days = booked_days(ranges, DateRange(check_in=start, check_out=end))
    return {
        "room_id": room_id,
        "start": start.isoformat(),
        "end": end.isoformat(),
        "booked_days": [d.isoformat() for d in days],
    }


@router.post("/{room_id}/bookings", status_code=201)
def create_booking(
    body: BookingRequest,
    room_id: str = Path(..., min_length=1),
    authorization: str | None = Header(None),
    client: ReservationsClient = Depends(get_reservations_client),
    today: date = Depends(get_today),
) -> dict:
    """Forward a reservation request once the stay is valid and conflict-free."""
    request = StayRequest(
        dates=ProposedRange(check_in=body.check_in, check_out=body.check_out),
        guests=body.guests,
        capacity=body.capacity,
    )
    guest = body.guest.model_dump(exclude_none=True) if body.guest else None

    try:
        return initiate_booking(
            client,
            room_id,
            request,
            today=today,
            guest=guest,
            auth_token=_bearer_token(authorization),
        )
    except StayValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"reason_code": e.reason_code, **e.meta},
        ) from e
    except RoomConflictError as e:
        raise HTTPException(
            status_code=409,
            detail={
                "reason_code": "room_conflict",
                "conflict": e.conflicting.to_dict(),
            },
        ) from e
    except ReservationServiceError as e:
        raise _backend_error(room_id, e) from e
    except InvalidDateRange as e:
        raise _invalid_payload(room_id, e) from e
