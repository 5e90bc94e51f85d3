"""Date availability for a single room.

A booked range is half-open: the check-in day is occupied, the check-out
day is free (the guest leaves that morning). Adjacent stays therefore do
not conflict.

Overlap formula:  (proposed_checkin < booked_checkout) AND (booked_checkin < proposed_checkout)

Dates are compared as calendar dates only, encoded as
year*10000 + month*100 + day. No time-of-day or timezone takes part.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Iterable

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


class InvalidDateRange(ValueError):
    """Raised for malformed dates or ranges where check-in >= check-out."""

    def __init__(self, reason_code: str, detail: str | None = None) -> None:
        self.reason_code = reason_code
        self.detail = detail
        super().__init__(f"Invalid date range: {reason_code}" + (f" ({detail})" if detail else ""))


@dataclass(frozen=True)
class DateRange:
    """Half-open calendar range [check_in, check_out)."""

    check_in: date
    check_out: date

    def __post_init__(self) -> None:
        if encode_date(self.check_in) >= encode_date(self.check_out):
            raise InvalidDateRange(
                "check_out_not_after_check_in",
                f"{self.check_in.isoformat()} to {self.check_out.isoformat()}",
            )

    def to_dict(self) -> dict[str, str]:
        return {
            "checkInDate": self.check_in.isoformat(),
            "checkOutDate": self.check_out.isoformat(),
        }


@dataclass(frozen=True)
class BookedRange(DateRange):
    """A range already reserved for a room."""

    reservation_id: str | None = None

    def to_dict(self) -> dict[str, str]:
        data = super().to_dict()
        if self.reservation_id is not None:
            data["reservationId"] = self.reservation_id
        return data


@dataclass(frozen=True)
class ProposedRange:
    """Dates a guest is considering. Either end may still be unset."""

    check_in: date | None = None
    check_out: date | None = None

    @property
    def is_complete(self) -> bool:
        return self.check_in is not None and self.check_out is not None


def encode_date(day: date) -> int:
    """Encode a calendar date as a sortable integer (YYYYMMDD)."""
    return day.year * 10000 + day.month * 100 + day.day


def is_date_booked(day: date, booked_ranges: Iterable[DateRange]) -> bool:
    """Return True if day falls in [check_in, check_out) of any booked range."""
    key = encode_date(day)
    return any(
        encode_date(r.check_in) <= key < encode_date(r.check_out)
        for r in booked_ranges
    )


def find_conflict(
    proposed: ProposedRange | DateRange,
    booked_ranges: Iterable[BookedRange],
) -> BookedRange | None:
    """Return the earliest booked range overlapping the proposal, or None.

    An incomplete proposal has nothing to check and never conflicts.
    """
    if proposed.check_in is None or proposed.check_out is None:
        return None

    start = encode_date(proposed.check_in)
    end = encode_date(proposed.check_out)

    hits = [
        r
        for r in booked_ranges
        if start < encode_date(r.check_out) and encode_date(r.check_in) < end
    ]
    if not hits:
        return None
    return min(hits, key=lambda r: encode_date(r.check_in))


def has_conflict(
    proposed: ProposedRange | DateRange,
    booked_ranges: Iterable[BookedRange],
) -> bool:
    """Return True if any night of the proposal is already booked."""
    return find_conflict(proposed, booked_ranges) is not None


def booked_days(booked_ranges: Iterable[DateRange], window: DateRange) -> list[date]:
    """List booked calendar days inside window, sorted and de-duplicated."""
    days: set[date] = set()
    for r in booked_ranges:
        first = max(r.check_in, window.check_in)
        last = min(r.check_out, window.check_out)
        day = first
        while day < last:
            days.add(day)
            day += timedelta(days=1)
    return sorted(days)


def parse_iso_date(value: Any) -> date:
    """Parse a strict YYYY-MM-DD calendar date string."""
    if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
        raise InvalidDateRange("malformed_date", repr(value))
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidDateRange("malformed_date", repr(value)) from e


def parse_booked_ranges(payload: Any) -> list[BookedRange]:
    """Build BookedRange values from the reservation-query payload.

    Expects a list of {"checkInDate": ..., "checkOutDate": ...} objects,
    each optionally carrying "reservationId".
    """
    if not isinstance(payload, list):
        raise InvalidDateRange("malformed_payload", "expected a list of ranges")

    ranges: list[BookedRange] = []
    for item in payload:
        if not isinstance(item, dict):
            raise InvalidDateRange("malformed_payload", "expected an object per range")
        reservation_id = item.get("reservationId")
        ranges.append(
            BookedRange(
                check_in=parse_iso_date(item.get("checkInDate")),
                check_out=parse_iso_date(item.get("checkOutDate")),
                reservation_id=str(reservation_id) if reservation_id is not None else None,
            )
        )
    return ranges
