"""Stay validation run before a booking request is initiated.

Rules:
- Both dates must be chosen.
- Check-out strictly after check-in (zero-night stays are rejected here,
  never passed on to the conflict check).
- Check-in not in the past relative to the caller's "today".
- 1 <= guests <= room capacity.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .availability import DateRange, InvalidDateRange, ProposedRange


class StayValidationError(Exception):
    def __init__(self, reason_code: str, meta: dict | None = None):
        self.reason_code = reason_code
        self.meta = meta or {}
        super().__init__(f"Stay rejected: {reason_code}")


@dataclass(frozen=True)
class StayRequest:
    """A prospective stay in one room."""

    dates: ProposedRange
    guests: int
    capacity: int


def nights(stay: DateRange) -> int:
    return (stay.check_out - stay.check_in).days


def validate_stay(request: StayRequest, *, today: date) -> DateRange:
    """Validate a stay request and return its complete date range.

    Raises:
        StayValidationError: With a reason_code describing the first failed rule.
    """
    proposed = request.dates
    if proposed.check_in is None or proposed.check_out is None:
        raise StayValidationError("missing_dates")

    try:
        stay = DateRange(check_in=proposed.check_in, check_out=proposed.check_out)
    except InvalidDateRange as e:
        raise StayValidationError(
            "invalid_dates",
            {
                "check_in": proposed.check_in.isoformat(),
                "check_out": proposed.check_out.isoformat(),
            },
        ) from e

    if stay.check_in < today:
        raise StayValidationError("past_check_in", {"today": today.isoformat()})

    if request.guests < 1:
        raise StayValidationError("invalid_guest_count", {"guests": request.guests})

    if request.guests > request.capacity:
        raise StayValidationError(
            "over_capacity",
            {"guests": request.guests, "capacity": request.capacity},
        )

    return stay
