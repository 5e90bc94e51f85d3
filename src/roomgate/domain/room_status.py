"""Availability summary for a room type with one or more units."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .availability import BookedRange, ProposedRange, has_conflict


class AvailabilityStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    LIMITED = "LIMITED"
    FULLY_BOOKED = "FULLY_BOOKED"


@dataclass(frozen=True)
class RoomAvailability:
    total_units: int
    occupied_units: int
    available_units: int
    status: AvailabilityStatus
    message: str

    def to_dict(self) -> dict:
        return {
            "total_units": self.total_units,
            "occupied_units": self.occupied_units,
            "available_units": self.available_units,
            "status": self.status.value,
            "message": self.message,
        }


def count_overlapping(proposed: ProposedRange, booked_ranges: Iterable[BookedRange]) -> int:
    """Count booked ranges that overlap a complete proposal."""
    return sum(1 for r in booked_ranges if has_conflict(proposed, [r]))


def summarize_availability(total_units: int, occupied_units: int) -> RoomAvailability:
    # A room type without a unit count is a single room
    total = total_units if total_units > 0 else 1
    available = max(0, total - occupied_units)

    if available == 0:
        status, message = AvailabilityStatus.FULLY_BOOKED, "Fully Booked"
    elif available == 1:
        status, message = AvailabilityStatus.LIMITED, "Last room available!"
    elif available == 2:
        status, message = AvailabilityStatus.LIMITED, "Only 2 rooms left!"
    else:
        status, message = AvailabilityStatus.AVAILABLE, "Available"

    return RoomAvailability(
        total_units=total,
        occupied_units=occupied_units,
        available_units=available,
        status=status,
        message=message,
    )
