"""
Domain models for time-of-day values, working hours, bookings and slots.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .exceptions import InvalidTimeError

DEFAULT_BOOKING_DURATION = 60

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """
    A wall-clock time within a single local day (no timezone).

    Ordering follows (hour, minute), so instances compare chronologically.
    """
    hour: int
    minute: int = 0

    @classmethod
    def parse(cls, value: str) -> "TimeOfDay":
        """
        Parse an ``"HH:MM"`` string (a single-digit hour is accepted).

        Raises:
            InvalidTimeError: If the value is not a valid 24-hour time
        """
        match = _TIME_PATTERN.match(value.strip()) if isinstance(value, str) else None
        if not match:
            raise InvalidTimeError(f"Invalid time '{value}', expected HH:MM (00:00-23:59)")
        return cls(hour=int(match.group(1)), minute=int(match.group(2)))

    @classmethod
    def from_minutes(cls, minutes: int) -> "TimeOfDay":
        """Build a time from minutes since midnight."""
        if not 0 <= minutes < MINUTES_PER_DAY:
            raise InvalidTimeError(f"{minutes} minutes is outside a single day")
        return cls(hour=minutes // 60, minute=minutes % 60)

    def to_minutes(self) -> int:
        """Return minutes since midnight."""
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class WorkingHours:
    """
    The daily window in which a provider accepts appointments.

    A window whose start is not before its end is allowed but yields no slots.
    """
    start: TimeOfDay
    end: TimeOfDay

    @classmethod
    def parse(cls, start: str, end: str) -> "WorkingHours":
        return cls(start=TimeOfDay.parse(start), end=TimeOfDay.parse(end))

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"


@dataclass(frozen=True)
class CustomHours:
    """Provider-specific override; either field may be left unset."""
    start: Optional[TimeOfDay] = None
    end: Optional[TimeOfDay] = None


@dataclass(frozen=True)
class Provider:
    provider_id: str
    name: str
    working_hours: Optional[CustomHours] = None


@dataclass(frozen=True)
class Service:
    service_id: str
    name: str
    provider_id: str
    duration: int  # minutes


@dataclass(frozen=True)
class ExistingBooking:
    """
    An already-committed interval on a provider's day.

    A missing, zero or negative duration counts as ``DEFAULT_BOOKING_DURATION``.
    """
    scheduled_time: TimeOfDay
    duration: Optional[int] = None

    def start_minutes(self) -> int:
        return self.scheduled_time.to_minutes()

    def end_minutes(self) -> int:
        # May run past midnight; kept as plain minutes for comparison.
        duration = self.duration if self.duration and self.duration > 0 else DEFAULT_BOOKING_DURATION
        return self.start_minutes() + duration


@dataclass(frozen=True)
class BookingRecord:
    """A booking as held by the booking store."""
    booking_id: str
    provider_id: str
    scheduled_date: date
    scheduled_time: TimeOfDay
    duration: Optional[int] = None
    status: str = "pending"

    def to_existing_booking(self, default_duration: Optional[int] = None) -> ExistingBooking:
        """Convert to an interval, filling a missing duration with ``default_duration``."""
        return ExistingBooking(
            scheduled_time=self.scheduled_time,
            duration=self.duration or default_duration,
        )


@dataclass(frozen=True)
class Slot:
    """
    A fixed-length bookable interval ``[start, end)`` within a day.
    """
    start: TimeOfDay
    end: TimeOfDay
    display_label: str
    available: bool = True

    def duration_minutes(self) -> int:
        return self.end.to_minutes() - self.start.to_minutes()

    def __str__(self) -> str:
        status = "open" if self.available else "booked"
        return f"{self.start} - {self.end} ({self.display_label}, {status})"
