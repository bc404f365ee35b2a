"""
Core business logic for computing bookable appointment slots.

Pure functions only: no clock reads, no I/O. Callers pass in working hours,
the service duration, the day's bookings and the current time.
"""

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence

from .models import (
    CustomHours,
    ExistingBooking,
    Provider,
    Slot,
    TimeOfDay,
    WorkingHours,
)

DEFAULT_WORKING_HOURS = WorkingHours(start=TimeOfDay(9, 0), end=TimeOfDay(17, 0))


def generate_slots(duration: int, working_hours: WorkingHours) -> List[Slot]:
    """
    Walk the working window in fixed ``duration`` steps.

    A trailing remainder shorter than ``duration`` is dropped rather than
    offered as a short slot.

    Example:
    Window: 09:00 - 10:00, duration 45
    Result: [09:00-09:45]

    Args:
        duration: Slot length in minutes
        working_hours: Window to fill

    Returns:
        Ordered list of slots, all marked available
    """
    if duration <= 0:
        return []

    slots: List[Slot] = []
    window_end = working_hours.end.to_minutes()
    current = working_hours.start.to_minutes()

    while current < window_end:
        slot_end = current + duration
        if slot_end <= window_end:
            start = TimeOfDay.from_minutes(current)
            slots.append(
                Slot(
                    start=start,
                    end=TimeOfDay.from_minutes(slot_end),
                    display_label=format_display(start),
                    available=True,
                )
            )
        current = slot_end

    return slots


def is_available(
    slot_start: TimeOfDay,
    slot_end: TimeOfDay,
    existing_bookings: Iterable[ExistingBooking],
) -> bool:
    """
    Check a slot against the day's bookings using half-open intervals.

    ``[a, b)`` and ``[c, d)`` overlap iff ``a < d and c < b``; a slot that
    ends exactly when a booking starts (or vice versa) is still available.
    """
    start = slot_start.to_minutes()
    end = slot_end.to_minutes()

    for booking in existing_bookings:
        if start < booking.end_minutes() and booking.start_minutes() < end:
            return False

    return True


def mark_availability(
    slots: Sequence[Slot],
    existing_bookings: Sequence[ExistingBooking],
) -> List[Slot]:
    """Return copies of ``slots`` with ``available`` recomputed."""
    return [
        replace(slot, available=is_available(slot.start, slot.end, existing_bookings))
        for slot in slots
    ]


def filter_past_slots(
    slots: Sequence[Slot],
    selected_date: date,
    now: datetime,
) -> List[Slot]:
    """
    Drop slots that have already started when ``selected_date`` is today.

    Only the calendar date of ``selected_date`` is considered. Any other date
    returns the slots unchanged. On today's date a slot is kept only if its
    start is strictly later than the current minute.

    Args:
        slots: Slots for ``selected_date``
        selected_date: Day the slots belong to
        now: Current local time, in the same reference as the slots

    Returns:
        List of slots still in the future
    """
    if isinstance(selected_date, datetime):
        selected_date = selected_date.date()

    if selected_date != now.date():
        return list(slots)

    current_minutes = now.hour * 60 + now.minute

    return [slot for slot in slots if slot.start.to_minutes() > current_minutes]


def format_display(time_of_day: TimeOfDay) -> str:
    """Render a time as a 12-hour label, e.g. ``13:00`` -> ``1:00 PM``."""
    period = "PM" if time_of_day.hour >= 12 else "AM"
    display_hour = time_of_day.hour % 12 or 12
    return f"{display_hour}:{time_of_day.minute:02d} {period}"


def resolve_working_hours(
    provider: Optional[Provider],
    defaults: WorkingHours = DEFAULT_WORKING_HOURS,
) -> WorkingHours:
    """
    Merge a provider's custom hours over the defaults, field by field.

    A provider that only sets ``start`` keeps the default ``end`` and the
    other way round.
    """
    custom: Optional[CustomHours] = provider.working_hours if provider else None

    if custom is None:
        return defaults

    return WorkingHours(
        start=custom.start or defaults.start,
        end=custom.end or defaults.end,
    )
