"""
Domain layer - Pure business logic without external dependencies.
"""

from .models import (
    BookingRecord,
    CustomHours,
    ExistingBooking,
    Provider,
    Service,
    Slot,
    TimeOfDay,
    WorkingHours,
)
from .slot_engine import (
    DEFAULT_WORKING_HOURS,
    filter_past_slots,
    format_display,
    generate_slots,
    is_available,
    mark_availability,
    resolve_working_hours,
)

__all__ = [
    "BookingRecord",
    "CustomHours",
    "ExistingBooking",
    "Provider",
    "Service",
    "Slot",
    "TimeOfDay",
    "WorkingHours",
    "DEFAULT_WORKING_HOURS",
    "filter_past_slots",
    "format_display",
    "generate_slots",
    "is_available",
    "mark_availability",
    "resolve_working_hours",
]
