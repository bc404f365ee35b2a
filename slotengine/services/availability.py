"""
Application service for answering "which slots can still be booked?".

The service fetches the provider, service and the day's bookings through a
booking store adapter and delegates the slot computation to the pure
functions in ``slotengine.domain.slot_engine``. The clock is injected so
results are reproducible in tests.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, List, Optional, Protocol

import pendulum

from ..config import AppConfig
from ..domain.exceptions import (
    PastSlotError,
    ServiceProviderMismatchError,
    SlotUnavailableError,
)
from ..domain.models import BookingRecord, ExistingBooking, Provider, Service, Slot, TimeOfDay
from ..domain.slot_engine import (
    filter_past_slots,
    generate_slots,
    mark_availability,
    resolve_working_hours,
)

logger = logging.getLogger(__name__)


class BookingStoreProtocol(Protocol):
    """Protocol describing the booking data needed by the service."""

    def get_provider(self, provider_id: str) -> Provider:
        """Return the provider or raise ProviderNotFoundError."""

    def get_service(self, service_id: str) -> Service:
        """Return the service or raise ServiceNotFoundError."""

    def list_providers(self) -> List[Provider]:
        """Return all known providers."""

    def list_services(self, provider_id: Optional[str] = None) -> List[Service]:
        """Return services, optionally only those of one provider."""

    def get_bookings(self, provider_id: str, on_date: date) -> List[BookingRecord]:
        """Return the provider's bookings on a date."""


class AvailabilityService:
    """
    Orchestrates booking lookups and slot calculation for a single day.
    """

    def __init__(
        self,
        booking_store: BookingStoreProtocol,
        config: Optional[AppConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._booking_store = booking_store
        self._config = config or AppConfig()
        self._clock = clock or (lambda: pendulum.now(self._config.timezone))

    def get_day_slots(
        self,
        provider_id: str,
        service_id: str,
        selected_date: date,
        *,
        include_unavailable: bool = True,
    ) -> List[Slot]:
        """
        Compute the slots of a provider's day for one service.

        Args:
            provider_id: Provider offering the service
            service_id: Service whose duration sets the slot length
            selected_date: Day to compute
            include_unavailable: Keep slots that overlap a booking (marked
                ``available=False``) instead of dropping them

        Returns:
            Ordered slots, past slots removed when ``selected_date`` is today

        Raises:
            ProviderNotFoundError: Unknown provider
            ServiceNotFoundError: Unknown service
            ServiceProviderMismatchError: Service belongs to another provider
        """
        selected_date = _as_date(selected_date)
        provider = self._booking_store.get_provider(provider_id)
        service = self._booking_store.get_service(service_id)

        if service.provider_id != provider.provider_id:
            raise ServiceProviderMismatchError(
                f"Service {service.service_id} does not belong to provider {provider.provider_id}"
            )

        if self._config.is_closed(selected_date.weekday()):
            logger.debug("Provider %s is closed on %s", provider_id, selected_date)
            return []

        working_hours = resolve_working_hours(provider, self._config.defaults.get_working_hours())
        bookings = self.blocking_bookings(provider_id, selected_date)

        logger.debug(
            "Computing %d-minute slots for %s on %s within %s against %d bookings",
            service.duration,
            provider_id,
            selected_date,
            working_hours,
            len(bookings),
        )

        slots = generate_slots(service.duration, working_hours)
        slots = mark_availability(slots, bookings)
        slots = filter_past_slots(slots, selected_date, self._clock())

        if not include_unavailable:
            slots = [slot for slot in slots if slot.available]

        logger.debug("%d slots returned for %s on %s", len(slots), provider_id, selected_date)
        return slots

    def blocking_bookings(self, provider_id: str, on_date: date) -> List[ExistingBooking]:
        """
        Return the bookings that occupy time on the given day.

        Cancelled, completed and similar bookings are ignored according to
        ``AppConfig.blocking_statuses``.
        """
        records = self._booking_store.get_bookings(provider_id, on_date)
        default_duration = self._config.defaults.booking_duration_minutes

        return [
            record.to_existing_booking(default_duration)
            for record in records
            if self._config.blocks(record.status)
        ]

    def check_booking_request(
        self,
        provider_id: str,
        service_id: str,
        selected_date: date,
        scheduled_time: TimeOfDay,
    ) -> Slot:
        """
        Validate that a requested start time can be booked.

        Returns:
            The matching open slot

        Raises:
            PastSlotError: The requested time is not in the future
            SlotUnavailableError: No open slot starts at the requested time
        """
        selected_date = _as_date(selected_date)
        now = self._clock()
        requested_minutes = scheduled_time.to_minutes()

        if selected_date < now.date() or (
            selected_date == now.date() and requested_minutes <= now.hour * 60 + now.minute
        ):
            raise PastSlotError(
                f"Booking must be scheduled for a future date and time, got {selected_date} {scheduled_time}"
            )

        slots = self.get_day_slots(provider_id, service_id, selected_date)

        for slot in slots:
            if slot.start == scheduled_time:
                if not slot.available:
                    raise SlotUnavailableError(f"Time slot {scheduled_time} on {selected_date} is already booked")
                return slot

        raise SlotUnavailableError(f"No slot starts at {scheduled_time} on {selected_date}")


def _as_date(value: date) -> date:
    """Strip the time component from datetimes."""
    if isinstance(value, datetime):
        return value.date()
    return value
