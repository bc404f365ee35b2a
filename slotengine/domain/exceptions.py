"""
Domain-specific exception hierarchy for the slot engine.
"""


class SlotEngineError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeError(SlotEngineError, ValueError):
    """Raised when a time-of-day string is not a valid HH:MM value."""


class BookingStoreError(SlotEngineError):
    """Raised when booking data cannot be loaded or parsed."""


class ProviderNotFoundError(BookingStoreError):
    """Raised when a provider id is unknown to the booking store."""


class ServiceNotFoundError(BookingStoreError):
    """Raised when a service id is unknown to the booking store."""


class ServiceProviderMismatchError(SlotEngineError):
    """Raised when a service does not belong to the requested provider."""


class BookingRequestError(SlotEngineError):
    """Base class for rejected booking requests."""


class PastSlotError(BookingRequestError):
    """Raised when a booking is requested for a time that has already passed."""


class SlotUnavailableError(BookingRequestError):
    """Raised when the requested time is not an open slot."""
