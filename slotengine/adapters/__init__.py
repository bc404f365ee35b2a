"""
Adapters layer - External booking data sources.
"""

from .json_booking_store import JsonBookingStore

__all__ = ["JsonBookingStore"]
