"""
File-backed booking store reading providers, services and bookings from JSON.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import pendulum

from ..domain.exceptions import BookingStoreError, ProviderNotFoundError, ServiceNotFoundError
from ..domain.models import BookingRecord, CustomHours, Provider, Service, TimeOfDay

logger = logging.getLogger(__name__)


class JsonBookingStore:
    """
    Booking store backed by a single JSON document.

    The document mirrors the records kept by the booking web app::

        {
          "providers": [{"id": "p1", "name": "...", "workingHours": {"start": "10:00"}}],
          "services": [{"id": "s1", "name": "...", "providerId": "p1", "duration": 30}],
          "bookings": [{"id": "b1", "providerId": "p1", "scheduledDate": "2024-11-25",
                        "scheduledTime": "10:30", "duration": 60, "status": "confirmed"}]
        }

    A missing file is treated as an empty store.
    """

    def __init__(self, data_file: Path):
        """
        Initialize the store.

        Args:
            data_file: Path to the JSON document
        """
        self.data_file = Path(data_file)
        self._providers: Dict[str, Provider] = {}
        self._services: Dict[str, Service] = {}
        self._bookings: List[BookingRecord] = []
        self._load()

    def _load(self) -> None:
        """Load and parse the JSON document."""
        if not self.data_file.exists():
            logger.warning("Booking data file %s not found, starting empty", self.data_file)
            return

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise BookingStoreError(f"Could not read booking data from {self.data_file}: {exc}") from exc

        if not isinstance(data, dict):
            raise BookingStoreError("Booking data must contain a mapping at the root level.")

        for raw in data.get("providers", []):
            try:
                provider = self._parse_provider(raw)
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping invalid provider record %r: %s", raw, exc)
                continue
            self._providers[provider.provider_id] = provider

        for raw in data.get("services", []):
            try:
                service = self._parse_service(raw)
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping invalid service record %r: %s", raw, exc)
                continue
            self._services[service.service_id] = service

        for raw in data.get("bookings", []):
            try:
                self._bookings.append(self._parse_booking(raw))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping invalid booking record %r: %s", raw, exc)

        logger.debug(
            "Loaded %d providers, %d services, %d bookings from %s",
            len(self._providers),
            len(self._services),
            len(self._bookings),
            self.data_file,
        )

    @staticmethod
    def _parse_provider(raw: Dict[str, Any]) -> Provider:
        _require_mapping(raw, "provider record")
        hours = raw.get("workingHours")
        custom: Optional[CustomHours] = None

        if hours:
            _require_mapping(hours, "workingHours")
            # Empty strings fall back to the defaults just like missing keys
            custom = CustomHours(
                start=TimeOfDay.parse(hours["start"]) if hours.get("start") else None,
                end=TimeOfDay.parse(hours["end"]) if hours.get("end") else None,
            )

        return Provider(
            provider_id=str(raw["id"]),
            name=raw.get("name", str(raw["id"])),
            working_hours=custom,
        )

    @staticmethod
    def _parse_service(raw: Dict[str, Any]) -> Service:
        _require_mapping(raw, "service record")
        duration = int(raw["duration"])
        if duration <= 0:
            raise ValueError(f"duration must be positive, got {duration}")

        return Service(
            service_id=str(raw["id"]),
            name=raw.get("name", str(raw["id"])),
            provider_id=str(raw["providerId"]),
            duration=duration,
        )

    @staticmethod
    def _parse_booking(raw: Dict[str, Any]) -> BookingRecord:
        _require_mapping(raw, "booking record")
        scheduled = raw["scheduledTime"]
        duration = int(raw["duration"]) if raw.get("duration") is not None else None

        # Newer records store {"start": "HH:MM", "end": "HH:MM"}
        if isinstance(scheduled, dict):
            start = TimeOfDay.parse(scheduled["start"])
            if duration is None and scheduled.get("end"):
                duration = TimeOfDay.parse(scheduled["end"]).to_minutes() - start.to_minutes()
                if duration <= 0:
                    raise ValueError(f"end {scheduled['end']} is not after start {scheduled['start']}")
        else:
            start = TimeOfDay.parse(scheduled)

        # Zero means "not recorded" and falls back to the default length
        if duration is not None and duration < 0:
            raise ValueError(f"duration must not be negative, got {duration}")

        return BookingRecord(
            booking_id=str(raw.get("id", "")),
            provider_id=str(raw["providerId"]),
            scheduled_date=pendulum.parse(str(raw["scheduledDate"])).date(),
            scheduled_time=start,
            duration=int(duration) if duration else None,
            status=str(raw.get("status", "pending")),
        )

    def get_provider(self, provider_id: str) -> Provider:
        """
        Look up a provider.

        Raises:
            ProviderNotFoundError: If the id is unknown
        """
        try:
            return self._providers[provider_id]
        except KeyError:
            raise ProviderNotFoundError(f"Provider not found: {provider_id}") from None

    def get_service(self, service_id: str) -> Service:
        """
        Look up a service.

        Raises:
            ServiceNotFoundError: If the id is unknown
        """
        try:
            return self._services[service_id]
        except KeyError:
            raise ServiceNotFoundError(f"Service not found: {service_id}") from None

    def list_providers(self) -> List[Provider]:
        return list(self._providers.values())

    def list_services(self, provider_id: Optional[str] = None) -> List[Service]:
        return [
            service for service in self._services.values()
            if provider_id is None or service.provider_id == provider_id
        ]

    def get_bookings(self, provider_id: str, on_date: date) -> List[BookingRecord]:
        """Return all of a provider's bookings on the given date, any status."""
        return [
            booking for booking in self._bookings
            if booking.provider_id == provider_id and booking.scheduled_date == on_date
        ]


def _require_mapping(value: Any, what: str) -> None:
    """Reject non-object JSON values so the record is skipped."""
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be an object, got {type(value).__name__}")
