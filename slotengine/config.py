"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.models import DEFAULT_BOOKING_DURATION, TimeOfDay, WorkingHours

DEFAULT_BLOCKING_STATUSES = ["pending", "confirmed", "in-progress"]


class DefaultsConfig(BaseModel):
    """Default working window and booking length."""
    start: str = "09:00"
    end: str = "17:00"
    booking_duration_minutes: int = DEFAULT_BOOKING_DURATION

    @field_validator("start", "end")
    @classmethod
    def validate_time(cls, value: str) -> str:
        """Validate and normalise an HH:MM value."""
        return str(TimeOfDay.parse(value))

    @field_validator("booking_duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure the booking duration is positive."""
        if value <= 0:
            raise ValueError("booking_duration_minutes must be greater than zero")
        return value

    @model_validator(mode="after")
    def validate_hours_order(self) -> "DefaultsConfig":
        """Ensure the configured window opens before it closes."""
        if TimeOfDay.parse(self.end) <= TimeOfDay.parse(self.start):
            raise ValueError("end must be later than start")
        return self

    def get_working_hours(self) -> WorkingHours:
        """Get the default window as a WorkingHours object."""
        return WorkingHours.parse(self.start, self.end)


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    timezone: str = "UTC"
    exclude_days: List[int] = Field(default_factory=list)  # 0=Monday, 6=Sunday
    blocking_statuses: List[str] = Field(default_factory=lambda: list(DEFAULT_BLOCKING_STATUSES))
    data_file: Path = Path("bookings.json")

    @field_validator("exclude_days")
    @classmethod
    def validate_exclude_days(cls, value: List[int]) -> List[int]:
        """Ensure weekdays are in valid range and deduplicated."""
        invalid_days = [day for day in value if day not in range(7)]
        if invalid_days:
            raise ValueError(f"exclude_days must be between 0 and 6, got {invalid_days}")
        # Preserve order while removing duplicates
        seen: set[int] = set()
        deduped: List[int] = []
        for day in value:
            if day not in seen:
                deduped.append(day)
                seen.add(day)
        return deduped

    @field_validator("blocking_statuses")
    @classmethod
    def normalise_statuses(cls, value: List[str]) -> List[str]:
        """Compare statuses case-insensitively."""
        return [status.strip().lower() for status in value if status.strip()]

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)

        # Relative data paths are resolved against the config file location
        if not config.data_file.is_absolute():
            config.data_file = config_path.parent / config.data_file

        return config

    def is_closed(self, weekday: int) -> bool:
        """Check whether the given weekday (0=Monday) is excluded."""
        return weekday in self.exclude_days

    def blocks(self, status: str) -> bool:
        """Check whether a booking with this status occupies its time."""
        return status.strip().lower() in self.blocking_statuses


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
