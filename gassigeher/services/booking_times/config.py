# gassigeher/services/booking_times/config.py
"""
Booking configuration for time rules, holidays and approval.
"""

from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.orm import Session

from ...domain import time_str_to_minutes
from ...errors import ConfigurationError

# system_settings keys → BookingConfig fields
SETTING_KEYS = {
    "booking_time_granularity": "granularity_minutes",
    "approval_cutoff_time": "approval_cutoff_time",
    "morning_walk_requires_approval": "approval_enabled",
    "feiertage_state": "holiday_region",
    "feiertage_cache_days": "holiday_cache_ttl_days",
    "use_feiertage_api": "use_holiday_api",
    "booking_advance_days": "booking_advance_days",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class BookingConfig:
    """
    Configuration for the booking time engine.

    Attributes:
        granularity_minutes: Slot step in minutes, must divide 60 (5/10/15/20/30/60)
        approval_cutoff_time: Slots strictly before this "HH:MM" need approval
        approval_enabled: Whether the morning approval rule applies at all
        holiday_region: Region code for the external holiday source ("BW")
        holiday_cache_ttl_days: Days a fetched holiday set is trusted
        use_holiday_api: Consult the external source at all
        booking_advance_days: How many days ahead a date can be booked
    """
    granularity_minutes: int = 15
    approval_cutoff_time: str = "12:00"
    approval_enabled: bool = True
    holiday_region: str = "BW"
    holiday_cache_ttl_days: int = 7
    use_holiday_api: bool = True
    booking_advance_days: int = 14

    def __post_init__(self):
        """Validate configuration."""
        if self.granularity_minutes <= 0 or 60 % self.granularity_minutes != 0:
            raise ConfigurationError(
                f"granularity_minutes must be a positive divisor of 60, got {self.granularity_minutes}"
            )
        try:
            time_str_to_minutes(self.approval_cutoff_time)
        except ValueError as exc:
            raise ConfigurationError(f"approval_cutoff_time: {exc}") from exc
        if self.holiday_cache_ttl_days <= 0:
            raise ConfigurationError(
                f"holiday_cache_ttl_days must be positive, got {self.holiday_cache_ttl_days}"
            )
        if self.booking_advance_days < 0:
            raise ConfigurationError(
                f"booking_advance_days must not be negative, got {self.booking_advance_days}"
            )
        if not self.holiday_region:
            raise ConfigurationError("holiday_region must not be empty")

    @property
    def approval_cutoff_minutes(self) -> int:
        return time_str_to_minutes(self.approval_cutoff_time)

    @classmethod
    def from_settings(cls, values: dict[str, str]) -> "BookingConfig":
        """Build config from system_settings rows; unknown keys are ignored."""
        kwargs = {}
        for key, field_name in SETTING_KEYS.items():
            if key not in values:
                continue
            kwargs[field_name] = _coerce(field_name, key, values[key])
        return cls(**kwargs)


def _coerce(field_name: str, key: str, raw: str):
    value = str(raw).strip()
    if field_name in ("approval_enabled", "use_holiday_api"):
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigurationError(f"setting {key!r} must be a boolean, got {raw!r}")
    if field_name in ("granularity_minutes", "holiday_cache_ttl_days", "booking_advance_days"):
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(f"setting {key!r} must be an integer, got {raw!r}") from None
    if field_name == "holiday_region":
        return value.upper()
    return value


@lru_cache
def get_booking_config() -> BookingConfig:
    """Default booking configuration (singleton)."""
    return BookingConfig()


def load_booking_config(db: Session) -> BookingConfig:
    """Booking configuration with overrides from the system_settings table."""
    from ...repositories import SettingsRepository

    values = SettingsRepository(db).get_all()
    if not any(key in values for key in SETTING_KEYS):
        return get_booking_config()
    return BookingConfig.from_settings(values)
