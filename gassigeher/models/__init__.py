from .booking import (
    Base,
    BlockedDate,
    Holiday,
    HolidayCache,
    Reservation,
    RESERVATION_SLOT_CONSTRAINT,
    SystemSetting,
    TimeRule,
    metadata,
)

__all__ = [
    "Base",
    "BlockedDate",
    "Holiday",
    "HolidayCache",
    "Reservation",
    "RESERVATION_SLOT_CONSTRAINT",
    "SystemSetting",
    "TimeRule",
    "metadata",
]
