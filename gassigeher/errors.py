"""
Error taxonomy for the booking time engine.

Rejections (outside hours, blocked window) and conflicts (slot already
booked) are ordinary results, see ``gassigeher.domain``. Only conditions
that an operator has to look at are raised.
"""

from datetime import date


class BookingTimeError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(BookingTimeError, ValueError):
    """Malformed rule data or booking configuration."""


class HolidayLookupError(BookingTimeError):
    """Holiday status of a date cannot be determined and no fallback exists."""

    def __init__(self, target_date: date, message: str | None = None):
        self.target_date = target_date
        super().__init__(
            message or f"cannot determine holiday status for {target_date.isoformat()}"
        )


class HolidaySourceError(BookingTimeError):
    """External holiday source failed (network, HTTP status or payload)."""


class NotFoundError(BookingTimeError):
    pass


class RuleNotFoundError(NotFoundError):
    pass


class HolidayNotFoundError(NotFoundError):
    pass


class ReservationNotFoundError(NotFoundError):
    pass


class DuplicateError(BookingTimeError):
    pass


class DuplicateRuleError(DuplicateError):
    pass


class DuplicateHolidayError(DuplicateError):
    pass


class BlockedDateNotFoundError(NotFoundError):
    pass


class DuplicateBlockedDateError(DuplicateError):
    pass
