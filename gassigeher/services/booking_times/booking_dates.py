from datetime import date, datetime, timedelta
from typing import Callable

from ...domain import REASON_DATE_BLOCKED, REASON_DATE_IN_PAST, too_far_ahead_reason, utcnow
from ...repositories import BlockedDateRepository
from .config import BookingConfig, get_booking_config


class BookingDatePolicy:
    """
    Date-level gates checked before any time rule.

    Past dates, dates beyond the booking horizon and days blocked by an
    administrator are closed as a whole.
    """

    def __init__(
        self,
        blocked_dates: BlockedDateRepository,
        config: BookingConfig | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.blocked_dates = blocked_dates
        self.config = config or get_booking_config()
        self.clock = clock

    def rejection_reason(self, target_date: date) -> str | None:
        """None if the date is bookable, otherwise the user-facing reason."""
        today = self.clock().date()
        if target_date < today:
            return REASON_DATE_IN_PAST
        if target_date > today + timedelta(days=self.config.booking_advance_days):
            return too_far_ahead_reason(self.config.booking_advance_days)
        if self.blocked_dates.is_blocked(target_date):
            return REASON_DATE_BLOCKED
        return None
