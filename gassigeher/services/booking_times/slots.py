# gassigeher/services/booking_times/slots.py
"""
Bookable time-of-day slots for a date.

Each open window is walked from its start in granularity steps. A step is
emitted when the whole step fits before the window end and the instant is
not inside any blocked window of the same category. Output is the sorted
union over all open windows as "HH:MM" strings.
"""

from datetime import date

from ...domain import DayCategory, TimeWindow, minutes_to_time_str
from ...errors import ConfigurationError
from .booking_dates import BookingDatePolicy
from .classifier import DayClassifier
from .config import BookingConfig, get_booking_config
from .rule_set import RuleSet


def generate_slots(windows: list[TimeWindow], granularity_minutes: int) -> list[str]:
    """Pure slot generation from a category's windows."""
    if granularity_minutes <= 0:
        raise ConfigurationError(f"granularity must be positive, got {granularity_minutes}")

    blocked = [w for w in windows if w.blocked]
    minutes: set[int] = set()

    for window in windows:
        if window.blocked:
            continue
        t = window.start
        # Drop the trailing partial step
        while t + granularity_minutes <= window.end:
            if not any(b.contains(t) for b in blocked):
                minutes.add(t)
            t += granularity_minutes

    return [minutes_to_time_str(t) for t in sorted(minutes)]


class SlotGenerator:

    def __init__(
        self,
        classifier: DayClassifier,
        rule_set: RuleSet,
        config: BookingConfig | None = None,
        date_policy: BookingDatePolicy | None = None,
    ):
        self.classifier = classifier
        self.rule_set = rule_set
        self.config = config or get_booking_config()
        self.date_policy = date_policy

    def slots_for(self, target_date: date, granularity_minutes: int | None = None) -> list[str]:
        """
        Available "HH:MM" slots for a date.

        Past, too distant and blocked dates have no slots.

        Raises:
            HolidayLookupError: holiday status of the date is unknown.
        """
        if self.date_policy is not None and self.date_policy.rejection_reason(target_date):
            return []
        category = self.classifier.classify(target_date)
        return self.slots_for_category(category, granularity_minutes)

    def slots_for_category(
        self,
        category: DayCategory,
        granularity_minutes: int | None = None,
    ) -> list[str]:
        step = granularity_minutes or self.config.granularity_minutes
        return generate_slots(self.rule_set.windows_for(category), step)
