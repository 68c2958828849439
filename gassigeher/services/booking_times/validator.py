# gassigeher/services/booking_times/validator.py
"""
Read-only check of a proposed (date, time) against the rules in force.

Order: input format, date gates (past, horizon, blocked day), day
category, rule windows, slot grid. A time is accepted only if it is one
of the slots the generator offers for that day.

Never writes. HolidayLookupError from the classifier propagates as a
system error; everything else is a ValidationResult.
"""

from datetime import date

from ...domain import (
    REASON_INVALID_INPUT,
    REASON_NOT_ON_GRID,
    REASON_OUTSIDE_HOURS,
    ValidationResult,
    WindowStatus,
    normalize_time_str,
    parse_date,
)
from .booking_dates import BookingDatePolicy
from .classifier import DayClassifier
from .config import BookingConfig, get_booking_config
from .rule_set import RuleSet
from .slots import generate_slots


class BookingTimeValidator:

    def __init__(
        self,
        classifier: DayClassifier,
        rule_set: RuleSet,
        date_policy: BookingDatePolicy | None = None,
        config: BookingConfig | None = None,
    ):
        self.classifier = classifier
        self.rule_set = rule_set
        self.date_policy = date_policy
        self.config = config or get_booking_config()

    def validate(self, target_date: str | date, time_of_day: str) -> ValidationResult:
        try:
            day = parse_date(target_date)
            slot = normalize_time_str(time_of_day)
        except ValueError:
            return ValidationResult.rejected(REASON_INVALID_INPUT)

        if self.date_policy is not None:
            reason = self.date_policy.rejection_reason(day)
            if reason:
                return ValidationResult.rejected(reason)

        category = self.classifier.classify(day)
        match = self.rule_set.is_blocked(category, slot)

        if match.status is WindowStatus.OUT_OF_HOURS:
            return ValidationResult.rejected(REASON_OUTSIDE_HOURS, category=category)
        if match.status is WindowStatus.BLOCKED:
            return ValidationResult.rejected(
                f"blocked: {match.rule_name}",
                rule_name=match.rule_name,
                category=category,
            )

        offered = generate_slots(self.rule_set.windows_for(category), self.config.granularity_minutes)
        if slot not in offered:
            return ValidationResult.rejected(
                REASON_NOT_ON_GRID, rule_name=match.rule_name, category=category
            )
        return ValidationResult.accepted(category)
